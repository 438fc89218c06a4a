"""
Formato de texto de los resultados.
El reporte se reconstruye solo a partir de (consulta, lista final de noticias).
"""
from collections import Counter
from typing import Sequence

from core.models import UNKNOWN_PUBLISH_TIME, NewsItem

ITEM_SEPARATOR = "\n\n" + "─" * 60 + "\n\n"
FOOTER_RULE = "=" * 60
TUSHARE_DOC_URL = "https://tushare.pro/document/2?doc_id=143"


def source_distribution(items: Sequence[NewsItem]) -> dict[str, int]:
    """Cantidad de noticias por fuente, en orden de primera aparición."""
    return dict(Counter(item.source for item in items))


def publish_days(items: Sequence[NewsItem]) -> list[str]:
    """Días distintos (parte anterior al primer espacio de la hora), ordenados."""
    days = set()
    for item in items:
        if item.publish_time == UNKNOWN_PUBLISH_TIME:
            continue
        day = item.publish_time.split(" ")[0]
        if day:
            days.add(day)
    return sorted(days)


def format_search_report(query: str, items: Sequence[NewsItem]) -> str:
    header = f"# {query}: noticias financieras"
    if not items:
        return f"{header}\n\nNo se encontraron noticias relacionadas."

    blocks = []
    for idx, item in enumerate(items, 1):
        block = (
            f"{idx}. {item.title}\n"
            f"   Fuente: {item.source}  Hora: {item.publish_time}\n"
            f"   Resumen: {item.summary}"
        )
        if item.url:
            block += f"\n   Enlace: {item.url}"
        blocks.append(block)

    stats = ", ".join(f"{src}: {n}" for src, n in source_distribution(items).items())
    footer = f"{FOOTER_RULE}\nTotal: {len(items)} noticias | Por fuente: {stats}"
    return f"{header}\n\n{ITEM_SEPARATOR.join(blocks)}\n\n{footer}"


def format_hot_news(items: Sequence[NewsItem]) -> str:
    """Listado del feed de portada con estadísticas por fuente y por día."""
    if not items:
        return "No hay noticias disponibles."

    body = "\n\n---\n\n".join(
        f"{idx}. {item.title}\n{item.summary}".strip()
        for idx, item in enumerate(items, 1)
    )

    by_source = sorted(source_distribution(items).items(), key=lambda kv: kv[1], reverse=True)
    source_stats = ", ".join(f"{src}: {n}" for src, n in by_source) or "ninguna"
    days = publish_days(items)
    day_info = f"Fechas: {', '.join(days)}" if days else "Fechas: desconocidas"

    footer = (
        f"{FOOTER_RULE}\n"
        f"Total: {len(items)} noticias\n"
        f"Por fuente: {source_stats}\n"
        f"{day_info}\n"
        f"Datos: Tushare noticias flash ({TUSHARE_DOC_URL})"
    )
    return f"{body}\n\n{footer}"
