#!/usr/bin/env python3
"""
FinNews Monitor: CLI principal.

Uso:
  python main.py search "美联储 加息"   → Busca en todas las fuentes
  python main.py search 腾讯 -s baidu   → Busca solo en una fuente
  python main.py hot                    → Feed de portada de Tushare sin duplicados
  python main.py sources                → Lista fuentes y su disponibilidad
"""
import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from config import settings
from core.deduplicator import deduplicate_by_content
from core.errors import InvalidConfiguration, SourceError
from core.orchestrator import AggregationResult, NewsAggregator, RunStatus, SourceStatus
from core.similarity import validate_threshold
from reports.formatter import format_hot_news, format_search_report
from sources import SOURCE_REGISTRY, build_sources, get_source

# Configurar logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%H:%M:%S",
)
# Silenciar logs verbose de librerías
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

console = Console()
app = typer.Typer(
    name="finnews",
    help="📰 FinNews Monitor: búsqueda agregada de noticias financieras",
    add_completion=False,
    rich_markup_mode="rich",
)


# ─────────────────────────────────────────────────────────────────────────────
# Comando: search
# ─────────────────────────────────────────────────────────────────────────────

@app.command()
def search(
    query: str = typer.Argument(..., help="Consulta; varias keywords separadas por espacio"),
    source: Optional[list[str]] = typer.Option(None, "--source", "-s", help="Fuentes específicas"),
    max_results: int = typer.Option(settings.MAX_RESULTS, "--max", "-n", help="Máximo de noticias"),
    similarity: Optional[float] = typer.Option(
        None, help="Umbral para eliminar además casi-duplicados (0-1)"
    ),
    deadline: Optional[float] = typer.Option(
        settings.AGGREGATION_DEADLINE, help="Deadline global en segundos"
    ),
):
    """
    🔍 Busca noticias en todas las fuentes configuradas.

    Ejemplos:
      python main.py search 腾讯
      python main.py search "比特币 监管" --max 10
      python main.py search 药明康德 -s tushare --similarity 0.8
    """
    try:
        result = asyncio.run(_run_search(query, source, max_results, similarity, deadline))
    except InvalidConfiguration as e:
        console.print(f"[red]Configuración inválida: {e}[/red]")
        raise typer.Exit(code=2)

    console.print(format_search_report(query, result.items), markup=False, highlight=False)
    _print_run_summary(result)


async def _run_search(
    query: str,
    source_keys: Optional[list[str]],
    max_results: int,
    similarity: Optional[float],
    deadline: Optional[float],
) -> AggregationResult:
    sources = build_sources(settings, source_keys)
    aggregator = NewsAggregator(
        sources,
        deadline=deadline,
        similarity_threshold=similarity,
    )
    return await aggregator.run(query, max_results=max_results)


def _print_run_summary(result: AggregationResult):
    status_emoji = {
        SourceStatus.SUCCESS: "✅",
        SourceStatus.FAILED: "❌",
        SourceStatus.TIMEOUT: "⏱️",
        SourceStatus.UNAVAILABLE: "➖",
    }

    table = Table(title="Fuentes", box=box.ROUNDED)
    table.add_column("Fuente", style="cyan")
    table.add_column("Estado")
    table.add_column("Noticias", justify="right")
    table.add_column("Duración", justify="right")
    table.add_column("Detalle", style="dim")

    for outcome in result.outcomes:
        table.add_row(
            outcome.source,
            f"{status_emoji.get(outcome.status, '❓')} {outcome.status.value}",
            str(len(outcome.items)),
            f"{outcome.duration_seconds:.1f}s",
            outcome.error or "",
        )
    console.print(table)

    border = "green" if result.status == RunStatus.SUCCESS else "yellow"
    console.print(Panel(
        f"Keywords: [cyan]{', '.join(result.keywords) or '(todas)'}[/cyan]\n"
        f"Antes de deduplicar: [yellow]{result.raw_count}[/yellow]\n"
        f"Únicas: [yellow]{result.unique_count}[/yellow]\n"
        f"[bold green]Mostradas: {len(result.items)}[/bold green]\n\n"
        f"Duración: {result.duration_seconds:.1f}s",
        title=f"Resultado: {result.status.value.upper()}",
        border_style=border,
    ))


# ─────────────────────────────────────────────────────────────────────────────
# Comando: hot
# ─────────────────────────────────────────────────────────────────────────────

@app.command()
def hot(
    limit: int = typer.Option(settings.HOT_NEWS_LIMIT, "--limit", "-n", help="Noticias a pedir"),
    threshold: float = typer.Option(
        settings.SIMILARITY_THRESHOLD, "--threshold", "-t", help="Umbral de similitud (0-1)"
    ),
):
    """🔥 Últimas noticias de Tushare, sin casi-duplicados."""
    try:
        threshold = validate_threshold(threshold)
    except InvalidConfiguration as e:
        console.print(f"[red]Configuración inválida: {e}[/red]")
        raise typer.Exit(code=2)

    source = get_source("tushare", settings)
    try:
        raw = asyncio.run(source.fetch_latest(limit))
        news = deduplicate_by_content(raw, threshold)
    except SourceError as e:
        console.print(f"[red]No se pudo obtener el feed: {e}[/red]")
        raise typer.Exit(code=1)

    console.print(
        f"[dim]Jaccard (umbral {threshold}): {len(raw)} → {len(news)} noticias[/dim]"
    )
    console.print(format_hot_news(news), markup=False, highlight=False)


# ─────────────────────────────────────────────────────────────────────────────
# Comando: sources
# ─────────────────────────────────────────────────────────────────────────────

@app.command("sources")
def sources_list():
    """Lista las fuentes registradas y si están disponibles."""
    table = Table(title="Fuentes de noticias", box=box.ROUNDED)
    table.add_column("Clave", style="cyan")
    table.add_column("Nombre")
    table.add_column("Habilitada", justify="center")
    table.add_column("Disponible", justify="center")

    for key in SOURCE_REGISTRY:
        src = get_source(key, settings)
        table.add_row(
            key,
            src.name,
            "✅" if key in settings.ENABLED_SOURCES else "❌",
            "✅" if src.is_available() else "❌",
        )

    console.print(table)


# ─────────────────────────────────────────────────────────────────────────────
# Entrypoint
# ─────────────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
