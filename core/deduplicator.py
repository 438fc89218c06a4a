"""
Sistema de deduplicación de noticias.

Dos estrategias independientes:
1. Duplicado exacto: misma clave título + fuente.
2. Casi-duplicado: similitud de Jaccard sobre bigramas >= umbral.
"""
import logging
from typing import Iterable

from .models import NewsItem
from .shingles import shingles
from .similarity import DEFAULT_THRESHOLD, jaccard, validate_threshold

logger = logging.getLogger(__name__)


class Deduplicator:
    """
    Registro en memoria de claves ya vistas durante una agregación.
    Se crea uno nuevo por llamada; no guarda estado entre búsquedas.
    """

    def __init__(self):
        self._seen: set[tuple[str, str]] = set()

    def is_duplicate(self, item: NewsItem) -> bool:
        return item.identity_key() in self._seen

    def mark_seen(self, item: NewsItem) -> None:
        self._seen.add(item.identity_key())

    def filter(self, items: Iterable[NewsItem]) -> list[NewsItem]:
        """Conserva la primera aparición de cada clave, en orden."""
        unique = []
        for item in items:
            if self.is_duplicate(item):
                continue
            self.mark_seen(item)
            unique.append(item)
        return unique


def deduplicate_by_identity(items: Iterable[NewsItem]) -> list[NewsItem]:
    """Elimina duplicados exactos (título + fuente). O(n)."""
    return Deduplicator().filter(items)


def deduplicate_by_content(
    items: Iterable[NewsItem],
    threshold: float = DEFAULT_THRESHOLD,
) -> list[NewsItem]:
    """
    Agrupa por similitud y conserva un representante por grupo.

    Cada noticia se compara contra todos los representantes ya elegidos;
    si se parece a alguno se descarta, si no pasa a ser representante.
    Gana la primera aparición y no se fusionan campos del descartado.
    O(n²) en comparaciones: pensado para decenas o cientos de noticias.
    """
    threshold = validate_threshold(threshold)

    # Shingles de cada representante, calculados una sola vez por pasada
    representatives: list[tuple[NewsItem, set[str]]] = []
    for item in items:
        grams = shingles(item.comparison_text())
        if any(jaccard(grams, rep_grams) >= threshold for _, rep_grams in representatives):
            continue
        representatives.append((item, grams))

    result = [item for item, _ in representatives]
    logger.debug(f"Deduplicación por contenido: {len(result)} representantes")
    return result
