"""
Similitud de Jaccard entre textos, calculada sobre sus shingles.
"""
from .errors import InvalidConfiguration
from .shingles import shingles

DEFAULT_THRESHOLD = 0.8


def validate_threshold(threshold: float) -> float:
    """Falla si el umbral no está en [0, 1]. No se recorta en silencio."""
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise InvalidConfiguration(f"Umbral de similitud inválido: {threshold!r}")
    if not 0.0 <= threshold <= 1.0:
        raise InvalidConfiguration(
            f"Umbral de similitud fuera de rango [0, 1]: {threshold}"
        )
    return float(threshold)


def jaccard(a: set[str], b: set[str]) -> float:
    """|A ∩ B| / |A ∪ B|. Dos conjuntos vacíos se consideran idénticos."""
    if not a and not b:
        return 1.0
    intersection = len(a & b)
    union = len(a) + len(b) - intersection
    return intersection / union


def similarity(text_a: str, text_b: str) -> float:
    return jaccard(shingles(text_a), shingles(text_b))


def is_similar(text_a: str, text_b: str, threshold: float = DEFAULT_THRESHOLD) -> bool:
    """True si la similitud alcanza el umbral (inclusive)."""
    threshold = validate_threshold(threshold)
    return similarity(text_a, text_b) >= threshold
