"""
Representación de texto en shingles (n-gramas de caracteres).
Base de la comparación por similitud entre noticias.
"""
import re

SHINGLE_SIZE = 2

_TAG_RE = re.compile(r"<[^>]+>")
# \s ya cubre el espacio ideográfico (U+3000), se deja explícito
_SPACE_RE = re.compile(r"[\s\u3000]+")


def normalize_text(text: str) -> str:
    """Quita tags HTML y todo espacio en blanco, y pasa a minúsculas."""
    text = _TAG_RE.sub("", text or "")
    text = _SPACE_RE.sub("", text)
    return text.casefold()


def shingles(text: str, size: int = SHINGLE_SIZE) -> set[str]:
    """
    Conjunto de n-gramas contiguos del texto normalizado.

    Si el texto normalizado es más corto que `size`, el conjunto contiene
    el texto completo (o queda vacío si el texto es vacío).
    """
    normalized = normalize_text(text)
    if len(normalized) < size:
        return {normalized} if normalized else set()
    return {normalized[i:i + size] for i in range(len(normalized) - size + 1)}
