"""
Filtro de relevancia por keywords.
Contención literal de subcadenas, case-insensitive, con semántica OR.
"""
from dataclasses import dataclass
from typing import Iterable


def parse_query(query: str) -> list[str]:
    """
    Divide una consulta en términos por espacios simples.
    Es la única forma de obtener keywords a partir de una consulta de usuario:
    la usan tanto las fuentes como el orquestador.
    """
    return [term.strip() for term in (query or "").split(" ") if term.strip()]


@dataclass
class MatchResult:
    matched: bool
    keywords_found: list[str]


class KeywordMatcher:
    """
    Evalúa si un texto es relevante para una lista de keywords.

    - Sin keywords, todo texto es relevante.
    - Basta con que una keyword aparezca como subcadena (OR).
    - Sin stemming ni tokenización: `"fed"` matchea `"federal"`.
    """

    def __init__(self, keywords: Iterable[str]):
        self.raw_keywords = list(keywords)
        self._terms = [
            (kw.strip(), kw.strip().casefold())
            for kw in self.raw_keywords
            if kw.strip()
        ]

    def match(self, text: str) -> MatchResult:
        if not self._terms:
            return MatchResult(matched=True, keywords_found=[])

        content = (text or "").casefold()
        found = [term for term, folded in self._terms if folded in content]
        return MatchResult(matched=bool(found), keywords_found=found)

    def matches(self, text: str) -> bool:
        return self.match(text).matched

    def matched_terms(self, text: str) -> list[str]:
        """Keywords que aparecen en el texto, en el orden de la consulta."""
        return self.match(text).keywords_found


def matches(text: str, keywords: Iterable[str]) -> bool:
    """Atajo funcional sobre `KeywordMatcher`."""
    return KeywordMatcher(keywords).matches(text)
