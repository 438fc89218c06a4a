"""
Jerarquía de errores del pipeline de noticias.

Los errores de fuente (`SourceError`) nunca salen del orquestador: se
convierten en un `SourceOutcome` fallido. Solo `InvalidConfiguration`
se propaga al llamador.
"""


class NewsSearchError(Exception):
    """Base de todos los errores del sistema."""


class InvalidConfiguration(NewsSearchError, ValueError):
    """Umbral, tope de resultados o deadline fuera de su dominio válido."""


class SourceError(NewsSearchError):
    """Falla de una fuente concreta. Lleva el nombre de la fuente."""

    def __init__(self, source: str, message: str):
        super().__init__(f"[{source}] {message}")
        self.source = source
        self.reason = message


class SourceUnavailable(SourceError):
    """La fuente no tiene la configuración mínima (p. ej. sin token)."""


class SourceTransportError(SourceError):
    """Timeout, error HTTP o de red dentro de una fuente."""


class MalformedPayload(SourceError):
    """La respuesta de la fuente no tiene el formato esperado."""
