"""
Registro de fuentes disponibles.
Cada fuente se identifica por una clave corta usada en la configuración y el CLI.
"""
from typing import Optional, Sequence

from core.errors import InvalidConfiguration
from .base import BaseSource
from .baidu import BaiduNewsSource
from .tushare import TushareNewsSource

# Registro: clave -> clase Python
SOURCE_REGISTRY: dict[str, type[BaseSource]] = {
    "baidu": BaiduNewsSource,
    "tushare": TushareNewsSource,
}


def get_source(key: str, settings) -> BaseSource:
    """
    Instancia la fuente registrada con su configuración explícita.
    Lanza InvalidConfiguration si la clave no existe.
    """
    cls = SOURCE_REGISTRY.get(key)
    if cls is None:
        raise InvalidConfiguration(
            f"Fuente '{key}' no registrada. "
            f"Opciones disponibles: {list(SOURCE_REGISTRY.keys())}"
        )
    if cls is TushareNewsSource:
        return TushareNewsSource(
            token=settings.TUSHARE_TOKEN,
            api_url=settings.TUSHARE_API_URL,
            timeout=settings.TUSHARE_TIMEOUT,
            max_attempts=settings.TUSHARE_MAX_ATTEMPTS,
        )
    if cls is BaiduNewsSource:
        return BaiduNewsSource(timeout=settings.BAIDU_TIMEOUT)
    return cls()


def build_sources(settings, keys: Optional[Sequence[str]] = None) -> list[BaseSource]:
    """Fuentes en el orden configurado (o en el orden de `keys`)."""
    return [get_source(key, settings) for key in (keys or settings.ENABLED_SOURCES)]


__all__ = [
    "BaseSource",
    "BaiduNewsSource",
    "TushareNewsSource",
    "SOURCE_REGISTRY",
    "get_source",
    "build_sources",
]
