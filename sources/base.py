"""
Clase base abstracta para todas las fuentes de noticias.
Define el contrato que cada fuente debe implementar.
"""
import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional, TypeVar

import httpx

from core.errors import MalformedPayload, SourceError, SourceTransportError
from core.matcher import KeywordMatcher
from core.models import UNKNOWN_PUBLISH_TIME, NewsItem

T = TypeVar("T")


# ─────────────────────────────────────────────────────────────────────────────
# Base Source
# ─────────────────────────────────────────────────────────────────────────────

class BaseSource(ABC):
    """
    Contrato base para todas las fuentes de noticias.

    Cada subclase implementa `_fetch_news` con la lógica específica de la
    fuente. El método público `search` gestiona el cliente HTTP, traduce
    errores de transporte a `SourceTransportError` y registra el resultado.
    """

    name: str = "base"
    max_results: int = 20

    DEFAULT_HEADERS = {
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        ),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
    }

    def __init__(
        self,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.transport = transport
        self.logger = logging.getLogger(self.__class__.__name__)

    def is_available(self) -> bool:
        """Las fuentes que requieren credenciales lo sobreescriben."""
        return True

    @abstractmethod
    async def _fetch_news(
        self,
        keywords: list[str],
        client: httpx.AsyncClient,
    ) -> list[NewsItem]:
        """
        Implementación específica de la fuente.
        Recibe el cliente HTTP ya configurado y las keywords ya parseadas.
        """
        ...

    def _client(self, extra_headers: Optional[dict] = None) -> httpx.AsyncClient:
        headers = {**self.DEFAULT_HEADERS, **(extra_headers or {})}
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers=headers,
            follow_redirects=True,
            transport=self.transport,
        )

    async def search(self, keywords: list[str]) -> list[NewsItem]:
        """
        Punto de entrada público. Gestiona cliente HTTP y errores.
        Una fuente no disponible devuelve lista vacía sin tocar la red.
        """
        if not self.is_available():
            self.logger.info(f"[{self.name}] Fuente no configurada, se omite")
            return []

        results = await self._with_client(
            lambda client: self._fetch_news(keywords, client)
        )
        results = results[: self.max_results]
        self.logger.info(f"[{self.name}] {len(results)} noticias encontradas")
        return results

    async def _with_client(self, fetch: Callable[[httpx.AsyncClient], Awaitable[T]]) -> T:
        """
        Ejecuta `fetch` con un cliente HTTP nuevo y traduce los errores de
        httpx a `SourceTransportError`.
        """
        async with self._client() as client:
            try:
                return await fetch(client)
            except httpx.TimeoutException as e:
                self.logger.warning(f"[{self.name}] Timeout: {e!r}")
                raise SourceTransportError(self.name, f"timeout tras {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                self.logger.warning(
                    f"[{self.name}] HTTP {e.response.status_code}: {e.request.url}"
                )
                raise SourceTransportError(
                    self.name, f"HTTP {e.response.status_code}"
                ) from e
            except httpx.HTTPError as e:
                self.logger.warning(f"[{self.name}] Error de red: {e!r}")
                raise SourceTransportError(self.name, str(e) or e.__class__.__name__) from e
            except SourceError:
                raise
            except Exception as e:
                self.logger.error(f"[{self.name}] Error inesperado: {e}", exc_info=True)
                raise

    def _build_item(
        self,
        matcher: KeywordMatcher,
        title: str,
        summary: str,
        url: str,
        publish_time: str,
    ) -> Optional[NewsItem]:
        """
        Construye un NewsItem si tiene título y pasa el filtro de keywords.
        Retorna None en caso contrario.
        """
        title = (title or "").strip()
        if not title:
            return None
        summary = (summary or "").strip() or title
        if not matcher.matches(f"{title} {summary}"):
            return None
        return NewsItem(
            title=title,
            summary=summary,
            url=url or "",
            source=self.name,
            publish_time=(publish_time or "").strip() or UNKNOWN_PUBLISH_TIME,
            matched_keywords=matcher.matched_terms(f"{title} {summary}"),
        )

    @staticmethod
    def _safe_text(element) -> Optional[str]:
        """Extrae texto de un elemento BeautifulSoup de forma segura."""
        if element is None:
            return None
        return element.get_text(strip=True) or None

    def _malformed(self, message: str) -> MalformedPayload:
        return MalformedPayload(self.name, message)
