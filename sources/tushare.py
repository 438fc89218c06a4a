"""
Fuente Tushare: API estructurada de datos financieros.
URL: https://api.tushare.pro  (doc: https://tushare.pro/document/2?doc_id=143)

La API responde en formato columnar:
    {"code": 0, "msg": "", "data": {"fields": [...], "items": [[...], ...]}}
Requiere token; sin token la fuente se reporta como no disponible.
"""
from typing import Optional

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from core.errors import SourceUnavailable
from core.matcher import KeywordMatcher
from core.models import NewsItem
from .base import BaseSource


class TushareNewsSource(BaseSource):
    """
    Noticias flash (7x24) de Tushare, filtradas por keywords.
    El token se recibe por constructor: nunca se lee de estado global.
    """

    name = "Tushare"
    max_results = 20

    API_URL = "https://api.tushare.pro"
    FIELDS = "datetime,content,title,channels"

    def __init__(
        self,
        token: str = "",
        api_url: str = API_URL,
        timeout: float = 30.0,
        max_attempts: int = 2,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(timeout=timeout, transport=transport)
        self.token = token or ""
        self.api_url = api_url
        self.max_attempts = max(1, max_attempts)

    def is_available(self) -> bool:
        return bool(self.token)

    async def _fetch_news(
        self,
        keywords: list[str],
        client: httpx.AsyncClient,
    ) -> list[NewsItem]:
        rows = await self._request_rows(client)
        matcher = KeywordMatcher(keywords)

        results: list[NewsItem] = []
        for row in rows:
            try:
                item = self._build_item(
                    matcher,
                    title=row["title"],
                    summary=row["content"],
                    url="",
                    publish_time=row["datetime"],
                )
            except Exception as e:
                self.logger.debug(f"Error parseando fila Tushare: {e}")
                continue
            if item is None:
                continue
            results.append(item)
            if len(results) >= self.max_results:
                break

        return results

    async def fetch_latest(self, limit: int = 100) -> list[NewsItem]:
        """
        Últimas `limit` noticias sin filtrar por keywords (feed de portada).
        Sin token lanza SourceUnavailable; los errores de red llegan como
        SourceTransportError.
        """
        if not self.is_available():
            raise SourceUnavailable(self.name, "falta configurar TUSHARE_TOKEN")

        rows = await self._with_client(self._request_rows)

        matcher = KeywordMatcher([])
        results = []
        for row in rows:
            if len(results) >= limit:
                break
            item = self._build_item(
                matcher,
                title=row["title"],
                summary=row["content"],
                url="",
                publish_time=row["datetime"],
            )
            if item is not None:
                results.append(item)

        self.logger.info(f"Tushare: {len(results)} noticias de portada")
        return results

    async def _request_rows(self, client: httpx.AsyncClient) -> list[dict]:
        """POST a la API y conversión de filas columnares a dicts."""
        body = {
            "api_name": "news",
            "token": self.token,
            "params": {},
            "fields": self.FIELDS,
        }

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=5),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                resp = await client.post(self.api_url, json=body)
                resp.raise_for_status()

        try:
            data = resp.json()
        except ValueError as e:
            raise self._malformed("respuesta no es JSON") from e

        if not isinstance(data, dict):
            raise self._malformed("respuesta JSON inesperada")
        if data.get("code") != 0:
            msg = data.get("msg") or data.get("message") or "error desconocido"
            raise self._malformed(f"Tushare devolvió error {data.get('code')}: {msg}")

        payload = data.get("data") or {}
        if not isinstance(payload, dict):
            raise self._malformed("campo 'data' no es un objeto")
        fields = payload.get("fields") or []
        items = payload.get("items") or []
        if not isinstance(fields, list) or not isinstance(items, list):
            raise self._malformed("'fields' e 'items' deben ser listas")
        return self._rows_to_dicts(fields, items)

    @staticmethod
    def _rows_to_dicts(fields: list[str], items: list[list]) -> list[dict]:
        """Ubica cada columna por nombre; las columnas ausentes quedan vacías."""
        index = {name: fields.index(name) if name in fields else None
                 for name in ("datetime", "content", "title")}

        def cell(row, name):
            i = index[name]
            if i is None or i >= len(row) or row[i] is None:
                return ""
            return str(row[i]).strip()

        return [
            {name: cell(row, name) for name in index}
            for row in items
            if isinstance(row, (list, tuple))
        ]
