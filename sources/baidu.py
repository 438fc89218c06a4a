"""
Fuente 百度新闻: scraping de la página de resultados de búsqueda.
URL: https://www.baidu.com/s?tn=news&word=KEYWORDS

Estrategia:
1. Recorrer los bloques `div.result` y `div.result-op` (título en h3 > a, resumen en
   `.c-abstract`, fecha en `span.c-color-gray2`).
2. Si ningún bloque produce una noticia, usar solo los títulos `h3.t > a`.

Una única request, sin reintentos.
"""
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from core.matcher import KeywordMatcher
from core.models import UNKNOWN_PUBLISH_TIME, NewsItem
from .base import BaseSource


class BaiduNewsSource(BaseSource):
    """
    Scraper del buscador de noticias de Baidu.
    Los selectores siguen el diseño conocido de la página de resultados.
    """

    name = "百度新闻"
    max_results = 15

    SEARCH_URL = "https://www.baidu.com/s"

    EXTRA_HEADERS = {
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Referer": "https://www.baidu.com/",
        "Upgrade-Insecure-Requests": "1",
    }

    def __init__(
        self,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(timeout=timeout, transport=transport)

    def _client(self, extra_headers: Optional[dict] = None) -> httpx.AsyncClient:
        return super()._client({**self.EXTRA_HEADERS, **(extra_headers or {})})

    async def _fetch_news(
        self,
        keywords: list[str],
        client: httpx.AsyncClient,
    ) -> list[NewsItem]:
        query = " ".join(keywords)
        self.logger.info(f"百度新闻: buscando '{query}'")

        params = {
            "rtt": 1,
            "bsst": 1,
            "cl": 2,
            "tn": "news",
            "ie": "utf-8",
            "word": query,
        }
        resp = await client.get(self.SEARCH_URL, params=params)
        resp.raise_for_status()
        self.logger.debug(f"HTML recibido: {len(resp.text)} caracteres")

        return self.parse_html(resp.text, keywords)

    def parse_html(self, html: str, keywords: list[str]) -> list[NewsItem]:
        """Parsea la página de resultados. Nunca más de `max_results` noticias."""
        soup = BeautifulSoup(html, "lxml")
        matcher = KeywordMatcher(keywords)

        results: list[NewsItem] = []
        seen_titles: set[str] = set()

        blocks = soup.select("div.result, div.result-op")
        self.logger.debug(f"{len(blocks)} bloques de resultado encontrados")

        for block in blocks:
            if len(results) >= self.max_results:
                break
            try:
                item = self._parse_block(block, matcher)
            except Exception as e:
                self.logger.debug(f"Error parseando bloque: {e}")
                continue
            if item is None or item.title in seen_titles:
                continue
            seen_titles.add(item.title)
            results.append(item)

        if not results:
            self.logger.info("Sin bloques válidos, usando solo títulos h3.t")
            results = self._parse_titles_only(soup, matcher)

        return results

    def _parse_block(self, block, matcher: KeywordMatcher) -> Optional[NewsItem]:
        link = block.select_one("h3 > a")
        if link is None or not link.get("href"):
            return None

        summary = None
        abstract = block.select_one(".c-abstract")
        if abstract is not None:
            for br in abstract.find_all("br"):
                br.replace_with(" ")
            summary = abstract.get_text().strip()

        time_el = block.select_one('span.c-color-gray2[aria-label^="发布于"]')

        return self._build_item(
            matcher,
            title=link.get_text().strip(),
            summary=summary,
            url=link["href"],
            publish_time=self._safe_text(time_el),
        )

    def _parse_titles_only(self, soup: BeautifulSoup, matcher: KeywordMatcher) -> list[NewsItem]:
        results = []
        for link in soup.select("h3.t > a"):
            if len(results) >= self.max_results:
                break
            title = link.get_text().strip()
            href = link.get("href")
            if not title or not href or not matcher.matches(title):
                continue
            results.append(NewsItem(
                title=title,
                summary=title,
                url=href,
                source=self.name,
                publish_time=UNKNOWN_PUBLISH_TIME,
                matched_keywords=matcher.matched_terms(title),
            ))
        return results
