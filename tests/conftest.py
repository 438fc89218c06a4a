"""
Pytest configuration and fixtures.
"""
import asyncio
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.models import NewsItem  # noqa: E402


def make_item(title, source="S1", summary=None, url="", publish_time="2026-10-17 09:30:00"):
    return NewsItem(
        title=title,
        summary=title if summary is None else summary,
        url=url,
        source=source,
        publish_time=publish_time,
    )


class FakeSource:
    """Fuente en memoria que cumple el contrato del orquestador."""

    def __init__(self, name, items=None, error=None, delay=0.0, available=True):
        self.name = name
        self.items = list(items or [])
        self.error = error
        self.delay = delay
        self.available = available
        self.calls = []

    def is_available(self):
        return self.available

    async def search(self, keywords):
        self.calls.append(list(keywords))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.items)


@pytest.fixture
def item_factory():
    return make_item


@pytest.fixture
def source_factory():
    return FakeSource


@pytest.fixture
def tushare_payload():
    """Respuesta columnar típica de la API de Tushare."""
    return {
        "code": 0,
        "msg": "",
        "data": {
            "fields": ["datetime", "content", "title", "channels"],
            "items": [
                ["2026-10-17 09:30:00", "美联储宣布加息25个基点，符合市场预期", "美联储加息25个基点", "finance"],
                ["2026-10-17 09:00:00", "腾讯控股发布第三季度财报", "腾讯财报超预期", "tech"],
                ["2026-10-16 22:00:00", "只有内容没有标题的快讯", "", "finance"],
            ],
        },
    }


@pytest.fixture
def baidu_html():
    """Página de resultados de Baidu reducida a lo que usa el parser."""
    return """
    <html><body>
      <div class="result c-container">
        <h3 class="t"><a href="https://news.example.com/1">美联储<em>加息</em>25个基点</a></h3>
        <div class="c-abstract">美联储周三宣布<br/>加息25个基点</div>
        <span class="c-color-gray2" aria-label="发布于：2小时前">2小时前</span>
      </div>
      <div class="result c-container">
        <h3 class="t"><a href="https://news.example.com/2">加息预期升温 美股收跌</a></h3>
      </div>
      <div class="result c-container">
        <h3 class="t"><a href="https://news.example.com/3">美联储<em>加息</em>25个基点</a></h3>
        <div class="c-abstract">重复标题</div>
      </div>
      <div class="result c-container">
        <h3 class="t"><a href="https://news.example.com/4">腾讯发布新游戏</a></h3>
        <div class="c-abstract">与关键词无关</div>
      </div>
      <div class="result c-container">
        <h3 class="t"><a>美联储加息没有链接</a></h3>
      </div>
    </body></html>
    """
