"""
Tests del scraper de 百度新闻: parseo del HTML y manejo de errores HTTP.
"""
import httpx
import pytest

from core.errors import SourceTransportError
from sources.baidu import BaiduNewsSource


class TestParseHtml:

    def test_extracts_blocks(self, baidu_html):
        items = BaiduNewsSource().parse_html(baidu_html, ["美联储", "加息"])

        assert [i.title for i in items] == ["美联储加息25个基点", "加息预期升温 美股收跌"]

        first = items[0]
        assert first.url == "https://news.example.com/1"
        assert first.summary == "美联储周三宣布 加息25个基点"
        assert first.publish_time == "2小时前"
        assert first.source == "百度新闻"
        assert first.matched_keywords == ("美联储", "加息")

    def test_defaults_when_optional_fields_missing(self, baidu_html):
        items = BaiduNewsSource().parse_html(baidu_html, ["美股"])
        assert len(items) == 1
        assert items[0].summary == items[0].title
        assert items[0].publish_time == "未知时间"
        assert items[0].matched_keywords == ("美股",)

    def test_no_keywords_keeps_every_valid_block(self, baidu_html):
        items = BaiduNewsSource().parse_html(baidu_html, [])
        assert [i.title for i in items] == [
            "美联储加息25个基点",
            "加息预期升温 美股收跌",
            "腾讯发布新游戏",
        ]

    def test_includes_result_op_blocks_in_page_order(self):
        html = """
        <html><body>
          <div class="result-op c-container"><h3><a href="https://n/1">腾讯股价创新高</a></h3></div>
          <div class="result c-container"><h3><a href="https://n/2">腾讯发布财报</a></h3></div>
        </body></html>
        """
        items = BaiduNewsSource().parse_html(html, ["腾讯"])
        assert [i.url for i in items] == ["https://n/1", "https://n/2"]

    def test_caps_at_fifteen(self):
        blocks = "".join(
            f'<div class="result"><h3><a href="https://n/{i}">新闻{i}</a></h3></div>'
            for i in range(20)
        )
        items = BaiduNewsSource().parse_html(f"<html><body>{blocks}</body></html>", [])
        assert len(items) == 15
        assert items[-1].title == "新闻14"

    def test_falls_back_to_bare_titles(self):
        html = """
        <html><body>
          <h3 class="t"><a href="https://n/1">比特币监管新规出台</a></h3>
          <h3 class="t"><a href="https://n/2">A股收盘</a></h3>
        </body></html>
        """
        items = BaiduNewsSource().parse_html(html, ["比特币"])
        assert len(items) == 1
        assert items[0].title == "比特币监管新规出台"
        assert items[0].summary == "比特币监管新规出台"
        assert items[0].publish_time == "未知时间"

    def test_empty_page(self):
        assert BaiduNewsSource().parse_html("<html></html>", ["x"]) == []


@pytest.mark.asyncio
async def test_search_sends_joined_query(baidu_html):
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, text=baidu_html)

    source = BaiduNewsSource(transport=httpx.MockTransport(handler))
    items = await source.search(["美联储", "加息"])

    assert len(items) == 2
    params = requests[0].url.params
    assert params["word"] == "美联储 加息"
    assert params["tn"] == "news"
    assert requests[0].headers["Referer"] == "https://www.baidu.com/"


@pytest.mark.asyncio
async def test_http_error_is_transport_failure():
    source = BaiduNewsSource(transport=httpx.MockTransport(lambda r: httpx.Response(503)))
    with pytest.raises(SourceTransportError) as exc:
        await source.search(["美联储"])
    assert exc.value.source == "百度新闻"


@pytest.mark.asyncio
async def test_timeout_is_transport_failure():
    def handler(request):
        raise httpx.ConnectTimeout("sin respuesta", request=request)

    source = BaiduNewsSource(transport=httpx.MockTransport(handler))
    with pytest.raises(SourceTransportError):
        await source.search(["美联储"])
