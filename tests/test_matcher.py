"""
Tests del filtro de relevancia por keywords y del parseo de consultas.
"""
import pytest

from core.matcher import KeywordMatcher, matches, parse_query


class TestParseQuery:

    @pytest.mark.parametrize("query,expected", [
        ("美联储 加息", ["美联储", "加息"]),
        ("  腾讯   财报 ", ["腾讯", "财报"]),
        ("药明康德", ["药明康德"]),
        ("", []),
        ("   ", []),
    ])
    def test_splits_on_single_spaces(self, query, expected):
        assert parse_query(query) == expected

    def test_ideographic_space_does_not_split(self):
        assert parse_query("美联储　加息") == ["美联储　加息"]


class TestMatches:

    def test_empty_keywords_match_everything(self):
        assert matches("cualquier texto", []) is True
        assert matches("", []) is True

    def test_blank_keywords_behave_as_empty(self):
        assert matches("texto", ["  ", ""]) is True

    def test_or_semantics(self):
        assert matches("the Fed raised rates", ["Fed", "unrelated"]) is True

    def test_no_keyword_present(self):
        assert matches("the Fed raised rates", ["ECB", "BoJ"]) is False

    def test_case_insensitive(self):
        assert matches("The FED raised rates", ["fed"]) is True
        assert matches("the fed raised rates", ["FED"]) is True

    def test_keywords_are_trimmed(self):
        assert matches("美联储加息", [" 加息 "]) is True

    def test_plain_substring_no_tokenization(self):
        assert matches("federal reserve", ["fed"]) is True


class TestKeywordMatcher:

    def test_matched_terms_in_query_order(self):
        matcher = KeywordMatcher(["加息", "美联储", "欧洲央行"])
        assert matcher.matched_terms("美联储宣布加息") == ["加息", "美联储"]

    def test_match_result(self):
        result = KeywordMatcher(["腾讯"]).match("腾讯财报")
        assert result.matched is True
        assert result.keywords_found == ["腾讯"]

    def test_no_keywords_reports_no_terms(self):
        result = KeywordMatcher([]).match("x")
        assert result.matched is True
        assert result.keywords_found == []
