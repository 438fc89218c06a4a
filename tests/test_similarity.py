"""
Tests de similitud de Jaccard sobre bigramas.
"""
import pytest

from core.errors import InvalidConfiguration
from core.similarity import is_similar, jaccard, similarity, validate_threshold

PAIRS = [
    ("比特币价格突破10万美元", "比特币价格首次突破10万美元大关"),
    ("Fed raises rates", "The Fed raised rates again"),
    ("", "x"),
    ("", ""),
    ("腾讯", "阿里"),
]


class TestJaccard:

    def test_both_empty_is_identical(self):
        assert jaccard(set(), set()) == 1.0

    def test_one_empty_is_zero(self):
        assert jaccard({"ab"}, set()) == 0.0
        assert jaccard(set(), {"ab", "bc"}) == 0.0

    def test_partial_overlap(self):
        assert jaccard({"ab", "bc"}, {"bc", "cd"}) == pytest.approx(1 / 3)


class TestIsSimilar:

    def test_worked_example_below_default_threshold(self):
        a = "比特币价格突破10万美元"
        b = "比特币价格首次突破10万美元大关"
        # 11 y 15 bigramas, 10 en común
        assert similarity(a, b) == pytest.approx(10 / 16)
        assert is_similar(a, b, 0.8) is False
        assert is_similar(a, b, 0.6) is True

    def test_empty_texts_are_similar_for_any_threshold(self):
        for t in (0.0, 0.5, 1.0):
            assert is_similar("", "", t) is True

    def test_empty_vs_text_not_similar_for_positive_threshold(self):
        for t in (0.01, 0.5, 1.0):
            assert is_similar("x", "", t) is False

    def test_threshold_is_inclusive(self):
        assert is_similar("abc", "bcd", 1 / 3) is True

    def test_ignores_case_whitespace_and_tags(self):
        assert is_similar("Fed <b>Raises</b> Rates", "fed raises  rates", 1.0) is True

    def test_default_threshold(self):
        assert is_similar("美联储宣布加息", "美联储宣布加息") is True

    @pytest.mark.parametrize("a,b", PAIRS)
    def test_symmetric(self, a, b):
        for t in (0.0, 0.3, 0.6, 0.8, 1.0):
            assert is_similar(a, b, t) == is_similar(b, a, t)

    @pytest.mark.parametrize("a,b", PAIRS)
    def test_monotonic_in_threshold(self, a, b):
        thresholds = [1.0, 0.9, 0.8, 0.6, 0.4, 0.2, 0.0]
        seen_true = False
        for t in thresholds:
            result = is_similar(a, b, t)
            if seen_true:
                assert result is True
            seen_true = seen_true or result


class TestValidateThreshold:

    @pytest.mark.parametrize("bad", [-0.1, 1.01, 2, True, "0.8", None])
    def test_rejects_out_of_domain(self, bad):
        with pytest.raises(InvalidConfiguration):
            validate_threshold(bad)

    def test_invalid_configuration_is_value_error(self):
        with pytest.raises(ValueError):
            is_similar("a", "b", 1.5)

    def test_accepts_bounds(self):
        assert validate_threshold(0) == 0.0
        assert validate_threshold(1) == 1.0
