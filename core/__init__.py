from .orchestrator import NewsAggregator, AggregationResult, aggregate
from .matcher import KeywordMatcher, parse_query
from .deduplicator import Deduplicator, deduplicate_by_content, deduplicate_by_identity
from .models import NewsItem

__all__ = [
    "NewsAggregator",
    "AggregationResult",
    "aggregate",
    "KeywordMatcher",
    "parse_query",
    "Deduplicator",
    "deduplicate_by_content",
    "deduplicate_by_identity",
    "NewsItem",
]
