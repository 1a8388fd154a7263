"""검색 전략 (검색 API 쿼리 / 리테일러 직접 확인) 및 집계기."""

from .aggregator import SearchAggregator
from .strategies import ApiQuerySearch, RetailerProbeSearch, SearchStrategy, build_query_variants

__all__ = [
    "SearchAggregator",
    "build_query_variants",
    "ApiQuerySearch",
    "RetailerProbeSearch",
    "SearchStrategy",
]
