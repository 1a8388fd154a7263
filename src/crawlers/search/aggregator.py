"""Search Aggregator - 설명 텍스트 → 중복 제거된 검색 결과 목록"""

from __future__ import annotations

from typing import Optional

from src.core.logging import logger, sanitize_for_log
from src.crawlers.http_client import SharedHttpClient, get_shared_http_client
from src.crawlers.search.google_cse import CustomSearchClient
from src.crawlers.search.strategies import ApiQuerySearch, RetailerProbeSearch, SearchStrategy
from src.schemas.price_schema import SearchResult
from src.utils.text_utils import normalize_search_query
from src.utils.url_utils import dedupe_by_link


class SearchAggregator:
    """검색 전략 선택 + 결과 병합

    검색 API 자격 증명이 있으면 ApiQuerySearch, 없으면 RetailerProbeSearch를
    생성 시점에 고릅니다.
    """

    def __init__(
        self,
        strategy: Optional[SearchStrategy] = None,
        http_client: Optional[SharedHttpClient] = None,
        search_client: Optional[CustomSearchClient] = None,
    ) -> None:
        if strategy is not None:
            self.strategy = strategy
            return

        http = http_client or get_shared_http_client()
        client = search_client or CustomSearchClient(http_client=http)
        if client.has_credentials:
            self.strategy = ApiQuerySearch(client)
        else:
            logger.warning("[SEARCH] search API credentials not available, using retailer probe fallback")
            self.strategy = RetailerProbeSearch(http_client=http)

    async def search(self, description: str) -> list[SearchResult]:
        """검색 실행 (브랜드 오타 교정 → 전략 실행 → link 기준 중복 제거)"""
        query = normalize_search_query(description)
        if query != description:
            logger.info(f"[SEARCH] normalized query: '{sanitize_for_log(description)}' -> '{sanitize_for_log(query)}'")

        results = await self.strategy.search(query)
        return dedupe_by_link(results)
