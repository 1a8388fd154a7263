"""검색 전략

- ApiQuerySearch: 검색 API로 고정된 5개 쿼리 변형을 병렬 실행
- RetailerProbeSearch: 자격 증명이 없을 때 리테일러 검색 URL을 HEAD로 확인

두 전략 모두 개별 실패는 빈 결과로 흡수합니다 (파이프라인 실패 아님).
모든 쿼리/리테일러가 실패한 경우에만 UpstreamUnavailableException을 올립니다.
"""

from __future__ import annotations

import asyncio
from typing import Optional, Protocol, Sequence

from src.core.config import settings
from src.core.exceptions import UpstreamUnavailableException
from src.core.logging import logger, sanitize_for_log
from src.crawlers.http_client import SharedHttpClient, get_shared_http_client
from src.crawlers.search.google_cse import CustomSearchClient
from src.schemas.price_schema import SearchResult
from src.utils.resource_loader import load_search_probes
from src.utils.url_utils import build_search_url, dedupe_by_link


class SearchStrategy(Protocol):
    """검색 전략 인터페이스"""

    async def search(self, description: str) -> list[SearchResult]:
        ...


def build_query_variants(description: str) -> list[str]:
    """검색 API에 보낼 5개 쿼리 변형 (순서 고정)"""
    return [
        f'"{description}" site:amazon.com OR site:target.com OR site:walmart.com',
        f"{description} model number",
        f"{description} buy online price",
        f'"{description}" official retailer',
        f"{description} product specifications",
    ]


class ApiQuerySearch:
    """검색 API 기반 다중 쿼리 검색"""

    def __init__(self, client: CustomSearchClient) -> None:
        self.client = client

    async def _search_one(self, query: str) -> Optional[list[SearchResult]]:
        try:
            return await self.client.search(query)
        except Exception as e:
            # 쿼리 하나의 실패는 나머지를 지연/취소시키지 않고 빈 결과로 기여 (None = 실패)
            logger.warning(f"[SEARCH] query failed: '{sanitize_for_log(query)}', error={e}")
            return None

    async def search(self, description: str) -> list[SearchResult]:
        queries = build_query_variants(description)
        batches = await asyncio.gather(*(self._search_one(q) for q in queries))
        if all(batch is None for batch in batches):
            raise UpstreamUnavailableException("search", len(queries))

        # 전부 끝난 뒤에 flatten + 중복 제거 (쿼리 순서 → 결과 순서)
        flattened = [r for batch in batches if batch for r in batch]
        results = dedupe_by_link(flattened)
        logger.info(f"[SEARCH] api search: queries={len(queries)}, raw={len(flattened)}, unique={len(results)}")
        return results


class RetailerProbeSearch:
    """리테일러 검색 페이지 존재 확인 (HEAD)

    2xx 응답을 준 리테일러의 검색 URL만 결과로 남깁니다.
    오류/비 2xx는 조용히 제외합니다.
    """

    def __init__(
        self,
        http_client: Optional[SharedHttpClient] = None,
        probes: Optional[Sequence[dict[str, str]]] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        self.http = http_client or get_shared_http_client()
        self.probes = list(probes) if probes is not None else load_search_probes()
        self.timeout_s = timeout_s or settings.probe_timeout_s

    async def _probe(self, name: str, url: str) -> Optional[SearchResult]:
        try:
            status = await self.http.head_status(url, timeout_s=self.timeout_s)
        except Exception as e:
            logger.warning(f"[PROBE] {name} search unavailable: {type(e).__name__}: {e}")
            return None

        if status is None or not 200 <= status < 300:
            logger.warning(f"[PROBE] {name} search unavailable: status={status}")
            return None

        return SearchResult(
            title=f"{name} Search Results",
            link=url,
            snippet=f"Direct product search results from {name}",
        )

    async def search(self, description: str) -> list[SearchResult]:
        targets = [(p["name"], build_search_url(p["url"], description)) for p in self.probes]
        probed = await asyncio.gather(*(self._probe(name, url) for name, url in targets))
        if targets and all(r is None for r in probed):
            raise UpstreamUnavailableException("retailer probe", len(targets))
        results = [r for r in probed if r is not None]
        logger.info(f"[PROBE] fallback search: probed={len(targets)}, available={len(results)}")
        return results
