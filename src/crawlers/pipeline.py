"""Bounded Fetch/Extract Pipeline

신뢰 검색 결과를 최대 N건 가져와 파싱합니다.
- 동시 진행 fetch+parse는 세마포어로 상한 (worker-per-item 아님)
- 한 건의 실패(네트워크/타임아웃/비 2xx/파싱)는 그 건만 버리고 로그
- 시도한 전부가 실패한 경우에만 UpstreamUnavailableException
"""

from __future__ import annotations

import asyncio
from typing import Optional, Sequence

from src.core.config import settings
from src.core.exceptions import (
    HttpStatusException,
    PricingEngineException,
    UpstreamUnavailableException,
)
from src.core.logging import logger
from src.crawlers.http_client import SharedHttpClient, get_shared_http_client
from src.crawlers.parsing import RetailerExtractor
from src.schemas.price_schema import ExtractedProduct, SearchResult
from src.utils.url_utils import extract_domain


class BoundedExtractPipeline:
    def __init__(
        self,
        http_client: Optional[SharedHttpClient] = None,
        extractor: Optional[RetailerExtractor] = None,
        concurrency: Optional[int] = None,
        timeout_s: Optional[float] = None,
        max_candidates: Optional[int] = None,
    ) -> None:
        self.http = http_client or get_shared_http_client()
        self.extractor = extractor or RetailerExtractor()
        self.concurrency = concurrency or settings.fetch_concurrency
        self.timeout_s = timeout_s or settings.fetch_timeout_s
        self.max_candidates = max_candidates or settings.max_candidates
        self._sem: Optional[asyncio.Semaphore] = None

    def _get_semaphore(self) -> asyncio.Semaphore:
        # 인스턴스 전역 상한: 동시에 들어온 요청들도 같은 슬롯을 나눠 씀
        if self._sem is None:
            self._sem = asyncio.Semaphore(self.concurrency)
        return self._sem

    async def run(self, results: Sequence[SearchResult]) -> list[ExtractedProduct]:
        """가격이 추출된 상품만 반환 (입력 순서 유지)"""
        candidates = list(results)[: self.max_candidates]
        if not candidates:
            return []

        sem = self._get_semaphore()
        extracted = await asyncio.gather(*(self._guarded(sem, r) for r in candidates))
        if all(p is None for p in extracted):
            raise UpstreamUnavailableException("page fetch", len(candidates))

        products = [p for p in extracted if p is not None and p.price]
        logger.info(
            f"[PIPELINE] candidates={len(candidates)}, priced={len(products)}, concurrency={self.concurrency}"
        )
        return products

    async def _guarded(self, sem: asyncio.Semaphore, result: SearchResult) -> Optional[ExtractedProduct]:
        async with sem:
            try:
                return await self.fetch_and_extract(result)
            except PricingEngineException as e:
                logger.warning(f"[PIPELINE] Failed to extract data from {result.link}: {e}")
            except Exception as e:
                logger.warning(
                    f"[PIPELINE] Failed to extract data from {result.link}: {type(e).__name__}: {e}"
                )
            return None

    async def fetch_and_extract(self, result: SearchResult) -> ExtractedProduct:
        """페이지 1건 fetch + 파싱

        Raises:
            NetworkTimeoutException / FetchException: 요청 실패
            HttpStatusException: 2xx 외 응답
            ParsingException: 파서 오류
        """
        status, html = await self.http.get_text(result.link, timeout_s=self.timeout_s)
        if not 200 <= status < 300:
            raise HttpStatusException(result.link, status)

        return self.extractor.extract(html, result.link, extract_domain(result.link))
