"""Google Custom Search JSON API 클라이언트"""

from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from src.core.config import settings
from src.core.exceptions import SearchApiException
from src.core.logging import logger, sanitize_for_log
from src.crawlers.http_client import SharedHttpClient, get_shared_http_client
from src.schemas.price_schema import SearchResult


class CustomSearchClient:
    """키워드 검색 서비스 (query, api key, engine id, 최대 개수) → 결과 목록"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        engine_id: Optional[str] = None,
        http_client: Optional[SharedHttpClient] = None,
        max_results: Optional[int] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.google_api_key
        self.engine_id = engine_id if engine_id is not None else settings.google_search_engine_id
        self.http = http_client or get_shared_http_client()
        self.max_results = max_results or settings.search_max_results
        self.timeout_s = timeout_s or settings.search_timeout_s

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.engine_id)

    async def search(self, query: str) -> list[SearchResult]:
        """검색 실행

        Raises:
            SearchApiException: 자격 증명 없음 / API 호출 실패
        """
        if not self.has_credentials:
            raise SearchApiException("search API credentials are not configured")

        params = {
            "key": self.api_key,
            "cx": self.engine_id,
            "q": query,
            # Custom Search는 요청당 최대 10건
            "num": min(self.max_results, 10),
            "safe": settings.search_safe,
        }
        data = await self.http.get_json(settings.search_api_url, params=params, timeout_s=self.timeout_s)

        results: list[SearchResult] = []
        for item in data.get("items") or []:
            try:
                results.append(SearchResult.model_validate(item))
            except ValidationError:
                logger.debug(f"[SEARCH] skip malformed item: {sanitize_for_log(str(item))}")
        return results
