"""가격 검증 서비스 - 검색 → 신뢰 도메인 필터 → fetch/추출 → 가격 조건 → 캐시

validate_product()는 예외를 올리지 않습니다.
검증 자체가 불가능하면 ValidationErrorResponse를 반환합니다.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence, Union

from src.core.exceptions import InvalidPriceException, InvalidQueryException
from src.core.logging import logger, sanitize_for_log
from src.crawlers.pipeline import BoundedExtractPipeline
from src.crawlers.search import SearchAggregator
from src.crawlers.trusted_domains import TrustedDomainRegistry
from src.schemas.price_schema import (
    ExtractedProduct,
    PriceCriteria,
    PriceOperator,
    ValidationErrorResponse,
    ValidationResponse,
)
from src.services.impl.cache_service import CacheService
from src.utils.text_utils import to_numeric_price


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _printable(value: object) -> str:
    """오류 페이로드용 문자열 (짝 없는 surrogate는 ?로 치환)"""
    if not isinstance(value, str):
        return ""
    return value.encode("utf-8", errors="replace").decode("utf-8")


def is_price_valid(
    price: float,
    min_price: Optional[float],
    max_price: Optional[float],
    operator: Optional[str],
) -> bool:
    """가격 조건 판정

    - less_than: 상한이 없거나 price < max
    - greater_than: 하한이 없거나 price > min
    - between (기본): (하한 없음 또는 price >= min) 그리고 (상한 없음 또는 price <= max)
    - 그 외 연산자: 모두 통과 (연산자 검증은 호출 측 책임)
    """
    op = operator or PriceOperator.BETWEEN.value
    if op == PriceOperator.LESS_THAN.value:
        return max_price is None or price < max_price
    if op == PriceOperator.GREATER_THAN.value:
        return min_price is None or price > min_price
    if op == PriceOperator.BETWEEN.value:
        return (min_price is None or price >= min_price) and (max_price is None or price <= max_price)
    return True


def format_price_criteria(min_price: Optional[float], max_price: Optional[float], operator: Optional[str]) -> str:
    """로그용 가격 조건 문구"""
    op = operator or PriceOperator.BETWEEN.value
    if op == PriceOperator.LESS_THAN.value:
        return f"Less than ${max_price}"
    if op == PriceOperator.GREATER_THAN.value:
        return f"Greater than ${min_price}"
    if op == PriceOperator.BETWEEN.value:
        return f"Between ${min_price if min_price is not None else 0} - ${max_price if max_price is not None else '∞'}"
    return "Any price"


def filter_by_price(
    products: Sequence[ExtractedProduct],
    min_price: Optional[float],
    max_price: Optional[float],
    operator: Optional[str],
) -> list[ExtractedProduct]:
    """조건을 만족하는 상품만 남김 (재정렬 없음)"""
    return [
        p for p in products
        if is_price_valid(to_numeric_price(p.price), min_price, max_price, operator)
    ]


class ProductValidator:
    """가격 탐색/검증 파사드"""

    def __init__(
        self,
        aggregator: Optional[SearchAggregator] = None,
        registry: Optional[TrustedDomainRegistry] = None,
        pipeline: Optional[BoundedExtractPipeline] = None,
        cache: Optional[CacheService] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.aggregator = aggregator or SearchAggregator()
        self.registry = registry or TrustedDomainRegistry()
        self.pipeline = pipeline or BoundedExtractPipeline()
        self.cache = cache or CacheService()
        self._clock = clock

    @staticmethod
    def check_input(description: Optional[str], min_price: Optional[float], max_price: Optional[float]) -> str:
        """기본 입력 검증

        Raises:
            InvalidQueryException: 설명 누락/공백
            InvalidPriceException: 숫자가 아닌 경계값
        """
        if not description or not isinstance(description, str) or not description.strip():
            raise InvalidQueryException("Product name/description is required")
        for bound in (min_price, max_price):
            if bound is not None and (isinstance(bound, bool) or not isinstance(bound, (int, float)) or not math.isfinite(bound)):
                raise InvalidPriceException(bound, "price bound must be a finite number")
        return description.strip()

    async def validate_product(
        self,
        description: str,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        operator: Optional[str] = PriceOperator.BETWEEN.value,
    ) -> Union[ValidationResponse, ValidationErrorResponse]:
        """상품 설명으로 신뢰 출처 가격을 찾아 조건에 맞는 것만 반환

        Args:
            description: 상품 설명
            min_price: 하한 (없으면 None)
            max_price: 상한 (없으면 None)
            operator: between | less_than | greater_than

        Returns:
            ValidationResponse (캐시 히트 시 최초 응답 그대로) 또는 ValidationErrorResponse
        """
        operator = operator or PriceOperator.BETWEEN.value

        try:
            cache_key = CacheService.build_key(description, min_price, max_price, operator)
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.info(f"[VALIDATE] returning cached results: '{sanitize_for_log(description)}'")
                return cached

            query = self.check_input(description, min_price, max_price)
            logger.info(
                f"[VALIDATE] query='{sanitize_for_log(query)}', "
                f"criteria={format_price_criteria(min_price, max_price, operator)}"
            )

            # 1. 검색
            search_results = await self.aggregator.search(query)
            # 2. 신뢰 도메인
            trusted = self.registry.filter_results(search_results)
            # 3. fetch + 추출
            extracted = await self.pipeline.run(trusted)
            # 4. 가격 조건
            products = filter_by_price(extracted, min_price, max_price, operator)
            for p in products:
                logger.info(f"[VALIDATE] Valid product found: {p.price} at {p.source}")

            now = self._clock()
            response = ValidationResponse(
                query=description,
                price_criteria=PriceCriteria(min_price=min_price, max_price=max_price, operator=operator),
                total_found=len(products),
                products=products,
                timestamp=now.isoformat(),
                search_time_marker=int(now.timestamp() * 1000),
            )
        except Exception as e:
            logger.error(f"[VALIDATE] Validation failed: '{sanitize_for_log(str(description))}', error={e}")
            return ValidationErrorResponse(
                error="Product validation failed",
                query=_printable(description),
                details=_printable(str(e)),
                timestamp=self._clock().isoformat(),
            )

        self.cache.set(cache_key, response)
        return response
