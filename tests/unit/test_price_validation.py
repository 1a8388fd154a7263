"""가격 조건/검증 서비스 유닛 테스트"""
from unittest.mock import AsyncMock

import pytest

from src.core.exceptions import InvalidPriceException, InvalidQueryException, UpstreamUnavailableException
from src.crawlers.trusted_domains import TrustedDomainRegistry
from src.schemas.price_schema import (
    ExtractedProduct,
    SearchResult,
    ValidationErrorResponse,
    ValidationResponse,
)
from src.services.impl.cache_service import BoundedMemoryCache, CacheService
from src.services.impl.price_validation_service import (
    ProductValidator,
    filter_by_price,
    format_price_criteria,
    is_price_valid,
)


def _product(price, url="https://www.amazon.com/dp/1"):
    return ExtractedProduct(url=url, source="amazon.com", price=price)


class TestIsPriceValid:
    """가격 조건 진리표"""

    @pytest.mark.parametrize(
        "price, min_price, max_price, operator, expected",
        [
            # less_than
            (50, None, 100, "less_than", True),
            (100, None, 100, "less_than", False),
            (150, None, 100, "less_than", False),
            (150, None, None, "less_than", True),
            # greater_than
            (150, 100, None, "greater_than", True),
            (100, 100, None, "greater_than", False),
            (50, None, None, "greater_than", True),
            # between (경계 포함)
            (100, 100, 200, "between", True),
            (200, 100, 200, "between", True),
            (99.99, 100, 200, "between", False),
            (200.01, 100, 200, "between", False),
            (5, None, 200, "between", True),
            (500, 100, None, "between", True),
            (0, None, None, "between", True),
            # 연산자 없음 → between
            (150, 100, 200, None, True),
            (250, 100, 200, None, False),
            # 알 수 없는 연산자 → 모두 통과
            (1_000_000, 1, 2, "around", True),
        ],
    )
    def test_truth_table(self, price, min_price, max_price, operator, expected):
        assert is_price_valid(price, min_price, max_price, operator) is expected


class TestPriceHelpers:
    """가격 조건 보조 함수 테스트"""

    def test_format_price_criteria(self):
        assert format_price_criteria(None, 100, "less_than") == "Less than $100"
        assert format_price_criteria(50, None, "greater_than") == "Greater than $50"
        assert format_price_criteria(None, None, "between") == "Between $0 - $∞"
        assert format_price_criteria(10, 20, "between") == "Between $10 - $20"
        assert format_price_criteria(10, 20, "around") == "Any price"

    def test_filter_keeps_order(self):
        products = [
            _product("$150.00", "https://a.com/1"),
            _product("$99.00", "https://a.com/2"),
            _product("$120.00", "https://a.com/3"),
        ]

        kept = filter_by_price(products, 100, 200, "between")

        assert [p.url for p in kept] == ["https://a.com/1", "https://a.com/3"]

    def test_unparseable_price_is_zero(self):
        assert filter_by_price([_product("$")], 10, None, "greater_than") == []


class TestCheckInput:
    """입력 검증 테스트"""

    def test_blank_description(self):
        with pytest.raises(InvalidQueryException):
            ProductValidator.check_input("   ", None, None)

    def test_non_numeric_bound(self):
        with pytest.raises(InvalidPriceException):
            ProductValidator.check_input("sofa", "cheap", None)

    def test_strips(self):
        assert ProductValidator.check_input("  sofa ", 1, 2.5) == "sofa"


@pytest.fixture
def search_results():
    return [
        SearchResult(title="a", link="https://www.amazon.com/dp/1"),
        SearchResult(title="b", link="https://www.ebay.com/itm/2"),
        SearchResult(title="c", link="https://www.walmart.com/ip/3"),
        SearchResult(title="d", link="https://blog.example.com/4"),
    ]


@pytest.fixture
def validator_parts(search_results, fake_clock):
    aggregator = AsyncMock()
    aggregator.search = AsyncMock(return_value=search_results)

    pipeline = AsyncMock()
    pipeline.run = AsyncMock(
        return_value=[
            _product("$149.99", "https://www.amazon.com/dp/1"),
            ExtractedProduct(url="https://www.walmart.com/ip/3", source="walmart.com", price="$89.00"),
        ]
    )

    cache = CacheService(BoundedMemoryCache(ttl_seconds=3600, max_entries=100, clock=fake_clock.monotonic))
    validator = ProductValidator(
        aggregator=aggregator,
        registry=TrustedDomainRegistry(trusted=["amazon.com", "walmart.com"], untrusted=["ebay.com"]),
        pipeline=pipeline,
        cache=cache,
        clock=fake_clock.now,
    )
    return validator, aggregator, pipeline, cache


class TestValidateProduct:
    """가격 검증 흐름 테스트"""

    @pytest.mark.asyncio
    async def test_response_shape(self, validator_parts, fake_clock):
        validator, aggregator, pipeline, _ = validator_parts

        response = await validator.validate_product("Echo Dot", 100, 200, "between")

        assert isinstance(response, ValidationResponse)
        assert response.query == "Echo Dot"
        assert response.total_found == 1
        assert [p.price for p in response.products] == ["$149.99"]
        assert response.price_criteria.min_price == 100
        assert response.price_criteria.operator == "between"
        assert response.timestamp == fake_clock.now().isoformat()
        assert response.search_time_marker == int(fake_clock.now().timestamp() * 1000)

        dumped = response.model_dump(by_alias=True)
        assert set(dumped) == {"query", "priceCriteria", "totalFound", "products", "timestamp", "searchTimeMarker"}

    @pytest.mark.asyncio
    async def test_only_trusted_hosts_fetched(self, validator_parts):
        validator, _, pipeline, _ = validator_parts

        await validator.validate_product("Echo Dot")

        passed = pipeline.run.await_args.args[0]
        assert [r.link for r in passed] == ["https://www.amazon.com/dp/1", "https://www.walmart.com/ip/3"]

    @pytest.mark.asyncio
    async def test_cache_hit_within_ttl(self, validator_parts, fake_clock):
        """TTL 안의 재호출은 최초 응답 그대로 (timestamp/searchTimeMarker 동일)"""
        validator, aggregator, _, _ = validator_parts

        first = await validator.validate_product("Echo Dot", None, 150, "less_than")
        fake_clock.advance(1800)
        second = await validator.validate_product("Echo Dot", None, 150, "less_than")

        assert aggregator.search.await_count == 1
        assert second.timestamp == first.timestamp
        assert second.search_time_marker == first.search_time_marker
        assert second.model_dump() == first.model_dump()

    @pytest.mark.asyncio
    async def test_cache_expiry(self, validator_parts, fake_clock):
        """TTL이 지나면 파이프라인을 다시 실행"""
        validator, aggregator, _, _ = validator_parts

        first = await validator.validate_product("Echo Dot")
        fake_clock.advance(3601)
        second = await validator.validate_product("Echo Dot")

        assert aggregator.search.await_count == 2
        assert second.timestamp != first.timestamp
        assert second.search_time_marker > first.search_time_marker

    @pytest.mark.asyncio
    async def test_different_criteria_different_entry(self, validator_parts):
        validator, aggregator, _, _ = validator_parts

        await validator.validate_product("Echo Dot", 100, 200, "between")
        await validator.validate_product("Echo Dot", 100, 200, "less_than")

        assert aggregator.search.await_count == 2

    @pytest.mark.asyncio
    async def test_blank_description_error_payload(self, validator_parts):
        validator, aggregator, _, cache = validator_parts

        response = await validator.validate_product("   ")

        assert isinstance(response, ValidationErrorResponse)
        assert response.error == "Product validation failed"
        aggregator.search.assert_not_awaited()
        assert len(cache.backend) == 0

    @pytest.mark.asyncio
    async def test_all_sources_fail_error_payload(self, validator_parts):
        """검증 자체가 불가능하면 예외 대신 오류 페이로드 (캐시하지 않음)"""
        validator, aggregator, _, cache = validator_parts
        aggregator.search.side_effect = UpstreamUnavailableException("search", 5)

        response = await validator.validate_product("Echo Dot")

        assert isinstance(response, ValidationErrorResponse)
        assert response.query == "Echo Dot"
        assert "UPSTREAM_UNAVAILABLE" in response.details
        assert len(cache.backend) == 0

    @pytest.mark.asyncio
    async def test_no_trusted_results(self, validator_parts):
        """신뢰 결과가 없으면 빈 목록 (오류 아님)"""
        validator, aggregator, pipeline, _ = validator_parts
        aggregator.search.return_value = [SearchResult(title="x", link="https://www.ebay.com/itm/1")]
        pipeline.run.return_value = []

        response = await validator.validate_product("Echo Dot")

        assert isinstance(response, ValidationResponse)
        assert response.total_found == 0
        assert response.products == []

    @pytest.mark.asyncio
    async def test_lone_surrogate_never_raises(self, validator_parts):
        """JSON에서 온 짝 없는 surrogate가 있어도 예외 대신 응답 객체"""
        validator, _, _, _ = validator_parts

        response = await validator.validate_product("sofa \ud800")

        assert isinstance(response, (ValidationResponse, ValidationErrorResponse))
        if isinstance(response, ValidationErrorResponse):
            assert response.query == "sofa ?"

    @pytest.mark.asyncio
    async def test_int_and_float_bounds_share_entry(self, validator_parts):
        validator, aggregator, _, _ = validator_parts

        await validator.validate_product("Echo Dot", 100, 200, "between")
        await validator.validate_product("Echo Dot", 100.0, 200.0, "between")

        assert aggregator.search.await_count == 1
