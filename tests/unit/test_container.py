"""ServiceContainer 유닛 테스트"""
import pytest

from src.schemas.category_schema import MatchStrategy
from src.schemas.price_schema import ValidationErrorResponse
from src.services.container import ServiceContainer
from src.services.impl.cache_service import BoundedMemoryCache, CacheService


@pytest.fixture
def container(fake_http_factory, category_store):
    return ServiceContainer(
        http_client=fake_http_factory(),
        cache=CacheService(BoundedMemoryCache()),
        category_store=category_store,
    )


class TestServiceContainer:
    """진입점 위임 테스트"""

    @pytest.mark.asyncio
    async def test_infer_category(self, container):
        match = await container.infer_category(description="leather sofas")

        assert match.category_name == "FRN - FURNITURE"
        assert match.strategy_used == MatchStrategy.EXAMPLES_KEYWORD

    @pytest.mark.asyncio
    async def test_apply_depreciation(self, container):
        results = await container.apply_depreciation(
            [{"itemId": "1", "totalReplacementPrice": 1000, "description": "Samsung TVs"}]
        )

        assert results[0].depreciation_amount == 200.0

    @pytest.mark.asyncio
    async def test_reload_categories(self, container, category_store):
        result = await container.reload_categories()

        assert result.count == len(category_store.rows) + 1

    @pytest.mark.asyncio
    async def test_validate_product_all_probes_fail(self, container):
        """모든 리테일러 확인이 실패하면 오류 페이로드"""
        response = await container.validate_product("Singer sewing machine")

        assert isinstance(response, ValidationErrorResponse)
        assert response.error == "Product validation failed"
        assert response.query == "Singer sewing machine"

    @pytest.mark.asyncio
    async def test_close(self, container):
        await container.close()

        assert container.http_client.closed is True
