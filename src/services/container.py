"""서비스 조립 (싱글톤) - HTTP 세션/캐시/스냅샷을 프로세스에서 하나씩 공유"""

from typing import Optional

from src.core.database import dispose_engine
from src.core.logging import logger
from src.crawlers.http_client import SharedHttpClient, get_shared_http_client
from src.crawlers.pipeline import BoundedExtractPipeline
from src.crawlers.search import SearchAggregator
from src.crawlers.trusted_domains import TrustedDomainRegistry
from src.repositories.impl.category_repository import CategoryStore
from src.services.impl.cache_service import CacheService
from src.services.impl.category_service import CategoryService
from src.services.impl.depreciation_service import DepreciationService
from src.services.impl.price_validation_service import ProductValidator


class ServiceContainer:
    """외부에 노출하는 네 가지 연산의 진입점

    - validate_product / infer_category / apply_depreciation / reload_categories
    """

    def __init__(
        self,
        http_client: Optional[SharedHttpClient] = None,
        cache: Optional[CacheService] = None,
        category_store: Optional[CategoryStore] = None,
    ):
        self.http_client = http_client or get_shared_http_client()
        self.cache = cache or CacheService()
        self.validator = ProductValidator(
            aggregator=SearchAggregator(http_client=self.http_client),
            registry=TrustedDomainRegistry(),
            pipeline=BoundedExtractPipeline(http_client=self.http_client),
            cache=self.cache,
        )
        self.categories = CategoryService(store=category_store)
        self.depreciation = DepreciationService(self.categories)

    async def validate_product(self, description, min_price=None, max_price=None, operator="between"):
        return await self.validator.validate_product(description, min_price, max_price, operator)

    async def infer_category(self, **attributes):
        return await self.categories.infer_category(**attributes)

    async def apply_depreciation(self, items):
        return await self.depreciation.apply_depreciation(items)

    async def reload_categories(self):
        return await self.categories.reload_categories()

    async def close(self) -> None:
        """HTTP 세션과 DB 커넥션 풀 정리"""
        logger.info("Shutting down services...")
        await self.http_client.close()
        dispose_engine()


_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """ServiceContainer 싱글톤"""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


async def shutdown_container() -> None:
    global _container
    if _container is None:
        return
    try:
        await _container.close()
    finally:
        _container = None
