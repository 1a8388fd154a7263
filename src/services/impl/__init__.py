"""Services implementation package."""

from .cache_service import BoundedMemoryCache, CacheService, RedisCacheBackend
from .category_service import CategoryService
from .depreciation_service import DepreciationService
from .price_validation_service import ProductValidator, is_price_valid

__all__ = [
    "BoundedMemoryCache",
    "CacheService",
    "RedisCacheBackend",
    "CategoryService",
    "DepreciationService",
    "ProductValidator",
    "is_price_valid",
]
