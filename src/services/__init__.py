"""비즈니스 로직 서비스 - export only."""

from .container import ServiceContainer, get_container, shutdown_container
from .impl import CacheService, CategoryService, DepreciationService, ProductValidator

__all__ = [
    "ServiceContainer",
    "get_container",
    "shutdown_container",
    "CacheService",
    "CategoryService",
    "DepreciationService",
    "ProductValidator",
]
