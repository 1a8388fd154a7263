"""Repositories implementation package."""

from .category_repository import CategoryRepository, CategoryStore, SqlCategoryStore

__all__ = ["CategoryRepository", "CategoryStore", "SqlCategoryStore"]
