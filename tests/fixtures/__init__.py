"""테스트 자산(데이터) 레이어

규칙:
- 로직 없음 (단순 dict/list/primitive)
- 엔진/네트워크 의존 없음
"""

from .categories import CATEGORY_ROWS, TIE_BREAK_ROWS
from .pages import PAGES
from .search_results import SEARCH_ITEMS

__all__ = [
    "CATEGORY_ROWS",
    "TIE_BREAK_ROWS",
    "PAGES",
    "SEARCH_ITEMS",
]
