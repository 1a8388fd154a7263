"""리테일러 페이지 파싱 (네트워크와 분리된 순수 로직)."""

from .base import ParsedFields, RetailerParser, categorize_text, extract_sub_category
from .registry import ParserRegistry, RetailerExtractor

__all__ = [
    "ParsedFields",
    "RetailerParser",
    "ParserRegistry",
    "RetailerExtractor",
    "categorize_text",
    "extract_sub_category",
]
