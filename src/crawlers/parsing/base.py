"""리테일러 페이지 파서 - 공통 계약/헬퍼

네트워크(fetch)와 분리된 순수 파싱 로직입니다.
각 파서는 {price, description, category, sub_category}를 채웁니다.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from selectolax.parser import HTMLParser, Node

from src.utils.resource_loader import load_category_keywords
from src.utils.text_utils import extract_price_from_text


UNKNOWN = "Unknown"

_BREADCRUMB_SPLIT = re.compile(r"[>/›]")


@dataclass(frozen=True)
class ParsedFields:
    price: Optional[str]
    description: str
    category: str
    sub_category: str


def node_text(node: Optional[Node]) -> str:
    if node is None:
        return ""
    return (node.text(deep=True, separator=" ") or "").strip()


def find_price(tree: HTMLParser, selectors: Sequence[str]) -> Optional[str]:
    """셀렉터 순서대로 시도해 첫 번째 달러 가격을 반환"""
    for selector in selectors:
        price = extract_price_from_text(node_text(tree.css_first(selector)))
        if price:
            return price
    return None


def find_text(tree: HTMLParser, selectors: Sequence[str]) -> str:
    """셀렉터 순서대로 시도해 첫 번째 비어 있지 않은 텍스트를 반환"""
    for selector in selectors:
        text = node_text(tree.css_first(selector))
        if text:
            return text
    return UNKNOWN


def breadcrumb_text(tree: HTMLParser, selectors: Sequence[str]) -> str:
    """브레드크럼 텍스트 ('A > B > C')

    li/a 항목이 있으면 항목 단위로 '>'를 넣어 연결하고,
    없으면 요소 텍스트를 그대로 씁니다.
    """
    for selector in selectors:
        node = tree.css_first(selector)
        if node is None:
            continue
        items = [node_text(n) for n in node.css("li")] or [node_text(n) for n in node.css("a")]
        items = [i for i in items if i]
        if items:
            return " > ".join(items)
        text = node_text(node)
        if text:
            return text
    return ""


def split_breadcrumb(text: str) -> list[str]:
    return [part.strip() for part in _BREADCRUMB_SPLIT.split(text or "") if part.strip()]


def extract_sub_category(text: str) -> str:
    """브레드크럼의 뒤에서 두 번째 항목 (없으면 Unknown)"""
    parts = split_breadcrumb(text)
    return parts[-2] if len(parts) > 1 else UNKNOWN


def extract_top_category(text: str) -> str:
    """브레드크럼의 첫 항목 (없으면 Unknown)"""
    parts = split_breadcrumb(text)
    return parts[0] if parts else UNKNOWN


def categorize_text(text: str) -> str:
    """키워드 테이블로 카테고리 추정 (테이블 순서상 처음 걸린 카테고리)"""
    table, default = load_category_keywords()
    lowered = (text or "").lower()
    for category, keywords in table:
        if any(k in lowered for k in keywords):
            return category
    return default


class RetailerParser:
    """리테일러별 셀렉터 cascade 파서 (기본 구현 = generic)"""

    name = "generic"
    price_selectors: tuple[str, ...] = (".price", ".product-price", '[class*="price"]', "[data-price]")
    title_selectors: tuple[str, ...] = ("h1", ".product-title", '[class*="title"]', ".product-name")
    breadcrumb_selectors: tuple[str, ...] = ()

    def parse(self, html: str) -> ParsedFields:
        tree = HTMLParser(html or "")
        return ParsedFields(
            price=self.price(tree),
            description=find_text(tree, self.title_selectors),
            category=self.category(tree),
            sub_category=self.sub_category(tree),
        )

    def price(self, tree: HTMLParser) -> Optional[str]:
        return find_price(tree, self.price_selectors)

    def category(self, tree: HTMLParser) -> str:
        if self.breadcrumb_selectors:
            return extract_top_category(breadcrumb_text(tree, self.breadcrumb_selectors))
        return categorize_text(f"{node_text(tree.css_first('title'))} {node_text(tree.css_first('h1'))}")

    def sub_category(self, tree: HTMLParser) -> str:
        if self.breadcrumb_selectors:
            return extract_sub_category(breadcrumb_text(tree, self.breadcrumb_selectors))
        return UNKNOWN
