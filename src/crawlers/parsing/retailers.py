"""리테일러별 파서 (best-effort 셀렉터)"""

from __future__ import annotations

from typing import Optional

from selectolax.parser import HTMLParser

from src.utils.text_utils import extract_price_from_text

from .base import RetailerParser, categorize_text, node_text


class AmazonParser(RetailerParser):
    name = "amazon"
    price_selectors = (
        "#priceblock_dealprice", "#priceblock_ourprice",
        ".a-price-whole", ".a-offscreen", "[data-asin-price]",
    )
    title_selectors = ("#productTitle", "h1")
    breadcrumb_selectors = ("#wayfinding-breadcrumbs_feature_div", ".nav-breadcrumb")


class TargetParser(RetailerParser):
    name = "target"
    price_selectors = ('[data-test="product-price"]', ".Price-module__currentPrice___1gVuV")
    title_selectors = ('[data-test="product-title"]', "h1")
    breadcrumb_selectors = ('[data-test="breadcrumb"]', ".Breadcrumb")


class WalmartParser(RetailerParser):
    name = "walmart"
    price_selectors = ('[data-automation-id="product-price"]', ".notranslate")
    title_selectors = ('[data-automation-id="product-title"]', "h1")
    breadcrumb_selectors = (".breadcrumb", '[data-testid="breadcrumb"]')


class BestBuyParser(RetailerParser):
    name = "bestbuy"
    price_selectors = (".pricing-price__range",)
    title_selectors = (".sku-title", "h1")
    breadcrumb_selectors = (".breadcrumb",)

    def price(self, tree: HTMLParser) -> Optional[str]:
        # 스크린리더용 "current price" 문구가 가장 정확
        for node in tree.css(".sr-only"):
            text = node_text(node)
            if "current price" in text.lower():
                price = extract_price_from_text(text)
                if price:
                    return price
        return super().price(tree)


class ReebokParser(RetailerParser):
    name = "reebok"
    price_selectors = ('[data-test="product-price"]', ".gl-price", ".salesprice", ".gl-price-item")
    title_selectors = ("h1", '[data-test="product-title"]', ".product-title")

    def sub_category(self, tree: HTMLParser) -> str:
        return "Footwear"


class FixedCategoryParser(RetailerParser):
    """카테고리가 사이트 단위로 고정된 브랜드 사이트"""

    fixed_category = "Unknown"
    fixed_sub_category = "Unknown"

    def category(self, tree: HTMLParser) -> str:
        return self.fixed_category

    def sub_category(self, tree: HTMLParser) -> str:
        return self.fixed_sub_category


class SingerParser(FixedCategoryParser):
    name = "singer"
    price_selectors = (".price", "[data-product-price]", ".product-price__price")
    title_selectors = ("h1", ".product-title")
    fixed_category = "Appliances"
    fixed_sub_category = "Sewing Machine"


class BissellParser(FixedCategoryParser):
    name = "bissell"
    price_selectors = (".price", ".product-price", '[itemprop="price"]')
    title_selectors = ("h1", ".product-title", '[itemprop="name"]')
    fixed_category = "Appliances"
    fixed_sub_category = "Floor Care"


class GenericParser(RetailerParser):
    """등록되지 않은 호스트용 fallback"""

    name = "generic"


__all__ = [
    "AmazonParser",
    "TargetParser",
    "WalmartParser",
    "BestBuyParser",
    "ReebokParser",
    "SingerParser",
    "BissellParser",
    "GenericParser",
    "categorize_text",
]
