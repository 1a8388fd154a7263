"""Retailer Extractor - 호스트 조각 → 파서 레지스트리

등록 순서가 우선순위입니다 (사이트 전용 파서가 generic보다 먼저).
"""

from __future__ import annotations

from typing import Optional, Sequence

from src.core.exceptions import ParsingException
from src.schemas.price_schema import ExtractedProduct

from .base import RetailerParser
from .retailers import (
    AmazonParser,
    BestBuyParser,
    BissellParser,
    GenericParser,
    ReebokParser,
    SingerParser,
    TargetParser,
    WalmartParser,
)


DEFAULT_PARSERS: tuple[tuple[str, RetailerParser], ...] = (
    ("amazon.com", AmazonParser()),
    ("target.com", TargetParser()),
    ("walmart.com", WalmartParser()),
    ("bestbuy.com", BestBuyParser()),
    ("reebok.com", ReebokParser()),
    ("singer.com", SingerParser()),
    ("bissell.com", BissellParser()),
)

PRICER_TAG = "AI-Enhanced"


class ParserRegistry:
    def __init__(
        self,
        entries: Optional[Sequence[tuple[str, RetailerParser]]] = None,
        fallback: Optional[RetailerParser] = None,
    ) -> None:
        self._entries: list[tuple[str, RetailerParser]] = list(entries if entries is not None else DEFAULT_PARSERS)
        self.fallback = fallback or GenericParser()

    def register(self, fragment: str, parser: RetailerParser) -> None:
        """fallback 직전 위치에 파서 추가"""
        self._entries.append((fragment.lower(), parser))

    def resolve(self, host: str) -> RetailerParser:
        host = (host or "").lower()
        for fragment, parser in self._entries:
            if fragment in host:
                return parser
        return self.fallback


class RetailerExtractor:
    """페이지 markup + 호스트 → ExtractedProduct"""

    def __init__(self, registry: Optional[ParserRegistry] = None, pricer_tag: str = PRICER_TAG) -> None:
        self.registry = registry or ParserRegistry()
        self.pricer_tag = pricer_tag

    def extract(self, html: str, url: str, host: str) -> ExtractedProduct:
        """파싱

        Raises:
            ParsingException: 파서 내부 오류
        """
        parser = self.registry.resolve(host)
        try:
            fields = parser.parse(html)
        except Exception as e:
            raise ParsingException(f"{parser.name} parser failed: {type(e).__name__}: {e}",
                                   details={"url": url, "parser": parser.name}) from e

        return ExtractedProduct(
            url=url,
            source=host,
            price=fields.price,
            description=fields.description,
            category=fields.category,
            sub_category=fields.sub_category,
            pricer_tag=self.pricer_tag,
        )
