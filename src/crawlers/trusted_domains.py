"""신뢰 리테일러 도메인 레지스트리 + 필터"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from src.schemas.price_schema import SearchResult
from src.utils.resource_loader import load_trusted_domains, load_untrusted_domains
from src.utils.url_utils import extract_domain


class TrustedDomainRegistry:
    """권위 있는 가격 출처로 인정하는 호스트 조각 목록

    호스트에 조각이 "포함"되면 신뢰합니다 (점수 없음, 포함/제외만).
    차단 목록은 신뢰 목록보다 우선합니다.
    """

    def __init__(
        self,
        trusted: Optional[Sequence[str]] = None,
        untrusted: Optional[Sequence[str]] = None,
    ) -> None:
        self.trusted: tuple[str, ...] = tuple(
            d.lower() for d in (trusted if trusted is not None else load_trusted_domains())
        )
        self.untrusted: frozenset[str] = frozenset(
            d.lower() for d in (untrusted if untrusted is not None else load_untrusted_domains())
        )

    def is_untrusted(self, host: str) -> bool:
        host = (host or "").lower()
        return any(host == d or host.endswith("." + d) for d in self.untrusted)

    def is_trusted(self, host: str) -> bool:
        host = (host or "").lower()
        if not host or host == "unknown" or self.is_untrusted(host):
            return False
        return any(fragment in host for fragment in self.trusted)

    def is_trusted_url(self, url: str) -> bool:
        return self.is_trusted(extract_domain(url))

    def filter_results(self, results: Iterable[SearchResult]) -> list[SearchResult]:
        """신뢰 호스트 결과만 남김 (순서 유지)"""
        return [r for r in results if self.is_trusted_url(r.link)]
