"""URL 파싱 유틸리티"""
from typing import Iterable, TypeVar
from urllib.parse import urlparse, quote


T = TypeVar("T")


def extract_domain(url: str) -> str:
    """URL에서 호스트명 추출 ('www.' 제거, 실패 시 'unknown')

    Examples:
        >>> extract_domain("https://www.amazon.com/dp/B0001")
        'amazon.com'
        >>> extract_domain("not a url")
        'unknown'
    """
    if not url:
        return "unknown"
    try:
        host = urlparse(url).hostname
    except ValueError:
        return "unknown"
    if not host:
        return "unknown"
    host = host.lower()
    return host[4:] if host.startswith("www.") else host


def build_search_url(template: str, query: str) -> str:
    """'{query}' 자리에 URL 인코딩된 검색어를 넣어 검색 URL 생성"""
    return template.replace("{query}", quote(query, safe=""))


def dedupe_by_link(items: Iterable[T]) -> list[T]:
    """link 기준 중복 제거 (첫 등장 우선, 순서 유지)"""
    seen: set[str] = set()
    result: list[T] = []
    for item in items:
        link = getattr(item, "link", None)
        if link in seen:
            continue
        seen.add(link)
        result.append(item)
    return result
