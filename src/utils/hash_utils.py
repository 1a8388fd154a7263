"""해싱 유틸리티"""
import hashlib
from typing import Any, Optional


def hash_string(text: str) -> str:
    """
    문자열을 MD5 해시로 변환

    짝이 없는 surrogate(JSON "\\ud800" 등)도 그대로 해시합니다.

    Args:
        text: 해시할 문자열

    Returns:
        MD5 해시 문자열
    """
    return hashlib.md5(text.encode("utf-8", errors="surrogatepass")).hexdigest()


def _bound_part(bound: Any) -> str:
    # 100과 100.0은 같은 조건
    if isinstance(bound, (int, float)) and not isinstance(bound, bool):
        return str(float(bound))
    return str(bound)


def compose_validation_key(
    query: str,
    min_price: Optional[float],
    max_price: Optional[float],
    operator: str,
) -> str:
    """(query, min, max, operator) 이어 붙인 원본 키

    None은 'None'으로 남겨 '하한 없음'과 0을 구분합니다.
    """
    return f"{query}_{_bound_part(min_price)}_{_bound_part(max_price)}_{operator}"


def generate_cache_key(
    query: str,
    min_price: Optional[float],
    max_price: Optional[float],
    operator: str,
    prefix: str = "validate",
) -> str:
    """
    검증 요청으로 캐시 키 생성

    Args:
        query: 상품 설명
        min_price: 하한
        max_price: 상한
        operator: 가격 조건 연산자
        prefix: 키 prefix

    Returns:
        캐시 키 (예: "validate:5d41402abc4b2a76b9719d911017c592")
    """
    hashed = hash_string(compose_validation_key(query, min_price, max_price, operator))
    return f"{prefix}:{hashed}"
