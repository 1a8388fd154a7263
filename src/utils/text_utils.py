"""텍스트 처리 유틸리티 - 통합 모듈

가격 문자열 → 숫자, 자유 텍스트 → 소문자 영숫자 토큰열 변환과
카테고리 매칭에 쓰는 순수 함수(3-gram Jaccard, 토큰 overlap)를 모아 둡니다.
I/O나 스냅샷 로딩과 섞지 않아 단독으로 테스트할 수 있습니다.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Optional

from src.utils.resource_loader import load_brand_typos


# USD만 인식: "$" + 숫자/쉼표 + 선택적 소수부
PRICE_PATTERN = re.compile(r"\$[\d,]+\.?\d*")

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


# ==================== Prices ====================

def extract_price_from_text(text: str) -> Optional[str]:
    """텍스트에서 첫 번째 달러 가격 문자열을 추출

    예시:
    - "Now $1,299.99 (was $1,499)" -> "$1,299.99"
    - "Sold out" -> None

    Args:
        text: 셀렉터로 선택한 요소의 텍스트

    Returns:
        "$..." 형태의 원문 가격 또는 None
    """
    if not text:
        return None
    match = PRICE_PATTERN.search(text)
    return match.group(0) if match else None


def to_numeric_price(price: Optional[str]) -> float:
    """가격 문자열을 float으로 변환 ($와 쉼표 제거, 실패 시 0)"""
    if not price:
        return 0.0
    try:
        value = float(str(price).replace("$", "").replace(",", "").strip())
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


# ==================== Tokenize ====================

def normalize_text(text: Optional[str]) -> str:
    """소문자화 후 영숫자/공백 외 문자를 공백으로 바꾸고 공백을 정리"""
    if text is None:
        return ""
    lowered = str(text).lower()
    return _WHITESPACE.sub(" ", _NON_ALNUM.sub(" ", lowered)).strip()


def tokenize(text: Optional[str]) -> list[str]:
    """정규화된 텍스트를 공백 기준 토큰 리스트로 분리"""
    normalized = normalize_text(text)
    return normalized.split(" ") if normalized else []


def normalize_search_query(text: str) -> str:
    """검색 전 브랜드 오타 교정 (예: 'rebook shoes' -> 'reebok shoes')"""
    if not text or not isinstance(text, str):
        return text
    typos = load_brand_typos()
    words = text.split()
    return " ".join(typos.get(w.lower(), w) for w in words)


# ==================== Similarity ====================

def trigrams(text: str) -> set[str]:
    """길이 3 부분문자열 집합 (3자 미만이면 빈 집합)"""
    return {text[i:i + 3] for i in range(len(text) - 2)}


def trigram_jaccard(a: Optional[str], b: Optional[str]) -> float:
    """정규화된 두 문자열의 3-gram Jaccard 유사도 (0.0 ~ 1.0)"""
    an = normalize_text(a)
    bn = normalize_text(b)
    if not an or not bn:
        return 0.0

    ga = trigrams(an)
    gb = trigrams(bn)
    inter = len(ga & gb)
    union = len(ga) + len(gb) - inter
    return inter / union if union else 0.0


def token_overlap(tokens: Iterable[str], vocabulary: set[str] | frozenset[str]) -> tuple[int, list[str]]:
    """토큰열 중 vocabulary에 포함된 토큰 수와 매칭 토큰 목록

    점수는 중복 토큰도 각각 센다. 매칭 토큰 목록은 첫 등장 순서로 중복 제거.
    """
    score = 0
    matched: list[str] = []
    for token in tokens:
        if token in vocabulary:
            score += 1
            if token not in matched:
                matched.append(token)
    return score, matched


def starts_with_matched_token(name_tokens: Iterable[str], matched_tokens: Iterable[str]) -> bool:
    """카테고리 이름의 첫 토큰이 매칭 토큰에 포함되는지"""
    name_tokens = list(name_tokens)
    matched = set(matched_tokens)
    if not name_tokens or not matched:
        return False
    return name_tokens[0] in matched
