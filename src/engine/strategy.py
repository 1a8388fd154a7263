"""Matching Strategy - 카테고리 점수 계산 (순수 함수)

스냅샷 레코드와 입력 문자열만 받아 점수/순위를 계산합니다.
I/O, 로깅, 기본값 결정은 엔진(category_engine)의 몫입니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from src.schemas.category_schema import CategoryRecord
from src.utils.text_utils import (
    normalize_text,
    starts_with_matched_token,
    token_overlap,
    trigram_jaccard,
)

# 부분 포함(contains / contained-by) 점수
CONTAINS_SCORE = 0.95
EXACT_SCORE = 1.0
TOP_CANDIDATES = 3


@dataclass(frozen=True)
class ScoredCategory:
    """점수가 매겨진 카테고리"""

    record: CategoryRecord
    score: float
    matched_tokens: tuple[str, ...] = ()
    name_starts: bool = False


def find_exact(hint: str, records: Iterable[CategoryRecord]) -> Optional[CategoryRecord]:
    """정규화 이름이 힌트와 완전히 같은 첫 레코드"""
    hint_norm = normalize_text(hint)
    if not hint_norm:
        return None
    for record in records:
        if record.normalized_name == hint_norm:
            return record
    return None


def hint_similarity(hint: str, record: CategoryRecord) -> float:
    """힌트 ↔ 카테고리명 유사도

    - 한쪽이 다른 쪽을 포함: 0.95
    - 그 외: 3-gram Jaccard
    """
    hint_norm = normalize_text(hint)
    name_norm = record.normalized_name
    # 정규화 후 빈 힌트("!!!")는 어떤 이름에도 포함된 것으로 보지 않음 (점수 0)
    if hint_norm and name_norm and (hint_norm in name_norm or name_norm in hint_norm):
        return CONTAINS_SCORE
    return trigram_jaccard(record.name, hint)


def rank_by_hint(hint: str, records: Sequence[CategoryRecord]) -> list[ScoredCategory]:
    """모든 레코드를 힌트 유사도 내림차순으로 정렬 (동점은 스냅샷 순서)"""
    scored = [ScoredCategory(record=r, score=hint_similarity(hint, r)) for r in records]
    return sorted(scored, key=lambda s: -s.score)


def rank_by_keywords(tokens: Sequence[str], records: Iterable[CategoryRecord]) -> list[ScoredCategory]:
    """예시 토큰 overlap 순위 (overlap 0인 카테고리는 제외)

    정렬 기준:
    1. overlap 내림차순
    2. 카테고리명 첫 토큰이 매칭 토큰에 있으면 우선
    3. 감가율 오름차순
    4. 카테고리명 (대소문자 무시)
    """
    scored: list[ScoredCategory] = []
    for record in records:
        score, matched = token_overlap(tokens, record.example_tokens)
        if score <= 0:
            continue
        scored.append(
            ScoredCategory(
                record=record,
                score=float(score),
                matched_tokens=tuple(matched),
                name_starts=starts_with_matched_token(record.name_tokens, matched),
            )
        )

    return sorted(
        scored,
        key=lambda s: (-s.score, not s.name_starts, s.record.depreciation_rate, s.record.name.casefold()),
    )
