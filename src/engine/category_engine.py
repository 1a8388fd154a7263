"""Category Inference Engine

설명/모델/방 + 선택적 힌트/수동 지정 → 카테고리명 + 감가율.

전략은 순서대로 적용하고 처음 적용 가능한 전략이 결과를 정합니다.
1. manual_override  - 수동 지정 허용 + 카테고리명 지정
2. category_hint    - 힌트 문자열 유사도
3. examples_keyword - 설명 토큰 ↔ 카테고리 예시 토큰 overlap
4. default          - "(Select)", 감가율 0
"""

from __future__ import annotations

from typing import Optional, Sequence

from src.core.config import settings
from src.core.logging import logger, sanitize_for_log
from src.engine.snapshot import CategorySnapshot, CategorySnapshotCache
from src.engine.strategy import (
    EXACT_SCORE,
    TOP_CANDIDATES,
    ScoredCategory,
    find_exact,
    rank_by_hint,
    rank_by_keywords,
)
from src.schemas.category_schema import CategoryCandidate, CategoryMatch, MatchStrategy
from src.utils.text_utils import tokenize


def _candidates(scored: Sequence[ScoredCategory], with_tokens: bool = False) -> list[CategoryCandidate]:
    return [
        CategoryCandidate(
            name=s.record.name,
            score=s.score,
            depreciation_rate=s.record.depreciation_rate,
            matched_tokens=list(s.matched_tokens) if with_tokens else None,
        )
        for s in scored[:TOP_CANDIDATES]
    ]


class CategoryInferenceEngine:
    """스냅샷 기반 카테고리 추론

    코어는 결과를 저장하지 않습니다. 같은 스냅샷과 같은 입력이면 항상 같은 결과입니다.
    """

    def __init__(self, snapshots: Optional[CategorySnapshotCache] = None, hint_threshold: Optional[float] = None):
        self.snapshots = snapshots or CategorySnapshotCache()
        self.hint_threshold = settings.dep_hint_threshold if hint_threshold is None else hint_threshold

    async def infer(
        self,
        description: Optional[str] = None,
        model: Optional[str] = None,
        room: Optional[str] = None,
        category_hint: Optional[str] = None,
        explicit_category: Optional[str] = None,
        allow_override: bool = True,
        force_override: bool = False,
    ) -> CategoryMatch:
        """현재 스냅샷으로 추론 (스냅샷 로드가 유일한 await 지점)"""
        snapshot = await self.snapshots.get()
        return self.infer_with(
            snapshot,
            description=description,
            model=model,
            room=room,
            category_hint=category_hint,
            explicit_category=explicit_category,
            allow_override=allow_override,
            force_override=force_override,
        )

    def infer_with(
        self,
        snapshot: CategorySnapshot,
        description: Optional[str] = None,
        model: Optional[str] = None,
        room: Optional[str] = None,
        category_hint: Optional[str] = None,
        explicit_category: Optional[str] = None,
        allow_override: bool = True,
        force_override: bool = False,
    ) -> CategoryMatch:
        explicit = (explicit_category or "").strip()
        if allow_override is not False and (force_override or explicit):
            return self._manual_override(snapshot, explicit)

        hint = (category_hint or "").strip()
        if hint:
            return self._by_hint(snapshot, hint)

        return self._by_keywords(snapshot, description, model, room)

    # ==================== Strategies ====================

    def _default(self, snapshot: CategorySnapshot, candidates: Optional[list[CategoryCandidate]] = None) -> CategoryMatch:
        return CategoryMatch(
            category_name=snapshot.sentinel.name,
            depreciation_rate=snapshot.sentinel.depreciation_rate,
            strategy_used=MatchStrategy.DEFAULT,
            candidates=candidates or [],
        )

    def _manual_override(self, snapshot: CategorySnapshot, explicit: str) -> CategoryMatch:
        # 이름은 호출자가 준 그대로, 감가율만 스냅샷에서 조회 (없으면 0)
        record = snapshot.find(explicit) if explicit else None
        rate = record.depreciation_rate if record else 0.0
        if explicit and record is None:
            logger.info(f"[CATEGORY] override category not found: '{sanitize_for_log(explicit)}' (rate 0)")
        return CategoryMatch(
            category_name=explicit or snapshot.sentinel.name,
            depreciation_rate=rate,
            strategy_used=MatchStrategy.MANUAL_OVERRIDE,
        )

    def _by_hint(self, snapshot: CategorySnapshot, hint: str) -> CategoryMatch:
        exact = find_exact(hint, snapshot.records)
        if exact is not None:
            return CategoryMatch(
                category_name=exact.name,
                depreciation_rate=exact.depreciation_rate,
                strategy_used=MatchStrategy.CATEGORY_HINT,
                candidates=[
                    CategoryCandidate(name=exact.name, score=EXACT_SCORE, depreciation_rate=exact.depreciation_rate)
                ],
            )

        ranked = rank_by_hint(hint, snapshot.records)
        candidates = _candidates(ranked)
        if not ranked or ranked[0].score < self.hint_threshold:
            best = ranked[0].score if ranked else 0.0
            logger.info(
                f"[CATEGORY] hint below threshold: '{sanitize_for_log(hint)}' "
                f"best={best:.3f} < {self.hint_threshold}"
            )
            return self._default(snapshot, candidates)

        best = ranked[0].record
        return CategoryMatch(
            category_name=best.name,
            depreciation_rate=best.depreciation_rate,
            strategy_used=MatchStrategy.CATEGORY_HINT,
            candidates=candidates,
        )

    def _by_keywords(
        self,
        snapshot: CategorySnapshot,
        description: Optional[str],
        model: Optional[str],
        room: Optional[str],
    ) -> CategoryMatch:
        combined = " ".join(str(part) for part in (description, model, room) if part)
        ranked = rank_by_keywords(tokenize(combined), snapshot.real_records())
        if not ranked:
            return self._default(snapshot)

        best = ranked[0]
        return CategoryMatch(
            category_name=best.record.name,
            depreciation_rate=best.record.depreciation_rate,
            strategy_used=MatchStrategy.EXAMPLES_KEYWORD,
            matched_tokens=list(best.matched_tokens),
            candidates=_candidates(ranked, with_tokens=True),
        )
