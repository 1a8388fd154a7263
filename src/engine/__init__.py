"""Engine Layer - 감가 카테고리 추론

- CategorySnapshot / CategorySnapshotCache: 재로드 가능한 인메모리 스냅샷
- strategy: 힌트 유사도, 키워드 overlap 순위 (순수 함수)
- CategoryInferenceEngine: 전략 순서 적용
"""

from .category_engine import CategoryInferenceEngine
from .snapshot import CategorySnapshot, CategorySnapshotCache, build_snapshot, sentinel_record
from .strategy import ScoredCategory, hint_similarity, rank_by_hint, rank_by_keywords

__all__ = [
    "CategoryInferenceEngine",
    "CategorySnapshot",
    "CategorySnapshotCache",
    "build_snapshot",
    "sentinel_record",
    "ScoredCategory",
    "hint_similarity",
    "rank_by_hint",
    "rank_by_keywords",
]
