"""감가 카테고리 서비스 - 추론/재로드 진입점"""

from typing import Optional

from src.core.logging import logger
from src.engine import CategoryInferenceEngine, CategorySnapshotCache
from src.repositories.impl.category_repository import CategoryStore
from src.schemas.category_schema import CategoryMatch, ReloadResult


class CategoryService:
    """
    카테고리 서비스 - SRP: 추론 요청을 엔진으로 전달하고 스냅샷 수명을 관리

    - 매칭 규칙은 CategoryInferenceEngine
    - 저장소 조회/스냅샷 교체는 CategorySnapshotCache
    """

    def __init__(
        self,
        store: Optional[CategoryStore] = None,
        snapshots: Optional[CategorySnapshotCache] = None,
        hint_threshold: Optional[float] = None,
    ):
        self.snapshots = snapshots or CategorySnapshotCache(store)
        self.engine = CategoryInferenceEngine(self.snapshots, hint_threshold=hint_threshold)

    async def infer_category(
        self,
        description: Optional[str] = None,
        model: Optional[str] = None,
        room: Optional[str] = None,
        category_hint: Optional[str] = None,
        explicit_category: Optional[str] = None,
        allow_override: bool = True,
        force_override: bool = False,
    ) -> CategoryMatch:
        """
        카테고리 추론

        Args:
            description / model / room: 키워드 매칭용 자유 텍스트
            category_hint: 카테고리명 힌트 (유사도 매칭)
            explicit_category: 수동 지정 카테고리명
            allow_override: False면 수동 지정을 무시
            force_override: 카테고리명 없이도 수동 지정으로 처리 ("(Select)", 0)

        Returns:
            CategoryMatch
        """
        match = await self.engine.infer(
            description=description,
            model=model,
            room=room,
            category_hint=category_hint,
            explicit_category=explicit_category,
            allow_override=allow_override,
            force_override=force_override,
        )
        logger.debug(
            f"[CATEGORY] inferred '{match.category_name}' "
            f"rate={match.depreciation_rate} strategy={match.strategy_used.value}"
        )
        return match

    async def reload_categories(self) -> ReloadResult:
        """스냅샷 재로드 (count에는 기본 카테고리 포함)"""
        snapshot = await self.snapshots.reload()
        logger.info(f"[CATEGORY] reloaded: count={len(snapshot)}, degraded={snapshot.degraded}")
        return ReloadResult(reloaded=True, count=len(snapshot))
