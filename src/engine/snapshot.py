"""Category Snapshot - 감가 카테고리 인메모리 스냅샷

저장소 "read all" 결과를 매칭용 CategoryRecord 묶음으로 만들고,
기본 카테고리(sentinel)는 스냅샷을 만드는 시점에 항상 주입합니다.

스냅샷은 만들어진 뒤 변경되지 않습니다.
reload는 새 스냅샷을 통째로 만든 뒤 참조 하나만 교체합니다.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from src.core.config import settings
from src.core.exceptions import CategoryStoreException
from src.core.logging import logger
from src.repositories.impl.category_repository import CategoryStore, SqlCategoryStore
from src.schemas.category_schema import CategoryRecord
from src.utils.text_utils import normalize_text, tokenize


def build_record(row: dict[str, Any]) -> CategoryRecord:
    """저장소 행 1건 → CategoryRecord (파생 필드 포함)

    Raises:
        ValueError / ValidationError: 이름이 없거나 감가율이 0~1 밖인 행
    """
    name = str(row.get("name") or "").strip()
    if not name:
        raise ValueError("category name is empty")

    examples_text = row.get("examplesText") or ""
    return CategoryRecord(
        id=int(row.get("id") or 0),
        code=row.get("code"),
        name=name,
        depreciation_rate=round(float(row.get("rate") or 0), 4),
        useful_life=str(row.get("usefulLife") or ""),
        examples_text=examples_text,
        normalized_name=normalize_text(name),
        name_tokens=tuple(tokenize(name)),
        example_tokens=frozenset(tokenize(examples_text)),
    )


def sentinel_record(name: Optional[str] = None) -> CategoryRecord:
    """기본 카테고리 "(Select)" (감가율 0, 저장되지 않는 합성 레코드)"""
    name = name or settings.dep_default_category_name
    return CategoryRecord(
        id=0,
        code=None,
        name=name,
        depreciation_rate=0.0,
        normalized_name=normalize_text(name),
        name_tokens=tuple(tokenize(name)),
    )


@dataclass(frozen=True)
class CategorySnapshot:
    """불변 카테고리 스냅샷

    Attributes:
        records: 저장소 순서 그대로의 레코드 (sentinel 포함)
        sentinel: 기본 카테고리 레코드
        degraded: 저장소 조회 실패로 sentinel만 가진 스냅샷인지
    """

    records: tuple[CategoryRecord, ...]
    sentinel: CategoryRecord
    degraded: bool = False
    _by_name: dict[str, CategoryRecord] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        # 같은 정규화 이름이 여러 개면 먼저 나온 레코드가 이김
        for record in self.records:
            self._by_name.setdefault(record.normalized_name, record)

    def __len__(self) -> int:
        return len(self.records)

    def find(self, name: Optional[str]) -> Optional[CategoryRecord]:
        """정규화 이름 완전 일치 조회"""
        return self._by_name.get(normalize_text(name))

    def is_sentinel(self, record: CategoryRecord) -> bool:
        return record.name == self.sentinel.name

    def real_records(self) -> list[CategoryRecord]:
        """sentinel을 제외한 레코드"""
        return [r for r in self.records if not self.is_sentinel(r)]


def build_snapshot(
    rows: Iterable[dict[str, Any]],
    default_name: Optional[str] = None,
    degraded: bool = False,
) -> CategorySnapshot:
    """행 목록으로 스냅샷 생성 (잘못된 행은 로그 후 건너뜀, sentinel은 없으면 추가)"""
    sentinel = sentinel_record(default_name)
    records: list[CategoryRecord] = []
    for row in rows:
        try:
            records.append(build_record(row))
        except (ValueError, TypeError, ValidationError) as e:
            logger.warning(f"[CATEGORY] skipping invalid category row id={row.get('id')}: {e}")

    if not any(r.name == sentinel.name for r in records):
        records.append(sentinel)

    return CategorySnapshot(records=tuple(records), sentinel=sentinel, degraded=degraded)


class CategorySnapshotCache:
    """스냅샷 보관소

    - 최초 사용 시 로드, reload() 시 재로드
    - 로드는 lock으로 직렬화, 읽기는 현재 참조를 그대로 사용
    - 저장소 실패 시 sentinel만 가진 스냅샷을 돌려주고 다음 접근에서 다시 시도
    """

    def __init__(self, store: Optional[CategoryStore] = None, default_name: Optional[str] = None):
        self.store = store or SqlCategoryStore()
        self.default_name = default_name or settings.dep_default_category_name
        self._snapshot: Optional[CategorySnapshot] = None
        self._lock: Optional[asyncio.Lock] = None

    def _get_lock(self) -> asyncio.Lock:
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    @property
    def current(self) -> Optional[CategorySnapshot]:
        return self._snapshot

    async def get(self) -> CategorySnapshot:
        """현재 스냅샷 (없거나 degraded면 로드)"""
        snapshot = self._snapshot
        if snapshot is not None and not snapshot.degraded:
            return snapshot

        async with self._get_lock():
            # lock 대기 중 다른 코루틴이 로드를 끝냈을 수 있음
            snapshot = self._snapshot
            if snapshot is not None and not snapshot.degraded:
                return snapshot
            return await self._load()

    async def reload(self) -> CategorySnapshot:
        """강제 재로드 (진행 중인 읽기는 이전 스냅샷을 끝까지 사용)"""
        async with self._get_lock():
            return await self._load()

    async def _load(self) -> CategorySnapshot:
        try:
            rows = await self.store.read_all()
        except CategoryStoreException as e:
            logger.error(f"[CATEGORY] store unavailable, using default category only: {e}")
            snapshot = build_snapshot([], self.default_name, degraded=True)
        except Exception as e:
            logger.error(
                f"[CATEGORY] store read failed, using default category only: {type(e).__name__}: {e}"
            )
            snapshot = build_snapshot([], self.default_name, degraded=True)
        else:
            snapshot = build_snapshot(rows, self.default_name)
            logger.info(f"[CATEGORY] snapshot loaded: {len(snapshot)} categories")

        self._snapshot = snapshot
        return snapshot
