"""감가 카테고리 리포지토리 - DB 접근 로직

엔진은 CategoryStore 프로토콜(read_all)만 알고, SQLAlchemy 세부는 여기서 끝납니다.
"""

from __future__ import annotations

import asyncio
from typing import Any, Protocol

from sqlalchemy.orm import Session

from src.core.database import get_db_context
from src.core.exceptions import CategoryStoreException
from src.core.logging import logger
from src.repositories.models import DepCategory


class CategoryStore(Protocol):
    """카테고리 저장소 인터페이스 ("read all")"""

    async def read_all(self) -> list[dict[str, Any]]:
        ...


class CategoryRepository:
    """감가 카테고리 데이터 액세스 레이어"""

    def __init__(self, db: Session):
        self.db = db

    def fetch_all(self) -> list[dict[str, Any]]:
        """전체 카테고리를 id 순으로 조회"""
        rows = self.db.query(DepCategory).order_by(DepCategory.id).all()
        return [
            {
                "id": row.id,
                "code": row.code,
                "name": row.name,
                "rate": float(row.annual_depreciation_rate or 0),
                "usefulLife": row.useful_life or "",
                "examplesText": row.examples_text or "",
            }
            for row in rows
        ]


class SqlCategoryStore:
    """SQLAlchemy 기반 CategoryStore

    동기 세션 조회를 워커 스레드에서 실행해 이벤트 루프를 막지 않습니다.
    """

    def _read_all_sync(self) -> list[dict[str, Any]]:
        with get_db_context() as db:
            return CategoryRepository(db).fetch_all()

    async def read_all(self) -> list[dict[str, Any]]:
        """
        Raises:
            CategoryStoreException: 미설정/연결 실패/쿼리 실패
        """
        try:
            rows = await asyncio.to_thread(self._read_all_sync)
        except CategoryStoreException:
            raise
        except Exception as e:
            logger.error(f"[CATEGORY] store read failed: {type(e).__name__}: {e}")
            raise CategoryStoreException(f"{type(e).__name__}: {e}") from e

        logger.info(f"[CATEGORY] store returned {len(rows)} rows")
        return rows
