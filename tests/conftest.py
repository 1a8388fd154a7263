"""전역 테스트 설정

역할:
- 테스트 환경 구성
- 공통 Dummy/Fake 주입 (네트워크/DB 없이 동작)

금지:
- 실제 네트워크 호출
- 실제 DB/Redis 연결
"""

from __future__ import annotations

import asyncio
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Optional, Union

import pytest


# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from fixtures import CATEGORY_ROWS  # noqa: E402
from src.core.exceptions import CategoryStoreException, FetchException  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """테스트 환경 변수 설정 (세션 전역)"""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_LEVEL"] = "INFO"


# ============================================================================
# 카테고리 저장소
# ============================================================================

class InMemoryCategoryStore:
    """CategoryStore 대체 - 주어진 행을 그대로 돌려줌

    read_all 호출 횟수를 기록하고, 호출마다 한 번 양보(await)합니다.
    """

    def __init__(self, rows: Optional[list[dict[str, Any]]] = None):
        self.rows = list(rows if rows is not None else CATEGORY_ROWS)
        self.calls = 0

    async def read_all(self) -> list[dict[str, Any]]:
        self.calls += 1
        await asyncio.sleep(0)
        return [dict(r) for r in self.rows]


class FailingCategoryStore:
    """항상 실패하는 저장소"""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error or CategoryStoreException("connection refused")
        self.calls = 0

    async def read_all(self) -> list[dict[str, Any]]:
        self.calls += 1
        raise self.error


@pytest.fixture
def category_store() -> InMemoryCategoryStore:
    return InMemoryCategoryStore()


@pytest.fixture
def failing_store() -> FailingCategoryStore:
    return FailingCategoryStore()


# ============================================================================
# HTTP
# ============================================================================

PageResponse = Union[tuple[int, str], Exception]


class FakeHttpClient:
    """SharedHttpClient 대체

    - pages: url → (status, markup) 또는 올릴 예외
    - head: url → status (None이면 실패)
    - 동시에 진행 중인 get_text 수를 기록 (max_in_flight)
    """

    def __init__(
        self,
        pages: Optional[dict[str, PageResponse]] = None,
        head: Optional[dict[str, Optional[int]]] = None,
        json_payload: Optional[dict[str, Any]] = None,
        delay: float = 0.0,
    ):
        self.pages = pages or {}
        self.head = head or {}
        self.json_payload = json_payload or {}
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0
        self.requested: list[str] = []
        self.json_calls: list[dict[str, Any]] = []
        self.closed = False

    async def get_text(self, url: str, *, timeout_s: float, **kwargs: Any) -> tuple[int, str]:
        self.requested.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            response = self.pages.get(url, (404, ""))
            if isinstance(response, Exception):
                raise response
            return response
        finally:
            self.in_flight -= 1

    async def get_json(self, url: str, *, params: dict[str, Any], timeout_s: float) -> dict[str, Any]:
        self.json_calls.append(dict(params))
        return self.json_payload

    async def head_status(self, url: str, *, timeout_s: float) -> Optional[int]:
        self.requested.append(url)
        await asyncio.sleep(0)
        return self.head.get(url)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_http_factory():
    """FakeHttpClient 생성 팩토리"""
    return FakeHttpClient


@pytest.fixture
def fetch_error() -> FetchException:
    return FetchException("https://www.amazon.com/broken", "connection reset")


# ============================================================================
# 시계
# ============================================================================

class FakeClock:
    """수동으로 진행하는 시계 (monotonic 초 + UTC datetime)"""

    def __init__(self, start: Optional[datetime] = None):
        self.start = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.elapsed = 0.0

    def monotonic(self) -> float:
        return self.elapsed

    def now(self) -> datetime:
        return self.start + timedelta(seconds=self.elapsed)

    def advance(self, seconds: float) -> None:
        self.elapsed += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def category_store_factory():
    """InMemoryCategoryStore 생성 팩토리"""
    return InMemoryCategoryStore
