"""공유 HTTP 클라이언트 (curl_cffi)

- 요청마다 AsyncSession을 만들면 TLS/커넥션 오버헤드가 커져서
  타임아웃/지연이 악화될 수 있어 프로세스 단위로 세션을 재사용합니다.
- 브라우저 impersonate + 브라우저형 헤더로 요청합니다.
- 종료 시 close()로 정리합니다.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Optional, Dict

from curl_cffi.requests import AsyncSession

from src.core.config import settings
from src.core.exceptions import (
    FetchException,
    NetworkTimeoutException,
    SearchApiException,
)
from src.core.logging import logger, sanitize_for_log


def _is_timeout_error(error: Exception) -> bool:
    if isinstance(error, asyncio.TimeoutError):
        return True
    name = type(error).__name__.lower()
    return "timeout" in name or "timed out" in str(error).lower()


class SharedHttpClient:
    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._session: Optional[AsyncSession] = None

    async def _ensure_session(self) -> AsyncSession:
        async with self._lock:
            if self._session is not None:
                return self._session
            self._session = AsyncSession(
                impersonate=settings.crawler_http_impersonate,
                headers=self.default_headers(),
                allow_redirects=True,
                max_clients=int(getattr(settings, "crawler_http_max_clients", 20)),
                trust_env=False,
            )
            return self._session

    def default_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": settings.crawler_user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }

    async def get_text(
        self,
        url: str,
        *,
        timeout_s: float,
        headers: Optional[Dict[str, str]] = None,
        follow_redirects: bool = True,
    ) -> tuple[int, str]:
        """GET 요청 후 (status, markup) 반환

        Raises:
            NetworkTimeoutException: timeout_s 초과
            FetchException: 연결/전송 오류
        """
        sess = await self._ensure_session()
        try:
            resp = await asyncio.wait_for(
                sess.get(
                    url,
                    headers=headers,
                    timeout=timeout_s,
                    allow_redirects=follow_redirects,
                ),
                timeout=timeout_s,
            )
        except Exception as e:
            if _is_timeout_error(e):
                raise NetworkTimeoutException(f"GET {url}", timeout_s) from e
            logger.info(f"[HTTP_CLIENT] GET failed: {type(e).__name__}: {repr(e)}")
            raise FetchException(url, f"{type(e).__name__}: {e}") from e

        status = getattr(resp, "status_code", 0) or 0
        text = getattr(resp, "text", "") or ""
        return status, text

    async def get_json(
        self,
        url: str,
        *,
        params: Dict[str, Any],
        timeout_s: float,
    ) -> Dict[str, Any]:
        """검색 API용 JSON GET

        Raises:
            SearchApiException: 네트워크 오류, 2xx 외 응답, JSON 파싱 실패
        """
        sess = await self._ensure_session()
        try:
            resp = await asyncio.wait_for(
                sess.get(url, params=params, timeout=timeout_s),
                timeout=timeout_s,
            )
        except Exception as e:
            reason = "timeout" if _is_timeout_error(e) else f"{type(e).__name__}: {e}"
            raise SearchApiException(reason) from e

        status = getattr(resp, "status_code", 0) or 0
        if not 200 <= status < 300:
            body = sanitize_for_log(getattr(resp, "text", "") or "", max_length=200)
            raise SearchApiException(f"HTTP {status}", details={"status_code": status, "body": body})

        try:
            data = json.loads(getattr(resp, "text", "") or "{}")
        except (json.JSONDecodeError, ValueError) as e:
            raise SearchApiException(f"invalid JSON: {e}") from e
        return data if isinstance(data, dict) else {}

    async def head_status(self, url: str, *, timeout_s: float) -> Optional[int]:
        sess = await self._ensure_session()
        try:
            resp = await asyncio.wait_for(
                sess.head(url, timeout=timeout_s, allow_redirects=True),
                timeout=timeout_s,
            )
            return getattr(resp, "status_code", None)
        except Exception as e:
            logger.info(f"[HTTP_CLIENT] HEAD failed: {type(e).__name__}: {repr(e)}")
            return None

    async def close(self) -> None:
        async with self._lock:
            if self._session is None:
                return
            try:
                await self._session.close()
            except Exception as e:
                logger.debug(f"[HTTP_CLIENT] close failed: {type(e).__name__}: {e}")
            self._session = None


_shared_http_client = SharedHttpClient()


def get_shared_http_client() -> SharedHttpClient:
    return _shared_http_client


async def shutdown_shared_http_client() -> None:
    await _shared_http_client.close()
