"""결과 캐시 서비스 - 검증 응답 캐싱만 담당

백엔드는 생성 시점에 한 번 선택합니다.
- RedisCacheBackend: TTL 저장소 (setex, 최초 저장 시점 TTL 고정)
- BoundedMemoryCache: Redis가 없을 때 쓰는 프로세스 내 캐시
  (읽을 때 TTL 검사, 최대 개수 초과 시 가장 먼저 넣은 항목 1개 제거)
"""
import threading
import time
from typing import Callable, Optional, Protocol

from pydantic import ValidationError
from redis import Redis

from src.core.config import settings
from src.core.logging import logger
from src.core.exceptions import (
    CacheException,
    CacheConnectionException,
    CacheSerializationException,
)
from src.schemas.price_schema import ValidationResponse
from src.utils.hash_utils import generate_cache_key


class CacheBackend(Protocol):
    """get/set/expire 인터페이스 (값은 직렬화된 문자열)"""

    name: str

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> bool:
        ...


class RedisCacheBackend:
    """Redis TTL 저장소"""

    name = "redis"

    def __init__(self, redis_url: Optional[str] = None, ttl_seconds: Optional[int] = None):
        """Redis 클라이언트 초기화"""
        self.ttl_seconds = ttl_seconds or settings.cache_ttl
        try:
            self.redis_client = Redis.from_url(
                redis_url or settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )
            # 연결 테스트
            self.redis_client.ping()
            logger.info("Redis connection established")
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            raise CacheConnectionException(str(e), details={"reason": str(e)})

    def get(self, key: str) -> Optional[str]:
        try:
            return self.redis_client.get(key)
        except Exception as e:
            raise CacheConnectionException(f"read failed: {e}") from e

    def set(self, key: str, value: str) -> None:
        try:
            self.redis_client.setex(key, self.ttl_seconds, value)
        except Exception as e:
            raise CacheConnectionException(f"write failed: {e}") from e

    def delete(self, key: str) -> bool:
        try:
            return self.redis_client.delete(key) > 0
        except Exception as e:
            raise CacheConnectionException(f"delete failed: {e}") from e


class BoundedMemoryCache:
    """프로세스 내 key → (value, timestamp) 캐시

    LRU가 아니라 삽입 순서 기준으로 제거합니다.
    읽기-만료-삭제는 항목 단위로 lock 안에서 처리합니다.
    """

    name = "memory"

    def __init__(
        self,
        ttl_seconds: Optional[int] = None,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds or settings.cache_ttl
        self.max_entries = max_entries or settings.cache_fallback_max_entries
        self._clock = clock
        self._store: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            item = self._store.get(key)
            if item is None:
                return None
            value, created_at = item
            if self._clock() - created_at > self.ttl_seconds:
                del self._store[key]
                return None
            return value

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._store[key] = (value, self._clock())
            if len(self._store) > self.max_entries:
                oldest = next(iter(self._store))
                del self._store[oldest]

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._store.pop(key, None) is not None

    def __len__(self) -> int:
        return len(self._store)


def create_cache_backend() -> CacheBackend:
    """설정에 따라 백엔드 선택 (Redis 실패 시 메모리로 강등)"""
    if settings.redis_url:
        try:
            return RedisCacheBackend()
        except CacheConnectionException as e:
            logger.warning(f"[CACHE] Redis unavailable, using in-process cache: {e}")
    return BoundedMemoryCache()


class CacheService:
    """검증 응답 캐시"""

    def __init__(self, backend: Optional[CacheBackend] = None):
        self.backend = backend if backend is not None else create_cache_backend()
        logger.info(f"[CACHE] backend={self.backend.name}")

    @staticmethod
    def build_key(query: str, min_price: Optional[float], max_price: Optional[float], operator: str) -> str:
        return generate_cache_key(query, min_price, max_price, operator, prefix=settings.cache_key_prefix)

    def get(self, cache_key: str) -> Optional[ValidationResponse]:
        """
        캐시된 검증 응답 조회

        Args:
            cache_key: build_key()로 만든 키

        Returns:
            ValidationResponse 또는 None (미스/만료/읽기 실패)
        """
        try:
            cached = self.backend.get(cache_key)
        except CacheException as e:
            logger.error(f"[CACHE] read error: {e}")
            return None

        if not cached:
            logger.info(f"Cache miss for key: {cache_key}")
            return None

        try:
            response = ValidationResponse.model_validate_json(cached)
        except (ValidationError, ValueError) as e:
            logger.error(f"[CACHE] {CacheSerializationException('deserialize', str(e))}")
            return None

        logger.info(f"Cache hit for key: {cache_key}")
        return response

    def set(self, cache_key: str, response: ValidationResponse) -> bool:
        """
        검증 응답 저장 (동일 키 재저장은 마지막 값이 남음)

        Returns:
            성공 여부
        """
        try:
            payload = response.model_dump_json(by_alias=True)
        except (TypeError, ValueError) as e:
            logger.error(f"[CACHE] {CacheSerializationException('serialize', str(e))}")
            return False

        try:
            self.backend.set(cache_key, payload)
        except CacheException as e:
            logger.error(f"[CACHE] write error: {e}")
            return False

        logger.info(f"Cache set for key: {cache_key}, backend={self.backend.name}")
        return True

    def delete(self, cache_key: str) -> bool:
        try:
            return self.backend.delete(cache_key)
        except CacheException as e:
            logger.error(f"[CACHE] delete error: {e}")
            return False
