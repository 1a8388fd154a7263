"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from typing import Any, Optional


# 기본 예외 클래스
class PricingEngineException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 크롤러 관련 예외
class CrawlerException(PricingEngineException):
    """크롤러 관련 예외의 기본 클래스"""
    def __init__(self, message: str, error_code: str = "CRAWLER_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CRAWLER_ERROR", details)


class FetchException(CrawlerException):
    """페이지 요청 자체가 실패 (연결 오류 등)"""
    def __init__(self, url: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Failed to fetch {url}: {reason}"
        super().__init__(message, "FETCH_ERROR", details or {"url": url, "reason": reason})


class HttpStatusException(CrawlerException):
    """2xx가 아닌 응답"""
    def __init__(self, url: str, status_code: int, details: Optional[dict[str, Any]] = None):
        message = f"Unexpected HTTP status {status_code} for {url}"
        super().__init__(message, "HTTP_STATUS_ERROR",
                        details or {"url": url, "status_code": status_code})


class NetworkTimeoutException(CrawlerException):
    """네트워크 타임아웃 예외"""
    def __init__(self, operation: str, timeout_s: float, details: Optional[dict[str, Any]] = None):
        message = f"Network timeout during '{operation}' after {timeout_s}s"
        super().__init__(message, "NETWORK_TIMEOUT",
                        details or {"operation": operation, "timeout_s": timeout_s})


class ParsingException(CrawlerException):
    """HTML/데이터 파싱 오류"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Failed to parse response: {reason}"
        super().__init__(message, "PARSING_ERROR", details or {"reason": reason})


class SearchApiException(CrawlerException):
    """검색 API 호출 실패"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Search API request failed: {reason}"
        super().__init__(message, "SEARCH_API_ERROR", details or {"reason": reason})


# 캐시 관련 예외
class CacheException(PricingEngineException):
    """캐시 관련 예외"""
    def __init__(self, message: str, error_code: str = "CACHE_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CACHE_ERROR", details)


class CacheConnectionException(CacheException):
    """캐시 연결 실패"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Failed to connect to cache: {reason}"
        super().__init__(message, "CACHE_CONNECTION_ERROR", details)


class CacheSerializationException(CacheException):
    """캐시 직렬화/역직렬화 오류"""
    def __init__(self, operation: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Cache {operation} failed: {reason}"
        super().__init__(message, "CACHE_SERIALIZATION_ERROR",
                        details or {"operation": operation, "reason": reason})


# 카테고리 저장소 관련 예외
class CategoryStoreException(PricingEngineException):
    """감가 카테고리 저장소 조회 실패"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Category store unavailable: {reason}"
        super().__init__(message, "CATEGORY_STORE_ERROR", details or {"reason": reason})


# 유효성 검증 관련 예외
class ValidationException(PricingEngineException):
    """유효성 검증 예외"""
    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, "VALIDATION_ERROR",
                        details or {"field": field, "reason": reason})


class InvalidQueryException(ValidationException):
    """유효하지 않은 입력 (설명/아이템 목록)"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        super().__init__("query", reason, details)


class InvalidPriceException(ValidationException):
    """유효하지 않은 가격"""
    def __init__(self, price: Any, reason: str, details: Optional[dict[str, Any]] = None):
        super().__init__("price", f"{reason} (value: {price})", details)


class UpstreamUnavailableException(CrawlerException):
    """모든 출처(검색 쿼리/리테일러/페이지)가 실패"""
    def __init__(self, stage: str, attempted: int, details: Optional[dict[str, Any]] = None):
        message = f"All {attempted} upstream sources failed during {stage}"
        super().__init__(message, "UPSTREAM_UNAVAILABLE",
                        details or {"stage": stage, "attempted": attempted})
