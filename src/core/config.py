"""설정 관리 - 환경 변수 로드 및 검증"""
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 데이터베이스 (감가 카테고리 저장소)
    # 비어 있으면 저장소 미연결로 보고 "(Select)" 단일 스냅샷으로 동작합니다.
    database_url: str = ""

    # Redis
    # 비어 있으면 프로세스 내 bounded 캐시로 강등됩니다.
    redis_url: str = ""
    cache_ttl: int = 3600  # 1시간
    cache_fallback_max_entries: int = 100
    cache_key_prefix: str = "validate"

    # 검색 API (Google Custom Search)
    google_api_key: str = ""
    google_search_engine_id: str = ""
    search_api_url: str = "https://www.googleapis.com/customsearch/v1"
    search_max_results: int = 10
    search_timeout_s: float = 25.0
    search_safe: str = "active"

    # 크롤러
    crawler_user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    crawler_http_impersonate: str = "chrome110"
    crawler_http_max_clients: int = 20

    # 리테일러 검색 URL 존재 확인(HEAD) 타임아웃
    probe_timeout_s: float = 6.0

    # 상품 페이지 fetch/파싱
    # - fetch_timeout_s: 페이지 1건 타임아웃
    # - fetch_concurrency: 동시에 진행되는 fetch+parse 상한
    # - max_candidates: 파이프라인에 넣는 신뢰 결과 상한
    fetch_timeout_s: float = 30.0
    fetch_concurrency: int = 5
    max_candidates: int = 10

    # 감가 카테고리 추론
    dep_default_category_name: str = "(Select)"
    dep_hint_threshold: float = 0.6

    # 로깅
    log_level: str = "INFO"

    @field_validator("cache_ttl", "cache_fallback_max_entries")
    @classmethod
    def validate_cache_limits(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("cache limits must be positive")
        return v

    @field_validator("search_timeout_s", "probe_timeout_s", "fetch_timeout_s")
    @classmethod
    def validate_timeouts(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator("fetch_concurrency", "max_candidates", "search_max_results")
    @classmethod
    def validate_concurrency(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("fetch_concurrency/max_candidates/search_max_results must be positive")
        return v

    @field_validator("dep_hint_threshold")
    @classmethod
    def validate_hint_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("dep_hint_threshold must be within [0, 1]")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
