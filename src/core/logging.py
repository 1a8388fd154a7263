"""로깅 설정

- 컴포넌트 태그는 메시지 앞에 붙입니다: [SEARCH], [PROBE], [PIPELINE], [CACHE], [CATEGORY], [DEP]
- 검색 API 키가 요청 URL과 함께 찍히지 않도록 handler 단에서 마스킹합니다.
"""
import logging
import os
import re
import sys

from src.core.config import settings


LOGGER_NAME = "replacement_pricer"

# Production 환경에서는 DEBUG 로그 비활성화
IS_PRODUCTION = os.getenv("ENVIRONMENT", "development") == "production"

_SECRET_PARAM = re.compile(r"(?i)\b(key|api_key|apikey|token|password|secret)=([^&\s'\"]+)")
_CONTROL_CHARS = re.compile(r"[\r\n\t]+")


def mask_secrets(text: str) -> str:
    """`key=...` 형태의 값을 *** 로 치환"""
    return _SECRET_PARAM.sub(lambda m: f"{m.group(1)}=***", text)


class SecretMaskingFilter(logging.Filter):
    """레코드 메시지의 비밀 파라미터 마스킹"""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = mask_secrets(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def setup_logging() -> logging.Logger:
    """로거 초기화 및 설정 (여러 번 호출해도 handler는 하나)"""
    logger = logging.getLogger(LOGGER_NAME)

    log_level = settings.log_level.upper()
    if IS_PRODUCTION and log_level == "DEBUG":
        log_level = "INFO"
    level = getattr(logging, log_level, logging.INFO)
    logger.setLevel(level)

    if any(isinstance(f, SecretMaskingFilter) for h in logger.handlers for f in h.filters):
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(SecretMaskingFilter())

    if IS_PRODUCTION:
        fmt = "%(asctime)s - %(levelname)s - %(message)s"
    else:
        fmt = "%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s"
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S"))

    logger.addHandler(handler)
    logger.propagate = False
    return logger


logger = setup_logging()


def sanitize_for_log(value: str, max_length: int = 100) -> str:
    """사용자 입력(상품 설명, 쿼리, URL)을 로그 한 줄에 맞게 정리

    Args:
        value: 로깅할 문자열
        max_length: 최대 길이

    Returns:
        개행 제거, 비밀 값 마스킹, 길이 절단된 문자열
    """
    if not value:
        return "[empty]"

    result = mask_secrets(_CONTROL_CHARS.sub(" ", str(value)))
    if len(result) > max_length:
        result = result[:max_length] + "..."
    return result
