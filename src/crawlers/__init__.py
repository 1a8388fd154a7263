"""Retail crawler modules (search + fetch/extract).

공개 API는 이 파일에서만 export합니다.
"""

from .http_client import SharedHttpClient, get_shared_http_client, shutdown_shared_http_client
from .pipeline import BoundedExtractPipeline
from .trusted_domains import TrustedDomainRegistry

__all__ = [
        "SharedHttpClient",
        "get_shared_http_client",
        "shutdown_shared_http_client",
        "BoundedExtractPipeline",
        "TrustedDomainRegistry",
]
