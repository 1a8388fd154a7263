"""리소스 파일(YAML) 로더 유틸리티"""
import os
import yaml
from typing import Any, Dict
from functools import lru_cache

from src.core.logging import logger


def get_resource_path(relative_path: str) -> str:
    """프로젝트 루트 기준 리소스 절대 경로 반환"""
    # src/utils/resource_loader.py -> src/utils -> src -> root
    base_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    return os.path.join(base_dir, "resources", relative_path)


@lru_cache(maxsize=32)
def load_yaml_resource(relative_path: str) -> Dict[str, Any]:
    """YAML 리소스 로드 및 캐싱"""
    path = get_resource_path(relative_path)
    if not os.path.exists(path):
        logger.warning(f"Resource not found: {path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except Exception as e:
        logger.error(f"Failed to load YAML resource {path}: {e}")
        return {}


def load_trusted_domains() -> tuple[str, ...]:
    """신뢰 리테일러 호스트 조각 (파일 순서 유지)"""
    data = load_yaml_resource("retail/trusted_domains.yaml")
    return tuple(str(d).lower() for d in data.get("trusted_domains", []))


def load_untrusted_domains() -> tuple[str, ...]:
    """차단 도메인 목록"""
    data = load_yaml_resource("retail/trusted_domains.yaml")
    return tuple(str(d).lower() for d in data.get("untrusted_domains", []))


def load_search_probes() -> list[Dict[str, str]]:
    """자격 증명 없이 사용할 리테일러 검색 URL 템플릿"""
    data = load_yaml_resource("retail/search_probes.yaml")
    return [p for p in data.get("probes", []) if p.get("name") and p.get("url")]


def load_category_keywords() -> tuple[list[tuple[str, list[str]]], str]:
    """일반 페이지 카테고리 키워드 테이블 (순서가 우선순위)"""
    data = load_yaml_resource("retail/category_keywords.yaml")
    table = [
        (entry["name"], [str(k).lower() for k in entry.get("keywords", [])])
        for entry in data.get("categories", [])
        if entry.get("name")
    ]
    return table, data.get("default_category", "General")


def load_brand_typos() -> Dict[str, str]:
    """브랜드 오타 교정 사전"""
    data = load_yaml_resource("retail/brand_typos.yaml")
    return {str(k).lower(): str(v) for k, v in (data.get("brand_typos") or {}).items()}
