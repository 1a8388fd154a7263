"""Utilities package - Flat structure (no nested directories)"""

# Hash utilities
from .hash_utils import hash_string, compose_validation_key, generate_cache_key

# URL utilities
from .url_utils import extract_domain, build_search_url, dedupe_by_link

# Text utilities
from .text_utils import (
    extract_price_from_text,
    to_numeric_price,
    normalize_text,
    tokenize,
    normalize_search_query,
    trigrams,
    trigram_jaccard,
    token_overlap,
    starts_with_matched_token,
)

# Resource loaders (YAML)
from .resource_loader import (
    get_resource_path,
    load_yaml_resource,
    load_trusted_domains,
    load_untrusted_domains,
    load_search_probes,
    load_category_keywords,
    load_brand_typos,
)

__all__ = [
    # hash
    "hash_string",
    "compose_validation_key",
    "generate_cache_key",
    # url
    "extract_domain",
    "build_search_url",
    "dedupe_by_link",
    # text
    "extract_price_from_text",
    "to_numeric_price",
    "normalize_text",
    "tokenize",
    "normalize_search_query",
    "trigrams",
    "trigram_jaccard",
    "token_overlap",
    "starts_with_matched_token",
    # resources
    "get_resource_path",
    "load_yaml_resource",
    "load_trusted_domains",
    "load_untrusted_domains",
    "load_search_probes",
    "load_category_keywords",
    "load_brand_typos",
]
