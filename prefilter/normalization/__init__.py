"""Normalization layer turning raw message text into structured content.

This module provides:
- NormalizedContent: canonical text plus extracted URLs, mentions, hashtags
- normalize: pure function from raw text to NormalizedContent
- URL helpers: normalize_url, extract_domain, get_etld_plus_one
"""

from .models import NormalizedContent
from .service import (
    extract_hashtags,
    extract_mentions,
    extract_urls,
    normalize,
    normalize_text,
)
from .urls import TRACKING_PARAMS, extract_domain, get_etld_plus_one, normalize_url

__all__ = [
    "NormalizedContent",
    "normalize",
    "normalize_text",
    "extract_urls",
    "extract_mentions",
    "extract_hashtags",
    "normalize_url",
    "extract_domain",
    "get_etld_plus_one",
    "TRACKING_PARAMS",
]
