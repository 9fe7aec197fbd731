"""Verdict caching by normalized content.

This module provides:
- VerdictCache: thread-safe TTL cache of PolicyVerdicts
- CacheEntry / CacheStats: entry bookkeeping and effectiveness counters
"""

from .models import CacheEntry, CacheStats
from .service import DEFAULT_MAX_ENTRIES, DEFAULT_TTL_SECONDS, VerdictCache

__all__ = [
    "VerdictCache",
    "CacheEntry",
    "CacheStats",
    "DEFAULT_TTL_SECONDS",
    "DEFAULT_MAX_ENTRIES",
]
