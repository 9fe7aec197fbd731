"""Data models for the verdict cache."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from prefilter.policy.models import PolicyVerdict


@dataclass
class CacheEntry:
    """A cached verdict with its bookkeeping.

    Attributes:
        verdict: Cached PolicyVerdict
        created_at: When the entry was stored (UTC)
        ttl_seconds: Lifetime of the entry
        last_accessed_at: Last time the entry was returned by get()
        hit_count: Number of times the entry was returned by get()
    """

    verdict: PolicyVerdict
    created_at: datetime
    ttl_seconds: int
    last_accessed_at: datetime
    hit_count: int = 0

    @property
    def expires_at(self) -> datetime:
        return self.created_at + timedelta(seconds=self.ttl_seconds)

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


@dataclass
class CacheStats:
    """Counters describing cache effectiveness.

    Attributes:
        entries: Entries currently stored (expired ones included until swept)
        hits: get() calls that returned a verdict
        misses: get() calls that returned None
        evictions: Entries dropped for expiry or capacity
    """

    entries: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        """Fraction of lookups served from the cache (0.0 when unused)."""
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0
