"""In-memory verdict cache keyed by normalized content.

Messages with identical text share one cache entry, so re-posted spam
skips evaluation.
"""

import logging
import threading
from collections import OrderedDict
from datetime import datetime
from typing import Callable, Optional

from prefilter.logging import get_logger
from prefilter.normalization import normalize
from prefilter.policy.models import PolicyVerdict
from prefilter.utils.hashing import compute_content_key
from prefilter.utils.timestamps import ensure_utc, utc_now

from .models import CacheEntry, CacheStats

logger = get_logger(__name__, component="cache")

DEFAULT_TTL_SECONDS = 3600
DEFAULT_MAX_ENTRIES = 10000


class VerdictCache:
    """Thread-safe TTL cache of PolicyVerdicts.

    Responsibilities:
    - Derive a content key from the normalized message
    - Expire entries lazily on lookup, or in bulk via cleanup_expired()
    - Evict the oldest entry when full
    - Keep hit/miss/eviction counters

    Unlike the engine, the cache owns a lock: it is meant to be shared by
    every worker handling messages.
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], datetime] = utc_now,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize VerdictCache.

        Args:
            ttl_seconds: Default entry lifetime in seconds
            max_entries: Maximum entries kept before evicting the oldest
            clock: Callable returning the current UTC time (injectable for tests)
            logger_instance: Optional logger instance (defaults to module logger)

        Raises:
            ValueError: If ttl_seconds or max_entries is not positive
        """
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got: {ttl_seconds}")
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got: {max_entries}")

        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self.clock = clock
        self.logger = logger_instance or logger

        # Insertion order == creation order, oldest first
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._stats = CacheStats()
        self._lock = threading.Lock()

    @staticmethod
    def content_key(text: str) -> str:
        """Cache key for a raw message."""
        return compute_content_key(normalize(text))

    def _now(self) -> datetime:
        return ensure_utc(self.clock())

    def get(self, text: str) -> Optional[PolicyVerdict]:
        """Return the cached verdict for ``text``, or None on miss or expiry."""
        content_key = self.content_key(text)
        now = self._now()

        with self._lock:
            entry = self._entries.get(content_key)

            if entry is None:
                self._stats.misses += 1
                return None

            if entry.is_expired(now):
                del self._entries[content_key]
                self._stats.misses += 1
                self._stats.evictions += 1
                return None

            entry.hit_count += 1
            entry.last_accessed_at = now
            self._stats.hits += 1
            verdict = entry.verdict
            hit_count = entry.hit_count

        self.logger.debug(
            "Verdict cache hit",
            extra={
                "event": "cache.verdict.hit",
                "content_hash": content_key[:8],
                "verdict": verdict.verdict.value,
                "hit_count": hit_count,
            },
        )
        return verdict

    def set(self, text: str, verdict: PolicyVerdict, ttl_seconds: Optional[int] = None) -> None:
        """Store ``verdict`` for ``text``, replacing any existing entry.

        Args:
            text: Raw message text
            verdict: Verdict to cache
            ttl_seconds: Optional per-entry lifetime (defaults to the cache TTL)

        Raises:
            ValueError: If ttl_seconds is given and not positive
        """
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            raise ValueError(f"ttl_seconds must be positive, got: {ttl}")

        content_key = self.content_key(text)
        now = self._now()

        with self._lock:
            if content_key in self._entries:
                del self._entries[content_key]
            elif len(self._entries) >= self.max_entries:
                self._entries.popitem(last=False)
                self._stats.evictions += 1

            self._entries[content_key] = CacheEntry(
                verdict=verdict,
                created_at=now,
                ttl_seconds=ttl,
                last_accessed_at=now,
            )
            size = len(self._entries)

        self.logger.debug(
            "Verdict cached",
            extra={
                "event": "cache.verdict.stored",
                "content_hash": content_key[:8],
                "verdict": verdict.verdict.value,
                "ttl_seconds": ttl,
                "cache_size": size,
            },
        )

    def delete(self, text: str) -> bool:
        """Drop the entry for ``text``; returns True if one existed."""
        with self._lock:
            return self._entries.pop(self.content_key(text), None) is not None

    def clear(self) -> None:
        """Drop every entry; counters are kept."""
        with self._lock:
            self._entries.clear()

    def cleanup_expired(self) -> int:
        """Remove every expired entry.

        Returns:
            Number of entries removed
        """
        now = self._now()
        with self._lock:
            expired = [k for k, entry in self._entries.items() if entry.is_expired(now)]
            for content_key in expired:
                del self._entries[content_key]
            self._stats.evictions += len(expired)

        if expired:
            self.logger.info(
                f"Removed {len(expired)} expired verdicts",
                extra={"event": "cache.cleanup.completed", "removed": len(expired)},
            )
        return len(expired)

    def stats(self) -> CacheStats:
        """Snapshot of the cache counters."""
        with self._lock:
            return CacheStats(
                entries=len(self._entries),
                hits=self._stats.hits,
                misses=self._stats.misses,
                evictions=self._stats.evictions,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
