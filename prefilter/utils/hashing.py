"""Deterministic hashing for verdict cache keys."""

import hashlib
import json

from prefilter.normalization.models import NormalizedContent


def compute_content_key(content: NormalizedContent) -> str:
    """Compute the cache key for a normalized message.

    The key is a SHA256 hash of a canonical JSON document holding the
    original text, the normalized text and the sorted URLs, mentions and
    hashtags. Rules may read the original text (the caps check does), so
    messages that differ in any character get different keys.

    Args:
        content: Normalized message

    Returns:
        Hexadecimal SHA256 digest (64 characters)
    """
    canonical = json.dumps(
        {
            "original": content.original_text,
            "text": content.normalized_text,
            "urls": sorted(content.urls),
            "mentions": sorted(content.mentions),
            "hashtags": sorted(content.hashtags),
        },
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return hash_string(canonical)


def hash_string(value: str) -> str:
    """Compute the SHA256 hex digest of a string."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()
