"""Utility functions for hashing and time handling."""

from .hashing import compute_content_key, hash_string
from .timestamps import ensure_utc, utc_now

__all__ = [
    # Hashing
    "compute_content_key",
    "hash_string",
    # Timestamps
    "utc_now",
    "ensure_utc",
]
