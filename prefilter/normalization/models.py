"""Data models for the normalization layer."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class NormalizedContent:
    """Canonical form of a message plus the signals extracted from it.

    Keeps the verbatim input next to the canonical text so that rules can
    pick whichever they need (e.g. caps detection needs the original casing,
    keyword rules want the case-folded text).

    Attributes:
        original_text: Input exactly as received
        normalized_text: NFKC-normalized, case-folded text with zero-width
            characters removed and whitespace collapsed and trimmed
        urls: URL-like substrings of original_text, in order of appearance
        mentions: Handles following '@' in original_text, without the '@'
        hashtags: Tags following '#' in original_text, without the '#'
    """

    original_text: str
    normalized_text: str
    urls: List[str] = field(default_factory=list)
    mentions: List[str] = field(default_factory=list)
    hashtags: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when nothing is left after normalization."""
        return not self.normalized_text

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict form for logging and JSON output."""
        return {
            "original_text": self.original_text,
            "normalized_text": self.normalized_text,
            "urls": list(self.urls),
            "mentions": list(self.mentions),
            "hashtags": list(self.hashtags),
        }
