"""Text normalization for incoming messages.

normalize() turns raw message text into NormalizedContent:
1. Removal of zero-width characters
2. Unicode NFKC normalization, case folding and trimming
3. Collapsing whitespace runs to a single space
4. Extraction of URLs, @mentions and #hashtags from the original text
"""

import re
import unicodedata
from typing import List

from .models import NormalizedContent

# Zero-width space, non-joiner, joiner, and BOM used as text
ZERO_WIDTH_PATTERN = re.compile("[\u200b-\u200d\ufeff]")

WHITESPACE_PATTERN = re.compile(r"\s+")

URL_PATTERN = re.compile(
    r"(https?://\S+|(?:www\.)?[a-zA-Z0-9-]+\.[a-zA-Z]{2,}(?:/\S*)?)",
    re.IGNORECASE,
)

MENTION_PATTERN = re.compile(r"@(\w+)")

HASHTAG_PATTERN = re.compile(r"#(\w+)")


def normalize(text: str) -> NormalizedContent:
    """Normalize a message and extract its URLs, mentions and hashtags.

    Pure and deterministic. Running it again on ``normalized_text`` returns
    the same ``normalized_text``. Extraction always reads the text as given,
    so extracted values keep their original casing.

    Args:
        text: Raw message text (may be empty)

    Returns:
        NormalizedContent for the message
    """
    if text is None:
        text = ""

    return NormalizedContent(
        original_text=text,
        normalized_text=normalize_text(text),
        urls=extract_urls(text),
        mentions=extract_mentions(text),
        hashtags=extract_hashtags(text),
    )


def normalize_text(text: str) -> str:
    """Return only the canonical text of ``text``.

    Example:
        >>> normalize_text("  Hello\u200b   WORLD\\n")
        'hello world'
    """
    # Zero-width characters go first so they cannot block NFKC composition
    normalized = ZERO_WIDTH_PATTERN.sub("", text)
    normalized = unicodedata.normalize("NFKC", normalized).casefold()
    return WHITESPACE_PATTERN.sub(" ", normalized).strip()


def extract_urls(text: str) -> List[str]:
    """URL-like tokens in order of appearance, duplicates kept."""
    return [match.group(0) for match in URL_PATTERN.finditer(text)]


def extract_mentions(text: str) -> List[str]:
    """Handles that follow an '@', without the '@'."""
    return MENTION_PATTERN.findall(text)


def extract_hashtags(text: str) -> List[str]:
    """Tags that follow a '#', without the '#'."""
    return HASHTAG_PATTERN.findall(text)
