"""Multi-keyword matcher used by keyword-based policy rules.

Each keyword is compiled into its own case-insensitive regular expression.
Word boundaries are only required on the sides of a keyword that are word
characters, so "spam" does not match inside "spamming" while "$pecial" or
"!!!" still match wherever they occur.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional, Pattern, Tuple

from prefilter.logging import get_logger

from .models import KeywordMatch

logger = get_logger(__name__, component="matching")

_STARTS_WITH_WORD = re.compile(r"\A\w")
_ENDS_WITH_WORD = re.compile(r"\w\Z")


def compile_keyword(keyword: str) -> Pattern[str]:
    """Compile one keyword into a search pattern.

    Args:
        keyword: Keyword exactly as stored

    Returns:
        Case-insensitive pattern with word boundaries on word-character edges

    Example:
        >>> compile_keyword("spam").pattern
        '\\\\bspam\\\\b'
    """
    pattern = re.escape(keyword)

    if _STARTS_WITH_WORD.search(keyword):
        pattern = rf"\b{pattern}"
    if _ENDS_WITH_WORD.search(keyword):
        pattern = rf"{pattern}\b"

    return re.compile(pattern, re.IGNORECASE)


class KeywordMatcher:
    """Finds every occurrence of a set of keywords in a text.

    Responsibilities:
    - Hold the keyword set (stored verbatim, duplicates collapse)
    - Rebuild compiled patterns synchronously on every mutation
    - Report all per-keyword occurrences, sorted by start offset
    - Answer "does anything match" without building the full list

    Matches of different keywords may overlap or coincide; they are all
    reported. Mutations are not synchronized with searches, so callers
    sharing one instance across threads must serialize changes themselves.
    """

    def __init__(
        self,
        keywords: Optional[Iterable[str]] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize KeywordMatcher.

        Args:
            keywords: Optional initial keywords
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.logger = logger_instance or logger
        # dict as an insertion-ordered set keeps result order reproducible
        self._keywords: Dict[str, None] = {}
        self._patterns: List[Tuple[str, Pattern[str]]] = []

        if keywords is not None:
            self.add_keywords(keywords)

    @property
    def keywords(self) -> Tuple[str, ...]:
        """Stored keywords, in insertion order."""
        return tuple(self._keywords)

    def __len__(self) -> int:
        return len(self._keywords)

    def __contains__(self, keyword: object) -> bool:
        return keyword in self._keywords

    def add_keyword(self, keyword: str) -> None:
        """Add a single keyword and rebuild patterns."""
        self._keywords[keyword] = None
        self._rebuild_patterns()

    def add_keywords(self, keywords: Iterable[str]) -> None:
        """Add several keywords and rebuild patterns once."""
        for keyword in keywords:
            self._keywords[keyword] = None
        self._rebuild_patterns()

    def remove_keyword(self, keyword: str) -> None:
        """Remove a keyword if present and rebuild patterns."""
        self._keywords.pop(keyword, None)
        self._rebuild_patterns()

    def _rebuild_patterns(self) -> None:
        # Build a new list and swap it in; readers never see a partial list
        self._patterns = [(keyword, compile_keyword(keyword)) for keyword in self._keywords]

        self.logger.debug(
            "Rebuilt matcher patterns",
            extra={
                "event": "matching.patterns.rebuilt",
                "pattern_count": len(self._patterns),
            },
        )

    def find_matches(self, text: str) -> List[KeywordMatch]:
        """Find every occurrence of every keyword in ``text``.

        Occurrences of a single keyword never overlap each other; occurrences
        of different keywords may. Empty matches are possible only for an
        empty keyword and still terminate, since finditer steps past them.

        Args:
            text: Text to search

        Returns:
            KeywordMatch list sorted by start offset (ties keep keyword order)
        """
        matches: List[KeywordMatch] = []

        for _, pattern in self._patterns:
            for match in pattern.finditer(text):
                matches.append(
                    KeywordMatch(
                        keyword=match.group(0).casefold(),
                        start=match.start(),
                        end=match.end(),
                    )
                )

        matches.sort(key=lambda m: m.start)
        return matches

    def has_match(self, text: str) -> bool:
        """Return True as soon as any keyword is found in ``text``."""
        return any(pattern.search(text) for _, pattern in self._patterns)

    def matched_keywords(self, text: str) -> List[str]:
        """Stored keywords (verbatim) that occur at least once in ``text``."""
        return [keyword for keyword, pattern in self._patterns if pattern.search(text)]
