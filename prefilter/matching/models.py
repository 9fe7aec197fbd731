"""Data models for the keyword matcher."""

from dataclasses import dataclass


@dataclass(frozen=True)
class KeywordMatch:
    """One occurrence of a keyword in a searched text.

    Attributes:
        keyword: The matched text, case-folded
        start: Offset of the first matched character
        end: Offset just past the last matched character
    """

    keyword: str
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "KeywordMatch") -> bool:
        """True if both matches share at least one character position."""
        return self.start < other.end and other.start < self.end
