"""Keyword matching for rule authors.

This module provides:
- KeywordMatcher: compiles a keyword set and finds all occurrences in text
- KeywordMatch: one occurrence with its half-open offset range
- compile_keyword: the per-keyword pattern compiler
"""

from .engine import KeywordMatcher, compile_keyword
from .models import KeywordMatch

__all__ = [
    "KeywordMatcher",
    "KeywordMatch",
    "compile_keyword",
]
