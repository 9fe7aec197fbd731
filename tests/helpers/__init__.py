"""Test helper utilities for the pre-filter tests."""

from .rules import make_rule, raising_rule

__all__ = ["make_rule", "raising_rule"]
