"""Weighted policy evaluation.

This module provides:
- PolicyRule: id/name/weight data plus a matcher callable
- PolicyVerdict: verdict, reason, per-rule scores and matched rule names
- PolicyEngine: full and fast-path evaluation of raw message text
- Rule matchers and builders for the reference rule set
"""

from .engine import (
    FAST_PATH_RULE_IDS,
    FAST_PATH_THRESHOLDS,
    FULL_THRESHOLDS,
    PolicyEngine,
    ScoreThresholds,
)
from .models import EvaluationMode, PolicyRule, PolicyVerdict, Verdict
from .rules import (
    ExcessiveCapsMatcher,
    KeywordRuleMatcher,
    RuleMatcher,
    SuspiciousUrlMatcher,
    build_matcher,
    build_rule,
    build_rules,
    default_rules,
)

__all__ = [
    "PolicyEngine",
    "PolicyRule",
    "PolicyVerdict",
    "Verdict",
    "EvaluationMode",
    "ScoreThresholds",
    "FULL_THRESHOLDS",
    "FAST_PATH_THRESHOLDS",
    "FAST_PATH_RULE_IDS",
    "RuleMatcher",
    "KeywordRuleMatcher",
    "ExcessiveCapsMatcher",
    "SuspiciousUrlMatcher",
    "build_matcher",
    "build_rule",
    "build_rules",
    "default_rules",
]
