"""Rule matchers and the factory that builds rules from configuration.

Every matcher here implements RuleMatcher, a callable over NormalizedContent.
New detection strategies are added by subclassing RuleMatcher (or passing
any plain callable to PolicyRule); the engine never needs to change.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from prefilter.config.exceptions import RuleDefinitionError
from prefilter.config.models import RuleConfig, RuleType, default_rule_configs
from prefilter.matching import KeywordMatcher
from prefilter.normalization.models import NormalizedContent

from .models import PolicyRule


class RuleMatcher(ABC):
    """Detection behavior of a PolicyRule.

    Implementations must be pure and should not raise; the engine treats a
    raising matcher as "did not match".
    """

    @abstractmethod
    def matches(self, content: NormalizedContent) -> bool:
        """Return True if ``content`` triggers the rule."""

    def __call__(self, content: NormalizedContent) -> bool:
        return self.matches(content)


class KeywordRuleMatcher(RuleMatcher):
    """Matches when any keyword occurs in the normalized text.

    Word-shaped keywords only match whole words, case-insensitively.
    """

    def __init__(self, keywords: Iterable[str]):
        self.keyword_matcher = KeywordMatcher(keywords)

    def matches(self, content: NormalizedContent) -> bool:
        return self.keyword_matcher.has_match(content.normalized_text)

    def count_matches(self, content: NormalizedContent) -> int:
        """Number of keyword occurrences in the normalized text."""
        return len(self.keyword_matcher.find_matches(content.normalized_text))

    def __repr__(self) -> str:
        return f"KeywordRuleMatcher(keywords={list(self.keyword_matcher.keywords)!r})"


class ExcessiveCapsMatcher(RuleMatcher):
    """Matches shouting: mostly-uppercase messages above a minimum length.

    The ratio is ASCII capitals (A-Z) over the full length of the original
    text, spaces and punctuation included. Capitals from other scripts
    count like any other non-capital character.
    """

    def __init__(self, min_length: int = 10, caps_ratio: float = 0.7):
        self.min_length = min_length
        self.caps_ratio = caps_ratio

    @staticmethod
    def uppercase_ratio(text: str) -> float:
        if not text:
            return 0.0
        return sum(1 for ch in text if "A" <= ch <= "Z") / len(text)

    def matches(self, content: NormalizedContent) -> bool:
        text = content.original_text
        return len(text) > self.min_length and self.uppercase_ratio(text) > self.caps_ratio

    def __repr__(self) -> str:
        return f"ExcessiveCapsMatcher(min_length={self.min_length}, caps_ratio={self.caps_ratio})"


class SuspiciousUrlMatcher(RuleMatcher):
    """Matches when an extracted URL contains a listed domain fragment."""

    def __init__(self, domains: Iterable[str]):
        self.domains = [domain.lower() for domain in domains]

    def matches(self, content: NormalizedContent) -> bool:
        return any(
            domain in url.lower() for url in content.urls for domain in self.domains
        )

    def __repr__(self) -> str:
        return f"SuspiciousUrlMatcher(domains={self.domains!r})"


def build_matcher(rule_config: RuleConfig) -> RuleMatcher:
    """Instantiate the matcher for a rule definition.

    Raises:
        RuleDefinitionError: If the rule type has no matcher
    """
    try:
        rule_type = RuleType(rule_config.type)
    except ValueError as e:
        raise RuleDefinitionError(
            rule_config.id,
            f"unsupported rule type: {rule_config.type}",
            suggestions=[f"Use one of: {', '.join(t.value for t in RuleType)}"],
        ) from e

    if rule_type == RuleType.KEYWORD:
        return KeywordRuleMatcher(rule_config.keywords)
    if rule_type == RuleType.EXCESSIVE_CAPS:
        return ExcessiveCapsMatcher(
            min_length=rule_config.min_length, caps_ratio=rule_config.caps_ratio
        )
    return SuspiciousUrlMatcher(rule_config.domains)


def build_rule(rule_config: RuleConfig) -> PolicyRule:
    """Turn a validated RuleConfig into a PolicyRule."""
    return PolicyRule(
        id=rule_config.id,
        name=rule_config.name,
        description=rule_config.description,
        weight=rule_config.weight,
        matcher=build_matcher(rule_config),
    )


def build_rules(rule_configs: Optional[Iterable[RuleConfig]] = None) -> List[PolicyRule]:
    """Build rules in configuration order; None means the reference set."""
    if rule_configs is None:
        rule_configs = default_rule_configs()
    return [build_rule(rule_config) for rule_config in rule_configs]


def default_rules() -> List[PolicyRule]:
    """Fresh copies of the reference rules (profanity, excessive_caps, suspicious_urls)."""
    return build_rules(default_rule_configs())
