"""Weighted policy evaluation for normalized messages.

This module implements the scoring logic that:
1. Normalizes a message once per evaluation
2. Runs each rule's matcher over the normalized content
3. Sums the weights of matched rules
4. Maps the total to allow / review / block through fixed thresholds

Two modes exist. ``evaluate`` uses every registered rule. ``evaluate_fast_path``
uses only the deterministic reference rules with stricter thresholds, for when
a heavier secondary review is unavailable.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from prefilter.logging import get_logger
from prefilter.normalization import NormalizedContent, normalize

from .models import EvaluationMode, PolicyRule, PolicyVerdict, Score, Verdict

logger = get_logger(__name__, component="policy")


@dataclass(frozen=True)
class ScoreThresholds:
    """Minimum total scores for block and review."""

    block: Score
    review: Score

    def classify(self, total_score: Score) -> Verdict:
        if total_score >= self.block:
            return Verdict.BLOCK
        if total_score >= self.review:
            return Verdict.REVIEW
        return Verdict.ALLOW


FULL_THRESHOLDS = ScoreThresholds(block=80, review=50)

# Blocking without a secondary review needs more evidence
FAST_PATH_THRESHOLDS = ScoreThresholds(block=100, review=70)

FAST_PATH_RULE_IDS = frozenset({"profanity", "excessive_caps", "suspicious_urls"})


def format_score(score: Score) -> str:
    """Render a score without a trailing '.0' for whole numbers."""
    return f"{score:g}" if isinstance(score, float) else str(score)


def _full_reason(verdict: Verdict, total_score: Score) -> str:
    score = format_score(total_score)
    if verdict == Verdict.BLOCK:
        return f"High risk score: {score}"
    if verdict == Verdict.REVIEW:
        return f"Medium risk score: {score}, needs secondary review"
    return f"Low risk score: {score}"


def _fast_path_reason(verdict: Verdict, total_score: Score) -> str:
    score = format_score(total_score)
    if verdict == Verdict.BLOCK:
        return f"Fast-path block: High confidence rule violation (risk score: {score})"
    if verdict == Verdict.REVIEW:
        return f"Fast-path review: Potential violation needs secondary review (risk score: {score})"
    return f"Fast-path allow: No high-confidence violations (risk score: {score})"


class PolicyEngine:
    """Scores messages against an ordered collection of weighted rules.

    Responsibilities:
    - Own the rule collection (ordered, duplicates by id allowed)
    - Normalize each message exactly once per evaluation
    - Isolate failing matchers so one bad rule cannot abort a verdict
    - Produce deterministic verdicts for identical input and rules

    Evaluation only touches call-local state, so concurrent evaluations are
    safe as long as add_rule/remove_rule are not called at the same time.
    """

    def __init__(
        self,
        rules: Optional[Iterable[PolicyRule]] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize PolicyEngine.

        Args:
            rules: Optional initial rules, evaluated in the given order
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.logger = logger_instance or logger
        self._rules: List[PolicyRule] = list(rules or [])

    @property
    def rules(self) -> Tuple[PolicyRule, ...]:
        """Snapshot of the registered rules in evaluation order."""
        return tuple(self._rules)

    def add_rule(self, rule: PolicyRule) -> None:
        """Append a rule; an existing rule with the same id is kept."""
        self._rules.append(rule)
        self.logger.debug(
            f"Rule added: {rule.id}",
            extra={"event": "policy.rule.added", "rule_id": rule.id, "weight": rule.weight},
        )

    def remove_rule(self, rule_id: str) -> int:
        """Remove every rule with ``rule_id``.

        Returns:
            Number of rules removed
        """
        remaining = [rule for rule in self._rules if rule.id != rule_id]
        removed = len(self._rules) - len(remaining)
        self._rules = remaining

        self.logger.debug(
            f"Rule removed: {rule_id}",
            extra={"event": "policy.rule.removed", "rule_id": rule_id, "removed": removed},
        )
        return removed

    def evaluate(self, text: str) -> PolicyVerdict:
        """Evaluate ``text`` against every registered rule.

        Thresholds: total >= 80 blocks, >= 50 goes to review, else allow.

        Args:
            text: Raw message text

        Returns:
            PolicyVerdict with the matched rules and total score
        """
        return self._evaluate(
            normalize(text),
            self._rules,
            FULL_THRESHOLDS,
            _full_reason,
            EvaluationMode.FULL,
        )

    def evaluate_fast_path(self, text: str) -> PolicyVerdict:
        """Evaluate ``text`` with only the deterministic reference rules.

        Only rules whose id is profanity, excessive_caps or suspicious_urls
        take part, whatever else is registered. Thresholds are stricter:
        total >= 100 blocks, >= 70 goes to review, else allow.

        Args:
            text: Raw message text

        Returns:
            PolicyVerdict with a reason labelled as fast-path
        """
        fast_path_rules = [rule for rule in self._rules if rule.id in FAST_PATH_RULE_IDS]
        return self._evaluate(
            normalize(text),
            fast_path_rules,
            FAST_PATH_THRESHOLDS,
            _fast_path_reason,
            EvaluationMode.FAST_PATH,
        )

    def _evaluate(
        self,
        content: NormalizedContent,
        rules: Iterable[PolicyRule],
        thresholds: ScoreThresholds,
        reason_for,
        mode: EvaluationMode,
    ) -> PolicyVerdict:
        scores: Dict[str, Score] = {}
        rules_matched: List[str] = []
        total_score: Score = 0

        for rule in rules:
            if self._rule_matches(rule, content, mode):
                # Duplicate ids overwrite here but still add to the total
                scores[rule.id] = rule.weight
                rules_matched.append(rule.name)
                total_score += rule.weight

        verdict = thresholds.classify(total_score)

        self.logger.debug(
            f"Evaluation completed: {verdict.value}",
            extra={
                "event": "policy.evaluation.completed",
                "mode": mode.value,
                "verdict": verdict.value,
                "total_score": total_score,
                "rules_matched": rules_matched,
            },
        )

        return PolicyVerdict(
            verdict=verdict,
            reason=reason_for(verdict, total_score),
            scores=scores,
            rules_matched=rules_matched,
            total_score=total_score,
        )

    def _rule_matches(
        self, rule: PolicyRule, content: NormalizedContent, mode: EvaluationMode
    ) -> bool:
        """Run one matcher; a raising matcher counts as no match."""
        try:
            return bool(rule.matcher(content))
        except Exception as e:
            self.logger.warning(
                f"Rule matcher failed, skipping rule {rule.id}: {e}",
                extra={
                    "event": "policy.rule.failed",
                    "rule_id": rule.id,
                    "mode": mode.value,
                    "error_type": type(e).__name__,
                },
                exc_info=True,
            )
            return False
