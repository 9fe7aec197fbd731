"""Data models for policy evaluation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Union

from prefilter.normalization.models import NormalizedContent

Matcher = Callable[[NormalizedContent], bool]
Score = Union[int, float]


class Verdict(str, Enum):
    """Action the host should take for a message."""

    ALLOW = "allow"
    REVIEW = "review"
    BLOCK = "block"


class EvaluationMode(str, Enum):
    """Which rule set and thresholds produced a verdict."""

    FULL = "full"
    FAST_PATH = "fast_path"


@dataclass(frozen=True)
class PolicyRule:
    """A weighted detection rule.

    ``id``, ``name`` and ``weight`` are plain data; ``matcher`` carries the
    detection behavior and may be any callable taking NormalizedContent.

    Attributes:
        id: Stable identifier, used as the key in PolicyVerdict.scores
        name: Display name, listed in PolicyVerdict.rules_matched
        description: Human-readable description
        weight: Non-negative score added when the rule matches
        matcher: Predicate over NormalizedContent
    """

    id: str
    name: str
    description: str
    weight: Score
    matcher: Matcher = field(compare=False, repr=False)

    def __post_init__(self):
        if self.weight < 0:
            raise ValueError(f"Rule '{self.id}' has negative weight: {self.weight}")
        if not callable(self.matcher):
            raise TypeError(f"Rule '{self.id}' matcher must be callable")


@dataclass
class PolicyVerdict:
    """Outcome of evaluating one message.

    Attributes:
        verdict: allow, review or block
        reason: Explanation including the evaluation mode and total score
        scores: Weight per matched rule id (display aid; duplicate ids overwrite)
        rules_matched: Names of matched rules, in evaluation order
        total_score: Sum of the weights of every matched rule
    """

    verdict: Verdict
    reason: str
    scores: Dict[str, Score] = field(default_factory=dict)
    rules_matched: List[str] = field(default_factory=list)
    total_score: Score = 0

    @property
    def is_blocked(self) -> bool:
        return self.verdict == Verdict.BLOCK

    @property
    def needs_review(self) -> bool:
        return self.verdict == Verdict.REVIEW

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict form for logging and JSON output."""
        return {
            "verdict": self.verdict.value,
            "reason": self.reason,
            "scores": dict(self.scores),
            "rules_matched": list(self.rules_matched),
            "total_score": self.total_score,
        }
