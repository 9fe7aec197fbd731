"""Data models for message classification results."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from prefilter.policy.models import EvaluationMode, PolicyVerdict, Verdict


@dataclass
class ClassificationResult:
    """
    Outcome of classifying one message.

    Attributes:
        verdict: PolicyVerdict returned by the engine or the cache
        mode: Evaluation mode that produced the verdict
        cache_hit: Whether the verdict came from the cache
        duration_seconds: Time spent classifying
        message_id: Host-supplied message identifier, if any
    """

    verdict: PolicyVerdict
    mode: EvaluationMode
    cache_hit: bool = False
    duration_seconds: float = 0.0
    message_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict form for logging and JSON output."""
        return {
            "message_id": self.message_id,
            "mode": self.mode.value,
            "cache_hit": self.cache_hit,
            "duration_ms": round(self.duration_seconds * 1000, 3),
            **self.verdict.to_dict(),
        }


@dataclass
class BatchResult:
    """
    Aggregate results from classifying a batch of messages.

    Attributes:
        started_at: UTC timestamp when the batch began
        finished_at: UTC timestamp when the batch completed
        results: Per-message results, in input order (failed messages omitted)
        failed_count: Messages whose classification raised
        verdict_counts: Number of results per verdict value
        cache_hits: Results served from the cache
        total_duration_seconds: Wall time for the whole batch
    """

    started_at: datetime
    finished_at: datetime
    results: List[ClassificationResult] = field(default_factory=list)
    failed_count: int = 0
    verdict_counts: Dict[str, int] = field(default_factory=dict)
    cache_hits: int = 0
    total_duration_seconds: float = 0.0

    def __post_init__(self):
        """Compute aggregates from the per-message results."""
        if not self.verdict_counts:
            self.verdict_counts = {verdict.value: 0 for verdict in Verdict}
            for result in self.results:
                self.verdict_counts[result.verdict.verdict.value] += 1

        if self.results and self.cache_hits == 0:
            self.cache_hits = sum(1 for result in self.results if result.cache_hit)

        if self.total_duration_seconds == 0.0:
            self.total_duration_seconds = (self.finished_at - self.started_at).total_seconds()

    @property
    def total_messages(self) -> int:
        return len(self.results) + self.failed_count

    @property
    def had_errors(self) -> bool:
        return self.failed_count > 0
