"""Per-message classification flow for moderation hosts."""

import logging
import time
from typing import Callable, Iterable, List, Optional, Tuple, Union

from prefilter.cache import VerdictCache
from prefilter.logging import get_logger
from prefilter.logging.context import log_context
from prefilter.policy.engine import PolicyEngine
from prefilter.policy.models import EvaluationMode
from prefilter.utils.timestamps import utc_now

from .models import BatchResult, ClassificationResult

logger = get_logger(__name__, component="pipeline")

MessageInput = Union[str, Tuple[str, str]]


def _always_available() -> bool:
    return True


class ModerationPipeline:
    """
    Classifies messages with caching and a fast-path fallback.

    For each message the pipeline:
    1. Returns a cached verdict if the same content was evaluated recently
    2. Otherwise runs the full evaluation when secondary review is available
    3. Falls back to the fast path when it is not (e.g. budget exhausted)
    4. Caches full-mode verdicts only; fast-path verdicts are provisional
    """

    def __init__(
        self,
        engine: PolicyEngine,
        cache: Optional[VerdictCache] = None,
        review_available: Callable[[], bool] = _always_available,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """
        Initialize the moderation pipeline.

        Args:
            engine: PolicyEngine holding the active rules
            cache: Optional VerdictCache shared across calls
            review_available: Callable telling whether secondary review can
                currently take messages; False selects the fast path
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.engine = engine
        self.cache = cache
        self.review_available = review_available
        self.logger = logger_instance or logger

    def _select_mode(self) -> EvaluationMode:
        try:
            available = self.review_available()
        except Exception as e:
            self.logger.warning(
                f"Review availability check failed, using fast path: {e}",
                extra={"event": "pipeline.review_check.failed", "error_type": type(e).__name__},
                exc_info=True,
            )
            available = False
        return EvaluationMode.FULL if available else EvaluationMode.FAST_PATH

    def classify(self, text: str, message_id: Optional[str] = None) -> ClassificationResult:
        """
        Classify a single message.

        Args:
            text: Raw message text
            message_id: Optional host identifier, added to the log context

        Returns:
            ClassificationResult with the verdict and how it was obtained
        """
        started = time.perf_counter()

        with log_context(message_id=message_id):
            cached = self.cache.get(text) if self.cache is not None else None

            if cached is not None:
                result = ClassificationResult(
                    verdict=cached,
                    mode=EvaluationMode.FULL,
                    cache_hit=True,
                    message_id=message_id,
                )
            else:
                mode = self._select_mode()
                if mode == EvaluationMode.FULL:
                    verdict = self.engine.evaluate(text)
                    if self.cache is not None:
                        self.cache.set(text, verdict)
                else:
                    verdict = self.engine.evaluate_fast_path(text)

                result = ClassificationResult(verdict=verdict, mode=mode, message_id=message_id)

            result.duration_seconds = time.perf_counter() - started

            self.logger.info(
                f"Message classified: {result.verdict.verdict.value}",
                extra={
                    "event": "pipeline.message.classified",
                    "mode": result.mode.value,
                    "cache_hit": result.cache_hit,
                    "duration_ms": round(result.duration_seconds * 1000, 3),
                    "verdict": result.verdict.to_dict(),
                },
            )

        return result

    def classify_batch(self, messages: Iterable[MessageInput]) -> BatchResult:
        """
        Classify several messages, continuing past failures.

        Args:
            messages: Raw texts, or (message_id, text) pairs

        Returns:
            BatchResult with per-message results and aggregate counts
        """
        started_at = utc_now()
        results: List[ClassificationResult] = []
        failed_count = 0

        for index, message in enumerate(messages):
            if isinstance(message, tuple):
                message_id, text = message
            else:
                message_id, text = str(index), message

            try:
                results.append(self.classify(text, message_id=message_id))
            except Exception as e:
                failed_count += 1
                self.logger.error(
                    f"Error classifying message {message_id}: {e}",
                    extra={
                        "event": "pipeline.message.failed",
                        "message_id": message_id,
                        "error_type": type(e).__name__,
                    },
                    exc_info=True,
                )
                continue

        batch = BatchResult(
            started_at=started_at,
            finished_at=utc_now(),
            results=results,
            failed_count=failed_count,
        )

        self.logger.info(
            "Batch classified",
            extra={
                "event": "pipeline.batch.completed",
                "total_messages": batch.total_messages,
                "failed_count": batch.failed_count,
                "cache_hits": batch.cache_hits,
                "verdict_counts": batch.verdict_counts,
                "duration_ms": int(batch.total_duration_seconds * 1000),
            },
        )
        return batch
