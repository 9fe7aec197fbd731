"""Message classification flow: cache, full evaluation, fast-path fallback."""

from .models import BatchResult, ClassificationResult
from .runner import ModerationPipeline

__all__ = [
    "ModerationPipeline",
    "ClassificationResult",
    "BatchResult",
]
