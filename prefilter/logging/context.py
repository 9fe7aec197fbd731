"""Scoped logging context for per-message metadata.

Fields pushed here (``message_id``, ``chat_id``, ``mode`` ...) are merged into
every log record emitted while they are active. Storage is a ContextVar, so
concurrent threads and asyncio tasks each see their own context.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional


LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("prefilter_log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields active in the current context."""
    return LogContextVar.get().copy()


def push_log_context(**fields: Any) -> Token:
    """Layer ``fields`` over the active context.

    Returns:
        Token for pop_log_context() to restore the previous layer

    Example:
        >>> token = push_log_context(message_id="42", chat_id="-1001")
        >>> pop_log_context(token)
    """
    return LogContextVar.set({**LogContextVar.get(), **fields})


def pop_log_context(token: Token) -> None:
    """Restore the layer that was active before the matching push."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop every context field. Mostly used by tests."""
    LogContextVar.set({})


class log_context:
    """Context manager pairing push_log_context() with pop_log_context().

    Example:
        >>> with log_context(message_id="42"):
        ...     logger.info("Message classified")  # carries message_id
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False
