"""Key-name based redaction for structured log fields.

Any mapping key whose lowercased name contains one of SENSITIVE_KEY_PARTS has
its value replaced with REDACTED_MARKER, at any nesting depth. Values are never
inspected, only key names.
"""

import logging
from typing import Any, Iterable

REDACTED_MARKER = "[REDACTED]"

SENSITIVE_KEY_PARTS = ("password", "token", "secret", "key", "authorization")

# LogRecord attributes set by the logging module itself
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def is_sensitive_key(key: Any, parts: Iterable[str] = SENSITIVE_KEY_PARTS) -> bool:
    """Return True if ``key`` names a field that must not be logged."""
    if not isinstance(key, str):
        return False
    lowered = key.lower()
    return any(part in lowered for part in parts)


def redact_sensitive(value: Any) -> Any:
    """Return a copy of ``value`` with sensitive mapping keys redacted.

    Dicts, lists and tuples are walked recursively; everything else is
    returned as-is. The input is not modified.

    Example:
        >>> redact_sensitive({"user": "a", "auth": {"api_key": "xyz"}})
        {'user': 'a', 'auth': {'api_key': '[REDACTED]'}}
    """
    if isinstance(value, dict):
        return {
            k: REDACTED_MARKER if is_sensitive_key(k) else redact_sensitive(v)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [redact_sensitive(item) for item in value]
    if isinstance(value, tuple):
        return tuple(redact_sensitive(item) for item in value)
    return value


class RedactionFilter(logging.Filter):
    """Logging filter that redacts the ``extra`` fields of every record.

    Only attributes added on top of a plain LogRecord are touched, so the
    message, level and source location stay intact.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for attr, value in list(record.__dict__.items()):
            if attr in _RECORD_ATTRS or attr.startswith("_"):
                continue
            if is_sensitive_key(attr):
                setattr(record, attr, REDACTED_MARKER)
            elif isinstance(value, (dict, list, tuple)):
                setattr(record, attr, redact_sensitive(value))
        return True
