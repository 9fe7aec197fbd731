"""Structured logging helpers shared by every pre-filter component."""

import logging
from typing import Optional


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that stamps a component name onto each record.

    Fields passed through ``extra`` at the call site win over the adapter's
    own fields, so a caller can still override ``component`` for one record.
    """

    def process(self, msg, kwargs):
        """Merge the adapter fields with the call's extra fields."""
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Return a module logger, wrapped to carry ``component`` when given.

    Args:
        name: Logger name (typically __name__)
        component: Optional component identifier to inject into all logs

    Returns:
        Logger or ComponentLoggerAdapter instance

    Example:
        >>> logger = get_logger(__name__, component="policy")
        >>> logger.info("Rule added", extra={"event": "policy.rule.added"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger
