"""Shared fixtures for the pre-filter test suite."""

import logging

import pytest

from prefilter.logging.context import clear_log_context
from prefilter.policy import PolicyEngine, default_rules

ENV_VARS = ("LOG_LEVEL", "LOG_FORMAT", "ENVIRONMENT", "PREFILTER_CONFIG")


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Unset every environment variable the service reads."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def restore_root_logger():
    """Undo configure_logging() changes to the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def engine():
    """PolicyEngine with the reference rule set."""
    return PolicyEngine(default_rules())
