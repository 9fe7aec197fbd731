"""Tests for logging context propagation."""

import threading

import pytest

from prefilter.logging.context import (
    clear_log_context,
    get_log_context,
    log_context,
    pop_log_context,
    push_log_context,
)


def test_empty_context():
    """Test that context starts empty."""
    assert get_log_context() == {}


def test_push_multiple_fields():
    """Test pushing multiple fields at once."""
    token = push_log_context(message_id="42", chat_id="-1001", mode="full")
    assert get_log_context() == {"message_id": "42", "chat_id": "-1001", "mode": "full"}
    pop_log_context(token)
    assert get_log_context() == {}


def test_nested_context():
    """Test nested context pushes and pops."""
    token1 = push_log_context(chat_id="-1001")
    token2 = push_log_context(message_id="42")
    assert get_log_context() == {"chat_id": "-1001", "message_id": "42"}

    pop_log_context(token2)
    assert get_log_context() == {"chat_id": "-1001"}

    pop_log_context(token1)
    assert get_log_context() == {}


def test_context_override():
    """Test that pushing the same key overwrites previous value."""
    token1 = push_log_context(mode="full")
    token2 = push_log_context(mode="fast_path")
    assert get_log_context() == {"mode": "fast_path"}

    pop_log_context(token2)
    assert get_log_context() == {"mode": "full"}
    pop_log_context(token1)


def test_get_returns_copy():
    """Test that mutating the returned dict does not leak into the context."""
    with log_context(message_id="42"):
        snapshot = get_log_context()
        snapshot["message_id"] = "changed"
        assert get_log_context() == {"message_id": "42"}


def test_context_manager_nested():
    """Test nested context managers."""
    with log_context(chat_id="-1001"):
        with log_context(message_id="42"):
            assert get_log_context() == {"chat_id": "-1001", "message_id": "42"}
        assert get_log_context() == {"chat_id": "-1001"}

    assert get_log_context() == {}


def test_context_manager_exception():
    """Test that context is restored even when exception occurs."""
    with pytest.raises(ValueError):
        with log_context(message_id="42"):
            raise ValueError("Test exception")

    assert get_log_context() == {}


def test_clear_log_context():
    push_log_context(message_id="42")
    clear_log_context()
    assert get_log_context() == {}


def test_threads_do_not_share_context():
    """Test that a context pushed in one thread is invisible in another."""
    seen = {}

    def worker():
        seen["worker"] = get_log_context()

    with log_context(message_id="main-thread"):
        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()

    assert seen["worker"] == {}
