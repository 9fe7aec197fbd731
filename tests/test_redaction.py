"""Tests for log field redaction."""

import logging

import pytest

from prefilter.logging.redaction import (
    REDACTED_MARKER,
    RedactionFilter,
    is_sensitive_key,
    redact_sensitive,
)


class TestIsSensitiveKey:
    """Test key-name matching."""

    @pytest.mark.parametrize(
        "key",
        ["password", "API_KEY", "access_token", "clientSecret", "Authorization", "keyring"],
    )
    def test_sensitive(self, key):
        assert is_sensitive_key(key)

    @pytest.mark.parametrize("key", ["message_id", "verdict", "total_score", "chat_id"])
    def test_not_sensitive(self, key):
        assert not is_sensitive_key(key)

    def test_non_string_keys(self):
        assert not is_sensitive_key(42)
        assert not is_sensitive_key(None)


class TestRedactSensitive:
    """Test recursive redaction of values."""

    def test_nested_structures(self):
        """Test that dicts inside lists and tuples are redacted."""
        value = {
            "user": "alice",
            "auth": {"api_key": "xyz", "scopes": ["read"]},
            "items": [{"password": "p"}, "plain"],
            "pair": ({"secret": "s"}, 1),
        }

        assert redact_sensitive(value) == {
            "user": "alice",
            "auth": {"api_key": REDACTED_MARKER, "scopes": ["read"]},
            "items": [{"password": REDACTED_MARKER}, "plain"],
            "pair": ({"secret": REDACTED_MARKER}, 1),
        }

    def test_whole_value_replaced(self):
        """Test that a sensitive key hides nested content entirely."""
        assert redact_sensitive({"token": {"a": 1}}) == {"token": REDACTED_MARKER}

    def test_input_not_modified(self):
        value = {"password": "p"}
        redact_sensitive(value)
        assert value == {"password": "p"}

    def test_scalars_pass_through(self):
        assert redact_sensitive("password") == "password"
        assert redact_sensitive(7) == 7


class TestRedactionFilter:
    """Test the logging filter."""

    def make_record(self, **extra):
        return logging.getLogger("test").makeRecord(
            "test", logging.INFO, "test.py", 1, "msg", (), None, extra=extra
        )

    def test_redacts_sensitive_extras(self):
        record = self.make_record(bot_token="123:abc", message_id="42")

        assert RedactionFilter().filter(record) is True
        assert record.bot_token == REDACTED_MARKER
        assert record.message_id == "42"

    def test_redacts_nested_extras(self):
        record = self.make_record(verdict={"verdict": "block", "auth": {"password": "p"}})
        RedactionFilter().filter(record)
        assert record.verdict == {"verdict": "block", "auth": {"password": REDACTED_MARKER}}

    def test_standard_attributes_untouched(self):
        """Test that message and args are never rewritten."""
        record = self.make_record()
        RedactionFilter().filter(record)
        assert record.msg == "msg"
        assert record.levelname == "INFO"
