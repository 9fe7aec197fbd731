"""Unit tests for the main entry point.

Tests the main() function including:
- Classifying positional text and stdin lines
- Configuration loading with priority (CLI > env > config)
- Fast-path mode selection
- Exit code handling
"""

import io
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from prefilter.config.models import AppConfig
from prefilter.main import build_pipeline, load_runtime_config, main

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch, restore_root_logger):
    """Run from an empty directory so no default config file is found."""
    monkeypatch.chdir(tmp_path)


def output_lines(capsys):
    return [json.loads(line) for line in capsys.readouterr().out.splitlines()]


class TestLoadRuntimeConfig:
    """Test suite for load_runtime_config helper."""

    def test_file_settings_used_by_default(self):
        """Test that the config file provides log settings when nothing overrides them."""
        app_config, env_config = load_runtime_config(FIXTURES_DIR / "valid_config.yaml", None)

        assert len(app_config.rules) == 4
        assert env_config.log_level == "DEBUG"
        assert env_config.log_format == "json"

    def test_log_level_priority(self, monkeypatch):
        """Test log level priority: CLI > env > config."""
        config_path = FIXTURES_DIR / "valid_config.yaml"

        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        _, env_config = load_runtime_config(config_path, None)
        assert env_config.log_level == "WARNING"

        _, env_config = load_runtime_config(config_path, "ERROR")
        assert env_config.log_level == "ERROR"

    def test_env_config_path(self, monkeypatch):
        """Test that PREFILTER_CONFIG is used when --config is absent."""
        monkeypatch.setenv("PREFILTER_CONFIG", str(FIXTURES_DIR / "valid_config.yaml"))
        app_config, _ = load_runtime_config(None, None)
        assert app_config.get_rule("crypto_pitch") is not None

    def test_defaults_without_file(self):
        app_config, env_config = load_runtime_config(None, None)
        assert len(app_config.rules) == 3
        assert env_config.log_level == "INFO"
        assert env_config.log_format == "key-value"


class TestBuildPipeline:
    """Test suite for pipeline wiring."""

    def test_full_mode_with_cache(self):
        pipeline = build_pipeline(AppConfig())
        assert pipeline.cache is not None
        assert pipeline.cache.ttl_seconds == 3600
        assert pipeline.review_available() is True
        assert [rule.id for rule in pipeline.engine.rules] == [
            "profanity",
            "excessive_caps",
            "suspicious_urls",
        ]

    def test_fast_path_without_cache(self):
        pipeline = build_pipeline(AppConfig(), fast_path=True)
        assert pipeline.cache is None
        assert pipeline.review_available() is False

    def test_cache_disabled(self):
        pipeline = build_pipeline(AppConfig(cache={"enabled": False}))
        assert pipeline.cache is None


class TestMain:
    """Test suite for main() execution."""

    def test_classifies_positional_text(self, capsys):
        """Test that positional words are joined into one message."""
        exit_code = main(["This", "is", "a", "SCAM", "alert!!!"])

        assert exit_code == 0
        (result,) = output_lines(capsys)
        assert result["verdict"] == "block"
        assert result["mode"] == "full"
        assert result["total_score"] == 80
        assert result["reason"] == "High risk score: 80"

    def test_fast_path_flag(self, capsys):
        exit_code = main(["--fast-path", "This is a SCAM alert!!!"])

        assert exit_code == 0
        (result,) = output_lines(capsys)
        assert result["verdict"] == "review"
        assert result["mode"] == "fast_path"

    def test_reads_stdin_lines(self, capsys, monkeypatch):
        """Test that blank stdin lines are skipped."""
        monkeypatch.setattr("sys.stdin", io.StringIO("hello\n\nHELLO WORLD THIS IS ALL CAPS\n"))

        exit_code = main([])

        assert exit_code == 0
        results = output_lines(capsys)
        assert [r["message_id"] for r in results] == ["0", "1"]
        assert [r["verdict"] for r in results] == ["allow", "allow"]
        assert results[1]["scores"] == {"excessive_caps": 30}

    def test_repeated_stdin_message_hits_cache(self, capsys, monkeypatch):
        """Test that only an exact repeat is served from the cache."""
        monkeypatch.setattr("sys.stdin", io.StringIO("fake news\nFAKE   news\nfake news\n"))

        main([])

        results = output_lines(capsys)
        assert [r["cache_hit"] for r in results] == [False, False, True]

    def test_custom_config(self, capsys):
        """Test that configured rules are applied."""
        exit_code = main(
            [
                "--config",
                str(FIXTURES_DIR / "valid_config.yaml"),
                "guaranteed returns via http://t.co/x",
            ]
        )

        assert exit_code == 0
        (result,) = output_lines(capsys)
        assert result["scores"] == {"suspicious_urls": 60, "crypto_pitch": 45}
        assert result["verdict"] == "block"

    def test_logs_go_to_stderr(self, capsys):
        main(["--log-level", "INFO", "hello"])

        captured = capsys.readouterr()
        assert "service.starting" in captured.err
        assert "service.starting" not in captured.out

    def test_missing_config_file(self, capsys):
        exit_code = main(["--config", "missing.yaml", "hello"])

        assert exit_code == 1
        assert "Configuration Error" in capsys.readouterr().err

    def test_invalid_environment(self, capsys, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "xml")

        assert main(["hello"]) == 1
        assert "Invalid LOG_FORMAT" in capsys.readouterr().err

    def test_keyboard_interrupt(self, capsys):
        with patch("prefilter.main.build_pipeline", side_effect=KeyboardInterrupt):
            exit_code = main(["hello"])

        assert exit_code == 130
        assert "Interrupted" in capsys.readouterr().err

    def test_batch_errors_exit_non_zero(self, capsys):
        with patch("prefilter.pipeline.runner.ModerationPipeline.classify", side_effect=RuntimeError("boom")):
            exit_code = main(["hello"])

        assert exit_code == 1
        assert capsys.readouterr().out == ""
