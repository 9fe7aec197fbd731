"""Command-line entry point for the message pre-filter."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from prefilter.cache import VerdictCache
from prefilter.config.environment import EnvironmentConfig, load_environment_config
from prefilter.config.exceptions import ConfigurationError
from prefilter.config.loader import load_config
from prefilter.config.models import AppConfig
from prefilter.logging import get_logger
from prefilter.logging.config import configure_logging
from prefilter.pipeline import ModerationPipeline
from prefilter.policy import PolicyEngine, build_rules

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log settings.

    Precedence for the config file: --config, then PREFILTER_CONFIG, then the
    default locations. Precedence for log level: CLI > environment > file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    env_config = load_environment_config()
    app_config = load_config(config_path or env_config.config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    if not env_config.log_format:
        env_config.log_format = app_config.logging.format

    return app_config, env_config


def build_pipeline(app_config: AppConfig, fast_path: bool = False) -> ModerationPipeline:
    """Wire engine, cache and pipeline from configuration."""
    engine = PolicyEngine(build_rules(app_config.rules))

    cache = None
    if app_config.cache.enabled and not fast_path:
        cache = VerdictCache(
            ttl_seconds=app_config.cache.ttl_seconds,
            max_entries=app_config.cache.max_entries,
        )

    return ModerationPipeline(
        engine=engine,
        cache=cache,
        review_available=lambda: not fast_path,
    )


def _iter_messages(texts: List[str], stdin) -> Iterable[str]:
    if texts:
        yield " ".join(texts)
        return
    for line in stdin:
        line = line.rstrip("\n")
        if line.strip():
            yield line


def main(argv: Optional[List[str]] = None) -> int:
    """
    Classify messages given as arguments or one per stdin line.

    Prints one JSON object per message on stdout.

    Returns:
        Exit code (0 for success, 1 for configuration or fatal errors)
    """
    parser = argparse.ArgumentParser(
        description="Message pre-filter - classify messages as allow, review or block"
    )
    parser.add_argument(
        "text",
        nargs="*",
        help="Message text to classify (reads one message per stdin line if omitted)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to rule configuration file (default: prefilter.yaml if present)",
    )
    parser.add_argument(
        "--fast-path",
        action="store_true",
        help="Use only the deterministic fast-path rules and thresholds",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )

    args = parser.parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        configure_logging(
            level=env_config.log_level,
            format_type=env_config.log_format,
            environment=env_config.environment,
            stream=sys.stderr,
        )

        logger.info(
            "Message pre-filter starting",
            extra={
                "event": "service.starting",
                "rule_count": len(app_config.rules),
                "fast_path": args.fast_path,
                "cache_enabled": app_config.cache.enabled,
            },
        )

        pipeline = build_pipeline(app_config, fast_path=args.fast_path)
        batch = pipeline.classify_batch(_iter_messages(args.text, sys.stdin))

        for result in batch.results:
            print(json.dumps(result.to_dict(), ensure_ascii=False))

        return 1 if batch.had_errors else 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
