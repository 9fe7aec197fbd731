"""Configuration management module for the message pre-filter."""

from .duration import DurationParseError, parse_duration
from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError, PrefilterError, RuleDefinitionError
from .loader import load_config, validate_config_file
from .models import (
    AppConfig,
    CacheConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    RuleConfig,
    RuleType,
    default_rule_configs,
)

__all__ = [
    # Main loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    "parse_duration",
    # Configuration models
    "AppConfig",
    "RuleConfig",
    "CacheConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    "default_rule_configs",
    # Enums
    "RuleType",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "PrefilterError",
    "ConfigurationError",
    "RuleDefinitionError",
    "DurationParseError",
]
