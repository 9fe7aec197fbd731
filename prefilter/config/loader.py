"""Configuration loader for the message pre-filter."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from .exceptions import ConfigurationError
from .models import AppConfig
from .validators import check_for_warnings, emit_warnings

DEFAULT_CONFIG_LOCATIONS = [
    Path("prefilter.yaml"),
    Path("config") / "prefilter.yaml",
]


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load and validate configuration from a YAML file.

    Lookup order:
    1. Use config_path if given (it must exist)
    2. Try prefilter.yaml in the current directory
    3. Try ./config/prefilter.yaml
    4. Fall back to the built-in defaults (reference rule set)

    Args:
        config_path: Optional path to configuration file

    Returns:
        Validated AppConfig

    Raises:
        ConfigurationError: If the file cannot be read, parsed or validated
    """
    config_file = _find_config_file(config_path)
    if config_file is None:
        return AppConfig()

    config_dict = _read_yaml(config_file)

    if not config_dict:
        raise ConfigurationError(
            f"Configuration file is empty: {config_file}",
            suggestions=[
                "Copy config.example.yaml to prefilter.yaml",
                "Delete the file to run with the built-in rule set",
            ],
        )

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Configuration file must contain a mapping at the top level: {config_file}",
            suggestions=["Review config.example.yaml for the expected layout"],
        )

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    try:
        return AppConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            "Configuration validation failed",
            errors=_format_validation_errors(e),
            suggestions=[
                "Review config.example.yaml for correct format",
                "Check that every rule has id, name, weight and type",
                "Verify field types match the expected schema",
            ],
        ) from e


def _read_yaml(config_file: Path) -> Any:
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[
                f"Ensure {config_file} is readable",
                "Check file permissions",
            ],
        ) from e


def _format_validation_errors(error: ValidationError) -> List[str]:
    """Turn pydantic errors into one readable line each."""
    messages = []
    for item in error.errors():
        field_path = " -> ".join(str(loc) for loc in item["loc"])
        error_type = item["type"]

        if error_type == "missing":
            messages.append(f"Missing required field: {field_path}")
        elif error_type in ("string_type", "int_type", "float_type", "bool_type", "list_type"):
            expected_type = error_type.replace("_type", "")
            messages.append(
                f"Invalid type for '{field_path}': expected {expected_type}, got {item.get('input')!r}"
            )
        elif "enum" in error_type:
            messages.append(f"Invalid value for '{field_path}': {item['msg']}")
        else:
            messages.append(f"{field_path}: {item['msg']}" if field_path else item["msg"])
    return messages


def _find_config_file(config_path: Optional[Path] = None) -> Optional[Path]:
    """
    Resolve the configuration file to load.

    Returns:
        Path to the file, or None when no explicit path was given and no
        default location exists

    Raises:
        ConfigurationError: If an explicit config_path does not exist
    """
    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Omit --config to run with the built-in rule set",
                ],
            )
        return config_path

    for candidate in DEFAULT_CONFIG_LOCATIONS:
        if candidate.exists():
            return candidate

    return None


def validate_config_file(config_path: Path) -> Dict[str, Any]:
    """
    Validate a configuration file and summarize it.

    Useful for pre-deployment checks of a rule set.

    Returns:
        Dict with ``valid`` and either ``rule_count``/``rule_ids`` or ``error``
    """
    try:
        config = load_config(Path(config_path))
    except ConfigurationError as e:
        return {"valid": False, "error": str(e)}

    return {
        "valid": True,
        "rule_count": len(config.rules),
        "rule_ids": [rule.id for rule in config.rules],
    }
