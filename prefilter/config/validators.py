"""Non-fatal checks on raw configuration."""

import warnings
from collections import Counter
from typing import Any, Dict, List

# Keyword lists longer than this rebuild slowly on every mutation
LARGE_KEYWORD_LIST = 500


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Inspect a raw configuration dict for settings that are legal but suspicious.

    Args:
        config_dict: Configuration as parsed from YAML, before validation

    Returns:
        List of warning messages
    """
    warning_messages = []

    rules = config_dict.get("rules", [])
    if not isinstance(rules, list):
        return warning_messages

    rule_dicts = [rule for rule in rules if isinstance(rule, dict)]

    # Duplicate ids are evaluated independently but share one score-map entry
    id_counts = Counter(str(rule.get("id", "")).strip() for rule in rule_dicts)
    duplicates = sorted(rule_id for rule_id, count in id_counts.items() if rule_id and count > 1)
    if duplicates:
        warning_messages.append(
            f"Duplicate rule ids will each be evaluated, but only the last match "
            f"is kept in the scores map: {', '.join(duplicates)}"
        )

    for rule in rule_dicts:
        rule_id = rule.get("id", "Unknown")

        weight = rule.get("weight")
        if isinstance(weight, (int, float)) and weight == 0:
            warning_messages.append(f"Rule '{rule_id}' has weight 0 and can never affect a verdict")

        terms = rule.get("keywords", [])
        if isinstance(terms, list) and len(terms) > LARGE_KEYWORD_LIST:
            warning_messages.append(
                f"Rule '{rule_id}' lists {len(terms)} keywords, which may slow down matching"
            )

    if config_dict.get("rules") == []:
        warning_messages.append("No rules configured; every message will be allowed")

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit each message as a UserWarning."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
