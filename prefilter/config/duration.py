"""Duration parsing for cache TTL settings."""

import re

_ISO_PATTERN = re.compile(
    r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$"
)
_HUMAN_PART = re.compile(r"(\d+)\s*([smhd])")

UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


class DurationParseError(ValueError):
    """Raised when a duration string cannot be parsed."""


def parse_duration(duration_str: str) -> int:
    """
    Parse a duration string to whole seconds.

    Accepts human-readable values ("30s", "15m", "1h", "2d", "1h30m") and
    ISO-8601 durations ("PT15M", "PT1H", "P1D").

    Raises:
        DurationParseError: If the string is empty, malformed, or zero

    Examples:
        >>> parse_duration("1h")
        3600
        >>> parse_duration("PT15M")
        900
    """
    if not isinstance(duration_str, str):
        raise DurationParseError(f"Duration must be a string, got {type(duration_str).__name__}")

    value = duration_str.strip()
    if not value:
        raise DurationParseError("Duration string cannot be empty")

    if value.upper().startswith("P"):
        total = _parse_iso8601(value.upper())
    else:
        total = _parse_human_readable(value.lower())

    if total == 0:
        raise DurationParseError(f"Duration cannot be zero: '{duration_str}'")
    return total


def _parse_iso8601(value: str) -> int:
    match = _ISO_PATTERN.match(value)
    if not match or value in ("P", "PT"):
        raise DurationParseError(
            f"Invalid ISO-8601 duration: '{value}'. Expected e.g. 'P1D', 'PT1H30M', 'PT30S'"
        )

    days, hours, minutes, seconds = match.groups()
    return (
        int(days or 0) * UNIT_SECONDS["d"]
        + int(hours or 0) * UNIT_SECONDS["h"]
        + int(minutes or 0) * UNIT_SECONDS["m"]
        + int(float(seconds or 0))
    )


def _parse_human_readable(value: str) -> int:
    parts = _HUMAN_PART.findall(value)
    if not parts:
        raise DurationParseError(
            f"Invalid duration: '{value}'. Expected e.g. '30s', '15m', '1h', '2d' or '1h30m'"
        )

    # Reject leftovers such as "15x" or "1h-30m"
    if "".join(f"{num}{unit}" for num, unit in parts) != re.sub(r"\s+", "", value):
        raise DurationParseError(
            f"Invalid characters in duration: '{value}'. "
            "Use digits followed by s, m, h or d"
        )

    return sum(int(num) * UNIT_SECONDS[unit] for num, unit in parts)
