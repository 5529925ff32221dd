"""
Helper Utilities.

Provides parsing of flat option values (integers, booleans, durations) and
utility functions for prefixed dict manipulation.
"""

import re
from typing import Any, Mapping

# Duration unit suffix -> milliseconds multiplier
_DURATION_UNITS_MS = {
    "ms": 1,
    "milli": 1,
    "millis": 1,
    "millisecond": 1,
    "milliseconds": 1,
    "s": 1000,
    "sec": 1000,
    "secs": 1000,
    "second": 1000,
    "seconds": 1000,
    "min": 60 * 1000,
    "mins": 60 * 1000,
    "minute": 60 * 1000,
    "minutes": 60 * 1000,
    "h": 60 * 60 * 1000,
    "hour": 60 * 60 * 1000,
    "hours": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
    "day": 24 * 60 * 60 * 1000,
    "days": 24 * 60 * 60 * 1000,
}

_INT_PATTERN = re.compile(r"^\s*(-?[0-9]+)\s*$")

_DURATION_PATTERN = re.compile(r"^\s*(-?[0-9]+)\s*([a-zA-Z]*)\s*$")


def parse_int(value: Any) -> int:
    """
    Converts an option value into an integer.

    Accepts `int` values and plain decimal strings made of ASCII digits with an
    optional leading minus (surrounding whitespace allowed). Signs like "+5",
    digit separators like "1_000" and non-ASCII digits are rejected.
    Booleans are rejected even though they are `int` subclasses.

    Raises:
        ValueError: If the value is not an integer representation.
    """
    if isinstance(value, bool):
        raise ValueError(f"Expected an integer, got boolean {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        match = _INT_PATTERN.match(value)
        if match is None:
            raise ValueError(f"Expected a decimal integer, got {value!r}")
        return int(match.group(1))
    raise ValueError(f"Expected an integer, got {type(value).__name__} {value!r}")


def parse_bool(value: Any) -> bool:
    """
    Converts an option value into a boolean.

    Accepts `bool` values and the strings "true"/"false" in any case.

    Raises:
        ValueError: If the value is not a boolean representation.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    raise ValueError(f"Expected 'true' or 'false', got {value!r}")


def parse_duration_ms(value: Any) -> int:
    """
    Converts a duration into milliseconds.

    A bare number (int or string without unit) is read as milliseconds.
    Otherwise the number must be followed by a unit, for example:
        - "500ms" -> 500
        - "10s" -> 10000
        - "2 min" -> 120000
        - "1h" -> 3600000

    Raises:
        ValueError: If the value is malformed or the unit is unknown.
    """
    if isinstance(value, bool):
        raise ValueError(f"Expected a duration, got boolean {value!r}")
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected a duration, got {type(value).__name__} {value!r}")

    match = _DURATION_PATTERN.match(value)
    if match is None:
        raise ValueError(f"Malformed duration {value!r}")

    amount, unit = int(match.group(1)), match.group(2).lower()
    if not unit:
        return amount
    if unit not in _DURATION_UNITS_MS:
        raise ValueError(
            f"Unknown duration unit '{unit}' in {value!r}. "
            f"Supported units: ms, s, min, h, d"
        )
    return amount * _DURATION_UNITS_MS[unit]


def format_duration_ms(value: int) -> str:
    """Formats milliseconds the way `parse_duration_ms` reads them back."""
    return f"{value}ms"


def extract_prefixed(d: Mapping[str, Any], prefix: str) -> dict[str, str]:
    """
    Collects the entries of `d` whose key starts with `prefix`.

    The prefix is stripped from the returned keys and values are converted
    to strings. Entries whose stripped key is empty are dropped.

    :param d: The flat dictionary to scan.
    :param prefix: The key prefix to select and strip.
    :return: A new dictionary with the selected entries.
    """
    return {
        k[len(prefix) :]: str(v)
        for k, v in d.items()
        if k.startswith(prefix) and len(k) > len(prefix)
    }


def with_prefix(d: Mapping[str, Any], prefix: str) -> dict[str, str]:
    """
    Inverse of `extract_prefixed`: prepends `prefix` to every key of `d`.

    :param d: The dictionary to flatten under the prefix.
    :param prefix: The key prefix to prepend.
    :return: A new dictionary with prefixed keys and string values.
    """
    return {prefix + k: str(v) for k, v in d.items()}
