"""Utility helper functions."""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterable
import math
import random

from dateutil import parser as date_parser

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# North American zone abbreviations, as UTC offsets in seconds
TZ_ABBREVIATIONS = {
    "EST": -5 * 3600,
    "EDT": -4 * 3600,
    "CST": -6 * 3600,
    "CDT": -5 * 3600,
    "MST": -7 * 3600,
    "MDT": -6 * 3600,
    "PST": -8 * 3600,
    "PDT": -7 * 3600,
}


def generate_seed() -> int:
    """Generate a random seed value."""
    return random.randint(0, 2**31 - 1)


def parse_date(value: Any) -> int | float:
    """Parse a date into a millisecond timestamp so that dates can be compared.

    Strings are read with dateutil, so ISO 8601 (``2016-01-01``,
    ``2016-01-01T00:00:00Z``), RFC 2822 style (``Jan 1 2016``) and zone
    abbreviations (``2016-01-01 CST``) all work. Values without a timezone
    are read as UTC.

    Args:
        value: A datetime, a date, or a date string

    Returns:
        Milliseconds since the epoch, or ``nan`` if the string can't be parsed
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return (value - EPOCH) // timedelta(milliseconds=1)

    if isinstance(value, date):
        midnight = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
        return (midnight - EPOCH) // timedelta(milliseconds=1)

    try:
        parsed = date_parser.parse(str(value).strip(), tzinfos=TZ_ABBREVIATIONS)
    except (ValueError, OverflowError):
        return math.nan

    return parse_date(parsed)


def from_timestamp(timestamp: int) -> datetime:
    """Convert a millisecond timestamp back into a UTC datetime."""
    return EPOCH + timedelta(milliseconds=timestamp)


def flatten_args(args: Iterable[Any]) -> list[Any]:
    """Flatten positional arguments by one level.

    Lists and tuples are spliced in place, everything else is kept as a
    single element, so ``f([a, b])``, ``f(a, b)`` and ``f([a], b)`` all
    normalise to ``[a, b]``.
    """
    result: list[Any] = []
    for arg in args:
        if isinstance(arg, (list, tuple)):
            result.extend(arg)
        else:
            result.append(arg)
    return result


def flatten_dict(
    d: dict[str, Any],
    parent_key: str = "",
    separator: str = ".",
) -> dict[str, Any]:
    """Flatten a nested dictionary.

    Args:
        d: Dictionary to flatten
        parent_key: Parent key prefix
        separator: Key separator

    Returns:
        Flattened dictionary
    """
    items: list[tuple[str, Any]] = []

    for key, value in d.items():
        new_key = f"{parent_key}{separator}{key}" if parent_key else str(key)

        if isinstance(value, dict):
            items.extend(flatten_dict(value, new_key, separator).items())
        else:
            items.append((new_key, value))

    return dict(items)
