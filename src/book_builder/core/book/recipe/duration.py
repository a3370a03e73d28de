"""
Human-readable durations.

Recipe headers write their preparation time as a humantime string such as
``45m``, ``1h 30m`` or ``2hours``: a sequence of ``<integer><unit>`` pairs
with optional whitespace. Dumps format durations back the same way.
"""

import re
from datetime import timedelta
from typing import List

# Unit lengths in microseconds.
_MICROS = {
    "ns": 0.001,
    "us": 1,
    "ms": 1_000,
    "s": 1_000_000,
    "m": 60 * 1_000_000,
    "h": 3_600 * 1_000_000,
    "d": 86_400 * 1_000_000,
    "w": 7 * 86_400 * 1_000_000,
    "M": 2_630_016 * 1_000_000,
    "y": 31_557_600 * 1_000_000,
}

_UNIT_ALIASES = {
    "nsec": "ns", "ns": "ns",
    "usec": "us", "us": "us",
    "msec": "ms", "ms": "ms",
    "seconds": "s", "second": "s", "sec": "s", "s": "s",
    "minutes": "m", "minute": "m", "min": "m", "m": "m",
    "hours": "h", "hour": "h", "hr": "h", "h": "h",
    "days": "d", "day": "d", "d": "d",
    "weeks": "w", "week": "w", "w": "w",
    "months": "M", "month": "M", "M": "M",
    "years": "y", "year": "y", "y": "y",
}

_PAIR = re.compile(r"\s*(\d+)\s*([A-Za-z]+)")


class DurationParseError(ValueError):
    """Raised when a string is not a humantime duration."""


def parse_duration(text: str) -> timedelta:
    """
    Parse a humantime duration.

    Args:
        text: Duration such as ``"1h 30m"``

    Returns:
        The duration as a timedelta

    Raises:
        DurationParseError: On empty input, unknown units or stray characters
    """
    if not isinstance(text, str) or not text.strip():
        raise DurationParseError(f"Empty duration: {text!r}")

    micros = 0.0
    position = 0
    stripped = text.rstrip()
    while position < len(stripped):
        match = _PAIR.match(stripped, position)
        if match is None:
            raise DurationParseError(
                f"Invalid duration {text!r}: expected a number and a unit at position {position}"
            )
        number, unit = match.groups()
        canonical = _UNIT_ALIASES.get(unit)
        if canonical is None:
            raise DurationParseError(f"Invalid duration {text!r}: unknown unit {unit!r}")
        micros += int(number) * _MICROS[canonical]
        position = match.end()

    return timedelta(microseconds=round(micros))


def format_duration(duration: timedelta) -> str:
    """
    Format a duration the way humantime does, e.g. ``"1h 30m"``.

    Raises:
        ValueError: If the duration is negative
    """
    if duration < timedelta(0):
        raise ValueError(f"Cannot format a negative duration: {duration}")

    total_seconds = duration.days * 86_400 + duration.seconds
    micros = duration.microseconds
    if total_seconds == 0 and micros == 0:
        return "0s"

    years, rest = divmod(total_seconds, 31_557_600)
    months, rest = divmod(rest, 2_630_016)
    days, rest = divmod(rest, 86_400)
    hours, rest = divmod(rest, 3_600)
    minutes, seconds = divmod(rest, 60)
    millis, micros = divmod(micros, 1_000)

    parts: List[str] = []
    _append_plural(parts, years, "year")
    _append_plural(parts, months, "month")
    _append_plural(parts, days, "day")
    for value, unit in ((hours, "h"), (minutes, "m"), (seconds, "s"), (millis, "ms"), (micros, "us")):
        if value:
            parts.append(f"{value}{unit}")
    return " ".join(parts)


def _append_plural(parts: List[str], value: int, unit: str) -> None:
    if value == 1:
        parts.append(f"1{unit}")
    elif value:
        parts.append(f"{value}{unit}s")
