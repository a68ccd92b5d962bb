"""
Clock-time utilities.

Times of day are carried as zero-padded "HH:MM" strings and converted to
integer minutes since midnight for arithmetic.
"""

import math
import re

CLOCK_PATTERN = re.compile(r"^\d{2}:\d{2}$")

MINUTES_PER_DAY = 24 * 60


def is_clock_time(value: object) -> bool:
    """Return True if value is an "HH:MM" string within 00:00-23:59."""
    if not isinstance(value, str) or not CLOCK_PATTERN.match(value):
        return False
    hours, minutes = int(value[:2]), int(value[3:])
    return hours <= 23 and minutes <= 59


def to_minutes(value: str) -> int:
    """
    Parse an "HH:MM" time into minutes since midnight.

    Args:
        value: Zero-padded clock time

    Returns:
        Minutes since midnight (0-1439)

    Raises:
        ValueError: If value is not a valid clock time
    """
    if not is_clock_time(value):
        raise ValueError(f"Invalid clock time: {value!r}")
    return int(value[:2]) * 60 + int(value[3:])


def to_clock(minutes: int) -> str:
    """
    Format minutes since midnight as "HH:MM".

    Callers must keep minutes within 0-1439; no wrapping is applied.
    """
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def duration_minutes(start: str, end: str) -> int:
    """Signed duration between two clock times."""
    return to_minutes(end) - to_minutes(start)


def duration_label(start: str, end: str) -> str:
    """Human-readable duration, "?" for non-positive spans."""
    mins = duration_minutes(start, end)
    if mins <= 0:
        return "?"
    if mins < 60:
        return f"{mins}m"
    hours, rest = divmod(mins, 60)
    return f"{hours}h {rest}m" if rest else f"{hours}h"


def snap(minutes: float, grid: int) -> int:
    """Round to the nearest multiple of grid minutes (halves round up)."""
    return int(math.floor(minutes / grid + 0.5)) * grid


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
