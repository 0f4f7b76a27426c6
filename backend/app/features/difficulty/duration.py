"""
Best-known-time parsing.

Strava reports KOM/QOM times as display strings ("45s", "5:30",
"1:23:45"). The difficulty model needs whole seconds.
"""

import math
import re
from numbers import Real
from typing import Optional, Union

# "45" or "45s" - plain seconds
_SECONDS_ONLY = re.compile(r"^[0-9]+s?$")
# a single colon-delimited component
_COMPONENT = re.compile(r"^\s*[0-9]+\s*$")

# Placeholder Strava (and our UI) uses for "no time"
PLACEHOLDER_DASH = "—"


def _checked(seconds: int) -> Optional[int]:
    """None for counts that cannot be used in float arithmetic."""
    try:
        float(seconds)
    except OverflowError:
        return None
    return seconds


def parse_best_time(value: Union[str, int, float, None]) -> Optional[int]:
    """
    Convert a best-known time into whole seconds.

    Accepted:
        "45", "45s"     -> 45
        "5:30"          -> 330     (MM:SS)
        "1:23:45"       -> 5025    (HH:MM:SS)
        330 / 330.0     -> 330     (already parsed seconds)

    Args:
        value: Display string or seconds

    Returns:
        Seconds, or None if the value cannot be parsed or is too
        large for float arithmetic.
        Zero is only returned for a literal zero.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Real):
        try:
            if not math.isfinite(value):
                return None
        except OverflowError:
            # int too large for a float
            return None
        return _checked(int(value))

    if not isinstance(value, str):
        return None

    clean = value.strip()
    if not clean or clean == PLACEHOLDER_DASH:
        return None

    try:
        if _SECONDS_ONLY.match(clean):
            return _checked(int(clean.rstrip("s")))

        parts = clean.split(":")
        if not all(_COMPONENT.match(part) for part in parts):
            return None

        numbers = [int(part) for part in parts]
    except ValueError:
        # beyond the interpreter's int digit limit
        return None

    if len(numbers) == 2:
        minutes, seconds = numbers
        return _checked(minutes * 60 + seconds)
    if len(numbers) == 3:
        hours, minutes, seconds = numbers
        return _checked(hours * 3600 + minutes * 60 + seconds)

    return None
