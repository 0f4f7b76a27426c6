"""
Formatting utilities for segment cards.

Labels match the map frontend (German UI).
"""

from typing import Optional

PLACEHOLDER = "—"


def format_distance(meters: Optional[float]) -> str:
    """
    Format distance.

    Returns:
        '12.5 km' from 1000 m on, '850 m' below, '—' if unknown
    """
    if meters is None:
        return PLACEHOLDER
    if meters >= 1000:
        return f"{meters / 1000:.1f} km"
    return f"{round(meters)} m"


def format_grade(grade_percent: Optional[float]) -> str:
    """Format grade as '6.1%'."""
    if grade_percent is None:
        return PLACEHOLDER
    return f"{grade_percent:.1f}%"


def format_elevation(meters: Optional[float]) -> str:
    """Format elevation difference as '120 m'."""
    if meters is None:
        return PLACEHOLDER
    return f"{round(meters)} m"


def format_power(watts: Optional[float]) -> str:
    """Format power as '235 W'."""
    if watts is None:
        return PLACEHOLDER
    return f"{round(watts)} W"


def format_score(score: Optional[float]) -> str:
    """Format difficulty score for the badge."""
    if score is None:
        return PLACEHOLDER
    return str(round(score))


def format_duration(seconds: Optional[int]) -> str:
    """
    Format seconds like Strava does.

    Returns:
        '45s', '5:30' or '1:23:45'
    """
    if seconds is None or seconds < 0:
        return PLACEHOLDER
    if seconds < 60:
        return f"{seconds}s"
    h, rest = divmod(seconds, 3600)
    m, s = divmod(rest, 60)
    if h:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m}:{s:02d}"


def grade_class(grade_percent: Optional[float]) -> str:
    """Grade bar color bucket (by absolute grade)."""
    g = abs(grade_percent or 0)
    if g < 2:
        return "grade-flat"
    if g < 5:
        return "grade-easy"
    if g < 8:
        return "grade-moderate"
    if g < 12:
        return "grade-steep"
    return "grade-hc"
