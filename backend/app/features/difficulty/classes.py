"""
Difficulty classification bands.

Single source of truth for score thresholds, labels and badge colors.
Labels are German (the UI language).
"""

from dataclasses import dataclass, asdict
from typing import Optional


@dataclass(frozen=True)
class DifficultyClass:
    """A classification band: tag, display label and badge color."""
    tag: str
    label: str
    color: str
    min_score: Optional[float] = None  # inclusive lower bound, None for sentinel

    def to_dict(self) -> dict:
        data = asdict(self)
        data["class"] = data.pop("tag")
        data.pop("min_score")
        return data


# Highest threshold first - evaluated top to bottom, first match wins
DIFFICULTY_CLASSES: tuple[DifficultyClass, ...] = (
    DifficultyClass("suspicious", "hmmmm", "#6b7280", 150),
    DifficultyClass("extreme", "Extrem", "#7c3aed", 130),
    DifficultyClass("very-hard", "Sehr schwer", "#dc2626", 110),
    DifficultyClass("hard", "Schwer", "#ea580c", 90),
    DifficultyClass("moderate", "Moderat", "#ca8a04", 70),
    DifficultyClass("accessible", "Machbar", "#16a34a", 50),
    DifficultyClass("easy", "Einfach", "#22c55e", 0),
)

# Only used for results that could not be scored
UNKNOWN_DIFFICULTY = DifficultyClass("unknown", "—", "#9ca3af")


def classify_difficulty(score: float) -> DifficultyClass:
    """
    Map a difficulty score to its band.

    Args:
        score: Difficulty score (percent of reference power)

    Returns:
        First band whose min_score <= score. Scores below every
        threshold (negative scores) fall through to the lowest band.
    """
    for band in DIFFICULTY_CLASSES:
        if score >= band.min_score:
            return band
    return DIFFICULTY_CLASSES[-1]
