"""
Segment difficulty feature.

Usage:
    from app.features.difficulty import calculate_segment_difficulty
    result = calculate_segment_difficulty(5000, 300, "20:00", 75)

Components:
- parse_best_time: KOM/QOM string -> seconds
- required_power: physics power balance (gravity, rolling, aero)
- reference_power: 3-parameter critical power curve
- classify_difficulty: score -> band
- DifficultyCalculator: scoring bound to a rider configuration
- profile_from_strava: Strava records -> SegmentPhysicalProfile
"""

from .duration import parse_best_time, PLACEHOLDER_DASH
from .power import (
    PhysicsConstants,
    CriticalPowerModel,
    PowerEstimate,
    DEFAULT_PHYSICS,
    GOOD_AMATEUR_CP_MODEL,
    reference_power,
    required_power,
)
from .classes import (
    DifficultyClass,
    DIFFICULTY_CLASSES,
    UNKNOWN_DIFFICULTY,
    classify_difficulty,
)
from .profile import SegmentPhysicalProfile, profile_from_strava
from .service import (
    DifficultyResult,
    DifficultyConfig,
    DifficultyCalculator,
    INVALID_RESULT,
    calculate_segment_difficulty,
    difficulty_sort_key,
)

__all__ = [
    # Duration
    "parse_best_time",
    "PLACEHOLDER_DASH",
    # Power models
    "PhysicsConstants",
    "CriticalPowerModel",
    "PowerEstimate",
    "DEFAULT_PHYSICS",
    "GOOD_AMATEUR_CP_MODEL",
    "reference_power",
    "required_power",
    # Classes
    "DifficultyClass",
    "DIFFICULTY_CLASSES",
    "UNKNOWN_DIFFICULTY",
    "classify_difficulty",
    # Profile
    "SegmentPhysicalProfile",
    "profile_from_strava",
    # Service
    "DifficultyResult",
    "DifficultyConfig",
    "DifficultyCalculator",
    "INVALID_RESULT",
    "calculate_segment_difficulty",
    "difficulty_sort_key",
]
