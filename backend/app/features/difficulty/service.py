"""
Segment difficulty scoring.

Pipeline:
    best time -> seconds            (duration.parse_best_time)
    physics model -> W, W/kg        (power.required_power)
    CP model -> reference W/kg      (power.reference_power)
    score = W/kg / reference * 100
    score -> band                   (classes.classify_difficulty)

Bad input never raises: it yields INVALID_RESULT (is_valid=False).
Only API misuse (e.g. a missing config object) raises.
"""

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Optional, Union

from .classes import DifficultyClass, UNKNOWN_DIFFICULTY, classify_difficulty
from .duration import parse_best_time
from .power import (
    CriticalPowerModel,
    DEFAULT_PHYSICS,
    GOOD_AMATEUR_CP_MODEL,
    PhysicsConstants,
    reference_power,
    required_power,
)
from .profile import SegmentPhysicalProfile


@dataclass(frozen=True)
class DifficultyResult:
    """Result of scoring one segment."""
    required_power: Optional[float]           # W
    required_power_per_kg: Optional[float]    # W/kg
    difficulty_score: Optional[float]         # % of reference power
    difficulty_class: DifficultyClass
    is_valid: bool
    reference_power: Optional[float] = None   # W/kg at the best time
    best_time_seconds: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "required_power": self.required_power,
            "required_power_per_kg": self.required_power_per_kg,
            "difficulty_score": self.difficulty_score,
            "difficulty_class": self.difficulty_class.to_dict(),
            "is_valid": self.is_valid,
            "reference_power": self.reference_power,
            "best_time_seconds": self.best_time_seconds,
        }


INVALID_RESULT = DifficultyResult(
    required_power=None,
    required_power_per_kg=None,
    difficulty_score=None,
    difficulty_class=UNKNOWN_DIFFICULTY,
    is_valid=False,
)


def _is_number(value: Any) -> bool:
    if not isinstance(value, Real) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large for a float
        return False


def _is_positive(value: Any) -> bool:
    return _is_number(value) and value > 0


def calculate_segment_difficulty(
    distance: Optional[float],
    elevation_gain: Optional[float],
    best_time: Union[str, int, float, None],
    rider_mass: Optional[float],
    physics: PhysicsConstants = DEFAULT_PHYSICS,
    cp_model: CriticalPowerModel = GOOD_AMATEUR_CP_MODEL
) -> DifficultyResult:
    """
    Score a segment.

    Validation (first failure wins): distance > 0, elevation present
    (zero/negative allowed), rider mass > 0, best time present and
    parsing to a positive number of seconds. Inputs so extreme that
    the score is not a finite number are invalid too.

    Args:
        distance: Segment length in meters
        elevation_gain: Net elevation difference in meters
        best_time: KOM/QOM time string or seconds
        rider_mass: Rider mass in kg

    Returns:
        DifficultyResult, or INVALID_RESULT if the segment is not scoreable
    """
    if not _is_positive(distance):
        return INVALID_RESULT
    if elevation_gain is None or not _is_number(elevation_gain):
        return INVALID_RESULT
    if not _is_positive(rider_mass):
        return INVALID_RESULT
    if best_time is None or best_time == "":
        return INVALID_RESULT

    seconds = parse_best_time(best_time)
    if not _is_positive(seconds):
        return INVALID_RESULT

    power = required_power(distance, elevation_gain, seconds, rider_mass, physics)
    ref = reference_power(seconds, cp_model)
    score = (power.required_power_per_kg / ref) * 100

    # extreme inputs can push the power terms to inf or nan
    if not math.isfinite(score):
        return INVALID_RESULT

    return DifficultyResult(
        required_power=power.required_power,
        required_power_per_kg=power.required_power_per_kg,
        difficulty_score=score,
        difficulty_class=classify_difficulty(score),
        is_valid=True,
        reference_power=ref,
        best_time_seconds=seconds,
    )


def difficulty_sort_key(result: DifficultyResult) -> tuple[int, float]:
    """Sort key: ascending score, invalid results last."""
    if not result.is_valid:
        return (1, 0.0)
    return (0, result.difficulty_score)


# =============================================================================
# Configurable Calculator
# =============================================================================

@dataclass(frozen=True)
class DifficultyConfig:
    """Rider mass and model constants used by DifficultyCalculator."""
    rider_mass_kg: float
    physics: PhysicsConstants = field(default=DEFAULT_PHYSICS)
    cp_model: CriticalPowerModel = field(default=GOOD_AMATEUR_CP_MODEL)


class DifficultyCalculator:
    """
    Difficulty scoring bound to a rider configuration.

    Example usage:
        calc = DifficultyCalculator(DifficultyConfig(rider_mass_kg=75))
        result = calc.calculate_raw(5000, 300, "20:00")
        print(result.difficulty_class.label)
    """

    def __init__(self, config: DifficultyConfig):
        if not isinstance(config, DifficultyConfig):
            raise TypeError(
                f"DifficultyCalculator requires a DifficultyConfig, got {type(config).__name__}"
            )
        self.config = config

    @property
    def rider_mass_kg(self) -> float:
        return self.config.rider_mass_kg

    def calculate_raw(
        self,
        distance: Optional[float],
        elevation_gain: Optional[float],
        best_time: Union[str, int, float, None]
    ) -> DifficultyResult:
        """Score raw segment attributes with the configured rider mass."""
        return calculate_segment_difficulty(
            distance,
            elevation_gain,
            best_time,
            self.config.rider_mass_kg,
            physics=self.config.physics,
            cp_model=self.config.cp_model,
        )

    def calculate(self, profile: SegmentPhysicalProfile) -> DifficultyResult:
        """
        Score a normalized profile.

        The profile's rider mass wins over the configured one when set.
        """
        if not isinstance(profile, SegmentPhysicalProfile):
            raise TypeError(
                f"Expected SegmentPhysicalProfile, got {type(profile).__name__}"
            )
        rider_mass = profile.rider_mass_kg
        if rider_mass is None:
            rider_mass = self.config.rider_mass_kg
        return calculate_segment_difficulty(
            profile.distance_m,
            profile.elevation_gain_m,
            profile.best_time,
            rider_mass,
            physics=self.config.physics,
            cp_model=self.config.cp_model,
        )
