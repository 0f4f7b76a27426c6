"""
Tests for end-to-end difficulty scoring.

Tests the orchestrator, the configurable calculator and the
Strava record normalizer.
"""

import math

import pytest

from app.features.difficulty import (
    INVALID_RESULT,
    UNKNOWN_DIFFICULTY,
    DifficultyCalculator,
    DifficultyConfig,
    SegmentPhysicalProfile,
    calculate_segment_difficulty,
    difficulty_sort_key,
    profile_from_strava,
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def calculator():
    """Calculator for a 75 kg rider."""
    return DifficultyCalculator(DifficultyConfig(rider_mass_kg=75))


# =============================================================================
# Test Validity Gating
# =============================================================================

class TestValidityGating:
    """Unscoreable input yields the invalid sentinel, never an exception."""

    @pytest.mark.parametrize("distance,elevation,best_time,mass", [
        (0, 300, "20:00", 75),
        (-10, 300, "20:00", 75),
        (None, 300, "20:00", 75),
        (math.nan, 300, "20:00", 75),
        ("5000", 300, "20:00", 75),
        (5000, None, "20:00", 75),
        (5000, math.nan, "20:00", 75),
        (5000, 300, "20:00", -1),
        (5000, 300, "20:00", 0),
        (5000, 300, "20:00", None),
        (5000, 300, "20:00", True),
        (5000, 300, None, 75),
        (5000, 300, "", 75),
        (5000, 300, "—", 75),
        (5000, 300, "abc", 75),
        (5000, 300, "0", 75),
        (5000, 300, "0:00", 75),
        (5000, 300, 0, 75),
        (5000, 300, -30, 75),
        (10 ** 400, 300, "20:00", 75),
        (5000, 10 ** 400, "20:00", 75),
        (5000, 300, "20:00", 10 ** 400),
        (5000, 300, 10 ** 400, 75),
        (5000, 300, "9" * 400, 75),
        (5000, 300, "9" * 5000, 75),
        (1e300, -1e308, 1, 75),
        (1e300, 1e308, 1, 75),
    ])
    def test_invalid(self, distance, elevation, best_time, mass):
        result = calculate_segment_difficulty(distance, elevation, best_time, mass)

        assert result is INVALID_RESULT
        assert result.is_valid is False
        assert result.required_power is None
        assert result.required_power_per_kg is None
        assert result.difficulty_score is None
        assert result.difficulty_class is UNKNOWN_DIFFICULTY

    def test_zero_elevation_is_valid(self):
        result = calculate_segment_difficulty(5000, 0, "8:00", 75)
        assert result.is_valid is True

    def test_valid_input_has_numbers(self):
        result = calculate_segment_difficulty(5000, 300, "20:00", 75)

        assert result.is_valid is True
        assert result.required_power is not None
        assert result.required_power_per_kg is not None
        assert result.difficulty_score is not None
        assert result.difficulty_class is not UNKNOWN_DIFFICULTY

    def test_invalid_to_dict(self):
        data = INVALID_RESULT.to_dict()
        assert data["is_valid"] is False
        assert data["difficulty_score"] is None
        assert data["difficulty_class"] == {"class": "unknown", "label": "—", "color": "#9ca3af"}


# =============================================================================
# Test Scoring
# =============================================================================

class TestScoring:
    """Tests for calculate_segment_difficulty function."""

    def test_climb_example(self):
        """
        5 km, +300 m, KOM 20:00, 75 kg.

        ~234 W, ~3.12 W/kg, reference ~5.00 W/kg -> score ~62.4 (accessible).
        """
        result = calculate_segment_difficulty(5000, 300, "20:00", 75)

        assert result.best_time_seconds == 1200
        assert result.required_power == pytest.approx(233.96, abs=0.01)
        assert result.required_power_per_kg == pytest.approx(3.1195, abs=1e-4)
        assert result.reference_power == pytest.approx(5.0002, abs=1e-4)
        assert result.difficulty_score == pytest.approx(62.39, abs=0.01)
        assert result.difficulty_class.tag == "accessible"

    def test_score_is_percent_of_reference(self):
        result = calculate_segment_difficulty(2000, 40, "3:00", 75)
        expected = result.required_power_per_kg / result.reference_power * 100
        assert result.difficulty_score == pytest.approx(expected, rel=1e-12)

    def test_seconds_and_string_agree(self):
        as_text = calculate_segment_difficulty(5000, 300, "20:00", 75)
        as_seconds = calculate_segment_difficulty(5000, 300, 1200, 75)
        assert as_text == as_seconds

    def test_short_steep_kom(self):
        """2 km at 2% in 3:00 is a hard effort."""
        result = calculate_segment_difficulty(2000, 40, "3:00", 75)
        assert 90 <= result.difficulty_score < 110
        assert result.difficulty_class.tag == "hard"

    def test_downhill_lower_than_flat(self):
        flat = calculate_segment_difficulty(5000, 0, "20:00", 75)
        downhill = calculate_segment_difficulty(5000, -100, "20:00", 75)

        assert downhill.is_valid is True
        assert downhill.required_power < flat.required_power
        assert downhill.required_power < 0
        assert downhill.difficulty_score < 0
        assert downhill.difficulty_class.tag == "easy"

    def test_result_is_immutable(self):
        result = calculate_segment_difficulty(5000, 300, "20:00", 75)
        with pytest.raises(AttributeError):
            result.difficulty_score = 0


class TestSortKey:
    """Ascending by score, invalid last."""

    def test_order(self):
        easy = calculate_segment_difficulty(5000, 0, "20:00", 75)
        hard = calculate_segment_difficulty(2000, 40, "3:00", 75)
        results = [INVALID_RESULT, hard, easy]

        ordered = sorted(results, key=difficulty_sort_key)

        assert ordered == [easy, hard, INVALID_RESULT]

    def test_extreme_input_sorts_last(self):
        extreme = calculate_segment_difficulty(1e300, -1e308, 1, 75)
        easy = calculate_segment_difficulty(5000, 0, "20:00", 75)

        ordered = sorted([extreme, easy], key=difficulty_sort_key)

        assert ordered == [easy, extreme]
        assert extreme.is_valid is False


# =============================================================================
# Test Calculator
# =============================================================================

class TestDifficultyCalculator:
    """Tests for DifficultyCalculator class."""

    def test_missing_config_is_a_usage_error(self):
        with pytest.raises(TypeError):
            DifficultyCalculator(None)

    def test_wrong_profile_type_is_a_usage_error(self, calculator):
        with pytest.raises(TypeError):
            calculator.calculate({"distance_m": 5000})

    def test_calculate_raw_uses_configured_mass(self, calculator):
        result = calculator.calculate_raw(5000, 300, "20:00")
        assert result == calculate_segment_difficulty(5000, 300, "20:00", 75)

    def test_profile_mass_wins(self, calculator):
        profile = SegmentPhysicalProfile(5000, 300, "20:00", 60)
        result = calculator.calculate(profile)
        assert result == calculate_segment_difficulty(5000, 300, "20:00", 60)

    def test_profile_without_mass_uses_config(self, calculator):
        profile = SegmentPhysicalProfile(5000, 300, "20:00", None)
        assert calculator.calculate(profile).is_valid is True

    def test_non_positive_config_mass_is_invalid_not_error(self):
        calc = DifficultyCalculator(DifficultyConfig(rider_mass_kg=0))
        assert calc.calculate_raw(5000, 300, "20:00").is_valid is False


# =============================================================================
# Test Strava Normalizer
# =============================================================================

class TestProfileFromStrava:
    """Tests for profile_from_strava function."""

    def test_prefers_detailed_distance(self):
        profile = profile_from_strava({"distance": 4990}, {"distance": 5000}, 75)
        assert profile.distance_m == 5000

    def test_falls_back_to_summary_distance(self):
        assert profile_from_strava({"distance": 4990}, None, 75).distance_m == 4990
        assert profile_from_strava({"distance": 4990}, {"distance": 0}, 75).distance_m == 4990

    def test_prefers_elev_difference(self):
        profile = profile_from_strava(
            {"elev_difference": 280}, {"total_elevation_gain": 310}, 75
        )
        assert profile.elevation_gain_m == 280

    def test_zero_elev_difference_is_kept(self):
        profile = profile_from_strava(
            {"elev_difference": 0}, {"total_elevation_gain": 310}, 75
        )
        assert profile.elevation_gain_m == 0

    def test_falls_back_to_total_elevation_gain(self):
        profile = profile_from_strava({}, {"total_elevation_gain": 310}, 75)
        assert profile.elevation_gain_m == 310

    def test_elevation_defaults_to_zero(self):
        assert profile_from_strava({}, {}, 75).elevation_gain_m == 0

    def test_best_time_from_xoms(self):
        details = {"xoms": {"kom": "5:30", "qom": "6:10"}}
        assert profile_from_strava({}, details, 75).best_time == "5:30"
        assert profile_from_strava({}, details, 75, prefer_qom=True).best_time == "6:10"

    def test_missing_details(self):
        profile = profile_from_strava({"distance": 1000}, None, 75)
        assert profile.best_time is None

    def test_end_to_end(self, calculator):
        summary = {"id": 1, "distance": 4990, "elev_difference": 300}
        details = {"distance": 5000, "xoms": {"kom": "20:00"}}

        result = calculator.calculate(profile_from_strava(summary, details, 75))

        assert result.difficulty_score == pytest.approx(62.39, abs=0.01)
