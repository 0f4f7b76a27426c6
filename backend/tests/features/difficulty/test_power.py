"""
Tests for the power models.

- reference_power: 3-parameter critical power curve
- required_power: gravity + rolling + aero power balance
"""

import pytest

from app.features.difficulty import (
    DEFAULT_PHYSICS,
    GOOD_AMATEUR_CP_MODEL,
    CriticalPowerModel,
    PhysicsConstants,
    reference_power,
    required_power,
)


# =============================================================================
# Test Critical Power Model
# =============================================================================

class TestCriticalPowerConstants:
    """Calibration constants of the 'Good' amateur curve."""

    def test_constants(self):
        assert GOOD_AMATEUR_CP_MODEL.p_max == 21.80
        assert GOOD_AMATEUR_CP_MODEL.cp == 4.77
        assert GOOD_AMATEUR_CP_MODEL.w_prime == 280

    def test_derived_constants(self):
        assert GOOD_AMATEUR_CP_MODEL.anaerobic_reserve == pytest.approx(17.03)
        assert GOOD_AMATEUR_CP_MODEL.weighted_reserve == pytest.approx(4768.4)

    def test_model_is_immutable(self):
        with pytest.raises(AttributeError):
            GOOD_AMATEUR_CP_MODEL.cp = 5.0


class TestReferencePower:
    """Tests for reference_power function."""

    def test_zero_duration_is_peak(self):
        assert reference_power(0) == 21.80

    def test_negative_duration_is_peak(self):
        assert reference_power(-10) == 21.80

    def test_monotonically_decreasing(self):
        durations = [1, 5, 30, 60, 300, 1200, 3600, 20000]
        powers = [reference_power(t) for t in durations]
        for shorter, longer in zip(powers, powers[1:]):
            assert shorter >= longer

    def test_converges_to_cp(self):
        assert abs(reference_power(100000) - 4.77) < 0.005
        assert reference_power(100000) > 4.77

    def test_approaches_peak_for_short_efforts(self):
        assert reference_power(0.001) == pytest.approx(21.80, abs=0.01)

    def test_twenty_minutes(self):
        assert reference_power(1200) == pytest.approx(5.0002, abs=0.0005)

    def test_formula_matches_documentation(self):
        """P(t) = CP + W'(Pmax-CP) / (W' + (Pmax-CP) t)."""
        for t in [10, 60, 600, 3600]:
            expected = 4.77 + (280 * (21.80 - 4.77)) / (280 + (21.80 - 4.77) * t)
            assert reference_power(t) == pytest.approx(expected, rel=1e-12)

    def test_custom_model(self):
        model = CriticalPowerModel(p_max=20.0, cp=4.0, w_prime=200.0)
        assert reference_power(0, model) == 20.0
        assert reference_power(60, model) == pytest.approx(4.0 + 3200 / (200 + 16 * 60))


# =============================================================================
# Test Required Power
# =============================================================================

class TestPhysicsConstants:

    def test_defaults(self):
        assert DEFAULT_PHYSICS == PhysicsConstants(
            gravity=9.81,
            air_density=1.2,
            bike_mass=8.0,
            rolling_resistance_coefficient=0.004,
            drag_area=0.28,
            drivetrain_efficiency=0.98,
        )


class TestRequiredPower:
    """Tests for required_power function."""

    def test_climb_example(self):
        """5 km, +300 m in 20:00, 75 kg rider."""
        estimate = required_power(5000, 300, 1200, 75)

        assert estimate.speed_ms == pytest.approx(4.1667, abs=1e-4)
        assert estimate.grade == pytest.approx(0.06)
        assert estimate.gravity_power == pytest.approx(203.56, abs=0.01)
        assert estimate.rolling_power == pytest.approx(13.57, abs=0.01)
        assert estimate.aero_power == pytest.approx(12.15, abs=0.01)
        assert estimate.required_power == pytest.approx(233.96, abs=0.01)
        assert estimate.required_power_per_kg == pytest.approx(3.1195, abs=1e-4)

    def test_formula_matches_documentation(self):
        distance, elevation, time_s, mass = 2000.0, 40.0, 180.0, 70.0
        v = distance / time_s
        m = mass + 8
        expected = (
            m * 9.81 * v * (elevation / distance)
            + m * 9.81 * v * 0.004
            + 0.5 * 1.2 * 0.28 * v * v * v
        ) / 0.98

        estimate = required_power(distance, elevation, time_s, mass)

        assert estimate.required_power == pytest.approx(expected, rel=1e-12)
        assert estimate.required_power_per_kg == pytest.approx(expected / mass, rel=1e-12)

    def test_flat_has_no_gravity_component(self):
        estimate = required_power(5000, 0, 600, 75)
        assert estimate.gravity_power == 0
        assert estimate.required_power > 0

    def test_downhill_is_not_clamped(self):
        """Steep net descent at low speed gives negative power."""
        estimate = required_power(5000, -100, 1200, 75)

        assert estimate.gravity_power < 0
        assert estimate.required_power < 0
        assert estimate.required_power == pytest.approx(-42.99, abs=0.01)

    def test_heavier_rider_needs_more_watts_but_fewer_per_kg(self):
        light = required_power(5000, 300, 1200, 60)
        heavy = required_power(5000, 300, 1200, 90)

        assert heavy.required_power > light.required_power
        assert heavy.required_power_per_kg < light.required_power_per_kg

    def test_faster_needs_more_power(self):
        slow = required_power(5000, 300, 1500, 75)
        fast = required_power(5000, 300, 1000, 75)
        assert fast.required_power > slow.required_power
