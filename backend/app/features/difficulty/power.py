"""
Power models for segment difficulty.

Two models live here:

1. Physical power requirement - quasi-static cycling power balance
   (gravity + rolling resistance + aerodynamic drag) at average speed.
2. Reference power curve - three-parameter Critical Power model
   calibrated to a "Good" amateur (Coggan power profile).

Both are pure functions over immutable constant sets.

References:
- Martin et al. (1998) - Validation of a mathematical model for
  road cycling power. J Appl Biomech 14(3).
- Morton (1996) - A 3-parameter critical power model. Ergonomics 39(4).
"""

from dataclasses import dataclass


# =============================================================================
# Constants
# =============================================================================

@dataclass(frozen=True)
class PhysicsConstants:
    """Fixed rider/bike/environment constants for the power balance."""
    gravity: float = 9.81                       # m/s²
    air_density: float = 1.2                    # kg/m³
    bike_mass: float = 8.0                      # kg
    rolling_resistance_coefficient: float = 0.004
    drag_area: float = 0.28                     # CdA, m²
    drivetrain_efficiency: float = 0.98


@dataclass(frozen=True)
class CriticalPowerModel:
    """
    Three-parameter critical power model, per kilogram.

    P(t) = CP + W'·(Pmax - CP) / (W' + (Pmax - CP)·t)
    """
    p_max: float    # W/kg, instantaneous peak
    cp: float       # W/kg, critical power
    w_prime: float  # J/kg, anaerobic work capacity

    @property
    def anaerobic_reserve(self) -> float:
        """Pmax - CP."""
        return self.p_max - self.cp

    @property
    def weighted_reserve(self) -> float:
        """W' · (Pmax - CP)."""
        return self.w_prime * self.anaerobic_reserve


DEFAULT_PHYSICS = PhysicsConstants()

# "Good" level amateur
GOOD_AMATEUR_CP_MODEL = CriticalPowerModel(p_max=21.80, cp=4.77, w_prime=280.0)


# =============================================================================
# Reference Power Curve
# =============================================================================

def reference_power(
    duration_s: float,
    model: CriticalPowerModel = GOOD_AMATEUR_CP_MODEL
) -> float:
    """
    Power per kilogram a capable amateur can hold for a given duration.

    Args:
        duration_s: Effort duration in seconds
        model: Critical power model (default: "Good" amateur)

    Returns:
        Reference power in W/kg. Pmax for non-positive durations,
        tends to CP for long durations.
    """
    if duration_s <= 0:
        return model.p_max
    return model.cp + model.weighted_reserve / (
        model.w_prime + model.anaerobic_reserve * duration_s
    )


# =============================================================================
# Physical Power Requirement
# =============================================================================

@dataclass(frozen=True)
class PowerEstimate:
    """Average power needed to ride a segment in a given time."""
    required_power: float           # W
    required_power_per_kg: float    # W/kg (rider mass only)
    gravity_power: float            # W, negative downhill
    rolling_power: float            # W
    aero_power: float               # W
    speed_ms: float
    grade: float                    # decimal, 0.06 = 6%


def required_power(
    distance_m: float,
    elevation_gain_m: float,
    time_s: float,
    rider_mass_kg: float,
    physics: PhysicsConstants = DEFAULT_PHYSICS
) -> PowerEstimate:
    """
    Estimate the average power to cover a segment in a given time.

    No acceleration term; average speed is used throughout.
    Net-downhill segments give negative gravity power and the
    total is NOT clamped, so it may end up below zero.

    Args:
        distance_m: Segment length (> 0)
        elevation_gain_m: Net elevation difference (may be negative)
        time_s: Time in seconds (> 0)
        rider_mass_kg: Rider mass (> 0), bike mass is added on top

    Returns:
        PowerEstimate with total, per-kg and component powers
    """
    speed = distance_m / time_s
    grade = elevation_gain_m / distance_m
    total_mass = rider_mass_kg + physics.bike_mass

    gravity_power = total_mass * physics.gravity * speed * grade
    rolling_power = (
        total_mass * physics.gravity * speed * physics.rolling_resistance_coefficient
    )
    aero_power = 0.5 * physics.air_density * physics.drag_area * speed * speed * speed

    total = (gravity_power + rolling_power + aero_power) / physics.drivetrain_efficiency

    return PowerEstimate(
        required_power=total,
        required_power_per_kg=total / rider_mass_kg,
        gravity_power=gravity_power,
        rolling_power=rolling_power,
        aero_power=aero_power,
        speed_ms=speed,
        grade=grade,
    )
