"""Closed-form performance estimates for a finished build.

All figures are rough approximations driven by the power-to-weight ratio::

    power_to_weight = hp / (weight_lbs / 1000)

They are not the output of a drivetrain or aerodynamic simulation and should
be presented as estimates, never guarantees.

0-60 mph (s):   >300 -> 4.5, >250 -> 5.5, >200 -> 6.5, >150 -> 8.0, else 10.0,
                then scaled by drivetrain (AWD 0.9, RWD 1.0, FWD 1.1, 4WD 1.0).
Quarter mile:   >400 -> 12.5, >300 -> 13.5, >250 -> 14.5, >200 -> 15.5,
                else 17.0; drivetrain does not affect it.
Top speed:      round(sqrt(hp / drag_coefficient) * 1.3).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from garage_engine.core.units import round_half_up, round_half_up_to
from garage_engine.core.vehicle import Drivetrain

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_DRAG_COEFFICIENT: float = 0.35
TOP_SPEED_SCALE: float = 1.3

# (power-to-weight strictly greater than, seconds), checked in order.
ZERO_TO_SIXTY_BUCKETS: tuple[tuple[float, float], ...] = (
    (300.0, 4.5),
    (250.0, 5.5),
    (200.0, 6.5),
    (150.0, 8.0),
)
ZERO_TO_SIXTY_SLOWEST: float = 10.0

QUARTER_MILE_BUCKETS: tuple[tuple[float, float], ...] = (
    (400.0, 12.5),
    (300.0, 13.5),
    (250.0, 14.5),
    (200.0, 15.5),
)
QUARTER_MILE_SLOWEST: float = 17.0

DRIVETRAIN_LAUNCH_FACTORS: dict[Drivetrain, float] = {
    Drivetrain.AWD: 0.9,
    Drivetrain.RWD: 1.0,
    Drivetrain.FWD: 1.1,
}


@dataclass(frozen=True)
class PerformanceEstimate:
    """Derived performance figures for a build.

    Attributes:
        zero_to_sixty: Estimated 0-60 mph time in seconds (one decimal).
        quarter_mile: Estimated quarter-mile time in seconds (one decimal).
        top_speed: Estimated top speed in mph.
        power_to_weight: HP per 1000 lb.
        wheel_hp: Estimated wheel horsepower, when a drivetrain loss
            table was available.
    """

    zero_to_sixty: float
    quarter_mile: float
    top_speed: int
    power_to_weight: float
    wheel_hp: int | None = None


def power_to_weight(hp: float, weight_lbs: float) -> float:
    """Return horsepower per thousand pounds.

    Raises:
        ValueError: If *weight_lbs* is not positive.
    """
    if weight_lbs <= 0.0:
        raise ValueError("weight_lbs must be > 0.")
    return hp / (weight_lbs / 1000.0)


def _bucket(ratio: float, buckets: tuple[tuple[float, float], ...], slowest: float) -> float:
    for threshold, seconds in buckets:
        if ratio > threshold:
            return seconds
    return slowest


def estimate_zero_to_sixty(hp: float, weight_lbs: float, drivetrain: Drivetrain) -> float:
    """Estimate the 0-60 mph time in seconds, rounded to one decimal."""
    base_time = _bucket(
        power_to_weight(hp, weight_lbs), ZERO_TO_SIXTY_BUCKETS, ZERO_TO_SIXTY_SLOWEST
    )
    # 4WD launches like RWD in this model.
    factor = DRIVETRAIN_LAUNCH_FACTORS.get(drivetrain, 1.0)
    return round_half_up_to(base_time * factor, 1)


def estimate_quarter_mile(hp: float, weight_lbs: float) -> float:
    """Estimate the quarter-mile time in seconds, rounded to one decimal."""
    return round_half_up_to(
        _bucket(power_to_weight(hp, weight_lbs), QUARTER_MILE_BUCKETS, QUARTER_MILE_SLOWEST),
        1,
    )


def estimate_top_speed(hp: float, drag_coefficient: float = DEFAULT_DRAG_COEFFICIENT) -> int:
    """Very rough top-speed proxy in mph.

    Raises:
        ValueError: If *drag_coefficient* is not positive.
    """
    if drag_coefficient <= 0.0:
        raise ValueError("drag_coefficient must be > 0.")
    return round_half_up(math.sqrt(max(hp, 0.0) / drag_coefficient) * TOP_SPEED_SCALE)


def estimate(
    final_hp: float,
    weight_lbs: float,
    drivetrain: Drivetrain,
    drag_coefficient: float = DEFAULT_DRAG_COEFFICIENT,
    wheel_hp: int | None = None,
) -> PerformanceEstimate:
    """Derive all performance figures for a build.

    Args:
        final_hp: Crank horsepower after modifications.
        weight_lbs: Vehicle weight in pounds (> 0).
        drivetrain: Power-delivery layout.
        drag_coefficient: Aerodynamic drag coefficient (> 0).
        wheel_hp: Optional pre-computed wheel horsepower to attach.

    Returns:
        A :class:`PerformanceEstimate`.

    Raises:
        ValueError: If weight or drag coefficient is not positive.
    """
    return PerformanceEstimate(
        zero_to_sixty=estimate_zero_to_sixty(final_hp, weight_lbs, drivetrain),
        quarter_mile=estimate_quarter_mile(final_hp, weight_lbs),
        top_speed=estimate_top_speed(final_hp, drag_coefficient),
        power_to_weight=round(power_to_weight(final_hp, weight_lbs), 3),
        wheel_hp=wheel_hp,
    )
