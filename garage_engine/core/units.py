"""Unit conversions and rounding helpers for the build evaluation engine.

Only the conversions the engine needs are provided: kilowatts and metric
(PS) horsepower to SAE horsepower, and brake horsepower to an estimated
wheel horsepower through a fractional drivetrain loss.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

KW_TO_HP: float = 1.34102
METRIC_TO_SAE: float = 0.9863
DEFAULT_DRIVETRAIN_LOSS: float = 0.15


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded away from zero.

    Python's built-in :func:`round` uses banker's rounding, which would make
    ``round(12.5)`` return 12.  Horsepower and cost figures round .5 up.

    Args:
        value: Finite number to round.

    Returns:
        Nearest integer.
    """
    if value < 0.0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def round_half_up_to(value: float, places: int) -> float:
    """Round to *places* decimals, with halves rounded away from zero.

    The value is quantised from its shortest decimal representation, so
    ``2.125`` becomes 2.13 and ``12.25`` becomes 12.3 where :func:`round`
    would give 2.12 and 12.2.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def kw_to_hp(kw: float) -> int:
    """Convert kilowatts to horsepower (rounded)."""
    return round_half_up(kw * KW_TO_HP)


def metric_to_sae(metric_hp: float) -> int:
    """Convert metric horsepower (PS) to SAE horsepower (rounded)."""
    return round_half_up(metric_hp * METRIC_TO_SAE)


def bhp_to_whp(bhp: float, drivetrain_loss: float = DEFAULT_DRIVETRAIN_LOSS) -> int:
    """Estimate wheel horsepower from brake horsepower.

    Args:
        bhp: Brake (crank) horsepower.
        drivetrain_loss: Fraction of power lost between crank and wheels,
            in ``[0.0, 1.0)``.

    Returns:
        Estimated wheel horsepower (rounded).

    Raises:
        ValueError: If *drivetrain_loss* is outside ``[0.0, 1.0)``.
    """
    if not 0.0 <= drivetrain_loss < 1.0:
        raise ValueError("drivetrain_loss must be in [0.0, 1.0).")
    return round_half_up(bhp * (1.0 - drivetrain_loss))
