"""Horsepower gain of a single modification.

The advertised gain of a part is scaled by how well it pairs with the
vehicle's induction method::

    gain = base_hp_gain * pairing_multiplier * diminishing_factor

Pairings that amplify a part (everything else is x1.0):

    naturally_aspirated + turbo kit       x1.2
    turbocharged        + intercooler     x1.3
    turbocharged        + exhaust         x1.1
    supercharged        + intake          x1.2

Builds whose stock output exceeds 450 HP (``base_hp / 300 > 1.5``) see
reduced returns per bolt-on part: the gain is further multiplied by 0.85.
"""

from __future__ import annotations

from garage_engine.core.modification import Modification, ModificationKind
from garage_engine.core.units import round_half_up
from garage_engine.core.vehicle import EngineType

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

PAIRING_MULTIPLIERS: dict[tuple[EngineType, ModificationKind], float] = {
    (EngineType.NATURALLY_ASPIRATED, ModificationKind.TURBO): 1.2,
    (EngineType.TURBOCHARGED, ModificationKind.INTERCOOLER): 1.3,
    (EngineType.TURBOCHARGED, ModificationKind.EXHAUST): 1.1,
    (EngineType.SUPERCHARGED, ModificationKind.INTAKE): 1.2,
}

BASELINE_HP: float = 300.0
DIMINISHING_RATIO: float = 1.5
DIMINISHING_FACTOR: float = 0.85


def pairing_multiplier(engine_type: EngineType, kind: ModificationKind) -> float:
    """Return the multiplier for a (engine type, modification kind) pair."""
    return PAIRING_MULTIPLIERS.get((engine_type, kind), 1.0)


def has_diminishing_returns(base_hp: float) -> bool:
    """True once stock output is past the diminishing-returns threshold."""
    return base_hp / BASELINE_HP > DIMINISHING_RATIO


def compute_gain(
    base_hp: float,
    modification: Modification,
    engine_type: EngineType,
) -> int:
    """Compute the effective horsepower gain of one modification.

    Gains are always computed against the unmodified *base_hp*; they do not
    compound on other modifications in the same build.

    Args:
        base_hp: Stock horsepower of the vehicle (> 0).
        modification: The part being fitted.
        engine_type: Induction method of the vehicle.

    Returns:
        Non-negative integer gain.
    """
    gain: float = modification.base_hp_gain * pairing_multiplier(
        engine_type, modification.kind
    )
    if has_diminishing_returns(base_hp):
        gain *= DIMINISHING_FACTOR
    return max(0, round_half_up(gain))
