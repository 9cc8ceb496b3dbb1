"""Cost analysis for a set of applied modifications."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from garage_engine.core.modification import Modification
from garage_engine.core.units import round_half_up, round_half_up_to

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

LABOR_RATES: dict[str, float] = {
    "engine": 0.30,
    "exhaust": 0.20,
}
DEFAULT_LABOR_RATE: float = 0.15

# (exclusive upper bound, tier) in ascending order.
PRICE_TIERS: tuple[tuple[float, str], ...] = (
    (500.0, "budget"),
    (1500.0, "moderate"),
    (3000.0, "premium"),
)
TOP_PRICE_TIER: str = "high-end"


@dataclass(frozen=True)
class CostBreakdown:
    """Whole-unit cost totals for a build.

    Attributes:
        parts_cost: Sum of part prices.
        labor_cost: Estimated installation labor (0 when labor is excluded).
        total_cost: ``parts_cost + labor_cost``.
    """

    parts_cost: int
    labor_cost: int
    total_cost: int


def labor_rate(category: str) -> float:
    """Return the labor fraction of part price for *category*."""
    return LABOR_RATES.get(category.lower(), DEFAULT_LABOR_RATE)


def compute_cost(
    applied_modifications: Iterable[Modification],
    include_labor: bool = False,
) -> CostBreakdown:
    """Compute parts, labor and total cost.

    Labor is estimated per part as a fixed fraction of its price (engine
    30 %, exhaust 20 %, anything else 15 %) and summed.  It does not depend
    on overall build complexity.

    Args:
        applied_modifications: Modifications that passed validation.
        include_labor: Whether to estimate installation labor.

    Returns:
        A :class:`CostBreakdown`; ``total_cost`` equals the sum of the two
        rounded components exactly.
    """
    parts: float = 0.0
    labor: float = 0.0
    for mod in applied_modifications:
        parts += mod.price
        if include_labor:
            labor += mod.price * labor_rate(mod.category)

    parts_cost = round_half_up(parts)
    labor_cost = round_half_up(labor)
    return CostBreakdown(
        parts_cost=parts_cost,
        labor_cost=labor_cost,
        total_cost=parts_cost + labor_cost,
    )


def cost_per_hp(total_cost: float, hp_gained: float) -> float:
    """Return cost per horsepower gained, to two decimal places.

    Returns 0.0 when nothing was gained.
    """
    if hp_gained == 0:
        return 0.0
    return round_half_up_to(total_cost / hp_gained, 2)


def categorize_price_level(price: float) -> str:
    """Classify a part price into a tier.

    Bounds are inclusive below and exclusive above: 499 is "budget",
    500 is "moderate".
    """
    for upper, tier in PRICE_TIERS:
        if price < upper:
            return tier
    return TOP_PRICE_TIER
