"""Synergy bonuses for complementary modification categories.

Bonuses are flat thresholds on category counts, so crossing a threshold
produces a step change:

- two or more engine parts plus at least one exhaust part: +5 % of base HP
- three or more aerodynamics parts: +2 % of base HP

A build may qualify for both; the bonuses add.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Mapping

from garage_engine.core.modification import Modification
from garage_engine.core.units import round_half_up

ENGINE_EXHAUST_MIN_ENGINE: int = 2
ENGINE_EXHAUST_MIN_EXHAUST: int = 1
ENGINE_EXHAUST_BONUS: float = 0.05

AERO_PACKAGE_MIN: int = 3
AERO_PACKAGE_BONUS: float = 0.02


def count_categories(modifications: Iterable[Modification]) -> Counter[str]:
    """Tally applied modifications by category."""
    return Counter(mod.category for mod in modifications)


def compute_synergy(base_hp: float, category_counts: Mapping[str, int]) -> int:
    """Return the bonus horsepower earned by category combinations.

    Args:
        base_hp: Stock horsepower of the vehicle.
        category_counts: Number of applied modifications per category.

    Returns:
        Non-negative integer bonus.
    """
    bonus = 0
    if (
        category_counts.get("engine", 0) >= ENGINE_EXHAUST_MIN_ENGINE
        and category_counts.get("exhaust", 0) >= ENGINE_EXHAUST_MIN_EXHAUST
    ):
        bonus += round_half_up(base_hp * ENGINE_EXHAUST_BONUS)
    if category_counts.get("aerodynamics", 0) >= AERO_PACKAGE_MIN:
        bonus += round_half_up(base_hp * AERO_PACKAGE_BONUS)
    return max(0, bonus)
