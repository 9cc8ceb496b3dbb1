"""Tests for category synergy bonuses."""

from collections import Counter

from garage_engine.core.modification import Modification
from garage_engine.core.synergy import compute_synergy, count_categories


def test_no_bonus_for_empty_build() -> None:
    assert compute_synergy(200, Counter()) == 0


def test_engine_exhaust_bonus() -> None:
    """Two engine parts and one exhaust part earn 5 % of base HP."""
    assert compute_synergy(200, {"engine": 2, "exhaust": 1}) == 10


def test_engine_exhaust_threshold_is_a_step() -> None:
    assert compute_synergy(200, {"engine": 1, "exhaust": 3}) == 0
    assert compute_synergy(200, {"engine": 2, "exhaust": 0}) == 0
    assert compute_synergy(200, {"engine": 5, "exhaust": 2}) == 10


def test_aero_package_bonus() -> None:
    assert compute_synergy(200, {"aerodynamics": 2}) == 0
    assert compute_synergy(200, {"aerodynamics": 3}) == 4


def test_bonuses_are_additive() -> None:
    counts = {"engine": 2, "exhaust": 1, "aerodynamics": 4}
    assert compute_synergy(300, counts) == 15 + 6


def test_half_bonus_rounds_up() -> None:
    """250 * 0.05 = 12.5 rounds to 13."""
    assert compute_synergy(250, {"engine": 2, "exhaust": 1}) == 13


def test_count_categories() -> None:
    mods = [
        Modification(id="a", name="A", category="engine", base_hp_gain=1, price=1),
        Modification(id="b", name="B", category="Engine", base_hp_gain=1, price=1),
        Modification(id="c", name="C", category="exhaust", base_hp_gain=1, price=1),
    ]
    assert count_categories(mods) == Counter({"engine": 2, "exhaust": 1})
