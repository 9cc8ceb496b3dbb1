"""Tests for unit conversions and rounding."""

import pytest

from garage_engine.core.units import (
    bhp_to_whp,
    kw_to_hp,
    metric_to_sae,
    round_half_up,
    round_half_up_to,
)


def test_round_half_up_rounds_halves_away_from_zero() -> None:
    """Unlike round(), 12.5 must round to 13."""
    assert round_half_up(12.5) == 13
    assert round_half_up(13.5) == 14
    assert round_half_up(45.9) == 46
    assert round_half_up(-2.5) == -3
    assert round_half_up(0.49) == 0


def test_round_half_up_to_rounds_decimal_ties_up() -> None:
    assert round_half_up_to(2.125, 2) == 2.13
    assert round_half_up_to(12.25, 1) == 12.3
    assert round_half_up_to(45.1612, 2) == 45.16
    assert round_half_up_to(11.000000000000002, 1) == 11.0


def test_kw_to_hp() -> None:
    assert kw_to_hp(100) == 134
    assert kw_to_hp(0) == 0


def test_metric_to_sae() -> None:
    assert metric_to_sae(100) == 99


def test_bhp_to_whp_default_loss() -> None:
    """Default drivetrain loss is 15 %."""
    assert bhp_to_whp(200) == 170


def test_bhp_to_whp_rejects_bad_loss() -> None:
    with pytest.raises(ValueError):
        bhp_to_whp(200, drivetrain_loss=1.0)
    with pytest.raises(ValueError):
        bhp_to_whp(200, drivetrain_loss=-0.1)
