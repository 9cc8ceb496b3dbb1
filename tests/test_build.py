"""Tests for the build evaluator."""

from __future__ import annotations

import itertools
import logging

import pytest

from garage_engine.core.build import evaluate_build
from garage_engine.core.catalog import ModificationCatalog
from garage_engine.core.errors import UNKNOWN_MODIFICATION, InvalidInputError
from garage_engine.core.modification import Modification
from garage_engine.core.vehicle import (
    Drivetrain,
    EngineType,
    VehicleDefaults,
    VehicleSpec,
    VehicleType,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _sample_catalog() -> ModificationCatalog:
    """Return a small catalog covering every rule the evaluator applies."""
    return ModificationCatalog(
        [
            Modification(
                id="turbo",
                name="Turbocharger",
                category="engine",
                base_hp_gain=45,
                price=2500,
                compatibility=frozenset({"naturally_aspirated", "turbocharged"}),
            ),
            Modification(
                id="supercharger",
                name="Supercharger",
                category="engine",
                base_hp_gain=60,
                price=3500,
                compatibility=frozenset({"naturally_aspirated", "supercharged"}),
            ),
            Modification(
                id="cold_air_intake",
                name="Cold Air Intake",
                category="engine",
                base_hp_gain=8,
                price=300,
            ),
            Modification(
                id="ecu_tune", name="ECU Tune", category="engine", base_hp_gain=25, price=600
            ),
            Modification(
                id="intercooler",
                name="Intercooler",
                category="engine",
                base_hp_gain=15,
                price=800,
                compatibility=frozenset({"turbocharged", "supercharged"}),
            ),
            Modification(
                id="headers",
                name="Performance Headers",
                category="exhaust",
                base_hp_gain=18,
                price=1200,
            ),
            Modification(
                id="coilovers", name="Coilovers", category="suspension", base_hp_gain=0, price=1500
            ),
            Modification(
                id="splitter",
                name="Front Splitter",
                category="aerodynamics",
                base_hp_gain=0,
                price=600,
            ),
            Modification(
                id="wing", name="Rear Wing", category="aerodynamics", base_hp_gain=0, price=1200
            ),
            Modification(
                id="diffuser",
                name="Rear Diffuser",
                category="aerodynamics",
                base_hp_gain=0,
                price=900,
            ),
        ]
    )


def _sample_vehicle(base_hp: float = 200, **overrides: object) -> VehicleSpec:
    fields: dict[str, object] = {
        "base_hp": base_hp,
        "drivetrain": Drivetrain.FWD,
        "engine_type": EngineType.NATURALLY_ASPIRATED,
        "vehicle_type": VehicleType.SEDAN,
        "weight_lbs": 3200,
    }
    fields.update(overrides)
    return VehicleSpec(**fields)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Concrete scenarios
# ---------------------------------------------------------------------------


def test_turbo_and_intake_on_na_sedan() -> None:
    """200 HP NA: turbo 54 + intake 8 -> 262 HP, +31.0 %, 2800 parts."""
    result = evaluate_build(
        _sample_vehicle(), ["turbo", "cold_air_intake"], _sample_catalog()
    )
    assert [m.effective_hp_gain for m in result.applied_modifications] == [54, 8]
    assert result.total_hp_gain == 62
    assert result.synergy_bonus == 0
    assert result.final_hp == 262
    assert result.hp_increase_percentage == "31.0%"
    assert result.parts_cost == 2800
    assert result.labor_cost == 0
    assert result.total_cost == 2800
    assert result.cost_per_hp == 45.16
    assert result.rejected_modifications == ()


def test_turbo_on_high_output_vehicle() -> None:
    result = evaluate_build(
        _sample_vehicle(base_hp=500, vehicle_type=VehicleType.SPORTS_CAR),
        ["turbo"],
        _sample_catalog(),
    )
    assert result.total_hp_gain == 46


def test_performance_for_fwd_sedan() -> None:
    result = evaluate_build(
        _sample_vehicle(), ["turbo", "cold_air_intake"], _sample_catalog()
    )
    assert result.performance is not None
    assert result.performance.zero_to_sixty == 11.0
    assert result.to_dict()["performance"]["estimated0to60"] == "11.0"
    assert result.performance.wheel_hp == 223


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------

_SELECTIONS: list[list[str]] = [
    [],
    ["turbo"],
    ["turbo", "cold_air_intake", "headers"],
    ["ecu_tune", "cold_air_intake", "headers", "splitter", "wing", "diffuser"],
    ["supercharger", "turbo", "intercooler", "nitrous", "coilovers"],
]


@pytest.mark.parametrize("selection", _SELECTIONS)
@pytest.mark.parametrize("include_labor", [False, True])
def test_totals_identities(selection: list[str], include_labor: bool) -> None:
    result = evaluate_build(
        _sample_vehicle(), selection, _sample_catalog(), include_labor=include_labor
    )
    assert result.final_hp == result.base_hp + result.total_hp_gain + result.synergy_bonus
    assert result.total_cost == result.parts_cost + result.labor_cost


@pytest.mark.parametrize("selection", _SELECTIONS)
def test_every_id_accounted_for_once(selection: list[str]) -> None:
    result = evaluate_build(_sample_vehicle(), selection, _sample_catalog())
    applied = result.applied_ids
    rejected = result.rejected_ids
    assert not set(applied) & set(rejected)
    assert sorted(applied + rejected) == sorted(set(selection))


def test_duplicate_selection_is_idempotent() -> None:
    catalog = _sample_catalog()
    once = evaluate_build(_sample_vehicle(), ["turbo", "headers"], catalog)
    twice = evaluate_build(
        _sample_vehicle(), ["turbo", "headers", "turbo", "headers"], catalog
    )
    assert once == twice


def test_order_independence() -> None:
    catalog = _sample_catalog()
    ids = ["turbo", "cold_air_intake", "ecu_tune", "headers", "wing"]
    reference = evaluate_build(_sample_vehicle(), ids, catalog, include_labor=True)
    for perm in itertools.permutations(ids):
        result = evaluate_build(_sample_vehicle(), list(perm), catalog, include_labor=True)
        assert result.final_hp == reference.final_hp
        assert result.total_cost == reference.total_cost
        assert result.synergy_bonus == reference.synergy_bonus


def test_adding_a_part_never_lowers_final_hp() -> None:
    catalog = _sample_catalog()
    build: list[str] = []
    previous = evaluate_build(_sample_vehicle(), build, catalog).final_hp
    for mod_id in ["cold_air_intake", "ecu_tune", "headers", "coilovers", "splitter", "wing"]:
        build.append(mod_id)
        current = evaluate_build(_sample_vehicle(), build, catalog).final_hp
        assert current >= previous
        previous = current


@pytest.mark.parametrize(
    ("order", "winner", "loser"),
    [
        (["turbo", "supercharger"], "turbo", "supercharger"),
        (["supercharger", "turbo"], "supercharger", "turbo"),
    ],
)
def test_forced_induction_first_seen_wins(order: list[str], winner: str, loser: str) -> None:
    result = evaluate_build(_sample_vehicle(), order, _sample_catalog())
    assert result.applied_ids == [winner]
    assert len(result.rejected_modifications) == 1
    rejection = result.rejected_modifications[0]
    assert rejection.id == loser
    assert rejection.reason.startswith("mutually exclusive with")


# ---------------------------------------------------------------------------
# Rejections and errors
# ---------------------------------------------------------------------------


def test_unknown_id_rejected() -> None:
    result = evaluate_build(_sample_vehicle(), ["nitrous", "turbo"], _sample_catalog())
    assert result.applied_ids == ["turbo"]
    assert result.rejected_modifications[0].id == "nitrous"
    assert result.rejected_modifications[0].reason == UNKNOWN_MODIFICATION


def test_engine_incompatibility_rejected() -> None:
    result = evaluate_build(_sample_vehicle(), ["intercooler"], _sample_catalog())
    assert result.applied_ids == []
    assert result.rejected_modifications[0].reason == (
        "incompatible with naturally_aspirated engine"
    )


def test_invalid_vehicle_is_fatal() -> None:
    with pytest.raises(InvalidInputError):
        evaluate_build(_sample_vehicle(base_hp=0), ["turbo"], _sample_catalog())


def test_non_vehicle_input_is_fatal() -> None:
    with pytest.raises(InvalidInputError):
        evaluate_build({"base_hp": 200}, ["turbo"], _sample_catalog())  # type: ignore[arg-type]


def test_catalog_only_needs_lookup() -> None:
    """Any object with get_modification() can serve as the catalog."""

    class OneItemLookup:
        def get_modification(self, modification_id: str) -> Modification | None:
            if modification_id == "tune":
                return Modification(
                    id="tune", name="ECU Tune", category="engine", base_hp_gain=20, price=500
                )
            return None

    result = evaluate_build(_sample_vehicle(), ["tune", "turbo"], OneItemLookup())
    assert result.applied_ids == ["tune"]
    assert result.rejected_ids == ["turbo"]


# ---------------------------------------------------------------------------
# Synergy, labor and performance options
# ---------------------------------------------------------------------------


def test_engine_exhaust_synergy_applied() -> None:
    result = evaluate_build(
        _sample_vehicle(), ["turbo", "cold_air_intake", "headers"], _sample_catalog()
    )
    assert result.synergy_bonus == 10
    assert result.final_hp == 200 + 54 + 8 + 18 + 10
    assert result.hp_increase_percentage == "45.0%"


def test_aero_package_synergy_on_zero_gain_parts() -> None:
    result = evaluate_build(
        _sample_vehicle(), ["splitter", "wing", "diffuser"], _sample_catalog()
    )
    assert result.total_hp_gain == 0
    assert result.synergy_bonus == 4
    assert result.final_hp == 204


def test_labor_included_on_request() -> None:
    result = evaluate_build(
        _sample_vehicle(),
        ["turbo", "headers", "coilovers"],
        _sample_catalog(),
        include_labor=True,
    )
    assert result.parts_cost == 5200
    assert result.labor_cost == 750 + 240 + 225
    assert result.total_cost == 5200 + 1215


def test_no_gain_means_zero_cost_per_hp() -> None:
    result = evaluate_build(_sample_vehicle(), ["coilovers"], _sample_catalog())
    assert result.cost_per_hp == 0
    assert result.hp_increase_percentage == "0.0%"


def test_percentage_rounds_ties_up() -> None:
    """49 / 400 = 12.25%, shown as 12.3%."""
    catalog = ModificationCatalog(
        [
            Modification(
                id="tune", name="Stage 2 Tune", category="engine", base_hp_gain=49, price=1000
            )
        ]
    )
    result = evaluate_build(_sample_vehicle(base_hp=400), ["tune"], catalog)
    assert result.total_hp_gain == 49
    assert result.hp_increase_percentage == "12.3%"
    assert result.to_dict()["hpIncreasePercentage"] == "12.3%"


def test_performance_optional() -> None:
    result = evaluate_build(
        _sample_vehicle(), ["turbo"], _sample_catalog(), include_performance=False
    )
    assert result.performance is None
    assert "performance" not in result.to_dict()


def test_default_weight_used_when_missing() -> None:
    vehicle = _sample_vehicle(weight_lbs=None, vehicle_type=VehicleType.SUV)
    result = evaluate_build(vehicle, [], _sample_catalog())
    assert result.performance is not None
    assert result.performance.power_to_weight == pytest.approx(200 / 4.2, abs=1e-3)


def test_custom_defaults_without_loss_table() -> None:
    defaults = VehicleDefaults(default_weights={VehicleType.SEDAN: 3000.0})
    result = evaluate_build(
        _sample_vehicle(weight_lbs=None), ["turbo"], _sample_catalog(), defaults=defaults
    )
    assert result.performance is not None
    assert result.performance.wheel_hp is None
    assert result.warnings == ()


def test_out_of_range_hp_warns(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="garage_engine.core.build"):
        result = evaluate_build(_sample_vehicle(base_hp=900), ["turbo"], _sample_catalog())
    assert len(result.warnings) == 2
    assert result.warnings[0].startswith("base HP 900")
    assert any("outside the typical" in rec.message for rec in caplog.records)


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------


def test_to_dict_contract() -> None:
    result = evaluate_build(
        _sample_vehicle(), ["turbo", "cold_air_intake", "nitrous"], _sample_catalog()
    )
    data = result.to_dict()
    assert data["baseHP"] == 200
    assert data["finalHP"] == 262
    assert data["hpIncreasePercentage"] == "31.0%"
    assert data["costPerHP"] == "45.16"
    assert data["totalCost"] == 2800
    assert data["appliedModifications"][0] == {
        "id": "turbo",
        "name": "Turbocharger",
        "category": "engine",
        "effectiveHpGain": 54,
        "price": 2500,
    }
    assert data["rejectedModifications"] == [
        {"id": "nitrous", "reason": UNKNOWN_MODIFICATION}
    ]
    assert data["performance"]["estimatedQuarterMile"] == "17.0"
    assert data["performance"]["estimatedTopSpeed"] == 36


def test_evaluation_is_deterministic() -> None:
    catalog = _sample_catalog()
    ids = ["supercharger", "cold_air_intake", "headers", "wing"]
    assert evaluate_build(_sample_vehicle(), ids, catalog) == evaluate_build(
        _sample_vehicle(), ids, catalog
    )
