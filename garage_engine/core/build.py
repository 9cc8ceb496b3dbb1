"""Build evaluation: the single entry point for build calculations.

:func:`evaluate_build` composes compatibility validation, per-part gain,
synergy, cost and performance estimation into one :class:`BuildResult`.
Every requested modification id ends up in exactly one of
``applied_modifications`` or ``rejected_modifications``; the only fatal
condition is an invalid vehicle specification.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from garage_engine.core.catalog import ModificationLookup
from garage_engine.core.compatibility import validate
from garage_engine.core.cost import compute_cost, cost_per_hp
from garage_engine.core.errors import UNKNOWN_MODIFICATION, InvalidInputError
from garage_engine.core.hp_gain import compute_gain
from garage_engine.core.modification import Modification
from garage_engine.core.performance import (
    DEFAULT_DRAG_COEFFICIENT,
    PerformanceEstimate,
    estimate,
)
from garage_engine.core.synergy import compute_synergy, count_categories
from garage_engine.core.units import round_half_up_to
from garage_engine.core.vehicle import (
    DEFAULT_VEHICLE_DEFAULTS,
    VehicleDefaults,
    VehicleSpec,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Result containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AppliedModification:
    """A modification that made it into the build."""

    id: str
    name: str
    category: str
    effective_hp_gain: int
    price: float


@dataclass(frozen=True)
class RejectedModification:
    """A requested modification that was left out, and why."""

    id: str
    reason: str


@dataclass(frozen=True)
class BuildResult:
    """Outcome of a single build evaluation.

    Attributes:
        base_hp: Stock horsepower.
        total_hp_gain: Sum of effective gains of applied modifications.
        synergy_bonus: Bonus horsepower from category combinations.
        final_hp: ``base_hp + total_hp_gain + synergy_bonus``.
        hp_increase_percentage: Increase over stock, e.g. ``"31.0%"``.
        parts_cost: Sum of part prices.
        labor_cost: Estimated labor (0 unless requested).
        total_cost: ``parts_cost + labor_cost``.
        cost_per_hp: Total cost per horsepower gained (two decimals).
        applied_modifications: Accepted modifications in selection order.
        rejected_modifications: Rejected ids in selection order.
        performance: Derived performance figures, when requested.
        warnings: Advisory notes (e.g. HP outside the plausible range).
    """

    base_hp: float
    total_hp_gain: int
    synergy_bonus: int
    final_hp: float
    hp_increase_percentage: str
    parts_cost: int
    labor_cost: int
    total_cost: int
    cost_per_hp: float
    applied_modifications: tuple[AppliedModification, ...] = ()
    rejected_modifications: tuple[RejectedModification, ...] = ()
    performance: PerformanceEstimate | None = None
    warnings: tuple[str, ...] = ()

    @property
    def applied_ids(self) -> list[str]:
        return [m.id for m in self.applied_modifications]

    @property
    def rejected_ids(self) -> list[str]:
        return [m.id for m in self.rejected_modifications]

    def to_dict(self) -> dict[str, Any]:
        """Serialise with the camelCase keys expected by API callers."""
        data: dict[str, Any] = {
            "baseHP": self.base_hp,
            "totalHpGain": self.total_hp_gain,
            "synergyBonus": self.synergy_bonus,
            "finalHP": self.final_hp,
            "hpIncreasePercentage": self.hp_increase_percentage,
            "partsCost": self.parts_cost,
            "laborCost": self.labor_cost,
            "totalCost": self.total_cost,
            "costPerHP": f"{round_half_up_to(self.cost_per_hp, 2):.2f}",
            "appliedModifications": [
                {
                    "id": m.id,
                    "name": m.name,
                    "category": m.category,
                    "effectiveHpGain": m.effective_hp_gain,
                    "price": m.price,
                }
                for m in self.applied_modifications
            ],
            "rejectedModifications": [
                {"id": m.id, "reason": m.reason} for m in self.rejected_modifications
            ],
            "warnings": list(self.warnings),
        }
        if self.performance is not None:
            data["performance"] = {
                "estimated0to60": f"{round_half_up_to(self.performance.zero_to_sixty, 1):.1f}",
                "estimatedQuarterMile": f"{round_half_up_to(self.performance.quarter_mile, 1):.1f}",
                "estimatedTopSpeed": self.performance.top_speed,
                "powerToWeight": self.performance.power_to_weight,
                "wheelHP": self.performance.wheel_hp,
            }
        return data


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def format_percentage(gained: float, base_hp: float) -> str:
    """Render a gain relative to *base_hp* as a one-decimal percentage."""
    return f"{round_half_up_to(gained / base_hp * 100.0, 1):.1f}%"


def _check_vehicle(vehicle: Any) -> None:
    if not isinstance(vehicle, VehicleSpec):
        raise InvalidInputError(
            f"vehicle must be a VehicleSpec, got {type(vehicle).__name__}."
        )
    if vehicle.base_hp <= 0:
        raise InvalidInputError(
            f"base_hp must be a positive number, got {vehicle.base_hp!r}."
        )


def _range_warnings(
    vehicle: VehicleSpec, final_hp: float, defaults: VehicleDefaults
) -> list[str]:
    notes: list[str] = []
    bounds = defaults.hp_range(vehicle.vehicle_type)
    if bounds is None:
        return notes
    low, high = bounds
    for label, hp in (("base", vehicle.base_hp), ("final", final_hp)):
        if not defaults.is_valid_hp(hp, vehicle.vehicle_type):
            notes.append(
                f"{label} HP {hp:g} is outside the typical {low:g}-{high:g} HP "
                f"range for a {vehicle.vehicle_type.value}"
            )
    return notes


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def evaluate_build(
    vehicle: VehicleSpec,
    modification_ids: Iterable[str],
    catalog: ModificationLookup,
    *,
    include_labor: bool = False,
    include_performance: bool = True,
    defaults: VehicleDefaults | None = None,
    drag_coefficient: float = DEFAULT_DRAG_COEFFICIENT,
) -> BuildResult:
    """Evaluate a vehicle build.

    Steps, in order:

    1. Validate the vehicle (fatal on failure).
    2. Deduplicate ids, keeping the first occurrence.
    3. Resolve each id; unknown ids are rejected.
    4. Validate compatibility against already-accepted parts (first seen
       wins a mutual-exclusivity conflict).
    5. Compute each accepted part's gain against the stock ``base_hp``.
    6. Add the synergy bonus for the accepted categories.
    7. Compute the cost breakdown and cost per HP.
    8. Optionally estimate performance.

    Args:
        vehicle: Base vehicle specification.
        modification_ids: Requested catalog ids, in selection order.
        catalog: Read-only lookup resolving ids to modifications.
        include_labor: Whether to add estimated labor to the cost.
        include_performance: Whether to attach a :class:`PerformanceEstimate`.
        defaults: Default weight/loss/range tables.  Falls back to
            :data:`DEFAULT_VEHICLE_DEFAULTS`.
        drag_coefficient: Drag coefficient for the top-speed proxy.

    Returns:
        A :class:`BuildResult`.

    Raises:
        InvalidInputError: If the vehicle specification is invalid.
    """
    _check_vehicle(vehicle)
    tables = defaults if defaults is not None else DEFAULT_VEHICLE_DEFAULTS
    base_hp = vehicle.base_hp

    requested: list[str] = list(dict.fromkeys(modification_ids))

    accepted: list[Modification] = []
    applied: list[AppliedModification] = []
    rejected: list[RejectedModification] = []
    total_hp_gain = 0

    for mod_id in requested:
        mod = catalog.get_modification(mod_id)
        if mod is None:
            logger.debug("Rejected %r: %s", mod_id, UNKNOWN_MODIFICATION)
            rejected.append(RejectedModification(id=mod_id, reason=UNKNOWN_MODIFICATION))
            continue

        check = validate(mod, accepted, vehicle.engine_type)
        if not check.ok:
            reason = check.reason or "incompatible"
            logger.debug("Rejected %r: %s", mod_id, reason)
            rejected.append(RejectedModification(id=mod_id, reason=reason))
            continue

        gain = compute_gain(base_hp, mod, vehicle.engine_type)
        accepted.append(mod)
        applied.append(
            AppliedModification(
                id=mod.id,
                name=mod.name,
                category=mod.category,
                effective_hp_gain=gain,
                price=mod.price,
            )
        )
        total_hp_gain += gain

    synergy_bonus = compute_synergy(base_hp, count_categories(accepted))
    final_hp = base_hp + total_hp_gain + synergy_bonus
    hp_gained = total_hp_gain + synergy_bonus

    costs = compute_cost(accepted, include_labor=include_labor)

    performance: PerformanceEstimate | None = None
    if include_performance:
        weight = tables.resolve_weight(vehicle)
        performance = estimate(
            final_hp,
            weight,
            vehicle.drivetrain,
            drag_coefficient=drag_coefficient,
            wheel_hp=tables.wheel_hp(final_hp, vehicle.drivetrain),
        )

    warnings = _range_warnings(vehicle, final_hp, tables)
    for note in warnings:
        logger.warning(note)

    logger.debug(
        "Build evaluated: base=%s gain=%d synergy=%d final=%s applied=%d rejected=%d",
        base_hp,
        total_hp_gain,
        synergy_bonus,
        final_hp,
        len(applied),
        len(rejected),
    )

    return BuildResult(
        base_hp=base_hp,
        total_hp_gain=total_hp_gain,
        synergy_bonus=synergy_bonus,
        final_hp=final_hp,
        hp_increase_percentage=format_percentage(hp_gained, base_hp),
        parts_cost=costs.parts_cost,
        labor_cost=costs.labor_cost,
        total_cost=costs.total_cost,
        cost_per_hp=cost_per_hp(costs.total_cost, hp_gained),
        applied_modifications=tuple(applied),
        rejected_modifications=tuple(rejected),
        performance=performance,
        warnings=tuple(warnings),
    )
