"""Core calculation modules for the garage build engine."""

from garage_engine.core.build import (
    AppliedModification,
    BuildResult,
    RejectedModification,
    evaluate_build,
)
from garage_engine.core.catalog import ModificationCatalog, ModificationLookup
from garage_engine.core.compatibility import CompatibilityResult, validate
from garage_engine.core.cost import (
    CostBreakdown,
    categorize_price_level,
    compute_cost,
    cost_per_hp,
)
from garage_engine.core.errors import UNKNOWN_MODIFICATION, InvalidInputError
from garage_engine.core.hp_gain import compute_gain
from garage_engine.core.modification import (
    Modification,
    ModificationKind,
    classify_kind,
)
from garage_engine.core.performance import PerformanceEstimate, estimate
from garage_engine.core.synergy import compute_synergy, count_categories
from garage_engine.core.units import bhp_to_whp, kw_to_hp, metric_to_sae
from garage_engine.core.vehicle import (
    DEFAULT_VEHICLE_DEFAULTS,
    Drivetrain,
    EngineType,
    VehicleDefaults,
    VehicleSpec,
    VehicleType,
)

__all__ = [
    "AppliedModification",
    "BuildResult",
    "CompatibilityResult",
    "CostBreakdown",
    "DEFAULT_VEHICLE_DEFAULTS",
    "Drivetrain",
    "EngineType",
    "InvalidInputError",
    "Modification",
    "ModificationCatalog",
    "ModificationKind",
    "ModificationLookup",
    "PerformanceEstimate",
    "RejectedModification",
    "UNKNOWN_MODIFICATION",
    "VehicleDefaults",
    "VehicleSpec",
    "VehicleType",
    "bhp_to_whp",
    "categorize_price_level",
    "classify_kind",
    "compute_cost",
    "compute_gain",
    "compute_synergy",
    "cost_per_hp",
    "count_categories",
    "estimate",
    "evaluate_build",
    "kw_to_hp",
    "metric_to_sae",
    "validate",
]
