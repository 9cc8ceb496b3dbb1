"""Configuration loader for the garage build engine.

Reads the modification catalog and the vehicle default tables from YAML
files under ``data/`` and converts them into the immutable core types.
Set ``GARAGE_ENGINE_DATA_DIR`` to read them from another directory.
"""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path
from typing import Any

import yaml

from garage_engine.core.catalog import ModificationCatalog
from garage_engine.core.modification import ALL_ENGINES, Modification, ModificationKind
from garage_engine.core.vehicle import (
    Drivetrain,
    VehicleDefaults,
    VehicleType,
    parse_enum,
)

logger = logging.getLogger(__name__)

DATA_DIR: Path = Path(
    os.environ.get(
        "GARAGE_ENGINE_DATA_DIR",
        Path(__file__).resolve().parent.parent / "data",
    )
)
CATALOG_PATH: Path = DATA_DIR / "modifications.yaml"
VEHICLE_DEFAULTS_PATH: Path = DATA_DIR / "vehicle_defaults.yaml"

# Values substituted for unusable numeric fields when auto-repairing.
_REPAIR_HP_GAIN: float = 0.0
_REPAIR_PRICE: float = 500.0

_KINDS: frozenset[str] = frozenset(k.value for k in ModificationKind)


def _read_yaml(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")
    with open(path, encoding="utf-8") as fh:
        return yaml.safe_load(fh)


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


# ---------------------------------------------------------------------------
# Modification catalog
# ---------------------------------------------------------------------------


def _repair_or_raise(
    label: str, field: str, value: Any, replacement: float, strict: bool
) -> float:
    if strict:
        raise ValueError(f"Modification {label} has invalid {field}: {value!r}")
    logger.warning(
        "Modification %s has invalid %s %r; using %s", label, field, value, replacement
    )
    return replacement


def _build_modification(
    category: str, mod_id: str, entry: dict[str, Any], strict: bool
) -> Modification:
    label = f"{category}/{mod_id}"

    name = entry.get("name")
    if not name:
        raise ValueError(f"Modification {label} is missing required field 'name'")

    hp_gain = entry.get("hp_gain")
    if not _is_number(hp_gain) or hp_gain < 0:
        hp_gain = _repair_or_raise(label, "hp_gain", hp_gain, _REPAIR_HP_GAIN, strict)

    price = entry.get("price")
    if not _is_number(price) or price < 0:
        price = _repair_or_raise(label, "price", price, _REPAIR_PRICE, strict)

    compatibility = entry.get("compatibility")
    if isinstance(compatibility, str):
        compatibility = [compatibility]
    if not compatibility:
        if strict:
            raise ValueError(f"Modification {label} has no compatibility list")
        logger.warning("Modification %s has no compatibility list; using [all]", label)
        compatibility = [ALL_ENGINES]

    exclusive = entry.get("mutually_exclusive_with") or ()
    if isinstance(exclusive, str):
        exclusive = [exclusive]

    kind = entry.get("kind")
    if kind is not None and str(kind).lower() not in _KINDS:
        raise ValueError(
            f"Modification {label} has unknown kind {kind!r} "
            f"(expected one of {sorted(_KINDS)})"
        )

    return Modification(
        id=str(mod_id),
        name=str(name),
        category=str(category),
        base_hp_gain=float(hp_gain),
        price=float(price),
        compatibility=frozenset(str(tag) for tag in compatibility),
        kind=ModificationKind(str(kind).lower()) if kind is not None else None,
        mutually_exclusive_with=frozenset(str(other) for other in exclusive),
        description=str(entry.get("description", "")),
    )


def load_catalog(path: Path | None = None, strict: bool = False) -> ModificationCatalog:
    """Load the modification catalog from a YAML file.

    Each entry under ``modifications.<category>.<id>`` is validated and
    converted into a :class:`Modification`.  In the default (non-strict)
    mode, an unusable ``hp_gain`` is replaced by 0, an unusable ``price`` by
    500 and a missing ``compatibility`` by ``[all]``; every repair is logged.

    Args:
        path: Optional override for the catalog file path.
        strict: Raise instead of repairing invalid entries.

    Returns:
        A read-only :class:`ModificationCatalog`.

    Raises:
        FileNotFoundError: If the catalog file does not exist.
        ValueError: If the file structure is invalid, an entry lacks a name
            or declares an unknown kind, ids repeat, or (strict mode) an
            entry needs repair.
    """
    catalog_path = path or CATALOG_PATH
    data = _read_yaml(catalog_path)

    if not isinstance(data, dict) or not isinstance(data.get("modifications"), dict):
        raise ValueError(
            f"Catalog {catalog_path} must contain a 'modifications' mapping"
        )

    modifications: list[Modification] = []
    for category, entries in data["modifications"].items():
        if not isinstance(entries, dict):
            raise ValueError(f"Catalog category {category!r} must be a mapping")
        for mod_id, entry in entries.items():
            if not isinstance(entry, dict):
                raise ValueError(f"Modification {category}/{mod_id} must be a mapping")
            modifications.append(_build_modification(category, mod_id, entry, strict))

    catalog = ModificationCatalog(modifications)
    logger.info("Loaded %d modifications from %s", len(catalog), catalog_path)
    return catalog


# ---------------------------------------------------------------------------
# Vehicle default tables
# ---------------------------------------------------------------------------


def load_vehicle_defaults(path: Path | None = None) -> VehicleDefaults:
    """Load default weights, drivetrain losses and HP ranges from YAML.

    Args:
        path: Optional override for the defaults file path.

    Returns:
        A validated :class:`VehicleDefaults`.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a section is missing, a key is not a known vehicle
            type or drivetrain, or a value is out of range.
    """
    defaults_path = path or VEHICLE_DEFAULTS_PATH
    data = _read_yaml(defaults_path)

    if not isinstance(data, dict) or "default_weights" not in data:
        raise ValueError(
            f"Vehicle defaults {defaults_path} must contain 'default_weights'"
        )

    weights: dict[VehicleType, float] = {}
    for key, value in data["default_weights"].items():
        if not _is_number(value):
            raise ValueError(f"default_weights.{key} must be numeric, got {value!r}")
        weights[parse_enum(VehicleType, key, "default_weights key")] = float(value)

    losses: dict[Drivetrain, float] = {}
    for key, value in (data.get("drivetrain_loss") or {}).items():
        if not _is_number(value):
            raise ValueError(f"drivetrain_loss.{key} must be numeric, got {value!r}")
        losses[parse_enum(Drivetrain, str(key), "drivetrain_loss key")] = float(value)

    ranges: dict[VehicleType, tuple[float, float]] = {}
    for key, bounds in (data.get("hp_ranges") or {}).items():
        if not isinstance(bounds, dict) or "min" not in bounds or "max" not in bounds:
            raise ValueError(f"hp_ranges.{key} must have 'min' and 'max'")
        ranges[parse_enum(VehicleType, key, "hp_ranges key")] = (
            float(bounds["min"]),
            float(bounds["max"]),
        )

    return VehicleDefaults(
        default_weights=weights,
        drivetrain_loss=losses,
        hp_ranges=ranges,
    )
