"""Tabular views of the catalog and of evaluated builds.

These helpers turn core results into :class:`pandas.DataFrame` objects for
the dashboard and for ad-hoc analysis.  They never re-derive any formula;
every number comes from :mod:`garage_engine.core`.
"""

from __future__ import annotations

import pandas as pd

from garage_engine.core.build import BuildResult
from garage_engine.core.catalog import ModificationCatalog
from garage_engine.core.compatibility import validate
from garage_engine.core.cost import categorize_price_level, cost_per_hp
from garage_engine.core.hp_gain import compute_gain
from garage_engine.core.vehicle import VehicleSpec

_CATALOG_COLUMNS: list[str] = [
    "id",
    "name",
    "category",
    "kind",
    "base_hp_gain",
    "price",
    "price_tier",
]

_BREAKDOWN_COLUMNS: list[str] = ["label", "source", "hp", "cumulative_hp"]


# ---------------------------------------------------------------------------
# Catalog views
# ---------------------------------------------------------------------------


def catalog_frame(
    catalog: ModificationCatalog,
    vehicle: VehicleSpec | None = None,
) -> pd.DataFrame:
    """Return one row per catalog modification.

    Columns: ``id``, ``name``, ``category``, ``kind``, ``base_hp_gain``,
    ``price`` and ``price_tier``.  When *vehicle* is given, three more
    columns describe the part on that vehicle in isolation:
    ``effective_hp_gain``, ``compatible`` (engine fit only) and
    ``cost_per_hp`` (parts price only).

    Args:
        catalog: The modification catalog.
        vehicle: Optional vehicle to evaluate each part against.

    Returns:
        A DataFrame in catalog order.
    """
    rows: list[dict[str, object]] = []
    for mod in catalog:
        row: dict[str, object] = {
            "id": mod.id,
            "name": mod.name,
            "category": mod.category,
            "kind": mod.kind.value,
            "base_hp_gain": mod.base_hp_gain,
            "price": mod.price,
            "price_tier": categorize_price_level(mod.price),
        }
        if vehicle is not None:
            gain = compute_gain(vehicle.base_hp, mod, vehicle.engine_type)
            row["effective_hp_gain"] = gain
            row["compatible"] = validate(mod, [], vehicle.engine_type).ok
            row["cost_per_hp"] = cost_per_hp(mod.price, gain)
        rows.append(row)

    columns = list(_CATALOG_COLUMNS)
    if vehicle is not None:
        columns += ["effective_hp_gain", "compatible", "cost_per_hp"]
    return pd.DataFrame(rows, columns=columns)


def rank_by_value(
    catalog: ModificationCatalog,
    vehicle: VehicleSpec,
    top_n: int | None = None,
) -> pd.DataFrame:
    """Rank compatible, power-adding parts by cost per horsepower.

    Parts that do not fit the engine or add no power are dropped.  Ties on
    cost per HP are broken by larger gain first, then by id.

    Args:
        catalog: The modification catalog.
        vehicle: Vehicle to evaluate against.
        top_n: Optional number of rows to keep.

    Returns:
        DataFrame with the :func:`catalog_frame` vehicle columns, best value
        first, with a fresh integer index.
    """
    if top_n is not None and top_n < 0:
        raise ValueError("top_n must be >= 0.")

    frame = catalog_frame(catalog, vehicle)
    frame = frame[frame["compatible"] & (frame["effective_hp_gain"] > 0)]
    frame = frame.sort_values(
        by=["cost_per_hp", "effective_hp_gain", "id"],
        ascending=[True, False, True],
    ).reset_index(drop=True)
    if top_n is not None:
        frame = frame.head(top_n)
    return frame


# ---------------------------------------------------------------------------
# Build views
# ---------------------------------------------------------------------------


def build_breakdown_frame(result: BuildResult) -> pd.DataFrame:
    """Return the horsepower contributions of an evaluated build.

    The first row is the stock output, followed by one row per applied
    modification in selection order, then a synergy row when a bonus was
    earned.  ``cumulative_hp`` of the last row equals ``result.final_hp``.

    Args:
        result: An evaluated build.

    Returns:
        DataFrame with columns ``label``, ``source``, ``hp`` and
        ``cumulative_hp``.
    """
    rows: list[dict[str, object]] = [
        {"label": "Base", "source": "base", "hp": result.base_hp}
    ]
    for mod in result.applied_modifications:
        rows.append(
            {"label": mod.name, "source": mod.category, "hp": mod.effective_hp_gain}
        )
    if result.synergy_bonus:
        rows.append({"label": "Synergy", "source": "synergy", "hp": result.synergy_bonus})

    frame = pd.DataFrame(rows, columns=_BREAKDOWN_COLUMNS[:3])
    frame["cumulative_hp"] = frame["hp"].cumsum()
    return frame
