"""Garage Build Explorer.

Interactive build configurator built with Streamlit and Plotly.  Lets a user
pick a base vehicle and a set of modifications, then shows the horsepower
contribution of every part, the cost breakdown, performance estimates and
the best-value parts for the chosen vehicle.

Launch with::

    streamlit run dashboard/app.py
"""

from __future__ import annotations

import plotly.graph_objects as go
import streamlit as st

from garage_engine.analysis.breakdown import (
    build_breakdown_frame,
    rank_by_value,
)
from garage_engine.config import load_catalog, load_vehicle_defaults
from garage_engine.core.build import BuildResult, evaluate_build
from garage_engine.core.catalog import ModificationCatalog
from garage_engine.core.errors import InvalidInputError
from garage_engine.core.vehicle import (
    Drivetrain,
    EngineType,
    VehicleDefaults,
    VehicleSpec,
    VehicleType,
)

_SOURCE_COLOURS: dict[str, str] = {
    "base": "#3b82f6",
    "engine": "#f97316",
    "exhaust": "#ef4444",
    "synergy": "#a855f7",
}
_DEFAULT_COLOUR: str = "#6b7280"


@st.cache_resource
def _load_data() -> tuple[ModificationCatalog, VehicleDefaults]:
    return load_catalog(), load_vehicle_defaults()


def _sidebar_vehicle(defaults: VehicleDefaults) -> VehicleSpec:
    st.sidebar.header("Base Vehicle")

    vehicle_type = VehicleType(
        st.sidebar.selectbox(
            "Vehicle type", options=[v.value for v in VehicleType], index=0
        )
    )
    engine_type = EngineType(
        st.sidebar.selectbox(
            "Engine type", options=[e.value for e in EngineType], index=0
        )
    )
    drivetrain = Drivetrain(
        st.sidebar.selectbox(
            "Drivetrain", options=[d.value for d in Drivetrain], index=0
        )
    )
    base_hp: int = st.sidebar.number_input(
        "Stock horsepower", min_value=1, max_value=2000, value=200, step=5
    )
    default_weight = defaults.default_weights.get(vehicle_type, 3200.0)
    weight: int = st.sidebar.number_input(
        "Curb weight (lb)",
        min_value=500,
        max_value=10000,
        value=int(default_weight),
        step=50,
    )
    return VehicleSpec(
        base_hp=base_hp,
        drivetrain=drivetrain,
        engine_type=engine_type,
        vehicle_type=vehicle_type,
        weight_lbs=weight,
    )


def _hp_chart(result: BuildResult) -> go.Figure:
    frame = build_breakdown_frame(result)
    colours = [_SOURCE_COLOURS.get(src, _DEFAULT_COLOUR) for src in frame["source"]]
    fig = go.Figure(
        go.Bar(
            x=frame["label"],
            y=frame["hp"],
            marker_color=colours,
            customdata=frame["cumulative_hp"],
            hovertemplate="%{x}: %{y} HP (running total %{customdata})<extra></extra>",
        )
    )
    fig.update_layout(
        title="HP Contribution",
        yaxis_title="Horsepower",
        height=380,
        showlegend=False,
    )
    return fig


def main() -> None:
    """Render the build explorer."""
    st.set_page_config(page_title="Garage Build Explorer", layout="wide")
    st.title("Garage Build Explorer")

    catalog, defaults = _load_data()

    try:
        vehicle = _sidebar_vehicle(defaults)
    except InvalidInputError as exc:
        st.error(f"Invalid vehicle: {exc}")
        return

    include_labor: bool = st.sidebar.checkbox("Include labor estimate", value=True)

    # ── Section 1: Modification picker ───────────────────────────────────
    st.header("1 -- Modifications")

    selected: list[str] = []
    columns = st.columns(max(1, len(catalog.categories)))
    for col, category in zip(columns, catalog.categories):
        mods = catalog.by_category(category)
        with col:
            picked = st.multiselect(
                category.title(),
                options=[m.id for m in mods],
                format_func=lambda mod_id: catalog.get_modification(mod_id).name,
            )
        selected.extend(picked)

    result = evaluate_build(
        vehicle,
        selected,
        catalog,
        include_labor=include_labor,
        defaults=defaults,
    )

    # ── Section 2: Power ─────────────────────────────────────────────────
    st.header("2 -- Power")

    col_base, col_gain, col_final = st.columns(3)
    col_base.metric("Base HP", f"{result.base_hp:g}")
    col_gain.metric(
        "Gain",
        f"+{result.total_hp_gain + result.synergy_bonus}",
        result.hp_increase_percentage,
    )
    col_final.metric("Final HP", f"{result.final_hp:g}")
    st.plotly_chart(_hp_chart(result), use_container_width=True)

    for note in result.warnings:
        st.warning(note)
    for rej in result.rejected_modifications:
        st.error(f"{rej.id}: {rej.reason}")

    # ── Section 3: Cost and performance ──────────────────────────────────
    st.header("3 -- Cost & Performance")

    col_parts, col_labor, col_total, col_cphp = st.columns(4)
    col_parts.metric("Parts", f"${result.parts_cost:,}")
    col_labor.metric("Labor", f"${result.labor_cost:,}")
    col_total.metric("Total", f"${result.total_cost:,}")
    col_cphp.metric("Cost per HP", f"${result.cost_per_hp:.2f}")

    if result.performance is not None:
        perf = result.performance
        col_060, col_qm, col_top, col_whp = st.columns(4)
        col_060.metric("0-60 mph", f"{perf.zero_to_sixty:.1f} s")
        col_qm.metric("Quarter mile", f"{perf.quarter_mile:.1f} s")
        col_top.metric("Top speed", f"{perf.top_speed} mph")
        col_whp.metric("Wheel HP", "n/a" if perf.wheel_hp is None else str(perf.wheel_hp))
        st.caption(
            "Performance figures are closed-form approximations from the "
            "power-to-weight ratio, not simulation results."
        )

    # ── Section 4: Best value parts ──────────────────────────────────────
    st.header("4 -- Best Value Parts")
    st.dataframe(
        rank_by_value(catalog, vehicle, top_n=10)[
            ["name", "category", "effective_hp_gain", "price", "price_tier", "cost_per_hp"]
        ],
        use_container_width=True,
    )


if __name__ == "__main__":
    main()
