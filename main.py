"""CLI entrypoint for the garage build engine.

Usage::

    python main.py                       # sample build
    python main.py turbo ecu_tune catback
"""

from __future__ import annotations

import logging
import sys

from garage_engine import __version__
from garage_engine.config import load_catalog, load_vehicle_defaults
from garage_engine.core.build import evaluate_build
from garage_engine.core.vehicle import Drivetrain, EngineType, VehicleSpec, VehicleType

logging.basicConfig(
    stream=sys.stderr,
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

_SAMPLE_BUILD: list[str] = ["turbo", "cold_air_intake", "headers", "coilovers"]


def main(argv: list[str] | None = None) -> int:
    """Evaluate a build on a sample sedan and print the breakdown."""
    modification_ids = list(argv if argv is not None else sys.argv[1:]) or _SAMPLE_BUILD

    print(f"Garage Build Engine v{__version__}")
    print("=" * 56)

    catalog = load_catalog()
    defaults = load_vehicle_defaults()
    print(f"\nCatalog: {len(catalog)} modifications in {len(catalog.categories)} categories")

    vehicle = VehicleSpec(
        base_hp=200,
        drivetrain=Drivetrain.FWD,
        engine_type=EngineType.NATURALLY_ASPIRATED,
        vehicle_type=VehicleType.SEDAN,
    )
    print(
        f"Vehicle: {vehicle.vehicle_type.value}, {vehicle.base_hp} HP, "
        f"{vehicle.engine_type.value}, {vehicle.drivetrain.value}"
    )
    print("-" * 56)

    result = evaluate_build(
        vehicle, modification_ids, catalog, include_labor=True, defaults=defaults
    )

    print(f"\n  {'Modification':<28}  {'HP':>5}  {'Price':>8}")
    print(f"  {'-' * 28}  {'-' * 5}  {'-' * 8}")
    for mod in result.applied_modifications:
        print(f"  {mod.name:<28}  {mod.effective_hp_gain:>+5d}  {mod.price:>8.0f}")
    if result.synergy_bonus:
        print(f"  {'Synergy bonus':<28}  {result.synergy_bonus:>+5d}")
    for rej in result.rejected_modifications:
        print(f"  [rejected] {rej.id}: {rej.reason}")

    print(f"\nFinal HP     : {result.final_hp} ({result.hp_increase_percentage})")
    print(
        f"Cost         : {result.total_cost} "
        f"(parts {result.parts_cost} + labor {result.labor_cost})"
    )
    print(f"Cost per HP  : {result.cost_per_hp:.2f}")
    if result.performance is not None:
        perf = result.performance
        print(f"0-60 mph     : {perf.zero_to_sixty:.1f} s")
        print(f"Quarter mile : {perf.quarter_mile:.1f} s")
        print(f"Top speed    : {perf.top_speed} mph (estimate)")
        if perf.wheel_hp is not None:
            print(f"Wheel HP     : {perf.wheel_hp}")
    for note in result.warnings:
        print(f"Warning      : {note}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
