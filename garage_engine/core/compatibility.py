"""Compatibility rules for combining modifications on one vehicle.

Two rules are applied, in order:

1. Mutual exclusivity.  Turbocharger and supercharger kits cannot be fitted
   together, regardless of their declared engine compatibility.  Catalog
   entries may also name other modification ids they exclude; that
   exclusion is honoured in both directions.
2. Engine compatibility.  The candidate must list ``"all"`` or the
   vehicle's engine type.

Failures are reported through :class:`CompatibilityResult`, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from garage_engine.core.errors import MUTUALLY_EXCLUSIVE_PREFIX
from garage_engine.core.modification import Modification
from garage_engine.core.vehicle import EngineType


@dataclass(frozen=True)
class CompatibilityResult:
    """Outcome of a compatibility check.

    Attributes:
        ok: True if the candidate may be added.
        reason: Human-readable rejection reason when ``ok`` is False.
    """

    ok: bool
    reason: str | None = None


COMPATIBLE = CompatibilityResult(ok=True)


def _conflicts(candidate: Modification, selected: Modification) -> bool:
    if (
        candidate.is_forced_induction
        and selected.is_forced_induction
        and candidate.kind != selected.kind
    ):
        return True
    return (
        selected.id in candidate.mutually_exclusive_with
        or candidate.id in selected.mutually_exclusive_with
    )


def validate(
    candidate: Modification,
    already_selected: Sequence[Modification],
    engine_type: EngineType,
) -> CompatibilityResult:
    """Check whether *candidate* may join *already_selected*.

    Args:
        candidate: Modification being considered.
        already_selected: Modifications accepted so far, in selection order.
        engine_type: Induction method of the vehicle.

    Returns:
        :data:`COMPATIBLE`, or a failed result naming the first conflict.
    """
    for selected in already_selected:
        if _conflicts(candidate, selected):
            return CompatibilityResult(
                ok=False,
                reason=f"{MUTUALLY_EXCLUSIVE_PREFIX} {selected.name} ({selected.id})",
            )

    if not candidate.fits_engine(engine_type):
        return CompatibilityResult(
            ok=False,
            reason=f"incompatible with {engine_type.value} engine",
        )

    return COMPATIBLE
