"""Modification model for the build evaluation engine.

Each catalog entry carries a :class:`ModificationKind` decided once, when the
catalog is loaded.  Multiplier and compatibility rules dispatch on the kind
rather than on display names.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from garage_engine.core.vehicle import EngineType

ALL_ENGINES: str = "all"


class ModificationKind(str, Enum):
    """Closed set of modification kinds the engine has rules for."""

    TURBO = "turbo"
    SUPERCHARGER = "supercharger"
    INTERCOOLER = "intercooler"
    EXHAUST = "exhaust"
    INTAKE = "intake"
    OTHER = "other"


FORCED_INDUCTION_KINDS: frozenset[ModificationKind] = frozenset(
    {ModificationKind.TURBO, ModificationKind.SUPERCHARGER}
)


def classify_kind(name: str, category: str) -> ModificationKind:
    """Infer the kind of a catalog entry from its name and category.

    Used only when the catalog does not declare ``kind`` explicitly.
    Turbochargers are only recognised in the engine category, so a turbo
    blanket filed under another category or a turbo-back exhaust is not one.  Exhaust
    parts are recognised by name; headers in the exhaust category stay
    OTHER unless the catalog declares them.

    Args:
        name: Display name of the modification.
        category: Catalog category (case-insensitive).

    Returns:
        The inferred :class:`ModificationKind`.
    """
    lowered = name.lower()
    category = category.lower()
    if "supercharger" in lowered:
        return ModificationKind.SUPERCHARGER
    if "intercooler" in lowered:
        return ModificationKind.INTERCOOLER
    if "turbo" in lowered and category == "engine":
        return ModificationKind.TURBO
    if "exhaust" in lowered:
        return ModificationKind.EXHAUST
    if "intake" in lowered:
        return ModificationKind.INTAKE
    return ModificationKind.OTHER


@dataclass(frozen=True)
class Modification:
    """Immutable catalog entry for an aftermarket modification.

    Attributes:
        id: Unique catalog identifier.
        name: Display name.
        category: Lower-case catalog category (engine, exhaust, ...).
        base_hp_gain: Advertised horsepower gain (>= 0 expected, may be 0).
        price: Parts price (>= 0).
        compatibility: Engine-type tags the part fits, or ``"all"``.
        kind: Rule-dispatch kind.  Inferred from name and category when
            not given.
        mutually_exclusive_with: Ids of modifications that cannot be
            fitted together with this one.
        description: Free-text description.
    """

    id: str
    name: str
    category: str
    base_hp_gain: float
    price: float
    compatibility: frozenset[str] = frozenset({ALL_ENGINES})
    kind: ModificationKind | None = None
    mutually_exclusive_with: frozenset[str] = field(default_factory=frozenset)
    description: str = ""

    def __post_init__(self) -> None:
        """Validate and normalise modification fields."""
        if not self.id:
            raise ValueError("Modification id must not be empty.")
        if not self.name:
            raise ValueError(f"Modification {self.id!r} name must not be empty.")
        if not self.category:
            raise ValueError(f"Modification {self.id!r} category must not be empty.")
        if not math.isfinite(self.base_hp_gain):
            raise ValueError(f"Modification {self.id!r} base_hp_gain must be finite.")
        if not math.isfinite(self.price) or self.price < 0.0:
            raise ValueError(f"Modification {self.id!r} price must be >= 0.")
        object.__setattr__(self, "category", self.category.lower())
        object.__setattr__(
            self, "compatibility", frozenset(t.lower() for t in self.compatibility)
        )
        object.__setattr__(
            self, "mutually_exclusive_with", frozenset(self.mutually_exclusive_with)
        )
        if self.kind is None:
            object.__setattr__(self, "kind", classify_kind(self.name, self.category))
        else:
            object.__setattr__(self, "kind", ModificationKind(self.kind))

    @property
    def is_forced_induction(self) -> bool:
        """True for turbocharger and supercharger kits."""
        return self.kind in FORCED_INDUCTION_KINDS

    def fits_engine(self, engine_type: EngineType) -> bool:
        """Return True if the part is declared compatible with *engine_type*."""
        return (
            ALL_ENGINES in self.compatibility
            or engine_type.value in self.compatibility
        )
