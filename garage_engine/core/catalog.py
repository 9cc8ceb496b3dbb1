"""Read-only modification catalog handed to the build evaluator."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator, Protocol

from garage_engine.core.modification import Modification


class ModificationLookup(Protocol):
    """Anything that can resolve a modification id."""

    def get_modification(self, modification_id: str) -> Modification | None:
        ...


class ModificationCatalog:
    """Immutable collection of catalog modifications keyed by id.

    The catalog is passed explicitly into :func:`evaluate_build`; it is never
    mutated after construction, so one instance can be shared freely between
    concurrent evaluations.
    """

    __slots__ = ("_entries",)

    def __init__(self, modifications: Iterable[Modification]) -> None:
        entries: dict[str, Modification] = {}
        for mod in modifications:
            if mod.id in entries:
                raise ValueError(f"Duplicate modification id: {mod.id!r}")
            entries[mod.id] = mod
        self._entries = MappingProxyType(entries)

    def get_modification(self, modification_id: str) -> Modification | None:
        """Return the modification with *modification_id*, or ``None``."""
        return self._entries.get(modification_id)

    def by_category(self, category: str) -> list[Modification]:
        """Return every modification in *category*, in catalog order."""
        wanted = category.lower()
        return [m for m in self._entries.values() if m.category == wanted]

    @property
    def categories(self) -> list[str]:
        """Distinct categories in catalog order."""
        return list(dict.fromkeys(m.category for m in self._entries.values()))

    def __contains__(self, modification_id: object) -> bool:
        return modification_id in self._entries

    def __iter__(self) -> Iterator[Modification]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ModificationCatalog({len(self._entries)} modifications)"
