"""Abstract repository for composition (bill-of-materials) entries."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockcore.domain.model.composition import CompositionEntry


class CompositionRepository(ABC):

    @abstractmethod
    def list_by_composite(self, composite_material_id: str) -> list[CompositionEntry]:
        """Return a composite's entries in their configured order."""

    @abstractmethod
    def list_all(self) -> list[CompositionEntry]:
        """Return every entry of every composite."""

    @abstractmethod
    def replace(self, composite_material_id: str, entries: list[CompositionEntry]) -> None:
        """Replace all entries of one composite in a single write."""
