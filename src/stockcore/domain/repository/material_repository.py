"""Abstract repository for the Material catalog.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockcore.domain.model.material import Material


class MaterialRepository(ABC):

    @abstractmethod
    def get_by_id(self, material_id: str) -> Material | None:
        """Return a material by its ID, or None if not found."""

    @abstractmethod
    def get_by_code(self, code: str) -> Material | None:
        """Return a material by its code (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Material]:
        """Return every material in the catalog."""

    @abstractmethod
    def save(self, material: Material) -> None:
        """Persist a new or updated material."""
