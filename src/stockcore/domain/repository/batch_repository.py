"""Abstract repository for Batch records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockcore.domain.model.batch import Batch


class BatchRepository(ABC):

    @abstractmethod
    def get_by_id(self, batch_id: str) -> Batch | None:
        """Return a batch by its ID, or None if not found."""

    @abstractmethod
    def list_by_material(self, material_id: str) -> list[Batch]:
        """Return a material's batches in listing (creation) order."""

    @abstractmethod
    def add(self, batch: Batch) -> Batch:
        """Persist a new batch, assigning its ID."""

    @abstractmethod
    def save(self, batch: Batch, expected_version: int) -> None:
        """Persist an updated batch.

        Raises ConflictError if the stored version is not
        ``expected_version`` (another writer got there first).
        """
