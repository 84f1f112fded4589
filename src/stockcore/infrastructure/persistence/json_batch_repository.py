"""JSON-file-backed implementation of BatchRepository.

Batches are kept in creation order, which is also their listing order.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from stockcore.domain.exceptions import ConflictError
from stockcore.domain.model.batch import Batch
from stockcore.domain.repository.batch_repository import BatchRepository
from stockcore.infrastructure.persistence.json_file import JsonFile
from stockcore.logging_config import get_logger

logger = get_logger("persistence.batches")


class JsonBatchRepository(BatchRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- BatchRepository interface --------------------------------------------

    def get_by_id(self, batch_id: str) -> Batch | None:
        for raw in self._file.load():
            if raw["id"] == batch_id:
                return self._to_domain(raw)
        return None

    def list_by_material(self, material_id: str) -> list[Batch]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["material_id"] == material_id
        ]

    def add(self, batch: Batch) -> Batch:
        records = self._file.load()
        if records:
            batch.id = str(max(int(r["id"]) for r in records) + 1)
        else:
            batch.id = "1"
        records.append(self._to_raw(batch))
        self._file.persist(records)
        return batch

    def save(self, batch: Batch, expected_version: int) -> None:
        records = self._file.load()
        for i, raw in enumerate(records):
            if raw["id"] != batch.id:
                continue
            stored_version = raw.get("version", 1)
            if stored_version != expected_version:
                logger.warning(
                    "batch_version_conflict",
                    extra={
                        "batch_id": batch.id,
                        "expected_version": expected_version,
                        "stored_version": stored_version,
                    },
                )
                raise ConflictError(
                    f"Batch '{batch.id}' was modified concurrently "
                    f"(expected version {expected_version}, found {stored_version})"
                )
            records[i] = self._to_raw(batch)
            self._file.persist(records)
            return
        raise ConflictError(f"Batch '{batch.id}' does not exist in storage")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(batch: Batch) -> dict:
        return {
            "id": batch.id,
            "material_id": batch.material_id,
            "quantity": str(batch.quantity),
            "average_cost": str(batch.average_cost),
            "reserved_quantity": str(batch.reserved_quantity),
            "batch_number": batch.batch_number,
            "location": batch.location,
            "notes": batch.notes,
            "last_reason": batch.last_reason,
            "version": batch.version,
            "created_at": batch.created_at.isoformat(),
            "updated_at": batch.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Batch:
        return Batch(
            id=raw["id"],
            material_id=raw["material_id"],
            quantity=Decimal(raw["quantity"]),
            average_cost=Decimal(raw.get("average_cost", "0")),
            reserved_quantity=Decimal(raw.get("reserved_quantity", "0")),
            batch_number=raw.get("batch_number"),
            location=raw.get("location"),
            notes=raw.get("notes"),
            last_reason=raw.get("last_reason"),
            version=raw.get("version", 1),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw.get("updated_at", raw["created_at"])),
        )
