"""JSON-file-backed implementation of CompositionRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from stockcore.domain.model.composition import ComponentType, CompositionEntry
from stockcore.domain.repository.composition_repository import CompositionRepository
from stockcore.infrastructure.persistence.json_file import JsonFile


class JsonCompositionRepository(CompositionRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- CompositionRepository interface --------------------------------------

    def list_by_composite(self, composite_material_id: str) -> list[CompositionEntry]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["composite_material_id"] == composite_material_id
        ]

    def list_all(self) -> list[CompositionEntry]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def replace(self, composite_material_id: str, entries: list[CompositionEntry]) -> None:
        records = [
            raw
            for raw in self._file.load()
            if raw["composite_material_id"] != composite_material_id
        ]
        records.extend(self._to_raw(e) for e in entries)
        self._file.persist(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(entry: CompositionEntry) -> dict:
        return {
            "composite_material_id": entry.composite_material_id,
            "component_material_id": entry.component_material_id,
            "component_type": entry.component_type.value,
            "quantity_per_composite": str(entry.quantity_per_composite),
            "unit": entry.unit,
            "is_active": entry.is_active,
        }

    @staticmethod
    def _to_domain(raw: dict) -> CompositionEntry:
        return CompositionEntry(
            composite_material_id=raw["composite_material_id"],
            component_material_id=raw["component_material_id"],
            component_type=ComponentType(raw["component_type"]),
            quantity_per_composite=Decimal(raw.get("quantity_per_composite", "1")),
            unit=raw.get("unit"),
            is_active=raw.get("is_active", True),
        )
