"""JSON-file-backed implementation of MaterialRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from stockcore.domain.model.material import Material
from stockcore.domain.model.value_objects import DEFAULT_CURRENCY, Money
from stockcore.domain.repository.material_repository import MaterialRepository
from stockcore.infrastructure.persistence.json_file import JsonFile


class JsonMaterialRepository(MaterialRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- MaterialRepository interface -----------------------------------------

    def get_by_id(self, material_id: str) -> Material | None:
        for raw in self._file.load():
            if raw["id"] == material_id:
                return self._to_domain(raw)
        return None

    def get_by_code(self, code: str) -> Material | None:
        wanted = code.strip().upper()
        for raw in self._file.load():
            if raw["code"].upper() == wanted:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Material]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, material: Material) -> None:
        records = self._file.load()
        replaced = False
        for i, raw in enumerate(records):
            if raw["id"] == material.id:
                records[i] = self._to_raw(material)
                replaced = True
                break
        if not replaced:
            records.append(self._to_raw(material))
        self._file.persist(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(material: Material) -> dict:
        return {
            "id": material.id,
            "code": material.code,
            "name": material.name,
            "unit": material.unit,
            "standard_price": str(material.standard_price.amount),
            "currency": material.standard_price.currency,
            "minimum_stock_level": str(material.minimum_stock_level),
            "is_composite": material.is_composite,
            "is_disposable": material.is_disposable,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Material:
        return Material(
            id=raw["id"],
            code=raw["code"],
            name=raw["name"],
            unit=raw["unit"],
            standard_price=Money(
                Decimal(raw.get("standard_price", "0")),
                raw.get("currency", DEFAULT_CURRENCY),
            ),
            minimum_stock_level=Decimal(raw.get("minimum_stock_level", "0")),
            is_composite=raw.get("is_composite", False),
            is_disposable=raw.get("is_disposable", False),
        )
