"""JSON-file-backed audit sink for stock transactions (append only)."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from stockcore.domain.model.adjustment import StockTransaction
from stockcore.domain.model.value_objects import DEFAULT_CURRENCY, Money
from stockcore.domain.repository.transaction_repository import TransactionRepository
from stockcore.infrastructure.persistence.json_file import JsonFile


class JsonTransactionRepository(TransactionRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def record(self, transaction: StockTransaction) -> None:
        records = self._file.load()
        records.append(self._to_raw(transaction))
        self._file.persist(records)

    def list_for_material(self, material_id: str) -> list[StockTransaction]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["material_id"] == material_id
        ]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(transaction: StockTransaction) -> dict:
        return {
            "transaction_type": transaction.transaction_type,
            "reference_type": transaction.reference_type,
            "material_id": transaction.material_id,
            "quantity": str(transaction.quantity_delta),
            "reason": transaction.reason_text,
            "unit_price": str(transaction.unit_price.amount),
            "currency": transaction.unit_price.currency,
            "amount": str(transaction.amount.amount),
            "description": transaction.description,
            "timestamp": transaction.timestamp.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> StockTransaction:
        return StockTransaction(
            material_id=raw["material_id"],
            quantity_delta=Decimal(raw["quantity"]),
            reason_text=raw["reason"],
            unit_price=Money(
                Decimal(raw.get("unit_price", "0")),
                raw.get("currency", DEFAULT_CURRENCY),
            ),
            description=raw.get("description", ""),
            timestamp=datetime.fromisoformat(raw["timestamp"]),
            transaction_type=raw.get("transaction_type", "adjustment"),
            reference_type=raw.get("reference_type", "adjustment"),
        )
