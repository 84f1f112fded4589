"""Abstract audit sink for stock transactions.

Write-only from the stock core's perspective; ``list_for_material``
exists for reconciliation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockcore.domain.model.adjustment import StockTransaction


class TransactionRepository(ABC):

    @abstractmethod
    def record(self, transaction: StockTransaction) -> None:
        """Append an audit record."""

    @abstractmethod
    def list_for_material(self, material_id: str) -> list[StockTransaction]:
        """Return a material's audit records, oldest first."""
