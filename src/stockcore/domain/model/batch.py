"""Batch entity and the derived per-material inventory summary.

A material may own any number of batches. The stock core aggregates
them; it never consumes them first-in-first-out, and it never deletes
one (zero-quantity batches stay as history).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from stockcore.domain.exceptions import ValidationError
from stockcore.domain.model.value_objects import Money, Quantity


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Batch:
    """A quantity of one material acquired at a point in time.

    Invariants:
    - ``quantity`` is never negative
    - ``version`` increases by one on every quantity change
    """

    id: str | None
    material_id: str
    quantity: Decimal
    average_cost: Decimal = Decimal("0")
    reserved_quantity: Decimal = Decimal("0")
    batch_number: str | None = None
    location: str | None = None
    notes: str | None = None
    last_reason: str | None = None
    version: int = 1
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @property
    def available_quantity(self) -> Decimal:
        return self.quantity - self.reserved_quantity

    @property
    def total_value(self) -> Decimal:
        return self.quantity * self.average_cost

    @staticmethod
    def opening(
        material_id: str,
        quantity: Decimal,
        cost: Decimal,
        batch_number: str,
        location: str | None,
        notes: str | None,
    ) -> Batch:
        """Create the first batch for a material that has none."""
        Quantity(quantity)
        if not cost.is_finite() or cost < 0:
            raise ValidationError("Batch cost cannot be negative")
        return Batch(
            id=None,
            material_id=material_id,
            quantity=quantity,
            average_cost=cost,
            batch_number=batch_number,
            location=location,
            notes=notes,
            last_reason="Opening stock",
        )

    def set_quantity(self, new_quantity: Decimal, reason: str, notes: str | None) -> None:
        """Replace the on-hand quantity (absolute "set" semantics)."""
        Quantity(new_quantity)
        self.quantity = new_quantity
        self.last_reason = reason
        if notes:
            self.notes = notes
        self.version += 1
        self.updated_at = _now()


@dataclass(frozen=True)
class InventorySummary:
    """Per-material aggregation over all batches. Derived, never stored."""

    material_id: str
    material_code: str
    material_name: str
    unit: str
    current_stock: Decimal
    reserved_quantity: Decimal
    available_quantity: Decimal
    total_value: Decimal
    average_cost: Decimal
    standard_price: Money
    reorder_level: Decimal
    batch_count: int
