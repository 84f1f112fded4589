"""Domain service: Batch Ledger.

Owns raw batch records and aggregates them into a per-material
InventorySummary. Changes are applied in batch listing order: an
increase lands on the first batch, a decrease drains batches one after
another. There is no proportional draw-down across batches.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from stockcore.domain.exceptions import NotFoundError, ValidationError
from stockcore.domain.model.batch import Batch, InventorySummary
from stockcore.domain.model.material import Material
from stockcore.domain.repository.batch_repository import BatchRepository
from stockcore.domain.repository.material_repository import MaterialRepository
from stockcore.logging_config import get_logger

logger = get_logger("services.batch_ledger")

DEFAULT_LOCATION = "Main Warehouse"


class BatchLedger:

    def __init__(
        self,
        batch_repo: BatchRepository,
        material_repo: MaterialRepository,
        default_location: str = DEFAULT_LOCATION,
    ) -> None:
        self._batch_repo = batch_repo
        self._material_repo = material_repo
        self._default_location = default_location

    def list_batches(self, material_id: str) -> list[Batch]:
        return self._batch_repo.list_by_material(material_id)

    def target_batch(self, material_id: str) -> Batch | None:
        """The batch an adjustment writes to, or None before opening stock."""
        batches = self.list_batches(material_id)
        return batches[0] if batches else None

    def summarize(self, material_id: str) -> InventorySummary:
        """Aggregate all of a material's batches.

        Quantities and value are summed; ``average_cost`` is taken from
        the first listed batch and the reorder level from the catalog.
        """
        material = self._require_material(material_id)
        batches = self.list_batches(material_id)

        current = sum((b.quantity for b in batches), Decimal("0"))
        reserved = sum((b.reserved_quantity for b in batches), Decimal("0"))
        available = sum((b.available_quantity for b in batches), Decimal("0"))
        value = sum((b.total_value for b in batches), Decimal("0"))

        return InventorySummary(
            material_id=material.id,
            material_code=material.code,
            material_name=material.name,
            unit=material.unit,
            current_stock=current,
            reserved_quantity=reserved,
            available_quantity=available,
            total_value=value,
            average_cost=batches[0].average_cost if batches else Decimal("0"),
            standard_price=material.standard_price,
            reorder_level=material.reorder_level,
            batch_count=len(batches),
        )

    def create_opening_batch(
        self,
        material_id: str,
        quantity: Decimal,
        cost: Decimal = Decimal("0"),
        location: str | None = None,
        note: str | None = None,
    ) -> Batch:
        """Create the first batch for a material that has none yet."""
        self._require_material(material_id)
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        batch = Batch.opening(
            material_id=material_id,
            quantity=quantity,
            cost=cost,
            batch_number=f"MANUAL-{stamp}-{material_id}",
            location=location or self._default_location,
            notes=note,
        )
        batch = self._batch_repo.add(batch)
        logger.info(
            "opening_batch_created",
            extra={
                "material_id": material_id,
                "batch_id": batch.id,
                "quantity": quantity,
            },
        )
        return batch

    def set_batch_quantity(
        self,
        batch_id: str,
        new_quantity: Decimal,
        reason: str,
        note: str | None = None,
    ) -> Batch:
        """Replace a batch's quantity with ``new_quantity``.

        The write carries the version read here, so a concurrent writer
        makes the repository raise ConflictError instead of silently
        overwriting.
        """
        batch = self._batch_repo.get_by_id(batch_id)
        if batch is None:
            raise NotFoundError(f"Batch '{batch_id}' not found")

        expected_version = batch.version
        previous = batch.quantity
        batch.set_quantity(new_quantity, reason, note)
        self._batch_repo.save(batch, expected_version=expected_version)

        logger.info(
            "batch_quantity_set",
            extra={
                "batch_id": batch_id,
                "material_id": batch.material_id,
                "previous_quantity": previous,
                "new_quantity": new_quantity,
                "reason": reason,
            },
        )
        return batch

    def apply_delta(
        self,
        material_id: str,
        delta: Decimal,
        reason: str,
        note: str | None = None,
    ) -> list[Batch]:
        """Apply a signed stock change across the material's batches.

        An increase goes to the first listed batch. A decrease empties
        batches in listing order until it is absorbed. The allocation is
        checked before anything is written; returns the batches written.
        """
        batches = self.list_batches(material_id)
        if not batches:
            raise NotFoundError(f"Material '{material_id}' has no batches")

        if delta >= 0:
            plan = [(batches[0], batches[0].quantity + delta)]
        else:
            plan = []
            remaining = -delta
            for batch in batches:
                if remaining <= 0:
                    break
                taken = min(batch.quantity, remaining)
                if taken <= 0:
                    continue
                plan.append((batch, batch.quantity - taken))
                remaining -= taken
            if remaining > 0:
                held = sum((b.quantity for b in batches), Decimal("0"))
                raise ValidationError(
                    f"Cannot remove {-delta}: only {held} held across "
                    f"{len(batches)} batch(es)"
                )

        return [
            self.set_batch_quantity(batch.id, quantity, reason, note)
            for batch, quantity in plan
        ]

    def _require_material(self, material_id: str) -> Material:
        material = self._material_repo.get_by_id(material_id)
        if material is None:
            raise NotFoundError(f"Material '{material_id}' not found")
        return material
