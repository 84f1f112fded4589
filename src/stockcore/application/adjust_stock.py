"""Application service: Adjust Stock use case (simple materials).

Translates raw CLI input into an AdjustmentRequest and lets the
Adjustment Coordinator validate and apply it.
"""

from __future__ import annotations

from stockcore.application.dto import AdjustmentDTO
from stockcore.application.stock_core import Repositories, StockCore, material_by_code
from stockcore.domain.exceptions import ValidationError
from stockcore.domain.model.adjustment import (
    AdjustmentReason,
    AdjustmentRequest,
    AdjustmentType,
)
from stockcore.domain.model.value_objects import format_quantity, to_decimal
from stockcore.domain.service.batch_ledger import DEFAULT_LOCATION


class AdjustStockHandler:

    def __init__(self, repos: Repositories, default_location: str = DEFAULT_LOCATION) -> None:
        self._repos = repos
        self._default_location = default_location

    def handle(
        self,
        material_code: str,
        adjustment_type: str,
        quantity: str,
        reason: str | None,
        custom_reason: str = "",
        notes: str = "",
    ) -> AdjustmentDTO:
        material = material_by_code(self._repos, material_code)
        request = AdjustmentRequest(
            material_id=material.id,
            adjustment_type=_adjustment_type(adjustment_type),
            quantity=to_decimal(quantity),
            reason=AdjustmentReason.of(reason, custom_reason) if reason else None,
            notes=notes.strip(),
        )

        core = StockCore.build(self._repos, self._default_location)
        result = core.coordinator.adjust(request)

        return AdjustmentDTO(
            code=material.code,
            unit=material.unit,
            previous_stock=format_quantity(result.previous_stock),
            new_stock=format_quantity(result.new_stock),
            delta=format_quantity(result.delta),
            changed=result.changed,
        )


def _adjustment_type(raw: str) -> AdjustmentType:
    try:
        return AdjustmentType(raw.strip().lower())
    except ValueError:
        raise ValidationError(
            f"Invalid adjustment type '{raw}'. Expected increase, decrease or set."
        )
