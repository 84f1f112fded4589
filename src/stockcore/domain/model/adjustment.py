"""Stock adjustment requests, their outcomes, and the audit record.

A simple material is adjusted through an ``AdjustmentRequest``. A
composite material has no batch of its own; it is adjusted through a
``CompositeAdjustmentPlan`` that lists one editable target per
component.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from stockcore.domain.exceptions import PartialFailure, ValidationError
from stockcore.domain.model.composition import ComponentType
from stockcore.domain.model.value_objects import Money, format_quantity


class AdjustmentType(Enum):
    INCREASE = "increase"
    DECREASE = "decrease"
    SET = "set"


class ReasonKind(Enum):
    COUNT_CORRECTION = ("count_correction", "Physical Count Correction")
    DAMAGE = ("damage", "Damaged Goods")
    THEFT = ("theft", "Theft/Loss")
    EXPIRED = ("expired", "Expired/Spoiled")
    TRANSFER_IN = ("transfer_in", "Transfer In")
    TRANSFER_OUT = ("transfer_out", "Transfer Out")
    FOUND = ("found", "Found Inventory")
    RETURN_TO_VENDOR = ("return_to_vendor", "Return to Vendor")
    SAMPLE = ("sample", "Sample/Promotional")
    OTHER = ("other", "Other")

    def __init__(self, tag: str, label: str) -> None:
        self.tag = tag
        self.label = label

    @classmethod
    def from_tag(cls, tag: str) -> ReasonKind:
        for kind in cls:
            if kind.tag == tag:
                return kind
        raise ValidationError(f"Unknown adjustment reason '{tag}'")


@dataclass(frozen=True)
class AdjustmentReason:
    """Tagged reason; the ``other`` variant carries its own text."""

    kind: ReasonKind
    custom_text: str = ""

    @property
    def text(self) -> str:
        if self.kind is ReasonKind.OTHER:
            return self.custom_text.strip()
        return self.kind.label

    @staticmethod
    def of(tag: str, custom_text: str = "") -> AdjustmentReason:
        return AdjustmentReason(ReasonKind.from_tag(tag), custom_text or "")

    @staticmethod
    def other(text: str) -> AdjustmentReason:
        return AdjustmentReason(ReasonKind.OTHER, text)


@dataclass(frozen=True)
class AdjustmentRequest:
    material_id: str
    adjustment_type: AdjustmentType
    quantity: Decimal
    reason: AdjustmentReason | None
    notes: str = ""


class AdjustmentStatus(Enum):
    SUCCEEDED = "SUCCEEDED"
    PARTIALLY_SUCCEEDED = "PARTIALLY_SUCCEEDED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class StockTransaction:
    """Audit record written for every applied adjustment."""

    material_id: str
    quantity_delta: Decimal
    reason_text: str
    unit_price: Money
    description: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    transaction_type: str = "adjustment"
    reference_type: str = "adjustment"

    @property
    def amount(self) -> Money:
        return self.unit_price * abs(self.quantity_delta)


@dataclass(frozen=True)
class AdjustmentResult:
    """Outcome of a simple-material adjustment.

    ``transaction`` is None when the adjustment was a no-op.
    """

    material_id: str
    status: AdjustmentStatus
    previous_stock: Decimal
    new_stock: Decimal
    delta: Decimal
    batch_id: str | None
    transaction: StockTransaction | None

    @property
    def changed(self) -> bool:
        return self.delta != 0


# --- Composite fan-out ---------------------------------------------------------


@dataclass
class ComponentTarget:
    """One editable row of a composite adjustment plan."""

    component_material_id: str
    component_code: str
    component_name: str
    component_type: ComponentType
    unit: str
    current_stock: Decimal
    new_stock: Decimal

    @property
    def changed(self) -> bool:
        return self.new_stock != self.current_stock


@dataclass
class CompositeAdjustmentPlan:
    composite_material_id: str
    composite_code: str
    composite_name: str
    components: list[ComponentTarget]

    def set_target(self, component_material_id: str, new_stock: Decimal) -> None:
        """Negative targets are accepted here and fail on that component's write."""
        if not isinstance(new_stock, Decimal) or not new_stock.is_finite():
            raise ValidationError(
                f"Target stock for material '{component_material_id}' must be "
                f"a finite number, got {new_stock}"
            )
        for target in self.components:
            if target.component_material_id == component_material_id:
                target.new_stock = new_stock
                return
        raise ValidationError(
            f"Material '{component_material_id}' is not a component of "
            f"{self.composite_code}"
        )


@dataclass(frozen=True)
class ComponentOutcome:
    component_material_id: str
    component_name: str
    previous_stock: Decimal
    target_stock: Decimal
    succeeded: bool
    error: str | None = None


@dataclass(frozen=True)
class CompositeAdjustmentResult:
    composite_material_id: str
    status: AdjustmentStatus
    outcomes: list[ComponentOutcome]

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.outcomes if o.succeeded)

    @property
    def error_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.succeeded)

    @property
    def errors(self) -> list[ComponentOutcome]:
        return [o for o in self.outcomes if not o.succeeded]

    def raise_for_status(self) -> None:
        """Raise PartialFailure unless every attempted component succeeded."""
        if self.status is AdjustmentStatus.SUCCEEDED:
            return
        details = "; ".join(f"{o.component_name}: {o.error}" for o in self.errors)
        raise PartialFailure(
            f"Updated {self.success_count}, failed {self.error_count} "
            f"component(s): {details}",
            outcomes=list(self.outcomes),
        )


def describe(adjustment_type: AdjustmentType, reason_text: str, notes: str) -> str:
    description = f"Stock Adjustment ({adjustment_type.value}): {reason_text}"
    if notes:
        description += f" - {notes}"
    return description


def component_notes(target: ComponentTarget) -> str:
    return (
        f"Set to {format_quantity(target.new_stock)} {target.unit} "
        f"(was {format_quantity(target.current_stock)})"
    )
