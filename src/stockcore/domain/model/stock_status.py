"""Stock status classification and low-stock alerts."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from stockcore.domain.model.value_objects import format_quantity

# Stock at or below this share of the reorder level is critical.
CRITICAL_RATIO = Decimal("0.5")


class StockStatus(Enum):
    GOOD = "good"
    LOW = "low"
    CRITICAL = "critical"
    OUT_OF_STOCK = "out-of-stock"


class AlertSeverity(Enum):
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class EffectiveStock:
    current_stock: Decimal
    reorder_level: Decimal


def classify(current_stock: Decimal, reorder_level: Decimal) -> StockStatus:
    """Map stock against its reorder threshold.

    Severity never increases as ``current_stock`` rises for a fixed
    threshold: out-of-stock, critical, low, good.
    """
    if current_stock <= 0:
        return StockStatus.OUT_OF_STOCK
    if reorder_level <= 0:
        return StockStatus.GOOD
    if current_stock <= reorder_level * CRITICAL_RATIO:
        return StockStatus.CRITICAL
    if current_stock <= reorder_level:
        return StockStatus.LOW
    return StockStatus.GOOD


def alert_severity(current_stock: Decimal, reorder_level: Decimal) -> AlertSeverity | None:
    """Return the alert severity, or None when no alert is due."""
    if reorder_level <= 0 or current_stock > reorder_level:
        return None
    if current_stock <= reorder_level * CRITICAL_RATIO:
        return AlertSeverity.CRITICAL
    return AlertSeverity.WARNING


@dataclass(frozen=True)
class Alert:
    """Low-stock alert. Regenerated on every refresh, never persisted."""

    material_id: str
    material_code: str
    material_name: str
    severity: AlertSeverity
    current_stock: Decimal
    reorder_level: Decimal
    unit: str

    @property
    def message(self) -> str:
        return (
            f"Low stock alert: {self.material_code} "
            f"({format_quantity(self.current_stock)} {self.unit})"
        )
