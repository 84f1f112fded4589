"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. Quantities are
pre-formatted strings, ready for display.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ComponentSpec:
    """Input: one composition row, with the component named by code."""

    component_code: str
    component_type: str  # "content" | "container"
    quantity_per_composite: str = "1"
    unit: str | None = None


@dataclass(frozen=True)
class MaterialDTO:
    id: str
    code: str
    name: str
    unit: str
    standard_price: str
    minimum_stock_level: str
    is_composite: bool
    is_disposable: bool


@dataclass(frozen=True)
class CompositionLineDTO:
    component_code: str
    component_name: str
    component_type: str
    quantity_per_composite: str
    unit: str
    current_stock: str
    buildable_units: int


@dataclass(frozen=True)
class StockLineDTO:
    """Output: one material's stock position as displayed to the user."""

    material_id: str
    code: str
    name: str
    unit: str
    current_stock: str
    reorder_level: str
    status: str
    is_composite: bool
    components: list[CompositionLineDTO]


@dataclass(frozen=True)
class StockOverviewDTO:
    lines: list[StockLineDTO]
    material_count: int
    total_value: str
    alert_count: int
    critical_count: int


@dataclass(frozen=True)
class AlertDTO:
    code: str
    name: str
    severity: str
    current_stock: str
    reorder_level: str
    unit: str
    message: str


@dataclass(frozen=True)
class AlertReportDTO:
    alerts: list[AlertDTO]
    critical_count: int


@dataclass(frozen=True)
class BatchDTO:
    id: str
    batch_number: str
    quantity: str
    reserved: str
    available: str
    average_cost: str
    total_value: str
    location: str
    last_reason: str


@dataclass(frozen=True)
class SummaryDTO:
    code: str
    name: str
    unit: str
    current_stock: str
    reserved: str
    available: str
    total_value: str
    average_cost: str
    reorder_level: str
    batches: list[BatchDTO]


@dataclass(frozen=True)
class AdjustmentDTO:
    code: str
    unit: str
    previous_stock: str
    new_stock: str
    delta: str
    changed: bool


@dataclass(frozen=True)
class ComponentTargetDTO:
    code: str
    name: str
    component_type: str
    unit: str
    current_stock: str
    new_stock: str
