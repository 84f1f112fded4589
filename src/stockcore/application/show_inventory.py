"""Application service: Stock Overview, Alerts and Batch Details (queries).

Every call recomputes from the current ledger and composition state.
"""

from __future__ import annotations

from decimal import Decimal

from stockcore.application.dto import (
    AlertDTO,
    AlertReportDTO,
    BatchDTO,
    CompositionLineDTO,
    StockLineDTO,
    StockOverviewDTO,
    SummaryDTO,
)
from stockcore.application.set_composition import ShowCompositionHandler
from stockcore.application.stock_core import Repositories, StockCore, material_by_code
from stockcore.domain.model.material import Material
from stockcore.domain.model.stock_status import Alert, classify
from stockcore.domain.model.value_objects import Money, format_quantity


class StockOverviewHandler:

    def __init__(self, repos: Repositories) -> None:
        self._repos = repos

    def handle(self) -> StockOverviewDTO:
        core = StockCore.build(self._repos)
        materials = self._repos.materials.list_all()
        component_ids = core.graph.list_component_material_ids()

        lines: list[StockLineDTO] = []
        for material in materials:
            if material.id in component_ids:
                continue
            stock = core.resolver.effective_stock(material.id)
            components: list[CompositionLineDTO] = []
            if material.is_composite:
                components = ShowCompositionHandler(self._repos).handle(material.code)
            lines.append(
                StockLineDTO(
                    material_id=material.id,
                    code=material.code,
                    name=material.name,
                    unit=material.unit,
                    current_stock=format_quantity(stock.current_stock),
                    reorder_level=format_quantity(stock.reorder_level),
                    status=classify(stock.current_stock, stock.reorder_level).value,
                    is_composite=material.is_composite,
                    components=components,
                )
            )

        alerts = core.status.alerts(materials)
        simple = [m for m in materials if not m.is_composite]
        return StockOverviewDTO(
            lines=lines,
            material_count=len(simple),
            total_value=str(self._valuation(core, simple)),
            alert_count=len(alerts),
            critical_count=core.status.critical_count(alerts),
        )

    @staticmethod
    def _valuation(core: StockCore, materials: list[Material]) -> Money:
        """Stock at standard price; composites are valued through their components."""
        total = Money.zero()
        for material in materials:
            stock = core.ledger.summarize(material.id).current_stock
            if stock > 0:
                total = total + material.standard_price * stock
        return total


class AlertsHandler:

    def __init__(self, repos: Repositories) -> None:
        self._repos = repos

    def handle(self) -> AlertReportDTO:
        core = StockCore.build(self._repos)
        alerts = core.status.alerts(self._repos.materials.list_all())
        return AlertReportDTO(
            alerts=[self._to_dto(a) for a in alerts],
            critical_count=core.status.critical_count(alerts),
        )

    @staticmethod
    def _to_dto(alert: Alert) -> AlertDTO:
        return AlertDTO(
            code=alert.material_code,
            name=alert.material_name,
            severity=alert.severity.value,
            current_stock=format_quantity(alert.current_stock),
            reorder_level=format_quantity(alert.reorder_level),
            unit=alert.unit,
            message=alert.message,
        )


class ShowBatchesHandler:

    def __init__(self, repos: Repositories) -> None:
        self._repos = repos

    def handle(self, material_code: str) -> SummaryDTO:
        material = material_by_code(self._repos, material_code)
        core = StockCore.build(self._repos)
        summary = core.ledger.summarize(material.id)
        batches = core.ledger.list_batches(material.id)

        return SummaryDTO(
            code=summary.material_code,
            name=summary.material_name,
            unit=summary.unit,
            current_stock=format_quantity(summary.current_stock),
            reserved=format_quantity(summary.reserved_quantity),
            available=format_quantity(summary.available_quantity),
            total_value=_money(summary.total_value),
            average_cost=_money(summary.average_cost),
            reorder_level=format_quantity(summary.reorder_level),
            batches=[
                BatchDTO(
                    id=b.id or "",
                    batch_number=b.batch_number or "-",
                    quantity=format_quantity(b.quantity),
                    reserved=format_quantity(b.reserved_quantity),
                    available=format_quantity(b.available_quantity),
                    average_cost=_money(b.average_cost),
                    total_value=_money(b.total_value),
                    location=b.location or "-",
                    last_reason=b.last_reason or "-",
                )
                for b in batches
            ],
        )


def _money(amount: Decimal) -> str:
    return str(Money(amount)) if amount >= 0 else f"-{Money(-amount)}"
