"""Domain service: stock status and low-stock alerts.

Status is computed for any material from its effective stock. Alerts
are raised for simple materials only: a composite's bottleneck is
itself a simple material and alerts on its own.
"""

from __future__ import annotations

from stockcore.domain.model.material import Material
from stockcore.domain.model.stock_status import (
    Alert,
    AlertSeverity,
    StockStatus,
    alert_severity,
    classify,
)
from stockcore.domain.service.stock_resolver import StockResolver


class StockStatusService:

    def __init__(self, resolver: StockResolver) -> None:
        self._resolver = resolver

    def status(self, material_id: str) -> StockStatus:
        stock = self._resolver.effective_stock(material_id)
        return classify(stock.current_stock, stock.reorder_level)

    def alerts(self, materials: list[Material]) -> list[Alert]:
        alerts: list[Alert] = []
        for material in materials:
            if material.is_composite:
                continue
            stock = self._resolver.effective_stock(material.id)
            severity = alert_severity(stock.current_stock, stock.reorder_level)
            if severity is None:
                continue
            alerts.append(
                Alert(
                    material_id=material.id,
                    material_code=material.code,
                    material_name=material.name,
                    severity=severity,
                    current_stock=stock.current_stock,
                    reorder_level=stock.reorder_level,
                    unit=material.unit,
                )
            )
        return alerts

    @staticmethod
    def critical_count(alerts: list[Alert]) -> int:
        return sum(1 for a in alerts if a.severity is AlertSeverity.CRITICAL)
