"""Application service: Adjust Composite use case.

A composite has no stock of its own. The caller is shown each
component's current stock, edits the targets it wants to change, and
the changes are applied component by component.
"""

from __future__ import annotations

from stockcore.application.dto import ComponentTargetDTO
from stockcore.application.stock_core import Repositories, StockCore, material_by_code
from stockcore.domain.model.adjustment import CompositeAdjustmentPlan, CompositeAdjustmentResult
from stockcore.domain.model.value_objects import format_quantity, to_decimal
from stockcore.domain.service.batch_ledger import DEFAULT_LOCATION


class AdjustCompositeHandler:

    def __init__(self, repos: Repositories, default_location: str = DEFAULT_LOCATION) -> None:
        self._repos = repos
        self._core = StockCore.build(repos, default_location)

    def plan(self, composite_code: str) -> list[ComponentTargetDTO]:
        """Show each component's current stock (the starting targets)."""
        return self._to_dtos(self._plan(composite_code))

    def handle(
        self,
        composite_code: str,
        targets: dict[str, str],
    ) -> CompositeAdjustmentResult:
        """Apply new stock levels, keyed by component material code.

        Components left out of ``targets`` keep their current stock.
        """
        plan = self._plan(composite_code)
        for code, raw in targets.items():
            component = material_by_code(self._repos, code)
            plan.set_target(component.id, to_decimal(raw))
        return self._core.coordinator.apply_composite_adjustment(plan)

    def _plan(self, composite_code: str) -> CompositeAdjustmentPlan:
        composite = material_by_code(self._repos, composite_code)
        return self._core.coordinator.plan_composite_adjustment(composite.id)

    @staticmethod
    def _to_dtos(plan: CompositeAdjustmentPlan) -> list[ComponentTargetDTO]:
        return [
            ComponentTargetDTO(
                code=t.component_code,
                name=t.component_name,
                component_type=t.component_type.value,
                unit=t.unit,
                current_stock=format_quantity(t.current_stock),
                new_stock=format_quantity(t.new_stock),
            )
            for t in plan.components
        ]
