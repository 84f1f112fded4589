"""Application service: Set / Show Composition use cases.

Components are named by material code on the way in and resolved to
ids here; the Composition Graph does the validating.
"""

from __future__ import annotations

from stockcore.application.dto import ComponentSpec, CompositionLineDTO
from stockcore.application.stock_core import Repositories, StockCore, material_by_code
from stockcore.domain.exceptions import NotFoundError, ValidationError
from stockcore.domain.model.composition import ComponentType, CompositionEntry
from stockcore.domain.model.value_objects import format_quantity, to_decimal


class SetCompositionHandler:

    def __init__(self, repos: Repositories) -> None:
        self._repos = repos

    def handle(self, composite_code: str, specs: list[ComponentSpec]) -> list[CompositionLineDTO]:
        composite = material_by_code(self._repos, composite_code)
        core = StockCore.build(self._repos)

        entries = [
            CompositionEntry(
                composite_material_id=composite.id,
                component_material_id=self._resolve_component(spec.component_code),
                component_type=_component_type(spec.component_type),
                quantity_per_composite=to_decimal(
                    spec.quantity_per_composite, "quantity per composite"
                ),
                unit=spec.unit,
            )
            for spec in specs
        ]
        core.graph.set_composition(composite.id, entries)
        return ShowCompositionHandler(self._repos).handle(composite.code)

    def _resolve_component(self, code: str) -> str:
        # Blank codes fall through so the graph reports them in rule order.
        if not code or not code.strip():
            return ""
        return material_by_code(self._repos, code).id


class ShowCompositionHandler:

    def __init__(self, repos: Repositories) -> None:
        self._repos = repos

    def handle(self, composite_code: str) -> list[CompositionLineDTO]:
        composite = material_by_code(self._repos, composite_code)
        core = StockCore.build(self._repos)
        units = core.resolver.buildable_units(composite.id)

        lines: list[CompositionLineDTO] = []
        for entry in core.graph.get_components(composite.id):
            component = self._repos.materials.get_by_id(entry.component_material_id)
            if component is None:
                raise NotFoundError(
                    f"Component material '{entry.component_material_id}' not found"
                )
            summary = core.ledger.summarize(component.id)
            lines.append(
                CompositionLineDTO(
                    component_code=component.code,
                    component_name=component.name,
                    component_type=entry.component_type.value,
                    quantity_per_composite=format_quantity(entry.quantity_per_composite),
                    unit=entry.unit or component.unit,
                    current_stock=format_quantity(summary.current_stock),
                    buildable_units=units[component.id],
                )
            )
        return lines


def _component_type(raw: str) -> ComponentType:
    try:
        return ComponentType(raw.strip().lower())
    except ValueError:
        raise ValidationError(
            f"Invalid component type '{raw}'. Expected 'content' or 'container'."
        )
