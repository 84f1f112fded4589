"""Domain service: Stock Resolver.

Computes *effective stock* for any material. Simple materials read the
Batch Ledger directly; a composite can only be built as many times as
its scarcest component allows (bottleneck rule, not a sum).

Nothing is cached: every call reads current ledger and graph state.
"""

from __future__ import annotations

import math
from decimal import Decimal

from stockcore.domain.exceptions import NotFoundError
from stockcore.domain.model.composition import CompositionEntry
from stockcore.domain.model.material import Material
from stockcore.domain.model.stock_status import EffectiveStock
from stockcore.domain.repository.material_repository import MaterialRepository
from stockcore.domain.service.batch_ledger import BatchLedger
from stockcore.domain.service.composition_graph import CompositionGraph


class StockResolver:

    def __init__(
        self,
        ledger: BatchLedger,
        graph: CompositionGraph,
        material_repo: MaterialRepository,
    ) -> None:
        self._ledger = ledger
        self._graph = graph
        self._material_repo = material_repo

    def effective_stock(self, material_id: str) -> EffectiveStock:
        material = self._material_repo.get_by_id(material_id)
        if material is None:
            raise NotFoundError(f"Material '{material_id}' not found")
        if material.is_composite:
            return self._composite_stock(material)

        summary = self._ledger.summarize(material_id)
        return EffectiveStock(
            current_stock=summary.current_stock,
            reorder_level=material.reorder_level,
        )

    def buildable_units(self, material_id: str) -> dict[str, int]:
        """Per component, how many composites its stock alone would cover."""
        return {
            entry.component_material_id: self._units_from(entry)
            for entry in self._graph.get_components(material_id)
        }

    def _composite_stock(self, material: Material) -> EffectiveStock:
        units = self.buildable_units(material.id)
        if not units:
            return EffectiveStock(current_stock=Decimal("0"), reorder_level=Decimal("0"))
        return EffectiveStock(
            current_stock=Decimal(max(0, min(units.values()))),
            reorder_level=material.reorder_level,
        )

    def _units_from(self, entry: CompositionEntry) -> int:
        stock = self._ledger.summarize(entry.component_material_id).current_stock
        return math.floor(stock / entry.effective_quantity_per_composite)
