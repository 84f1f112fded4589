"""Application service: List Materials use case (query).

By default component materials are left out: they show up under the
composites that use them, not as top-level catalog rows.
"""

from __future__ import annotations

from stockcore.application.dto import MaterialDTO
from stockcore.application.stock_core import Repositories, StockCore
from stockcore.domain.model.material import Material
from stockcore.domain.model.value_objects import format_quantity


class ListMaterialsHandler:

    def __init__(self, repos: Repositories) -> None:
        self._repos = repos

    def handle(self, include_components: bool = False) -> list[MaterialDTO]:
        materials = self._repos.materials.list_all()
        if not include_components:
            component_ids = StockCore.build(self._repos).graph.list_component_material_ids()
            materials = [m for m in materials if m.id not in component_ids]
        return [self._to_dto(m) for m in materials]

    @staticmethod
    def _to_dto(material: Material) -> MaterialDTO:
        return MaterialDTO(
            id=material.id,
            code=material.code,
            name=material.name,
            unit=material.unit,
            standard_price=str(material.standard_price),
            minimum_stock_level=format_quantity(material.minimum_stock_level),
            is_composite=material.is_composite,
            is_disposable=material.is_disposable,
        )
