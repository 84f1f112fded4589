"""Application service: Add Material use case."""

from __future__ import annotations

from stockcore.domain.exceptions import ValidationError
from stockcore.domain.model.material import Material
from stockcore.domain.repository.material_repository import MaterialRepository


class AddMaterialHandler:

    def __init__(self, material_repo: MaterialRepository) -> None:
        self._material_repo = material_repo

    def handle(
        self,
        code: str,
        name: str,
        unit: str,
        standard_price: str = "0",
        minimum_stock_level: str = "0",
        is_composite: bool = False,
        is_disposable: bool = False,
    ) -> Material:
        """Add a new material to the catalog."""
        # Auto-assign ID based on existing materials
        all_materials = self._material_repo.list_all()
        if all_materials:
            next_id = str(max(int(m.id) for m in all_materials) + 1)
        else:
            next_id = "1"

        material = Material.create(
            id=next_id,
            code=code,
            name=name,
            unit=unit,
            standard_price=standard_price,
            minimum_stock_level=minimum_stock_level,
            is_composite=is_composite,
            is_disposable=is_disposable,
        )

        if self._material_repo.get_by_code(material.code) is not None:
            raise ValidationError(f"Material code '{material.code}' already exists")

        self._material_repo.save(material)
        return material
