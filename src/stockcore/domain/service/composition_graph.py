"""Domain service: Composition Graph.

Stores and validates the bill-of-materials of composite materials.
Components are always simple materials, so the graph is one level deep.
"""

from __future__ import annotations

from stockcore.domain.exceptions import ConflictError, NotFoundError, ValidationError
from stockcore.domain.model.composition import (
    NESTED_COMPOSITE,
    CompositionEntry,
    check_structure,
)
from stockcore.domain.model.material import Material
from stockcore.domain.repository.composition_repository import CompositionRepository
from stockcore.domain.repository.material_repository import MaterialRepository
from stockcore.logging_config import get_logger

logger = get_logger("services.composition_graph")


class CompositionGraph:

    def __init__(
        self,
        composition_repo: CompositionRepository,
        material_repo: MaterialRepository,
    ) -> None:
        self._composition_repo = composition_repo
        self._material_repo = material_repo

    def get_components(self, composite_material_id: str) -> list[CompositionEntry]:
        """Return the active entries of a composite, in configured order."""
        return [
            e
            for e in self._composition_repo.list_by_composite(composite_material_id)
            if e.is_active
        ]

    def set_composition(
        self,
        composite_material_id: str,
        entries: list[CompositionEntry],
    ) -> list[CompositionEntry]:
        """Validate and replace a composite's entries.

        Rules are checked in a fixed order and the first violation raises
        ValidationError with a ``code``; nothing is written unless every
        rule passes.
        """
        composite = self._material_repo.get_by_id(composite_material_id)
        if composite is None:
            raise NotFoundError(f"Material '{composite_material_id}' not found")
        if not composite.is_composite:
            raise ConflictError(
                f"Material {composite.code} is not flagged composite in the catalog"
            )

        check_structure(composite_material_id, entries)

        for entry in entries:
            component = self._require_material(entry.component_material_id)
            if component.is_composite:
                raise ValidationError(
                    f"Composite material {component.code} cannot be used "
                    f"as a component",
                    code=NESTED_COMPOSITE,
                )

        normalized = [
            CompositionEntry(
                composite_material_id=composite_material_id,
                component_material_id=e.component_material_id,
                component_type=e.component_type,
                quantity_per_composite=e.quantity_per_composite,
                unit=e.unit,
                is_active=e.is_active,
            )
            for e in entries
        ]
        self._composition_repo.replace(composite_material_id, normalized)

        logger.info(
            "composition_replaced",
            extra={
                "composite_material_id": composite_material_id,
                "component_count": len(normalized),
            },
        )
        return normalized

    def list_component_material_ids(self) -> set[str]:
        """Every material used as an active component by any composite."""
        return {
            e.component_material_id
            for e in self._composition_repo.list_all()
            if e.is_active
        }

    def _require_material(self, material_id: str) -> Material:
        material = self._material_repo.get_by_id(material_id)
        if material is None:
            raise NotFoundError(f"Component material '{material_id}' not found")
        return material
