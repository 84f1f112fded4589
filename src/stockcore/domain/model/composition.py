"""Bill-of-materials entries for composite materials.

A composite such as "Oil with Drum" is made of one or more *content*
components and one or more *container* components. Structural rules
that need only the entries themselves are checked here; rules that need
the catalog live in the CompositionGraph service.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from stockcore.domain.exceptions import ValidationError


class ComponentType(Enum):
    CONTENT = "content"
    CONTAINER = "container"


# Machine-readable reasons, in the order they are checked.
TOO_FEW_COMPONENTS = "too_few_components"
MISSING_CONTENT_OR_CONTAINER = "missing_content_or_container"
EMPTY_COMPONENT = "empty_component"
DUPLICATE_COMPONENT = "duplicate_component"
SELF_REFERENCE = "self_reference"
NESTED_COMPOSITE = "nested_composite"


@dataclass(frozen=True)
class CompositionEntry:
    composite_material_id: str
    component_material_id: str
    component_type: ComponentType
    quantity_per_composite: Decimal = Decimal("1")
    unit: str | None = None
    is_active: bool = True

    @property
    def effective_quantity_per_composite(self) -> Decimal:
        """Non-positive requirements count as one unit per composite."""
        if self.quantity_per_composite <= 0:
            return Decimal("1")
        return self.quantity_per_composite


def check_structure(composite_material_id: str, entries: list[CompositionEntry]) -> None:
    """Fail fast on the first structural violation.

    Raises ValidationError whose ``code`` names the violated rule.
    """
    active = [e for e in entries if e.is_active]
    if len(active) < 2:
        raise ValidationError(
            "Composite materials must have at least 2 components "
            "(1 container + 1 content)",
            code=TOO_FEW_COMPONENTS,
        )

    has_content = any(
        e.component_type is ComponentType.CONTENT and e.component_material_id
        for e in active
    )
    has_container = any(
        e.component_type is ComponentType.CONTAINER and e.component_material_id
        for e in active
    )
    if not (has_content and has_container):
        raise ValidationError(
            "Composite materials must have at least 1 container "
            "and 1 content component",
            code=MISSING_CONTENT_OR_CONTAINER,
        )

    if any(not e.component_material_id for e in entries):
        raise ValidationError(
            "All composition rows must have a component material selected",
            code=EMPTY_COMPONENT,
        )

    ids = [e.component_material_id for e in entries]
    if len(ids) != len(set(ids)):
        raise ValidationError(
            "Cannot use the same component material multiple times",
            code=DUPLICATE_COMPONENT,
        )

    if composite_material_id in ids:
        raise ValidationError(
            "A material cannot contain itself as a component",
            code=SELF_REFERENCE,
        )
