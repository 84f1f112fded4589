"""Material aggregate: a catalog entry.

The catalog is maintained outside the stock core; here a material is
read-only apart from creation through ``Material.create()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from stockcore.domain.exceptions import ValidationError
from stockcore.domain.model.value_objects import Money, to_decimal


@dataclass
class Material:
    """A material in the catalog.

    ``is_composite`` and ``is_disposable`` are mutually exclusive; the
    catalog is the source of truth for both flags.
    """

    id: str
    code: str
    name: str
    unit: str
    standard_price: Money
    minimum_stock_level: Decimal = Decimal("0")
    is_composite: bool = False
    is_disposable: bool = False

    @property
    def reorder_level(self) -> Decimal:
        return self.minimum_stock_level

    @staticmethod
    def create(
        id: str,
        code: str,
        name: str,
        unit: str,
        standard_price: str | Decimal | int = "0",
        minimum_stock_level: str | Decimal | int = "0",
        is_composite: bool = False,
        is_disposable: bool = False,
    ) -> Material:
        """Create a new catalog entry, enforcing all invariants."""
        if not code or not code.strip():
            raise ValidationError("Material code is required")
        if not name or not name.strip():
            raise ValidationError("Material name is required")
        if not unit or not unit.strip():
            raise ValidationError("Unit is required")
        if is_composite and is_disposable:
            raise ValidationError(
                "A material cannot be both composite and disposable"
            )

        min_level = to_decimal(minimum_stock_level, "minimum stock level")
        if not min_level.is_finite() or min_level < 0:
            raise ValidationError("Minimum stock level cannot be negative")

        return Material(
            id=id,
            code=code.strip().upper(),
            name=name.strip(),
            unit=unit.strip(),
            standard_price=Money.of(standard_price),
            minimum_stock_level=min_level,
            is_composite=is_composite,
            is_disposable=is_disposable,
        )
