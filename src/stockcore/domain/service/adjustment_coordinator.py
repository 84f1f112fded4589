"""Domain service: Adjustment Coordinator.

Applies a requested stock change to a simple material, or fans a
composite adjustment out into one change per component.

Simple materials use a two-phase approach:
  Phase 1, validate: every violation is collected and raised together
    as a ValidationError before anything is written.
  Phase 2, apply: the Batch Ledger writes, then one audit record.

Composite fan-out is best-effort: each component write is independent,
failures are collected and the loop carries on. Already-applied
component changes are never rolled back.
"""

from __future__ import annotations

from decimal import Decimal

from stockcore.domain.exceptions import DomainException, NotFoundError, ValidationError
from stockcore.domain.model.adjustment import (
    AdjustmentRequest,
    AdjustmentResult,
    AdjustmentStatus,
    AdjustmentType,
    ComponentOutcome,
    ComponentTarget,
    CompositeAdjustmentPlan,
    CompositeAdjustmentResult,
    ReasonKind,
    StockTransaction,
    component_notes,
    describe,
)
from stockcore.domain.model.batch import Batch
from stockcore.domain.model.material import Material
from stockcore.domain.repository.material_repository import MaterialRepository
from stockcore.domain.repository.transaction_repository import TransactionRepository
from stockcore.domain.service.batch_ledger import BatchLedger
from stockcore.domain.service.composition_graph import CompositionGraph
from stockcore.domain.service.stock_resolver import StockResolver
from stockcore.logging_config import get_logger

logger = get_logger("services.adjustment_coordinator")


class AdjustmentCoordinator:

    def __init__(
        self,
        ledger: BatchLedger,
        graph: CompositionGraph,
        resolver: StockResolver,
        material_repo: MaterialRepository,
        transaction_repo: TransactionRepository,
    ) -> None:
        self._ledger = ledger
        self._graph = graph
        self._resolver = resolver
        self._material_repo = material_repo
        self._transaction_repo = transaction_repo

    # --- Simple materials -----------------------------------------------------

    def validate(self, request: AdjustmentRequest) -> tuple[Material, Decimal]:
        """Check a request without mutating anything.

        Returns the material and its current effective stock.
        """
        material = self._require_material(request.material_id)
        current = self._resolver.effective_stock(material.id).current_stock
        violations: list[str] = []

        if material.is_composite:
            violations.append(
                f"{material.code} is a composite material; adjust its "
                f"components individually"
            )

        qty = request.quantity
        if not isinstance(qty, Decimal) or not qty.is_finite():
            violations.append("Quantity must be a finite number")
        elif request.adjustment_type is AdjustmentType.SET:
            if qty < 0:
                violations.append("Quantity cannot be negative")
        elif qty <= 0:
            violations.append("Quantity must be greater than zero")
        elif request.adjustment_type is AdjustmentType.DECREASE and qty > current:
            violations.append(
                f"Cannot decrease {material.code} by {qty}: "
                f"only {current} {material.unit} in stock"
            )

        reason = request.reason
        if reason is None:
            violations.append("An adjustment reason is required")
        elif reason.kind is ReasonKind.OTHER and not reason.text:
            violations.append("A custom reason is required when the reason is 'other'")

        if violations:
            raise ValidationError(
                f"Invalid adjustment for {material.code}: " + "; ".join(violations),
                violations=violations,
            )
        return material, current

    def adjust(self, request: AdjustmentRequest) -> AdjustmentResult:
        """Validate and apply an increase, decrease or set.

        The signed delta is applied in batch listing order; a material with
        no batch gets an opening batch holding the target quantity.
        A set whose delta is zero writes nothing.
        """
        material, current = self.validate(request)

        delta = self._delta(request, current)
        target = current + delta
        reason_text = request.reason.text

        if delta == 0:
            logger.debug(
                "adjustment_noop",
                extra={"material_id": material.id, "stock": current},
            )
            existing = self._ledger.target_batch(material.id)
            return AdjustmentResult(
                material_id=material.id,
                status=AdjustmentStatus.SUCCEEDED,
                previous_stock=current,
                new_stock=current,
                delta=delta,
                batch_id=existing.id if existing else None,
                transaction=None,
            )

        batch = self._write(material.id, delta, target, reason_text, request.notes or None)
        transaction = self._record(
            material, delta, reason_text, describe(request.adjustment_type, reason_text, request.notes)
        )

        logger.info(
            "adjustment_applied",
            extra={
                "material_id": material.id,
                "adjustment_type": request.adjustment_type.value,
                "delta": delta,
                "new_stock": target,
            },
        )
        return AdjustmentResult(
            material_id=material.id,
            status=AdjustmentStatus.SUCCEEDED,
            previous_stock=current,
            new_stock=target,
            delta=delta,
            batch_id=batch.id,
            transaction=transaction,
        )

    # --- Composite materials --------------------------------------------------

    def plan_composite_adjustment(self, material_id: str) -> CompositeAdjustmentPlan:
        """Current stock of every component, with targets preset to it."""
        material = self._require_material(material_id)
        if not material.is_composite:
            raise ValidationError(f"{material.code} is not a composite material")

        entries = self._graph.get_components(material.id)
        if not entries:
            raise ValidationError(
                f"No component information available for {material.code}"
            )

        targets: list[ComponentTarget] = []
        for entry in entries:
            component = self._require_material(entry.component_material_id)
            stock = self._ledger.summarize(component.id).current_stock
            targets.append(
                ComponentTarget(
                    component_material_id=component.id,
                    component_code=component.code,
                    component_name=component.name,
                    component_type=entry.component_type,
                    unit=entry.unit or component.unit,
                    current_stock=stock,
                    new_stock=stock,
                )
            )

        return CompositeAdjustmentPlan(
            composite_material_id=material.id,
            composite_code=material.code,
            composite_name=material.name,
            components=targets,
        )

    def apply_composite_adjustment(self, plan: CompositeAdjustmentPlan) -> CompositeAdjustmentResult:
        """Write every changed component; unchanged ones are skipped.

        SUCCEEDED when every attempted write succeeded (or none was
        needed), FAILED when none did, PARTIALLY_SUCCEEDED otherwise.
        """
        composite = self._require_material(plan.composite_material_id)
        reason_text = f"Composite adjustment ({composite.name})"
        outcomes: list[ComponentOutcome] = []

        for target in plan.components:
            if not target.changed:
                continue
            try:
                self._apply_component(target, reason_text)
            except (DomainException, OSError) as exc:
                logger.warning(
                    "composite_component_failed",
                    extra={
                        "composite_material_id": composite.id,
                        "component_material_id": target.component_material_id,
                        "error": str(exc),
                    },
                )
                outcomes.append(self._outcome(target, succeeded=False, error=str(exc)))
            else:
                outcomes.append(self._outcome(target, succeeded=True))

        succeeded = sum(1 for o in outcomes if o.succeeded)
        if succeeded == len(outcomes):
            status = AdjustmentStatus.SUCCEEDED
        elif succeeded == 0:
            status = AdjustmentStatus.FAILED
        else:
            status = AdjustmentStatus.PARTIALLY_SUCCEEDED

        logger.info(
            "composite_adjustment_applied",
            extra={
                "composite_material_id": composite.id,
                "status": status.value,
                "attempted": len(outcomes),
                "succeeded": succeeded,
            },
        )
        return CompositeAdjustmentResult(
            composite_material_id=composite.id,
            status=status,
            outcomes=outcomes,
        )

    # --- Internal helpers -----------------------------------------------------

    def _apply_component(self, target: ComponentTarget, reason_text: str) -> None:
        component = self._require_material(target.component_material_id)
        current = self._ledger.summarize(component.id).current_stock
        delta = target.new_stock - current
        if delta == 0:
            return
        notes = component_notes(target)
        self._write(component.id, delta, target.new_stock, reason_text, notes)
        self._record(component, delta, reason_text, describe(AdjustmentType.SET, reason_text, notes))

    def _write(
        self,
        material_id: str,
        delta: Decimal,
        target: Decimal,
        reason_text: str,
        notes: str | None,
    ) -> Batch:
        if self._ledger.target_batch(material_id) is None:
            return self._ledger.create_opening_batch(material_id, target, note=notes)
        return self._ledger.apply_delta(material_id, delta, reason_text, notes)[0]

    def _record(
        self,
        material: Material,
        delta: Decimal,
        reason_text: str,
        description: str,
    ) -> StockTransaction:
        transaction = StockTransaction(
            material_id=material.id,
            quantity_delta=delta,
            reason_text=reason_text,
            unit_price=material.standard_price,
            description=description,
        )
        self._transaction_repo.record(transaction)
        return transaction

    @staticmethod
    def _delta(request: AdjustmentRequest, current: Decimal) -> Decimal:
        if request.adjustment_type is AdjustmentType.INCREASE:
            return request.quantity
        if request.adjustment_type is AdjustmentType.DECREASE:
            return -request.quantity
        return request.quantity - current

    @staticmethod
    def _outcome(target: ComponentTarget, succeeded: bool, error: str | None = None) -> ComponentOutcome:
        return ComponentOutcome(
            component_material_id=target.component_material_id,
            component_name=target.component_name,
            previous_stock=target.current_stock,
            target_stock=target.new_stock,
            succeeded=succeeded,
            error=error,
        )

    def _require_material(self, material_id: str) -> Material:
        material = self._material_repo.get_by_id(material_id)
        if material is None:
            raise NotFoundError(f"Material '{material_id}' not found")
        return material
