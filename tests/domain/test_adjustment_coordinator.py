"""Unit tests for the AdjustmentCoordinator domain service."""

from decimal import Decimal

import pytest

from stockcore.application.stock_core import StockCore
from stockcore.domain.exceptions import NotFoundError, PartialFailure, ValidationError
from stockcore.domain.model.adjustment import (
    AdjustmentReason,
    AdjustmentRequest,
    AdjustmentStatus,
    AdjustmentType,
)
from stockcore.domain.model.value_objects import Money
from tests.fakes import drum_oil_repos, material

DAMAGE = AdjustmentReason.of("damage")
COUNT = AdjustmentReason.of("count_correction")


def _request(material_id, adjustment_type, qty, reason=COUNT, notes=""):
    return AdjustmentRequest(
        material_id=material_id,
        adjustment_type=adjustment_type,
        quantity=Decimal(qty),
        reason=reason,
        notes=notes,
    )


# ── Simple materials ─────────────────────────────────────────────────────────


class TestAdjust:

    def _setup(self, oil="850", drums="5"):
        repos = drum_oil_repos(oil, drums)
        return repos, StockCore.build(repos)

    def _stock(self, core, material_id) -> Decimal:
        return core.ledger.summarize(material_id).current_stock

    def test_increase(self):
        _, core = self._setup()
        result = core.coordinator.adjust(_request("1", AdjustmentType.INCREASE, "150"))
        assert result.status is AdjustmentStatus.SUCCEEDED
        assert result.previous_stock == Decimal("850")
        assert result.new_stock == Decimal("1000")
        assert self._stock(core, "1") == Decimal("1000")

    def test_decrease(self):
        _, core = self._setup()
        result = core.coordinator.adjust(_request("1", AdjustmentType.DECREASE, "50", DAMAGE))
        assert result.delta == Decimal("-50")
        assert self._stock(core, "1") == Decimal("800")

    def test_set_writes_absolute_target(self):
        _, core = self._setup()
        core.coordinator.adjust(_request("2", AdjustmentType.SET, "2"))
        assert self._stock(core, "2") == Decimal("2")

    def test_set_is_idempotent(self):
        repos, core = self._setup()
        core.coordinator.adjust(_request("2", AdjustmentType.SET, "2"))
        again = core.coordinator.adjust(_request("2", AdjustmentType.SET, "2"))
        assert not again.changed
        assert again.transaction is None
        assert self._stock(core, "2") == Decimal("2")
        assert len(repos.transactions.list_for_material("2")) == 1

    def test_conservation_over_a_sequence(self):
        _, core = self._setup()
        start = self._stock(core, "1")
        deltas = []
        for kind, qty in [
            (AdjustmentType.INCREASE, "40"),
            (AdjustmentType.DECREASE, "15"),
            (AdjustmentType.SET, "700"),
            (AdjustmentType.INCREASE, "3.5"),
        ]:
            deltas.append(core.coordinator.adjust(_request("1", kind, qty)).delta)
        assert self._stock(core, "1") == start + sum(deltas)

    def test_decrease_within_first_batch_leaves_others(self):
        repos, core = self._setup()
        core.ledger.create_opening_batch("1", Decimal("100"))
        core.coordinator.adjust(_request("1", AdjustmentType.SET, "900"))
        quantities = [b.quantity for b in core.ledger.list_batches("1")]
        assert quantities == [Decimal("800"), Decimal("100")]
        assert self._stock(core, "1") == Decimal("900")

    def test_decrease_drains_batches_in_listing_order(self):
        repos, core = self._setup()
        core.ledger.create_opening_batch("2", Decimal("5"))
        result = core.coordinator.adjust(_request("2", AdjustmentType.DECREASE, "7", DAMAGE))
        assert [b.quantity for b in core.ledger.list_batches("2")] == [Decimal("0"), Decimal("3")]
        assert result.new_stock == Decimal("3")
        assert len(repos.transactions.list_for_material("2")) == 1

    def test_set_below_other_batches(self):
        _, core = self._setup()
        core.ledger.create_opening_batch("2", Decimal("5"))
        core.coordinator.adjust(_request("2", AdjustmentType.SET, "3"))
        assert [b.quantity for b in core.ledger.list_batches("2")] == [Decimal("0"), Decimal("3")]

    def test_increase_with_several_batches_goes_to_first(self):
        _, core = self._setup()
        core.ledger.create_opening_batch("2", Decimal("5"))
        core.coordinator.adjust(_request("2", AdjustmentType.INCREASE, "4"))
        assert [b.quantity for b in core.ledger.list_batches("2")] == [Decimal("9"), Decimal("5")]

    def test_opening_batch_created_when_none(self):
        repos, core = self._setup()
        repos.materials.save(material("5", "LABEL-ROLL", unit="rolls"))
        result = core.coordinator.adjust(_request("5", AdjustmentType.INCREASE, "12"))
        batches = core.ledger.list_batches("5")
        assert len(batches) == 1
        assert batches[0].quantity == Decimal("12")
        assert batches[0].batch_number.startswith("MANUAL-")
        assert result.batch_id == batches[0].id

    def test_audit_record_written(self):
        repos, core = self._setup()
        core.coordinator.adjust(
            _request("1", AdjustmentType.DECREASE, "20", DAMAGE, notes="forklift")
        )
        [tx] = repos.transactions.list_for_material("1")
        assert tx.quantity_delta == Decimal("-20")
        assert tx.reason_text == "Damaged Goods"
        assert tx.amount == Money.of("5.000")
        assert tx.description == "Stock Adjustment (decrease): Damaged Goods - forklift"

    def test_other_reason_uses_custom_text(self):
        repos, core = self._setup()
        core.coordinator.adjust(
            _request("2", AdjustmentType.INCREASE, "1", AdjustmentReason.other("Audit recount"))
        )
        [tx] = repos.transactions.list_for_material("2")
        assert tx.reason_text == "Audit recount"


class TestAdjustValidation:

    def _setup(self):
        repos = drum_oil_repos()
        return repos, StockCore.build(repos)

    def test_all_violations_reported_together(self):
        _, core = self._setup()
        request = _request("1", AdjustmentType.INCREASE, "0", reason=None)
        with pytest.raises(ValidationError) as exc_info:
            core.coordinator.adjust(request)
        violations = exc_info.value.violations
        assert len(violations) == 2
        assert "Quantity must be greater than zero" in violations
        assert "An adjustment reason is required" in violations

    def test_decrease_beyond_stock_rejected(self):
        repos, core = self._setup()
        with pytest.raises(ValidationError, match="only 5 units in stock"):
            core.coordinator.adjust(_request("2", AdjustmentType.DECREASE, "6"))
        assert core.ledger.summarize("2").current_stock == Decimal("5")
        assert repos.transactions.records == []

    def test_negative_set_rejected(self):
        _, core = self._setup()
        with pytest.raises(ValidationError, match="cannot be negative"):
            core.coordinator.adjust(_request("2", AdjustmentType.SET, "-1"))

    def test_other_without_text_rejected(self):
        _, core = self._setup()
        with pytest.raises(ValidationError, match="custom reason is required"):
            core.coordinator.adjust(
                _request("2", AdjustmentType.INCREASE, "1", AdjustmentReason.other("  "))
            )

    def test_composite_rejected(self):
        _, core = self._setup()
        with pytest.raises(ValidationError, match="composite material"):
            core.coordinator.adjust(_request("3", AdjustmentType.SET, "2"))

    def test_non_finite_quantity_rejected(self):
        _, core = self._setup()
        with pytest.raises(ValidationError, match="finite"):
            core.coordinator.adjust(_request("2", AdjustmentType.SET, "NaN"))

    def test_unknown_material(self):
        _, core = self._setup()
        with pytest.raises(NotFoundError):
            core.coordinator.adjust(_request("99", AdjustmentType.SET, "1"))

    def test_validate_does_not_write(self):
        repos, core = self._setup()
        material, current = core.coordinator.validate(_request("1", AdjustmentType.SET, "10"))
        assert material.code == "OIL-BULK"
        assert current == Decimal("850")
        assert core.ledger.summarize("1").current_stock == Decimal("850")
        assert repos.transactions.records == []


# ── Composite fan-out ────────────────────────────────────────────────────────


class TestCompositeAdjustment:

    def _setup(self):
        repos = drum_oil_repos()
        return repos, StockCore.build(repos)

    def test_plan_lists_components_with_current_stock(self):
        _, core = self._setup()
        plan = core.coordinator.plan_composite_adjustment("3")
        assert [t.component_code for t in plan.components] == ["OIL-BULK", "DRUM-EMPTY"]
        assert [t.current_stock for t in plan.components] == [Decimal("850"), Decimal("5")]
        assert all(not t.changed for t in plan.components)

    def test_plan_for_simple_material_rejected(self):
        _, core = self._setup()
        with pytest.raises(ValidationError, match="not a composite"):
            core.coordinator.plan_composite_adjustment("1")

    def test_plan_without_components_rejected(self):
        repos, core = self._setup()
        repos.materials.save(material("9", "EMPTY-KIT", composite=True))
        with pytest.raises(ValidationError, match="No component information"):
            core.coordinator.plan_composite_adjustment("9")

    def test_set_target_for_foreign_material_rejected(self):
        _, core = self._setup()
        plan = core.coordinator.plan_composite_adjustment("3")
        with pytest.raises(ValidationError, match="not a component"):
            plan.set_target("99", Decimal("1"))

    def test_all_components_applied(self):
        repos, core = self._setup()
        plan = core.coordinator.plan_composite_adjustment("3")
        plan.set_target("1", Decimal("1000"))
        plan.set_target("2", Decimal("6"))
        result = core.coordinator.apply_composite_adjustment(plan)
        assert result.status is AdjustmentStatus.SUCCEEDED
        assert result.success_count == 2
        assert core.resolver.effective_stock("3").current_stock == Decimal("5")
        [tx] = repos.transactions.list_for_material("2")
        assert tx.reason_text == "Composite adjustment (Drum Oil 200)"
        assert tx.description.endswith("Set to 6 units (was 5)")

    def test_unchanged_components_skipped(self):
        repos, core = self._setup()
        plan = core.coordinator.plan_composite_adjustment("3")
        plan.set_target("2", Decimal("2"))
        result = core.coordinator.apply_composite_adjustment(plan)
        assert result.status is AdjustmentStatus.SUCCEEDED
        assert [o.component_material_id for o in result.outcomes] == ["2"]
        assert repos.transactions.list_for_material("1") == []

    def test_nothing_changed_is_success(self):
        _, core = self._setup()
        plan = core.coordinator.plan_composite_adjustment("3")
        result = core.coordinator.apply_composite_adjustment(plan)
        assert result.status is AdjustmentStatus.SUCCEEDED
        assert result.outcomes == []

    def test_partial_failure_keeps_applied_change(self):
        repos, core = self._setup()
        plan = core.coordinator.plan_composite_adjustment("3")
        plan.set_target("1", Decimal("900"))
        plan.set_target("2", Decimal("-5"))
        result = core.coordinator.apply_composite_adjustment(plan)

        assert result.status is AdjustmentStatus.PARTIALLY_SUCCEEDED
        assert result.success_count == 1
        assert result.error_count == 1
        assert result.errors[0].component_name == "Drum Empty"
        assert core.ledger.summarize("1").current_stock == Decimal("900")
        assert core.ledger.summarize("2").current_stock == Decimal("5")

        with pytest.raises(PartialFailure, match="Updated 1, failed 1") as exc_info:
            result.raise_for_status()
        assert [o.component_material_id for o in exc_info.value.failed] == ["2"]

    def test_storage_failure_is_collected(self):
        repos, core = self._setup()
        repos.batches.fail_on_material.add("1")
        plan = core.coordinator.plan_composite_adjustment("3")
        plan.set_target("1", Decimal("900"))
        plan.set_target("2", Decimal("4"))
        result = core.coordinator.apply_composite_adjustment(plan)
        assert result.status is AdjustmentStatus.PARTIALLY_SUCCEEDED
        assert "storage unavailable" in result.errors[0].error
        assert core.ledger.summarize("2").current_stock == Decimal("4")

    def test_component_target_spans_several_batches(self):
        _, core = self._setup()
        core.ledger.create_opening_batch("2", Decimal("5"))
        plan = core.coordinator.plan_composite_adjustment("3")
        plan.set_target("2", Decimal("1"))
        result = core.coordinator.apply_composite_adjustment(plan)
        assert result.status is AdjustmentStatus.SUCCEEDED
        assert [b.quantity for b in core.ledger.list_batches("2")] == [Decimal("0"), Decimal("1")]

    def test_non_finite_target_rejected(self):
        _, core = self._setup()
        plan = core.coordinator.plan_composite_adjustment("3")
        with pytest.raises(ValidationError, match="finite"):
            plan.set_target("2", Decimal("sNaN"))
        assert all(not t.changed for t in plan.components)

    def test_every_component_failing(self):
        _, core = self._setup()
        plan = core.coordinator.plan_composite_adjustment("3")
        plan.set_target("1", Decimal("-1"))
        plan.set_target("2", Decimal("-1"))
        result = core.coordinator.apply_composite_adjustment(plan)
        assert result.status is AdjustmentStatus.FAILED
        assert result.error_count == 2
