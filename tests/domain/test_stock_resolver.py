"""Unit tests for effective stock, status classification and alerts."""

from decimal import Decimal

import pytest

from stockcore.application.stock_core import StockCore
from stockcore.domain.exceptions import NotFoundError
from stockcore.domain.model.stock_status import (
    AlertSeverity,
    StockStatus,
    alert_severity,
    classify,
)
from tests.fakes import drum_oil_repos, material


# ── classify() ───────────────────────────────────────────────────────────────


class TestClassify:

    def test_zero_is_out_of_stock(self):
        assert classify(Decimal("0"), Decimal("10")) is StockStatus.OUT_OF_STOCK

    def test_half_of_reorder_is_critical(self):
        assert classify(Decimal("5"), Decimal("10")) is StockStatus.CRITICAL

    def test_at_reorder_is_low(self):
        assert classify(Decimal("10"), Decimal("10")) is StockStatus.LOW

    def test_above_reorder_is_good(self):
        assert classify(Decimal("11"), Decimal("10")) is StockStatus.GOOD

    def test_no_threshold_is_good(self):
        assert classify(Decimal("1"), Decimal("0")) is StockStatus.GOOD

    def test_severity_never_rises_with_stock(self):
        order = [StockStatus.OUT_OF_STOCK, StockStatus.CRITICAL, StockStatus.LOW, StockStatus.GOOD]
        ranks = [order.index(classify(Decimal(s), Decimal("10"))) for s in range(0, 15)]
        assert ranks == sorted(ranks)


class TestAlertSeverity:

    def test_no_alert_above_reorder(self):
        assert alert_severity(Decimal("11"), Decimal("10")) is None

    def test_no_alert_without_threshold(self):
        assert alert_severity(Decimal("0"), Decimal("0")) is None

    def test_warning_at_reorder(self):
        assert alert_severity(Decimal("10"), Decimal("10")) is AlertSeverity.WARNING

    def test_critical_at_half(self):
        assert alert_severity(Decimal("5"), Decimal("10")) is AlertSeverity.CRITICAL


# ── StockResolver ────────────────────────────────────────────────────────────


class TestStockResolver:

    def _setup(self, oil="850", drums="5"):
        repos = drum_oil_repos(oil, drums)
        return repos, StockCore.build(repos)

    def test_simple_material_reads_ledger(self):
        _, core = self._setup()
        stock = core.resolver.effective_stock("1")
        assert stock.current_stock == Decimal("850")
        assert stock.reorder_level == Decimal("400")

    def test_composite_bottleneck_on_content(self):
        # floor(850 / 200) = 4 and 5 drums: four full drums can be built.
        _, core = self._setup()
        stock = core.resolver.effective_stock("3")
        assert stock.current_stock == Decimal("4")
        assert stock.reorder_level == Decimal("3")
        assert core.status.status("3") is StockStatus.GOOD

    def test_composite_bottleneck_on_container(self):
        _, core = self._setup(drums="2")
        assert core.resolver.effective_stock("3").current_stock == Decimal("2")
        assert core.status.status("3") is StockStatus.LOW

    def test_buildable_units_per_component(self):
        _, core = self._setup()
        assert core.resolver.buildable_units("3") == {"1": 4, "2": 5}

    def test_more_component_stock_never_lowers_composite(self):
        _, core = self._setup()
        before = core.resolver.effective_stock("3").current_stock
        core.ledger.set_batch_quantity("1", Decimal("1200"), "Found Inventory")
        after = core.resolver.effective_stock("3").current_stock
        assert after >= before

    def test_composite_without_components_is_zero(self):
        repos, core = self._setup()
        repos.materials.save(material("9", "EMPTY-KIT", composite=True, min_stock="5"))
        stock = core.resolver.effective_stock("9")
        assert stock.current_stock == Decimal("0")
        assert stock.reorder_level == Decimal("0")

    def test_unknown_material_not_found(self):
        _, core = self._setup()
        with pytest.raises(NotFoundError):
            core.resolver.effective_stock("99")


# ── StockStatusService.alerts ────────────────────────────────────────────────


class TestAlerts:

    def test_alerts_cover_simple_materials_only(self):
        repos = drum_oil_repos(oil="150", drums="5")
        core = StockCore.build(repos)
        alerts = core.status.alerts(repos.materials.list_all())
        assert [a.material_code for a in alerts] == ["OIL-BULK"]
        assert alerts[0].severity is AlertSeverity.CRITICAL
        assert alerts[0].message == "Low stock alert: OIL-BULK (150 L)"

    def test_critical_count(self):
        repos = drum_oil_repos(oil="150", drums="4")
        core = StockCore.build(repos)
        alerts = core.status.alerts(repos.materials.list_all())
        assert len(alerts) == 2
        assert core.status.critical_count(alerts) == 1
