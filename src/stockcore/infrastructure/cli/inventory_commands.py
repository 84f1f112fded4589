"""CLI commands for stock levels, alerts and adjustments."""

from __future__ import annotations

import click

from stockcore.application.adjust_composite import AdjustCompositeHandler
from stockcore.application.adjust_stock import AdjustStockHandler
from stockcore.application.show_inventory import (
    AlertsHandler,
    ShowBatchesHandler,
    StockOverviewHandler,
)
from stockcore.domain.exceptions import DomainException
from stockcore.domain.model.adjustment import AdjustmentStatus, ReasonKind
from stockcore.infrastructure.bootstrap import repositories, settings

REASON_TAGS = [kind.tag for kind in ReasonKind]


@click.command("show")
def inventory_show() -> None:
    """Show stock levels and status for every top-level material."""
    handler = StockOverviewHandler(repositories())

    try:
        overview = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not overview.lines:
        click.echo("No materials found.")
        return

    click.echo(f"{'Code':<16} {'Name':<24} {'Stock':>10} {'Unit':<6} {'Reorder':>8}  Status")
    click.echo("-" * 80)
    for line in overview.lines:
        click.echo(
            f"{line.code:<16} {line.name:<24} {line.current_stock:>10} "
            f"{line.unit:<6} {line.reorder_level:>8}  {line.status}"
        )
        for comp in line.components:
            click.echo(
                f"  └ {comp.component_code:<14} {comp.component_type:<24} "
                f"{comp.current_stock:>8} {comp.unit:<6}"
            )
    click.echo("-" * 80)
    click.echo(f"Materials: {overview.material_count}   Stock value: {overview.total_value}")
    click.echo(f"Alerts: {overview.alert_count} ({overview.critical_count} critical)")


@click.command("batches")
@click.option("--material", required=True, help="Material code.")
def inventory_batches(material: str) -> None:
    """Show a material's batches and their totals."""
    handler = ShowBatchesHandler(repositories())

    try:
        summary = handler.handle(material)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{summary.code}  {summary.name}")
    click.echo(
        f"Stock: {summary.current_stock} {summary.unit}  "
        f"Reserved: {summary.reserved}  Available: {summary.available}  "
        f"Reorder: {summary.reorder_level}"
    )
    click.echo(f"Value: {summary.total_value}  Average cost: {summary.average_cost}")
    click.echo()

    if not summary.batches:
        click.echo("No batches recorded.")
        return

    click.echo(f"  {'ID':<5} {'Batch':<28} {'Qty':>10} {'Cost':>14} {'Location':<16} Last reason")
    click.echo(f"  {'-'*96}")
    for b in summary.batches:
        click.echo(
            f"  {b.id:<5} {b.batch_number:<28} {b.quantity:>10} "
            f"{b.average_cost:>14} {b.location:<16} {b.last_reason}"
        )


@click.command("alerts")
def inventory_alerts() -> None:
    """List low and critical stock alerts."""
    handler = AlertsHandler(repositories())

    try:
        report = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not report.alerts:
        click.echo("No stock alerts.")
        return

    for alert in report.alerts:
        click.echo(
            f"[{alert.severity.upper():<8}] {alert.message}  "
            f"(reorder level {alert.reorder_level})"
        )
    click.echo(f"{len(report.alerts)} alert(s), {report.critical_count} critical")


@click.command("adjust")
@click.option("--material", required=True, help="Material code.")
@click.option("--type", "adjustment_type", required=True,
              type=click.Choice(["increase", "decrease", "set"]), help="Adjustment type.")
@click.option("--quantity", required=True, help="Quantity to add, remove, or set to.")
@click.option("--reason", type=click.Choice(REASON_TAGS), default=None, help="Adjustment reason.")
@click.option("--custom-reason", default="", help="Reason text when --reason is 'other'.")
@click.option("--notes", default="", help="Additional details.")
def inventory_adjust(
    material: str,
    adjustment_type: str,
    quantity: str,
    reason: str | None,
    custom_reason: str,
    notes: str,
) -> None:
    """Adjust stock of a simple material (with reason tracking)."""
    handler = AdjustStockHandler(repositories(), default_location=settings().warehouse)

    try:
        result = handler.handle(
            material_code=material,
            adjustment_type=adjustment_type,
            quantity=quantity,
            reason=reason,
            custom_reason=custom_reason,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.changed:
        click.echo(f"{result.code} already at {result.new_stock} {result.unit}, nothing to do.")
        return
    click.echo(
        f"{result.code}: {result.previous_stock} -> {result.new_stock} {result.unit} "
        f"(delta {result.delta})"
    )


def _parse_targets(raw: tuple[str, ...]) -> dict[str, str]:
    """Parse ('DRUM-EMPTY=2', ...) into {code: quantity}."""
    result: dict[str, str] = {}
    for pair in raw:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid target '{pair}'. Expected 'COMPONENT_CODE=QUANTITY'."
            )
        code, qty = pair.split("=", 1)
        result[code.strip()] = qty.strip()
    return result


@click.command("adjust-composite")
@click.option("--composite", required=True, help="Composite material code.")
@click.option("--set", "targets", multiple=True,
              help="New component stock as 'CODE=QTY'. Repeatable. Omit to preview.")
def inventory_adjust_composite(composite: str, targets: tuple[str, ...]) -> None:
    """Adjust the component stocks of a composite material.

    Without --set: shows each component's current stock.
    With --set: applies the new levels, one component at a time.
    """
    handler = AdjustCompositeHandler(repositories(), default_location=settings().warehouse)

    try:
        if not targets:
            rows = handler.plan(composite)
        else:
            result = handler.handle(composite, _parse_targets(targets))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not targets:
        click.echo(f"Components of {composite.upper()}")
        click.echo(f"  {'Component':<16} {'Type':<10} {'Current':>10} Unit")
        click.echo(f"  {'-'*44}")
        for row in rows:
            click.echo(
                f"  {row.code:<16} {row.component_type:<10} {row.current_stock:>10} {row.unit}"
            )
        return

    for outcome in result.errors:
        click.echo(f"  failed: {outcome.component_name}: {outcome.error}", err=True)

    if result.status is AdjustmentStatus.SUCCEEDED:
        click.echo(f"Updated {result.success_count} component(s) successfully")
        return
    try:
        result.raise_for_status()
    except DomainException as exc:
        raise click.ClickException(str(exc))
