"""CLI commands for composite material compositions."""

from __future__ import annotations

import click

from stockcore.application.dto import ComponentSpec
from stockcore.application.set_composition import (
    SetCompositionHandler,
    ShowCompositionHandler,
)
from stockcore.domain.exceptions import DomainException
from stockcore.infrastructure.bootstrap import repositories


def _parse_component(raw: str) -> ComponentSpec:
    """Parse 'OIL-BULK:content:200:L' (unit optional) into a ComponentSpec."""
    parts = [p.strip() for p in raw.split(":")]
    if len(parts) not in (2, 3, 4):
        raise click.BadParameter(
            f"Invalid component '{raw}'. Expected 'CODE:content|container[:QTY[:UNIT]]'."
        )
    code, component_type = parts[0], parts[1]
    quantity = parts[2] if len(parts) > 2 and parts[2] else "1"
    unit = parts[3] if len(parts) > 3 and parts[3] else None
    return ComponentSpec(
        component_code=code,
        component_type=component_type,
        quantity_per_composite=quantity,
        unit=unit,
    )


def _display_components(composite: str, lines) -> None:
    """Shared formatting for displaying a composition."""
    click.echo(f"Composition of {composite.upper()}")
    click.echo()
    click.echo(
        f"  {'Component':<16} {'Type':<10} {'Per unit':>10} {'Unit':<6} {'Stock':>10} {'Builds':>7}"
    )
    click.echo(f"  {'-'*64}")
    for line in lines:
        click.echo(
            f"  {line.component_code:<16} {line.component_type:<10} "
            f"{line.quantity_per_composite:>10} {line.unit:<6} "
            f"{line.current_stock:>10} {line.buildable_units:>7}"
        )


@click.command("set")
@click.option("--composite", required=True, help="Composite material code.")
@click.option("--component", "components", required=True, multiple=True,
              help="Component as 'CODE:content|container:QTY[:UNIT]'. Repeatable.")
def composition_set(composite: str, components: tuple[str, ...]) -> None:
    """Replace the components of a composite material."""
    specs = [_parse_component(raw) for raw in components]
    handler = SetCompositionHandler(repositories())

    try:
        lines = handler.handle(composite_code=composite, specs=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_components(composite, lines)


@click.command("show")
@click.option("--composite", required=True, help="Composite material code.")
def composition_show(composite: str) -> None:
    """Show a composite's components and how many units each allows."""
    handler = ShowCompositionHandler(repositories())

    try:
        lines = handler.handle(composite)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo(f"{composite.upper()} has no components configured.")
        return
    _display_components(composite, lines)
