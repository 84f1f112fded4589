"""CLI commands for the material catalog."""

from __future__ import annotations

import click

from stockcore.application.add_material import AddMaterialHandler
from stockcore.application.list_materials import ListMaterialsHandler
from stockcore.domain.exceptions import DomainException
from stockcore.infrastructure.bootstrap import repositories


@click.command("add")
@click.option("--code", required=True, help="Unique material code (stored upper-case).")
@click.option("--name", required=True, help="Material name.")
@click.option("--unit", required=True, help="Unit of measure (e.g. L, units, kg).")
@click.option("--price", default="0", show_default=True, help="Standard price.")
@click.option("--min-stock", default="0", show_default=True, help="Minimum / reorder stock level.")
@click.option("--composite", is_flag=True, default=False, help="Material is made of components.")
@click.option("--disposable", is_flag=True, default=False, help="Material is disposable.")
def material_add(
    code: str,
    name: str,
    unit: str,
    price: str,
    min_stock: str,
    composite: bool,
    disposable: bool,
) -> None:
    """Add a new material to the catalog."""
    handler = AddMaterialHandler(material_repo=repositories().materials)

    try:
        material = handler.handle(
            code=code,
            name=name,
            unit=unit,
            standard_price=price,
            minimum_stock_level=min_stock,
            is_composite=composite,
            is_disposable=disposable,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    kind = " (composite)" if material.is_composite else ""
    click.echo(f"Material #{material.id} {material.code} '{material.name}' added{kind}")


@click.command("list")
@click.option("--all", "include_components", is_flag=True, default=False,
              help="Include materials used only as components.")
def material_list(include_components: bool) -> None:
    """List materials in the catalog."""
    handler = ListMaterialsHandler(repositories())
    materials = handler.handle(include_components=include_components)

    if not materials:
        click.echo("No materials found.")
        return

    click.echo(f"{'ID':<5} {'Code':<16} {'Name':<24} {'Unit':<7} {'Price':>14} {'Min':>8}  Type")
    click.echo("-" * 86)
    for m in materials:
        kind = "composite" if m.is_composite else ("disposable" if m.is_disposable else "")
        click.echo(
            f"{m.id:<5} {m.code:<16} {m.name:<24} {m.unit:<7} "
            f"{m.standard_price:>14} {m.minimum_stock_level:>8}  {kind}"
        )
