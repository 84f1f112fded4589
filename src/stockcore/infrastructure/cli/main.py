import click

from stockcore.infrastructure.bootstrap import init_logging
from stockcore.infrastructure.cli.composition_commands import composition_set, composition_show
from stockcore.infrastructure.cli.inventory_commands import (
    inventory_adjust,
    inventory_adjust_composite,
    inventory_alerts,
    inventory_batches,
    inventory_show,
)
from stockcore.infrastructure.cli.material_commands import material_add, material_list


@click.group()
def cli() -> None:
    """stockcore: material stock levels, compositions and adjustments."""
    init_logging()


@cli.group()
def material() -> None:
    """Manage the material catalog."""


@cli.group()
def composition() -> None:
    """Manage composite material components."""


@cli.group()
def inventory() -> None:
    """Inspect and adjust stock."""


# Register subcommands
material.add_command(material_add)
material.add_command(material_list)
composition.add_command(composition_set)
composition.add_command(composition_show)
inventory.add_command(inventory_show)
inventory.add_command(inventory_batches)
inventory.add_command(inventory_alerts)
inventory.add_command(inventory_adjust)
inventory.add_command(inventory_adjust_composite)
