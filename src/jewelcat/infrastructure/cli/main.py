import click

from jewelcat.infrastructure.cli.history_commands import history_show
from jewelcat.infrastructure.cli.material_commands import (
    material_create,
    material_delete,
    material_list,
    material_replace,
    material_set_price,
    material_show,
)
from jewelcat.infrastructure.cli.product_commands import (
    product_delete,
    product_price,
    product_reprice,
    product_save,
)
from jewelcat.infrastructure.config import get_settings
from jewelcat.infrastructure.logging_config import setup_logging


@click.group()
def cli() -> None:
    """jewelcat — jewelry catalog pricing"""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)


@cli.group()
def material() -> None:
    """Manage metals and gemstones."""


@cli.group()
def product() -> None:
    """Manage product compositions and prices."""


@cli.group()
def history() -> None:
    """Inspect the price audit log."""


# Register subcommands
material.add_command(material_create)
material.add_command(material_delete)
material.add_command(material_list)
material.add_command(material_replace)
material.add_command(material_set_price)
material.add_command(material_show)
product.add_command(product_delete)
product.add_command(product_price)
product.add_command(product_reprice)
product.add_command(product_save)
history.add_command(history_show)
