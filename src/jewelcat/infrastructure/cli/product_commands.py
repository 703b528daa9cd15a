"""CLI commands for the Product aggregate and its pricing."""

from __future__ import annotations

from typing import IO

import click

from jewelcat.application.delete_product import DeleteProductHandler
from jewelcat.application.dto import ProductPriceDTO
from jewelcat.application.price_product import PriceProductHandler
from jewelcat.application.reprice_catalog import RepriceCatalogHandler
from jewelcat.application.save_product import SaveProductHandler
from jewelcat.domain.exceptions import DomainException, PricingError
from jewelcat.infrastructure.bootstrap import currency, default_gst, unit_of_work
from jewelcat.infrastructure.cli.input_files import product_spec, read_json

PRICE_UNAVAILABLE = "Price unavailable"


@click.command("save")
@click.argument("file", type=click.File("r"))
def product_save(file: IO[str]) -> None:
    """Create or update a product composition from a JSON FILE."""
    spec = product_spec(read_json(file))
    handler = SaveProductHandler(uow=unit_of_work(), currency=currency(), default_gst=default_gst())

    try:
        product = handler.handle(spec)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' saved ({len(product.lines)} line(s))")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Soft-delete a product, releasing its material references."""
    try:
        DeleteProductHandler(uow=unit_of_work()).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted.")


def _display_price(dto: ProductPriceDTO) -> None:
    click.echo(f"Product {dto.product_id}  '{dto.product_name}'")
    click.echo()
    click.echo(
        f"  {'Material':<24} {'Qty':>8} {'Base':>16} {'Wastage':>14} {'Making':>14} {'Total':>16}"
    )
    click.echo(f"  {'-'*97}")
    for line in dto.lines:
        click.echo(
            f"  {line.variant_name:<24} {line.quantity:>8} {line.base:>16} "
            f"{line.wastage:>14} {line.making:>14} {line.line_total:>16}"
        )
    click.echo(f"  {'-'*97}")
    click.echo(f"  {'Subtotal':<30} {dto.subtotal:>67}")
    click.echo(f"  {'Additional charges':<30} {dto.additional_charges:>67}")
    click.echo(f"  {'GST':<30} {dto.gst:>67}")
    click.echo(f"  {'Discount':<30} {dto.discount:>67}")
    click.echo(f"  {'Final price':<30} {dto.final_price:>67}")


@click.command("price")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_price(product_id: str) -> None:
    """Compute a product's price from the current catalog."""
    handler = PriceProductHandler(uow=unit_of_work())

    try:
        dto = handler.handle(product_id)
    except PricingError as exc:
        raise click.ClickException(f"{PRICE_UNAVAILABLE} for product {product_id}: {exc}")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_price(dto)


@click.command("reprice")
def product_reprice() -> None:
    """Price every active product; report those that cannot be priced."""
    try:
        results = RepriceCatalogHandler(uow=unit_of_work()).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not results:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<34} {'Name':<24} {'Final price':>18}")
    click.echo("-" * 78)
    for dto in results:
        price = dto.final_price if dto.available else PRICE_UNAVAILABLE
        click.echo(f"{dto.product_id:<34} {dto.product_name:<24} {price:>18}")
    for dto in results:
        if not dto.available:
            click.echo(f"  {dto.product_id}: {dto.unavailable_reason}")
