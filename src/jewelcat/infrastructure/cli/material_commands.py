"""CLI commands for the Metal and Gemstone aggregates."""

from __future__ import annotations

from typing import IO

import click

from jewelcat.application.create_material import CreateMaterialHandler
from jewelcat.application.delete_material import DeleteMaterialHandler
from jewelcat.application.dto import MaterialDTO
from jewelcat.application.list_materials import ListMaterialsHandler
from jewelcat.application.replace_material import ReplaceMaterialHandler
from jewelcat.application.show_material import ShowMaterialHandler
from jewelcat.application.update_variant_price import UpdateVariantPriceHandler
from jewelcat.domain.exceptions import DomainException, ReferencedError
from jewelcat.infrastructure.bootstrap import currency, default_actor, unit_of_work
from jewelcat.infrastructure.cli.input_files import material_spec, read_json


def _display_material(dto: MaterialDTO) -> None:
    """Shared formatting for displaying a material."""
    label = f"{dto.code} " if dto.code else ""
    deleted = "  [DELETED]" if dto.is_deleted else ""
    click.echo(f"{dto.kind.capitalize()} {label}'{dto.name}' ({dto.color_or_type}){deleted}")
    click.echo(f"ID: {dto.id}")
    click.echo()
    click.echo(f"  {'#':>3} {'Variant':<24} {'Unit price':>16} {'Active':>7}  Attributes")
    click.echo(f"  {'-'*70}")
    for v in dto.variants:
        attrs = ", ".join(f"{k}={val}" for k, val in v.attributes.items())
        click.echo(
            f"  {v.index:>3} {v.name:<24} {v.unit_price:>16} {'yes' if v.is_active else 'no':>7}  {attrs}"
        )


@click.command("create")
@click.argument("file", type=click.File("r"))
def material_create(file: IO[str]) -> None:
    """Create a metal or gemstone from a JSON FILE."""
    spec = material_spec(read_json(file))
    handler = CreateMaterialHandler(uow=unit_of_work(), currency=currency())

    try:
        dto = handler.handle(spec)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Created {dto.kind} {dto.id}")
    _display_material(dto)


@click.command("replace")
@click.option("--id", "material_id", required=True, help="Material ID.")
@click.option("--by", "changed_by", default=None, help="Acting admin identity.")
@click.argument("file", type=click.File("r"))
def material_replace(material_id: str, changed_by: str | None, file: IO[str]) -> None:
    """Replace every field of a material from a JSON FILE."""
    spec = material_spec(read_json(file))
    handler = ReplaceMaterialHandler(uow=unit_of_work(), currency=currency())

    try:
        dto = handler.handle(material_id, spec, changed_by=changed_by or default_actor())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Replaced {dto.kind} {dto.id}")
    _display_material(dto)


@click.command("show")
@click.option("--id", "material_id", required=True, help="Material ID.")
@click.option("--include-deleted", is_flag=True, default=False, help="Also find soft-deleted materials.")
def material_show(material_id: str, include_deleted: bool) -> None:
    """Show a material and its variants."""
    handler = ShowMaterialHandler(uow=unit_of_work())

    try:
        dto = handler.handle(material_id, include_deleted=include_deleted)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_material(dto)


@click.command("list")
@click.option("--kind", type=click.Choice(["metal", "gemstone"]), default=None)
@click.option("--include-deleted", is_flag=True, default=False, help="Also list soft-deleted materials.")
def material_list(kind: str | None, include_deleted: bool) -> None:
    """List materials in the catalog."""
    handler = ListMaterialsHandler(uow=unit_of_work())

    try:
        dtos = handler.handle(kind=kind, include_deleted=include_deleted)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dtos:
        click.echo("No materials found.")
        return

    click.echo(f"{'ID':<34} {'Kind':<9} {'Code':<12} {'Name':<20} {'Variants':>8}")
    click.echo("-" * 86)
    for dto in dtos:
        name = f"{dto.name} [deleted]" if dto.is_deleted else dto.name
        click.echo(f"{dto.id:<34} {dto.kind:<9} {dto.code:<12} {name:<20} {len(dto.variants):>8}")


@click.command("set-price")
@click.option("--id", "material_id", required=True, help="Material ID.")
@click.option("--variant", "variant_index", required=True, type=int, help="Variant position (0-based).")
@click.option("--price", required=True, help="New unit price (e.g. 6200).")
@click.option("--by", "changed_by", default=None, help="Acting admin identity.")
def material_set_price(
    material_id: str, variant_index: int, price: str, changed_by: str | None
) -> None:
    """Update one variant's unit price (audited)."""
    handler = UpdateVariantPriceHandler(uow=unit_of_work())

    try:
        dto = handler.handle(
            material_id, variant_index, price, changed_by=changed_by or default_actor()
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    variant = dto.variants[variant_index]
    click.echo(f"'{variant.name}' of {dto.name} is now {variant.unit_price}")


@click.command("delete")
@click.option("--id", "material_id", required=True, help="Material ID.")
def material_delete(material_id: str) -> None:
    """Soft-delete a material that no product uses."""
    handler = DeleteMaterialHandler(uow=unit_of_work())

    try:
        handler.handle(material_id)
    except ReferencedError as exc:
        raise click.ClickException(
            f"Material {material_id} is still used by {exc.count} product(s)."
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Material {material_id} deleted.")
