"""CLI commands for the price audit log (read-only)."""

from __future__ import annotations

import click

from jewelcat.application.show_price_history import ShowPriceHistoryHandler
from jewelcat.domain.exceptions import DomainException
from jewelcat.infrastructure.bootstrap import unit_of_work


@click.command("show")
@click.option("--entity-id", default=None, help="Only entries for this material ID.")
@click.option("--limit", type=int, default=None, help="Show at most this many entries.")
def history_show(entity_id: str | None, limit: int | None) -> None:
    """Show price changes, newest first."""
    handler = ShowPriceHistoryHandler(uow=unit_of_work())

    try:
        entries = handler.handle(entity_id=entity_id, limit=limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not entries:
        click.echo("No price changes recorded.")
        return

    click.echo(f"{'Changed at':<24} {'Type':<9} {'Variant':<20} {'Old':>16} {'New':>16}  By")
    click.echo("-" * 96)
    for e in entries:
        click.echo(
            f"{e.changed_at:<24} {e.entity_type:<9} {e.variant_name:<20} "
            f"{e.old_price:>16} {e.new_price:>16}  {e.changed_by}"
        )
