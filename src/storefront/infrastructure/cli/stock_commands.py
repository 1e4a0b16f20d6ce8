"""CLI commands for stock levels."""

from __future__ import annotations

import click

from storefront.application.stock import ListStockHandler, SetStockHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import storefront


@click.command("set")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Quantity on hand.")
def stock_set(product_id: str, quantity: int) -> None:
    """Set the stock level for a product."""
    with storefront() as uow:
        try:
            SetStockHandler(uow).handle(product_id=product_id, quantity=quantity)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Stock for '{product_id}' set to {quantity}")


@click.command("show")
def stock_show() -> None:
    """Show current stock levels."""
    with storefront() as uow:
        lines = ListStockHandler(uow).handle()

    if not lines:
        click.echo("No stock records found.")
        return

    click.echo(f"{'Product':<20} {'Stock':>8}")
    click.echo("-" * 29)
    for line in lines:
        click.echo(f"{line.product_id:<20} {line.stock_quantity:>8}")
