"""CLI commands for orders."""

from __future__ import annotations

import click

from storefront.application.dto import (
    Identity,
    OrderDTO,
    OrderItemSpec,
    ShippingAddressSpec,
)
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_orders import ListOrdersHandler, ShowOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import storefront


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'P1:3,P2:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    address = dto.shipping_address
    click.echo(f"Order {dto.order_id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo(f"Placed:   {dto.order_date}")
    click.echo(f"Payment:  {dto.payment_method}")
    click.echo(f"Ship to:  {address['address']}, {address['city']}, {address['country']}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*55}")
    for item in dto.items:
        label = item.product_name or item.product_id
        click.echo(
            f"  {label:<20} {item.quantity:>5} {item.unit_price:>14,.2f} {item.line_total:>14,.2f}"
        )
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Order Total':<27} {dto.total_amount:>28,.2f}")


@click.command("place")
@click.option("--customer", required=True, help="Customer ID.")
@click.option("--account", required=True, help="Account ID (its cart is cleared).")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
@click.option("--address", required=True, help="Street address.")
@click.option("--city", required=True, help="City.")
@click.option("--postal-code", default=None, help="Postal code.")
@click.option("--country", default=None, help="Country (defaults to Vietnam).")
@click.option(
    "--payment",
    required=True,
    type=click.Choice(["CreditCard", "CashOnDelivery", "BankTransfer"]),
    help="Payment method.",
)
def order_place(
    customer: str,
    account: str,
    items: str,
    address: str,
    city: str,
    postal_code: str | None,
    country: str | None,
    payment: str,
) -> None:
    """Place an order, deducting stock."""
    specs = _parse_items(items)

    with storefront() as uow:
        try:
            dto = PlaceOrderHandler(uow).handle(
                identity=Identity(customer_id=customer, account_id=account),
                items=specs,
                shipping_address=ShippingAddressSpec(address, city, postal_code, country),
                payment_method=payment,
            )
        except DomainException as exc:
            raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    with storefront() as uow:
        try:
            dto = ShowOrderHandler(uow).handle(order_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--customer", required=True, help="Customer ID.")
def order_list(customer: str) -> None:
    """List a customer's orders, newest first."""
    with storefront() as uow:
        dtos = ListOrdersHandler(uow).handle(Identity(customer_id=customer, account_id=""))

    if not dtos:
        click.echo("No orders found.")
        return

    for dto in dtos:
        click.echo(f"{dto.order_id:<36} {dto.order_date:<34} {dto.status:<10} {dto.total_amount:>14,.2f}")
