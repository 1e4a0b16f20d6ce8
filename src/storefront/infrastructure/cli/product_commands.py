"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from storefront.application.products import (
    AddProductHandler,
    ListProductsHandler,
    UpdateProductHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import storefront


@click.command("add")
@click.option("--id", "product_id", required=True, help="Product business key.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 350000).")
@click.option("--brand", default="", help="Brand.")
@click.option("--category", "category_id", default="", help="Category ID.")
@click.option("--promotion", "promotion_id", default=None, help="Promotion ID.")
def product_add(
    product_id: str,
    name: str,
    price: str,
    brand: str,
    category_id: str,
    promotion_id: str | None,
) -> None:
    """Add a new product to the catalog."""
    with storefront() as uow:
        try:
            product = AddProductHandler(uow).handle(
                product_id=product_id,
                name=name,
                price=price,
                brand=brand,
                category_id=category_id,
                promotion_id=promotion_id,
            )
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Product {product.product_id} '{product.name}' added at {product.price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    with storefront() as uow:
        products = ListProductsHandler(uow).handle()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<10} {'Name':<30} {'Price':>14}")
    click.echo("-" * 56)
    for p in products:
        click.echo(f"{p.product_id:<10} {p.name:<30} {p.price:>14,.2f}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price.")
def product_update(product_id: str, price: str) -> None:
    """Update a product's price."""
    with storefront() as uow:
        try:
            UpdateProductHandler(uow).handle(product_id=product_id, new_price=price)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} price updated to {price}")
