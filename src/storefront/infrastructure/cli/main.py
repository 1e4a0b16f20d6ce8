import click

from storefront.infrastructure.cli.order_commands import (
    order_list,
    order_place,
    order_show,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_update,
)
from storefront.infrastructure.cli.stock_commands import stock_set, stock_show
from storefront.infrastructure.logging import configure_logging
from storefront.infrastructure.settings import Settings


@click.group()
def cli() -> None:
    """Storefront: catalog, stock and order administration"""
    configure_logging(Settings.from_env())


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def stock() -> None:
    """Manage stock levels."""


@cli.command("serve")
@click.option("--host", default="127.0.0.1", help="Bind address.")
@click.option("--port", default=4000, type=int, help="Port.")
def serve(host: str, port: int) -> None:
    """Run the HTTP API."""
    import uvicorn

    from storefront.infrastructure.web.app import create_app

    uvicorn.run(create_app(Settings.from_env()), host=host, port=port)


# Register subcommands
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
stock.add_command(stock_set)
stock.add_command(stock_show)
