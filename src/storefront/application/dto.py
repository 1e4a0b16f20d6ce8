"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI/web layers and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, MutableMapping

from storefront.domain.model.order import Order

# Request-scoped session state owned by the calling layer.
Session = MutableMapping[str, Any]


@dataclass(frozen=True)
class Identity:
    """Who is calling, as resolved by the authentication layer."""

    customer_id: str
    account_id: str


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for.

    ``quantity`` is left untyped on purpose; it is raw caller input and
    is validated by the handler.
    """

    product_id: str
    quantity: Any


@dataclass(frozen=True)
class ShippingAddressSpec:
    address: str | None
    city: str | None
    postal_code: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_id: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    product_name: str | None = None


@dataclass(frozen=True)
class OrderDTO:
    order_id: str
    customer_id: str
    order_date: str
    shipping_address: dict[str, str]
    payment_method: str
    status: str
    total_amount: Decimal
    items: list[OrderLineItemDTO] = field(default_factory=list)


@dataclass(frozen=True)
class CartItemDTO:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class ProductDTO:
    product_id: str
    name: str
    price: Decimal
    brand: str
    category_id: str
    promotion_id: str | None


@dataclass(frozen=True)
class StockDTO:
    product_id: str
    stock_quantity: int


def order_to_dto(order: Order, product_names: dict[str, str] | None = None) -> OrderDTO:
    """Map an Order aggregate to its DTO.

    When *product_names* is given, each line item is labelled with the
    product's name, or ``"Unknown"`` for products no longer in the catalog.
    """
    address = order.shipping_address
    return OrderDTO(
        order_id=order.order_id,
        customer_id=order.customer_id,
        order_date=order.order_date.isoformat(),
        shipping_address={
            "address": address.address,
            "city": address.city,
            "postalCode": address.postal_code,
            "country": address.country,
        },
        payment_method=order.payment_method.value,
        status=order.status.value,
        total_amount=order.total.amount,
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                quantity=item.quantity.value,
                unit_price=item.unit_price.amount,
                line_total=item.line_total.amount,
                product_name=(
                    product_names.get(item.product_id, "Unknown")
                    if product_names is not None
                    else None
                ),
            )
            for item in order.items
        ],
    )
