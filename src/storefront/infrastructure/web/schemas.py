"""Pydantic request schemas and response payload builders.

Field names on the wire are camelCase.  Request models are deliberately
permissive: anything they let through is validated by the application
handlers, which produce the error messages.  Unknown fields (such as a
client-side ``price``) are ignored.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from storefront.application.dto import (
    CartItemDTO,
    OrderDTO,
    OrderItemSpec,
    ProductDTO,
    ShippingAddressSpec,
)


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class OrderItemRequest(_Request):
    product_id: str | None = Field(default=None, alias="productId")
    quantity: Any = None

    def to_spec(self) -> OrderItemSpec:
        return OrderItemSpec(product_id=self.product_id or "", quantity=self.quantity)


class ShippingAddressRequest(_Request):
    address: str | None = None
    city: str | None = None
    postal_code: str | None = Field(default=None, alias="postalCode")
    country: str | None = None

    def to_spec(self) -> ShippingAddressSpec:
        return ShippingAddressSpec(
            address=self.address,
            city=self.city,
            postal_code=self.postal_code,
            country=self.country,
        )


class CreateOrderRequest(_Request):
    items: list[OrderItemRequest] | None = None
    shipping_address: ShippingAddressRequest | None = Field(default=None, alias="shippingAddress")
    payment_method: str | None = Field(default=None, alias="paymentMethod")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"productId": "P1", "quantity": 2}],
                    "shippingAddress": {"address": "12 Le Loi", "city": "Hanoi"},
                    "paymentMethod": "CashOnDelivery",
                }
            ]
        },
    }


class AddToCartRequest(_Request):
    product_id: str | None = Field(default=None, alias="productId")
    quantity: Any = 1


class AddToCompareRequest(_Request):
    product_id: str | None = Field(default=None, alias="productId")


class UpdateStockRequest(_Request):
    stock_quantity: Any = Field(default=None, alias="stockQuantity")


# ---------------------------------------------------------------------------
# Response payloads
# ---------------------------------------------------------------------------
def money(amount: Decimal) -> str:
    """Amounts go out as exact decimal strings, never as JSON floats."""
    return str(amount)


def order_payload(dto: OrderDTO) -> dict[str, Any]:
    items = []
    for item in dto.items:
        entry: dict[str, Any] = {
            "productId": item.product_id,
            "quantity": item.quantity,
            "price": money(item.unit_price),
            "lineTotal": money(item.line_total),
        }
        if item.product_name is not None:
            entry["productName"] = item.product_name
        items.append(entry)

    return {
        "OrderID": dto.order_id,
        "CustomerID": dto.customer_id,
        "OrderDate": dto.order_date,
        "ShippingAddress": dto.shipping_address,
        "PaymentMethod": dto.payment_method,
        "Status": dto.status,
        "TotalAmount": money(dto.total_amount),
        "items": items,
    }


def cart_payload(items: list[CartItemDTO]) -> list[dict[str, Any]]:
    return [{"productId": i.product_id, "quantity": i.quantity} for i in items]


def product_payload(dto: ProductDTO) -> dict[str, Any]:
    return {
        "ProductID": dto.product_id,
        "ProductName": dto.name,
        "ProductPrice": money(dto.price),
        "ProductBrand": dto.brand,
        "CategoryID": dto.category_id,
        "PromotionID": dto.promotion_id,
    }
