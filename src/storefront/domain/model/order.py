"""Order aggregate.

The Order is an aggregate root that owns its line items.  It is created
once, together with its line items and the matching stock decrements,
and is not modified afterwards by this service.
"""

from __future__ import annotations

import random
import string
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity, ShippingAddress


class OrderStatus(Enum):
    PENDING = "Pending"


class PaymentMethod(Enum):
    CREDIT_CARD = "CreditCard"
    CASH_ON_DELIVERY = "CashOnDelivery"
    BANK_TRANSFER = "BankTransfer"

    @classmethod
    def parse(cls, raw: object) -> PaymentMethod:
        for method in cls:
            if method.value == raw:
                return method
        allowed = ", ".join(m.value for m in cls)
        raise ValidationError(
            f"Payment method is required and must be one of {allowed}"
        )


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the price of a product at order-placement time."""

    product_id: str
    quantity: Quantity
    unit_price: Money  # locked at placement time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


_ID_ALPHABET = string.digits + string.ascii_lowercase
_rng = random.SystemRandom()


def new_order_id() -> str:
    """Time-based id with a random suffix, e.g. ``order_1718000000000_k3j9x0a2b``."""
    suffix = "".join(_rng.choice(_ID_ALPHABET) for _ in range(9))
    return f"order_{int(time.time() * 1000)}_{suffix}"


@dataclass
class Order:
    """Aggregate root for purchase orders.

    Use ``Order.place()`` for new orders.  The ``__init__`` stays simple
    so the repository can reconstitute persisted orders without
    re-validating.
    """

    order_id: str
    customer_id: str
    shipping_address: ShippingAddress
    payment_method: PaymentMethod
    items: list[OrderLineItem]
    status: OrderStatus = OrderStatus.PENDING
    order_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def place(
        customer_id: str,
        shipping_address: ShippingAddress,
        payment_method: PaymentMethod,
        items: list[OrderLineItem],
    ) -> Order:
        """Build a new Pending order with a fresh identifier."""
        if not customer_id:
            raise ValidationError("Customer is required")
        if not items:
            raise ValidationError("Items are required and must be a non-empty array")

        return Order(
            order_id=new_order_id(),
            customer_id=customer_id,
            shipping_address=shipping_address,
            payment_method=payment_method,
            items=list(items),
        )

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result
