"""Unit tests for the Order aggregate."""

import re

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentMethod,
    new_order_id,
)
from storefront.domain.model.value_objects import Money, Quantity, ShippingAddress


def _line(product_id: str, qty: int, price: str) -> OrderLineItem:
    return OrderLineItem(product_id=product_id, quantity=Quantity(qty), unit_price=Money.of(price))


def _place(items: list[OrderLineItem]) -> Order:
    return Order.place(
        customer_id="C1",
        shipping_address=ShippingAddress.of("12 Le Loi", "Hanoi"),
        payment_method=PaymentMethod.CASH_ON_DELIVERY,
        items=items,
    )


class TestOrderPlace:

    def test_new_order_is_pending(self):
        order = _place([_line("P1", 1, "100")])
        assert order.status == OrderStatus.PENDING
        assert order.status.value == "Pending"

    def test_total_sums_line_totals(self):
        order = _place([_line("P1", 2, "100"), _line("P2", 3, "15.50")])
        assert order.total == Money.of("246.50")

    def test_each_order_gets_a_fresh_id(self):
        first = _place([_line("P1", 1, "100")])
        second = _place([_line("P1", 1, "100")])
        assert first.order_id != second.order_id

    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError, match="non-empty"):
            _place([])

    def test_missing_customer_rejected(self):
        with pytest.raises(ValidationError, match="Customer is required"):
            Order.place(
                customer_id="",
                shipping_address=ShippingAddress.of("a", "b"),
                payment_method=PaymentMethod.CREDIT_CARD,
                items=[_line("P1", 1, "1")],
            )


class TestOrderId:

    def test_format(self):
        assert re.fullmatch(r"order_\d{13}_[0-9a-z]{9}", new_order_id())

    def test_unique_over_many_calls(self):
        assert len({new_order_id() for _ in range(1000)}) == 1000


class TestPaymentMethod:

    @pytest.mark.parametrize("raw", ["CreditCard", "CashOnDelivery", "BankTransfer"])
    def test_accepts_known_methods(self, raw):
        assert PaymentMethod.parse(raw).value == raw

    @pytest.mark.parametrize("raw", ["Bitcoin", "", None, "creditcard"])
    def test_rejects_anything_else(self, raw):
        with pytest.raises(ValidationError, match="Payment method"):
            PaymentMethod.parse(raw)
