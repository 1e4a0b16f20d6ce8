"""Unit tests for the Cart and CompareList models."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import Cart, CompareList


class TestCart:

    def test_add_new_product(self):
        cart = Cart()
        cart.add("P1", 2)
        assert [(i.product_id, i.quantity) for i in cart.items] == [("P1", 2)]

    def test_repeated_add_increments_quantity(self):
        cart = Cart()
        cart.add("P1", 2)
        cart.add("P2", 1)
        cart.add("P1", 3)
        assert [(i.product_id, i.quantity) for i in cart.items] == [("P1", 5), ("P2", 1)]

    def test_non_positive_quantity_rejected(self):
        cart = Cart()
        with pytest.raises(ValidationError, match="must be positive"):
            cart.add("P1", 0)
        assert cart.is_empty

    def test_remove_present_product(self):
        cart = Cart()
        cart.add("P1", 1)
        cart.add("P2", 1)
        cart.remove("P1")
        assert [i.product_id for i in cart.items] == ["P2"]

    def test_remove_absent_product_is_noop(self):
        cart = Cart()
        cart.add("P1", 1)
        cart.remove("P9")
        assert [(i.product_id, i.quantity) for i in cart.items] == [("P1", 1)]

    def test_session_round_trip_merges_duplicates(self):
        cart = Cart.from_session(
            [{"productId": "P1", "quantity": 1}, {"productId": "P1", "quantity": 2}]
        )
        assert cart.to_session() == [{"productId": "P1", "quantity": 3}]

    def test_from_empty_session(self):
        assert Cart.from_session(None).is_empty


class TestCompareList:

    def test_add_ignores_duplicates(self):
        compare = CompareList()
        compare.add("P1")
        compare.add("P2")
        compare.add("P1")
        assert compare.product_ids == ["P1", "P2"]

    def test_remove_is_idempotent(self):
        compare = CompareList(["P1"])
        compare.remove("P1")
        compare.remove("P1")
        assert compare.is_empty
