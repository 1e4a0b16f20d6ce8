"""Application service: order queries (one order, or a customer's history)."""

from __future__ import annotations

from typing import Callable

from storefront.application.dto import Identity, OrderDTO, order_to_dto
from storefront.domain.exceptions import AuthenticationError, EntityNotFoundError
from storefront.domain.model.order import Order
from storefront.domain.repository.unit_of_work import UnitOfWork


def _product_names(uow: UnitOfWork, orders: list[Order]) -> dict[str, str]:
    ids = list({item.product_id for order in orders for item in order.items})
    return {p.product_id: p.name for p in uow.products.get_many(ids)}


class ShowOrderHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, order_id: str) -> OrderDTO:
        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order {order_id} not found")
            return order_to_dto(order, _product_names(uow, [order]))


class ListOrdersHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, identity: Identity | None) -> list[OrderDTO]:
        """Return the caller's orders, newest first, with product names."""
        if identity is None or not identity.customer_id:
            raise AuthenticationError("Unauthorized: Missing account details")

        with self._uow_factory() as uow:
            orders = uow.orders.list_for_customer(identity.customer_id)
            names = _product_names(uow, orders)
        return [order_to_dto(order, names) for order in orders]
