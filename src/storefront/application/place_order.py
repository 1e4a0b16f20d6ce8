"""Application service: Place Order use case.

Validates a cart against the catalog and current stock, then writes the
order header, its line items and the stock decrements in one unit of
work.  Either all of it becomes visible or none of it does.

Steps:
  1. Reject malformed input (identity, items, address, payment method)
     before touching storage.
  2. In one read-only unit, batch-load the referenced products and
     their stock so both come from the same snapshot.
  3. Validate item by item, stopping at the first failure.
  4. Price every line from the catalog; client prices are never read.
  5. In a second unit, insert the order and conditionally decrement
     stock for each line; commit only if every decrement applied.
  6. Clear the caller's cart.  The order stands even if this fails.
"""

from __future__ import annotations

from typing import Any, Callable

import structlog

from storefront.application.cart import SESSION_CART_KEY
from storefront.application.dto import (
    Identity,
    OrderDTO,
    OrderItemSpec,
    Session,
    ShippingAddressSpec,
    order_to_dto,
)
from storefront.domain.exceptions import (
    AuthenticationError,
    CommitFailedError,
    EntityNotFoundError,
    ValidationError,
)
from storefront.domain.model.order import Order, OrderLineItem, PaymentMethod
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Quantity, ShippingAddress
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        identity: Identity | None,
        items: Any,
        shipping_address: ShippingAddressSpec | None,
        payment_method: Any,
        session: Session | None = None,
    ) -> OrderDTO:
        if identity is None or not identity.customer_id or not identity.account_id:
            raise AuthenticationError("Unauthorized: Missing account details")

        specs = self._check_items(items)
        address = self._check_address(shipping_address)
        method = PaymentMethod.parse(payment_method)

        product_ids = [spec.product_id for spec in specs]
        with self._uow_factory() as uow:
            catalog = {p.product_id: p for p in uow.products.get_many(product_ids)}
            stock = InventoryReservationService(uow.stock).snapshot(product_ids)

        line_items = [self._validate_item(spec, catalog, stock) for spec in specs]

        order = Order.place(
            customer_id=identity.customer_id,
            shipping_address=address,
            payment_method=method,
            items=line_items,
        )

        self._commit(order)
        logger.info(
            "order_placed",
            order_id=order.order_id,
            customer_id=order.customer_id,
            total=str(order.total.amount),
        )

        self._clear_cart(identity, session)
        return order_to_dto(order)

    # --- Input checks (no storage access) ------------------------------------

    @staticmethod
    def _check_items(items: Any) -> list[OrderItemSpec]:
        if not isinstance(items, list) or not items:
            raise ValidationError("Items are required and must be a non-empty array")
        for spec in items:
            if not isinstance(spec, OrderItemSpec) or not spec.product_id:
                raise ValidationError(f"Invalid item: {spec!r}")
        return items

    @staticmethod
    def _check_address(spec: ShippingAddressSpec | None) -> ShippingAddress:
        if spec is None:
            raise ValidationError("Shipping address is required with address and city")
        return ShippingAddress.of(spec.address, spec.city, spec.postal_code, spec.country)

    # --- Per-item validation -------------------------------------------------

    @staticmethod
    def _validate_item(
        spec: OrderItemSpec,
        catalog: dict[str, Product],
        stock: dict[str, int],
    ) -> OrderLineItem:
        try:
            quantity = Quantity(spec.quantity)
        except ValidationError as exc:
            logger.warning("invalid_item", product_id=spec.product_id, quantity=spec.quantity)
            raise ValidationError(
                f"Invalid item: productId={spec.product_id!r}, quantity={spec.quantity!r}"
            ) from exc

        product = catalog.get(spec.product_id)
        if product is None:
            logger.warning("product_not_found", product_id=spec.product_id)
            raise EntityNotFoundError(f"Product {spec.product_id} does not exist")

        try:
            InventoryReservationService.check(spec.product_id, quantity.value, stock)
        except ValidationError:
            logger.warning(
                "insufficient_stock",
                product_id=spec.product_id,
                quantity=quantity.value,
                stock=stock.get(spec.product_id),
            )
            raise

        return OrderLineItem(
            product_id=product.product_id,
            quantity=quantity,
            unit_price=product.price,  # <-- price snapshot
        )

    # --- Commit --------------------------------------------------------------

    def _commit(self, order: Order) -> None:
        try:
            with self._uow_factory() as uow:
                uow.orders.add(order)
                InventoryReservationService(uow.stock).deduct_for_order(order)
                uow.commit()
        except CommitFailedError:
            logger.error("order_commit_aborted", order_id=order.order_id)
            raise
        except Exception as exc:
            logger.exception("order_commit_failed", order_id=order.order_id)
            raise CommitFailedError("Order could not be committed") from exc

    def _clear_cart(self, identity: Identity, session: Session | None) -> None:
        if session is not None:
            session[SESSION_CART_KEY] = []
        try:
            with self._uow_factory() as uow:
                uow.carts.delete(identity.account_id)
                uow.commit()
        except Exception:
            logger.exception("cart_clear_failed", account_id=identity.account_id)
