"""Application services: cart use cases.

Anonymous callers work on the cart kept in their session.  Authenticated
callers work on the persistent cart of their account; the first time an
authenticated caller reads a cart that does not exist yet, any items in
the session cart are moved into a new persistent cart and the session
cart is emptied.  Once the persistent cart exists the session is never
consulted again, so the move happens at most once.
"""

from __future__ import annotations

from typing import Any, Callable

import structlog

from storefront.application.dto import CartItemDTO, Identity, Session
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import Cart
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)

SESSION_CART_KEY = "cart"


def _to_dtos(cart: Cart | None) -> list[CartItemDTO]:
    if cart is None:
        return []
    return [CartItemDTO(product_id=i.product_id, quantity=i.quantity) for i in cart.items]


class GetCartHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, identity: Identity | None, session: Session) -> list[CartItemDTO]:
        if identity is None:
            return _to_dtos(Cart.from_session(session.get(SESSION_CART_KEY)))

        with self._uow_factory() as uow:
            cart = uow.carts.get(identity.account_id)
            guest_cart = Cart.from_session(session.get(SESSION_CART_KEY))
            if cart is None and not guest_cart.is_empty:
                uow.carts.save(identity.account_id, guest_cart)
                uow.commit()
                session[SESSION_CART_KEY] = []
                cart = guest_cart
                logger.info(
                    "cart_migrated_from_session",
                    account_id=identity.account_id,
                    items=len(cart.items),
                )
        return _to_dtos(cart)


class AddCartItemHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        identity: Identity | None,
        session: Session,
        product_id: str,
        quantity: Any,
    ) -> list[CartItemDTO]:
        """Add *quantity* units of a product, merging with an existing entry."""
        if not product_id:
            raise ValidationError("Invalid input: productId is required")

        if identity is None:
            cart = Cart.from_session(session.get(SESSION_CART_KEY))
            cart.add(product_id, quantity)
            session[SESSION_CART_KEY] = cart.to_session()
            return _to_dtos(cart)

        with self._uow_factory() as uow:
            cart = uow.carts.get(identity.account_id) or Cart()
            cart.add(product_id, quantity)
            uow.carts.save(identity.account_id, cart)
            uow.commit()
        logger.debug("cart_item_added", account_id=identity.account_id, product_id=product_id)
        return _to_dtos(cart)


class RemoveCartItemHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self, identity: Identity | None, session: Session, product_id: str
    ) -> list[CartItemDTO]:
        """Remove a product from the cart.  Removing an absent product is a no-op."""
        if identity is None:
            cart = Cart.from_session(session.get(SESSION_CART_KEY))
            cart.remove(product_id)
            session[SESSION_CART_KEY] = cart.to_session()
            return _to_dtos(cart)

        with self._uow_factory() as uow:
            cart = uow.carts.get(identity.account_id)
            if cart is not None:
                cart.remove(product_id)
                uow.carts.save(identity.account_id, cart)
                uow.commit()
        return _to_dtos(cart)
