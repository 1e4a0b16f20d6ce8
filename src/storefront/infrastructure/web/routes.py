"""FastAPI routes: orders, cart, compare list and stock."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from storefront.application.cart import (
    AddCartItemHandler,
    GetCartHandler,
    RemoveCartItemHandler,
)
from storefront.application.compare import (
    AddCompareItemHandler,
    GetCompareListHandler,
    RemoveCompareItemHandler,
)
from storefront.application.dto import Identity
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_orders import ListOrdersHandler
from storefront.application.stock import SetStockHandler, ShowStockHandler
from storefront.domain.exceptions import AuthenticationError, EntityNotFoundError
from storefront.infrastructure.bootstrap import UnitOfWorkFactory
from storefront.infrastructure.web.identity import resolve_identity
from storefront.infrastructure.web.schemas import (
    AddToCartRequest,
    AddToCompareRequest,
    CreateOrderRequest,
    UpdateStockRequest,
    cart_payload,
    order_payload,
    product_payload,
)


def uow_factory(request: Request) -> UnitOfWorkFactory:
    return request.app.state.uow_factory


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


@order_router.post("", status_code=201)
def create_order(
    body: CreateOrderRequest,
    request: Request,
    identity: Identity | None = Depends(resolve_identity),
    uow: UnitOfWorkFactory = Depends(uow_factory),
) -> Any:
    items = [item.to_spec() for item in body.items] if body.items is not None else None
    address = body.shipping_address.to_spec() if body.shipping_address else None
    try:
        dto = PlaceOrderHandler(uow).handle(
            identity=identity,
            items=items,
            shipping_address=address,
            payment_method=body.payment_method,
            session=request.session,
        )
    except EntityNotFoundError as exc:
        # An unknown product is a problem with the submitted cart.
        return JSONResponse(status_code=400, content={"message": str(exc)})
    return {"message": "Order created successfully", "order": order_payload(dto)}


@order_router.get("")
def list_orders(
    identity: Identity | None = Depends(resolve_identity),
    uow: UnitOfWorkFactory = Depends(uow_factory),
) -> Any:
    return [order_payload(dto) for dto in ListOrdersHandler(uow).handle(identity)]


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])


@cart_router.get("")
def get_cart(
    request: Request,
    identity: Identity | None = Depends(resolve_identity),
    uow: UnitOfWorkFactory = Depends(uow_factory),
) -> Any:
    return cart_payload(GetCartHandler(uow).handle(identity, request.session))


@cart_router.post("")
def add_to_cart(
    body: AddToCartRequest,
    request: Request,
    identity: Identity | None = Depends(resolve_identity),
    uow: UnitOfWorkFactory = Depends(uow_factory),
) -> Any:
    items = AddCartItemHandler(uow).handle(
        identity, request.session, body.product_id or "", body.quantity
    )
    return {"message": "Added to cart", "cart": cart_payload(items)}


@cart_router.delete("/{product_id}")
def remove_from_cart(
    product_id: str,
    request: Request,
    identity: Identity | None = Depends(resolve_identity),
    uow: UnitOfWorkFactory = Depends(uow_factory),
) -> Any:
    items = RemoveCartItemHandler(uow).handle(identity, request.session, product_id)
    return {"message": "Removed from cart", "cart": cart_payload(items)}


# ---------------------------------------------------------------------------
# Compare Router
# ---------------------------------------------------------------------------
compare_router = APIRouter(prefix="/api/compare", tags=["compare"])


@compare_router.get("")
def get_compare_list(
    request: Request,
    identity: Identity | None = Depends(resolve_identity),
    uow: UnitOfWorkFactory = Depends(uow_factory),
) -> Any:
    products = GetCompareListHandler(uow).handle(identity, request.session)
    return [product_payload(p) for p in products]


@compare_router.post("")
def add_to_compare(
    body: AddToCompareRequest,
    request: Request,
    identity: Identity | None = Depends(resolve_identity),
    uow: UnitOfWorkFactory = Depends(uow_factory),
) -> Any:
    ids = AddCompareItemHandler(uow).handle(identity, request.session, body.product_id or "")
    return {"message": "Added to compare list", "compareList": ids}


@compare_router.delete("/{product_id}")
def remove_from_compare(
    product_id: str,
    request: Request,
    identity: Identity | None = Depends(resolve_identity),
    uow: UnitOfWorkFactory = Depends(uow_factory),
) -> Any:
    ids = RemoveCompareItemHandler(uow).handle(identity, request.session, product_id)
    return {"message": "Removed from compare list", "compareList": ids}


# ---------------------------------------------------------------------------
# Stock Router
# ---------------------------------------------------------------------------
stock_router = APIRouter(prefix="/api/productstocks", tags=["stock"])


@stock_router.get("/{product_id}")
def get_stock(product_id: str, uow: UnitOfWorkFactory = Depends(uow_factory)) -> Any:
    dto = ShowStockHandler(uow).handle(product_id)
    return {"productId": dto.product_id, "stockQuantity": dto.stock_quantity}


@stock_router.put("/{product_id}")
def update_stock(
    product_id: str,
    body: UpdateStockRequest,
    identity: Identity | None = Depends(resolve_identity),
    uow: UnitOfWorkFactory = Depends(uow_factory),
) -> Any:
    if identity is None:
        raise AuthenticationError("Unauthorized")
    SetStockHandler(uow).handle(product_id, body.stock_quantity)
    return {"message": "Stock updated successfully"}
