"""HTTP API tests through FastAPI's TestClient against a temporary database."""

import time

import jwt
import pytest
from fastapi.testclient import TestClient

from storefront.application.products import AddProductHandler
from storefront.application.stock import SetStockHandler, ShowStockHandler
from storefront.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from storefront.infrastructure.settings import Settings
from storefront.infrastructure.web.app import create_app
from storefront.infrastructure.web.identity import create_token

SECRET = "test-secret"

ORDER_BODY = {
    "items": [{"productId": "P1", "quantity": 2}],
    "shippingAddress": {"address": "12 Le Loi", "city": "Hanoi"},
    "paymentMethod": "CashOnDelivery",
}


@pytest.fixture()
def client(tmp_path):
    settings = Settings(
        database_path=tmp_path / "api.db",
        secret_key=SECRET,
        session_secret="session-secret",
        environment="test",
    )
    app = create_app(settings)
    with TestClient(app) as c:
        factory = app.state.uow_factory
        AddProductHandler(factory).handle("P1", "Chateau Margaux", "100")
        AddProductHandler(factory).handle("P2", "Moet Brut", "250.50", brand="Moet")
        SetStockHandler(factory).handle("P1", 5)
        SetStockHandler(factory).handle("P2", 1)
        yield c


def _auth(customer_id="C1", account_id="A1", secret=SECRET):
    return {"Authorization": f"Bearer {create_token(customer_id, account_id, secret)}"}


def _stock(client, product_id):
    return client.get(f"/api/productstocks/{product_id}").json()["stockQuantity"]


class TestCreateOrder:

    def test_created(self, client):
        resp = client.post("/api/orders", json=ORDER_BODY, headers=_auth())

        assert resp.status_code == 201
        body = resp.json()
        assert body["message"] == "Order created successfully"
        order = body["order"]
        assert order["OrderID"].startswith("order_")
        assert order["CustomerID"] == "C1"
        assert order["Status"] == "Pending"
        assert order["PaymentMethod"] == "CashOnDelivery"
        assert order["TotalAmount"] == "200"
        assert order["ShippingAddress"]["country"] == "Vietnam"
        assert order["items"] == [
            {"productId": "P1", "quantity": 2, "price": "100", "lineTotal": "200"}
        ]
        assert _stock(client, "P1") == 3

    def test_client_price_is_ignored(self, client):
        body = {**ORDER_BODY, "items": [{"productId": "P1", "quantity": 1, "price": 1}]}
        resp = client.post("/api/orders", json=body, headers=_auth())
        assert resp.json()["order"]["TotalAmount"] == "100"

    def test_missing_token_is_unauthorized(self, client):
        resp = client.post("/api/orders", json=ORDER_BODY)
        assert resp.status_code == 401
        assert resp.json() == {"message": "Unauthorized: Missing account details"}

    def test_bad_signature_is_forbidden(self, client):
        resp = client.post("/api/orders", json=ORDER_BODY, headers=_auth(secret="wrong"))
        assert resp.status_code == 403

    def test_insufficient_stock(self, client):
        body = {**ORDER_BODY, "items": [{"productId": "P1", "quantity": 10}]}
        resp = client.post("/api/orders", json=body, headers=_auth())

        assert resp.status_code == 400
        message = resp.json()["message"]
        assert "P1" in message and "10" in message and "5" in message
        assert _stock(client, "P1") == 5
        assert client.get("/api/orders", headers=_auth()).json() == []

    def test_unknown_product_is_bad_request(self, client):
        body = {**ORDER_BODY, "items": [{"productId": "P9", "quantity": 1}]}
        resp = client.post("/api/orders", json=body, headers=_auth())
        assert resp.status_code == 400
        assert resp.json() == {"message": "Product P9 does not exist"}

    def test_invalid_payment_method(self, client):
        body = {**ORDER_BODY, "paymentMethod": "Bitcoin"}
        resp = client.post("/api/orders", json=body, headers=_auth())
        assert resp.status_code == 400
        assert "Payment method" in resp.json()["message"]

    @pytest.mark.parametrize(
        "patch",
        [
            {"items": []},
            {"items": [{"productId": "P1", "quantity": "2"}]},
            {"items": [{"productId": "P1", "quantity": 0}]},
            {"shippingAddress": {"address": "12 Le Loi"}},
            {"shippingAddress": None},
        ],
    )
    def test_invalid_input(self, client, patch):
        resp = client.post("/api/orders", json={**ORDER_BODY, **patch}, headers=_auth())
        assert resp.status_code == 400
        assert _stock(client, "P1") == 5

    def test_malformed_body(self, client):
        resp = client.post("/api/orders", json={**ORDER_BODY, "items": "P1"}, headers=_auth())
        assert resp.status_code == 400
        assert resp.json()["message"].startswith("Invalid request")

    def test_commit_failure_is_server_error(self, client, monkeypatch):
        monkeypatch.setattr(
            InventoryReservationService, "snapshot", lambda self, ids: {"P1": 99}
        )
        body = {**ORDER_BODY, "items": [{"productId": "P1", "quantity": 6}]}

        resp = client.post("/api/orders", json=body, headers=_auth())

        assert resp.status_code == 500
        assert resp.json() == {"message": "Server error"}
        monkeypatch.undo()
        assert _stock(client, "P1") == 5

    def test_cart_cleared_after_order(self, client):
        client.post("/api/cart", json={"productId": "P1", "quantity": 2}, headers=_auth())
        client.post("/api/orders", json=ORDER_BODY, headers=_auth())
        assert client.get("/api/cart", headers=_auth()).json() == []

    def test_correlation_id_header(self, client):
        resp = client.get("/api/productstocks/P1")
        assert resp.headers["X-Correlation-ID"]

    def test_unexpected_error_keeps_correlation_id(self, client, monkeypatch):
        def broken(self, product_id):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(ShowStockHandler, "handle", broken)

        resp = client.get("/api/productstocks/P1")

        assert resp.status_code == 500
        assert resp.json() == {"message": "Server error"}
        assert resp.headers["X-Correlation-ID"]


class TestListOrders:

    def test_lists_own_orders_with_names(self, client):
        client.post("/api/orders", json=ORDER_BODY, headers=_auth())
        client.post("/api/orders", json=ORDER_BODY, headers=_auth("C2", "A2"))

        orders = client.get("/api/orders", headers=_auth()).json()

        assert len(orders) == 1
        assert orders[0]["items"][0]["productName"] == "Chateau Margaux"

    def test_requires_token(self, client):
        assert client.get("/api/orders").status_code == 401


class TestCart:

    def test_guest_cart_lives_in_session(self, client):
        resp = client.post("/api/cart", json={"productId": "P1", "quantity": 2})
        assert resp.json() == {
            "message": "Added to cart",
            "cart": [{"productId": "P1", "quantity": 2}],
        }
        assert client.get("/api/cart").json() == [{"productId": "P1", "quantity": 2}]

    def test_session_cart_migrates_on_login(self, client):
        client.post("/api/cart", json={"productId": "P1", "quantity": 2})
        client.post("/api/cart", json={"productId": "P2", "quantity": 1})

        assert len(client.get("/api/cart", headers=_auth()).json()) == 2
        assert len(client.get("/api/cart", headers=_auth()).json()) == 2
        assert client.get("/api/cart").json() == []

    def test_remove_item(self, client):
        client.post("/api/cart", json={"productId": "P1", "quantity": 2}, headers=_auth())
        resp = client.delete("/api/cart/P1", headers=_auth())
        assert resp.json()["cart"] == []

    def test_bad_quantity(self, client):
        resp = client.post("/api/cart", json={"productId": "P1", "quantity": -1}, headers=_auth())
        assert resp.status_code == 400


class TestCompare:

    def test_add_and_read(self, client):
        resp = client.post("/api/compare", json={"productId": "P2"}, headers=_auth())
        assert resp.json()["compareList"] == ["P2"]

        products = client.get("/api/compare", headers=_auth()).json()
        assert products[0]["ProductName"] == "Moet Brut"
        assert products[0]["ProductBrand"] == "Moet"
        assert products[0]["ProductPrice"] == "250.50"

    def test_unknown_product(self, client):
        resp = client.post("/api/compare", json={"productId": "P9"})
        assert resp.status_code == 404

    def test_remove(self, client):
        client.post("/api/compare", json={"productId": "P1"})
        assert client.delete("/api/compare/P1").json()["compareList"] == []


class TestStock:

    def test_get_unknown_product(self, client):
        resp = client.get("/api/productstocks/P9")
        assert resp.status_code == 404
        assert resp.json() == {"message": "Product not found"}

    def test_update_requires_token(self, client):
        resp = client.put("/api/productstocks/P1", json={"stockQuantity": 9})
        assert resp.status_code == 401

    def test_update(self, client):
        resp = client.put("/api/productstocks/P1", json={"stockQuantity": 9}, headers=_auth())
        assert resp.status_code == 200
        assert _stock(client, "P1") == 9

    def test_negative_rejected(self, client):
        resp = client.put("/api/productstocks/P1", json={"stockQuantity": -2}, headers=_auth())
        assert resp.status_code == 400


class TestIdentity:

    def _jwt(self, payload, secret=SECRET):
        return {"Authorization": f"Bearer {jwt.encode(payload, secret, algorithm='HS256')}"}

    def test_standard_hs256_token_accepted(self, client):
        headers = self._jwt({"CustomerID": "C1", "AccountID": "A1", "exp": int(time.time()) + 600})
        resp = client.get("/api/orders", headers=headers)
        assert resp.status_code == 200
        assert resp.json() == []

    def test_expired_token_rejected(self, client):
        headers = self._jwt({"CustomerID": "C1", "AccountID": "A1", "exp": int(time.time()) - 10})
        assert client.get("/api/orders", headers=headers).status_code == 403

    def test_token_without_expiry_rejected(self, client):
        headers = self._jwt({"CustomerID": "C1", "AccountID": "A1"})
        assert client.get("/api/orders", headers=headers).status_code == 403

    def test_token_without_account_rejected(self, client):
        headers = self._jwt({"CustomerID": "C1", "exp": int(time.time()) + 600})
        assert client.get("/api/orders", headers=headers).status_code == 403

    def test_garbage_token_rejected(self, client):
        resp = client.get("/api/orders", headers={"Authorization": "Bearer not-a-token"})
        assert resp.status_code == 403
