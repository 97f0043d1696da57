"""End-to-end HTTP tests through the FastAPI app."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

import app.api as api
from app.api import create_app
from app.data.database import get_db


def _register(client, email="shopper@example.com", password="s3cret"):
    resp = client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "firstName": "Ada", "lastName": "Lovelace"},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["user"]


def _product(client, **overrides):
    body = {"name": "Widget", "description": "A widget", "price": "12.50", "category": "tools", "stock": 5}
    body.update(overrides)
    resp = client.post("/api/products", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_health_reports_unreachable_database(tmp_path):
    app = create_app()
    broken = create_engine(f"sqlite:///{tmp_path / 'missing' / 'shop.db'}")

    def _get_db():
        session = Session(bind=broken)
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        resp = c.get("/api/health")

    assert resp.status_code == 503
    assert resp.json()["status"] == "unhealthy"
    assert resp.json()["error"]
    broken.dispose()


# =====================================================
# CORS
# =====================================================
def test_cors_preflight_allowed(client):
    resp = client.options(
        "/api/products",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "POST"},
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] in ("http://localhost:3000", "*")


def test_cors_simple_request_carries_origin_header(client):
    resp = client.get("/api/products", headers={"Origin": "http://localhost:3000"})
    assert resp.status_code == 200
    assert "access-control-allow-origin" in resp.headers


def test_cors_rejects_unlisted_origin(monkeypatch):
    monkeypatch.setattr(api, "CORS_ORIGINS", ["https://shop.example.com"])
    with TestClient(create_app()) as c:
        ok = c.options(
            "/api/products",
            headers={"Origin": "https://shop.example.com", "Access-Control-Request-Method": "GET"},
        )
        bad = c.options(
            "/api/products",
            headers={"Origin": "https://evil.example.com", "Access-Control-Request-Method": "GET"},
        )

    assert ok.status_code == 200
    assert ok.headers["access-control-allow-origin"] == "https://shop.example.com"
    assert bad.status_code == 400
    assert "access-control-allow-origin" not in bad.headers


# =====================================================
# AUTH
# =====================================================
def test_register_and_login(client):
    user = _register(client)
    assert user["email"] == "shopper@example.com"
    assert user["firstName"] == "Ada"
    assert "password" not in user and "passwordHash" not in user

    resp = client.post("/api/auth/login", json={"email": "shopper@example.com", "password": "s3cret"})
    assert resp.status_code == 200
    assert resp.json()["user"]["id"] == user["id"]


def test_register_duplicate_email(client):
    _register(client)
    resp = client.post("/api/auth/register", json={"email": "shopper@example.com", "password": "x"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "User already exists"


@pytest.mark.parametrize("email,password", [("shopper@example.com", "wrong"), ("nobody@example.com", "s3cret")])
def test_login_rejects_bad_credentials(client, email, password):
    _register(client)
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid credentials"


# =====================================================
# PRODUCTS
# =====================================================
def test_product_crud(client):
    created = _product(client)
    pid = created["id"]
    assert Decimal(created["price"]) == Decimal("12.50")

    resp = client.put(
        f"/api/products/{pid}",
        json={"name": "Widget Pro", "price": "15.00", "category": "tools", "stock": 7},
    )
    assert resp.status_code == 200
    assert resp.json()["name"] == "Widget Pro"
    assert resp.json()["stock"] == 7

    assert client.get(f"/api/products/{pid}").json()["name"] == "Widget Pro"

    resp = client.delete(f"/api/products/{pid}")
    assert resp.status_code == 200
    assert client.get(f"/api/products/{pid}").status_code == 404
    assert client.delete(f"/api/products/{pid}").status_code == 404
    assert client.put(
        f"/api/products/{pid}", json={"name": "x", "price": "1.00", "stock": 1}
    ).status_code == 404


def test_product_validation(client):
    assert client.post("/api/products", json={"name": "Bad", "price": "-1", "stock": 1}).status_code == 422
    assert client.post("/api/products", json={"name": "Bad", "price": "1", "stock": -1}).status_code == 422


def test_product_filters(client):
    _product(client, name="Red Hammer", category="tools")
    _product(client, name="Blue Shirt", category="clothing", description="soft cotton")
    _product(client, name="Green Shirt", category="clothing")

    names = lambda resp: sorted(p["name"] for p in resp.json())  # noqa: E731

    assert names(client.get("/api/products", params={"category": "clothing"})) == ["Blue Shirt", "Green Shirt"]
    assert names(client.get("/api/products", params={"search": "shirt"})) == ["Blue Shirt", "Green Shirt"]
    assert names(client.get("/api/products", params={"search": "COTTON"})) == ["Blue Shirt"]
    assert len(client.get("/api/products").json()) == 3


# =====================================================
# CART + ORDERS
# =====================================================
def test_cart_flow(client):
    uid = _register(client)["id"]
    pid = _product(client, stock=3)["id"]

    resp = client.post("/api/cart", json={"userId": uid, "productId": pid, "quantity": 1})
    assert resp.status_code == 201
    item_id = resp.json()["id"]

    resp = client.post("/api/cart", json={"userId": uid, "productId": pid, "quantity": 2})
    assert resp.status_code == 200
    assert resp.json()["quantity"] == 3

    resp = client.post("/api/cart", json={"userId": uid, "productId": pid, "quantity": 1})
    assert resp.status_code == 400

    assert client.post("/api/cart", json={"userId": uid, "productId": 999, "quantity": 1}).status_code == 404

    cart = client.get("/api/cart", params={"userId": uid}).json()
    assert cart == [
        {"id": item_id, "quantity": 3, "product_id": pid, "name": "Widget", "price": cart[0]["price"], "image_url": None}
    ]

    resp = client.put(f"/api/cart/{item_id}", json={"userId": uid, "quantity": 2})
    assert resp.json()["quantity"] == 2

    resp = client.put(f"/api/cart/{item_id}", json={"userId": uid, "quantity": 0})
    assert resp.json() == {"message": "Item removed from cart"}
    assert client.get("/api/cart", params={"userId": uid}).json() == []

    assert client.delete(f"/api/cart/{item_id}", params={"userId": uid}).status_code == 404


def test_cart_requires_user_id(client):
    resp = client.get("/api/cart")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "userId is required"


def test_checkout_flow(client):
    uid = _register(client)["id"]
    other = _register(client, email="other@example.com")["id"]
    a = _product(client, name="A", price="12.50", stock=5)["id"]
    b = _product(client, name="B", price="7.25", stock=1)["id"]

    client.post("/api/cart", json={"userId": uid, "productId": a, "quantity": 2})
    client.post("/api/cart", json={"userId": uid, "productId": b, "quantity": 1})

    resp = client.post(
        "/api/orders",
        json={"userId": uid, "shippingAddress": {"street": "1 Main St"}, "paymentMethod": "card"},
    )
    assert resp.status_code == 201, resp.text
    order = resp.json()
    assert order["status"] == "pending"
    assert Decimal(order["total_amount"]) == Decimal("32.25")

    assert client.get(f"/api/products/{a}").json()["stock"] == 3
    assert client.get(f"/api/products/{b}").json()["stock"] == 0
    assert client.get("/api/cart", params={"userId": uid}).json() == []

    orders = client.get("/api/orders", params={"userId": uid}).json()
    assert len(orders) == 1
    assert sorted(i["name"] for i in orders[0]["items"]) == ["A", "B"]

    detail = client.get(f"/api/orders/{order['id']}", params={"userId": uid})
    assert detail.status_code == 200
    assert detail.json()["shipping_address"] == {"street": "1 Main St"}
    assert client.get(f"/api/orders/{order['id']}", params={"userId": other}).status_code == 404

    # pusty koszyk
    resp = client.post("/api/orders", json={"userId": uid, "paymentMethod": "card"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Cart is empty"

    # produkt w zamowieniu nie moze zostac usuniety
    assert client.delete(f"/api/products/{a}").status_code == 400


def test_checkout_insufficient_stock(client):
    uid = _register(client)["id"]
    pid = _product(client, name="Rare", stock=2)["id"]
    client.post("/api/cart", json={"userId": uid, "productId": pid, "quantity": 2})
    client.put(f"/api/products/{pid}", json={"name": "Rare", "price": "12.50", "stock": 1})

    resp = client.post("/api/orders", json={"userId": uid, "paymentMethod": "card"})
    assert resp.status_code == 400
    assert "Rare" in resp.json()["detail"]
    assert client.get(f"/api/products/{pid}").json()["stock"] == 1
    assert len(client.get("/api/cart", params={"userId": uid}).json()) == 1
    assert client.get("/api/orders", params={"userId": uid}).json() == []


# =====================================================
# ADMIN
# =====================================================
def test_admin_orders_and_status(client):
    uid = _register(client)["id"]
    pid = _product(client)["id"]
    client.post("/api/cart", json={"userId": uid, "productId": pid, "quantity": 1})
    order_id = client.post("/api/orders", json={"userId": uid, "paymentMethod": "card"}).json()["id"]

    orders = client.get("/api/admin/orders").json()
    assert len(orders) == 1
    assert orders[0]["email"] == "shopper@example.com"
    assert orders[0]["first_name"] == "Ada"

    resp = client.put(f"/api/admin/orders/{order_id}/status", json={"status": "shipped"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "shipped"

    resp = client.put(f"/api/admin/orders/{order_id}/status", json={"status": "bogus"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid status"
    assert client.get("/api/admin/orders").json()[0]["status"] == "shipped"

    assert client.put("/api/admin/orders/9999/status", json={"status": "shipped"}).status_code == 404
