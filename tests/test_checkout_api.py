from __future__ import annotations

import copy
import uuid

from sqlmodel import select

from app.models.order import Order
from app.models.product import Product

ADDRESS = {"name": "Asha Rao", "line1": "12 Main St", "city": "Pune", "zip": "411001"}


def _checkout(client, auth_headers, cart, address=ADDRESS):
    return client.post("/api/checkout", json={"cart": cart, "address": address}, headers=auth_headers)


def test_checkout_prices_from_catalog(client, auth_headers, catalog):
    resp = _checkout(client, auth_headers, [{"productCode": "A1", "size": "M", "price": 5}])

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert len(body["orderHash"]) == 64

    order = body["order"]
    assert order["pricing"] == {"subtotal": 800, "discount": 80, "delivery": 0, "total": 720}
    assert order["status"] == "pending"
    assert order["orderDate"]
    line = order["cart"][0]
    assert line["productCode"] == "A1"
    assert line["productName"] == "Linen Shirt"
    assert line["price"] == 800
    assert line["imageUrl"] == "https://cdn.test/a1.jpg"
    assert line["size"] == "M"


def test_checkout_below_free_delivery(client, auth_headers, catalog):
    resp = _checkout(client, auth_headers, [{"productCode": "B2", "size": "S"}])

    assert resp.status_code == 200
    assert resp.json()["order"]["pricing"] == {"subtotal": 500, "discount": 50, "delivery": 150, "total": 600}


def test_checkout_drops_unknown_lines(client, auth_headers, catalog):
    resp = _checkout(
        client,
        auth_headers,
        [{"productCode": "A1", "size": "M"}, {"productCode": "GHOST", "size": "M"}],
    )

    assert resp.status_code == 200
    assert [line["productCode"] for line in resp.json()["order"]["cart"]] == ["A1"]


def test_checkout_unknown_codes_only_is_404(client, auth_headers, catalog):
    resp = _checkout(client, auth_headers, [{"productCode": "GHOST", "size": "M"}])
    assert resp.status_code == 404


def test_checkout_rejects_empty_cart_and_bad_address(client, auth_headers, catalog):
    assert _checkout(client, auth_headers, []).status_code == 400
    assert _checkout(client, auth_headers, [{"productCode": "A1", "size": "M"}], address="Pune").status_code == 400
    assert _checkout(client, auth_headers, [{"productCode": "A1"}]).status_code == 400


def test_checkout_sanitizes_address(client, auth_headers, catalog):
    address = {"name": "<script>alert(1)</script>Asha", "line1": '<img src=x onerror="steal()">12 Main St'}

    resp = _checkout(client, auth_headers, [{"productCode": "A1", "size": "<b>M</b>"}], address=address)

    assert resp.status_code == 200
    order = resp.json()["order"]
    assert order["address"] == {"name": "Asha", "line1": "12 Main St"}
    assert order["cart"][0]["size"] == "M"


def test_checkout_rejects_non_object_body(client, auth_headers):
    resp = client.post(
        "/api/checkout",
        content=b"[1, 2, 3]",
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert resp.status_code == 400


def test_checkout_rejects_oversized_body(client, auth_headers):
    resp = client.post(
        "/api/checkout",
        content=b'{"pad": "' + b"x" * (101 * 1024) + b'"}',
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert resp.status_code == 413


def test_save_order_round_trip(client, auth_headers, catalog, session):
    quote = _checkout(client, auth_headers, [{"productCode": "A1", "size": "M"}]).json()

    resp = client.post(
        "/api/save-order",
        json={"order": quote["order"], "orderHash": quote["orderHash"]},
        headers=auth_headers,
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "Order saved successfully"

    stored = session.get(Order, uuid.UUID(body["orderId"]))
    assert stored is not None
    assert stored.address == ADDRESS
    assert stored.pricing == {"subtotal": 800, "discount": 80, "delivery": 0, "total": 720}
    assert stored.cart[0]["productCode"] == "A1"
    assert stored.cart[0]["price"] == 800
    assert stored.status == "pending"


def test_save_order_rejects_edited_address(client, auth_headers, catalog, session):
    quote = _checkout(client, auth_headers, [{"productCode": "A1", "size": "M"}]).json()
    order = copy.deepcopy(quote["order"])
    order["address"]["line1"] = "1 Attacker Ave"

    resp = client.post("/api/save-order", json={"order": order, "orderHash": quote["orderHash"]}, headers=auth_headers)

    assert resp.status_code == 400
    assert "verification failed" in resp.json()["detail"]
    assert session.exec(select(Order)).all() == []


def test_save_order_rejects_edited_price(client, auth_headers, catalog, session):
    quote = _checkout(client, auth_headers, [{"productCode": "A1", "size": "M"}]).json()
    order = copy.deepcopy(quote["order"])
    order["cart"][0]["price"] = 1
    order["pricing"] = {"subtotal": 1, "discount": 0.1, "delivery": 150, "total": 150.9}

    resp = client.post("/api/save-order", json={"order": order, "orderHash": quote["orderHash"]}, headers=auth_headers)

    assert resp.status_code == 400
    assert session.exec(select(Order)).all() == []


def test_save_order_keeps_client_status_and_date(client, auth_headers, catalog, session):
    quote = _checkout(client, auth_headers, [{"productCode": "A1", "size": "M"}]).json()
    order = copy.deepcopy(quote["order"])
    order["status"] = "confirmed"
    order["orderDate"] = "2026-01-01T00:00:00Z"

    resp = client.post("/api/save-order", json={"order": order, "orderHash": quote["orderHash"]}, headers=auth_headers)

    assert resp.status_code == 200
    stored = session.get(Order, uuid.UUID(resp.json()["orderId"]))
    assert stored.status == "confirmed"
    assert stored.order_date.year == 2026 and stored.order_date.month == 1


def test_save_order_with_other_token_still_verifies(client, catalog):
    first = {"Authorization": f"Bearer {client.post('/api/get-token').json()['token']}"}
    second = {"Authorization": f"Bearer {client.post('/api/get-token').json()['token']}"}
    quote = _checkout(client, first, [{"productCode": "B2", "size": "L"}]).json()

    resp = client.post("/api/save-order", json=quote, headers=second)

    assert resp.status_code == 200


def test_save_order_envelope_validation(client, auth_headers, catalog):
    quote = _checkout(client, auth_headers, [{"productCode": "A1", "size": "M"}]).json()

    missing_hash = client.post("/api/save-order", json={"order": quote["order"]}, headers=auth_headers)
    assert missing_hash.status_code == 400
    assert missing_hash.json()["detail"] == "Invalid order data or missing hash"

    numeric_hash = client.post("/api/save-order", json={"order": quote["order"], "orderHash": 12}, headers=auth_headers)
    assert numeric_hash.status_code == 400

    no_pricing = {k: v for k, v in quote["order"].items() if k != "pricing"}
    resp = client.post("/api/save-order", json={"order": no_pricing, "orderHash": quote["orderHash"]}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Order is missing required fields"

    bad_line = copy.deepcopy(quote["order"])
    bad_line["cart"][0]["price"] = "free"
    resp = client.post("/api/save-order", json={"order": bad_line, "orderHash": quote["orderHash"]}, headers=auth_headers)
    assert resp.status_code == 400


def test_save_order_requires_token(client):
    resp = client.post("/api/save-order", json={})
    assert resp.status_code == 401


def test_security_headers_present(client):
    resp = client.get("/api/health")

    assert resp.headers["x-frame-options"] == "DENY"
    assert resp.headers["x-content-type-options"] == "nosniff"
    assert "max-age" in resp.headers["strict-transport-security"]


def test_save_order_accepts_empty_address(client, auth_headers, catalog, session):
    quote = _checkout(client, auth_headers, [{"productCode": "B2", "size": "S"}], address={}).json()
    assert quote["order"]["address"] == {}

    resp = client.post("/api/save-order", json=quote, headers=auth_headers)

    assert resp.status_code == 200
    stored = session.get(Order, uuid.UUID(resp.json()["orderId"]))
    assert stored.address == {}


def test_save_order_with_markup_in_catalog_name(client, auth_headers, session):
    session.add(Product(product_code="T1", product_name="Tee <3", product_price=300))
    session.commit()

    quote = _checkout(client, auth_headers, [{"productCode": "T1", "size": "M"}]).json()
    line = quote["order"]["cart"][0]
    assert line["productName"] == "Tee &lt;3"

    resp = client.post("/api/save-order", json=quote, headers=auth_headers)

    assert resp.status_code == 200
    stored = session.get(Order, uuid.UUID(resp.json()["orderId"]))
    assert stored.cart[0]["productName"] == "Tee &lt;3"


def test_save_order_rejects_overlong_status(client, auth_headers, catalog, session):
    quote = _checkout(client, auth_headers, [{"productCode": "A1", "size": "M"}]).json()
    order = copy.deepcopy(quote["order"])
    order["status"] = "x" * 40

    resp = client.post("/api/save-order", json={"order": order, "orderHash": quote["orderHash"]}, headers=auth_headers)

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Order is malformed"
    assert session.exec(select(Order)).all() == []
