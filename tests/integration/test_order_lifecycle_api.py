from __future__ import annotations

from fastapi.testclient import TestClient


def _place(client: TestClient, **overrides) -> dict:
    payload = {"customerName": "Anna", "tableNumber": "7", "paymentMethod": "CASH"}
    payload.update(overrides)
    response = client.post("/v1/orders", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_place_order_snapshots_and_clears_cart(client: TestClient, filled_cart: int) -> None:
    order = _place(client, priority=True, allergies=["peanuts"])

    assert order["status"] == "PENDING"
    assert order["totalAmount"] == filled_cart
    assert order["displayCode"] == "0001"
    assert order["orderId"].startswith("ord_000001_")
    assert order["priority"] is True
    assert order["allergies"] == ["peanuts"]
    assert order["paymentMethod"] == "CASH"
    assert order["completedAt"] is None
    assert client.get("/v1/cart").json()["lines"] == []

    fetched = client.get(f"/v1/orders/{order['orderId']}")
    assert fetched.json() == order
    assert [item["orderId"] for item in client.get("/v1/orders").json()["orders"]] == [
        order["orderId"]
    ]


def test_empty_cart_checkout_is_rejected(client: TestClient) -> None:
    response = client.post("/v1/orders", json={"customerName": "Anna"})

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "EMPTY_CART"
    assert client.get("/v1/orders").json()["orders"] == []


def test_blank_customer_name_is_invalid(client: TestClient, filled_cart: int) -> None:
    response = client.post("/v1/orders", json={"customerName": ""})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REQUEST"


def test_advance_to_completion_then_reject(client: TestClient, filled_cart: int) -> None:
    order_id = _place(client)["orderId"]

    statuses = []
    for _ in range(3):
        response = client.post(f"/v1/orders/{order_id}/advance")
        assert response.status_code == 200
        statuses.append(response.json()["status"])

    assert statuses == ["COOKING", "READY", "COMPLETED"]
    completed = client.get(f"/v1/orders/{order_id}").json()
    assert completed["completedAt"] is not None

    rejected = client.post(f"/v1/orders/{order_id}/advance")
    assert rejected.status_code == 409
    assert rejected.json()["error"]["code"] == "INVALID_ORDER_TRANSITION"
    assert client.get(f"/v1/orders/{order_id}").json() == completed


def test_recall_and_cancel(client: TestClient, filled_cart: int) -> None:
    order_id = _place(client)["orderId"]
    client.post(f"/v1/orders/{order_id}/advance")

    recalled = client.post(f"/v1/orders/{order_id}/recall")
    assert recalled.json()["status"] == "PENDING"

    cancelled = client.post(f"/v1/orders/{order_id}/cancel")
    assert cancelled.json()["status"] == "CANCELLED"
    assert cancelled.json()["completedAt"] is not None

    again = client.post(f"/v1/orders/{order_id}/cancel")
    assert again.status_code == 409


def test_unknown_order_returns_404(client: TestClient) -> None:
    response = client.post("/v1/orders/ord_missing/advance")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ORDER_NOT_FOUND"
    assert client.get("/v1/orders/ord_missing").status_code == 404
