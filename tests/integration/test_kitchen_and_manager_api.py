from __future__ import annotations

import csv
import io

from fastapi.testclient import TestClient

from fakes import FixedClock
from rpos.infrastructure.bootstrap import Container


def _place(client: TestClient, name: str = "Anna") -> str:
    client.post("/v1/cart/lines", json={"productId": "p1"})
    client.post("/v1/cart/lines", json={"productId": "p5", "modifierIds": ["sz_l"]})
    response = client.post("/v1/orders", json={"customerName": name})
    assert response.status_code == 201
    return response.json()["orderId"]


def test_kitchen_board_tracks_urgency_and_production(
    client: TestClient, fixed_clock: FixedClock
) -> None:
    first = _place(client, "Alex")
    fixed_clock.advance(minutes=5)
    _place(client, "Anna")
    fixed_clock.advance(minutes=10)

    board = client.get("/v1/kitchen/board").json()

    assert [ticket["order"]["orderId"] for ticket in board["tickets"]][0] == first
    assert [ticket["urgency"] for ticket in board["tickets"]] == ["CRITICAL", "WARNING"]
    assert [ticket["elapsedMinutes"] for ticket in board["tickets"]] == [15, 10]
    assert board["counters"] == {"pending": 2, "cooking": 0, "ready": 0}
    assert board["production"] == [
        {"name": 'Grand Beef "Maestro"', "count": 2, "station": "GRILL"},
        {"name": "French Fries", "count": 2, "station": "FRYER"},
    ]


def test_bump_and_recall_from_kitchen(client: TestClient) -> None:
    order_id = _place(client)

    assert client.post(f"/v1/kitchen/orders/{order_id}/bump").json()["status"] == "COOKING"
    assert client.post(f"/v1/kitchen/orders/{order_id}/bump").json()["status"] == "READY"

    board = client.get("/v1/kitchen/board").json()
    assert board["tickets"][0]["urgency"] == "DONE"
    assert board["production"] == []

    assert client.post(f"/v1/kitchen/orders/{order_id}/recall").json()["status"] == "COOKING"
    missing = client.post("/v1/kitchen/orders/ord_missing/bump")
    assert missing.status_code == 404


def test_manager_analytics_excludes_cancelled(client: TestClient) -> None:
    kept = _place(client, "Alex")
    dropped = _place(client, "Anna")
    client.post(f"/v1/orders/{dropped}/cancel")
    for _ in range(3):
        client.post(f"/v1/orders/{kept}/advance")

    response = client.get("/v1/manager/analytics", params={"range": "today"})

    assert response.status_code == 200
    body = response.json()
    assert body["revenue"] == 490 + 300
    assert body["orderCount"] == 1
    assert body["averageTicket"] == 790.0
    assert body["revenueProgress"] == 790 / 50_000 * 100
    assert body["averageCookMinutes"] == 0.0
    assert body["hourly"][0] == {"hour": 9, "label": "9:00", "revenue": 790, "orders": 1}
    assert body["topProducts"][0]["name"] == 'Grand Beef "Maestro"'


def test_invalid_range_is_rejected(client: TestClient) -> None:
    response = client.get("/v1/manager/analytics", params={"range": "decade"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TIME_RANGE"


def test_export_orders_as_csv(client: TestClient) -> None:
    order_id = _place(client, "Alex")

    response = client.get("/v1/manager/orders/export", params={"range": "all"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[1] == [
        order_id,
        "09:00:00",
        "Alex",
        '1x Grand Beef "Maestro"; 1x French Fries',
        "790",
        "PENDING",
    ]


def test_manager_insights_use_generator(client: TestClient, container: Container) -> None:
    _place(client)

    response = client.post("/v1/manager/insights", params={"range": "today"})

    assert response.status_code == 200
    assert response.json() == {"range": "today", "text": "Push the combo at lunch."}
    assert container.insights.prompts[0].startswith("Restaurant Report (today):")
