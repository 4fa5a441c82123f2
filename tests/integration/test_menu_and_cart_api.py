from __future__ import annotations

from fastapi.testclient import TestClient


def test_menu_lists_catalog_with_etag(client: TestClient) -> None:
    response = client.get("/v1/menu")

    assert response.status_code == 200
    body = response.json()
    assert body["menuVersion"] == 1
    assert body["categories"][0] == "Burgers"
    assert {product["productId"] for product in body["products"]} >= {"p1", "p11"}
    size_group = next(group for group in body["modifierGroups"] if group["groupId"] == "g_size")
    assert size_group["selection"] == "SINGLE"
    assert response.headers["ETag"] == '"menu-v1"'

    cached = client.get("/v1/menu", headers={"If-None-Match": '"menu-v1"'})
    assert cached.status_code == 304


def test_cart_lines_merge_by_configuration(client: TestClient) -> None:
    payload = {"productId": "p1", "modifierIds": ["ext_bacon", "sz_l"]}
    client.post("/v1/cart/lines", json=payload)
    response = client.post(
        "/v1/cart/lines",
        json={"productId": "p1", "modifierIds": ["sz_l", "ext_bacon"]},
    )

    assert response.status_code == 201
    body = response.json()
    assert len(body["lines"]) == 1
    assert body["lines"][0]["quantity"] == 2
    assert [modifier["modifierId"] for modifier in body["lines"][0]["modifiers"]] == [
        "ext_bacon",
        "sz_l",
    ]
    assert body["total"] == 2 * (490 + 150 + 69)


def test_remove_line_and_clear_cart(client: TestClient, filled_cart: int) -> None:
    cart = client.get("/v1/cart").json()
    assert cart["total"] == filled_cart == 880

    removed = client.delete(f"/v1/cart/lines/{cart['lines'][0]['lineId']}")
    assert removed.status_code == 200
    assert removed.json()["total"] == 240

    cleared = client.delete("/v1/cart")
    assert cleared.json()["lines"] == []
    assert cleared.json()["itemCount"] == 0


def test_unknown_product_and_modifier_errors(client: TestClient) -> None:
    unknown_product = client.post("/v1/cart/lines", json={"productId": "p404"})
    assert unknown_product.status_code == 404
    assert unknown_product.json()["error"]["code"] == "UNKNOWN_PRODUCT"

    unknown_modifier = client.post(
        "/v1/cart/lines",
        json={"productId": "p8", "modifierIds": ["ext_bacon"]},
    )
    assert unknown_modifier.status_code == 400
    assert unknown_modifier.json()["error"]["code"] == "UNKNOWN_MODIFIER"

    two_sizes = client.post(
        "/v1/cart/lines",
        json={"productId": "p5", "modifierIds": ["sz_s", "sz_l"]},
    )
    assert two_sizes.status_code == 400
    assert two_sizes.json()["error"]["code"] == "INVALID_MODIFIER_SELECTION"

    assert client.get("/v1/cart").json()["lines"] == []


def test_validation_errors_use_error_envelope(client: TestClient) -> None:
    response = client.post(
        "/v1/cart/lines",
        json={"quantity": 1},
        headers={"X-Request-Id": "req-validation"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"]["code"] == "INVALID_REQUEST"
    assert body["requestId"] == "req-validation"
    assert response.headers["X-Request-Id"] == "req-validation"
