"""Order Item Routes — add/list line items, immutability.

Tests:
    - PUT and DELETE → 405 NOT_SUPPORTED whatever the body or query
    - POST with unknown order or product → 400 with the reference's code
    - GET without orderId → 400 MISSING_ORDER_ID; unknown order → 404
"""

from uuid import uuid4

import pytest


def _item(order_id, product_id, **overrides):
    return {
        "orderId": str(order_id), "productId": str(product_id),
        "quantity": 1, "price": 19.99, "size": "M", "color": "Black",
        **overrides,
    }


@pytest.mark.parametrize("method", ["PUT", "DELETE"])
@pytest.mark.parametrize("url, body", [
    ("/api/order-items", None),
    ("/api/order-items?id=123", {"quantity": 5}),
    (f"/api/order-items?id={uuid4()}", {}),
])
async def test_edit_verbs_not_supported(client, method, url, body):
    res = await client.request(method, url, json=body)
    assert res.status_code == 405
    assert res.json()["code"] == "NOT_SUPPORTED"


async def test_add_item_to_order(client, make_order, make_product):
    order = await make_order()
    product = await make_product()
    res = await client.post("/api/order-items", json=_item(order.id, product.id))
    assert res.status_code == 201
    assert res.json()["orderId"] == str(order.id)
    assert res.json()["productId"] == str(product.id)


async def test_add_item_unknown_order_is_400(client, make_product):
    product = await make_product()
    res = await client.post("/api/order-items", json=_item(uuid4(), product.id))
    assert res.status_code == 400
    assert res.json()["code"] == "ORDER_NOT_FOUND"


async def test_add_item_unknown_product_is_400(client, make_order):
    order = await make_order()
    res = await client.post("/api/order-items", json=_item(order.id, uuid4()))
    assert res.status_code == 400
    assert res.json()["code"] == "PRODUCT_NOT_FOUND"


@pytest.mark.parametrize("overrides, code", [
    ({"orderId": ""}, "MISSING_ORDER_ID"),
    ({"productId": None}, "MISSING_PRODUCT_ID"),
    ({"quantity": 0}, "INVALID_QUANTITY"),
    ({"price": -1}, "INVALID_PRICE"),
    ({"size": " "}, "MISSING_SIZE"),
    ({"color": ""}, "MISSING_COLOR"),
])
async def test_add_item_validation(client, overrides, code):
    res = await client.post("/api/order-items", json=_item(uuid4(), uuid4(), **overrides))
    assert res.status_code == 400
    assert res.json()["code"] == code


async def test_list_requires_order_id(client):
    res = await client.get("/api/order-items")
    assert res.status_code == 400
    assert res.json()["code"] == "MISSING_ORDER_ID"


async def test_list_unknown_order_is_404(client):
    res = await client.get(f"/api/order-items?orderId={uuid4()}")
    assert res.status_code == 404
    assert res.json()["code"] == "ORDER_NOT_FOUND"


@pytest.mark.parametrize("overrides, code", [
    ({"quantity": 10**400}, "INVALID_QUANTITY"),
    ({"quantity": 10**20}, "INVALID_QUANTITY"),
    ({"quantity": 2_147_483_648}, "INVALID_QUANTITY"),
    ({"price": 10**400}, "INVALID_PRICE"),
    ({"price": 1e300}, "INVALID_PRICE"),
])
async def test_oversized_numbers_are_rejected(client, make_order, make_product, overrides, code):
    order = await make_order()
    product = await make_product()
    res = await client.post("/api/order-items", json=_item(order.id, product.id, **overrides))
    assert res.status_code == 400
    assert res.json()["code"] == code


async def test_missing_body_reports_first_field(client):
    res = await client.post("/api/order-items")
    assert res.status_code == 400
    assert res.json()["code"] == "MISSING_ORDER_ID"
