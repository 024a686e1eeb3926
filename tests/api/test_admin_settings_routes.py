"""Admin Settings Routes — defaults, partial nested updates, persistence, validation."""

import pytest


async def test_defaults_before_any_save(client):
    res = await client.get("/api/admin/settings")
    assert res.status_code == 200
    body = res.json()
    assert body["storeName"] == "Trendify Mart"
    assert body["taxRate"] == 8.5
    assert body["shippingSettings"]["expeditedShippingCost"] == 12.99
    assert body["paymentMethods"] == ["credit_card", "paypal", "stripe"]
    assert body["notifications"]["promotionalEmails"] is False


async def test_partial_update_keeps_siblings(client):
    res = await client.put(
        "/api/admin/settings",
        json={
            "currency": "eur",
            "shippingSettings": {"standardShippingCost": 0},
            "notifications": {"promotionalEmails": True},
        },
    )
    assert res.status_code == 200
    body = res.json()
    assert body["currency"] == "EUR"
    assert body["shippingSettings"] == {
        "freeShippingThreshold": 50,
        "standardShippingCost": 0,
        "expeditedShippingCost": 12.99,
    }
    assert body["notifications"]["promotionalEmails"] is True
    assert body["notifications"]["orderUpdates"] is True

    later = await client.put("/api/admin/settings", json={"taxRate": 20})
    assert later.json()["currency"] == "EUR"

    stored = await client.get("/api/admin/settings")
    assert stored.json()["taxRate"] == 20
    assert stored.json()["shippingSettings"]["standardShippingCost"] == 0


async def test_payment_methods_are_replaced(client):
    res = await client.put(
        "/api/admin/settings", json={"paymentMethods": ["paypal", "paypal", "bank_transfer"]},
    )
    assert res.json()["paymentMethods"] == ["paypal", "bank_transfer"]


@pytest.mark.parametrize("body,code", [
    ({}, "NO_UPDATE_FIELDS"),
    ({"storeName": None}, "INVALID_STORE_NAME"),
    ({"storeEmail": "not-an-email"}, "INVALID_STORE_EMAIL"),
    ({"currency": "EURO"}, "INVALID_CURRENCY"),
    ({"taxRate": 150}, "INVALID_TAX_RATE"),
    ({"taxRate": True}, "INVALID_TAX_RATE"),
    ({"shippingSettings": "free"}, "INVALID_SHIPPING_SETTINGS"),
    ({"shippingSettings": {"freeShippingThreshold": -1}}, "INVALID_SHIPPING_COST"),
    ({"paymentMethods": []}, "INVALID_PAYMENT_METHODS"),
    ({"paymentMethods": ["cash"]}, "INVALID_PAYMENT_METHODS"),
    ({"notifications": {"orderUpdates": "yes"}}, "INVALID_NOTIFICATIONS"),
])
async def test_invalid_updates_are_rejected(client, body, code):
    res = await client.put("/api/admin/settings", json=body)
    assert res.status_code == 400
    assert res.json()["code"] == code

    unchanged = await client.get("/api/admin/settings")
    assert unchanged.json()["taxRate"] == 8.5
