"""Catalog Routes — categories and products.

Tests:
    - Category slug derived from the name; duplicate slug → 400 DUPLICATE_SLUG
    - Lookup by id or slug; renaming regenerates the slug
    - Category with products cannot be deleted (CATEGORY_HAS_PRODUCTS)
    - Product create validation and filtered listing
"""

from uuid import uuid4

import pytest


async def test_create_category_derives_slug(client):
    res = await client.post("/api/categories", json={"name": "Men's Polo Shirts!"})
    assert res.status_code == 201
    assert res.json()["slug"] == "mens-polo-shirts"


async def test_create_category_requires_name(client):
    res = await client.post("/api/categories", json={"description": "no name"})
    assert res.status_code == 400
    assert res.json()["code"] == "MISSING_REQUIRED_FIELD"


async def test_duplicate_slug_is_rejected(client, make_category):
    await make_category(name="Clothing", slug="clothing")
    res = await client.post("/api/categories", json={"name": "Clothing"})
    assert res.status_code == 400
    assert res.json() == {
        "error": "Category with this name already exists",
        "code": "DUPLICATE_SLUG",
        "category": "conflict",
    }


async def test_get_category_by_id_and_slug(client, make_category):
    category = await make_category(name="Books", slug="books")
    by_id = await client.get(f"/api/categories?id={category.id}")
    by_slug = await client.get("/api/categories?slug=books")
    assert by_id.json()["name"] == "Books"
    assert by_slug.json()["id"] == str(category.id)

    missing = await client.get("/api/categories?slug=nope")
    assert missing.status_code == 404
    assert missing.json()["code"] == "CATEGORY_NOT_FOUND"


async def test_list_categories_respects_limit(client, make_category):
    for i in range(3):
        await make_category(name=f"Cat {i}", slug=f"cat-{i}")
    res = await client.get("/api/categories?limit=2")
    assert len(res.json()) == 2


async def test_rename_regenerates_slug(client, make_category):
    category = await make_category(name="Home", slug="home")
    res = await client.put(
        f"/api/categories?id={category.id}", json={"name": "Home Decor"},
    )
    assert res.status_code == 200
    assert res.json()["slug"] == "home-decor"


async def test_delete_category_blocked_by_products(client, make_category, make_product):
    category = await make_category(name="Clothing", slug="clothing")
    await make_product(category="Clothing")
    res = await client.delete(f"/api/categories?id={category.id}")
    assert res.status_code == 400
    assert res.json()["code"] == "CATEGORY_HAS_PRODUCTS"


async def test_delete_empty_category(client, make_category):
    category = await make_category(name="Toys", slug="toys")
    res = await client.delete(f"/api/categories?id={category.id}")
    assert res.status_code == 200
    assert res.json()["deletedCategory"]["slug"] == "toys"


async def test_delete_unknown_category_is_404(client):
    res = await client.delete(f"/api/categories?id={uuid4()}")
    assert res.status_code == 404


@pytest.mark.parametrize("missing, code", [
    ("name", "MISSING_NAME"),
    ("price", "INVALID_PRICE"),
    ("category", "MISSING_CATEGORY"),
    ("color", "MISSING_COLOR"),
    ("size", "MISSING_SIZE"),
])
async def test_product_create_validation(client, missing, code):
    body = {"name": "Tee", "price": 12.5, "category": "Clothing",
            "color": "White", "size": "S"}
    body.pop(missing)
    res = await client.post("/api/products", json=body)
    assert res.status_code == 400
    assert res.json()["code"] == code


async def test_create_and_filter_products(client, make_product):
    await make_product(name="Yoga Mat", category="Sports", is_featured=True)
    created = await client.post("/api/products", json={
        "name": "Polo Shirt", "price": 34.99, "category": "Clothing",
        "color": "White", "size": "L", "stockQuantity": 10,
    })
    assert created.status_code == 201
    assert created.json()["stockQuantity"] == 10
    assert created.json()["isFeatured"] is False

    featured = await client.get("/api/products?isFeatured=true")
    assert [p["name"] for p in featured.json()] == ["Yoga Mat"]

    clothing = await client.get("/api/products?category=Clothing")
    assert [p["name"] for p in clothing.json()] == ["Polo Shirt"]


async def test_update_and_delete_product(client, make_product):
    product = await make_product()
    updated = await client.put(f"/api/products?id={product.id}", json={"price": 70})
    assert updated.json()["price"] == 70.0

    deleted = await client.delete(f"/api/products?id={product.id}")
    assert deleted.json()["message"] == "Product deleted successfully"
    assert (await client.get(f"/api/products?id={product.id}")).status_code == 404
