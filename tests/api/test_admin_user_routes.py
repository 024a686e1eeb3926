"""Admin User Routes — role statistics, paging, creation, profile edits, removal.

Tests:
    - stats=true takes precedence over ?id and the list
    - Pages are 1-based; totalPages rounds up
    - Created accounts can sign in; duplicate emails are EMAIL_EXISTS (409)
    - Deleted users are gone (USER_NOT_FOUND)
"""

from uuid import uuid4


async def test_role_statistics(client, make_user):
    await make_user(email="a@example.com")
    await make_user(email="b@example.com")
    await make_user(email="boss@example.com", role="admin")

    res = await client.get("/api/admin/users?stats=true")
    assert res.status_code == 200
    assert res.json() == {
        "totalUsers": 3,
        "roleDistribution": [
            {"role": "user", "count": 2},
            {"role": "admin", "count": 1},
            {"role": "manager", "count": 0},
        ],
    }


async def test_list_users_in_pages(client, make_user):
    for n in range(3):
        await make_user(email=f"u{n}@example.com")

    res = await client.get("/api/admin/users?page=2&limit=2")
    body = res.json()
    assert len(body["users"]) == 1
    assert body["pagination"] == {"total": 3, "page": 2, "limit": 2, "totalPages": 2}

    admins = await client.get("/api/admin/users?role=admin")
    assert admins.json()["pagination"]["total"] == 0
    assert admins.json()["pagination"]["totalPages"] == 0


async def test_get_user_by_id(client, make_user):
    user = await make_user()
    res = await client.get(f"/api/admin/users?id={user.id}")
    assert res.status_code == 200
    assert res.json()["email"] == "shopper@example.com"
    assert "passwordHash" not in res.json()

    missing = await client.get(f"/api/admin/users?id={uuid4()}")
    assert missing.status_code == 404
    assert missing.json()["code"] == "USER_NOT_FOUND"


async def test_create_user(client):
    body = {
        "email": "Manager@Example.com", "password": "password123",
        "name": "Morgan", "role": "manager",
    }
    res = await client.post("/api/admin/users", json=body)
    assert res.status_code == 201
    assert res.json()["email"] == "manager@example.com"
    assert res.json()["role"] == "manager"

    login = await client.post(
        "/api/auth/login", json={"email": "manager@example.com", "password": "password123"},
    )
    assert login.status_code == 200

    duplicate = await client.post("/api/admin/users", json=body)
    assert duplicate.status_code == 409
    assert duplicate.json()["code"] == "EMAIL_EXISTS"

    bad_role = await client.post(
        "/api/admin/users", json={**body, "email": "x@example.com", "role": "owner"},
    )
    assert bad_role.json()["code"] == "INVALID_ROLE"


async def test_update_user(client, make_user):
    user = await make_user()
    res = await client.put(
        f"/api/admin/users?id={user.id}",
        json={"role": "manager", "phone": "555-0199", "address": "9 Elm St"},
    )
    assert res.status_code == 200
    assert res.json()["role"] == "manager"
    assert res.json()["phone"] == "555-0199"
    assert res.json()["address"] == "9 Elm St"

    null_role = await client.put(f"/api/admin/users?id={user.id}", json={"role": None})
    assert null_role.json()["code"] == "INVALID_ROLE"

    no_id = await client.put("/api/admin/users", json={"name": "New"})
    assert no_id.json() == {
        "error": "User ID is required", "code": "MISSING_ID", "category": "invalid_input",
    }

    missing = await client.put(f"/api/admin/users?id={uuid4()}", json={"name": "New"})
    assert missing.status_code == 404
    assert missing.json()["code"] == "USER_NOT_FOUND"


async def test_delete_user(client, make_user):
    user = await make_user()
    res = await client.delete(f"/api/admin/users?id={user.id}")
    assert res.json() == {"message": "User deleted successfully"}

    gone = await client.get(f"/api/admin/users?id={user.id}")
    assert gone.status_code == 404

    no_id = await client.delete("/api/admin/users")
    assert no_id.json()["code"] == "MISSING_ID"
