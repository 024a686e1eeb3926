"""Auth Routes — register, login, /me, logout, password reset.

Tests:
    - Register normalizes email, defaults role, rejects duplicates (409)
    - Login returns token + user and sets an HttpOnly session cookie
    - /me accepts bearer header or cookie; missing/invalid token → 401
    - Logout codes: MISSING_AUTH_HEADER, INVALID_AUTH_FORMAT, MISSING_TOKEN, INVALID_TOKEN
    - forgot/reset password: identical responses for existing and unknown inputs
    - A reset code changes the password once
"""

import pytest


async def test_register_creates_user(client):
    res = await client.post("/api/auth/register", json={
        "email": "  New.User@Example.COM ", "password": "longenough", "name": " New User ",
    })
    assert res.status_code == 201
    user = res.json()
    assert user["email"] == "new.user@example.com"
    assert user["name"] == "New User"
    assert user["role"] == "user"
    assert "passwordHash" not in user


@pytest.mark.parametrize("body, code", [
    ({"password": "longenough", "name": "A"}, "MISSING_EMAIL"),
    ({"email": "a@b.co", "name": "A"}, "MISSING_PASSWORD"),
    ({"email": "a@b.co", "password": "longenough"}, "MISSING_NAME"),
    ({"email": "not-an-email", "password": "longenough", "name": "A"}, "INVALID_EMAIL"),
    ({"email": "a@b.co", "password": "short", "name": "A"}, "INVALID_PASSWORD"),
])
async def test_register_validation(client, body, code):
    res = await client.post("/api/auth/register", json=body)
    assert res.status_code == 400
    assert res.json()["code"] == code


async def test_register_duplicate_email_is_409(client, make_user):
    await make_user(email="taken@example.com")
    res = await client.post("/api/auth/register", json={
        "email": "taken@example.com", "password": "longenough", "name": "Again",
    })
    assert res.status_code == 409
    assert res.json()["code"] == "EMAIL_EXISTS"


async def test_login_sets_session_cookie(client, make_user):
    await make_user(email="shopper@example.com", password="password123")
    res = await client.post("/api/auth/login", json={
        "email": "Shopper@Example.com", "password": "password123",
    })
    assert res.status_code == 200
    body = res.json()
    assert body["expiresIn"] == "3600"
    assert body["user"]["email"] == "shopper@example.com"
    assert body["sessionToken"]

    cookie = res.headers["set-cookie"].lower()
    assert cookie.startswith("session_token=")
    assert "httponly" in cookie
    assert "max-age=3600" in cookie


async def test_login_wrong_password_is_401(client, make_user):
    await make_user(email="shopper@example.com", password="password123")
    res = await client.post("/api/auth/login", json={
        "email": "shopper@example.com", "password": "wrong-password",
    })
    assert res.status_code == 401
    assert res.json()["code"] == "INVALID_CREDENTIALS"


async def test_login_validation(client):
    res = await client.post("/api/auth/login", json={"email": "a@b.co"})
    assert res.status_code == 400
    assert res.json()["code"] == "MISSING_PASSWORD"


async def test_me_with_bearer_and_cookie(client, make_user, token_for):
    user = await make_user()
    token = token_for(user)

    by_header = await client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {token}"},
    )
    assert by_header.status_code == 200
    assert by_header.json()["user"]["id"] == str(user.id)
    assert by_header.json()["tokenInfo"]["uid"] == str(user.id)
    assert by_header.json()["tokenInfo"]["exp"] > by_header.json()["tokenInfo"]["iat"]

    by_cookie = await client.get(
        "/api/auth/me", headers={"Cookie": f"session_token={token}"},
    )
    assert by_cookie.status_code == 200


async def test_me_errors(client, identity):
    missing = await client.get("/api/auth/me")
    assert missing.status_code == 401
    assert missing.json()["code"] == "MISSING_TOKEN"

    invalid = await client.get(
        "/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"},
    )
    assert invalid.status_code == 401
    assert invalid.json()["code"] == "INVALID_TOKEN"

    orphan = identity.issue_token(
        "6f1c7a2e-0000-4000-8000-000000000000", "ghost@example.com", "user",
    )
    gone = await client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {orphan}"},
    )
    assert gone.status_code == 404
    assert gone.json()["code"] == "PROFILE_NOT_FOUND"


@pytest.mark.parametrize("headers, code", [
    ({}, "MISSING_AUTH_HEADER"),
    ({"Authorization": "Basic abc"}, "INVALID_AUTH_FORMAT"),
    ({"Authorization": "Bearer"}, "MISSING_TOKEN"),
    ({"Authorization": "Bearer not.a.jwt"}, "INVALID_TOKEN"),
])
async def test_logout_errors(client, headers, code):
    res = await client.post("/api/auth/logout", headers=headers)
    assert res.status_code == 401
    assert res.json()["code"] == code


async def test_logout_clears_cookie(client, make_user, token_for):
    user = await make_user()
    res = await client.post(
        "/api/auth/logout", headers={"Authorization": f"Bearer {token_for(user)}"},
    )
    assert res.status_code == 200
    assert res.json() == {"message": "Successfully logged out", "success": True}
    cookie = res.headers["set-cookie"].lower()
    assert cookie.startswith("session_token=")
    assert "max-age=0" in cookie


async def test_forgot_password_is_identical_for_unknown_email(client, make_user, notifier):
    await make_user(email="shopper@example.com")
    known = await client.post(
        "/api/auth/forgot-password", json={"email": "shopper@example.com"},
    )
    unknown = await client.post(
        "/api/auth/forgot-password", json={"email": "nobody@example.com"},
    )
    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()
    assert [email for email, _ in notifier.sent] == ["shopper@example.com"]


@pytest.mark.parametrize("body, code", [
    ({}, "MISSING_EMAIL"),
    ({"email": "nope"}, "INVALID_EMAIL_FORMAT"),
])
async def test_forgot_password_validation(client, body, code):
    res = await client.post("/api/auth/forgot-password", json=body)
    assert res.status_code == 400
    assert res.json()["code"] == code


@pytest.mark.parametrize("body, code", [
    ({"newPassword": "longenough"}, "MISSING_TOKEN"),
    ({"oobCode": "abc"}, "MISSING_PASSWORD"),
    ({"oobCode": "abc", "newPassword": "short"}, "WEAK_PASSWORD"),
])
async def test_reset_password_validation(client, body, code):
    res = await client.post("/api/auth/reset-password", json=body)
    assert res.status_code == 400
    assert res.json()["code"] == code


async def test_reset_password_flow(client, make_user, notifier):
    await make_user(email="shopper@example.com", password="old-password")
    await client.post("/api/auth/forgot-password", json={"email": "shopper@example.com"})
    _, code = notifier.sent[0]

    bogus = await client.post(
        "/api/auth/reset-password", json={"oobCode": "bogus", "newPassword": "new-password"},
    )
    valid = await client.post(
        "/api/auth/reset-password", json={"oobCode": code, "newPassword": "new-password"},
    )
    reused = await client.post(
        "/api/auth/reset-password", json={"oobCode": code, "newPassword": "other-password"},
    )
    assert bogus.status_code == valid.status_code == reused.status_code == 200
    assert bogus.json() == valid.json() == reused.json()

    login = await client.post("/api/auth/login", json={
        "email": "shopper@example.com", "password": "new-password",
    })
    assert login.status_code == 200
