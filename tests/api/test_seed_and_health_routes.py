"""Seed and Health Routes.

Tests:
    - Seeding twice does not duplicate records
    - Seed failure → 500 {error, success: false}
    - Liveness always 200; readiness reflects database reachability
"""

from sqlalchemy import func, select

from storefront.main import app
from storefront.models.category import Category
from storefront.models.order import Order
from storefront.models.user import User
import storefront.api.routes.seed as seed_route


async def _count(session_factory, model) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar_one()


async def test_seed_is_idempotent(client, test_session_factory):
    first = await client.post("/api/admin/seed")
    assert first.status_code == 200
    assert first.json() == {"message": "Database seeded successfully", "success": True}
    counts = [await _count(test_session_factory, m) for m in (Category, User, Order)]

    second = await client.post("/api/admin/seed")
    assert second.status_code == 200
    assert [await _count(test_session_factory, m) for m in (Category, User, Order)] == counts
    assert counts[0] == 8


async def test_seeded_admin_can_sign_in(client):
    await client.post("/api/admin/seed")
    res = await client.post("/api/auth/login", json={
        "email": "admin@gmail.com", "password": "admin123",
    })
    assert res.status_code == 200
    assert res.json()["user"]["role"] == "admin"


async def test_seed_failure_reports_error(client, monkeypatch):
    async def _boom(db, identity):
        raise RuntimeError("disk full")

    monkeypatch.setattr(seed_route, "seed_all", _boom)
    res = await client.post("/api/admin/seed")
    assert res.status_code == 500
    assert res.json() == {"error": "Failed to seed database: disk full", "success": False}


async def test_liveness(client):
    res = await client.get("/api/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness(client):
    ready = await client.get("/api/health/ready")
    assert ready.status_code == 200

    class _DownManager:
        async def health_check(self):
            return False

    app.state.db_manager = _DownManager()
    down = await client.get("/api/health/ready")
    assert down.status_code == 503
    assert down.json()["reason"] == "database_unavailable"
