"""API test fixtures — async DB, app.state handles, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test session factory
    - app.state carries a db_manager bound to the test engine plus real
      identity/ledger handles (cheap bcrypt, fixed ledger seed) and a
      notifier that records instead of logging
    - Unhandled exceptions come back as 500 responses, not raised in the test

Design Decisions:
    - ASGITransport does not run the lifespan, so the fixture installs the
      handles the lifespan would build and removes them afterwards
    - Data is inserted through test_db and committed before any request
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from storefront.db.base import Base
from storefront.infrastructure.database import get_db, DatabaseSessionManager
from storefront.infrastructure.identity import JwtIdentityProvider
from storefront.infrastructure.ledger import SimulatedPaymentLedger
from storefront.main import app
from storefront.models.category import Category
from storefront.models.order import Order
from storefront.models.order_item import OrderItem
from storefront.models.product import Product
from storefront.models.user import User

STATE_HANDLES = ("db_manager", "identity", "ledger", "notifier")


class RecordingNotifier:
    """PasswordResetNotifier that keeps every code it was asked to send."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    async def send_reset_code(self, email: str, code: str) -> None:
        self.sent.append((email, code))


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def identity():
    return JwtIdentityProvider(
        "test-secret-not-for-production", token_ttl_seconds=3600, bcrypt_rounds=4,
    )


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
async def client(test_engine, test_session_factory, identity, notifier):
    """FastAPI test client with DB dependency overridden and handles on app.state."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db_manager = fake_manager
    app.state.identity = identity
    app.state.ledger = SimulatedPaymentLedger(seed=42)
    app.state.notifier = notifier

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    for name in STATE_HANDLES:
        if hasattr(app.state, name):
            delattr(app.state, name)


# ─── Data builders ──────────────────────────────────────────────

@pytest.fixture
def make_user(test_db, identity):
    async def _make(email="shopper@example.com", password="password123",
                    name="Shopper", role="user") -> User:
        user = User(
            email=email, name=name, role=role,
            password_hash=identity.hash_password(password),
        )
        test_db.add(user)
        await test_db.commit()
        return user
    return _make


@pytest.fixture
def token_for(identity):
    def _token(user: User) -> str:
        return identity.issue_token(str(user.id), user.email, user.role)
    return _token


@pytest.fixture
def make_product(test_db):
    async def _make(name="Denim Jacket", category="Clothing", price=89.99,
                    **fields) -> Product:
        product = Product(
            name=name, category=category, price=price,
            color=fields.pop("color", "Blue"), size=fields.pop("size", "M"),
            **fields,
        )
        test_db.add(product)
        await test_db.commit()
        return product
    return _make


@pytest.fixture
def make_category(test_db):
    async def _make(name="Clothing", slug="clothing", description=None) -> Category:
        category = Category(name=name, slug=slug, description=description)
        test_db.add(category)
        await test_db.commit()
        return category
    return _make


@pytest.fixture
def make_order(test_db):
    async def _make(status="pending", total_amount=120.0,
                    customer_name="Alice Johnson", items=(),
                    customer_email="alice@example.com", **fields) -> Order:
        order = Order(
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone="555-123-4567",
            shipping_address="123 Maple St",
            total_amount=total_amount,
            status=status,
            items=[OrderItem(**item) for item in items],
            **fields,
        )
        test_db.add(order)
        await test_db.commit()
        return order
    return _make
