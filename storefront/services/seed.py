"""Database Seeding — sample catalog, accounts and orders for a fresh install.

Invariants:
    - Idempotent: records that already exist are skipped, never duplicated
      (categories by slug, users by email, products by name, orders by
      customer email + creation time)
    - Order: categories, users, products, orders (items need product ids)
    - Users are created through AuthService so passwords are hashed the same
      way as for self-registration

Design Decisions:
    - Usable from the admin seed endpoint and from the storefront-seed command
"""

import asyncio
import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.repository_protocols import IdentityProvider
from storefront.models.category import Category
from storefront.models.order import Order
from storefront.models.order_item import OrderItem
from storefront.models.product import Product
from storefront.services.auth import AuthService

logger = logging.getLogger(__name__)

SAMPLE_CATEGORIES = [
    ("Electronics", "electronics", "Electronic devices and gadgets"),
    ("Clothing", "clothing", "Fashion and apparel for all ages"),
    ("Books", "books", "Books, magazines and educational materials"),
    ("Home & Garden", "home-garden", "Home improvement and gardening supplies"),
    ("Sports & Outdoors", "sports-outdoors", "Sports equipment and outdoor gear"),
    ("Health & Beauty", "health-beauty", "Health, wellness and beauty products"),
    ("Toys & Games", "toys-games", "Toys, games and entertainment for kids"),
    ("Automotive", "automotive", "Car parts, tools and automotive accessories"),
]

SAMPLE_USERS = [
    ("admin@gmail.com", "admin123", "Admin User", "admin"),
    ("user@gmail.com", "user1234", "Regular User", "user"),
    ("manager@gmail.com", "manager123", "Store Manager", "manager"),
    ("customer@gmail.com", "customer123", "John Customer", "user"),
    ("support@gmail.com", "support123", "Support Agent", "support"),
]

SAMPLE_PRODUCTS = [
    {"name": "iPhone 15 Pro", "price": 999.99, "category": "Electronics",
     "color": "Space Black", "size": "N/A", "stock_quantity": 25, "is_featured": True,
     "description": "Titanium smartphone with a 48MP camera system"},
    {"name": "MacBook Air M3", "price": 1299.99, "category": "Electronics",
     "color": "Starlight", "size": "N/A", "stock_quantity": 12, "is_featured": True,
     "description": "Thin and light laptop"},
    {"name": "Classic Denim Jacket", "price": 89.99, "sale_price": 69.99,
     "category": "Clothing", "color": "Blue", "size": "M", "stock_quantity": 40,
     "description": "Washed denim with a relaxed fit"},
    {"name": "Men's Polo Shirt", "price": 34.99, "category": "Clothing",
     "color": "White", "size": "L", "stock_quantity": 60},
    {"name": "Yoga Mat", "price": 29.99, "category": "Sports & Outdoors",
     "color": "Purple", "size": "Standard", "stock_quantity": 35},
    {"name": "Ergonomic Office Chair", "price": 299.99, "category": "Home & Garden",
     "color": "Black", "size": "N/A", "stock_quantity": 8},
    {"name": "Wireless Keyboard", "price": 79.99, "category": "Electronics",
     "color": "Gray", "size": "N/A", "stock_quantity": 50},
]

SAMPLE_ORDERS = [
    {"customer_name": "Alice Johnson", "customer_email": "alice.johnson@example.com",
     "customer_phone": "555-123-4567",
     "shipping_address": "123 Maple St, Anytown, CA 90210",
     "total_amount": 2299.98, "status": "delivered",
     "created_at": "2024-01-05T10:30:00+00:00",
     "items": [("iPhone 15 Pro", 1, 999.99, "N/A", "Space Black"),
               ("MacBook Air M3", 1, 1299.99, "N/A", "Starlight")]},
    {"customer_name": "Bob Williams", "customer_email": "bob.williams@example.com",
     "customer_phone": "(555) 987-6543",
     "shipping_address": "456 Oak Ave, Villagetown, NY 10001",
     "total_amount": 379.98, "status": "shipped",
     "created_at": "2024-01-07T14:00:00+00:00",
     "items": [("Ergonomic Office Chair", 1, 299.99, "N/A", "Black"),
               ("Wireless Keyboard", 1, 79.99, "N/A", "Gray")]},
    {"customer_name": "Charlie Brown", "customer_email": "charlie.b@example.com",
     "customer_phone": "555 234 5678",
     "shipping_address": "789 Pine Dr, Cityville, TX 77001",
     "total_amount": 75.50, "status": "processing",
     "created_at": "2024-01-10T09:15:00+00:00", "items": []},
    {"customer_name": "Diana Prince", "customer_email": "d.prince@example.com",
     "customer_phone": "+1-555-876-5432",
     "shipping_address": "101 Main Rd, Hometown, FL 33101",
     "total_amount": 50.00, "status": "pending",
     "created_at": "2024-01-12T11:45:00+00:00", "items": []},
    {"customer_name": "Eve Davis", "customer_email": "eve.d@example.com",
     "customer_phone": "5551112233",
     "shipping_address": "202 Bridge Ln, Metropol, GA 30303",
     "total_amount": 230.25, "status": "delivered",
     "created_at": "2024-01-15T16:20:00+00:00", "items": []},
    {"customer_name": "Frank Miller", "customer_email": "frank.miller@example.com",
     "customer_phone": "555-444-3333",
     "shipping_address": "303 Valley View, Hillside, WA 98001",
     "total_amount": 125.99, "status": "cancelled",
     "created_at": "2024-01-18T12:30:00+00:00",
     "items": [("Classic Denim Jacket", 1, 89.99, "M", "Blue"),
               ("Men's Polo Shirt", 1, 34.99, "L", "White")]},
    {"customer_name": "Grace Lee", "customer_email": "grace.lee@example.com",
     "customer_phone": "555-666-7777",
     "shipping_address": "404 Summit St, Mountain View, CO 80424",
     "total_amount": 89.50, "status": "shipped",
     "created_at": "2024-01-20T15:00:00+00:00",
     "items": [("Yoga Mat", 2, 29.99, "Standard", "Purple")]},
    {"customer_name": "Henry Wilson", "customer_email": "h.wilson@example.com",
     "customer_phone": "555-888-9999",
     "shipping_address": "505 River Rd, Riverside, OR 97001",
     "total_amount": 299.00, "status": "processing",
     "created_at": "2024-01-22T09:45:00+00:00", "items": []},
]


async def seed_categories(db: AsyncSession) -> int:
    created = 0
    for name, slug, description in SAMPLE_CATEGORIES:
        exists = await db.execute(select(Category.id).where(Category.slug == slug))
        if exists.first() is not None:
            continue
        db.add(Category(name=name, slug=slug, description=description))
        created += 1
    await db.commit()
    return created


async def seed_users(db: AsyncSession, identity: IdentityProvider) -> int:
    auth = AuthService(db, identity)
    created = 0
    for email, password, name, role in SAMPLE_USERS:
        if await auth.get_by_email(email) is not None:
            continue
        await auth.register(email, password, name, role)
        created += 1
    return created


async def seed_products(db: AsyncSession) -> int:
    created = 0
    for product in SAMPLE_PRODUCTS:
        exists = await db.execute(
            select(Product.id).where(Product.name == product["name"])
        )
        if exists.first() is not None:
            continue
        db.add(Product(**product))
        created += 1
    await db.commit()
    return created


async def seed_orders(db: AsyncSession) -> int:
    result = await db.execute(select(Product.name, Product.id))
    product_ids = {name: str(product_id) for name, product_id in result.all()}

    created = 0
    for sample in SAMPLE_ORDERS:
        created_at = datetime.fromisoformat(sample["created_at"]).astimezone(timezone.utc)
        exists = await db.execute(
            select(Order.id)
            .where(Order.customer_email == sample["customer_email"])
            .where(Order.created_at == created_at)
        )
        if exists.first() is not None:
            continue
        items = [
            OrderItem(
                product_id=product_ids[name], quantity=quantity,
                price=price, size=size, color=color,
            )
            for name, quantity, price, size, color in sample["items"]
            if name in product_ids
        ]
        fields = {k: v for k, v in sample.items() if k not in ("items", "created_at")}
        db.add(Order(**fields, created_at=created_at, updated_at=created_at, items=items))
        created += 1
    await db.commit()
    return created


async def seed_all(db: AsyncSession, identity: IdentityProvider) -> dict:
    """Seed every table; returns how many records each step created."""
    counts = {
        "categories": await seed_categories(db),
        "users": await seed_users(db, identity),
        "products": await seed_products(db),
        "orders": await seed_orders(db),
    }
    logger.info(f"Database seeded: {counts}", extra={"resource": "seed"})
    return counts


async def _run() -> None:
    from storefront.config import get_settings
    from storefront.infrastructure.database import DatabaseSessionManager
    from storefront.infrastructure.identity import JwtIdentityProvider
    from storefront.infrastructure.observability import setup_logging

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = DatabaseSessionManager(settings.database_url)
    identity = JwtIdentityProvider(
        settings.jwt_secret, settings.jwt_algorithm,
        settings.session_token_ttl_seconds, settings.bcrypt_rounds,
    )
    try:
        async with manager.session() as db:
            await seed_all(db, identity)
    finally:
        await manager.close()


def main() -> None:
    """Entry point for the storefront-seed command."""
    asyncio.run(_run())


if __name__ == "__main__":
    main()
