"""Customers Service — registered shoppers with order analytics and admin-kept details.

Invariants:
    - A customer is a user with role "user"; any other id reads as not found
    - A customer's orders are those placed under their user id or their email
    - Segment filtering and search run over the whole customer list before paging,
      so total and hasMore describe the filtered set
    - segmentStats always counts every customer, whatever the filters

Design Decisions:
    - Orders are read once per listing and grouped in memory (at most SCAN_LIMIT
      rows), not queried per customer
"""

import logging
from collections import defaultdict

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.analytics import customer_analytics
from storefront.core.domain_types import CustomerSegment, UserRole
from storefront.core.errors import InvalidInputError, ResourceNotFoundError
from storefront.core.validate_fields import parse_uuid
from storefront.models.order import Order
from storefront.models.user import User
from storefront.schemas.customer import CustomerResponse
from storefront.schemas.order import OrderResponse

logger = logging.getLogger(__name__)

SCAN_LIMIT = 1000
RECENT_ORDERS = 20


def parse_segment(value: str | None) -> CustomerSegment | None:
    if not value or value == "all":
        return None
    try:
        return CustomerSegment(value)
    except ValueError:
        raise InvalidInputError(
            "Segment must be one of: " + ", ".join(s.value for s in CustomerSegment),
            "INVALID_SEGMENT", field="segment",
        )


class CustomersService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(
        self,
        limit: int = 50,
        offset: int = 0,
        segment: CustomerSegment | None = None,
        search: str | None = None,
    ) -> dict:
        customers = await self._customers()
        orders_by_key = await self._orders_by_customer_key()
        profiles = [
            self._profile(user, self._orders_of(user, orders_by_key)) for user in customers
        ]

        stats = {s.value: 0 for s in CustomerSegment}
        for profile in profiles:
            stats[profile["analytics"]["segment"]] += 1

        matched = [
            p for p in profiles
            if (segment is None or p["analytics"]["segment"] == segment.value)
            and _matches(p, search)
        ]
        page = matched[offset:offset + limit]
        return {
            "customers": page,
            "total": len(matched),
            "segmentStats": stats,
            "pagination": {
                "limit": limit,
                "offset": offset,
                "hasMore": offset + len(page) < len(matched),
            },
        }

    async def get_by_id(self, customer_id: str) -> dict:
        """Customer profile plus their newest orders."""
        user = await self._require(customer_id)
        orders = await self._orders_for(user)
        return {
            **self._profile(user, orders),
            "orders": [OrderResponse.serialize(o) for o in orders[:RECENT_ORDERS]],
        }

    async def update(self, customer_id: str, updates: dict) -> dict:
        user = await self._require(customer_id)
        for key, value in updates.items():
            setattr(user, key, value)
        await self.db.commit()
        logger.info("Customer details updated", extra={"user_id": str(user.id)})
        return self._profile(user, await self._orders_for(user))

    # ─── Reads ──────────────────────────────────────────────────

    async def _require(self, customer_id: str) -> User:
        key = parse_uuid(customer_id)
        user = await self.db.get(User, key) if key is not None else None
        if user is None or user.role != UserRole.USER.value:
            raise ResourceNotFoundError("Customer", customer_id)
        return user

    async def _customers(self) -> list[User]:
        result = await self.db.execute(
            select(User)
            .where(User.role == UserRole.USER.value)
            .order_by(User.created_at.desc())
            .limit(SCAN_LIMIT)
        )
        return list(result.scalars().all())

    async def _orders_by_customer_key(self) -> dict[str, list[Order]]:
        result = await self.db.execute(
            select(Order).order_by(Order.created_at.desc()).limit(SCAN_LIMIT)
        )
        grouped: dict[str, list[Order]] = defaultdict(list)
        for order in result.scalars().all():
            grouped[order.customer_email.lower()].append(order)
            if order.user_id:
                grouped[order.user_id].append(order)
        return grouped

    async def _orders_for(self, user: User) -> list[Order]:
        result = await self.db.execute(
            select(Order)
            .where(or_(Order.user_id == str(user.id), Order.customer_email == user.email))
            .order_by(Order.created_at.desc())
            .limit(SCAN_LIMIT)
        )
        return list(result.scalars().all())

    @staticmethod
    def _orders_of(user: User, grouped: dict[str, list[Order]]) -> list[Order]:
        seen = {}
        for order in grouped.get(str(user.id), []) + grouped.get(user.email, []):
            seen[order.id] = order
        return list(seen.values())

    @staticmethod
    def _profile(user: User, orders: list[Order]) -> dict:
        return {**CustomerResponse.serialize(user), "analytics": customer_analytics(orders)}


def _matches(profile: dict, search: str | None) -> bool:
    """Case-insensitive substring match on name, email or phone."""
    if not search:
        return True
    needle = search.lower()
    return any(
        needle in (profile.get(key) or "").lower() for key in ("name", "email", "phone")
    )
