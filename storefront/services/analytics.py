"""Analytics Service — loads store data and hands it to the report builders.

Invariants:
    - Query parameters are validated before any read; bad input is a 400, never a 500
    - Reads at most SCAN_LIMIT rows per table, newest first
    - Sold items from cancelled orders are left out of unit sales and product revenue
    - Any other failure surfaces as ServiceFailureError with the report's *_FETCH_ERROR code
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.analytics import (
    SaleLine,
    dashboard_report,
    orders_report,
    overview_report,
    parse_period,
    products_report,
    report_window,
    resolve_range,
)
from storefront.core.domain_types import OrderStatus, UserRole
from storefront.core.errors import ServiceFailureError
from storefront.core.timestamps import utcnow
from storefront.models.category import Category
from storefront.models.order import Order
from storefront.models.order_item import OrderItem
from storefront.models.product import Product
from storefront.models.user import User

logger = logging.getLogger(__name__)

SCAN_LIMIT = 1000
CATEGORY_LIMIT = 100


class AnalyticsService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def overview(
        self,
        date_range: str | None = None,
        from_date: str | None = None,
        to_date: str | None = None,
    ) -> dict:
        now = utcnow()
        start, end = resolve_range(date_range, from_date, to_date, now)
        try:
            return overview_report(
                await self._orders(),
                await self._customers(),
                await self._products(),
                await self._sales(),
                start, end, now,
            )
        except Exception as e:
            logger.error(f"Analytics overview failed: {e}", exc_info=True)
            raise ServiceFailureError(
                "Failed to fetch analytics data", "ANALYTICS_FETCH_ERROR",
            ) from e

    async def dashboard(self) -> dict:
        try:
            return dashboard_report(
                await self._orders(), await self._products(), await self._sales(), utcnow(),
            )
        except Exception as e:
            logger.error(f"Dashboard analytics failed: {e}", exc_info=True)
            raise ServiceFailureError(
                "Failed to fetch dashboard analytics", "DASHBOARD_FETCH_ERROR",
            ) from e

    async def orders(
        self,
        period: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
        status: str | None = None,
    ) -> dict:
        report_period = parse_period(period)
        start, end = report_window(start_date, end_date)
        try:
            return orders_report(
                await self._orders(), report_period, utcnow(), start, end, status,
            )
        except Exception as e:
            logger.error(f"Order analytics failed: {e}", exc_info=True)
            raise ServiceFailureError(
                "Failed to fetch order analytics", "ORDER_ANALYTICS_FETCH_ERROR",
            ) from e

    async def products(self) -> dict:
        try:
            return products_report(
                await self._products(), await self._categories(), await self._sales(),
            )
        except Exception as e:
            logger.error(f"Product analytics failed: {e}", exc_info=True)
            raise ServiceFailureError(
                "Failed to fetch product analytics", "PRODUCT_ANALYTICS_FETCH_ERROR",
            ) from e

    # ─── Reads ──────────────────────────────────────────────────

    async def _orders(self) -> list[Order]:
        result = await self.db.execute(
            select(Order).order_by(Order.created_at.desc()).limit(SCAN_LIMIT)
        )
        return list(result.scalars().all())

    async def _products(self) -> list[Product]:
        result = await self.db.execute(
            select(Product).order_by(Product.created_at.desc()).limit(SCAN_LIMIT)
        )
        return list(result.scalars().all())

    async def _customers(self) -> list[User]:
        result = await self.db.execute(
            select(User)
            .where(User.role == UserRole.USER.value)
            .order_by(User.created_at.desc())
            .limit(SCAN_LIMIT)
        )
        return list(result.scalars().all())

    async def _categories(self) -> list[Category]:
        result = await self.db.execute(
            select(Category).order_by(Category.name).limit(CATEGORY_LIMIT)
        )
        return list(result.scalars().all())

    async def _sales(self) -> list[SaleLine]:
        result = await self.db.execute(
            select(OrderItem.product_id, OrderItem.quantity, OrderItem.price, Order.created_at)
            .join(Order, OrderItem.order_id == Order.id)
            .where(Order.status != OrderStatus.CANCELLED.value)
            .order_by(Order.created_at.desc())
            .limit(SCAN_LIMIT)
        )
        return [SaleLine(*row) for row in result.all()]

