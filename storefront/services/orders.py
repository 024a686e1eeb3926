"""Orders Service — order aggregate reads and writes, line items, bulk status updates.

Invariants:
    - Ids that are not UUIDs behave exactly like ids that do not exist
    - An order and the items submitted with it are written in one commit
    - add_order_item: missing order/product -> ReferenceNotFoundError (400);
      get_order_items on a missing order -> ResourceNotFoundError (404)
    - bulk_update_status commits each order on its own; a failure rolls back
      only that order and never stops the loop

Design Decisions:
    - Items are appended through Order.items so the loaded collection stays
      consistent inside the session (lazy loads are not allowed under asyncio)
    - List queries fetch limit + 1 rows to report has_more without a COUNT
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.bulk_update import BulkUpdateOutcome
from storefront.core.domain_types import OrderSortField, OrderStatus, SortDirection
from storefront.core.errors import (
    ReferenceNotFoundError,
    ResourceNotFoundError,
    StorefrontError,
)
from storefront.core.validate_fields import parse_uuid
from storefront.models.order import Order
from storefront.models.order_item import OrderItem
from storefront.models.product import Product
from storefront.schemas.order import OrderResponse

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    OrderSortField.CREATED_AT: Order.created_at,
    OrderSortField.TOTAL_AMOUNT: Order.total_amount,
    OrderSortField.CUSTOMER_NAME: Order.customer_name,
    OrderSortField.STATUS: Order.status,
}


class OrdersService:
    """Order reads and writes against one request-scoped session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, order_id: str) -> Order | None:
        key = parse_uuid(order_id)
        if key is None:
            return None
        return await self.db.get(Order, key)

    async def require(self, order_id: str) -> Order:
        order = await self.get_by_id(order_id)
        if order is None:
            raise ResourceNotFoundError("Order", order_id)
        return order

    async def get_all(
        self,
        limit: int = 10,
        search: str | None = None,
        status: str | None = None,
        sort: str = OrderSortField.CREATED_AT.value,
        order: str = SortDirection.DESC.value,
    ) -> tuple[list[Order], bool]:
        """Newest first by default. Unknown sort keys fall back to createdAt."""
        query = select(Order)
        if search:
            query = query.where(Order.customer_name.startswith(search, autoescape=True))
        if status:
            query = query.where(Order.status == status)

        try:
            column = _SORT_COLUMNS[OrderSortField(sort)]
        except ValueError:
            column = Order.created_at
        query = query.order_by(
            column.asc() if order == SortDirection.ASC.value else column.desc()
        )

        result = await self.db.execute(query.limit(limit + 1))
        orders = list(result.scalars().all())
        return orders[:limit], len(orders) > limit

    async def create(self, data: dict) -> Order:
        items = [OrderItem(**item) for item in data.get("items", [])]
        fields = {key: value for key, value in data.items() if key != "items"}
        order = Order(**fields, items=items)
        self.db.add(order)
        await self.db.commit()
        logger.info(
            f"Order created with {len(items)} item(s)",
            extra={"order_id": str(order.id)},
        )
        return order

    async def update(self, order_id: str, updates: dict) -> Order:
        order = await self.require(order_id)
        for key, value in updates.items():
            setattr(order, key, value)
        await self.db.commit()
        return order

    async def update_status(
        self, order_id: str, status: OrderStatus | str, notes: str | None = None,
    ) -> Order:
        order = await self.require(order_id)
        order.status = OrderStatus(status).value
        if notes is not None:
            order.notes = notes
        await self.db.commit()
        logger.info(
            f"Order status set to {order.status}",
            extra={"order_id": str(order.id)},
        )
        return order

    async def delete(self, order_id: str) -> Order:
        order = await self.require(order_id)
        await self.db.delete(order)
        await self.db.commit()
        logger.info("Order deleted", extra={"order_id": order_id})
        return order

    async def get_order_items(self, order_id: str) -> list[OrderItem]:
        order = await self.require(order_id)
        return list(order.items)

    async def add_order_item(self, order_id: str, item: dict) -> OrderItem:
        """Attach a line item to an existing order; both references must exist."""
        order = await self.get_by_id(order_id)
        if order is None:
            raise ReferenceNotFoundError("Order", order_id)
        product_key = parse_uuid(item["product_id"])
        if product_key is None or await self.db.get(Product, product_key) is None:
            raise ReferenceNotFoundError("Product", item["product_id"])

        order_item = OrderItem(**item)
        order.items.append(order_item)
        await self.db.commit()
        return order_item

    async def bulk_update_status(
        self, order_ids: list[str], status: OrderStatus, notes: str | None = None,
    ) -> BulkUpdateOutcome:
        outcome = BulkUpdateOutcome()
        for order_id in order_ids:
            try:
                order = await self.update_status(order_id, status, notes)
            except StorefrontError as e:
                await self.db.rollback()
                outcome.record_failure(order_id, e.message)
                continue
            except Exception as e:
                await self.db.rollback()
                logger.error(
                    f"Bulk update failed for order: {e}",
                    extra={"order_id": order_id}, exc_info=True,
                )
                outcome.record_failure(order_id, str(e))
                continue
            outcome.record_success(order_id, OrderResponse.serialize(order))

        logger.info(
            "Bulk status update finished",
            extra={
                "success_count": outcome.success_count,
                "error_count": outcome.error_count,
            },
        )
        return outcome
