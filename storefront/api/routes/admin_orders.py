"""Admin Order Routes — listing, status changes, bulk update, single-order view.

Invariants:
    - /bulk-update is registered before /{order_id} so it is never captured as an id
    - Bulk update always answers 200; per-order failures are in the body
    - Every route passes through require_admin (a no-op unless enabled)
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import request_body, require_admin
from storefront.core.validate_fields import clamp_limit, require_id
from storefront.infrastructure.database import get_db
from storefront.schemas.order import (
    BulkStatusChange,
    OrderDetailResponse,
    OrderResponse,
    StatusChange,
)
from storefront.services.orders import OrdersService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/admin/orders", tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("")
async def list_orders(
    limit: int | None = None,
    status_filter: str | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    orders, has_more = await OrdersService(db).get_all(
        limit=clamp_limit(limit, 10), status=status_filter,
    )
    return {
        "orders": [OrderResponse.serialize(o) for o in orders],
        "total": len(orders),
        "hasMore": has_more,
    }


@router.put("")
async def update_order_status_by_query(
    id: str | None = None,
    data: StatusChange = request_body(StatusChange),
    db: AsyncSession = Depends(get_db),
):
    order_id = require_id(id, "Order ID is required")
    updated = await OrdersService(db).update_status(order_id, data.status, data.notes)
    return OrderResponse.serialize(updated)


@router.put("/bulk-update")
async def bulk_update_orders(
    data: BulkStatusChange = request_body(BulkStatusChange),
    db: AsyncSession = Depends(get_db),
):
    outcome = await OrdersService(db).bulk_update_status(
        data.order_ids, data.status, data.notes,
    )
    return outcome.to_response()


@router.get("/{order_id}")
async def get_order(order_id: str, db: AsyncSession = Depends(get_db)):
    order = await OrdersService(db).require(order_id)
    return OrderDetailResponse.serialize(order)


@router.put("/{order_id}")
async def update_order_status(
    order_id: str,
    data: StatusChange = request_body(StatusChange),
    db: AsyncSession = Depends(get_db),
):
    updated = await OrdersService(db).update_status(order_id, data.status, data.notes)
    return OrderResponse.serialize(updated)


@router.delete("/{order_id}")
async def delete_order(order_id: str, db: AsyncSession = Depends(get_db)):
    await OrdersService(db).delete(order_id)
    return {"message": "Order deleted successfully"}
