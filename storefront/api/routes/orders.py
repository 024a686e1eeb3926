"""Order Routes — storefront order CRUD addressed by ?id= query parameter."""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import request_body
from storefront.core.errors import ResourceNotFoundError
from storefront.core.validate_fields import clamp_limit, require_query_id
from storefront.infrastructure.database import get_db
from storefront.schemas.order import (
    OrderCreate,
    OrderDetailResponse,
    OrderResponse,
    OrderUpdate,
)
from storefront.services.orders import OrdersService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("")
async def get_orders(
    id: str | None = None,
    limit: int | None = None,
    search: str | None = None,
    status_filter: str | None = Query(None, alias="status"),
    sort: str = "createdAt",
    order: str = "desc",
    db: AsyncSession = Depends(get_db),
):
    service = OrdersService(db)
    if id:
        found = await service.get_by_id(id)
        if found is None:
            raise ResourceNotFoundError("Order", id)
        return OrderDetailResponse.serialize(found)

    orders, _ = await service.get_all(
        limit=clamp_limit(limit, 10), search=search, status=status_filter,
        sort=sort, order=order,
    )
    return [OrderResponse.serialize(o) for o in orders]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_order(
    data: OrderCreate = request_body(OrderCreate),
    db: AsyncSession = Depends(get_db),
):
    created = await OrdersService(db).create(data.to_record())
    return OrderDetailResponse.serialize(created)


@router.put("")
async def update_order(
    id: str | None = None,
    data: OrderUpdate = request_body(OrderUpdate),
    db: AsyncSession = Depends(get_db),
):
    order_id = require_query_id(id)
    updated = await OrdersService(db).update(order_id, data.updates())
    return OrderResponse.serialize(updated)


@router.delete("")
async def delete_order(
    id: str | None = None, db: AsyncSession = Depends(get_db),
):
    order_id = require_query_id(id)
    deleted = await OrdersService(db).delete(order_id)
    return {
        "message": "Order deleted successfully",
        "deletedOrder": OrderDetailResponse.serialize(deleted),
    }
