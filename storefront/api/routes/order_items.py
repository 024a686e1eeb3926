"""Order Item Routes — list and add line items; items are never edited or removed.

Invariants:
    - GET requires ?orderId=; an unknown order is 404 ORDER_NOT_FOUND
    - POST with an unknown order or product is 400 (ORDER_NOT_FOUND / PRODUCT_NOT_FOUND)
    - PUT and DELETE always answer 405 NOT_SUPPORTED without reading the request
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import request_body
from storefront.core.errors import InvalidInputError, NotSupportedError
from storefront.infrastructure.database import get_db
from storefront.schemas.order import OrderItemCreate, OrderItemResponse
from storefront.services.orders import OrdersService

router = APIRouter(prefix="/api/order-items", tags=["order-items"])


@router.get("")
async def list_order_items(
    order_id: str | None = Query(None, alias="orderId"),
    db: AsyncSession = Depends(get_db),
):
    if not order_id:
        raise InvalidInputError("Order ID is required", "MISSING_ORDER_ID", field="orderId")
    items = await OrdersService(db).get_order_items(order_id)
    return [OrderItemResponse.serialize(item) for item in items]


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_order_item(
    data: OrderItemCreate = request_body(OrderItemCreate),
    db: AsyncSession = Depends(get_db),
):
    created = await OrdersService(db).add_order_item(data.order_id, data.to_record())
    return OrderItemResponse.serialize(created)


@router.put("")
async def update_order_item():
    raise NotSupportedError(
        "Order items cannot be updated directly. Update the order instead.",
    )


@router.delete("")
async def delete_order_item():
    raise NotSupportedError(
        "Order items cannot be deleted directly. Update the order instead.",
    )
