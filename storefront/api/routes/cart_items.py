"""Cart Item Routes — server-side cart lines for a client session id."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import request_body
from storefront.core.errors import ResourceNotFoundError
from storefront.core.validate_fields import clamp_limit, require_query_id
from storefront.infrastructure.database import get_db
from storefront.schemas.catalog import CartItemCreate, CartItemResponse, CartItemUpdate
from storefront.services.cart_items import CartItemsService

router = APIRouter(prefix="/api/cart-items", tags=["cart"])


@router.get("")
async def get_cart_items(
    id: str | None = None,
    session_id: str | None = Query(None, alias="sessionId"),
    product_id: str | None = Query(None, alias="productId"),
    limit: int | None = None,
    db: AsyncSession = Depends(get_db),
):
    service = CartItemsService(db)
    if id:
        item = await service.get_by_id(id)
        if item is None:
            raise ResourceNotFoundError("Cart item", id)
        return CartItemResponse.serialize(item)

    items = await service.get_all(
        limit=clamp_limit(limit, 10), session_id=session_id, product_id=product_id,
    )
    return [CartItemResponse.serialize(item) for item in items]


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_cart_item(
    data: CartItemCreate = request_body(CartItemCreate),
    db: AsyncSession = Depends(get_db),
):
    item = await CartItemsService(db).create(data.to_record())
    return CartItemResponse.serialize(item)


@router.put("")
async def update_cart_item(
    id: str | None = None,
    data: CartItemUpdate = request_body(CartItemUpdate),
    db: AsyncSession = Depends(get_db),
):
    item_id = require_query_id(id)
    item = await CartItemsService(db).update(item_id, data.updates())
    return CartItemResponse.serialize(item)


@router.delete("")
async def delete_cart_item(
    id: str | None = None, db: AsyncSession = Depends(get_db),
):
    item_id = require_query_id(id)
    deleted = await CartItemsService(db).delete(item_id)
    return {
        "message": "Cart item deleted successfully",
        "deletedItem": CartItemResponse.serialize(deleted),
    }
