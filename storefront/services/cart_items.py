"""Cart Items Service — server-side cart lines keyed by the client's session id.

Invariants:
    - A cart line always points at an existing product when written
      (ReferenceNotFoundError PRODUCT_NOT_FOUND, 400)
    - An unknown cart line id -> ResourceNotFoundError CART_ITEM_NOT_FOUND (404)
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.errors import ReferenceNotFoundError, ResourceNotFoundError
from storefront.core.validate_fields import parse_uuid
from storefront.models.cart_item import CartItem
from storefront.models.product import Product


class CartItemsService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, item_id: str) -> CartItem | None:
        key = parse_uuid(item_id)
        if key is None:
            return None
        return await self.db.get(CartItem, key)

    async def get_all(
        self,
        limit: int = 10,
        session_id: str | None = None,
        product_id: str | None = None,
    ) -> list[CartItem]:
        query = select(CartItem)
        if session_id:
            query = query.where(CartItem.session_id == session_id)
        if product_id:
            query = query.where(CartItem.product_id == product_id)
        result = await self.db.execute(
            query.order_by(CartItem.created_at.desc()).limit(limit)
        )
        return list(result.scalars().all())

    async def create(self, data: dict) -> CartItem:
        await self._require_product(data["product_id"])
        item = CartItem(**data)
        self.db.add(item)
        await self.db.commit()
        return item

    async def update(self, item_id: str, updates: dict) -> CartItem:
        item = await self._require(item_id)
        if "product_id" in updates:
            await self._require_product(updates["product_id"])
        for key, value in updates.items():
            setattr(item, key, value)
        await self.db.commit()
        return item

    async def delete(self, item_id: str) -> CartItem:
        item = await self._require(item_id)
        await self.db.delete(item)
        await self.db.commit()
        return item

    async def _require(self, item_id: str) -> CartItem:
        item = await self.get_by_id(item_id)
        if item is None:
            raise ResourceNotFoundError("Cart item", item_id)
        return item

    async def _require_product(self, product_id: str) -> None:
        key = parse_uuid(product_id)
        if key is None or await self.db.get(Product, key) is None:
            raise ReferenceNotFoundError("Product", product_id)
