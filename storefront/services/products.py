"""Products Service — catalog reads with filters, plus CRUD.

Invariants:
    - low_stock keeps products with fewer than LOW_STOCK_BELOW units on hand
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.domain_types import SortDirection
from storefront.core.errors import ResourceNotFoundError
from storefront.core.validate_fields import parse_uuid
from storefront.models.product import Product

logger = logging.getLogger(__name__)

LOW_STOCK_BELOW = 10

_SORT_COLUMNS = {
    "createdAt": Product.created_at,
    "price": Product.price,
    "name": Product.name,
    "stockQuantity": Product.stock_quantity,
}


class ProductsService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, product_id: str) -> Product | None:
        key = parse_uuid(product_id)
        if key is None:
            return None
        return await self.db.get(Product, key)

    async def get_all(
        self,
        limit: int = 10,
        search: str | None = None,
        category: str | None = None,
        color: str | None = None,
        size: str | None = None,
        is_featured: bool | None = None,
        low_stock: bool = False,
        sort: str = "createdAt",
        order: str = SortDirection.DESC.value,
    ) -> tuple[list[Product], bool]:
        """search matches a name prefix; other filters are exact."""
        query = select(Product)
        if search:
            query = query.where(Product.name.startswith(search, autoescape=True))
        if category:
            query = query.where(Product.category == category)
        if color:
            query = query.where(Product.color == color)
        if size:
            query = query.where(Product.size == size)
        if is_featured is not None:
            query = query.where(Product.is_featured.is_(is_featured))
        if low_stock:
            query = query.where(Product.stock_quantity < LOW_STOCK_BELOW)

        column = _SORT_COLUMNS.get(sort, Product.created_at)
        query = query.order_by(
            column.asc() if order == SortDirection.ASC.value else column.desc()
        )
        result = await self.db.execute(query.limit(limit + 1))
        products = list(result.scalars().all())
        return products[:limit], len(products) > limit

    async def create(self, data: dict) -> Product:
        product = Product(**data)
        self.db.add(product)
        await self.db.commit()
        logger.info(f"Product created: {product.name}", extra={"resource": "product"})
        return product

    async def update(self, product_id: str, updates: dict) -> Product:
        product = await self._require(product_id)
        for key, value in updates.items():
            setattr(product, key, value)
        await self.db.commit()
        return product

    async def delete(self, product_id: str) -> Product:
        product = await self._require(product_id)
        await self.db.delete(product)
        await self.db.commit()
        return product

    async def _require(self, product_id: str) -> Product:
        product = await self.get_by_id(product_id)
        if product is None:
            raise ResourceNotFoundError("Product", product_id)
        return product
