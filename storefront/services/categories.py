"""Categories Service — CRUD with slug uniqueness and the products-in-use guard.

Invariants:
    - No two categories share a slug (DuplicateSlugError before any write)
    - A category referenced by name from any product cannot be deleted
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.errors import (
    BusinessRuleError,
    DuplicateSlugError,
    ResourceNotFoundError,
)
from storefront.core.validate_fields import parse_uuid
from storefront.models.category import Category
from storefront.models.product import Product

logger = logging.getLogger(__name__)


class CategoriesService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, category_id: str) -> Category | None:
        key = parse_uuid(category_id)
        if key is None:
            return None
        return await self.db.get(Category, key)

    async def get_by_slug(self, slug: str) -> Category | None:
        result = await self.db.execute(
            select(Category).where(Category.slug == slug)
        )
        return result.scalar_one_or_none()

    async def get_all(self, limit: int = 10) -> tuple[list[Category], bool]:
        result = await self.db.execute(
            select(Category).order_by(Category.name.asc()).limit(limit + 1)
        )
        categories = list(result.scalars().all())
        return categories[:limit], len(categories) > limit

    async def create(self, data: dict) -> Category:
        if await self.get_by_slug(data["slug"]) is not None:
            raise DuplicateSlugError(data["slug"])
        category = Category(**data)
        self.db.add(category)
        await self.db.commit()
        logger.info(
            f"Category created: {category.slug}", extra={"resource": "category"},
        )
        return category

    async def update(self, category_id: str, updates: dict) -> Category:
        category = await self._require(category_id)
        slug = updates.get("slug")
        if slug and slug != category.slug:
            if await self.get_by_slug(slug) is not None:
                raise DuplicateSlugError(slug)
        for key, value in updates.items():
            setattr(category, key, value)
        await self.db.commit()
        return category

    async def delete(self, category_id: str) -> Category:
        category = await self._require(category_id)
        in_use = await self.db.execute(
            select(Product.id).where(Product.category == category.name).limit(1)
        )
        if in_use.first() is not None:
            raise BusinessRuleError(
                "Cannot delete category that has products. "
                "Please remove or reassign products first.",
                "CATEGORY_HAS_PRODUCTS",
            )
        await self.db.delete(category)
        await self.db.commit()
        logger.info(
            f"Category deleted: {category.slug}", extra={"resource": "category"},
        )
        return category

    async def _require(self, category_id: str) -> Category:
        category = await self.get_by_id(category_id)
        if category is None:
            raise ResourceNotFoundError("Category", category_id)
        return category
