"""Category Routes — lookup by id or slug, listing, and CRUD by ?id=."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import request_body
from storefront.core.errors import ResourceNotFoundError
from storefront.core.validate_fields import clamp_limit, require_query_id
from storefront.infrastructure.database import get_db
from storefront.schemas.catalog import CategoryCreate, CategoryResponse, CategoryUpdate
from storefront.services.categories import CategoriesService

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("")
async def get_categories(
    id: str | None = None,
    slug: str | None = None,
    limit: int | None = None,
    db: AsyncSession = Depends(get_db),
):
    service = CategoriesService(db)
    if id or slug:
        category = await service.get_by_id(id) if id else await service.get_by_slug(slug)
        if category is None:
            raise ResourceNotFoundError("Category", id or slug)
        return CategoryResponse.serialize(category)

    categories, _ = await service.get_all(limit=clamp_limit(limit, 10))
    return [CategoryResponse.serialize(c) for c in categories]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate = request_body(CategoryCreate),
    db: AsyncSession = Depends(get_db),
):
    category = await CategoriesService(db).create(data.model_dump())
    return CategoryResponse.serialize(category)


@router.put("")
async def update_category(
    id: str | None = None,
    data: CategoryUpdate = request_body(CategoryUpdate),
    db: AsyncSession = Depends(get_db),
):
    category_id = require_query_id(id)
    category = await CategoriesService(db).update(category_id, data.updates())
    return CategoryResponse.serialize(category)


@router.delete("")
async def delete_category(
    id: str | None = None, db: AsyncSession = Depends(get_db),
):
    category_id = require_query_id(id)
    deleted = await CategoriesService(db).delete(category_id)
    return {
        "message": "Category deleted successfully",
        "deletedCategory": CategoryResponse.serialize(deleted),
    }
