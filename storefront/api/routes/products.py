"""Product Routes — catalog listing with filters, and CRUD by ?id=."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import request_body
from storefront.core.errors import ResourceNotFoundError
from storefront.core.validate_fields import clamp_limit, require_query_id
from storefront.infrastructure.database import get_db
from storefront.schemas.catalog import ProductCreate, ProductResponse, ProductUpdate
from storefront.services.products import ProductsService

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("")
async def get_products(
    id: str | None = None,
    limit: int | None = None,
    search: str | None = None,
    category: str | None = None,
    color: str | None = None,
    size: str | None = None,
    is_featured: str | None = Query(None, alias="isFeatured"),
    sort: str = "createdAt",
    order: str = "desc",
    db: AsyncSession = Depends(get_db),
):
    service = ProductsService(db)
    if id:
        product = await service.get_by_id(id)
        if product is None:
            raise ResourceNotFoundError("Product", id)
        return ProductResponse.serialize(product)

    products, _ = await service.get_all(
        limit=clamp_limit(limit, 10),
        search=search,
        category=category,
        color=color,
        size=size,
        is_featured=(is_featured == "true") if is_featured else None,
        sort=sort,
        order=order,
    )
    return [ProductResponse.serialize(p) for p in products]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    data: ProductCreate = request_body(ProductCreate),
    db: AsyncSession = Depends(get_db),
):
    product = await ProductsService(db).create(data.to_record())
    return ProductResponse.serialize(product)


@router.put("")
async def update_product(
    id: str | None = None,
    data: ProductUpdate = request_body(ProductUpdate),
    db: AsyncSession = Depends(get_db),
):
    product_id = require_query_id(id)
    product = await ProductsService(db).update(product_id, data.updates())
    return ProductResponse.serialize(product)


@router.delete("")
async def delete_product(
    id: str | None = None, db: AsyncSession = Depends(get_db),
):
    product_id = require_query_id(id)
    deleted = await ProductsService(db).delete(product_id)
    return {
        "message": "Product deleted successfully",
        "deletedProduct": ProductResponse.serialize(deleted),
    }
