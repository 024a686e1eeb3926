"""Admin Product Routes — catalog management with stock and featured filters.

Invariants:
    - lowStockOnly=true keeps products with fewer than 10 units; other filters still apply
    - PUT/DELETE take ?id=; a missing id is MISSING_ID, an unknown one PRODUCT_NOT_FOUND
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import request_body, require_admin
from storefront.core.validate_fields import clamp_limit, require_id
from storefront.infrastructure.database import get_db
from storefront.schemas.catalog import ProductCreate, ProductResponse, ProductUpdate
from storefront.services.products import ProductsService

router = APIRouter(
    prefix="/api/admin/products", tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("")
async def list_products(
    limit: int | None = None,
    category: str | None = None,
    search: str | None = None,
    featured: str | None = None,
    low_stock_only: str | None = Query(None, alias="lowStockOnly"),
    db: AsyncSession = Depends(get_db),
):
    products, _ = await ProductsService(db).get_all(
        limit=clamp_limit(limit, 10),
        category=category,
        search=search,
        is_featured=True if featured == "true" else None,
        low_stock=low_stock_only == "true",
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
    product_id = require_id(id, "Product ID is required")
    product = await ProductsService(db).update(product_id, data.updates())
    return ProductResponse.serialize(product)


@router.delete("")
async def delete_product(id: str | None = None, db: AsyncSession = Depends(get_db)):
    product_id = require_id(id, "Product ID is required")
    await ProductsService(db).delete(product_id)
    return {"message": "Product deleted successfully"}
