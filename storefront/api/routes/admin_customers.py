"""Admin Customer Routes — customer list with segments, profile view, detail edits."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import request_body, require_admin
from storefront.core.validate_fields import clamp_limit, require_id
from storefront.infrastructure.database import get_db
from storefront.schemas.customer import CustomerUpdate
from storefront.services.customers import CustomersService, parse_segment

router = APIRouter(
    prefix="/api/admin/customers", tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("")
async def get_customers(
    id: str | None = None,
    limit: int | None = None,
    offset: int | None = None,
    segment: str | None = None,
    search: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    service = CustomersService(db)
    if id:
        return await service.get_by_id(id)
    return await service.get_all(
        limit=clamp_limit(limit, 50),
        offset=max(offset or 0, 0),
        segment=parse_segment(segment),
        search=search,
    )


@router.put("")
async def update_customer(
    id: str | None = None,
    data: CustomerUpdate = request_body(CustomerUpdate),
    db: AsyncSession = Depends(get_db),
):
    customer_id = require_id(id, "Customer ID is required")
    return await CustomersService(db).update(customer_id, data.updates())
