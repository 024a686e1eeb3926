"""Admin Analytics Routes — overview, dashboard, order and product reports.

Invariants:
    - Read-only: POST/PUT/DELETE on any report answer 405 NOT_SUPPORTED
    - Bad query parameters are 400s raised before any data is read
"""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import require_admin
from storefront.core.errors import NotSupportedError
from storefront.infrastructure.database import get_db
from storefront.services.analytics import AnalyticsService

router = APIRouter(
    prefix="/api/admin/analytics", tags=["admin"],
    dependencies=[Depends(require_admin)],
)

WRITE_METHODS = ["POST", "PUT", "DELETE"]


@router.get("")
async def get_overview(
    date_range: str | None = Query(None, alias="dateRange"),
    from_date: str | None = Query(None, alias="from"),
    to_date: str | None = Query(None, alias="to"),
    db: AsyncSession = Depends(get_db),
):
    return await AnalyticsService(db).overview(date_range, from_date, to_date)


@router.get("/dashboard")
async def get_dashboard(db: AsyncSession = Depends(get_db)):
    return await AnalyticsService(db).dashboard()


@router.get("/orders")
async def get_order_analytics(
    period: str | None = None,
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    status_filter: str | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    return await AnalyticsService(db).orders(period, start_date, end_date, status_filter)


@router.get("/products")
async def get_product_analytics(db: AsyncSession = Depends(get_db)):
    return await AnalyticsService(db).products()


@router.api_route("", methods=WRITE_METHODS)
@router.api_route("/dashboard", methods=WRITE_METHODS)
@router.api_route("/orders", methods=WRITE_METHODS)
@router.api_route("/products", methods=WRITE_METHODS)
async def reject_write(request: Request):
    raise NotSupportedError(f"{request.method} method not supported for analytics endpoint")
