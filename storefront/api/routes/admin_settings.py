"""Admin Settings Routes — read and partially update the store configuration."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import request_body, require_admin
from storefront.infrastructure.database import get_db
from storefront.schemas.settings import StoreSettingsUpdate
from storefront.services.store_settings import StoreSettingsService

router = APIRouter(
    prefix="/api/admin/settings", tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("")
async def read_store_settings(db: AsyncSession = Depends(get_db)):
    return await StoreSettingsService(db).get()


@router.put("")
async def update_store_settings(
    data: StoreSettingsUpdate = request_body(StoreSettingsUpdate),
    db: AsyncSession = Depends(get_db),
):
    return await StoreSettingsService(db).update(data.updates())
