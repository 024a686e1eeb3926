"""Admin Seed Route — fills an empty database with sample data (idempotent)."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import get_identity, require_admin
from storefront.core.repository_protocols import IdentityProvider
from storefront.infrastructure.database import get_db
from storefront.services.seed import seed_all

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/admin/seed", tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.post("")
async def seed_database(
    db: AsyncSession = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity),
):
    try:
        await seed_all(db, identity)
    except Exception as e:
        logger.error(f"Seeding failed: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": f"Failed to seed database: {e}", "success": False},
        )
    return {"message": "Database seeded successfully", "success": True}
