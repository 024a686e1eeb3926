"""Admin User Routes — account list, role statistics, creation, edits and removal.

Invariants:
    - GET precedence: stats=true, then ?id=, then the paged list
    - New accounts go through the same registration path as /api/auth/register
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import get_identity, request_body, require_admin
from storefront.core.errors import ResourceNotFoundError
from storefront.core.repository_protocols import IdentityProvider
from storefront.core.validate_fields import clamp_limit, require_id
from storefront.infrastructure.database import get_db
from storefront.schemas.auth import RegisterRequest, UserResponse, UserUpdate
from storefront.services.auth import AuthService
from storefront.services.users import UsersService, pagination

router = APIRouter(
    prefix="/api/admin/users", tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("")
async def get_users(
    id: str | None = None,
    stats: str | None = None,
    page: int | None = None,
    limit: int | None = None,
    role: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    service = UsersService(db)
    if stats == "true":
        return await service.stats()
    if id:
        user = await service.get_by_id(id)
        if user is None:
            raise ResourceNotFoundError("User", id)
        return UserResponse.serialize(user)

    page = max(page or 1, 1)
    limit = clamp_limit(limit, 10)
    users, total = await service.get_page(page, limit, role)
    return {
        "users": [UserResponse.serialize(u) for u in users],
        "pagination": pagination(total, page, limit),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    data: RegisterRequest = request_body(RegisterRequest),
    db: AsyncSession = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity),
):
    user = await AuthService(db, identity).register(**data.to_record())
    return UserResponse.serialize(user)


@router.put("")
async def update_user(
    id: str | None = None,
    data: UserUpdate = request_body(UserUpdate),
    db: AsyncSession = Depends(get_db),
):
    user_id = require_id(id, "User ID is required")
    user = await UsersService(db).update(user_id, data.updates())
    return UserResponse.serialize(user)


@router.delete("")
async def delete_user(id: str | None = None, db: AsyncSession = Depends(get_db)):
    user_id = require_id(id, "User ID is required")
    await UsersService(db).delete(user_id)
    return {"message": "User deleted successfully"}
