"""Users Service — admin account listing, role statistics, profile edits and removal.

Invariants:
    - Account creation goes through AuthService.register (one hashing path)
    - Missing or non-UUID ids -> ResourceNotFoundError USER_NOT_FOUND (404)
    - page is 1-based; totalPages is 0 for an empty table
"""

import logging
import math

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.domain_types import UserRole
from storefront.core.errors import ResourceNotFoundError
from storefront.core.validate_fields import parse_uuid
from storefront.models.user import User

logger = logging.getLogger(__name__)


class UsersService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: str) -> User | None:
        key = parse_uuid(user_id)
        if key is None:
            return None
        return await self.db.get(User, key)

    async def require(self, user_id: str) -> User:
        user = await self.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundError("User", user_id)
        return user

    async def get_page(
        self, page: int = 1, limit: int = 10, role: str | None = None,
    ) -> tuple[list[User], int]:
        """Newest first. Returns the page and the total matching count."""
        query = select(User)
        count = select(func.count()).select_from(User)
        if role:
            query = query.where(User.role == role)
            count = count.where(User.role == role)
        total = (await self.db.execute(count)).scalar_one()
        result = await self.db.execute(
            query.order_by(User.created_at.desc()).offset((page - 1) * limit).limit(limit)
        )
        return list(result.scalars().all()), total

    async def stats(self) -> dict:
        result = await self.db.execute(
            select(User.role, func.count()).group_by(User.role)
        )
        per_role = dict(result.all())
        return {
            "totalUsers": sum(per_role.values()),
            "roleDistribution": [
                {"role": role.value, "count": per_role.get(role.value, 0)}
                for role in UserRole
            ],
        }

    async def update(self, user_id: str, updates: dict) -> User:
        user = await self.require(user_id)
        for key, value in updates.items():
            setattr(user, key, value)
        await self.db.commit()
        logger.info("User profile updated", extra={"user_id": str(user.id)})
        return user

    async def delete(self, user_id: str) -> User:
        user = await self.require(user_id)
        await self.db.delete(user)
        await self.db.commit()
        logger.info("User deleted", extra={"user_id": user_id})
        return user


def pagination(total: int, page: int, limit: int) -> dict:
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "totalPages": math.ceil(total / limit) if limit else 0,
    }
