"""Auth Service — registration, sign-in, token verification, password reset.

Invariants:
    - Emails are compared lower-cased; the caller normalizes them
    - login never says which half of the credentials was wrong
    - verify_id_token: bad token -> InvalidTokenError (401); valid token whose
      user no longer exists -> ResourceNotFoundError PROFILE_NOT_FOUND (404)
    - A reset code works once, and only before it expires
    - send_password_reset and reset_password reveal nothing about whether an
      account or a code exists: both return quietly in every case

Design Decisions:
    - Password hashing and token signing live behind IdentityProvider, so this
      service only sequences lookups and writes
"""

import logging
import secrets
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.errors import (
    AuthenticationError,
    ConflictError,
    ResourceNotFoundError,
)
from storefront.core.repository_protocols import (
    IdentityProvider,
    PasswordResetNotifier,
    TokenClaims,
)
from storefront.core.timestamps import as_utc, utcnow
from storefront.core.validate_fields import parse_uuid
from storefront.models.password_reset_code import PasswordResetCode
from storefront.models.user import User

logger = logging.getLogger(__name__)


class AuthService:
    """Account operations backed by the users table and an identity provider."""

    def __init__(
        self,
        db: AsyncSession,
        identity: IdentityProvider,
        notifier: PasswordResetNotifier | None = None,
        reset_ttl_minutes: int = 60,
    ):
        self.db = db
        self.identity = identity
        self.notifier = notifier
        self.reset_ttl = timedelta(minutes=reset_ttl_minutes)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def register(
        self, email: str, password: str, name: str, role: str = "user",
    ) -> User:
        if await self.get_by_email(email) is not None:
            raise ConflictError("Email already exists", "EMAIL_EXISTS")
        user = User(
            email=email,
            name=name,
            role=role,
            password_hash=self.identity.hash_password(password),
        )
        self.db.add(user)
        await self.db.commit()
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """Returns the user and a freshly issued session token."""
        user = await self.get_by_email(email)
        if user is None or not self.identity.check_password(password, user.password_hash):
            raise AuthenticationError("Invalid credentials", "INVALID_CREDENTIALS")
        token = self.identity.issue_token(str(user.id), user.email, user.role)
        logger.info("User signed in", extra={"user_id": str(user.id)})
        return user, token

    async def verify_id_token(self, token: str) -> tuple[User, TokenClaims]:
        claims = self.identity.verify_token(token)
        key = parse_uuid(claims["uid"])
        user = await self.db.get(User, key) if key is not None else None
        if user is None:
            raise ResourceNotFoundError(
                "User profile", claims["uid"], code="PROFILE_NOT_FOUND",
            )
        return user, claims

    async def send_password_reset(self, email: str) -> None:
        user = await self.get_by_email(email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return

        reset = PasswordResetCode(
            user_id=user.id,
            code=secrets.token_urlsafe(32),
            expires_at=utcnow() + self.reset_ttl,
        )
        self.db.add(reset)
        await self.db.commit()
        if self.notifier is not None:
            await self.notifier.send_reset_code(user.email, reset.code)

    async def reset_password(self, code: str, new_password: str) -> bool:
        """True when the code was valid and the password changed."""
        result = await self.db.execute(
            select(PasswordResetCode).where(PasswordResetCode.code == code)
        )
        reset = result.scalar_one_or_none()
        now = utcnow()
        if reset is None or reset.used_at is not None or as_utc(reset.expires_at) <= now:
            logger.info("Password reset attempted with unusable code")
            return False

        user = await self.db.get(User, reset.user_id)
        if user is None:
            return False
        user.password_hash = self.identity.hash_password(new_password)
        reset.used_at = now
        await self.db.commit()
        logger.info("Password reset completed", extra={"user_id": str(user.id)})
        return True
