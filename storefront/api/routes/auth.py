"""Auth Routes — login, registration, session introspection, logout, password reset.

Invariants:
    - Login sets the HttpOnly session cookie (max-age = token TTL); logout clears it
    - Token lookup for /me: Authorization bearer header first, then the cookie
    - forgot-password and reset-password answer with one fixed body once the
      request itself is well-formed, so callers cannot learn whether an
      account or a reset code exists
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import (
    get_identity,
    get_notifier,
    request_body,
    session_token_from,
)
from storefront.config import Settings, get_settings
from storefront.core.errors import AuthenticationError, InvalidTokenError
from storefront.core.repository_protocols import IdentityProvider, PasswordResetNotifier
from storefront.core.validate_auth import require_logout_token
from storefront.infrastructure.database import get_db
from storefront.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    PasswordResetRequest,
    RegisterRequest,
    TokenInfo,
    UserResponse,
)
from storefront.services.auth import AuthService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])

FORGOT_PASSWORD_MESSAGE = (
    "If an account with this email exists, a password reset link has been "
    "sent to your email address."
)
RESET_PASSWORD_MESSAGE = (
    "If the reset link was valid, your password has been reset. "
    "You can now sign in with your new password."
)


@router.post("/login")
async def login(
    response: Response,
    data: LoginRequest = request_body(LoginRequest),
    db: AsyncSession = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity),
    settings: Settings = Depends(get_settings),
):
    user, token = await AuthService(db, identity).login(data.email, data.password)
    response.set_cookie(
        settings.session_cookie_name, token,
        max_age=identity.token_ttl_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )
    return {
        "user": UserResponse.serialize(user),
        "sessionToken": token,
        "expiresIn": str(identity.token_ttl_seconds),
    }


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest = request_body(RegisterRequest),
    db: AsyncSession = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity),
):
    user = await AuthService(db, identity).register(**data.to_record())
    return UserResponse.serialize(user)


@router.get("/me")
async def me(
    request: Request,
    db: AsyncSession = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity),
    settings: Settings = Depends(get_settings),
):
    token = session_token_from(request, settings)
    if token is None:
        raise AuthenticationError("Authorization token is required", "MISSING_TOKEN")
    user, claims = await AuthService(db, identity).verify_id_token(token)
    return {
        "user": UserResponse.serialize(user),
        "tokenInfo": TokenInfo.serialize(claims),
    }


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    identity: IdentityProvider = Depends(get_identity),
    settings: Settings = Depends(get_settings),
):
    token = require_logout_token(
        request.headers.get("Authorization"),
        request.cookies.get(settings.session_cookie_name),
    )
    try:
        claims = identity.verify_token(token)
    except InvalidTokenError:
        raise InvalidTokenError("Invalid or expired session token")
    response.delete_cookie(settings.session_cookie_name, path="/")
    logger.info("User signed out", extra={"user_id": claims["uid"]})
    return {"message": "Successfully logged out", "success": True}


@router.post("/forgot-password")
async def forgot_password(
    data: ForgotPasswordRequest = request_body(ForgotPasswordRequest),
    db: AsyncSession = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity),
    notifier: PasswordResetNotifier = Depends(get_notifier),
    settings: Settings = Depends(get_settings),
):
    service = AuthService(db, identity, notifier, settings.password_reset_ttl_minutes)
    try:
        await service.send_password_reset(data.email)
    except Exception as e:
        logger.error(f"Password reset request failed: {e}", exc_info=True)
    return {"message": FORGOT_PASSWORD_MESSAGE}


@router.post("/reset-password")
async def reset_password(
    data: PasswordResetRequest = request_body(PasswordResetRequest),
    db: AsyncSession = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity),
):
    try:
        await AuthService(db, identity).reset_password(data.oob_code, data.new_password)
    except Exception as e:
        logger.error(f"Password reset failed: {e}", exc_info=True)
    return {"message": RESET_PASSWORD_MESSAGE}
