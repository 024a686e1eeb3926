"""Request Dependencies — process-wide handles from app.state, admin API guard.

Invariants:
    - Handles (identity provider, ledger, notifier) are created once in the
      lifespan; dependencies only read them from app.state
    - require_admin is a no-op unless ADMIN_API_REQUIRES_AUTH is enabled
    - Token lookup order: Authorization bearer header, then session cookie
    - Request bodies go through request_body(Model); an absent body is {}
"""

from typing import Any

from fastapi import Body, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config import Settings, get_settings
from storefront.core.access_gate import select_session_token
from storefront.core.domain_types import UserRole
from storefront.core.errors import (
    AuthenticationError,
    InvalidTokenError,
    PermissionDeniedError,
    ResourceNotFoundError,
)
from storefront.core.repository_protocols import (
    IdentityProvider,
    PasswordResetNotifier,
    PaymentLedger,
)
from storefront.infrastructure.database import get_db
from storefront.schemas.common import RequestModel
from storefront.services.auth import AuthService


def _state_handle(request: Request, name: str):
    handle = getattr(request.app.state, name, None)
    if handle is None:
        raise RuntimeError(f"{name} not initialized")
    return handle


def get_identity(request: Request) -> IdentityProvider:
    return _state_handle(request, "identity")


def get_ledger(request: Request) -> PaymentLedger:
    return _state_handle(request, "ledger")


def get_notifier(request: Request) -> PasswordResetNotifier:
    return _state_handle(request, "notifier")


def session_token_from(request: Request, settings: Settings) -> str | None:
    return select_session_token(
        request.headers.get("Authorization"),
        request.cookies.get(settings.session_cookie_name),
    )


async def require_admin(
    request: Request,
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity),
) -> None:
    """Guard for /api/admin routes when ADMIN_API_REQUIRES_AUTH is on."""
    if not settings.admin_api_requires_auth:
        return
    token = session_token_from(request, settings)
    if token is None:
        raise AuthenticationError("Authorization token required", "MISSING_TOKEN")
    try:
        user, _ = await AuthService(db, identity).verify_id_token(token)
    except ResourceNotFoundError:
        raise InvalidTokenError()
    if user.role != UserRole.ADMIN.value:
        raise PermissionDeniedError()


def request_body(model: type[RequestModel]):
    """Depends() that validates the JSON body with model.parse.

    The body is optional at the HTTP layer so an empty request reaches the
    model and fails with the model's own missing-field code.
    """
    async def parse(body: Any = Body(None)):
        return model.parse(body)

    return Depends(parse)
