"""Admin Gate Middleware — redirects page requests under /admin by session role.

Invariants:
    - Only gated paths (core.access_gate.is_gated_path) are inspected
    - Redirects are 307; a failed verification also deletes the session cookie
    - Any typed verification failure (bad token, unknown user) counts as failed

Design Decisions:
    - The decision itself is pure (core/access_gate.py); this class only does IO
    - Reads identity and db_manager from app.state at request time, so the
      handles built in the lifespan (or swapped in by tests) are used
"""

import logging

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from storefront.core.access_gate import (
    GateAction,
    decide_admin_access,
    is_gated_path,
    select_session_token,
)
from storefront.core.errors import StorefrontError
from storefront.services.auth import AuthService

logger = logging.getLogger(__name__)


class AdminGateMiddleware(BaseHTTPMiddleware):

    def __init__(self, app, cookie_name: str = "session_token"):
        super().__init__(app)
        self.cookie_name = cookie_name

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if not is_gated_path(path):
            return await call_next(request)

        token = select_session_token(
            request.headers.get("Authorization"),
            request.cookies.get(self.cookie_name),
        )
        role = await self._verified_role(request, token) if token else None
        decision = decide_admin_access(path, token is not None, role)
        if decision.action == GateAction.PROCEED:
            return await call_next(request)

        logger.info(
            f"Admin gate: {decision.action.value}", extra={"path": path},
        )
        response = RedirectResponse(decision.location, status_code=307)
        if decision.clear_session_cookie:
            response.delete_cookie(self.cookie_name, path="/")
        return response

    async def _verified_role(self, request: Request, token: str) -> str | None:
        state = request.app.state
        try:
            async with state.db_manager.session() as db:
                user, _ = await AuthService(db, state.identity).verify_id_token(token)
        except StorefrontError as e:
            logger.info(
                f"Admin gate token rejected: {e.message}",
                extra={"error_code": e.code, "path": request.url.path},
            )
            return None
        return user.role
