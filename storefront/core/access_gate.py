"""Admin Access Gate — pure decision for page requests under /admin.

Invariants:
    - Only paths starting with /admin are gated; /admin/login is always open
    - Token lookup order: Authorization bearer header, then session cookie
    - No token                         -> redirect /login?redirect=<path>
    - Token failed verification        -> same redirect, and the cookie is cleared
    - Verified, role != "admin"        -> redirect /
    - Verified admin                   -> proceed

Design Decisions:
    - Decision is pure (inputs: path, token presence, verified role) so the
      middleware only performs the IO (token verification, user lookup)
"""

from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlencode

from storefront.core.domain_types import UserRole
from storefront.core.validate_auth import extract_bearer_token

ADMIN_PREFIX = "/admin"
ADMIN_LOGIN_PATH = "/admin/login"
LOGIN_PATH = "/login"
HOME_PATH = "/"


class GateAction(str, Enum):
    PROCEED = "proceed"
    REDIRECT_LOGIN = "redirect_login"
    REDIRECT_HOME = "redirect_home"


@dataclass(frozen=True)
class GateDecision:
    action: GateAction
    location: str | None = None
    clear_session_cookie: bool = False


def is_gated_path(path: str) -> bool:
    """/admin and everything below it, except the admin login page."""
    if path != ADMIN_PREFIX and not path.startswith(ADMIN_PREFIX + "/"):
        return False
    return path.rstrip("/") != ADMIN_LOGIN_PATH


def select_session_token(
    authorization: str | None, cookie_token: str | None,
) -> str | None:
    """Bearer header wins over the cookie."""
    token = extract_bearer_token(authorization)
    if token:
        return token
    if cookie_token and cookie_token.strip():
        return cookie_token.strip()
    return None


def login_redirect_location(path: str) -> str:
    """'/admin/dashboard' -> '/login?redirect=%2Fadmin%2Fdashboard'."""
    return f"{LOGIN_PATH}?{urlencode({'redirect': path})}"


def decide_admin_access(
    path: str, has_token: bool, verified_role: str | None,
) -> GateDecision:
    """verified_role is None when verification failed (or was not attempted)."""
    if not has_token:
        return GateDecision(GateAction.REDIRECT_LOGIN, login_redirect_location(path))
    if verified_role is None:
        return GateDecision(
            GateAction.REDIRECT_LOGIN, login_redirect_location(path),
            clear_session_cookie=True,
        )
    if verified_role != UserRole.ADMIN.value:
        return GateDecision(GateAction.REDIRECT_HOME, HOME_PATH)
    return GateDecision(GateAction.PROCEED)
