"""Bearer Token Parsing — Authorization header handling for sessions and logout.

Invariants:
    - extract_bearer_token never raises: None means "no usable bearer token"
    - require_logout_token raises AuthenticationError (401), one code per failure
"""

from storefront.core.errors import AuthenticationError

BEARER_PREFIX = "Bearer "


def extract_bearer_token(header_value: str | None) -> str | None:
    """'Bearer abc' -> 'abc'. Anything else -> None."""
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        return None
    token = header_value[len(BEARER_PREFIX):].strip()
    return token or None


def require_logout_token(header_value: str | None, cookie_token: str | None) -> str:
    """Token to end a session: bearer header, or the cookie when no header is sent."""
    if header_value is None:
        if cookie_token and cookie_token.strip():
            return cookie_token.strip()
        raise AuthenticationError(
            "Authorization header is required", "MISSING_AUTH_HEADER",
        )
    scheme, _, credentials = header_value.partition(" ")
    if scheme != BEARER_PREFIX.strip():
        raise AuthenticationError(
            "Invalid authorization format. Expected 'Bearer <token>'",
            "INVALID_AUTH_FORMAT",
        )
    if not credentials.strip():
        raise AuthenticationError("Token is required", "MISSING_TOKEN")
    return credentials.strip()
