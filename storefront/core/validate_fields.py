"""Query Parameter Helpers — ids, page sizes and UUID parsing.

Invariants:
    - require_query_id raises InvalidInputError (400) INVALID_ID, nothing else;
      require_id is the admin form and raises MISSING_ID
    - A page size of zero or less counts as absent; larger ones cap at MAX_PAGE_SIZE
    - parse_uuid never raises: None means the value cannot name a stored record
"""

from uuid import UUID

from storefront.core.errors import InvalidInputError

MAX_PAGE_SIZE = 100


def require_query_id(value: str | None) -> str:
    """Query-string id used by PUT/DELETE on collection routes."""
    if not value or not value.strip():
        raise InvalidInputError("Valid ID is required", "INVALID_ID", field="id")
    return value.strip()


def require_id(value: str | None, message: str) -> str:
    """Query-string id on admin routes; message names the resource."""
    if not value or not value.strip():
        raise InvalidInputError(message, "MISSING_ID", field="id")
    return value.strip()


def clamp_limit(value: int | None, default: int) -> int:
    if value is None or value <= 0:
        return default
    return min(value, MAX_PAGE_SIZE)


def parse_uuid(value: object) -> UUID | None:
    """Path/query/body id -> UUID. None when it cannot name a stored record."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value).strip())
    except (ValueError, AttributeError):
        return None
