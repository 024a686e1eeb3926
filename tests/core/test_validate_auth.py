"""Bearer Token Parsing — header and cookie handling for sessions and logout."""

import pytest

from storefront.core.errors import AuthenticationError
from storefront.core.validate_auth import extract_bearer_token, require_logout_token


@pytest.mark.parametrize("header, token", [
    ("Bearer abc", "abc"),
    ("Bearer   abc  ", "abc"),
    ("Bearer ", None),
    ("Basic abc", None),
    (None, None),
])
def test_extract_bearer_token(header, token):
    assert extract_bearer_token(header) == token


def test_logout_token_falls_back_to_cookie():
    assert require_logout_token(None, "from-cookie") == "from-cookie"
    assert require_logout_token("Bearer from-header", "from-cookie") == "from-header"


@pytest.mark.parametrize("header, cookie, code", [
    (None, None, "MISSING_AUTH_HEADER"),
    (None, "  ", "MISSING_AUTH_HEADER"),
    ("Token abc", None, "INVALID_AUTH_FORMAT"),
    ("Bearer ", None, "MISSING_TOKEN"),
])
def test_logout_token_errors(header, cookie, code):
    with pytest.raises(AuthenticationError) as exc:
        require_logout_token(header, cookie)
    assert exc.value.code == code
    assert exc.value.http_status == 401
