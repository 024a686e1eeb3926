"""Admin Access Gate — tests for the pure redirect decision.

Tests cover:
    - which paths are gated
    - bearer header preferred over cookie
    - decision for no token / failed verification / non-admin / admin
"""

import pytest

from storefront.core.access_gate import (
    GateAction,
    decide_admin_access,
    is_gated_path,
    login_redirect_location,
    select_session_token,
)


@pytest.mark.parametrize("path, gated", [
    ("/admin", True),
    ("/admin/orders/123", True),
    ("/admin/login", False),
    ("/admin/login/", False),
    ("/admin/", True),
    ("/administrator", False),
    ("/admin-panel", False),
    ("/api/admin/orders", False),
    ("/", False),
])
def test_is_gated_path(path, gated):
    assert is_gated_path(path) is gated


def test_select_session_token_prefers_header():
    assert select_session_token("Bearer header-token", "cookie-token") == "header-token"
    assert select_session_token("Basic x", "cookie-token") == "cookie-token"
    assert select_session_token(None, "") is None


def test_login_redirect_location_encodes_path():
    assert login_redirect_location("/admin/dashboard") == "/login?redirect=%2Fadmin%2Fdashboard"


def test_no_token_redirects_without_clearing_cookie():
    decision = decide_admin_access("/admin", has_token=False, verified_role=None)
    assert decision.action is GateAction.REDIRECT_LOGIN
    assert decision.location == "/login?redirect=%2Fadmin"
    assert decision.clear_session_cookie is False


def test_failed_verification_clears_cookie():
    decision = decide_admin_access("/admin/x", has_token=True, verified_role=None)
    assert decision.action is GateAction.REDIRECT_LOGIN
    assert decision.clear_session_cookie is True


def test_non_admin_goes_home():
    decision = decide_admin_access("/admin/x", has_token=True, verified_role="manager")
    assert decision.action is GateAction.REDIRECT_HOME
    assert decision.location == "/"


def test_admin_proceeds():
    decision = decide_admin_access("/admin/x", has_token=True, verified_role="admin")
    assert decision.action is GateAction.PROCEED
    assert decision.location is None
