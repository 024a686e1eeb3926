"""Error Hierarchy — codes, categories and HTTP status per error kind."""

import pytest

from storefront.core.errors import (
    AuthenticationError,
    BusinessRuleError,
    ConflictError,
    DatabaseError,
    DuplicateSlugError,
    InvalidInputError,
    InvalidTokenError,
    NotSupportedError,
    PermissionDeniedError,
    ReferenceNotFoundError,
    ResourceNotFoundError,
    ServiceFailureError,
    StorefrontError,
)


@pytest.mark.parametrize("error, status, code", [
    (InvalidInputError("bad", "MISSING_NAME"), 400, "MISSING_NAME"),
    (ResourceNotFoundError("Cart item"), 404, "CART_ITEM_NOT_FOUND"),
    (ReferenceNotFoundError("Product"), 400, "PRODUCT_NOT_FOUND"),
    (ConflictError("taken", "EMAIL_EXISTS"), 409, "EMAIL_EXISTS"),
    (DuplicateSlugError("toys"), 400, "DUPLICATE_SLUG"),
    (BusinessRuleError("no", "CATEGORY_HAS_PRODUCTS"), 400, "CATEGORY_HAS_PRODUCTS"),
    (AuthenticationError("no", "MISSING_TOKEN"), 401, "MISSING_TOKEN"),
    (InvalidTokenError(), 401, "INVALID_TOKEN"),
    (PermissionDeniedError(), 403, "FORBIDDEN"),
    (NotSupportedError("nope"), 405, "NOT_SUPPORTED"),
    (DatabaseError("boom", "commit"), 500, "DATABASE_ERROR"),
    (ServiceFailureError("boom", "TRANSACTIONS_FETCH_ERROR"), 500, "TRANSACTIONS_FETCH_ERROR"),
])
def test_status_and_code(error, status, code):
    assert isinstance(error, StorefrontError)
    assert error.http_status == status
    assert error.code == code


def test_to_response_envelope():
    error = ResourceNotFoundError("Order", "123")
    assert error.to_response() == {
        "error": "Order not found", "code": "ORDER_NOT_FOUND", "category": "not_found",
    }


def test_profile_not_found_code_override():
    assert ResourceNotFoundError("User profile", code="PROFILE_NOT_FOUND").code == "PROFILE_NOT_FOUND"
