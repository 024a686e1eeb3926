"""Auth Schemas — sign-in, registration, password reset and admin profile edits; public profiles.

Invariants:
    - Emails are trimmed and lower-cased before any lookup
    - Passwords are never trimmed; fewer than 8 characters is rejected
    - The password hash never appears in a response
"""

from typing import Annotated, Any, ClassVar
from uuid import UUID

from pydantic import BeforeValidator, field_validator

from storefront.core.domain_types import UserRole
from storefront.schemas.common import ApiModel, RequestModel, UpdateModel, UtcDatetime
from storefront.schemas.fields import (
    Email,
    LowercaseText,
    OptionalText,
    Password,
    PhoneText,
    RequiredText,
    Secret,
    required,
)


def _absent_as_user(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        return UserRole.USER
    return value.strip() if isinstance(value, str) else value


Role = Annotated[UserRole, BeforeValidator(_absent_as_user)]

ROLE_CODES = {"role": ("Role must be one of: user, admin, manager", "INVALID_ROLE")}
PHONE_CODES = {"phone": ("Phone must be at most 50 characters", "INVALID_PHONE")}


# ─── Requests ────────────────────────────────────────────────────

class LoginRequest(RequestModel):
    email: LowercaseText
    password: Secret

    field_codes: ClassVar = {
        "email": ("Email is required", "MISSING_EMAIL"),
        "password": ("Password is required", "MISSING_PASSWORD"),
    }


class RegisterRequest(RequestModel):
    email: Email
    password: Password
    name: RequiredText
    role: Role = UserRole.USER

    field_codes: ClassVar = {
        "email": ("Invalid email format", "INVALID_EMAIL"),
        "password": ("Password must be at least 8 characters long", "INVALID_PASSWORD"),
        "name": ("Name is required", "MISSING_NAME"),
        **ROLE_CODES,
    }
    missing_codes: ClassVar = {
        "email": ("Email is required", "MISSING_EMAIL"),
        "password": ("Password is required", "MISSING_PASSWORD"),
    }

    def to_record(self) -> dict:
        return self.model_dump(mode="json")


class ForgotPasswordRequest(RequestModel):
    email: Email

    field_codes: ClassVar = {"email": ("Invalid email format", "INVALID_EMAIL_FORMAT")}
    missing_codes: ClassVar = {"email": ("Email is required", "MISSING_EMAIL")}


class PasswordResetRequest(RequestModel):
    oob_code: RequiredText
    new_password: Password

    field_codes: ClassVar = {
        "oobCode": ("Reset token is required", "MISSING_TOKEN"),
        "newPassword": ("Password must be at least 8 characters long", "WEAK_PASSWORD"),
    }
    missing_codes: ClassVar = {
        "newPassword": ("New password is required", "MISSING_PASSWORD"),
    }


class UserUpdate(UpdateModel):
    """Admin edit of an account profile. Email and password are not editable here."""
    name: RequiredText | None = None
    role: Role | None = None
    phone: PhoneText = None
    address: OptionalText = None

    field_codes: ClassVar = {
        "name": ("Name must be a non-empty string", "INVALID_NAME"),
        **ROLE_CODES,
        **PHONE_CODES,
    }

    @field_validator("name", "role", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return required(value)


# ─── Responses ───────────────────────────────────────────────────

class UserResponse(ApiModel):
    id: UUID
    email: str
    name: str
    role: str
    phone: str | None = None
    address: str | None = None
    created_at: UtcDatetime
    updated_at: UtcDatetime


class TokenInfo(ApiModel):
    uid: str
    email: str
    exp: int
    iat: int
