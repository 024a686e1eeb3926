"""Customer Schemas — admin-maintained customer details and the customer profile view.

Invariants:
    - Customers are users with role "user"; email, name and role are not edited here
    - tags is always a list: null clears it, each tag is non-blank text
"""

from typing import Any, ClassVar

from pydantic import field_validator

from storefront.schemas.auth import PHONE_CODES, UserResponse
from storefront.schemas.common import UpdateModel
from storefront.schemas.fields import OptionalText, PhoneText, Tag


class CustomerUpdate(UpdateModel):
    phone: PhoneText = None
    address: OptionalText = None
    tags: list[Tag] = []
    notes: OptionalText = None

    field_codes: ClassVar = {
        **PHONE_CODES,
        "tags": ("Tags must be a list of non-empty strings", "INVALID_TAGS"),
    }

    @field_validator("tags", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class CustomerResponse(UserResponse):
    tags: list[str] = []
    notes: str | None = None
