"""Store Settings Schemas — partial updates to the admin-editable store configuration.

Invariants:
    - Every key is optional, but a key that is present may not be null
    - Nested groups are partial too: {"shippingSettings": {"standardShippingCost": 4}}
      changes that one value and keeps its siblings
    - updates() is keyed by the camelCase names the settings are stored and served under
"""

from typing import Annotated, Any, ClassVar

from pydantic import AfterValidator, BeforeValidator, Field, StrictBool, field_validator

from storefront.core.domain_types import PaymentMethod
from storefront.schemas.common import RequestModel, UpdateModel
from storefront.schemas.fields import Charge, Email, Percentage, RequiredText, required

CurrencyCode = Annotated[
    str,
    BeforeValidator(required),
    Field(pattern=r"^[A-Za-z]{3}$"),
    AfterValidator(str.upper),
]

SHIPPING_CODE = ("Shipping amounts must be zero or more", "INVALID_SHIPPING_COST")
NOTIFICATION_CODE = ("Notification settings must be true or false", "INVALID_NOTIFICATIONS")


class ShippingSettings(RequestModel):
    free_shipping_threshold: Charge | None = None
    standard_shipping_cost: Charge | None = None
    expedited_shipping_cost: Charge | None = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return required(value)


class NotificationSettings(RequestModel):
    email_notifications: StrictBool | None = None
    order_updates: StrictBool | None = None
    promotional_emails: StrictBool | None = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return required(value)


class StoreSettingsUpdate(UpdateModel):
    store_name: Annotated[RequiredText, Field(max_length=200)] | None = None
    store_email: Email | None = None
    currency: CurrencyCode | None = None
    tax_rate: Percentage | None = None
    shipping_settings: ShippingSettings | None = None
    payment_methods: Annotated[list[PaymentMethod], Field(min_length=1)] | None = None
    notifications: NotificationSettings | None = None

    field_codes: ClassVar = {
        "storeName": ("Store name must be a non-empty string", "INVALID_STORE_NAME"),
        "storeEmail": ("Store email must be a valid email address", "INVALID_STORE_EMAIL"),
        "currency": ("Currency must be a 3-letter ISO code", "INVALID_CURRENCY"),
        "taxRate": ("Tax rate must be between 0 and 100", "INVALID_TAX_RATE"),
        "shippingSettings": ("Shipping settings must be an object", "INVALID_SHIPPING_SETTINGS"),
        "freeShippingThreshold": SHIPPING_CODE,
        "standardShippingCost": SHIPPING_CODE,
        "expeditedShippingCost": SHIPPING_CODE,
        "paymentMethods": (
            "Payment methods must be a non-empty list of: "
            + ", ".join(m.value for m in PaymentMethod),
            "INVALID_PAYMENT_METHODS",
        ),
        "notifications": NOTIFICATION_CODE,
        "emailNotifications": NOTIFICATION_CODE,
        "orderUpdates": NOTIFICATION_CODE,
        "promotionalEmails": NOTIFICATION_CODE,
    }

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return required(value)

    @field_validator("payment_methods")
    @classmethod
    def distinct_methods(cls, value: list[PaymentMethod] | None) -> list[PaymentMethod] | None:
        return list(dict.fromkeys(value)) if value else value

    def updates(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
