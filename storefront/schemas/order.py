"""Order Schemas — order, order item and admin status payloads.

Invariants:
    - Status must be an OrderStatus member; absent or blank -> MISSING_STATUS
    - A new order with no status starts as pending
    - Items posted with an order carry no orderId; a standalone item must
"""

from typing import Annotated, Any, ClassVar
from uuid import UUID

from pydantic import BeforeValidator, Field, field_validator

from storefront.core.domain_types import OrderStatus
from storefront.schemas.common import ApiModel, RequestModel, UpdateModel, UtcDatetime
from storefront.schemas.fields import Amount, Email, OptionalText, Quantity, RequiredText, required


def _absent_as_pending(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        return OrderStatus.PENDING
    return value.strip() if isinstance(value, str) else value


Status = Annotated[OrderStatus, BeforeValidator(required)]

STATUS_CODES = {"status": ("Invalid status provided", "INVALID_STATUS")}
MISSING_STATUS = {"status": ("Status is required", "MISSING_STATUS")}


# ─── Requests ────────────────────────────────────────────────────

class OrderLine(RequestModel):
    """Line item as posted inside a new order."""
    product_id: RequiredText
    quantity: Quantity
    price: Amount
    size: RequiredText
    color: RequiredText

    field_codes: ClassVar = {
        "productId": ("Product ID is required", "MISSING_PRODUCT_ID"),
        "quantity": ("Valid quantity is required", "INVALID_QUANTITY"),
        "price": ("Valid price is required", "INVALID_PRICE"),
        "size": ("Size is required", "MISSING_SIZE"),
        "color": ("Color is required", "MISSING_COLOR"),
    }


class OrderItemCreate(RequestModel):
    """Line item added to an existing order."""
    order_id: RequiredText
    product_id: RequiredText
    quantity: Quantity
    price: Amount
    size: RequiredText
    color: RequiredText

    field_codes: ClassVar = {
        "orderId": ("Order ID is required", "MISSING_ORDER_ID"),
        **OrderLine.field_codes,
    }

    def to_record(self) -> dict:
        return self.model_dump(exclude={"order_id"})


class OrderCreate(RequestModel):
    customer_name: RequiredText
    customer_email: Email
    customer_phone: RequiredText
    shipping_address: RequiredText
    total_amount: Amount
    status: Annotated[OrderStatus, BeforeValidator(_absent_as_pending)] = OrderStatus.PENDING
    user_id: OptionalText = None
    items: list[OrderLine] = []

    field_codes: ClassVar = {
        "customerName": ("Customer name is required", "MISSING_CUSTOMER_NAME"),
        "customerEmail": ("Valid email address is required", "INVALID_EMAIL"),
        "customerPhone": ("Customer phone is required", "MISSING_CUSTOMER_PHONE"),
        "shippingAddress": ("Shipping address is required", "MISSING_SHIPPING_ADDRESS"),
        "totalAmount": ("Valid total amount is required", "INVALID_TOTAL_AMOUNT"),
        "items": ("Items must be a list", "INVALID_ITEMS"),
        **STATUS_CODES,
        **OrderLine.field_codes,
    }
    missing_codes: ClassVar = {
        "customerEmail": ("Customer email is required", "MISSING_CUSTOMER_EMAIL"),
    }

    @field_validator("items", mode="before")
    @classmethod
    def absent_items(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_record(self) -> dict:
        """ORM attribute names; items as plain dicts."""
        return self.model_dump(mode="json")


class OrderUpdate(UpdateModel):
    customer_name: RequiredText | None = None
    customer_email: Email | None = None
    customer_phone: RequiredText | None = None
    shipping_address: RequiredText | None = None
    total_amount: Amount | None = None
    status: Status | None = None
    notes: OptionalText = None

    field_codes: ClassVar = {
        "customerName": ("Customer name must be a non-empty string", "INVALID_CUSTOMER_NAME"),
        "customerEmail": ("Valid email address is required", "INVALID_EMAIL"),
        "customerPhone": ("Customer phone must be a non-empty string", "INVALID_CUSTOMER_PHONE"),
        "shippingAddress": (
            "Shipping address must be a non-empty string", "INVALID_SHIPPING_ADDRESS",
        ),
        "totalAmount": ("Total amount must be a positive number", "INVALID_TOTAL_AMOUNT"),
        **STATUS_CODES,
    }
    missing_codes: ClassVar = {
        "customerEmail": (
            "Customer email must be a non-empty string", "INVALID_CUSTOMER_EMAIL",
        ),
        **MISSING_STATUS,
    }

    @field_validator(
        "customer_name", "customer_email", "customer_phone", "shipping_address",
        "total_amount", "status", mode="before",
    )
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return required(value)


class StatusChange(RequestModel):
    """Admin status change for one order."""
    status: Status
    notes: OptionalText = None

    field_codes: ClassVar = STATUS_CODES
    missing_codes: ClassVar = MISSING_STATUS


class BulkStatusChange(RequestModel):
    order_ids: list[Annotated[str, BeforeValidator(str)]] = Field(min_length=1)
    status: Status
    notes: OptionalText = None

    field_codes: ClassVar = {
        "orderIds": ("Order IDs array is required", "MISSING_ORDER_IDS"),
        **STATUS_CODES,
    }
    missing_codes: ClassVar = MISSING_STATUS


# ─── Responses ───────────────────────────────────────────────────

class OrderItemResponse(ApiModel):
    id: UUID
    order_id: UUID
    product_id: str
    quantity: int
    price: float
    size: str
    color: str


class OrderResponse(ApiModel):
    id: UUID
    user_id: str | None = None
    customer_name: str
    customer_email: str
    customer_phone: str
    shipping_address: str
    total_amount: float
    status: str
    notes: str | None = None
    created_at: UtcDatetime
    updated_at: UtcDatetime


class OrderDetailResponse(OrderResponse):
    """Order with its items (admin single-order view)."""
    items: list[OrderItemResponse] = []
