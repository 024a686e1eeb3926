"""Transaction Schemas — pending payment or refund submitted by an admin."""

from typing import ClassVar

from pydantic import Field

from storefront.core.domain_types import TransactionType
from storefront.schemas.common import RequestModel
from storefront.schemas.fields import OptionalText, RequiredText, SignedAmount


class TransactionCreate(RequestModel):
    order_id: RequiredText
    amount: SignedAmount
    tx_type: TransactionType = Field(alias="type")
    description: OptionalText = None

    field_codes: ClassVar = {
        "orderId": ("Order ID is required", "MISSING_ORDER_ID"),
        "amount": ("Valid amount is required", "INVALID_AMOUNT"),
        "type": ("Type must be 'payment' or 'refund'", "INVALID_TYPE"),
    }
