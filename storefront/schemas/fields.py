"""Request Field Types — trimmed text, bounded numbers, emails.

Invariants:
    - Blank text counts as missing; OptionalText turns blank into None
    - Booleans are never numbers (True is not a quantity)
    - Whole numbers fit a 32-bit INTEGER column; money amounts are finite and
      at most MAX_AMOUNT, so no request value can overflow a column or a float
    - Charge allows zero (free shipping); Percentage stays within 0..100
    - Emails are trimmed and lower-cased
"""

from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator, EmailStr, Field
from pydantic_core import PydanticCustomError

MAX_INT32 = 2_147_483_647
MAX_AMOUNT = 1_000_000_000
MIN_PASSWORD_LENGTH = 8


def required(value: Any) -> Any:
    """None and blank strings are reported as a missing field."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError("missing", "Field required")
    return value.strip() if isinstance(value, str) else value


def _non_empty(value: Any) -> Any:
    if value is None or value == "":
        raise PydanticCustomError("missing", "Field required")
    return value


def _blank_as_none(value: Any) -> str | None:
    if value is None:
        return None
    return str(value).strip() or None


def _number(value: Any) -> Any:
    if isinstance(value, bool):
        raise PydanticCustomError("number_type", "Input should be a number")
    if isinstance(value, int):
        try:
            float(value)
        except OverflowError:
            raise PydanticCustomError("number_too_large", "Number is too large")
    return value


def _json_number(value: Any) -> Any:
    if not isinstance(value, (int, float)):
        raise PydanticCustomError("number_type", "Input should be a number")
    return _number(value)


RequiredText = Annotated[str, BeforeValidator(required)]
OptionalText = Annotated[str | None, BeforeValidator(_blank_as_none)]
Secret = Annotated[str, BeforeValidator(_non_empty)]
Password = Annotated[str, BeforeValidator(_non_empty), Field(min_length=MIN_PASSWORD_LENGTH)]
Email = Annotated[EmailStr, BeforeValidator(required), AfterValidator(str.lower)]
LowercaseText = Annotated[str, BeforeValidator(required), AfterValidator(str.lower)]

Quantity = Annotated[int, BeforeValidator(_number), Field(ge=1, le=MAX_INT32)]
StockCount = Annotated[int, BeforeValidator(_number), Field(ge=0, le=MAX_INT32)]
Amount = Annotated[
    float, BeforeValidator(_number), Field(gt=0, le=MAX_AMOUNT, allow_inf_nan=False),
]
SignedAmount = Annotated[
    float,
    BeforeValidator(_json_number),
    Field(ge=-MAX_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False),
]
Charge = Annotated[
    float, BeforeValidator(_number), Field(ge=0, le=MAX_AMOUNT, allow_inf_nan=False),
]
Percentage = Annotated[
    float, BeforeValidator(_number), Field(ge=0, le=100, allow_inf_nan=False),
]

PhoneText = Annotated[
    Annotated[str, Field(max_length=50)] | None, BeforeValidator(_blank_as_none),
]
Tag = Annotated[str, BeforeValidator(required), Field(max_length=50)]
