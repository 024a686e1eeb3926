"""Catalog Schemas — categories, products and cart items.

Invariants:
    - Category slug falls back to generate_slug(name) when not supplied
    - Renaming a category regenerates its slug unless the body carries one
    - Product price must be > 0, stock quantity >= 0; salePrice may be cleared
"""

from typing import Any, ClassVar
from uuid import UUID

from pydantic import ValidationInfo, field_validator, model_validator

from storefront.core.slugs import generate_slug
from storefront.schemas.common import ApiModel, RequestModel, UpdateModel, UtcDatetime
from storefront.schemas.fields import (
    Amount,
    OptionalText,
    Quantity,
    RequiredText,
    StockCount,
    required,
)


# ─── Requests ────────────────────────────────────────────────────

class CategoryCreate(RequestModel):
    name: RequiredText
    slug: OptionalText = None
    description: OptionalText = None

    field_codes: ClassVar = {"name": ("Name is required", "MISSING_REQUIRED_FIELD")}

    @model_validator(mode="after")
    def default_slug(self):
        self.slug = self.slug or generate_slug(self.name)
        return self


class CategoryUpdate(UpdateModel):
    name: RequiredText | None = None
    slug: OptionalText = None
    description: OptionalText = None

    field_codes: ClassVar = {"name": ("Name cannot be empty", "INVALID_NAME")}

    @field_validator("name", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return required(value)

    def updates(self) -> dict:
        changes = super().updates()
        if not changes.get("slug"):
            changes.pop("slug", None)
            if "name" in changes:
                changes["slug"] = generate_slug(changes["name"])
        return changes


class ProductCreate(RequestModel):
    name: RequiredText
    price: Amount
    category: RequiredText
    color: RequiredText
    size: RequiredText
    stock_quantity: StockCount = 0
    sale_price: Amount | None = None
    description: OptionalText = None
    image_url: OptionalText = None
    is_featured: bool = False

    field_codes: ClassVar = {
        "name": ("Name is required", "MISSING_NAME"),
        "price": ("Valid price is required", "INVALID_PRICE"),
        "category": ("Category is required", "MISSING_CATEGORY"),
        "color": ("Color is required", "MISSING_COLOR"),
        "size": ("Size is required", "MISSING_SIZE"),
        "stockQuantity": ("Stock quantity must be zero or more", "INVALID_STOCK_QUANTITY"),
        "salePrice": ("Sale price must be a positive number", "INVALID_SALE_PRICE"),
        "isFeatured": ("isFeatured must be a boolean", "INVALID_IS_FEATURED"),
    }

    @field_validator("stock_quantity", "is_featured", mode="before")
    @classmethod
    def null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    def to_record(self) -> dict:
        return self.model_dump()


class ProductUpdate(UpdateModel):
    name: RequiredText | None = None
    category: RequiredText | None = None
    color: RequiredText | None = None
    size: RequiredText | None = None
    price: Amount | None = None
    sale_price: Amount | None = None
    stock_quantity: StockCount | None = None
    description: OptionalText = None
    image_url: OptionalText = None
    is_featured: bool | None = None

    field_codes: ClassVar = {
        "name": ("Name must be a non-empty string", "INVALID_NAME"),
        "category": ("Category must be a non-empty string", "INVALID_CATEGORY"),
        "color": ("Color must be a non-empty string", "INVALID_COLOR"),
        "size": ("Size must be a non-empty string", "INVALID_SIZE"),
        "price": ("Price must be a positive number", "INVALID_PRICE"),
        **{
            key: ProductCreate.field_codes[key]
            for key in ("salePrice", "stockQuantity", "isFeatured")
        },
    }

    @field_validator(
        "name", "category", "color", "size", "price", "stock_quantity", "is_featured",
        mode="before",
    )
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return required(value)


class CartItemCreate(RequestModel):
    product_id: RequiredText
    quantity: Quantity
    size: RequiredText
    color: RequiredText
    session_id: RequiredText

    field_codes: ClassVar = {
        "productId": ("Valid product ID is required", "MISSING_PRODUCT_ID"),
        "quantity": ("Valid quantity (minimum 1) is required", "INVALID_QUANTITY"),
        "size": ("Size is required", "MISSING_SIZE"),
        "color": ("Color is required", "MISSING_COLOR"),
        "sessionId": ("Session ID is required", "MISSING_SESSION_ID"),
    }

    def to_record(self) -> dict:
        return self.model_dump()


class CartItemUpdate(UpdateModel):
    product_id: RequiredText | None = None
    quantity: Quantity | None = None
    size: RequiredText | None = None
    color: RequiredText | None = None
    session_id: RequiredText | None = None

    field_codes: ClassVar = {
        "productId": ("Valid product ID is required", "INVALID_PRODUCT_ID"),
        "quantity": CartItemCreate.field_codes["quantity"],
        "size": ("Size must be a non-empty string", "INVALID_SIZE"),
        "color": ("Color must be a non-empty string", "INVALID_COLOR"),
        "sessionId": ("Session ID must be a non-empty string", "INVALID_SESSION_ID"),
    }

    @field_validator("product_id", "quantity", "size", "color", "session_id", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return required(value)


# ─── Responses ───────────────────────────────────────────────────

class CategoryResponse(ApiModel):
    id: UUID
    name: str
    slug: str
    description: str | None = None
    created_at: UtcDatetime


class ProductResponse(ApiModel):
    id: UUID
    name: str
    description: str | None = None
    price: float
    sale_price: float | None = None
    image_url: str | None = None
    category: str
    color: str
    size: str
    stock_quantity: int
    is_featured: bool
    created_at: UtcDatetime


class CartItemResponse(ApiModel):
    id: UUID
    product_id: str
    quantity: int
    size: str
    color: str
    session_id: str
    created_at: UtcDatetime
