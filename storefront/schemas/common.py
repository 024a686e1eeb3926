"""Shared schema bases — camelCase aliases, ORM attribute loading, request parsing.

Invariants:
    - ApiModel is for responses; RequestModel is for JSON bodies
    - RequestModel.parse raises InvalidInputError (400) and nothing else
    - The first failing field wins, in field-declaration order
    - A rule raised with rule_error carries its own code; other failures are
      looked up in field_codes (missing_codes first when the field is absent)
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    ValidationError,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from storefront.core.errors import InvalidInputError
from storefront.core.timestamps import as_utc

UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]

FieldCodes = dict[str, tuple[str, str]]


class ApiModel(BaseModel):
    """Base for every response schema."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )

    @classmethod
    def serialize(cls, obj: object) -> dict:
        """ORM object (or dict) -> JSON-ready dict with camelCase keys."""
        return cls.model_validate(obj).model_dump(mode="json", by_alias=True)


def rule_error(code: str, message: str) -> PydanticCustomError:
    """Validation failure that maps straight to an InvalidInputError code."""
    return PydanticCustomError("request_rule", message, {"code": code})


class RequestModel(BaseModel):
    """Base for request bodies: camelCase keys in, InvalidInputError out."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    field_codes: ClassVar[FieldCodes] = {}
    missing_codes: ClassVar[FieldCodes] = {}

    @classmethod
    def parse(cls, body: Any):
        """Validate a decoded JSON body. An absent body counts as {}."""
        try:
            return cls.model_validate({} if body is None else body)
        except ValidationError as exc:
            raise cls._input_error(exc.errors()[0]) from None

    @classmethod
    def _input_error(cls, error: dict) -> InvalidInputError:
        ctx = error.get("ctx") or {}
        names = [part for part in error["loc"] if isinstance(part, str)]
        field = next(
            (n for n in reversed(names) if n in cls.field_codes or n in cls.missing_codes),
            names[-1] if names else None,
        )
        if "code" in ctx:
            return InvalidInputError(error["msg"], ctx["code"], field=field)
        if error["type"] == "missing" and field in cls.missing_codes:
            message, code = cls.missing_codes[field]
        elif field in cls.field_codes:
            message, code = cls.field_codes[field]
        else:
            message, code = "Invalid request data", "VALIDATION_ERROR"
        return InvalidInputError(message, code, field=field)


class UpdateModel(RequestModel):
    """Partial update: only keys present in the body become changes."""

    def updates(self) -> dict:
        """ORM attribute name -> new value, for the fields the body carried."""
        return self.model_dump(mode="json", exclude_unset=True)

    @model_validator(mode="after")
    def has_changes(self):
        if not self.updates():
            raise rule_error("NO_UPDATE_FIELDS", "No valid fields to update")
        return self
