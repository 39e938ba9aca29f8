"""Field constraint kinds — the declarative vocabulary of the schema registry.

Each kind is a tagged pydantic model (``kind`` is the discriminator), so a
whole operation schema can be enumerated, dumped and tested as plain data.
The checks themselves live in ``runware_connector.validation``.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Operation(str, Enum):
    """The four operations the connector can submit."""

    TEXT_TO_IMAGE = "textToImage"
    IMAGE_TO_IMAGE = "imageToImage"
    TEXT_TO_VIDEO = "textToVideo"
    BACKGROUND_REMOVAL = "backgroundRemoval"


class _Constraint(BaseModel):
    model_config = ConfigDict(frozen=True)

    required: bool = False
    default: Any = None
    description: str | None = None


class NumberField(_Constraint):
    kind: Literal["number"] = "number"
    # int | float keeps large integer bounds (seed) exact
    minimum: int | float | None = None
    maximum: int | float | None = None
    exclusive_minimum: int | float | None = None
    divisible_by: int | float | None = None

    @model_validator(mode="after")
    def check_bounds(self) -> NumberField:
        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            raise ValueError(f"minimum {self.minimum} exceeds maximum {self.maximum}")
        if self.divisible_by is not None and self.divisible_by <= 0:
            raise ValueError("divisible_by must be positive")
        return self


class StringField(_Constraint):
    kind: Literal["string"] = "string"
    min_length: int | None = None
    max_length: int | None = None
    patterns: tuple[str, ...] = ()  # value must match at least one
    pattern_message: str | None = None
    format: Literal["url"] | None = None


class BooleanField(_Constraint):
    kind: Literal["boolean"] = "boolean"


class EnumField(_Constraint):
    kind: Literal["enum"] = "enum"
    allowed_values: tuple[str, ...]

    @model_validator(mode="after")
    def check_default(self) -> EnumField:
        if self.default is not None and self.default not in self.allowed_values:
            raise ValueError(f"default {self.default!r} is not an allowed value")
        return self


class ArrayField(_Constraint):
    """A fixed-shape numeric array; ``items`` constrains each position."""

    kind: Literal["array"] = "array"
    length: int | None = None
    items: tuple[NumberField, ...] = ()

    @model_validator(mode="after")
    def check_items(self) -> ArrayField:
        if self.length is not None and self.items and len(self.items) != self.length:
            raise ValueError("items must describe every position of a fixed-length array")
        return self


FieldConstraint = Annotated[
    Union[NumberField, StringField, BooleanField, EnumField, ArrayField],
    Field(discriminator="kind"),
]


class OperationSpec(BaseModel):
    """All legal fields of one operation, in validation order."""

    model_config = ConfigDict(frozen=True)

    operation: Operation
    fields: dict[str, FieldConstraint]

    @property
    def required_fields(self) -> list[str]:
        return [name for name, c in self.fields.items() if c.required]
