"""Validator — applies an operation's field constraints to a raw input mapping.

Fail-fast: the first violation raises and nothing reaches the network.
The caller's mapping is never mutated; a new normalized dict is returned.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Collection, Mapping
from typing import Any

from pydantic import AnyUrl, TypeAdapter, ValidationError

from runware_connector.constraints import (
    ArrayField,
    EnumField,
    NumberField,
    Operation,
    StringField,
)
from runware_connector.errors import FieldConstraintViolation, MissingFieldError
from runware_connector.registry import get_operation_spec

logger = logging.getLogger(__name__)

_url_adapter = TypeAdapter(AnyUrl)


def validate(
    operation: Operation | str,
    raw_input: Mapping[str, Any],
    prefilled: Collection[str] = frozenset(),
) -> dict[str, Any]:
    """Validate ``raw_input`` against the operation's schema.

    A field is absent when its key is missing or its value is ``None``.
    Absent fields named in ``prefilled`` (the action's UI-level defaults)
    take their schema default, if one is declared. Keys not declared by the
    operation are dropped.

    Raises MissingFieldError or FieldConstraintViolation on the first failure.
    """
    spec = get_operation_spec(operation)
    validated: dict[str, Any] = {}

    for name, constraint in spec.fields.items():
        value = raw_input.get(name)

        if value is None and name in prefilled and constraint.default is not None:
            value = constraint.default

        if value is None:
            if constraint.required:
                raise MissingFieldError(name)
            continue

        match constraint:
            case NumberField():
                _check_number(name, constraint, value)
            case StringField():
                _check_string(name, constraint, value)
            case EnumField():
                _check_enum(name, constraint, value)
            case ArrayField():
                value = _check_array(name, constraint, value)
            case _:
                _check_boolean(name, value)

        validated[name] = value

    ignored = set(raw_input) - set(spec.fields)
    if ignored:
        logger.debug(f"Ignoring undeclared fields for {spec.operation.value}: {sorted(ignored)}")

    return validated


# ---------------------------------------------------------------------------
# Per-kind checks — order: type, bounds/length, divisibility, pattern, enum
# ---------------------------------------------------------------------------


def _check_number(name: str, c: NumberField, value: Any) -> None:
    # bool is a subclass of int in Python, so reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FieldConstraintViolation(
            name, "type", f"must be a number, got {type(value).__name__}"
        )
    if isinstance(value, float) and not math.isfinite(value):
        raise FieldConstraintViolation(name, "type", "must be a finite number")
    if c.minimum is not None and value < c.minimum:
        raise FieldConstraintViolation(name, "minimum", f"must be at least {c.minimum}")
    if c.maximum is not None and value > c.maximum:
        raise FieldConstraintViolation(name, "maximum", f"must not exceed {c.maximum}")
    if c.exclusive_minimum is not None and value <= c.exclusive_minimum:
        raise FieldConstraintViolation(
            name, "exclusive_minimum", f"must be greater than {c.exclusive_minimum}"
        )
    if c.divisible_by is not None and value % c.divisible_by != 0:
        raise FieldConstraintViolation(
            name, "divisible_by", f"must be divisible by {c.divisible_by}"
        )


def _check_string(name: str, c: StringField, value: Any) -> None:
    if not isinstance(value, str):
        raise FieldConstraintViolation(
            name, "type", f"must be a string, got {type(value).__name__}"
        )
    if c.min_length is not None and len(value) < c.min_length:
        raise FieldConstraintViolation(
            name, "min_length", f"must be at least {c.min_length} characters"
        )
    if c.max_length is not None and len(value) > c.max_length:
        raise FieldConstraintViolation(
            name, "max_length", f"must not exceed {c.max_length} characters"
        )
    if c.patterns and not any(re.search(p, value) for p in c.patterns):
        raise FieldConstraintViolation(
            name, "pattern", c.pattern_message or "does not match the expected format"
        )
    if c.format == "url":
        try:
            _url_adapter.validate_python(value)
        except ValidationError:
            raise FieldConstraintViolation(name, "url", "must be a valid URL") from None


def _check_boolean(name: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise FieldConstraintViolation(
            name, "type", f"must be a boolean, got {type(value).__name__}"
        )


def _check_enum(name: str, c: EnumField, value: Any) -> None:
    if not isinstance(value, str):
        raise FieldConstraintViolation(
            name, "type", f"must be a string, got {type(value).__name__}"
        )
    if value not in c.allowed_values:
        raise FieldConstraintViolation(
            name, "enum", f"must be one of {list(c.allowed_values)}, got {value!r}"
        )


def _check_array(name: str, c: ArrayField, value: Any) -> list[Any]:
    if not isinstance(value, (list, tuple)):
        raise FieldConstraintViolation(
            name, "type", f"must be an array, got {type(value).__name__}"
        )
    if c.length is not None and len(value) != c.length:
        raise FieldConstraintViolation(
            name, "length", f"must contain exactly {c.length} values"
        )
    for index, (item_constraint, item) in enumerate(zip(c.items, value)):
        _check_number(f"{name}[{index}]", item_constraint, item)
    return list(value)
