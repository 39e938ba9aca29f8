"""Error taxonomy — every failure an action invocation can surface.

Validation errors are raised before any network call. Remote failures wrap
the underlying httpx error (available as ``__cause__``). Nothing is retried.
"""

from __future__ import annotations


class ConnectorError(Exception):
    """Base class for all connector errors."""


class ValidationFailure(ConnectorError, ValueError):
    """A raw input mapping failed its operation's field constraints."""

    def __init__(self, field: str, rule: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.rule = rule
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "rule": self.rule, "message": self.message}


class MissingFieldError(ValidationFailure):
    """A required field is absent."""

    def __init__(self, field: str) -> None:
        super().__init__(field, "required", f"Missing required field '{field}'")


class FieldConstraintViolation(ValidationFailure):
    """A present value failed a type, bounds, pattern or enum check."""


class OperationFailedError(ConnectorError, RuntimeError):
    """The remote service could not be reached or returned a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidCredentialError(ConnectorError):
    """The API key is missing or was rejected by the credential check."""
