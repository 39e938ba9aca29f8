"""Request/response models — the contract between the connector and its host."""

from typing import Any

from pydantic import BaseModel


class ActionRequest(BaseModel):
    """Incoming action invocation. ``props`` holds the raw parameters,
    keyed by Runware field name (e.g. ``positivePrompt``)."""

    props: dict[str, Any]
    auth: str | None = None
    apply_defaults: bool = False


class ActionResponse(BaseModel):
    """The remote service's ``data`` collection, passed through unmodified."""

    data: Any


class ActionInfo(BaseModel):
    name: str
    display_name: str
    description: str
    operation: str


class AuthRequest(BaseModel):
    auth: str


class AuthResult(BaseModel):
    """Outcome of the credential check, shaped like the host expects."""

    valid: bool
    error: str | None = None
