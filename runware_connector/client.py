"""Runware HTTP client — submits task arrays to the single REST endpoint.

Docs: https://runware.ai/docs/en/getting-started/how-to-connect
Every call is one synchronous POST with bearer auth. No retries, no
timeout override beyond httpx's defaults.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from runware_connector.config import get_config
from runware_connector.errors import InvalidCredentialError, OperationFailedError
from runware_connector.schemas import AuthResult
from runware_connector.tasks import TaskRequest

logger = logging.getLogger(__name__)

_INVALID_KEY = "Invalid API key."


def _post(
    api_key: str,
    body: list[dict[str, Any]],
    url: str | None,
    client: httpx.Client | None,
) -> httpx.Response:
    """Low-level helper: POST a JSON array and return the raw response."""
    url = url or get_config().api_url
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
    }
    if client is not None:
        return client.post(url, json=body, headers=headers)
    with httpx.Client() as owned:
        return owned.post(url, json=body, headers=headers)


def dispatch(
    api_key: str,
    tasks: Sequence[TaskRequest],
    *,
    url: str | None = None,
    client: httpx.Client | None = None,
) -> Any:
    """Send the task array and return the response's ``data`` collection.

    Raises OperationFailedError on transport failure, a non-2xx status, or
    a body that is not a JSON object; the httpx error is chained as
    ``__cause__``.
    """
    try:
        response = _post(api_key, list(tasks), url, client)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        logger.warning(f"Runware API returned {status} for {len(tasks)} task(s)")
        raise OperationFailedError(
            f"Runware API error {status}: {exc.response.text}", status_code=status
        ) from exc
    except httpx.HTTPError as exc:
        logger.warning(f"Runware request failed: {exc}")
        raise OperationFailedError(f"Runware request failed: {exc}") from exc

    try:
        body = response.json()
    except ValueError as exc:
        raise OperationFailedError(
            "Runware API returned a non-JSON body", status_code=response.status_code
        ) from exc

    if not isinstance(body, dict):
        logger.warning(f"Runware API returned a {type(body).__name__} body instead of an object")
        raise OperationFailedError(
            "Runware API returned an unexpected body", status_code=response.status_code
        )
    return body.get("data")


def validate_api_key(
    api_key: str,
    *,
    url: str | None = None,
    client: httpx.Client | None = None,
) -> AuthResult:
    """Post an empty task to the endpoint to check a key.

    The API rejects an empty task, so the result reads inverted: any reply
    without a ``data`` field (error replies included) counts as valid, and a
    reply carrying ``data`` counts as invalid. A transport failure with no
    reply at all is invalid.
    """
    try:
        response = _post(api_key, [{}], url, client)
    except httpx.HTTPError as exc:
        logger.warning(f"Credential check failed: {exc}")
        return AuthResult(valid=False, error=_INVALID_KEY)

    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("data") is not None:
        logger.info("Credential check: key rejected")
        return AuthResult(valid=False, error=_INVALID_KEY)

    logger.info(f"Credential check: key accepted (status={response.status_code})")
    return AuthResult(valid=True)


def ensure_valid_api_key(
    api_key: str,
    *,
    url: str | None = None,
    client: httpx.Client | None = None,
) -> None:
    """Raise InvalidCredentialError if the credential check rejects the key."""
    result = validate_api_key(api_key, url=url, client=client)
    if not result.valid:
        raise InvalidCredentialError(result.error or _INVALID_KEY)
