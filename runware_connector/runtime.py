"""Runtime — the uniform action-invocation interface.

action name + raw props → validate → build task → dispatch → ``data``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from runware_connector.actions import resolve_action
from runware_connector.client import dispatch
from runware_connector.config import resolve_runware_key
from runware_connector.tasks import build_task
from runware_connector.validation import validate

logger = logging.getLogger(__name__)


def run_action(
    name: str,
    props: Mapping[str, Any],
    api_key: str | None = None,
    *,
    apply_defaults: bool = False,
    client: httpx.Client | None = None,
) -> Any:
    """Execute one action and return the remote ``data`` collection.

    With ``apply_defaults`` the action's UI-level defaults fill absent
    fields, the way a host form would have prefilled them.

    Raises ValueError for an unknown action, a ValidationFailure subclass
    for bad input (before any network call), InvalidCredentialError when no
    key can be resolved, and OperationFailedError for remote failures.
    """
    action = resolve_action(name)
    prefilled = action.prefilled if apply_defaults else frozenset()

    validated = validate(action.operation, props, prefilled)
    key = resolve_runware_key(api_key)
    task = build_task(action.operation, validated)

    logger.info(
        f"Running action: name={action.name}, taskType={task['taskType']}, "
        f"taskUUID={task['taskUUID']}"
    )
    return dispatch(key, [task], client=client)
