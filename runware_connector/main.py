"""Runware connector — FastAPI app exposing the four actions to a host runtime.

Loads config.yaml on startup when present. Exposes /actions/{name} for
action invocation and /auth/validate for the credential check, plus
operational endpoints for health, config viewing, and hot-reload.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from runware_connector.actions import list_actions, resolve_action
from runware_connector.client import validate_api_key
from runware_connector.config import (
    ConnectorConfig,
    get_config,
    load_config,
    reload_config,
)
from runware_connector.errors import (
    InvalidCredentialError,
    OperationFailedError,
    ValidationFailure,
)
from runware_connector.runtime import run_action
from runware_connector.schemas import (
    ActionInfo,
    ActionRequest,
    ActionResponse,
    AuthRequest,
    AuthResult,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CONFIG_PATH = os.environ.get("RUNWARE_CONNECTOR_CONFIG", "config.yaml")


def _boot_config() -> ConnectorConfig:
    """Load the config file if there is one, otherwise use defaults."""
    if Path(CONFIG_PATH).exists():
        config = load_config(CONFIG_PATH)
    else:
        config = get_config()
    logging.getLogger().setLevel(config.log_level)
    return config


# Load config early so we can read allowed_origins for CORS middleware.
_config = _boot_config()

app = FastAPI(title="Runware Connector", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_config.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info(
    f"Runware connector ready (actions={len(list_actions())}, "
    f"auth={'enabled' if _config.api_key else 'disabled'})"
)


# ---------------------------------------------------------------------------
# Auth dependency
# ---------------------------------------------------------------------------


async def verify_api_key(request: Request) -> None:
    """Validate X-API-Key header against the configured key.
    If no api_key is set in config, auth is disabled (dev mode).
    """
    config = get_config()
    if not config.api_key:
        return  # Auth disabled — no key configured

    key = request.headers.get("X-API-Key")
    if key != config.api_key:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")


# ---------------------------------------------------------------------------
# Action endpoints
# ---------------------------------------------------------------------------


@app.get("/actions", response_model=list[ActionInfo])
def get_actions():
    """List the registered actions."""
    return [
        ActionInfo(
            name=a.name,
            display_name=a.display_name,
            description=a.description,
            operation=a.operation.value,
        )
        for a in list_actions()
    ]


@app.post(
    "/actions/{action_name}",
    response_model=ActionResponse,
    dependencies=[Depends(verify_api_key)],
)
def invoke_action(action_name: str, request: ActionRequest):
    """Validate the props, submit the task, and return the remote data."""
    try:
        resolve_action(action_name)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Action '{action_name}' not found")

    try:
        data = run_action(
            action_name,
            request.props,
            request.auth,
            apply_defaults=request.apply_defaults,
        )
    except ValidationFailure as e:
        raise HTTPException(status_code=422, detail=e.to_dict())
    except InvalidCredentialError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except OperationFailedError as e:
        logger.error(f"Action '{action_name}' failed: {e}")
        raise HTTPException(
            status_code=502,
            detail={"message": str(e), "status_code": e.status_code},
        )

    return ActionResponse(data=data)


@app.post(
    "/auth/validate",
    response_model=AuthResult,
    dependencies=[Depends(verify_api_key)],
)
def validate_auth(request: AuthRequest):
    """Run the credential check for a Runware API key."""
    return validate_api_key(request.auth)


# ---------------------------------------------------------------------------
# Operational endpoints
# ---------------------------------------------------------------------------


@app.get("/health")
def health():
    """Liveness check."""
    return {"status": "healthy", "actions": len(list_actions())}


@app.get("/config")
def get_current_config():
    """Return current config as JSON, without secrets."""
    return get_config().model_dump(exclude={"api_key", "runware_api_key"})


@app.post("/reload", dependencies=[Depends(verify_api_key)])
def reload():
    """Hot-reload config.yaml without a restart."""
    try:
        new_config = reload_config()
        logging.getLogger().setLevel(new_config.log_level)
        return {"status": "reloaded", "api_url": new_config.api_url}
    except Exception as e:
        logger.error(f"Reload failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Reload failed: {e}")
