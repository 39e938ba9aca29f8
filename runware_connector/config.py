"""Configuration loader — reads config.yaml, validates with Pydantic.

The file is optional: until one is loaded, ``get_config()`` serves the
built-in defaults, which point at the public Runware endpoint.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, field_validator

from runware_connector.errors import InvalidCredentialError

logger = logging.getLogger(__name__)

RUNWARE_API_URL = "https://api.runware.ai/v1"
RUNWARE_API_KEY_ENV = "RUNWARE_API_KEY"


class ConnectorConfig(BaseModel):
    """Top-level connector configuration."""

    api_url: str = RUNWARE_API_URL
    runware_api_key: str | None = None  # used when a call supplies no key

    # Auth & CORS for the HTTP surface
    api_key: str | None = None
    allowed_origins: list[str] = ["*"]

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("api_url")
    @classmethod
    def must_be_http(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"api_url must be an http(s) URL, got '{v}'")
        return v


# ---------------------------------------------------------------------------
# Module-level config cache
# ---------------------------------------------------------------------------

_config: ConnectorConfig | None = None
_config_path: str = "config.yaml"


def load_config(path: str = "config.yaml") -> ConnectorConfig:
    """Read config.yaml from disk, validate, and cache."""
    global _config, _config_path
    _config_path = path

    config_file = Path(path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_file.resolve()}")

    raw = yaml.safe_load(config_file.read_text()) or {}
    _config = ConnectorConfig(**raw)

    logger.info(
        f"Loaded config: api_url={_config.api_url}, "
        f"default_key={'set' if _config.runware_api_key else 'unset'}"
    )
    return _config


def get_config() -> ConnectorConfig:
    """Return cached config, falling back to defaults if none was loaded."""
    global _config
    if _config is None:
        logger.debug("No config loaded, using defaults")
        _config = ConnectorConfig()
    return _config


def reload_config() -> ConnectorConfig:
    """Re-read config from disk. Called by /reload endpoint."""
    logger.info(f"Reloading config from {_config_path}")
    return load_config(_config_path)


def resolve_runware_key(explicit: str | None = None) -> str:
    """Pick the Runware API key: explicit, then config, then environment."""
    key = explicit or get_config().runware_api_key or os.environ.get(RUNWARE_API_KEY_ENV)
    if not key:
        raise InvalidCredentialError(
            f"No Runware API key supplied. Pass one explicitly, set runware_api_key "
            f"in config.yaml, or export {RUNWARE_API_KEY_ENV}."
        )
    return key
