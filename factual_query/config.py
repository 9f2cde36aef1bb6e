from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError

log = logging.getLogger("factual_query.config")

DEFAULT_BASE_URL = "https://api.v3.factual.com"
DEFAULT_USER_AGENT = "factual-query-python/1.0"

# env var -> Settings field
_ENV_OVERRIDES = {
    "FACTUAL_BASE_URL": "base_url",
    "FACTUAL_TIMEOUT": "timeout",
    "FACTUAL_USER_AGENT": "user_agent",
}


class Settings(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=10.0, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    default_headers: Dict[str, str] = Field(default_factory=dict)


def _read_config_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                cfg = yaml.safe_load(f) or {}
            else:
                cfg = json.load(f)
    except (yaml.YAMLError, ValueError) as e:
        raise ConfigError(f"Could not parse config file {path}: {e}") from e
    if not isinstance(cfg, dict):
        raise ConfigError(f"Config file {path} must hold a mapping, got {type(cfg).__name__}")
    return cfg


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Settings from (lowest to highest precedence): defaults, the config file
    (`path` or $FACTUAL_CONFIG_FILE, YAML or JSON), then FACTUAL_* env vars.
    A .env file in the working directory is loaded first.
    """
    load_dotenv()

    path = path or os.getenv("FACTUAL_CONFIG_FILE")
    data: Dict[str, Any] = _read_config_file(Path(path)) if path else {}
    if path:
        log.debug("Loaded settings file %s", path)

    for env, key in _ENV_OVERRIDES.items():
        val = os.getenv(env)
        if val:
            data[key] = val

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e


__all__ = ["Settings", "load_settings", "DEFAULT_BASE_URL"]
