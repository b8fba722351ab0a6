"""Configuration helpers for the lead finder."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

LOGGER = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LEAD_FINDER_CONFIG"
DEFAULT_CLIENT_CLASS = "lead_finder.clients.gemini.GeminiClient"


class ConfigurationError(RuntimeError):
    """Raised when configuration files are missing or malformed."""


_SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}


def load_configuration(path: str | Path) -> Dict[str, Any]:
    """Load configuration data from a JSON or YAML file."""

    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file '{file_path}' was not found")

    if file_path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise ConfigurationError(
            f"Unsupported configuration format '{file_path.suffix}'. Supported extensions: {sorted(_SUPPORTED_EXTENSIONS)}"
        )

    text = file_path.read_text(encoding="utf-8")
    try:
        if file_path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Could not parse configuration file '{file_path}': {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file '{file_path}' must contain a mapping")
    return data


def load_default_configuration(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """Load ``path``, or the file named by ``$LEAD_FINDER_CONFIG``, or nothing."""

    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        LOGGER.debug("No configuration file given; using defaults")
        return {}
    return load_configuration(path)


def client_settings(config: Dict[str, Any]) -> Dict[str, Any]:
    client = dict(config.get("client") or {})
    client.setdefault("class", DEFAULT_CLIENT_CLASS)
    options = client.get("options") or {}
    if not isinstance(options, dict):
        raise ConfigurationError("Client 'options' must be a mapping")
    client["options"] = options
    return client
