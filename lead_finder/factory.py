"""Factory helpers for constructing model clients from configuration."""
from __future__ import annotations

import importlib
import logging
from typing import Any, Dict

from .clients.base import GenerativeClient
from .config import ConfigurationError, client_settings
from .orchestrator import SearchOrchestrator

LOGGER = logging.getLogger(__name__)


def _load_class(path: str):
    module_name, _, attr = path.rpartition(".")
    if not module_name:
        raise ConfigurationError(f"Invalid client class path '{path}'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"Could not import client module '{module_name}'") from exc
    try:
        return getattr(module, attr)
    except AttributeError as exc:
        raise ConfigurationError(f"Module '{module_name}' does not define '{attr}'") from exc


def build_client(config: Dict[str, Any]) -> GenerativeClient:
    """Instantiate the model client described by the ``client`` section."""

    settings = client_settings(config)
    client_cls = _load_class(settings["class"])
    LOGGER.debug("Building client %s", settings["class"])
    return client_cls(**settings["options"])


def build_orchestrator(config: Dict[str, Any]) -> SearchOrchestrator:
    return SearchOrchestrator(build_client(config))
