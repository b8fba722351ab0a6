"""Workflow orchestration for prompting the model and parsing its replies."""

from .service import RequestFailedError, SearchOrchestrator

__all__ = ["RequestFailedError", "SearchOrchestrator"]
