"""Adapters for the generative model that answers discovery and enrichment prompts."""

from .base import GenerativeClient  # noqa: F401
from .gemini import GeminiClient  # noqa: F401
from .sample import CannedResponseClient  # noqa: F401

__all__ = [
    "GenerativeClient",
    "GeminiClient",
    "CannedResponseClient",
]
