"""Interface shared by model clients."""
from __future__ import annotations

from typing import Protocol


class GenerativeClient(Protocol):
    """Anything that turns a prompt into free-form text."""

    name: str

    def generate(self, prompt: str) -> str:  # pragma: no cover - runtime protocol
        """Return the model's reply to ``prompt``, raising on any failure."""
