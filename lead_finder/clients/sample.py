"""Offline client that replays prepared replies instead of calling a model."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence


class CannedResponseClient:
    """Return configured replies in order, repeating the last one.

    Replies can be given inline or as paths to text files. Every prompt is
    recorded in :attr:`prompts` so callers can inspect what was sent.
    """

    name = "canned"

    def __init__(
        self,
        responses: Optional[Sequence[str]] = None,
        *,
        files: Optional[Sequence[str]] = None,
    ) -> None:
        replies: List[str] = list(responses or [])
        for path in files or []:
            replies.append(Path(path).read_text(encoding="utf-8"))
        if not replies:
            raise ValueError("CannedResponseClient needs at least one response or file")
        self._responses = replies
        self._cursor = 0
        self.prompts: List[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self._responses[min(self._cursor, len(self._responses) - 1)]
        self._cursor += 1
        return reply
