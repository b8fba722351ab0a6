"""Google Gemini client with search grounding enabled."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from google import genai

LOGGER = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TOOLS = ("google_search", "google_maps")


@dataclass
class GeminiClientConfig:
    """Configuration parameters for :class:`GeminiClient`."""

    model: str = DEFAULT_MODEL
    api_key: Optional[str] = None
    tools: Sequence[str] = field(default_factory=lambda: list(DEFAULT_TOOLS))
    temperature: Optional[float] = None


class GeminiClient:
    """Send prompts to Gemini with the Google Search and Maps tools enabled.

    Structured (JSON) output cannot be combined with these tools, which is why
    replies come back as markdown tables that are parsed afterwards.
    """

    name = "gemini"

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        *,
        api_key: Optional[str] = None,
        tools: Optional[Sequence[str]] = None,
        temperature: Optional[float] = None,
        client: Any = None,
    ) -> None:
        self.config = GeminiClientConfig(
            model=model,
            api_key=api_key,
            tools=list(tools) if tools is not None else list(DEFAULT_TOOLS),
            temperature=temperature,
        )
        self._client = client

    @property
    def sdk(self) -> Any:
        """The ``genai.Client``, created on first use.

        Without an explicit key the SDK reads GEMINI_API_KEY / GOOGLE_API_KEY and
        raises when neither is set, so a missing key surfaces as a failed request.
        """

        if self._client is None:
            self._client = genai.Client(api_key=self.config.api_key)
        return self._client

    def _generation_config(self) -> Dict[str, Any]:
        config: Dict[str, Any] = {"tools": [{tool: {}} for tool in self.config.tools]}
        if self.config.temperature is not None:
            config["temperature"] = self.config.temperature
        return config

    def generate(self, prompt: str) -> str:
        LOGGER.debug("Sending %s character prompt to %s", len(prompt), self.config.model)
        response = self.sdk.models.generate_content(
            model=self.config.model,
            contents=prompt,
            config=self._generation_config(),
        )
        text = response.text or ""
        LOGGER.debug("Received %s characters from %s", len(text), self.config.model)
        return text
