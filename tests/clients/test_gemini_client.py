"""Unit tests for :mod:`lead_finder.clients.gemini`."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

pytest.importorskip("google.genai", reason="The Gemini client requires google-genai")

from lead_finder.clients.gemini import DEFAULT_MODEL, GeminiClient  # noqa: E402


class FakeModels:
    def __init__(self, text) -> None:
        self.text = text
        self.calls: list[dict] = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(text=self.text)


def _client(text="| Name | Category |", **kwargs) -> tuple[GeminiClient, FakeModels]:
    models = FakeModels(text)
    return GeminiClient(client=SimpleNamespace(models=models), **kwargs), models


def test_generate_enables_search_and_maps_tools() -> None:
    client, models = _client()

    reply = client.generate("find dentists")

    assert reply == "| Name | Category |"
    call = models.calls[0]
    assert call["model"] == DEFAULT_MODEL
    assert call["contents"] == "find dentists"
    assert call["config"] == {"tools": [{"google_search": {}}, {"google_maps": {}}]}


def test_generate_passes_configured_model_tools_and_temperature() -> None:
    client, models = _client(model="gemini-pro", tools=["google_search"], temperature=0.2)

    client.generate("prompt")

    call = models.calls[0]
    assert call["model"] == "gemini-pro"
    assert call["config"] == {"tools": [{"google_search": {}}], "temperature": 0.2}


def test_generate_returns_empty_string_for_missing_text() -> None:
    client, _ = _client(text=None)

    assert client.generate("prompt") == ""


def test_generate_propagates_sdk_errors() -> None:
    class ExplodingModels:
        def generate_content(self, **kwargs):
            raise RuntimeError("429 RESOURCE_EXHAUSTED")

    client = GeminiClient(client=SimpleNamespace(models=ExplodingModels()))

    with pytest.raises(RuntimeError):
        client.generate("prompt")


def test_missing_api_key_fails_on_first_request_not_on_construction(monkeypatch) -> None:
    for variable in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "GOOGLE_GENAI_USE_VERTEXAI"):
        monkeypatch.delenv(variable, raising=False)

    client = GeminiClient()

    with pytest.raises(Exception):
        client.generate("prompt")
