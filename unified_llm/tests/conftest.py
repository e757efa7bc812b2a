"""Pytest configuration for the unified_llm test suite.

Every test starts from a clean environment: provider keys, the mock toggle,
the language and the config file variable are removed and the config cache
is reset, so results never depend on the developer's shell.
"""

from __future__ import annotations

from typing import Any, Iterator, List, Tuple

import pytest

from unified_llm.base.models import CompletionRequest, Message

_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "GOOGLE_API_KEY",
    "UNIFIED_LLM_USE_MOCKS",
    "UNIFIED_LLM_LANG",
    "UNIFIED_LLM_CONFIG_FILE",
    "UNIFIED_LLM_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove package-relevant environment variables for the test duration."""

    from unified_llm.config import reset_config_cache

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def enable_mock_providers(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Route every provider to the mock adapter for the duration of a test."""

    monkeypatch.setenv("UNIFIED_LLM_USE_MOCKS", "1")
    yield


class RecordingObserver:
    """Observer that keeps every notification for later assertions."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, Any, str]] = []

    def on_request(self, provider, model, request, operation) -> None:
        self.events.append(("request", request, operation))

    def on_response(self, provider, model, response, operation) -> None:
        self.events.append(("response", response, operation))

    def on_error(self, error, model, operation) -> None:
        self.events.append(("error", error, operation))

    def kinds(self) -> List[str]:
        return [kind for kind, _, _ in self.events]


@pytest.fixture()
def recording_observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture()
def make_request():
    """Factory for single-message user requests."""

    def _make(text: str = "hello", **kwargs: Any) -> CompletionRequest:
        return CompletionRequest(messages=(Message(role="user", content=text),), **kwargs)

    return _make
