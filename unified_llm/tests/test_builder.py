"""Builder chaining, missing-field reporting and key resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from unified_llm.base.errors import ValidationError
from unified_llm.base.models import APIKeyConfig, GeminiModel, LLMProvider, OpenAIModel
from unified_llm.client import LLMClient, LLMClientBuilder
from unified_llm.config import reset_config_cache
from unified_llm.mock import MockProvider


def test_builder_factory_returns_fresh_builders() -> None:
    first = LLMClient.builder()
    assert isinstance(first, LLMClientBuilder)
    assert first is not LLMClient.builder()


def test_every_missing_field_is_reported_at_once() -> None:
    with pytest.raises(ValidationError) as excinfo:
        LLMClientBuilder().build()
    assert excinfo.value.message == "Missing required fields: provider, model, api_key"
    assert excinfo.value.provider is LLMProvider.OPENAI


def test_missing_key_only(enable_mock_providers) -> None:
    builder = LLMClientBuilder().set_provider(LLMProvider.GEMINI).set_model(GeminiModel.GEMINI_PRO)
    with pytest.raises(ValidationError) as excinfo:
        builder.build()
    assert excinfo.value.message == "Missing required fields: api_key"
    assert excinfo.value.provider is LLMProvider.GEMINI


def test_blank_model_counts_as_missing() -> None:
    builder = LLMClientBuilder().set_provider(LLMProvider.OPENAI).set_model("  ").set_api_key("k")
    with pytest.raises(ValidationError, match="model"):
        builder.build()


def test_setters_chain_and_last_write_wins(enable_mock_providers) -> None:
    client = (
        LLMClientBuilder()
        .set_model(OpenAIModel.GPT_4)
        .set_provider(LLMProvider.GEMINI)
        .set_api_key("first")
        .set_provider(LLMProvider.OPENAI)
        .set_api_key("second")
        .build()
    )
    assert client.provider is LLMProvider.OPENAI
    assert client.model is OpenAIModel.GPT_4
    assert client._provider._api_key == "second"


def test_unknown_provider_value_is_rejected() -> None:
    builder = LLMClientBuilder().set_provider("anthropic").set_model("claude").set_api_key("k")  # type: ignore[arg-type]
    with pytest.raises(ValidationError) as excinfo:
        builder.build()
    assert excinfo.value.provider == "anthropic"


def test_environment_key_resolution(monkeypatch, enable_mock_providers) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
    client = (
        LLMClientBuilder()
        .set_provider(LLMProvider.OPENAI)
        .set_model(OpenAIModel.GPT_4O_MINI)
        .set_api_key_config(APIKeyConfig.ENVIRONMENT)
        .build()
    )
    assert client._provider._api_key == "sk-from-env"


def test_explicit_key_beats_environment(monkeypatch, enable_mock_providers) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")
    client = (
        LLMClientBuilder()
        .set_provider(LLMProvider.GEMINI)
        .set_model("gemini-pro")
        .set_api_key("explicit")
        .set_api_key_config(APIKeyConfig.ENVIRONMENT)
        .build()
    )
    assert client._provider._api_key == "explicit"


def test_environment_without_variable_reports_api_key() -> None:
    builder = (
        LLMClientBuilder()
        .set_provider(LLMProvider.GEMINI)
        .set_model("gemini-pro")
        .set_api_key_config(APIKeyConfig.ENVIRONMENT)
    )
    with pytest.raises(ValidationError, match="api_key"):
        builder.build()


def test_from_env_uses_alias_and_configured_model(monkeypatch, enable_mock_providers) -> None:
    monkeypatch.setenv("GOOGLE_API_KEY", "g-key")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.0-flash-lite")
    client = LLMClientBuilder.from_env(LLMProvider.GEMINI).build()
    assert client.provider is LLMProvider.GEMINI
    assert client.model == "gemini-2.0-flash-lite"
    assert client._provider._api_key == "g-key"


def test_from_env_forwards_file_config_to_adapter(tmp_path: Path, monkeypatch, enable_mock_providers) -> None:
    cfg = tmp_path / "llm.yaml"
    cfg.write_text(
        "openai:\n  model: gpt-4\n  api_key_header: api-key\n  client_options:\n    timeout: 30\n", encoding="utf-8"
    )
    monkeypatch.setenv("UNIFIED_LLM_CONFIG_FILE", str(cfg))
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
    reset_config_cache()

    client = LLMClientBuilder.from_env(LLMProvider.OPENAI).build()
    assert client.model == "gpt-4"
    assert client._provider.config["client_options"] == {"timeout": 30}
    assert client._provider.config["api_key_header"] == "api-key"
    assert "model" not in client._provider.config
    assert "api_key" not in client._provider.config


@pytest.mark.parametrize("value", ["changeme", "your-placeholder-key", "test_key"])
def test_environment_placeholder_key_is_missing(monkeypatch, enable_mock_providers, value) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", value)
    builder = LLMClientBuilder.from_env(LLMProvider.OPENAI)
    with pytest.raises(ValidationError) as excinfo:
        builder.build()
    assert excinfo.value.message == "Missing required fields: api_key"


def test_placeholder_canonical_key_falls_back_to_alias(monkeypatch, enable_mock_providers) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "changeme")
    monkeypatch.setenv("GOOGLE_API_KEY", "g-real")
    client = LLMClientBuilder.from_env(LLMProvider.GEMINI).build()
    assert client._provider._api_key == "g-real"


def test_header_mode_adds_default_header_name(enable_mock_providers) -> None:
    client = (
        LLMClientBuilder()
        .set_provider(LLMProvider.OPENAI)
        .set_model("gpt-4")
        .set_api_key("k")
        .set_api_key_config(APIKeyConfig.HEADER)
        .build()
    )
    assert client._provider.config["api_key_header"] == "x-api-key"


def test_header_name_can_be_overridden(enable_mock_providers) -> None:
    client = (
        LLMClientBuilder()
        .set_provider(LLMProvider.OPENAI)
        .set_model("gpt-4")
        .set_api_key("k")
        .set_config({"api_key_header": "api-key"})
        .set_api_key_config(APIKeyConfig.HEADER)
        .build()
    )
    assert client._provider.config["api_key_header"] == "api-key"


def test_builder_reuse_does_not_affect_built_clients(enable_mock_providers, recording_observer) -> None:
    builder = (
        LLMClientBuilder()
        .set_provider(LLMProvider.OPENAI)
        .set_model("gpt-4")
        .set_api_key("k")
        .set_config({"mock": 1})
        .set_observer(recording_observer)
    )
    first = builder.build()
    second = builder.set_model("gpt-3.5-turbo").set_config({"mock": 2}).build()
    assert isinstance(first._provider, MockProvider)
    assert first.model == "gpt-4"
    assert first._provider.config["mock"] == 1
    assert second.model == "gpt-3.5-turbo"
    assert second._provider.config["mock"] == 2
    assert first._provider.observer is recording_observer
