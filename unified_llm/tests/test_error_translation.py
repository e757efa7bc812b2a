"""Translator precedence, helper extraction and error logging."""

from __future__ import annotations

import json
import logging

import pytest

from unified_llm.base.errors import (
    AuthenticationError,
    LLMError,
    RateLimitError,
    ValidationError,
    extract_retry_after,
    extract_status_code,
    log_llm_error,
    translate_provider_error,
)
from unified_llm.base.models import CompletionResponse, LLMProvider, UsageData


def _error_response(status: int, content: str = "provider said no", retry_after=None) -> CompletionResponse:
    return CompletionResponse(
        id="error_1",
        content=content,
        status_code=status,
        usage=UsageData.empty("gpt-4"),
        finish_reason="error",
        status_reason="SOME_REASON",
        retry_after_seconds=retry_after,
    )


@pytest.mark.parametrize(
    "status, error_type, retryable",
    [
        (401, AuthenticationError, False),
        (403, AuthenticationError, False),
        (429, RateLimitError, True),
        (400, ValidationError, False),
        (404, LLMError, False),
        (499, LLMError, False),
        (500, LLMError, True),
        (503, LLMError, True),
    ],
)
def test_status_precedence(status: int, error_type: type, retryable: bool) -> None:
    response = _error_response(status)
    err = translate_provider_error(response, LLMProvider.OPENAI)
    assert type(err) is error_type
    assert err.retryable is retryable
    assert err.status_code == status
    assert err.provider is LLMProvider.OPENAI
    assert err.original_error is response


def test_validation_message_includes_content() -> None:
    err = translate_provider_error(_error_response(400, content="max_tokens too large"), LLMProvider.GEMINI)
    assert err.message == "Request validation failed for gemini: max_tokens too large"


def test_provider_error_message_names_status() -> None:
    err = translate_provider_error(_error_response(502), LLMProvider.GEMINI)
    assert err.message == "Provider error from gemini (status: 502)"


def test_rate_limit_carries_retry_after_hint() -> None:
    err = translate_provider_error(_error_response(429, retry_after=8.0), LLMProvider.GEMINI)
    assert isinstance(err, RateLimitError)
    assert err.retry_after == 8.0
    assert err.message == "Rate limit exceeded for gemini provider. Please retry after 8 seconds"


def test_rate_limit_without_hint() -> None:
    err = translate_provider_error(_error_response(429), LLMProvider.OPENAI)
    assert err.retry_after is None
    assert err.message == "Rate limit exceeded for openai provider"


def test_translation_is_deterministic() -> None:
    response = _error_response(429, retry_after=1.0)
    first = translate_provider_error(response, LLMProvider.OPENAI)
    second = translate_provider_error(response, LLMProvider.OPENAI)
    assert type(first) is type(second)
    assert first.to_dict() == second.to_dict()


def test_messages_follow_language(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UNIFIED_LLM_LANG", "es")
    err = translate_provider_error(_error_response(401), LLMProvider.OPENAI)
    assert err.message == "Falló la autenticación con el proveedor openai"


class _Resp:
    def __init__(self, status_code: int, headers=None) -> None:
        self.status_code = status_code
        self.headers = headers or {}


def test_extract_status_code_shapes() -> None:
    class WithStatusCode(Exception):
        status_code = 401

    class WithCode(Exception):
        code = 429
        status = "RESOURCE_EXHAUSTED"

    class WithResponse(Exception):
        def __init__(self) -> None:
            super().__init__("x")
            self.response = _Resp(503)

    assert extract_status_code(WithStatusCode()) == 401
    assert extract_status_code(WithCode()) == 429
    assert extract_status_code(WithResponse()) == 503
    assert extract_status_code(ValueError("plain")) is None


def test_extract_status_code_walks_cause_chain() -> None:
    class Inner(Exception):
        status_code = 500

    try:
        try:
            raise Inner("inner")
        except Inner as exc:
            raise RuntimeError("outer") from exc
    except RuntimeError as outer:
        assert extract_status_code(outer) == 500


def test_extract_status_code_ignores_out_of_range_and_text() -> None:
    class Weird(Exception):
        status_code = 42
        code = "rate_limit_exceeded"

    assert extract_status_code(Weird()) is None


def test_extract_retry_after_from_header() -> None:
    class SdkError(Exception):
        def __init__(self) -> None:
            super().__init__("rate limited")
            self.response = _Resp(429, {"Retry-After": "2"})

    assert extract_retry_after(SdkError()) == 2.0


@pytest.mark.parametrize("retry_delay, expected", [("8s", 8.0), ("1.5s", 1.5), ("0s", 0.0)])
def test_extract_retry_after_from_google_retry_info(retry_delay: str, expected: float) -> None:
    class FakeError(Exception):
        def __init__(self) -> None:
            super().__init__("rate limited")
            self.details = {
                "error": {
                    "details": [
                        {"@type": "type.googleapis.com/google.rpc.ErrorInfo"},
                        {"@type": "type.googleapis.com/google.rpc.RetryInfo", "retryDelay": retry_delay},
                    ]
                }
            }

    assert extract_retry_after(FakeError()) == expected


def test_extract_retry_after_absent() -> None:
    assert extract_retry_after(RuntimeError("no hint")) is None


def _payload(record: logging.LogRecord) -> dict:
    return json.loads(record.getMessage())


def test_log_llm_error_levels_follow_kind(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="unified_llm")
    log_llm_error(RateLimitError("slow", LLMProvider.OPENAI, status_code=429), model="gpt-4")
    log_llm_error(AuthenticationError("denied", LLMProvider.OPENAI, status_code=401), model="gpt-4")

    records = [r for r in caplog.records if r.name.startswith("unified_llm")]
    assert [r.levelno for r in records] == [logging.WARNING, logging.ERROR]
    first, second = (_payload(r) for r in records)
    assert first["event"] == "llm.error"
    assert first["label"] == "LLM Rate Limit Error"
    assert first["provider"] == "openai"
    assert first["model"] == "gpt-4"
    assert first["status_code"] == 429
    assert second["label"] == "LLM Authentication Error"


def test_log_llm_error_generic_label(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="unified_llm")
    log_llm_error(LLMError("boom", LLMProvider.GEMINI, status_code=500, retryable=True), operation="complete")
    record = [r for r in caplog.records if r.name.startswith("unified_llm")][-1]
    data = _payload(record)
    assert data["label"] == "LLM Error"
    assert data["operation"] == "complete"
    assert data["retryable"] is True
