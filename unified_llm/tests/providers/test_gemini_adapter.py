"""Gemini adapter against a faked ``genai.Client``."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import types

from unified_llm.base.dto import ParameterSchema, Tool, ToolParameters
from unified_llm.base.errors import LLMError, RateLimitError, StreamingError, ValidationError
from unified_llm.base.models import (
    CompletionRequest,
    GeminiModel,
    LLMProvider,
    Message,
    StructuredOutputKind,
    StructuredOutputSchema,
    ToolCall,
    ToolResult,
)
from unified_llm.gemini import GeminiProvider
from unified_llm.gemini.helpers import map_finish_reason, text_of, to_gemini_contents


def _part(text: str | None = None, function_call: Any = None, thought: bool = False) -> SimpleNamespace:
    return SimpleNamespace(text=text, function_call=function_call, thought=thought)


def _response(parts: List[Any], finish: str = "STOP", usage: Any = None, response_id: str | None = "resp-1"):
    return SimpleNamespace(
        response_id=response_id,
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts), finish_reason=SimpleNamespace(name=finish))],
        usage_metadata=usage,
    )


USAGE = SimpleNamespace(prompt_token_count=8, candidates_token_count=4, total_token_count=12)


@pytest.fixture()
def adapter(recording_observer) -> GeminiProvider:
    provider = GeminiProvider("g-test", GeminiModel.GEMINI_2_FLASH, observer=recording_observer)
    provider._client = MagicMock()
    provider._client.aio.models.generate_content = AsyncMock(return_value=_response([_part("Hello!")], usage=USAGE))
    return provider


def _sent(adapter: GeminiProvider) -> Dict[str, Any]:
    return adapter._client.aio.models.generate_content.await_args.kwargs


def test_header_goes_into_http_options(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: Dict[str, Any] = {}

    def fake_client(**kwargs: Any) -> str:
        captured.update(kwargs)
        return "client"

    monkeypatch.setattr("unified_llm.gemini.client.genai.Client", fake_client)
    GeminiProvider("g-test", "gemini-pro", config={"api_key_header": "x-goog-api-key"})
    assert captured["api_key"] == "g-test"
    assert captured["http_options"].headers == {"x-goog-api-key": "g-test"}


@pytest.mark.asyncio
async def test_complete_maps_request_and_response(adapter, recording_observer) -> None:
    request = CompletionRequest(
        messages=(
            Message(role="system", content="Be terse"),
            Message(role="system", content="Answer in English"),
            Message(role="user", content="Hi"),
            Message(role="assistant", content="Hello"),
            Message(role="user", content="How are you?"),
        ),
        temperature=0.1,
        max_tokens=64,
        top_p=0.5,
    )
    response = await adapter.complete(request)
    sent = _sent(adapter)
    assert sent["model"] == "gemini-2.0-flash"
    assert [c.role for c in sent["contents"]] == ["user", "model", "user"]
    assert sent["contents"][2].parts[0].text == "How are you?"
    config = sent["config"]
    assert config.system_instruction == "Be terse\n\nAnswer in English"
    assert config.temperature == 0.1
    assert config.max_output_tokens == 64
    assert config.top_p == 0.5
    assert response.id == "resp-1"
    assert response.content == "Hello!"
    assert response.finish_reason == "stop"
    assert response.usage.total_tokens == 12
    assert recording_observer.kinds() == ["request", "response"]


@pytest.mark.asyncio
async def test_response_without_id_or_usage(adapter, make_request) -> None:
    adapter._client.aio.models.generate_content.return_value = _response(
        [_part("thinking...", thought=True), _part("done")], finish="MAX_TOKENS", response_id=None
    )
    response = await adapter.complete(make_request())
    assert response.id.startswith("gemini_")
    assert response.content == "done"
    assert response.finish_reason == "length"
    assert response.usage.total_tokens == 0


@pytest.mark.asyncio
async def test_tool_invocation(adapter, make_request) -> None:
    tool = Tool(
        name="get_weather",
        description="Current weather",
        parameters=ToolParameters(properties={"city": ParameterSchema(type="string")}, required=["city"]),
    )
    fc = SimpleNamespace(id=None, name="get_weather", args={"city": "Rome"})
    adapter._client.aio.models.generate_content.return_value = _response([_part(function_call=fc)])
    response = await adapter.complete_with_tool_invocation(make_request(tools=[tool]))

    (declared,) = _sent(adapter)["config"].tools
    declaration = declared.function_declarations[0]
    assert declaration.name == "get_weather"
    assert declaration.parameters_json_schema == tool.to_json_schema()
    assert response.finish_reason == "tool_calls"
    (call,) = response.tool_calls
    assert call.name == "get_weather"
    assert dict(call.arguments) == {"city": "Rome"}
    assert call.id.startswith("call_")


@pytest.mark.asyncio
async def test_structured_output_json_schema(adapter, make_request) -> None:
    schema_body = {"type": "object", "properties": {"n": {"type": "integer"}}, "required": ["n"]}
    adapter._client.aio.models.generate_content.return_value = _response([_part('{"n": 3}')])
    schema = StructuredOutputSchema(StructuredOutputKind.JSON_SCHEMA, schema_body)
    response = await adapter.complete_with_structured_output(make_request(structured_output=schema))
    config = _sent(adapter)["config"]
    assert config.response_mime_type == "application/json"
    assert config.response_json_schema == schema_body
    assert dict(response.parsed_output) == {"n": 3}


@pytest.mark.asyncio
async def test_structured_output_type_description(adapter) -> None:
    adapter._client.aio.models.generate_content.return_value = _response([_part('{"n": 3}')])
    schema = StructuredOutputSchema(StructuredOutputKind.TYPE_DESCRIPTION, "type R = { n: number }")
    request = CompletionRequest(
        messages=(Message(role="system", content="Be exact"), Message(role="user", content="count")),
        structured_output=schema,
    )
    await adapter.complete_with_structured_output(request)
    instruction = _sent(adapter)["config"].system_instruction
    assert instruction.startswith("Be exact\n\n")
    assert "type R = { n: number }" in instruction


async def _agen(items: List[Any]):
    for item in items:
        if isinstance(item, Exception):
            raise item
        yield item


@pytest.mark.asyncio
async def test_stream(adapter, make_request) -> None:
    adapter._client.aio.models.generate_content_stream = AsyncMock(
        return_value=_agen(
            [
                _response([_part("Hel")], finish="FINISH_REASON_UNSPECIFIED"),
                _response([_part("lo")], usage=USAGE),
            ]
        )
    )
    stream = await adapter.stream(make_request())
    kinds = [chunk.type async for chunk in stream]
    assert kinds == ["content", "content", "usage", "finish"]
    final = await stream.get_complete()
    assert final.content == "Hello"
    assert final.usage.prompt_tokens == 8
    assert final.finish_reason == "stop"



@pytest.mark.asyncio
async def test_stream_closed_early_closes_vendor_generator(adapter, make_request) -> None:
    released: List[str] = []

    async def vendor_stream():
        try:
            for text in ("one", "two", "three"):
                yield _response([_part(text)], finish="FINISH_REASON_UNSPECIFIED")
        finally:
            released.append("closed")

    adapter._client.aio.models.generate_content_stream = AsyncMock(return_value=vendor_stream())
    async with await adapter.stream(make_request()) as stream:
        async for chunk in stream:
            assert chunk.data == "one"
            break
    assert released == ["closed"]


class FakeGenaiError(Exception):
    def __init__(self, code: int, status: str, message: str, details: Any = None) -> None:
        super().__init__(f"{code} {status}. {message}")
        self.code = code
        self.status = status
        self.message = message
        self.details = details


@pytest.mark.asyncio
async def test_resource_exhausted_with_retry_info(adapter, recording_observer, make_request) -> None:
    native = FakeGenaiError(
        429,
        "RESOURCE_EXHAUSTED",
        "Quota exceeded",
        {"error": {"details": [{"@type": "type.googleapis.com/google.rpc.RetryInfo", "retryDelay": "17s"}]}},
    )
    adapter._client.aio.models.generate_content.side_effect = native
    with pytest.raises(RateLimitError) as excinfo:
        await adapter.complete(make_request())
    err = excinfo.value
    assert err.retry_after == 17.0
    assert err.provider is LLMProvider.GEMINI
    assert err.original_error.status_reason == "RESOURCE_EXHAUSTED"
    assert err.__cause__ is native
    assert recording_observer.kinds() == ["request", "error"]


@pytest.mark.asyncio
async def test_invalid_argument(adapter, make_request) -> None:
    adapter._client.aio.models.generate_content.side_effect = FakeGenaiError(400, "INVALID_ARGUMENT", "bad field")
    with pytest.raises(ValidationError) as excinfo:
        await adapter.complete(make_request())
    assert excinfo.value.message == "Request validation failed for gemini: bad field"


@pytest.mark.asyncio
async def test_server_error_is_retryable(adapter, make_request) -> None:
    adapter._client.aio.models.generate_content.side_effect = FakeGenaiError(503, "UNAVAILABLE", "overloaded")
    with pytest.raises(LLMError) as excinfo:
        await adapter.complete(make_request())
    assert excinfo.value.retryable is True


@pytest.mark.asyncio
async def test_mid_stream_failure(adapter, make_request) -> None:
    adapter._client.aio.models.generate_content_stream = AsyncMock(
        return_value=_agen([_response([_part("x")]), FakeGenaiError(500, "INTERNAL", "oops")])
    )
    stream = await adapter.stream(make_request())
    with pytest.raises(StreamingError) as excinfo:
        await stream.get_complete()
    assert excinfo.value.status_code == 500


def test_tool_results_use_call_names() -> None:
    call = ToolCall("c1", "get_weather", {"city": "Rome"})
    contents, system = to_gemini_contents(
        [
            Message(role="user", content="weather?"),
            Message(role="assistant", content="", tool_calls=(call,)),
            Message(role="user", content="", tool_results=(ToolResult("c1", "sunny"),)),
        ]
    )
    assert system is None
    assert contents[1].role == "model"
    assert contents[1].parts[0].function_call.name == "get_weather"
    response_part = contents[2].parts[0].function_response
    assert response_part.name == "get_weather"
    assert response_part.response == {"result": "sunny"}


def test_helpers_on_real_sdk_types() -> None:
    response = types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=[types.Part.from_text(text="hey")]))]
    )
    assert text_of(response) == "hey"
    assert map_finish_reason("MAX_TOKENS", True) == "length"
    assert map_finish_reason("STOP", True) == "tool_calls"
    assert map_finish_reason(None, False) == "stop"
