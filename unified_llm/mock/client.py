"""Deterministic mock provider for offline use.

Purpose
-------
Implements the full provider contract without network traffic so higher
layers (builder, facade, observers, error translation) can be exercised
offline. The factory routes every provider here when
``UNIFIED_LLM_USE_MOCKS`` is truthy.

Behavior
--------
- ``complete`` echoes the last user message.
- ``stream`` yields the echo word by word, then usage and finish chunks.
- ``complete_with_structured_output`` returns a JSON object shaped after the
  request schema (the echo for string fields, zero values otherwise).
- ``complete_with_tool_invocation`` calls the first tool with arguments shaped
  after its parameter schema.
- Usage counts whitespace-separated words.

Config key ``mock_error`` (mapping with ``status_code``, optional ``message``
and ``retry_after``) makes every vendor call fail with ``MockProviderError``,
which then goes through the regular failure policy.
"""

from __future__ import annotations

import json
import zlib
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional

from ..base.abstract_provider import OP_COMPLETE, OP_STRUCTURED, OP_TOOLS, AbstractLLMProvider
from ..base.dto.tools import ParameterSchema, Tool
from ..base.models_parts.completion_request import CompletionRequest
from ..base.models_parts.completion_response import CompletionResponse
from ..base.models_parts.message import ToolCall
from ..base.models_parts.stream_chunk import StreamChunk
from ..base.models_parts.structured import StructuredOutputKind, StructuredOutputResponse
from ..base.models_parts.usage_data import UsageData
from ..base.streaming import StreamResponse
from ..base.structured import to_structured_response

_ZERO_VALUES: Dict[str, Any] = {
    "number": 0,
    "integer": 0,
    "boolean": False,
    "array": [],
    "object": {},
    "null": None,
}


class MockProviderError(Exception):
    """Simulated vendor failure raised when ``mock_error`` is configured."""

    def __init__(self, status_code: int, message: str = "mock failure", retry_after: Optional[float] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.retry_after = retry_after


def _words(text: str) -> int:
    return len(text.split())


def _value_for(schema: Mapping[str, Any], text: str) -> Any:
    kind = schema.get("type")
    if isinstance(kind, list):
        kind = next((k for k in kind if k != "null"), "null")
    if kind == "object":
        return _object_for(schema, text)
    if kind == "string" or kind is None:
        enum = schema.get("enum")
        return enum[0] if enum else text
    return _ZERO_VALUES.get(kind)


def _object_for(schema: Mapping[str, Any], text: str) -> Dict[str, Any]:
    properties = schema.get("properties") or {}
    return {name: _value_for(prop if isinstance(prop, Mapping) else {}, text) for name, prop in properties.items()}


class MockProvider(AbstractLLMProvider):
    """Adapter that answers locally and deterministically."""

    def _echo(self, request: CompletionRequest) -> str:
        for msg in reversed(request.messages):
            if msg.role == "user" and msg.content:
                return msg.content
        return request.messages[-1].content if request.messages else ""

    async def _invoke(self, request: CompletionRequest) -> Dict[str, Any]:
        failure = self.config.get("mock_error")
        if failure:
            raise MockProviderError(
                int(failure.get("status_code", 500)),
                str(failure.get("message", "mock failure")),
                failure.get("retry_after"),
            )
        text = self._echo(request)
        return {
            "id": f"mock_{zlib.crc32(f'{self.model_name}:{text}'.encode('utf-8')):08x}",
            "text": text,
            "prompt_words": sum(_words(m.content) for m in request.messages),
            "tool_calls": [],
        }

    async def _invoke_structured(self, request: CompletionRequest) -> Dict[str, Any]:
        raw = await self._invoke(request)
        schema = request.structured_output
        if schema is not None and schema.kind is StructuredOutputKind.JSON_SCHEMA:
            payload: Any = _object_for(schema.schema_dict(), raw["text"])
        else:
            payload = {"response": raw["text"]}
        raw["text"] = json.dumps(payload, ensure_ascii=False)
        return raw

    async def _invoke_tools(self, request: CompletionRequest) -> Dict[str, Any]:
        raw = await self._invoke(request)
        tool: Tool = request.tools[0]
        arguments = {
            name: _value_for(prop.model_dump(exclude_none=True) if isinstance(prop, ParameterSchema) else {}, raw["text"])
            for name, prop in tool.parameters.properties.items()
        }
        raw["tool_calls"] = [ToolCall(id="mock_call_1", name=tool.name, arguments=arguments)]
        raw["text"] = ""
        return raw

    # ---- operations ----------------------------------------------------------------

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        return await self._execute(OP_COMPLETE, request, self._invoke, self._translate_response)

    async def complete_with_tool_invocation(self, request: CompletionRequest) -> CompletionResponse:
        return await self._execute(OP_TOOLS, request, self._invoke_tools, self._translate_response)

    async def complete_with_structured_output(self, request: CompletionRequest) -> StructuredOutputResponse:
        def translate(raw: Dict[str, Any]) -> StructuredOutputResponse:
            return to_structured_response(self._translate_response(raw), request.structured_output, self._provider)

        return await self._execute(OP_STRUCTURED, request, self._invoke_structured, translate)

    async def stream(self, request: CompletionRequest) -> StreamResponse:
        return await self._open_stream(request, self._invoke, self._stream_chunks)

    async def _stream_chunks(self, raw: Dict[str, Any]) -> AsyncIterator[StreamChunk]:
        words: List[str] = raw["text"].split(" ") if raw["text"] else []
        for index, word in enumerate(words):
            yield StreamChunk.content(word if index == 0 else f" {word}")
        yield StreamChunk.usage(self._extract_usage_metrics(raw))
        yield StreamChunk.finish("stop")

    # ---- response hooks ------------------------------------------------------------

    def _translate_response(self, raw: Dict[str, Any]) -> CompletionResponse:
        calls = tuple(raw["tool_calls"])
        return CompletionResponse(
            id=raw["id"],
            content=raw["text"],
            status_code=200,
            usage=self._extract_usage_metrics(raw),
            finish_reason="tool_calls" if calls else "stop",
            tool_calls=calls,
        )

    def _extract_usage_metrics(self, raw: Dict[str, Any]) -> UsageData:
        prompt = int(raw["prompt_words"])
        completion = _words(raw["text"])
        return UsageData(
            prompt_tokens=prompt,
            completion_tokens=completion,
            total_tokens=prompt + completion,
            model=self.model_name,
        )

    def parse_provider_error(self, error: Exception) -> CompletionResponse:
        return self._fallback_error_response(
            error,
            status_code=getattr(error, "status_code", None),
            message=getattr(error, "message", None),
            retry_after=getattr(error, "retry_after", None),
        )


__all__ = ["MockProvider", "MockProviderError"]
