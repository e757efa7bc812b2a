"""OpenAI provider adapter.

Implements the provider contract on the chat completions API through the
async SDK client (``openai.AsyncOpenAI``), created once per adapter.

Config keys
-----------
- ``client_options``: mapping forwarded to ``AsyncOpenAI`` (``base_url``,
  ``timeout``, ``max_retries`` ...).
- ``api_key_header``: when set, the API key is also sent in this header on
  every request (gateways that authenticate by header).

Structured output uses ``response_format`` (``json_schema`` for JSON schemas,
``json_object`` plus a system instruction for type descriptions). Streaming
requests usage in the final chunk and assembles tool call deltas.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Dict, Mapping, Optional

from openai import AsyncOpenAI

from ..base.abstract_provider import (
    OP_COMPLETE,
    OP_STRUCTURED,
    OP_TOOLS,
    AbstractLLMProvider,
)
from ..base.errors_parts.translation import extract_retry_after, extract_status_code
from ..base.models_parts.completion_request import CompletionRequest
from ..base.models_parts.completion_response import CompletionResponse
from ..base.models_parts.provider import LLMProvider, SupportedModel
from ..base.models_parts.stream_chunk import StreamChunk
from ..base.models_parts.structured import StructuredOutputResponse
from ..base.models_parts.usage_data import UsageData
from ..base.observer import ProviderObserver
from ..base.streaming import StreamResponse, close_vendor_stream
from ..base.structured import to_structured_response
from .helpers import (
    ToolCallAccumulator,
    error_body,
    map_finish_reason,
    response_format_for,
    system_prefix_for,
    to_openai_messages,
    to_openai_tools,
    tool_calls_from_message,
    usage_from,
)

__all__ = ["OpenAIProvider"]


class OpenAIProvider(AbstractLLMProvider):
    """OpenAI chat completions adapter."""

    def __init__(
        self,
        api_key: Optional[str],
        model: SupportedModel,
        provider: LLMProvider = LLMProvider.OPENAI,
        config: Optional[Mapping[str, Any]] = None,
        *,
        observer: Optional[ProviderObserver] = None,
    ) -> None:
        super().__init__(api_key, model, provider, config, observer=observer)
        self._client: Any = self._make_client()

    def _make_client(self) -> AsyncOpenAI:
        options: Dict[str, Any] = dict(self.config.get("client_options") or {})
        header = self.config.get("api_key_header")
        if header:
            headers = dict(options.get("default_headers") or {})
            headers[str(header)] = self._api_key
            options["default_headers"] = headers
        return AsyncOpenAI(api_key=self._api_key, **options)

    # ---- request shaping -------------------------------------------------------

    def _build_params(self, request: CompletionRequest, *, include_tools: bool = True) -> Dict[str, Any]:
        schema = request.structured_output
        params: Dict[str, Any] = {
            "model": self.model_name,
            "messages": to_openai_messages(request.messages, system_prefix_for(schema)),
        }
        if request.temperature is not None:
            params["temperature"] = request.temperature
        if request.max_tokens is not None:
            params["max_tokens"] = request.max_tokens
        if request.top_p is not None:
            params["top_p"] = request.top_p
        if include_tools and request.tools:
            params["tools"] = to_openai_tools(request.tools)
        if schema is not None:
            params["response_format"] = response_format_for(schema)
        params.update(request.provider_config)
        return params

    async def _create(self, params: Dict[str, Any]) -> Any:
        return await self._client.chat.completions.create(**params)

    # ---- operations ----------------------------------------------------------------

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        return await self._execute(
            OP_COMPLETE,
            request,
            lambda req: self._create(self._build_params(req)),
            self._translate_response,
        )

    async def complete_with_tool_invocation(self, request: CompletionRequest) -> CompletionResponse:
        return await self._execute(
            OP_TOOLS,
            request,
            lambda req: self._create(self._build_params(req)),
            self._translate_response,
        )

    async def complete_with_structured_output(self, request: CompletionRequest) -> StructuredOutputResponse:
        def translate(raw: Any) -> StructuredOutputResponse:
            return to_structured_response(self._translate_response(raw), request.structured_output, self._provider)

        return await self._execute(
            OP_STRUCTURED,
            request,
            lambda req: self._create(self._build_params(req)),
            translate,
        )

    async def stream(self, request: CompletionRequest) -> StreamResponse:
        def open_stream(req: CompletionRequest) -> Any:
            params = self._build_params(req)
            params["stream"] = True
            params.setdefault("stream_options", {"include_usage": True})
            return self._create(params)

        return await self._open_stream(request, open_stream, self._stream_chunks)

    async def _stream_chunks(self, raw_stream: Any) -> AsyncIterator[StreamChunk]:
        tool_calls = ToolCallAccumulator()
        usage: Optional[UsageData] = None
        finish_reason: Optional[str] = None
        try:
            async for chunk in raw_stream:
                if getattr(chunk, "usage", None) is not None:
                    usage = usage_from(chunk.usage, getattr(chunk, "model", None) or self.model_name)
                for choice in getattr(chunk, "choices", None) or ():
                    delta = getattr(choice, "delta", None)
                    if delta is not None:
                        if getattr(delta, "content", None):
                            yield StreamChunk.content(delta.content)
                        tool_calls.add(getattr(delta, "tool_calls", None))
                    if getattr(choice, "finish_reason", None):
                        finish_reason = choice.finish_reason
        finally:
            await close_vendor_stream(raw_stream)
        for call in tool_calls.calls():
            yield StreamChunk.tool_call(call)
        if usage is not None:
            yield StreamChunk.usage(usage)
        yield StreamChunk.finish(map_finish_reason(finish_reason, bool(tool_calls)))

    # ---- response hooks ------------------------------------------------------------

    def _translate_response(self, raw: Any) -> CompletionResponse:
        """Map a ``ChatCompletion``; a reply without choices yields empty content."""
        choices = getattr(raw, "choices", None) or []
        choice = choices[0] if choices else None
        message = getattr(choice, "message", None)
        calls = tool_calls_from_message(message)
        response_id = getattr(raw, "id", None)
        return CompletionResponse(
            id=str(response_id) if response_id else "unknown",
            content=getattr(message, "content", None) or "",
            status_code=200,
            usage=self._extract_usage_metrics(raw),
            finish_reason=map_finish_reason(getattr(choice, "finish_reason", None), bool(calls)),
            tool_calls=tuple(calls),
        )

    def _extract_usage_metrics(self, raw: Any) -> UsageData:
        return usage_from(getattr(raw, "usage", None), getattr(raw, "model", None) or self.model_name)

    def parse_provider_error(self, error: Exception) -> CompletionResponse:
        """Normalize an OpenAI SDK exception.

        Status from the exception chain (500 when absent), reason from the
        error ``code`` (``UNKNOWN_ERROR`` when absent), message from the
        error body or exception text, retry hint from ``Retry-After``.
        """
        body = error_body(error)
        code = getattr(error, "code", None) or body.get("code")
        message = getattr(error, "message", None) or body.get("message")
        return self._fallback_error_response(
            error,
            status_code=extract_status_code(error),
            status_reason=str(code) if code else None,
            message=str(message) if message else None,
            retry_after=extract_retry_after(error),
        )
