"""Gemini provider adapter.

Implements the provider contract on ``google.genai.Client().aio.models``.
The SDK client is created once per adapter.

Config keys
-----------
- ``client_options``: mapping forwarded to ``genai.Client`` (``http_options``,
  ``vertexai`` ...).
- ``api_key_header``: when set, the API key is also sent in this header on
  every request.

System messages are lifted into ``system_instruction``. Structured output
uses ``response_mime_type="application/json"`` with ``response_json_schema``;
type descriptions become part of the system instruction.
"""

from __future__ import annotations

import time
from typing import Any, AsyncIterator, Dict, Mapping, Optional

from google import genai
from google.genai import types

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
from ..base.models_parts.structured import StructuredOutputKind, StructuredOutputResponse
from ..base.models_parts.usage_data import UsageData
from ..base.observer import ProviderObserver
from ..base.streaming import StreamResponse, close_vendor_stream
from ..base.structured import to_structured_response, type_description_instruction
from .helpers import (
    finish_reason_of,
    map_finish_reason,
    text_of,
    to_gemini_contents,
    to_gemini_tools,
    tool_calls_of,
    usage_from,
)

__all__ = ["GeminiProvider"]


class GeminiProvider(AbstractLLMProvider):
    """Gemini ``generate_content`` adapter."""

    def __init__(
        self,
        api_key: Optional[str],
        model: SupportedModel,
        provider: LLMProvider = LLMProvider.GEMINI,
        config: Optional[Mapping[str, Any]] = None,
        *,
        observer: Optional[ProviderObserver] = None,
    ) -> None:
        super().__init__(api_key, model, provider, config, observer=observer)
        self._client: Any = self._make_client()

    def _make_client(self) -> genai.Client:
        options: Dict[str, Any] = dict(self.config.get("client_options") or {})
        header = self.config.get("api_key_header")
        if header:
            http_options = options.get("http_options") or {}
            if isinstance(http_options, types.HttpOptions):
                http_options = http_options.model_dump(exclude_none=True)
            http_options = dict(http_options)
            headers = dict(http_options.get("headers") or {})
            headers[str(header)] = self._api_key
            http_options["headers"] = headers
            options["http_options"] = types.HttpOptions(**http_options)
        return genai.Client(api_key=self._api_key, **options)

    # ---- request shaping -------------------------------------------------------

    def _build_call(self, request: CompletionRequest) -> Dict[str, Any]:
        contents, system_instruction = to_gemini_contents(request.messages)
        config: Dict[str, Any] = {}
        schema = request.structured_output
        if schema is not None:
            config["response_mime_type"] = "application/json"
            if schema.kind is StructuredOutputKind.JSON_SCHEMA:
                config["response_json_schema"] = schema.schema_dict()
            else:
                instruction = type_description_instruction(schema)
                system_instruction = f"{system_instruction}\n\n{instruction}" if system_instruction else instruction
        if system_instruction:
            config["system_instruction"] = system_instruction
        if request.temperature is not None:
            config["temperature"] = request.temperature
        if request.max_tokens is not None:
            config["max_output_tokens"] = request.max_tokens
        if request.top_p is not None:
            config["top_p"] = request.top_p
        if request.tools:
            config["tools"] = to_gemini_tools(request.tools)
        config.update(request.provider_config)
        return {
            "model": self.model_name,
            "contents": contents,
            "config": types.GenerateContentConfig(**config),
        }

    async def _generate(self, request: CompletionRequest) -> Any:
        return await self._client.aio.models.generate_content(**self._build_call(request))

    # ---- operations ----------------------------------------------------------------

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        return await self._execute(OP_COMPLETE, request, self._generate, self._translate_response)

    async def complete_with_tool_invocation(self, request: CompletionRequest) -> CompletionResponse:
        return await self._execute(OP_TOOLS, request, self._generate, self._translate_response)

    async def complete_with_structured_output(self, request: CompletionRequest) -> StructuredOutputResponse:
        def translate(raw: Any) -> StructuredOutputResponse:
            return to_structured_response(self._translate_response(raw), request.structured_output, self._provider)

        return await self._execute(OP_STRUCTURED, request, self._generate, translate)

    async def stream(self, request: CompletionRequest) -> StreamResponse:
        async def open_stream(req: CompletionRequest) -> Any:
            return await self._client.aio.models.generate_content_stream(**self._build_call(req))

        return await self._open_stream(request, open_stream, self._stream_chunks)

    async def _stream_chunks(self, raw_stream: Any) -> AsyncIterator[StreamChunk]:
        usage: Optional[UsageData] = None
        finish_reason: Optional[str] = None
        saw_tool_calls = False
        try:
            async for chunk in raw_stream:
                text = text_of(chunk)
                if text:
                    yield StreamChunk.content(text)
                for call in tool_calls_of(chunk):
                    saw_tool_calls = True
                    yield StreamChunk.tool_call(call)
                if getattr(chunk, "usage_metadata", None) is not None:
                    usage = usage_from(chunk.usage_metadata, self.model_name)
                finish_reason = finish_reason_of(chunk) or finish_reason
        finally:
            await close_vendor_stream(raw_stream)
        if usage is not None:
            yield StreamChunk.usage(usage)
        yield StreamChunk.finish(map_finish_reason(finish_reason, saw_tool_calls))

    # ---- response hooks ------------------------------------------------------------

    def _translate_response(self, raw: Any) -> CompletionResponse:
        calls = tool_calls_of(raw)
        return CompletionResponse(
            id=str(getattr(raw, "response_id", None) or f"gemini_{int(time.time() * 1000)}"),
            content=text_of(raw),
            status_code=200,
            usage=self._extract_usage_metrics(raw),
            finish_reason=map_finish_reason(finish_reason_of(raw), bool(calls)),
            tool_calls=tuple(calls),
        )

    def _extract_usage_metrics(self, raw: Any) -> UsageData:
        return usage_from(getattr(raw, "usage_metadata", None), self.model_name)

    def parse_provider_error(self, error: Exception) -> CompletionResponse:
        """Normalize a google-genai exception.

        ``APIError`` carries the HTTP status in ``code``, the RPC status name
        (``RESOURCE_EXHAUSTED`` ...) in ``status`` and the parsed body in
        ``details``, which may hold a ``RetryInfo`` delay.
        """
        status = getattr(error, "status", None)
        message = getattr(error, "message", None)
        return self._fallback_error_response(
            error,
            status_code=extract_status_code(error),
            status_reason=status if isinstance(status, str) and status else None,
            message=str(message) if message else None,
            retry_after=extract_retry_after(error),
        )
