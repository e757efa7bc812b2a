"""Client facade.

``LLMClient`` holds exactly one provider adapter and forwards each operation
to it unchanged. It adds no behavior of its own; construction happens through
``LLMClient.builder()``.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from ..base.abstract_provider import AbstractLLMProvider
from ..base.models_parts.completion_request import CompletionRequest
from ..base.models_parts.completion_response import CompletionResponse
from ..base.models_parts.provider import LLMProvider, SupportedModel
from ..base.models_parts.structured import StructuredOutputResponse
from ..base.streaming import StreamResponse

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .builder import LLMClientBuilder


class LLMClient:
    """Provider-agnostic entry point for completions."""

    def __init__(self, provider: AbstractLLMProvider) -> None:
        self._provider = provider

    @staticmethod
    def builder() -> "LLMClientBuilder":
        """Return a fresh builder."""
        from .builder import LLMClientBuilder

        return LLMClientBuilder()

    @property
    def provider(self) -> LLMProvider:
        return self._provider.provider

    @property
    def model(self) -> SupportedModel:
        return self._provider.model

    def supports(self, operation: str) -> bool:
        return self._provider.supports(operation)

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        return await self._provider.complete(request)

    async def stream(self, request: CompletionRequest) -> StreamResponse:
        return await self._provider.stream(request)

    async def structured_output(self, request: CompletionRequest) -> StructuredOutputResponse:
        return await self._provider.complete_with_structured_output(request)

    async def call_tools(self, request: CompletionRequest) -> CompletionResponse:
        return await self._provider.complete_with_tool_invocation(request)

    def __repr__(self) -> str:
        return f"LLMClient({self._provider!r})"


__all__ = ["LLMClient"]
