"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``unified_llm.base.models_parts`` so callers have a single stable import path.
"""

from .models_parts.provider import (
    LLMProvider,
    OpenAIModel,
    GeminiModel,
    APIKeyConfig,
    SupportedModel,
    model_id,
)
from .models_parts.opaque import OpaquePayload
from .models_parts.message import Role, ToolCall, ToolResult, Message
from .models_parts.usage_data import UsageData
from .models_parts.completion_request import CompletionRequest
from .models_parts.completion_response import FinishReason, CompletionResponse
from .models_parts.structured import (
    StructuredOutputKind,
    StructuredOutputSchema,
    StructuredOutputResponse,
)
from .models_parts.stream_chunk import ChunkType, FinishData, StreamChunk

__all__ = [
    "LLMProvider",
    "OpenAIModel",
    "GeminiModel",
    "APIKeyConfig",
    "SupportedModel",
    "model_id",
    "OpaquePayload",
    "Role",
    "ToolCall",
    "ToolResult",
    "Message",
    "UsageData",
    "CompletionRequest",
    "FinishReason",
    "CompletionResponse",
    "StructuredOutputKind",
    "StructuredOutputSchema",
    "StructuredOutputResponse",
    "ChunkType",
    "FinishData",
    "StreamChunk",
]
