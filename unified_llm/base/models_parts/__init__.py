"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
``unified_llm.base.models_parts``; ``unified_llm.base.models`` remains the
primary stable import path.
"""

from .provider import (
    LLMProvider,
    OpenAIModel,
    GeminiModel,
    APIKeyConfig,
    SupportedModel,
    model_id,
)
from .opaque import OpaquePayload
from .message import Role, ToolCall, ToolResult, Message
from .usage_data import UsageData
from .completion_request import CompletionRequest
from .completion_response import FinishReason, CompletionResponse
from .structured import StructuredOutputKind, StructuredOutputSchema, StructuredOutputResponse
from .stream_chunk import ChunkType, FinishData, StreamChunk

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
