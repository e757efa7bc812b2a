"""
Base package.

Provider-agnostic contracts and DTOs:

- Errors: the taxonomy and the provider error translator
- Models: frozen request/response value objects
- DTO: Pydantic tool declarations and provider construction config
- Contract: ``AbstractLLMProvider`` and the streaming response wrapper
- Factory: lazy creation of provider adapters
"""

from .errors import (
    ErrorKind,
    LLMError,
    AuthenticationError,
    RateLimitError,
    ValidationError,
    StreamingError,
    StructuredOutputError,
    UnsupportedOperationError,
    translate_provider_error,
    log_llm_error,
)
from .models import (
    LLMProvider,
    OpenAIModel,
    GeminiModel,
    APIKeyConfig,
    SupportedModel,
    OpaquePayload,
    Role,
    ToolCall,
    ToolResult,
    Message,
    UsageData,
    CompletionRequest,
    CompletionResponse,
    StructuredOutputKind,
    StructuredOutputSchema,
    StructuredOutputResponse,
    FinishData,
    StreamChunk,
)
from .dto import ParameterSchema, ToolParameters, Tool, ProviderConfig
from .observer import ProviderObserver, LoggingObserver
from .streaming import StreamResponse
from .abstract_provider import AbstractLLMProvider
from .factory import LLMClientFactory

__all__ = [
    # Errors
    "ErrorKind",
    "LLMError",
    "AuthenticationError",
    "RateLimitError",
    "ValidationError",
    "StreamingError",
    "StructuredOutputError",
    "UnsupportedOperationError",
    "translate_provider_error",
    "log_llm_error",
    # Models
    "LLMProvider",
    "OpenAIModel",
    "GeminiModel",
    "APIKeyConfig",
    "SupportedModel",
    "OpaquePayload",
    "Role",
    "ToolCall",
    "ToolResult",
    "Message",
    "UsageData",
    "CompletionRequest",
    "CompletionResponse",
    "StructuredOutputKind",
    "StructuredOutputSchema",
    "StructuredOutputResponse",
    "FinishData",
    "StreamChunk",
    # DTO
    "ParameterSchema",
    "ToolParameters",
    "Tool",
    "ProviderConfig",
    # Contract
    "ProviderObserver",
    "LoggingObserver",
    "StreamResponse",
    "AbstractLLMProvider",
    "LLMClientFactory",
]
