"""unified_llm package

One request/response contract over multiple LLM provider APIs.

Callers build a client once and send provider-neutral requests::

    client = (
        LLMClient.builder()
        .set_provider(LLMProvider.OPENAI)
        .set_model(OpenAIModel.GPT_4O_MINI)
        .set_api_key(key)
        .build()
    )
    response = await client.complete(
        CompletionRequest(messages=(Message(role="user", content="Hello"),))
    )

Public API (re-exported):
    - Version: ``__version__``
    - Client: :class:`LLMClient`, :class:`LLMClientBuilder`, :class:`LLMClientFactory`
    - Models: requests, responses, messages, tools, structured output, streaming
    - Errors: :class:`LLMError` and its subclasses, :class:`ErrorKind`
    - Message catalog: :func:`get_string`
"""

from .base import (
    AbstractLLMProvider,
    APIKeyConfig,
    AuthenticationError,
    CompletionRequest,
    CompletionResponse,
    ErrorKind,
    FinishData,
    GeminiModel,
    LLMClientFactory,
    LLMError,
    LLMProvider,
    LoggingObserver,
    Message,
    OpaquePayload,
    OpenAIModel,
    ParameterSchema,
    ProviderConfig,
    ProviderObserver,
    RateLimitError,
    StreamChunk,
    StreamingError,
    StreamResponse,
    StructuredOutputError,
    StructuredOutputKind,
    StructuredOutputResponse,
    StructuredOutputSchema,
    SupportedModel,
    Tool,
    ToolCall,
    ToolParameters,
    ToolResult,
    UnsupportedOperationError,
    UsageData,
    ValidationError,
    translate_provider_error,
)
from .client import LLMClient, LLMClientBuilder
from .i18n import get_string

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "LLMClient",
    "LLMClientBuilder",
    "LLMClientFactory",
    "AbstractLLMProvider",
    "ProviderObserver",
    "LoggingObserver",
    "LLMProvider",
    "OpenAIModel",
    "GeminiModel",
    "SupportedModel",
    "APIKeyConfig",
    "ProviderConfig",
    "Message",
    "ToolCall",
    "ToolResult",
    "CompletionRequest",
    "CompletionResponse",
    "UsageData",
    "OpaquePayload",
    "ParameterSchema",
    "ToolParameters",
    "Tool",
    "StructuredOutputKind",
    "StructuredOutputSchema",
    "StructuredOutputResponse",
    "StreamChunk",
    "FinishData",
    "StreamResponse",
    "ErrorKind",
    "LLMError",
    "AuthenticationError",
    "RateLimitError",
    "ValidationError",
    "StreamingError",
    "StructuredOutputError",
    "UnsupportedOperationError",
    "translate_provider_error",
    "get_string",
]
