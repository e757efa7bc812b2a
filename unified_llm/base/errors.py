"""Unified error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``unified_llm.base.errors_parts`` together with the translator that maps
normalized provider failures onto them.
"""

from .errors_parts.error_kind import ErrorKind
from .errors_parts.llm_error import LLMError
from .errors_parts.authentication_error import AuthenticationError
from .errors_parts.rate_limit_error import RateLimitError
from .errors_parts.validation_error import ValidationError
from .errors_parts.streaming_error import StreamingError
from .errors_parts.structured_output_error import StructuredOutputError
from .errors_parts.unsupported_operation_error import UnsupportedOperationError
from .errors_parts.translation import (
    translate_provider_error,
    log_llm_error,
    extract_status_code,
    extract_retry_after,
)

__all__ = [
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
    "extract_status_code",
    "extract_retry_after",
]
