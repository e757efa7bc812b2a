"""Error taxonomy parts package.

One class per module; ``unified_llm.base.errors`` is the stable import path.
"""

from .error_kind import ErrorKind
from .llm_error import LLMError
from .authentication_error import AuthenticationError
from .rate_limit_error import RateLimitError
from .validation_error import ValidationError
from .streaming_error import StreamingError
from .structured_output_error import StructuredOutputError
from .unsupported_operation_error import UnsupportedOperationError

__all__ = [
    "ErrorKind",
    "LLMError",
    "AuthenticationError",
    "RateLimitError",
    "ValidationError",
    "StreamingError",
    "StructuredOutputError",
    "UnsupportedOperationError",
]
