"""
Normalized error kinds (taxonomy tags).

Every error raised across the public boundary carries one ``ErrorKind`` so
callers and observers can switch on a value instead of on the exception type.
Values are lowercase snake_case and are a stable contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Enumerated error kinds representing failure categories."""

    GENERIC = "generic"
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    STREAMING = "streaming"
    STRUCTURED_OUTPUT = "structured_output"
    UNSUPPORTED = "unsupported"


__all__ = ["ErrorKind"]
