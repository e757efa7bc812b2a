"""Operation not implemented by an adapter."""
from __future__ import annotations

from typing import ClassVar, Optional, Union

from ..models_parts.provider import LLMProvider
from .error_kind import ErrorKind
from .llm_error import LLMError


class UnsupportedOperationError(LLMError):
    """Raised by adapters for operations they do not implement.

    Callers branch on this type (or ``kind == ErrorKind.UNSUPPORTED``) to
    detect a capability gap instead of a provider failure.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.UNSUPPORTED

    def __init__(
        self,
        operation: str,
        provider: Union[LLMProvider, str],
        message: Optional[str] = None,
    ) -> None:
        super().__init__(
            message or f"Operation '{operation}' is not supported",
            provider,
            retryable=False,
        )
        self.operation = operation


__all__ = ["UnsupportedOperationError"]
