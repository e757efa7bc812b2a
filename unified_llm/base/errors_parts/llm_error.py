"""
Base taxonomy error type.

Wraps provider failures with a normalized ``ErrorKind`` for consistent
handling, caller-side retry decisions and structured logging.
"""
from __future__ import annotations

from typing import Any, ClassVar, Dict, Optional, Union

from ..models_parts.provider import LLMProvider
from .error_kind import ErrorKind


class LLMError(Exception):
    """Base class of every error raised by providers and the client pipeline.

    Attributes:
        message: Human-readable error message (resolved from the message catalog).
        provider: Provider the error originated from. Unrecognized provider
            values are carried as plain text.
        status_code: HTTP-style status code when one is known.
        retryable: Hint for caller retry logic. Nothing inside the package retries.
        original_error: Opaque cause. For translated provider failures this is
            the normalized error ``CompletionResponse``.
        kind: Class-level taxonomy tag.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.GENERIC
    default_retryable: ClassVar[bool] = False

    def __init__(
        self,
        message: str,
        provider: Union[LLMProvider, str],
        *,
        status_code: Optional[int] = None,
        retryable: Optional[bool] = None,
        original_error: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.status_code = status_code
        self.retryable = self.default_retryable if retryable is None else retryable
        self.original_error = original_error

    @property
    def provider_name(self) -> str:
        """Return the provider as plain text (enum value or raw string)."""
        return self.provider.value if isinstance(self.provider, LLMProvider) else str(self.provider)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable view used by logging (cause excluded)."""
        return {
            "error_type": type(self).__name__,
            "kind": self.kind.value,
            "provider": self.provider_name,
            "status_code": self.status_code,
            "retryable": self.retryable,
            "message": self.message,
        }

    def __str__(self) -> str:  # pragma: no cover - trivial
        status = self.status_code if self.status_code is not None else "-"
        return f"{self.provider_name}[{status}] {self.kind.value}: {self.message}"


__all__ = ["LLMError"]
