"""Call-scoped context attached to structured log events.

A ``LogContext`` names the call an event belongs to: the provider tag, the
model id and the operation (``complete``, ``stream`` ...). Contexts are
immutable; ``bind`` derives a new one with extra fields for a single event.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


def _tag(value: Any) -> Optional[str]:
    """Plain text for a provider or model tag (enum members give their value)."""
    if value is None:
        return None
    return str(value.value) if isinstance(value, Enum) else str(value)


@dataclass(frozen=True)
class LogContext:
    """Provider, model and operation shared by every event of one call."""

    provider: Optional[str] = None
    model: Optional[str] = None
    operation: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "provider", _tag(self.provider))
        object.__setattr__(self, "model", _tag(self.model))
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @classmethod
    def for_call(cls, provider: Any, model: Any = None, operation: Optional[str] = None) -> "LogContext":
        """Context for one provider call; enum tags are reduced to their values."""
        return cls(provider=provider, model=model, operation=operation)

    def bind(self, **fields: Any) -> "LogContext":
        """Return a copy whose ``extra`` also holds ``fields``."""
        return replace(self, extra={**self.extra, **fields})

    def to_dict(self) -> Dict[str, Any]:
        """Flat mapping for the event payload, ``None`` values dropped."""
        data: Dict[str, Any] = {"provider": self.provider, "model": self.model, "operation": self.operation}
        data.update(self.extra)
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
