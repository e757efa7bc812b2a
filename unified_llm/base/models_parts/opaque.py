"""
Opaque provider payload.

Vendor-shaped data (native exceptions, raw SDK objects) travels through the
normalized types inside an ``OpaquePayload``. The core only forwards it;
callers that need the vendor object call ``unwrap()``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class OpaquePayload:
    """Sealed wrapper around provider-specific data."""

    value: Any = field(repr=False, compare=False)

    def unwrap(self) -> Any:
        """Return the wrapped vendor object."""
        return self.value

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"OpaquePayload({type(self.value).__name__})"


__all__ = ["OpaquePayload"]
