"""Mock provider package: deterministic offline adapter for demos and tests."""

from .client import MockProvider, MockProviderError

__all__ = ["MockProvider", "MockProviderError"]
