"""Client layer: fluent builder and the provider-agnostic facade."""

from .llm_client import LLMClient
from .builder import LLMClientBuilder

__all__ = ["LLMClient", "LLMClientBuilder"]
