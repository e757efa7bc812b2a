"""
OpenAI provider package.

Exports:
- OpenAIProvider: adapter implementing the provider contract on the chat
  completions API
"""

from .client import OpenAIProvider

__all__ = ["OpenAIProvider"]
