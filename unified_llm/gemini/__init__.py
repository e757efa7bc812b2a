"""
Gemini provider package.

Exports:
- GeminiProvider: adapter implementing the provider contract on the
  google-genai ``generate_content`` API
"""

from .client import GeminiProvider

__all__ = ["GeminiProvider"]
