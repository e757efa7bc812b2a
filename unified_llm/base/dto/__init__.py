"""Pydantic DTOs for tool declarations and provider construction."""

from .tools import ParameterSchema, ToolParameters, Tool
from .provider_config import ProviderConfig

__all__ = ["ParameterSchema", "ToolParameters", "Tool", "ProviderConfig"]
