"""Immutable provider construction parameters produced by the client builder."""

from __future__ import annotations

from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict, Field

from ..models_parts.provider import APIKeyConfig, GeminiModel, LLMProvider, OpenAIModel


class ProviderConfig(BaseModel):
    """Snapshot of everything needed to construct one provider adapter.

    The API key is excluded from ``repr`` so configs can be logged safely.
    """

    model_config = ConfigDict(frozen=True)

    provider: LLMProvider
    model: Union[OpenAIModel, GeminiModel, str]
    api_key: str = Field(repr=False)
    api_key_config: APIKeyConfig = APIKeyConfig.PARAMETER
    config: Dict[str, Any] = Field(default_factory=dict)


__all__ = ["ProviderConfig"]
