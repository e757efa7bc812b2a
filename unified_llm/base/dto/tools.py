"""
Pydantic DTOs describing callable tools.

Purpose
-------
Tools are declared once in a provider-neutral JSON-schema shape and mapped by
each adapter onto its vendor format (OpenAI ``function`` tools, Gemini
``FunctionDeclaration``). Validation happens at construction so a malformed
tool never reaches a vendor call.

External dependencies: Pydantic only.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ParameterSchema(BaseModel):
    """JSON-schema fragment for one tool parameter (recursive)."""

    model_config = ConfigDict(frozen=True)

    type: str
    description: Optional[str] = None
    enum: Optional[List[Any]] = None
    items: Optional["ParameterSchema"] = None
    properties: Optional[Dict[str, "ParameterSchema"]] = None
    required: Optional[List[str]] = None


class ToolParameters(BaseModel):
    """Top-level parameter object of a tool. Always of type ``object``."""

    model_config = ConfigDict(frozen=True)

    type: Literal["object"] = "object"
    properties: Dict[str, ParameterSchema] = Field(default_factory=dict)
    required: List[str] = Field(default_factory=list)

    @field_validator("required")
    @classmethod
    def _required_subset(cls, value: List[str], info) -> List[str]:
        """Ensure every required name is a declared property."""
        props = info.data.get("properties") or {}
        unknown = [name for name in value if name not in props]
        if unknown:
            raise ValueError(f"required names not declared in properties: {unknown}")
        return value


class Tool(BaseModel):
    """A function the model may call.

    Attributes:
        name: Function name, unique within a request.
        description: What the function does, shown to the model.
        parameters: Argument schema.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    description: str
    parameters: ToolParameters = Field(default_factory=ToolParameters)

    def to_json_schema(self) -> Dict[str, Any]:
        """Return the parameters as a JSON-schema dict with null fields dropped."""
        return self.parameters.model_dump(exclude_none=True)


ParameterSchema.model_rebuild()

__all__ = ["ParameterSchema", "ToolParameters", "Tool"]
