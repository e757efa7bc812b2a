"""Token usage reported for a completion."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class UsageData:
    """Prompt/completion/total token counts and the model that produced them."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    model: str

    @classmethod
    def empty(cls, model: str) -> "UsageData":
        """Zero counts, used by error payloads and stubs."""
        return cls(prompt_tokens=0, completion_tokens=0, total_tokens=0, model=model)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["UsageData"]
