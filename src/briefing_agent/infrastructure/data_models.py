"""
Shared data models for the conversation transcript.

Blocks and turns are frozen; a turn holds its blocks in a tuple so nothing
appended to a transcript can be changed afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Union

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class TextBlock:
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class ToolRequestBlock:
    id: str
    tool_name: str
    input: Any

    def to_dict(self) -> dict[str, Any]:
        return {"type": "tool_use", "id": self.id, "name": self.tool_name, "input": self.input}


@dataclass(frozen=True)
class ToolResultBlock:
    tool_request_id: str
    payload: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "tool_result",
            "tool_use_id": self.tool_request_id,
            "content": [{"type": "text", "text": self.payload}],
        }


ContentBlock = Union[TextBlock, ToolRequestBlock, ToolResultBlock]


@dataclass(frozen=True)
class Turn:
    role: Role
    content: tuple[ContentBlock, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": [block.to_dict() for block in self.content]}


@dataclass(frozen=True)
class ModelResponse:
    """Ordered content blocks emitted by the model for one request."""

    blocks: tuple[TextBlock | ToolRequestBlock, ...]
    stop_reason: str | None = None
    model: str | None = None
    usage: dict[str, Any] | None = None

    def tool_requests(self) -> tuple[ToolRequestBlock, ...]:
        return tuple(b for b in self.blocks if isinstance(b, ToolRequestBlock))
