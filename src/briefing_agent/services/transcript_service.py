from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from briefing_agent.infrastructure.data_models import (
    TextBlock,
    ToolRequestBlock,
    ToolResultBlock,
    Turn,
)


class TranscriptError(ValueError):
    """Raised when a turn would break the shape rules of the transcript."""


class Transcript:
    """
    Ordered, append-only list of conversation turns.

    Turns can only be added through the append methods, each of which enforces the
    shape required for its kind:

    - user text and assistant text turns carry exactly one text block
    - an assistant tool-request turn carries exactly one tool request
    - a tool-result turn is a user turn carrying exactly one tool result, and must
      directly follow the assistant turn holding the matching request

    While a tool request is unanswered, nothing but its result may be appended.
    """

    def __init__(self) -> None:
        self._turns: list[Turn] = []

    # -----------------------------
    # Append operations
    # -----------------------------
    def append_user_text(self, text: str) -> Turn:
        self._require_text(text)
        self._require_no_pending("user text")
        return self._append(Turn(role="user", content=(TextBlock(text=text),)))

    def append_assistant_text(self, text: str) -> Turn:
        self._require_text(text)
        self._require_no_pending("assistant text")
        return self._append(Turn(role="assistant", content=(TextBlock(text=text),)))

    def append_tool_request(self, request: ToolRequestBlock) -> Turn:
        if not isinstance(request, ToolRequestBlock):
            raise TranscriptError("Tool request turns must carry a ToolRequestBlock")
        if not request.id:
            raise TranscriptError("Tool request has no id")
        if not request.tool_name:
            raise TranscriptError("Tool request has no tool name")
        self._require_no_pending("a tool request")
        return self._append(Turn(role="assistant", content=(request,)))

    def append_tool_result(self, tool_request_id: str, payload: str) -> Turn:
        if not isinstance(payload, str):
            raise TranscriptError("Tool result payload must be a string")
        pending = self.pending_tool_request
        if pending is None:
            raise TranscriptError("No tool request is awaiting a result")
        if pending.id != tool_request_id:
            raise TranscriptError(
                f"Tool result for '{tool_request_id}' does not match pending request "
                f"'{pending.id}'"
            )
        block = ToolResultBlock(tool_request_id=tool_request_id, payload=payload)
        return self._append(Turn(role="user", content=(block,)))

    # -----------------------------
    # Read access
    # -----------------------------
    @property
    def turns(self) -> tuple[Turn, ...]:
        return tuple(self._turns)

    @property
    def pending_tool_request(self) -> ToolRequestBlock | None:
        """The tool request in the last turn, if it has not been answered yet."""
        if not self._turns:
            return None
        last = self._turns[-1]
        if last.role == "assistant" and isinstance(last.content[0], ToolRequestBlock):
            return last.content[0]
        return None

    def is_empty(self) -> bool:
        return not self._turns

    def to_messages(self) -> list[dict[str, Any]]:
        """Wire form of the transcript, ready for the model request body."""
        return [turn.to_dict() for turn in self._turns]

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(tuple(self._turns))

    # -----------------------------
    # Internals
    # -----------------------------
    def _append(self, turn: Turn) -> Turn:
        self._turns.append(turn)
        return turn

    def _require_no_pending(self, what: str) -> None:
        pending = self.pending_tool_request
        if pending is not None:
            raise TranscriptError(
                f"Cannot append {what} while tool request '{pending.id}' is unanswered"
            )

    @staticmethod
    def _require_text(text: str) -> None:
        if not isinstance(text, str):
            raise TranscriptError("Text blocks must contain a string")
        if not text.strip():
            raise TranscriptError("Text blocks must not be blank")
