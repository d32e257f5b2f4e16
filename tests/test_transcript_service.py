import dataclasses

import pytest

from briefing_agent.infrastructure.data_models import (
    TextBlock,
    ToolRequestBlock,
    ToolResultBlock,
)
from briefing_agent.services.transcript_service import Transcript, TranscriptError


def _request(request_id: str = "toolu_1") -> ToolRequestBlock:
    return ToolRequestBlock(id=request_id, tool_name="fetchNews", input={"query": "AI"})


class TestTranscript:
    def test_starts_empty(self):
        t = Transcript()
        assert t.is_empty()
        assert len(t) == 0
        assert t.pending_tool_request is None

    def test_append_user_and_assistant_text(self, transcript):
        transcript.append_assistant_text("Looking that up.")
        roles = [turn.role for turn in transcript]
        assert roles == ["user", "assistant"]
        assert transcript.turns[1].content == (TextBlock(text="Looking that up."),)

    def test_tool_request_then_result(self, transcript):
        transcript.append_tool_request(_request())
        assert transcript.pending_tool_request == _request()

        transcript.append_tool_result("toolu_1", '[{"title": "X"}]')
        assert transcript.pending_tool_request is None

        request_turn, result_turn = transcript.turns[-2:]
        assert request_turn.role == "assistant"
        assert request_turn.content == (_request(),)
        assert result_turn.role == "user"
        assert result_turn.content == (
            ToolResultBlock(tool_request_id="toolu_1", payload='[{"title": "X"}]'),
        )

    def test_result_without_request_is_rejected(self, transcript):
        with pytest.raises(TranscriptError, match="No tool request"):
            transcript.append_tool_result("toolu_1", "x")

    def test_result_for_other_request_is_rejected(self, transcript):
        transcript.append_tool_request(_request("toolu_1"))
        with pytest.raises(TranscriptError, match="does not match"):
            transcript.append_tool_result("toolu_2", "x")

    def test_nothing_else_while_request_is_pending(self, transcript):
        transcript.append_tool_request(_request())
        with pytest.raises(TranscriptError):
            transcript.append_user_text("hello?")
        with pytest.raises(TranscriptError):
            transcript.append_assistant_text("thinking")
        with pytest.raises(TranscriptError):
            transcript.append_tool_request(_request("toolu_2"))

    def test_blank_text_is_rejected(self, transcript):
        with pytest.raises(TranscriptError):
            transcript.append_assistant_text("")
        with pytest.raises(TranscriptError):
            transcript.append_user_text("  \n")

    def test_result_payload_must_be_text(self, transcript):
        transcript.append_tool_request(_request())
        with pytest.raises(TranscriptError):
            transcript.append_tool_result("toolu_1", ["not", "a", "string"])

    def test_request_needs_id_and_name(self, transcript):
        with pytest.raises(TranscriptError):
            transcript.append_tool_request(ToolRequestBlock(id="", tool_name="x", input={}))
        with pytest.raises(TranscriptError):
            transcript.append_tool_request(ToolRequestBlock(id="t", tool_name="", input={}))

    def test_turns_are_immutable(self, transcript):
        turn = transcript.turns[0]
        with pytest.raises(dataclasses.FrozenInstanceError):
            turn.role = "assistant"
        assert isinstance(turn.content, tuple)

    def test_turns_snapshot_is_not_live(self, transcript):
        snapshot = transcript.turns
        transcript.append_assistant_text("more")
        assert len(snapshot) == 1
        assert len(transcript) == 2

    def test_to_messages_wire_shape(self, transcript):
        transcript.append_tool_request(_request())
        transcript.append_tool_result("toolu_1", '"done"')
        assert transcript.to_messages() == [
            {"role": "user", "content": [{"type": "text", "text": "fetch AI news"}]},
            {
                "role": "assistant",
                "content": [
                    {
                        "type": "tool_use",
                        "id": "toolu_1",
                        "name": "fetchNews",
                        "input": {"query": "AI"},
                    }
                ],
            },
            {
                "role": "user",
                "content": [
                    {
                        "type": "tool_result",
                        "tool_use_id": "toolu_1",
                        "content": [{"type": "text", "text": '"done"'}],
                    }
                ],
            },
        ]
