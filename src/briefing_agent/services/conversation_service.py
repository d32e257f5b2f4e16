from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from briefing_agent.app.logging import log_model_response, log_tool_request, log_tool_result
from briefing_agent.infrastructure.data_models import ModelResponse, TextBlock, ToolRequestBlock
from briefing_agent.services.llm_service import UpstreamError
from briefing_agent.services.tool_router_service import is_failure_result
from briefing_agent.services.transcript_service import Transcript
from briefing_shared.tool_registry import ToolDescriptor, ToolRegistry

logger = logging.getLogger("briefing-agent")


class ModelSender(Protocol):
    def send(self, transcript: Transcript, tools: tuple[ToolDescriptor, ...]) -> ModelResponse: ...


class ToolInvoker(Protocol):
    def invoke(self, name: str, arguments: Any) -> Any: ...


class ConversationState(str, Enum):
    AWAITING_MODEL = "awaiting_model"
    HANDLING_TOOL = "handling_tool"
    DONE = "done"
    FAILED = "failed"


TERMINAL_STATES = frozenset({ConversationState.DONE, ConversationState.FAILED})


@dataclass
class ConversationContext:
    """State owned by a single conversation and threaded through each driver step."""

    transcript: Transcript = field(default_factory=Transcript)
    state: ConversationState = ConversationState.AWAITING_MODEL
    pending_request: ToolRequestBlock | None = None
    model_calls: int = 0
    tool_calls: int = 0
    error: UpstreamError | None = None

    @classmethod
    def start(cls, user_message: str) -> "ConversationContext":
        context = cls()
        context.transcript.append_user_text(user_message)
        return context

    @property
    def is_finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def assistant_texts(self) -> list[str]:
        return [
            block.text
            for turn in self.transcript
            if turn.role == "assistant"
            for block in turn.content
            if isinstance(block, TextBlock)
        ]


def serialize_tool_result(result: Any) -> str:
    """Tool results are passed to the model as JSON text."""
    return json.dumps(result, ensure_ascii=False, default=str)


class ConversationDriver:
    """
    Drive a conversation between the model and the tools.

    Each call to `step` advances the state machine by one transition:

    - AWAITING_MODEL: send the transcript. Text blocks are appended as they come.
      The first tool request switches to HANDLING_TOOL and ends the step; any
      blocks after it in the same response are dropped. No tool request -> DONE.
      An UpstreamError -> FAILED.
    - HANDLING_TOOL: append the request, route it, append its result, and go back
      to AWAITING_MODEL.
    - DONE / FAILED: nothing happens.

    Tool names are never inspected here; dispatch belongs to the router.
    """

    def __init__(self, model: ModelSender, router: ToolInvoker, registry: ToolRegistry) -> None:
        self.model = model
        self.router = router
        self.registry = registry

    def step(self, context: ConversationContext) -> ConversationContext:
        if context.state == ConversationState.AWAITING_MODEL:
            self._await_model(context)
        elif context.state == ConversationState.HANDLING_TOOL:
            self._handle_tool(context)
        return context

    def run(self, context: ConversationContext) -> ConversationContext:
        """
        Step until the conversation is DONE or FAILED.

        Raises:
            UpstreamError: If the model service failed; the context is left FAILED.
        """
        while not context.is_finished:
            self.step(context)

        if context.state == ConversationState.FAILED and context.error is not None:
            raise context.error
        logger.info(
            f"Conversation finished after {context.model_calls} model call(s) "
            f"and {context.tool_calls} tool call(s)"
        )
        return context

    def _await_model(self, context: ConversationContext) -> None:
        try:
            response = self.model.send(context.transcript, self.registry.describe())
        except UpstreamError as e:
            logger.error(f"Model call failed: {e} (status={e.status_code}, body={e.body})")
            context.error = e
            context.state = ConversationState.FAILED
            return
        finally:
            context.model_calls += 1

        log_model_response(response, logger)

        for block in response.blocks:
            if isinstance(block, TextBlock):
                if not block.text.strip():
                    continue
                logger.info(f"Model: {block.text}")
                context.transcript.append_assistant_text(block.text)
            elif isinstance(block, ToolRequestBlock):
                context.pending_request = block
                context.state = ConversationState.HANDLING_TOOL
                return

        context.state = ConversationState.DONE

    def _handle_tool(self, context: ConversationContext) -> None:
        request = context.pending_request
        if request is None:
            raise RuntimeError("HANDLING_TOOL state without a pending tool request")

        log_tool_request(request, logger)
        context.transcript.append_tool_request(request)

        result = self.router.invoke(request.tool_name, request.input)
        context.tool_calls += 1
        if is_failure_result(result):
            logger.warning(f"Tool {request.tool_name} failed: {result}")
        else:
            log_tool_result(request.tool_name, result, logger)

        context.transcript.append_tool_result(request.id, serialize_tool_result(result))
        context.pending_request = None
        context.state = ConversationState.AWAITING_MODEL
