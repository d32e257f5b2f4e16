from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import requests

from briefing_agent.app.config import (
    ANTHROPIC_MESSAGES_URL,
    ANTHROPIC_VERSION,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    MODEL_TIMEOUT,
)
from briefing_agent.infrastructure.data_models import ModelResponse, TextBlock, ToolRequestBlock
from briefing_agent.services.transcript_service import Transcript, TranscriptError
from briefing_shared.tool_registry import ToolDescriptor

logger = logging.getLogger("briefing-agent")


class UpstreamError(RuntimeError):
    """The model service could not be reached or answered with an error."""

    def __init__(
        self, message: str, status_code: int | None = None, body: Any | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ModelClient:
    """
    Client for the Anthropic Messages API.

    Every call sends the full transcript and the full tool descriptor list. There is
    no retry: any failure is raised as an UpstreamError.

    Args:
        api_key: Static credential sent in the `x-api-key` header.
        model: Model identifier.
        max_tokens: Maximum output tokens per response.
        url: Messages endpoint.
        session: Optional requests session.
        timeout: Transport timeout in seconds.

    Raises:
        ValueError: If the API key is empty.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        url: str = ANTHROPIC_MESSAGES_URL,
        session: requests.Session | None = None,
        timeout: float = MODEL_TIMEOUT,
    ) -> None:
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY not found in environment")

        self.model = model
        self.max_tokens = max_tokens
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        })

    def build_payload(
        self, transcript: Transcript, tools: Iterable[ToolDescriptor]
    ) -> dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": transcript.to_messages(),
            "tools": [tool.to_dict() for tool in tools],
        }

    def send(self, transcript: Transcript, tools: Iterable[ToolDescriptor]) -> ModelResponse:
        """
        Send the transcript to the model and return its content blocks.

        Raises:
            TranscriptError: If the transcript is empty or has an unanswered tool request.
            UpstreamError: On transport failure, a non-2xx status or a malformed body.
        """
        if transcript.is_empty():
            raise TranscriptError("Cannot send an empty transcript")
        pending = transcript.pending_tool_request
        if pending is not None:
            raise TranscriptError(f"Tool request '{pending.id}' has no result")

        payload = self.build_payload(transcript, tools)
        logger.info(f"Sending request to model {self.model} ({len(transcript)} turns)")
        logger.debug(f"Request payload: {payload}")

        try:
            resp = self.session.post(self.url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamError(f"Model request failed ({self.url}): {e}") from e

        if not 200 <= resp.status_code < 300:
            body = _response_body(resp)
            raise UpstreamError(
                f"Model request failed with status {resp.status_code}",
                status_code=resp.status_code,
                body=body,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamError(
                "Model returned a non-JSON body", status_code=resp.status_code, body=resp.text
            ) from e

        return parse_model_response(data, status_code=resp.status_code)

    def close(self) -> None:
        self.session.close()


def parse_model_response(data: Any, status_code: int | None = None) -> ModelResponse:
    """
    Convert a Messages API body into a ModelResponse.

    Text and tool_use blocks are kept in order; other block kinds are skipped.

    Raises:
        UpstreamError: If the body has no content list or a block is malformed.
    """
    if not isinstance(data, dict) or not isinstance(data.get("content"), list):
        raise UpstreamError(
            "Model response has no content list", status_code=status_code, body=data
        )

    blocks: list[TextBlock | ToolRequestBlock] = []
    for item in data["content"]:
        if not isinstance(item, dict):
            raise UpstreamError("Model returned a malformed content block", status_code, data)
        block_type = item.get("type")
        if block_type == "text":
            text = item.get("text")
            if not isinstance(text, str):
                raise UpstreamError("Text block without text", status_code, data)
            blocks.append(TextBlock(text=text))
        elif block_type == "tool_use":
            tool_id = item.get("id")
            name = item.get("name")
            if not isinstance(tool_id, str) or not isinstance(name, str):
                raise UpstreamError("Tool use block without id or name", status_code, data)
            blocks.append(ToolRequestBlock(id=tool_id, tool_name=name, input=item.get("input", {})))
        else:
            logger.debug(f"Skipping model content block of type {block_type}")

    usage = data.get("usage")
    return ModelResponse(
        blocks=tuple(blocks),
        stop_reason=data.get("stop_reason"),
        model=data.get("model"),
        usage=usage if isinstance(usage, dict) else None,
    )


def _response_body(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text
