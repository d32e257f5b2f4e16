"""
Test configuration for the news briefing agent.
"""

import json
import sys
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

# Add src directory to Python path
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"

if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from briefing_agent.infrastructure.data_models import ModelResponse  # noqa: E402
from briefing_agent.services.transcript_service import Transcript  # noqa: E402
from briefing_shared.tool_schemas import build_default_registry  # noqa: E402


# ============================================================================
# Fakes
# ============================================================================


class FakeModel:
    """Returns scripted responses and records what each call was sent."""

    def __init__(self, responses: list[Any]) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def send(self, transcript: Transcript, tools: Any) -> ModelResponse:
        self.calls.append({
            "turns": transcript.turns,
            "pending": transcript.pending_tool_request,
            "tools": tuple(tools),
        })
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeRouter:
    """Records tool calls and returns canned results."""

    def __init__(self, results: dict[str, Any] | None = None) -> None:
        self.results = results or {}
        self.calls: list[tuple[str, Any]] = []

    def invoke(self, name: str, arguments: Any) -> Any:
        self.calls.append((name, arguments))
        return self.results.get(name, f"{name} ok")


def make_http_response(
    status_code: int = 200, json_body: Any = None, text: str | None = None
) -> MagicMock:
    """A stand-in for requests.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    if json_body is None and text is not None:
        resp.json.side_effect = ValueError("not json")
        resp.text = text
    else:
        resp.json.return_value = json_body
        resp.text = "" if json_body is None else str(json_body)
    return resp


def make_requests_response(status_code: int, json_body: Any) -> requests.Response:
    """A real requests.Response carrying a JSON body."""
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = json.dumps(json_body).encode()
    resp.headers["Content-Type"] = "application/json"
    return resp


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def transcript():
    t = Transcript()
    t.append_user_text("fetch AI news")
    return t
