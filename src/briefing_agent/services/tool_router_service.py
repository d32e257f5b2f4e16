from __future__ import annotations

import logging
import uuid
from typing import Any

import requests

from briefing_agent.app.config import TOOL_TIMEOUT
from briefing_shared.tool_registry import ToolRegistry, UnknownTool

logger = logging.getLogger("briefing-agent")

# Results handed to the model in place of a failed tool call
TOOL_ERROR_RESULT = "Error executing tool"
UNKNOWN_TOOL_RESULT = "Error executing tool: unknown tool"
INVALID_INPUT_RESULT = "Error executing tool: invalid input"

FAILURE_RESULTS = frozenset({TOOL_ERROR_RESULT, UNKNOWN_TOOL_RESULT, INVALID_INPUT_RESULT})


class ToolRouter:
    """
    Dispatch tool calls to their HTTP backend.

    `invoke` never raises: an unknown tool, invalid input, a transport failure, a
    non-2xx status or a malformed body all come back as one of the failure
    results above so the conversation can carry on.

    Args:
        registry: Source of routes and input schemas.
        base_url: Base URL of the tool server (e.g. "http://localhost:4000").
        session: Optional requests session; a new one is created if omitted.
        timeout: Transport timeout in seconds.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float = TOOL_TIMEOUT,
    ) -> None:
        self.registry = registry
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def invoke(self, name: str, arguments: Any) -> Any:
        try:
            path = self.registry.route_for(name)
        except UnknownTool as e:
            logger.error(f"Tool router: {e}")
            return UNKNOWN_TOOL_RESULT

        try:
            self.registry.validate_input(name, arguments)
        except ValueError as e:
            logger.error(f"Tool router: invalid input for {name}: {e}")
            return INVALID_INPUT_RESULT

        url = f"{self.base_url}{path}"
        headers = {
            "X-Request-ID": str(uuid.uuid4()),
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

        try:
            resp = self.session.post(url, json=arguments, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Tool request failed for {name} ({url}): {e}")
            return TOOL_ERROR_RESULT

        if not 200 <= resp.status_code < 300:
            logger.error(
                f"Tool {name} returned status {resp.status_code}: {_error_detail(resp)}"
            )
            return TOOL_ERROR_RESULT

        try:
            body = resp.json()
        except ValueError:
            logger.error(f"Tool {name} returned a non-JSON body")
            return TOOL_ERROR_RESULT

        if not isinstance(body, dict) or "result" not in body:
            logger.error(f"Tool {name} returned a body without a result field")
            return TOOL_ERROR_RESULT

        return body["result"]

    def close(self) -> None:
        self.session.close()


def is_failure_result(result: Any) -> bool:
    return isinstance(result, str) and result in FAILURE_RESULTS


def _error_detail(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(body, dict) and "error" in body:
        return str(body["error"])
    return str(body)[:200]
