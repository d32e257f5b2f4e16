import json
from typing import Any

from briefing_mcp.app.config import get_settings
from briefing_mcp.mcp.router import call_tool, list_tools
from briefing_mcp.tools.errors import ToolError
from briefing_shared.platform_manager import create_logger
from briefing_shared.tool_registry import ToolRegistry

logger = create_logger(logger_name="briefing-mcp", log_level="INFO")


def create_response(
    status_code: int,
    body: dict[str, Any] | list[Any],
    headers: dict[str, str] | None = None,
) -> dict[str, Any]:
    """
    Create a standard JSON HTTP response.

    Args:
        status_code (int): HTTP status code.
        body: JSON-serializable response body.
        headers (dict[str, str] | None, optional): Additional headers. Defaults to None.

    Returns:
        dict: Standardized response dictionary.
    """
    response_headers = {"Content-Type": "application/json"}
    if headers:
        response_headers.update(headers)

    return {
        "statusCode": status_code,
        "body": json.dumps(body, default=str),
        "headers": response_headers,
    }


def _tools_by_path(registry: ToolRegistry) -> dict[str, str]:
    return {path: name for name, path in registry.routes().items()}


def process(event: dict[str, Any], registry: ToolRegistry) -> dict[str, Any]:
    """
    Process an incoming tool server request.

    `event` carries a `routeKey` ("POST /fetch-news") and the raw `body`. Tool
    calls answer `200 {"result": ...}` on success and a non-2xx status with
    `{"error": ...}` on failure.
    """
    route_key = event.get("routeKey", "")
    method, _, route = route_key.partition(" ")
    logger.info(f"Processing request: {method} {route}")

    if method == "GET" and route == "/mcp/tools":
        return create_response(200, {"tools": list_tools(registry)})

    tool_name = _tools_by_path(registry).get(route)
    if method != "POST" or tool_name is None:
        logger.error(f"No tool for route: {route_key}")
        return create_response(404, {"error": "Route and method not found"})

    body = event.get("body") or b"{}"
    try:
        args = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.error(f"Invalid JSON body for {tool_name}")
        return create_response(400, {"error": "Invalid JSON body"})

    if not isinstance(args, dict):
        return create_response(400, {"error": "Tool input must be a JSON object"})

    try:
        result = call_tool(tool_name, args, get_settings())
    except ToolError as e:
        logger.error(f"{tool_name} failed: {e}")
        return create_response(500, {"error": str(e)})
    except Exception as e:
        logger.exception(f"Unexpected error in {tool_name}: {e}")
        return create_response(500, {"error": "Internal Server Error"})

    logger.info(f"{tool_name} completed")
    return create_response(200, {"result": result})
