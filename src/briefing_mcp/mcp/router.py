from collections.abc import Callable
from typing import Any

from briefing_mcp.app.config import MCPSettings
from briefing_mcp.tools.mailer import send_email
from briefing_mcp.tools.news import fetch_news
from briefing_mcp.tools.summarize import summarize_news
from briefing_mcp.tools.users import fetch_users_by_interest
from briefing_shared.tool_registry import RegistryError, ToolRegistry, UnknownTool

ToolHandler = Callable[[dict[str, Any], MCPSettings], Any]

TOOL_HANDLERS: dict[str, ToolHandler] = {
    "fetchNews": fetch_news,
    "summarizeNews": summarize_news,
    "fetchUsersByInterest": fetch_users_by_interest,
    "sendEmail": send_email,
}


def check_handlers(registry: ToolRegistry, handlers: dict[str, ToolHandler] = TOOL_HANDLERS) -> None:
    """Every registered tool must have a handler, and every handler a registered tool."""
    missing = [name for name in registry.names() if name not in handlers]
    if missing:
        raise RegistryError(f"Tools without a handler: {', '.join(missing)}")
    extra = [name for name in handlers if name not in registry]
    if extra:
        raise RegistryError(f"Handlers without a tool: {', '.join(extra)}")


def list_tools(registry: ToolRegistry) -> list[dict[str, Any]]:
    return [
        {**descriptor.to_dict(), "route": registry.route_for(descriptor.name)}
        for descriptor in registry.describe()
    ]


def call_tool(name: str, args: dict[str, Any], settings: MCPSettings) -> Any:
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        raise UnknownTool(name)
    return handler(args, settings)
