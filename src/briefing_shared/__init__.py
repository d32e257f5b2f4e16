from briefing_shared.tool_registry import (
    RegistryError,
    ToolDescriptor,
    ToolRegistry,
    UnknownTool,
)
from briefing_shared.tool_schemas import build_default_registry

__all__ = [
    "RegistryError",
    "ToolDescriptor",
    "ToolRegistry",
    "UnknownTool",
    "build_default_registry",
]
