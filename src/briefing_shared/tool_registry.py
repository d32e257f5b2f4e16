from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


class UnknownTool(LookupError):
    """Raised when a tool name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class RegistryError(ValueError):
    """Raised when tool descriptors and routes are not in 1:1 correspondence."""


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    input_schema: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": dict(self.input_schema),
        }


class ToolRegistry:
    """
    Static mapping from a tool name to its descriptor and its endpoint path.

    The registry is built once at startup and is read-only afterwards. Both the
    model client (to advertise tools) and the tool router (to dispatch) read from
    the same instance, and the tool server mounts its routes from it.

    Args:
        descriptors: Tool descriptors, in the order they are advertised.
        routes: Mapping of tool name -> endpoint path (e.g. "/fetch-news").

    Raises:
        RegistryError: If names are duplicated, or if a descriptor has no route or
            a route has no descriptor.
    """

    def __init__(self, descriptors: Iterable[ToolDescriptor], routes: Mapping[str, str]) -> None:
        ordered: dict[str, ToolDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in ordered:
                raise RegistryError(f"Duplicate tool name: {descriptor.name}")
            ordered[descriptor.name] = descriptor

        missing_routes = [name for name in ordered if name not in routes]
        if missing_routes:
            raise RegistryError(f"Tools without a route: {', '.join(missing_routes)}")

        orphan_routes = [name for name in routes if name not in ordered]
        if orphan_routes:
            raise RegistryError(f"Routes without a tool: {', '.join(orphan_routes)}")

        paths = list(routes.values())
        if len(set(paths)) != len(paths):
            raise RegistryError("Two tools share the same route")

        self._descriptors: Mapping[str, ToolDescriptor] = MappingProxyType(ordered)
        self._routes: Mapping[str, str] = MappingProxyType(
            {name: routes[name] for name in ordered}
        )

    def describe(self) -> tuple[ToolDescriptor, ...]:
        return tuple(self._descriptors.values())

    def names(self) -> tuple[str, ...]:
        return tuple(self._descriptors)

    def routes(self) -> Mapping[str, str]:
        return self._routes

    def route_for(self, name: str) -> str:
        try:
            return self._routes[name]
        except KeyError:
            raise UnknownTool(name) from None

    def descriptor_for(self, name: str) -> ToolDescriptor:
        try:
            return self._descriptors[name]
        except KeyError:
            raise UnknownTool(name) from None

    def validate_input(self, name: str, arguments: Any) -> None:
        """
        Validate tool arguments against the tool's input schema.

        Raises:
            UnknownTool: If the tool is not registered.
            ValueError: If the arguments do not conform to the schema.
        """
        descriptor = self.descriptor_for(name)
        if not isinstance(arguments, dict):
            raise ValueError("Arguments are not formed correctly.")
        validate_args_against_schema(arguments, dict(descriptor.input_schema))

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)


def _matches_json_type(value: Any, expected: str) -> bool:
    """
    Check whether a Python value matches a basic JSON Schema type.

    Args:
        value: The value to check.
        expected: The JSON Schema type string (e.g., "string", "integer").

    Returns:
        True if the value matches the expected type, else False.
    """
    if expected == "string":
        return isinstance(value, str)
    if expected == "integer":
        return isinstance(value, int) and not isinstance(value, bool)
    if expected == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if expected == "boolean":
        return isinstance(value, bool)
    if expected == "object":
        return isinstance(value, dict)
    if expected == "array":
        return isinstance(value, list)
    if expected == "null":
        return value is None
    # Unknown type: be conservative
    return False


def validate_args_against_schema(args: dict[str, Any], schema: dict[str, Any]) -> None:
    """
    Validate tool arguments against a simplified subset of JSON Schema.

    Checks required fields, `additionalProperties: false` and the top-level type
    of each known property. Nested schemas are not descended into.

    Raises:
        ValueError: If required fields are missing or any type mismatches occur.
    """
    properties = schema.get("properties")
    required = schema.get("required", [])
    additional_props = schema.get("additionalProperties", True)

    if not isinstance(properties, dict):
        properties = {}
    if not isinstance(required, list):
        required = []

    for field_name in required:
        if field_name not in args:
            raise ValueError(f"Missing required argument: {field_name}")

    if additional_props is False:
        unknown = [k for k in args if k not in properties]
        if unknown:
            raise ValueError(f"Unknown argument(s) not allowed: {', '.join(unknown)}")

    for key, val in args.items():
        prop = properties.get(key)
        if not isinstance(prop, dict):
            continue
        expected_type = prop.get("type")
        if expected_type is None:
            continue
        if isinstance(expected_type, list):
            if not any(_matches_json_type(val, t) for t in expected_type if isinstance(t, str)):
                raise ValueError(f"Argument '{key}' has wrong type; expected one of {expected_type}")
        elif isinstance(expected_type, str):
            if not _matches_json_type(val, expected_type):
                raise ValueError(f"Argument '{key}' has wrong type; expected {expected_type}")
