"""
Building blocks for the declarative tool tables.

A tool is a ``ToolSpec``: name, description, JSON schema, an async handler and
the label used in its error message ("Error <label>: ..."). Handlers receive a
``ToolContext`` and the validated arguments and return the success text.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from mcp.types import Tool

from ..api_client import SplineApiClient, endpoint
from ..openai_client import OpenAIClient


@dataclass(frozen=True)
class ToolContext:
    """Collaborators available to every tool handler."""
    api: SplineApiClient
    openai: OpenAIClient


ToolHandler = Callable[[ToolContext, dict[str, Any]], Awaitable[str]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_schema: dict[str, Any]
    handler: ToolHandler
    error_label: str

    def to_tool(self) -> Tool:
        return Tool(name=self.name, description=self.description, inputSchema=self.input_schema)


class ToolFailure(Exception):
    """A handled failure whose message is reported to the client verbatim."""


def format_result(data: Any) -> str:
    """Format result data as pretty JSON string."""
    return json.dumps(data, indent=2, default=str)


def compact(**kwargs: Any) -> dict[str, Any]:
    """Drop keyword arguments whose value is None."""
    return {key: value for key, value in kwargs.items() if value is not None}


def result_field(result: Any, key: str) -> Any:
    """Read ``key`` from an API response, tolerating non-object bodies."""
    if isinstance(result, dict):
        return result.get(key)
    return None


def pick(arguments: dict[str, Any], *keys: str) -> dict[str, Any]:
    """Copy the given keys from ``arguments`` when present and not None."""
    return {key: arguments[key] for key in keys if arguments.get(key) is not None}


# =============================================================================
# Schema fragments
# =============================================================================

def string(description: str, **extra: Any) -> dict[str, Any]:
    return {'type': 'string', 'description': description, **extra}


def ident(description: str) -> dict[str, Any]:
    """Non-empty identifier string."""
    return {'type': 'string', 'minLength': 1, 'description': description}


def number(description: str, **extra: Any) -> dict[str, Any]:
    return {'type': 'number', 'description': description, **extra}


def integer(description: str, **extra: Any) -> dict[str, Any]:
    return {'type': 'integer', 'description': description, **extra}


def boolean(description: str, **extra: Any) -> dict[str, Any]:
    return {'type': 'boolean', 'description': description, **extra}


def enum(values: list[str] | tuple[str, ...], description: str, **extra: Any) -> dict[str, Any]:
    return {'type': 'string', 'enum': list(values), 'description': description, **extra}


def record(description: str) -> dict[str, Any]:
    """Free-form object."""
    return {'type': 'object', 'description': description, 'additionalProperties': True}


def vector(description: str, x: float | None = None, y: float | None = None,
           z: float | None = None) -> dict[str, Any]:
    """{x, y, z} object; components carry a default when one is given."""
    props = {}
    for axis, default in (('x', x), ('y', y), ('z', z)):
        props[axis] = {'type': 'number'}
        if default is not None:
            props[axis]['default'] = default
    schema: dict[str, Any] = {'type': 'object', 'description': description, 'properties': props}
    if x is None and y is None and z is None:
        schema['required'] = ['x', 'y', 'z']
    return schema


def obj(properties: dict[str, Any], required: list[str] | None = None,
        description: str | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {'type': 'object', 'properties': properties}
    if required:
        schema['required'] = required
    if description:
        schema['description'] = description
    return schema


def array(items: dict[str, Any], description: str, **extra: Any) -> dict[str, Any]:
    return {'type': 'array', 'items': items, 'description': description, **extra}


SCENE_ID = ident('Scene ID')
EASING = ('linear', 'easeIn', 'easeOut', 'easeInOut')
VARIABLE_TYPES = ('string', 'number', 'boolean')


def fill_vector(value: dict | None, default: float = 0) -> dict[str, float]:
    """Complete a partial {x, y, z} with ``default`` components."""
    value = value or {}
    return {axis: value.get(axis, default) for axis in ('x', 'y', 'z')}


# =============================================================================
# Declarative constructors
# =============================================================================

def tool(
    name: str,
    description: str,
    properties: dict[str, Any],
    required: list[str],
    error_label: str,
) -> Callable[[ToolHandler], ToolSpec]:
    """Decorator turning an async handler into a ToolSpec."""
    def decorator(handler: ToolHandler) -> ToolSpec:
        return ToolSpec(
            name=name,
            description=description,
            input_schema=obj(properties, required),
            handler=handler,
            error_label=error_label,
        )
    return decorator


def fetch_tool(
    name: str,
    description: str,
    path: str,
    error_label: str,
    properties: dict[str, Any] | None = None,
) -> ToolSpec:
    """
    A read-only tool: GET ``path`` (formatted from the arguments), return pretty JSON.

    Every property is required; ``path`` placeholders name the properties.
    """
    properties = properties or {'sceneId': SCENE_ID}

    async def handler(ctx: ToolContext, arguments: dict[str, Any]) -> str:
        return format_result(await ctx.api.request('GET', endpoint(path, **arguments)))

    return ToolSpec(
        name=name,
        description=description,
        input_schema=obj(properties, list(properties)),
        handler=handler,
        error_label=error_label,
    )


def delete_tool(
    name: str,
    description: str,
    path: str,
    error_label: str,
    properties: dict[str, Any],
    message: str,
) -> ToolSpec:
    """DELETE ``path`` and report ``message`` (both formatted from the arguments)."""

    async def handler(ctx: ToolContext, arguments: dict[str, Any]) -> str:
        await ctx.api.request('DELETE', endpoint(path, **arguments))
        return message.format(**arguments)

    return ToolSpec(
        name=name,
        description=description,
        input_schema=obj(properties, list(properties)),
        handler=handler,
        error_label=error_label,
    )
