from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jsonschema import Draft7Validator

from . import (
    actions,
    advanced_materials,
    design,
    integrations,
    lighting,
    materials,
    objects,
    runtime,
    scenes,
    states_events,
)
from .base import ToolSpec

TOOL_SPECS: list[ToolSpec] = [
    *scenes.TOOLS,
    *objects.TOOLS,
    *materials.TOOLS,
    *states_events.TOOLS,
    *actions.TOOLS,
    *advanced_materials.TOOLS,
    *integrations.TOOLS,
    *lighting.TOOLS,
    *design.TOOLS,
    *runtime.TOOLS,
]

_SPEC_INDEX: dict[str, ToolSpec] = {spec.name: spec for spec in TOOL_SPECS}
_VALIDATORS: dict[str, Draft7Validator] = {
    spec.name: Draft7Validator(spec.input_schema) for spec in TOOL_SPECS
}


class UnknownTool(LookupError):
    pass


class SchemaValidationError(ValueError):
    pass


def list_specs() -> list[ToolSpec]:
    return TOOL_SPECS


def get_spec(name: str) -> ToolSpec:
    try:
        return _SPEC_INDEX[name]
    except KeyError as exc:
        raise UnknownTool(f"Unknown tool: {name}") from exc


def validate_arguments(tool_name: str, arguments: Mapping[str, Any]) -> dict[str, Any]:
    """Validate against the tool schema and return the arguments with top-level defaults filled in."""
    validator = _VALIDATORS.get(tool_name)
    if not validator:
        raise UnknownTool(f"Unknown tool: {tool_name}")

    errors = sorted(validator.iter_errors(arguments), key=lambda e: [str(p) for p in e.path])
    if errors:
        first = errors[0]
        path = ".".join(str(p) for p in first.path) or "<root>"
        raise SchemaValidationError(f"{path}: {first.message}")

    return apply_defaults(validator.schema, arguments)


def apply_defaults(schema: Mapping[str, Any], arguments: Mapping[str, Any]) -> dict[str, Any]:
    filled = dict(arguments)
    for key, prop in schema.get('properties', {}).items():
        if key not in filled and 'default' in prop:
            filled[key] = prop['default']
    return filled
