"""MCP tool tables, one module per Spline area."""

from .base import ToolContext, ToolFailure, ToolSpec
from .registry import TOOL_SPECS, SchemaValidationError, UnknownTool, get_spec, list_specs, validate_arguments

__all__ = [
    'TOOL_SPECS',
    'SchemaValidationError',
    'ToolContext',
    'ToolFailure',
    'ToolSpec',
    'UnknownTool',
    'get_spec',
    'list_specs',
    'validate_arguments',
]
