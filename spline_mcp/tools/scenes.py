"""Scene, export and variable tools."""

from __future__ import annotations

from typing import Any

from .. import codegen
from .base import (
    SCENE_ID,
    VARIABLE_TYPES,
    ToolContext,
    ToolFailure,
    enum,
    format_result,
    ident,
    integer,
    string,
    tool,
)


@tool(
    'getScene',
    "Get details about a Spline scene: name, description, timestamps and settings.",
    {'sceneId': SCENE_ID},
    ['sceneId'],
    'retrieving scene',
)
async def get_scene(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    return format_result(await ctx.api.get_scene(arguments['sceneId']))


@tool(
    'getScenes',
    "List the scenes available to the configured API key, with pagination.",
    {
        'limit': integer('Maximum number of scenes to return', minimum=1, maximum=100, default=10),
        'offset': integer('Offset for pagination', minimum=0, default=0),
        'projectId': string('Filter scenes by project ID'),
    },
    [],
    'retrieving scenes',
)
async def get_scenes(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    params = {
        'limit': arguments.get('limit', 10),
        'offset': arguments.get('offset', 0),
        'projectId': arguments.get('projectId'),
    }
    return format_result(await ctx.api.get_scenes(params))


@tool(
    'exportSceneCode',
    "Generate code that loads the scene with the Spline runtime (vanilla JS, React or Next.js).",
    {
        'sceneId': SCENE_ID,
        'format': enum(codegen.RUNTIME_FORMATS, 'Export format', default='vanilla'),
    },
    ['sceneId'],
    'generating code',
)
async def export_scene_code(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    return codegen.runtime_code(arguments['sceneId'], arguments.get('format', 'vanilla'))


@tool(
    'generateEmbedCode',
    "Generate an iframe embed snippet for a published scene.",
    {
        'sceneId': SCENE_ID,
        'width': string('Iframe width', default='100%'),
        'height': string('Iframe height', default='100%'),
        'frameBorder': string('Iframe border', default='0'),
    },
    ['sceneId'],
    'generating embed code',
)
async def generate_embed_code(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    return codegen.embed_code(
        arguments['sceneId'],
        width=arguments.get('width', '100%'),
        height=arguments.get('height', '100%'),
        frame_border=arguments.get('frameBorder', '0'),
    )


@tool(
    'getVariable',
    "Get the current value of a scene variable by name.",
    {'sceneId': SCENE_ID, 'variableName': ident('Variable name')},
    ['sceneId', 'variableName'],
    'retrieving variable',
)
async def get_variable(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    name = arguments['variableName']
    variables = await ctx.api.get_variables(arguments['sceneId']) or []
    for variable in variables:
        if isinstance(variable, dict) and variable.get('name') == name:
            return format_result(variable)
    raise ToolFailure(f'Variable "{name}" not found')


def coerce_variable(value: Any, variable_type: str) -> Any:
    """Convert ``value`` to the declared Spline variable type."""
    if variable_type == 'number':
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, (int, float)):
            return value
        try:
            number = float(str(value).strip())
        except ValueError:
            raise ValueError(f"Cannot convert {value!r} to a number")
        return int(number) if number.is_integer() else number
    if variable_type == 'boolean':
        if isinstance(value, str):
            return value.strip().lower() not in ('', 'false', '0', 'no', 'off')
        return bool(value)
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


@tool(
    'setVariable',
    "Set the value of a scene variable. The value is converted to the given type.",
    {
        'sceneId': SCENE_ID,
        'variableName': ident('Variable name'),
        'value': {'description': 'Variable value'},
        'variableType': enum(VARIABLE_TYPES, 'Variable type'),
    },
    ['sceneId', 'variableName', 'value', 'variableType'],
    'setting variable',
)
async def set_variable(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    name = arguments['variableName']
    variable_type = arguments['variableType']
    typed_value = coerce_variable(arguments['value'], variable_type)
    await ctx.api.set_variable(arguments['sceneId'], name, typed_value, variable_type)
    return f'Variable "{name}" set to {format_result(typed_value)}'


@tool(
    'generateVariableCode',
    "Generate runtime code that reads, sets and watches a scene variable.",
    {
        'sceneId': SCENE_ID,
        'variableName': ident('Variable name'),
        'value': {'description': 'Value to set'},
    },
    ['sceneId', 'variableName', 'value'],
    'generating code',
)
async def generate_variable_code(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    return codegen.variable_code(arguments['sceneId'], arguments['variableName'], arguments['value'])


TOOLS = [
    get_scene,
    get_scenes,
    export_scene_code,
    generate_embed_code,
    get_variable,
    set_variable,
    generate_variable_code,
]
