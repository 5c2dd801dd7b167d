"""Object CRUD and object code generation tools."""

from __future__ import annotations

from typing import Any

from .. import codegen
from .base import (
    SCENE_ID,
    ToolContext,
    boolean,
    delete_tool,
    enum,
    fetch_tool,
    fill_vector,
    ident,
    pick,
    record,
    result_field,
    string,
    tool,
    vector,
)

OBJECT_TYPES = ('cube', 'sphere', 'cylinder', 'cone', 'torus', 'plane', 'text', 'image', 'group', 'light')

get_objects = fetch_tool(
    'getObjects',
    "List all objects in a scene.",
    '/scenes/{sceneId}/objects',
    'retrieving objects',
)

get_object_details = fetch_tool(
    'getObjectDetails',
    "Get the full definition of one object: transform, material, visibility and custom properties.",
    '/scenes/{sceneId}/objects/{objectId}',
    'retrieving object details',
    {'sceneId': SCENE_ID, 'objectId': ident('Object ID')},
)


@tool(
    'createObject',
    "Create a new object in a scene. Position and rotation default to 0, scale to 1.",
    {
        'sceneId': SCENE_ID,
        'type': enum(OBJECT_TYPES, 'Object type'),
        'name': ident('Object name'),
        'position': vector('Object position', 0, 0, 0),
        'rotation': vector('Object rotation in degrees', 0, 0, 0),
        'scale': vector('Object scale', 1, 1, 1),
        'color': string('Object color (hex)'),
        'properties': record('Additional properties'),
    },
    ['sceneId', 'type', 'name'],
    'creating object',
)
async def create_object(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    data = {
        'type': arguments['type'],
        'name': arguments['name'],
        'position': fill_vector(arguments.get('position'), 0),
        'rotation': fill_vector(arguments.get('rotation'), 0),
        'scale': fill_vector(arguments.get('scale'), 1),
        **pick(arguments, 'color', 'properties'),
    }
    result = await ctx.api.create_object(arguments['sceneId'], data)
    return f"Object created successfully with ID: {result_field(result, 'id')}"


@tool(
    'updateObject',
    "Update an existing object. Only the fields given are changed.",
    {
        'sceneId': SCENE_ID,
        'objectId': ident('Object ID'),
        'name': string('New object name'),
        'position': vector('New position', 0, 0, 0),
        'rotation': vector('New rotation in degrees', 0, 0, 0),
        'scale': vector('New scale', 1, 1, 1),
        'color': string('New color (hex)'),
        'visible': boolean('Whether the object is visible'),
        'properties': record('Additional properties to update'),
    },
    ['sceneId', 'objectId'],
    'updating object',
)
async def update_object(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    data = pick(arguments, 'name', 'color', 'visible', 'properties')
    for key, default in (('position', 0), ('rotation', 0), ('scale', 1)):
        if arguments.get(key) is not None:
            data[key] = fill_vector(arguments[key], default)
    object_id = arguments['objectId']
    await ctx.api.update_object(arguments['sceneId'], object_id, data)
    return f"Object {object_id} updated successfully"


delete_object = delete_tool(
    'deleteObject',
    "Delete an object from a scene.",
    '/scenes/{sceneId}/objects/{objectId}',
    'deleting object',
    {'sceneId': SCENE_ID, 'objectId': ident('Object ID')},
    'Object {objectId} deleted successfully',
)


@tool(
    'generateObjectCode',
    "Generate runtime code that moves, rotates, scales, recolors, hides, animates or "
    "emits an event on an object.",
    {
        'sceneId': SCENE_ID,
        'objectId': ident('Object ID'),
        'action': enum(codegen.OBJECT_ACTIONS, 'Action to perform'),
        'params': record('Action parameters, e.g. {x, y, z} for move or {color} for color'),
    },
    ['sceneId', 'objectId', 'action'],
    'generating code',
)
async def generate_object_code(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    return codegen.object_interaction_code(
        arguments['sceneId'], arguments['objectId'], arguments['action'], arguments.get('params')
    )


TOOLS = [
    get_objects,
    get_object_details,
    create_object,
    update_object,
    delete_object,
    generate_object_code,
]
