"""Material tools."""

from __future__ import annotations

from typing import Any

from .base import (
    SCENE_ID,
    ToolContext,
    boolean,
    enum,
    fetch_tool,
    ident,
    number,
    pick,
    record,
    result_field,
    string,
    tool,
)

MATERIAL_TYPES = ('standard', 'physical', 'basic', 'lambert', 'phong', 'toon', 'matcap', 'normal')
SIDES = ('front', 'back', 'double')

MATERIAL_FIELDS = (
    'color', 'roughness', 'metalness', 'opacity', 'transparent', 'wireframe',
    'emissive', 'emissiveIntensity', 'side', 'flatShading', 'properties',
)


def _material_properties() -> dict[str, Any]:
    return {
        'color': string('Base color (hex)'),
        'roughness': number('Surface roughness (0-1)', minimum=0, maximum=1),
        'metalness': number('Metalness factor (0-1)', minimum=0, maximum=1),
        'opacity': number('Opacity (0-1)', minimum=0, maximum=1),
        'transparent': boolean('Whether the material is transparent'),
        'wireframe': boolean('Whether to render as wireframe'),
        'emissive': string('Emissive color (hex)'),
        'emissiveIntensity': number('Intensity of emission', minimum=0),
        'side': enum(SIDES, 'Which side to render'),
        'flatShading': boolean('Use flat shading'),
        'properties': record('Additional properties'),
    }


get_materials = fetch_tool(
    'getMaterials',
    "List all materials in a scene.",
    '/scenes/{sceneId}/materials',
    'retrieving materials',
)

get_material_details = fetch_tool(
    'getMaterialDetails',
    "Get the full definition of one material.",
    '/scenes/{sceneId}/materials/{materialId}',
    'retrieving material details',
    {'sceneId': SCENE_ID, 'materialId': ident('Material ID')},
)


@tool(
    'createMaterial',
    "Create a new material in a scene.",
    {
        'sceneId': SCENE_ID,
        'name': ident('Material name'),
        'type': enum(MATERIAL_TYPES, 'Material type'),
        **_material_properties(),
    },
    ['sceneId', 'name', 'type'],
    'creating material',
)
async def create_material(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    data = {
        'name': arguments['name'],
        'type': arguments['type'],
        **pick(arguments, *MATERIAL_FIELDS),
    }
    result = await ctx.api.create_material(arguments['sceneId'], data)
    return f"Material created successfully with ID: {result_field(result, 'id')}"


@tool(
    'updateMaterial',
    "Update an existing material. Only the fields given are changed.",
    {
        'sceneId': SCENE_ID,
        'materialId': ident('Material ID'),
        'name': string('New material name'),
        **_material_properties(),
    },
    ['sceneId', 'materialId'],
    'updating material',
)
async def update_material(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    material_id = arguments['materialId']
    data = pick(arguments, 'name', *MATERIAL_FIELDS)
    await ctx.api.update_material(arguments['sceneId'], material_id, data)
    return f"Material {material_id} updated successfully"


@tool(
    'applyMaterial',
    "Apply an existing material to an object.",
    {
        'sceneId': SCENE_ID,
        'objectId': ident('Object ID'),
        'materialId': ident('Material ID'),
    },
    ['sceneId', 'objectId', 'materialId'],
    'applying material',
)
async def apply_material(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    object_id = arguments['objectId']
    material_id = arguments['materialId']
    await ctx.api.apply_material(arguments['sceneId'], object_id, material_id)
    return f"Material {material_id} applied to object {object_id} successfully"


TOOLS = [
    get_materials,
    get_material_details,
    create_material,
    update_material,
    apply_material,
]
