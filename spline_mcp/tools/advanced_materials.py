"""Layered material tools."""

from __future__ import annotations

from typing import Any

from .base import (
    SCENE_ID,
    ToolContext,
    ToolSpec,
    array,
    boolean,
    delete_tool,
    endpoint,
    enum,
    fetch_tool,
    ident,
    integer,
    number,
    obj,
    pick,
    record,
    result_field,
    string,
    tool,
)

BASE_TYPES = ('standard', 'physical', 'basic', 'lambert', 'phong')

LAYER_TYPES = (
    'color', 'lighting', 'image', 'video', 'depth', 'normal',
    'gradient', 'noise', 'fresnel', 'rainbow', 'toon',
    'outline', 'glass', 'matcap', 'displace', 'pattern',
)

BLEND_MODES = (
    'normal', 'multiply', 'screen', 'overlay', 'darken',
    'lighten', 'colorDodge', 'colorBurn', 'hardLight',
    'softLight', 'difference', 'exclusion', 'hue',
    'saturation', 'color', 'luminosity',
)

MATERIAL_ID = ident('Material ID')
LAYER_ID = ident('Layer ID')


def _tiling(description: str) -> dict[str, Any]:
    return obj(
        {
            'x': {'type': 'number', 'minimum': 0, 'default': 1},
            'y': {'type': 'number', 'minimum': 0, 'default': 1},
        },
        description=description,
    )


def _layer_data(layer: dict[str, Any], type_key: str = 'type') -> dict[str, Any]:
    data = {
        'type': layer[type_key],
        'name': layer['name'],
        **pick(layer, 'params'),
        'blendMode': layer.get('blendMode') or 'normal',
        'opacity': layer['opacity'] if layer.get('opacity') is not None else 1,
    }
    data.update(pick(layer, 'maskLayer'))
    return data


@tool(
    'createLayeredMaterial',
    "Create a material built from a stack of layers (color, image, gradient, fresnel, glass, ...).",
    {
        'sceneId': SCENE_ID,
        'name': ident('Material name'),
        'baseType': enum(BASE_TYPES, 'Base material type', default='physical'),
        'layers': array(
            obj(
                {
                    'type': enum(LAYER_TYPES, 'Layer type'),
                    'name': string('Layer name'),
                    'params': record('Layer-specific parameters'),
                    'blendMode': enum(BLEND_MODES, 'Layer blend mode', default='normal'),
                    'opacity': number('Layer opacity', minimum=0, maximum=1, default=1),
                    'maskLayer': number('Index of layer to use as mask'),
                },
                ['type', 'name'],
            ),
            'Material layers',
            minItems=1,
        ),
        'baseParams': obj(
            {
                'roughness': number('Base roughness', minimum=0, maximum=1),
                'metalness': number('Base metalness', minimum=0, maximum=1),
                'opacity': number('Base opacity', minimum=0, maximum=1),
                'transparent': boolean('Whether material is transparent'),
                'side': enum(('front', 'back', 'double'), 'Which sides to render'),
                'wireframe': boolean('Whether to render as wireframe'),
                'flatShading': boolean('Whether to use flat shading'),
            },
            description='Base material parameters',
        ),
    },
    ['sceneId', 'name', 'layers'],
    'creating layered material',
)
async def create_layered_material(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    name = arguments['name']
    data = {
        'name': name,
        'type': arguments.get('baseType', 'physical'),
        **(arguments.get('baseParams') or {}),
        'layers': [_layer_data(layer) for layer in arguments['layers']],
    }
    result = await ctx.api.create_material(arguments['sceneId'], data)
    return f'Layered material "{name}" created successfully with ID: {result_field(result, "id")}'


@tool(
    'addMaterialLayer',
    "Add a layer to an existing material.",
    {
        'sceneId': SCENE_ID,
        'materialId': MATERIAL_ID,
        'layerType': enum(LAYER_TYPES, 'Layer type'),
        'name': ident('Layer name'),
        'params': record('Layer-specific parameters'),
        'blendMode': enum(BLEND_MODES, 'Layer blend mode', default='normal'),
        'opacity': number('Layer opacity', minimum=0, maximum=1, default=1),
        'maskLayer': number('Index of layer to use as mask'),
        'position': integer('Position in layer stack (0 = bottom)'),
    },
    ['sceneId', 'materialId', 'layerType', 'name'],
    'adding material layer',
)
async def add_material_layer(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    material_id = arguments['materialId']
    data = _layer_data(arguments, type_key='layerType')
    data.update(pick(arguments, 'position'))
    await ctx.api.request(
        'POST', endpoint("/scenes/{}/materials/{}/layers", arguments['sceneId'], material_id), data
    )
    return f'Layer "{arguments["name"]}" added successfully to material {material_id}'


def configure_layer(
    name: str,
    description: str,
    kind: str,
    properties: dict[str, Any],
    required: list[str],
) -> ToolSpec:
    """A tool that PUTs ``{params}`` (the given layer properties) to one material layer."""

    @tool(
        name,
        description,
        {'sceneId': SCENE_ID, 'materialId': MATERIAL_ID, 'layerId': LAYER_ID, **properties},
        ['sceneId', 'materialId', 'layerId', *required],
        f"configuring {kind.lower()} layer",
    )
    async def handler(ctx: ToolContext, arguments: dict[str, Any]) -> str:
        layer_id = arguments['layerId']
        await ctx.api.request(
            'PUT',
            endpoint("/scenes/{}/materials/{}/layers/{}", arguments['sceneId'], arguments['materialId'], layer_id),
            {'params': pick(arguments, *properties)},
        )
        return f"{kind} layer {layer_id} configured successfully"

    return handler


configure_color_layer = configure_layer(
    'configureColorLayer',
    "Configure a color layer.",
    'Color',
    {
        'color': string('Color value (hex, rgb, or rgba)'),
        'intensity': number('Color intensity', minimum=0, default=1),
    },
    ['color'],
)

configure_image_layer = configure_layer(
    'configureImageLayer',
    "Configure an image layer: texture URL, tiling, offset and rotation.",
    'Image',
    {
        'imageUrl': string('URL to image', format='uri'),
        'tiling': _tiling('Texture tiling'),
        'offset': obj(
            {'x': {'type': 'number', 'default': 0}, 'y': {'type': 'number', 'default': 0}},
            description='Texture offset',
        ),
        'rotation': number('Rotation in degrees', default=0),
    },
    ['imageUrl'],
)

configure_gradient_layer = configure_layer(
    'configureGradientLayer',
    "Configure a gradient layer.",
    'Gradient',
    {
        'gradientType': enum(('linear', 'radial', 'angular'), 'Gradient type'),
        'colors': array(
            obj(
                {
                    'color': string('Color value (hex, rgb, or rgba)'),
                    'position': number('Position in gradient (0-1)', minimum=0, maximum=1),
                },
                ['color', 'position'],
            ),
            'Gradient color stops',
            minItems=2,
        ),
        'rotation': number('Rotation in degrees', default=0),
        'scale': number('Gradient scale', default=1),
    },
    ['gradientType', 'colors'],
)

configure_normal_layer = configure_layer(
    'configureNormalLayer',
    "Configure a normal map layer.",
    'Normal',
    {
        'normalMapUrl': string('URL to normal map image', format='uri'),
        'intensity': number('Normal map intensity', minimum=0, default=1),
        'tiling': _tiling('Normal map tiling'),
    },
    ['normalMapUrl'],
)

configure_fresnel_layer = configure_layer(
    'configureFresnelLayer',
    "Configure a fresnel (rim light) layer.",
    'Fresnel',
    {
        'color': string('Fresnel color (hex, rgb, or rgba)'),
        'power': number('Fresnel power', minimum=0, default=2),
        'bias': number('Fresnel bias', minimum=0, maximum=1, default=0),
        'intensity': number('Fresnel intensity', minimum=0, default=1),
    },
    ['color'],
)

configure_glass_layer = configure_layer(
    'configureGlassLayer',
    "Configure a glass layer.",
    'Glass',
    {
        'tint': string('Glass tint color (hex, rgb, or rgba)'),
        'ior': number('Index of refraction', minimum=1, default=1.5),
        'roughness': number('Glass roughness', minimum=0, maximum=1, default=0),
        'thickness': number('Glass thickness', minimum=0, default=0.1),
    },
    [],
)

configure_matcap_layer = configure_layer(
    'configureMatcapLayer',
    "Configure a matcap layer.",
    'Matcap',
    {
        'matcapImageUrl': string('URL to matcap image', format='uri'),
        'intensity': number('Matcap intensity', minimum=0, default=1),
    },
    ['matcapImageUrl'],
)

list_material_layers = fetch_tool(
    'listMaterialLayers',
    "List the layers of a material, bottom to top.",
    '/scenes/{sceneId}/materials/{materialId}/layers',
    'listing material layers',
    {'sceneId': SCENE_ID, 'materialId': MATERIAL_ID},
)

delete_material_layer = delete_tool(
    'deleteMaterialLayer',
    "Remove a layer from a material.",
    '/scenes/{sceneId}/materials/{materialId}/layers/{layerId}',
    'deleting material layer',
    {'sceneId': SCENE_ID, 'materialId': MATERIAL_ID, 'layerId': LAYER_ID},
    'Layer {layerId} deleted successfully',
)


@tool(
    'reorderMaterialLayers',
    "Set the order of a material's layers.",
    {
        'sceneId': SCENE_ID,
        'materialId': MATERIAL_ID,
        'layerOrder': array({'type': 'string'}, 'Layer IDs in the desired order (bottom first)', minItems=1),
    },
    ['sceneId', 'materialId', 'layerOrder'],
    'reordering material layers',
)
async def reorder_material_layers(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    await ctx.api.request(
        'PUT',
        endpoint("/scenes/{}/materials/{}/layers/order", arguments['sceneId'], arguments['materialId']),
        {'layerOrder': arguments['layerOrder']},
    )
    return "Material layers reordered successfully"


TOOLS = [
    create_layered_material,
    add_material_layer,
    configure_color_layer,
    configure_image_layer,
    configure_gradient_layer,
    configure_normal_layer,
    configure_fresnel_layer,
    configure_glass_layer,
    configure_matcap_layer,
    list_material_layers,
    delete_material_layer,
    reorder_material_layers,
]
