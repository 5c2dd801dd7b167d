"""Lights, cameras and scene-wide rendering settings."""

from __future__ import annotations

from typing import Any

from .base import (
    SCENE_ID,
    ToolContext,
    boolean,
    endpoint,
    enum,
    fill_vector,
    number,
    obj,
    result_field,
    string,
    tool,
    vector,
)


@tool(
    'addDirectionalLight',
    "Add a directional light to a scene.",
    {
        'sceneId': SCENE_ID,
        'name': string('Light name', default='Directional Light'),
        'position': vector('Light position', 0, 10, 0),
        'color': string('Light color (hex)', default='#ffffff'),
        'intensity': number('Light intensity', minimum=0, default=1),
        'castShadow': boolean('Whether to cast shadows', default=True),
    },
    ['sceneId'],
    'creating directional light',
)
async def add_directional_light(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    name = arguments.get('name', 'Directional Light')
    position = arguments.get('position') or {}
    data = {
        'type': 'light',
        'lightType': 'directional',
        'name': name,
        'position': {'x': position.get('x', 0), 'y': position.get('y', 10), 'z': position.get('z', 0)},
        'color': arguments.get('color', '#ffffff'),
        'intensity': arguments.get('intensity', 1),
        'castShadow': arguments.get('castShadow', True),
    }
    await ctx.api.create_object(arguments['sceneId'], data)
    return f'Directional light "{name}" created successfully'


@tool(
    'addCamera',
    "Add a perspective or orthographic camera to a scene.",
    {
        'sceneId': SCENE_ID,
        'name': string('Camera name', default='Camera'),
        'position': vector('Camera position', 0, 0, 5),
        'target': vector('Point the camera looks at', 0, 0, 0),
        'type': enum(('perspective', 'orthographic'), 'Camera type', default='perspective'),
        'fov': number('Field of view (degrees)', minimum=1, maximum=179, default=45),
    },
    ['sceneId'],
    'creating camera',
)
async def add_camera(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    name = arguments.get('name', 'Camera')
    position = arguments.get('position') or {}
    data = {
        'type': 'camera',
        'cameraType': arguments.get('type', 'perspective'),
        'name': name,
        'position': {'x': position.get('x', 0), 'y': position.get('y', 0), 'z': position.get('z', 5)},
        'target': fill_vector(arguments.get('target')),
        'fov': arguments.get('fov', 45),
    }
    result = await ctx.api.create_object(arguments['sceneId'], data)
    camera_id = result_field(result, 'id')
    if camera_id:
        return f'Camera "{name}" created successfully with ID: {camera_id}'
    return f'Camera "{name}" created successfully'


@tool(
    'configureFog',
    "Enable, disable or tune the scene fog.",
    {
        'sceneId': SCENE_ID,
        'enabled': boolean('Whether fog is enabled', default=True),
        'color': string('Fog color (hex)', default='#cccccc'),
        'density': number('Fog density', minimum=0, maximum=1, default=0.1),
        'near': number('Near distance', minimum=0, default=1),
        'far': number('Far distance', minimum=0, default=100),
    },
    ['sceneId'],
    'configuring fog',
)
async def configure_fog(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    enabled = arguments.get('enabled', True)
    data = {
        'enabled': enabled,
        'color': arguments.get('color', '#cccccc'),
        'density': arguments.get('density', 0.1),
        'near': arguments.get('near', 1),
        'far': arguments.get('far', 100),
    }
    await ctx.api.request('PUT', endpoint("/scenes/{}/fog", arguments['sceneId']), data)
    return f"Fog {'enabled' if enabled else 'disabled'} successfully"


_BLOOM_DEFAULTS = {'enabled': False, 'intensity': 0.5}
_DOF_DEFAULTS = {'enabled': False, 'focusDistance': 10, 'focalLength': 50, 'bokehScale': 2}


@tool(
    'configurePostProcessing',
    "Configure post-processing effects (bloom, depth of field).",
    {
        'sceneId': SCENE_ID,
        'bloom': obj(
            {
                'enabled': boolean('Enable bloom effect', default=False),
                'intensity': number('Bloom intensity', minimum=0, maximum=1, default=0.5),
            },
            description='Bloom effect settings',
        ),
        'depthOfField': obj(
            {
                'enabled': boolean('Enable depth of field', default=False),
                'focusDistance': number('Focus distance', minimum=0, default=10),
                'focalLength': number('Focal length', minimum=0, default=50),
                'bokehScale': number('Bokeh scale', minimum=0, default=2),
            },
            description='Depth of field settings',
        ),
    },
    ['sceneId'],
    'configuring post-processing',
)
async def configure_post_processing(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    data = {}
    if arguments.get('bloom') is not None:
        data['bloom'] = {**_BLOOM_DEFAULTS, **arguments['bloom']}
    if arguments.get('depthOfField') is not None:
        data['depthOfField'] = {**_DOF_DEFAULTS, **arguments['depthOfField']}
    await ctx.api.request('PUT', endpoint("/scenes/{}/post-processing", arguments['sceneId']), data)
    return "Post-processing effects configured successfully"


TOOLS = [
    add_directional_light,
    add_camera,
    configure_fog,
    configure_post_processing,
]
