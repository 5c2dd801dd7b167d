"""Runtime code generation tools. None of these call the Spline API."""

from __future__ import annotations

from typing import Any

from .. import codegen
from .base import (
    EASING,
    SCENE_ID,
    ToolContext,
    boolean,
    enum,
    ident,
    integer,
    record,
    string,
    tool,
)


@tool(
    'getRuntimeSetup',
    "Get installation and setup instructions for the @splinetool/runtime package.",
    {},
    [],
    'generating setup code',
)
async def get_runtime_setup(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    return codegen.runtime_setup()


@tool(
    'generateComprehensiveExample',
    "Generate a complete runtime example: object lookup, events, variables, camera and animation.",
    {'sceneId': SCENE_ID},
    ['sceneId'],
    'generating comprehensive example',
)
async def generate_comprehensive_example(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    return codegen.comprehensive_example(arguments['sceneId'])


@tool(
    'generateAnimationCode',
    "Generate runtime code that animates an object (rotate, move, scale, color).",
    {
        'sceneId': SCENE_ID,
        'objectId': ident('Object ID'),
        'animationType': enum(('rotate', 'move', 'scale', 'color'), 'Animation type'),
        'duration': integer('Animation duration (ms)', minimum=100, default=1000),
        'easing': enum(EASING, 'Animation easing function', default='easeInOut'),
        'loop': boolean('Whether to loop the animation', default=False),
        'params': record('Animation-specific parameters'),
    },
    ['sceneId', 'objectId', 'animationType'],
    'generating animation code',
)
async def generate_animation_code(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    params = {
        **(arguments.get('params') or {}),
        'animationType': arguments['animationType'],
        'duration': arguments.get('duration', 1000),
        'easing': arguments.get('easing', 'easeInOut'),
        'loop': arguments.get('loop', False),
    }
    return codegen.object_interaction_code(arguments['sceneId'], arguments['objectId'], 'animation', params)


@tool(
    'generateSceneInteractionCode',
    "Generate scene-wide interaction code: exploring objects, event listeners, variables, "
    "camera control, simple physics or a custom body.",
    {
        'sceneId': SCENE_ID,
        'interactionType': enum(codegen.INTERACTION_TYPES, 'Type of interaction'),
        'options': record('Interaction-specific options'),
    },
    ['sceneId', 'interactionType'],
    'generating scene interaction code',
)
async def generate_scene_interaction_code(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    return codegen.scene_interaction_code(
        arguments['sceneId'], arguments['interactionType'], arguments.get('options')
    )


@tool(
    'generateReactComponent',
    "Generate a React component that embeds the scene.",
    {
        'sceneId': SCENE_ID,
        'componentName': string('React component name', minLength=1, default='SplineScene'),
        'interactivity': enum(('none', 'basic', 'advanced'), 'Level of interactivity', default='basic'),
        'responsive': boolean('Whether to make the component responsive', default=True),
        'typescript': boolean('Whether to generate TypeScript code', default=False),
    },
    ['sceneId'],
    'generating React component',
)
async def generate_react_component(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    return codegen.react_component(
        arguments['sceneId'],
        component_name=arguments.get('componentName', 'SplineScene'),
        interactivity=arguments.get('interactivity', 'basic'),
        responsive=arguments.get('responsive', True),
        typescript=arguments.get('typescript', False),
    )


TOOLS = [
    get_runtime_setup,
    generate_comprehensive_example,
    generate_animation_code,
    generate_scene_interaction_code,
    generate_react_component,
]
