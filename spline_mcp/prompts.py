"""
Prompt templates.

Every prompt renders a single user message that walks the model through the
tools needed for a common Spline task. MCP prompt arguments are strings, so
numbers and lists arrive as text (lists as JSON or comma-separated).
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from mcp.types import GetPromptResult, Prompt, PromptArgument, PromptMessage, TextContent

Arguments = dict[str, str]


@dataclass(frozen=True)
class PromptSpec:
    name: str
    description: str
    render: Callable[[Arguments], str]
    arguments: list[PromptArgument] = field(default_factory=list)

    def to_prompt(self) -> Prompt:
        return Prompt(name=self.name, description=self.description, arguments=self.arguments)


def arg(name: str, description: str, required: bool = False) -> PromptArgument:
    return PromptArgument(name=name, description=description, required=required)


def _choice(arguments: Arguments, name: str, choices: tuple[str, ...], default: str) -> str:
    value = arguments.get(name) or default
    if value not in choices:
        raise ValueError(f"Invalid value for {name}: {value} (expected one of {', '.join(choices)})")
    return value


def _json_list(arguments: Arguments, name: str) -> list[Any]:
    raw = arguments.get(name)
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"{name} must be a JSON array: {e}") from e
    if not isinstance(value, list):
        raise ValueError(f"{name} must be a JSON array")
    return value


def _flag(arguments: Arguments, name: str, default: bool) -> bool:
    raw = arguments.get(name)
    if raw is None or raw == '':
        return default
    return raw.strip().lower() in ('true', '1', 'yes')


def _split(raw: str | None) -> list[str]:
    return [item.strip() for item in (raw or '').split(',') if item.strip()]


# =============================================================================
# Creation
# =============================================================================

def create_cube(a: Arguments) -> str:
    size = a.get('size') or '1'
    position = a.get('position') or json.dumps({'x': 0, 'y': 0, 'z': 0})
    return (
        f"Create a cube in scene {a['sceneId']} with these properties:\n"
        f"- Name: {a.get('name') or 'New Cube'}\n"
        f"- Size: {size}\n"
        f"- Color: {a.get('color') or '#ffffff'}\n"
        f"- Position: {position}\n\n"
        "Use the createObject tool to create a cube with these properties. "
        f"Set the scale to {size} for all three dimensions."
    )


def create_basic_scene(a: Arguments) -> str:
    objects = _json_list(a, 'objects') or [
        {'type': 'cube', 'name': 'Cube', 'position': {'x': 0, 'y': 0, 'z': 0}},
    ]
    objects_list = ''
    for index, obj in enumerate(objects, 1):
        objects_list += (
            f"\nObject {index}:\n"
            f"- Type: {obj.get('type')}\n"
            f"- Name: {obj.get('name')}\n"
            f"- Position: {json.dumps(obj.get('position') or {'x': 0, 'y': 0, 'z': 0})}\n"
            f"- Color: {obj.get('color') or '#ffffff'}\n"
        )
    light = (
        "Also create a directional light with the addDirectionalLight tool to illuminate the scene.\n"
        if _flag(a, 'includeLight', True) else ''
    )
    return (
        f"Create a basic scene in Spline with these objects in scene {a['sceneId']}:\n"
        f"{objects_list}\n"
        f"{light}\n"
        "Use the createObject tool to create each object one by one with the specified properties."
    )


def create_apply_material(a: Arguments) -> str:
    material_type = _choice(a, 'materialType', ('standard', 'physical', 'basic', 'lambert', 'phong'), 'physical')
    return (
        f"Create a new {material_type} material in scene {a['sceneId']} with these properties:\n"
        f"- Name: {a.get('materialName') or 'New Material'}\n"
        f"- Color: {a.get('color') or '#ffffff'}\n"
        f"- Roughness: {a.get('roughness') or '0.5'}\n"
        f"- Metalness: {a.get('metalness') or '0'}\n\n"
        f"Then apply this material to the object with ID {a['objectId']}.\n\n"
        "First, use the createMaterial tool to create the material with the specified properties, "
        "then use the applyMaterial tool to apply it to the object."
    )


# =============================================================================
# Animation and interaction
# =============================================================================

_TRIGGER_EVENTS = {'click': 'mouseDown', 'hover': 'mouseOver', 'sceneStart': 'sceneStart'}


def create_rotation_animation(a: Arguments) -> str:
    axis = _choice(a, 'axis', ('x', 'y', 'z'), 'y')
    easing = _choice(a, 'easing', ('linear', 'easeIn', 'easeOut', 'easeInOut'), 'easeInOut')
    trigger = _choice(a, 'triggerOn', tuple(_TRIGGER_EVENTS), 'click')
    duration = a.get('duration') or '2000'
    degrees = a.get('degrees') or '360'
    scope = (
        "Make the event specific to this object."
        if trigger != 'sceneStart' else "Leave the event scene-level."
    )
    return (
        f"Create a rotation animation for object {a['objectId']} in scene {a['sceneId']} "
        "with these properties:\n"
        f"- Rotation Axis: {axis}\n"
        f"- Duration: {duration} ms\n"
        f"- Rotation: {degrees} degrees\n"
        f"- Easing: {easing}\n"
        f"- Trigger: {trigger}\n\n"
        "Follow these steps:\n"
        f"1. Create a new state that changes the {axis} rotation of the object by {degrees} degrees\n"
        f"2. Set the transition duration to {duration} ms and the easing to {easing}\n"
        f"3. Create a new event of type {_TRIGGER_EVENTS[trigger]} that triggers this state\n"
        f"4. {scope}\n\n"
        "Use the createState tool first, then the createEvent tool to set up the animation."
    )


def create_color_change_interaction(a: Arguments) -> str:
    default_color = a.get('defaultColor') or '#ffffff'
    hover_color = a.get('hoverColor') or '#ff0000'
    click_color = a.get('clickColor') or '#00ff00'
    duration = a.get('duration') or '500'
    return (
        f"Create an interactive color change effect for object {a['objectId']} in scene {a['sceneId']} "
        "with these properties:\n"
        f"- Default Color: {default_color}\n"
        f"- Hover Color: {hover_color}\n"
        f"- Click Color: {click_color}\n"
        f"- Transition Duration: {duration} ms\n\n"
        "Follow these steps:\n"
        "1. Create three states:\n"
        f"   - A 'default' state with the object's color set to {default_color}\n"
        f"   - A 'hover' state with the object's color set to {hover_color}\n"
        f"   - A 'click' state with the object's color set to {click_color}\n"
        f"   - Set the transition duration for all states to {duration} ms\n"
        "2. Create three events:\n"
        "   - A 'mouseOver' event that triggers the 'hover' state\n"
        "   - A 'mouseDown' event that triggers the 'click' state\n"
        "   - A 'mouseOut' event that triggers the 'default' state\n"
        "   - Make all events specific to this object\n\n"
        "Use the createState tool multiple times to create each state, "
        "then use the createEvent tool multiple times to create each event."
    )


def create_api_interaction(a: Arguments) -> str:
    method = _choice(a, 'method', ('GET', 'POST'), 'GET')
    trigger_object = a.get('triggerObjectId')
    mappings_text = ''
    for index, mapping in enumerate(_json_list(a, 'responseMapping'), 1):
        mappings_text += (
            f"\nMapping {index}:\n"
            f"- Response Field: {mapping.get('field')}\n"
            f"- Target Object: {mapping.get('targetObjectId')}\n"
            f"- Property to Update: {mapping.get('property')}"
        )
    if not mappings_text:
        variable = a.get('variableName') or 'apiData'
        mappings_text = f"\n- Store the whole response in the Spline variable \"{variable}\""

    if trigger_object:
        trigger = f"The API should be triggered when object {trigger_object} is clicked."
        trigger_step = f"Create a mouseDown event for object {trigger_object} that triggers the API call"
    else:
        trigger = "The API should be called when the scene starts."
        trigger_step = "Configure the API to be called on scene start (requestOnStart)"

    return (
        f"Create an API interaction in scene {a['sceneId']} with these properties:\n"
        f"- API URL: {a['apiUrl']}\n"
        f"- Method: {method}\n"
        f"- {trigger}\n"
        f"- Response mappings:{mappings_text}\n\n"
        "Follow these steps:\n"
        "1. Use the configureApi tool to set up the API connection\n"
        "2. Map the API response fields to variables that will affect the specified object properties\n"
        f"3. {trigger_step}\n\n"
        "The goal is to have the API response affect properties of objects in the scene based on the mappings."
    )


# =============================================================================
# Runtime code
# =============================================================================

_INTERACTIVITY_TEXT = {
    'basic': (
        "- Basic mouse interactions (click, hover)\n"
        "- Simple property changes\n"
        "- Accessing object properties"
    ),
    'advanced': (
        "- Advanced mouse and keyboard interactions\n"
        "- Custom animations and transitions\n"
        "- Object manipulation (position, rotation, scale)\n"
        "- Material modifications\n"
        "- Camera controls\n"
        "- Physics interactions (if applicable)"
    ),
}

_FORMAT_TEXT = {
    'vanilla': 'vanilla JavaScript using the @splinetool/runtime package',
    'react': 'React components using @splinetool/react-spline',
    'next': 'Next.js components using @splinetool/react-spline/next',
}


def create_interactive_scene(a: Arguments) -> str:
    interactivity = _choice(a, 'interactivity', tuple(_INTERACTIVITY_TEXT), 'basic')
    fmt = _choice(a, 'format', tuple(_FORMAT_TEXT), 'vanilla')
    sizing = 'responsive' if _flag(a, 'responsive', True) else 'fixed-size'
    return (
        f"Create an interactive {interactivity} scene for Spline scene ID \"{a['sceneId']}\" "
        f"using {_FORMAT_TEXT[fmt]}.\n\n"
        f"I want the code to be {sizing} and include:\n"
        f"{_INTERACTIVITY_TEXT[interactivity]}\n\n"
        "First, use the appropriate tool to generate the code (exportSceneCode, generateReactComponent, "
        "or generateSceneInteractionCode). Then explain the key parts of the code and how I can "
        "integrate it into my project.\n\n"
        "Please provide detailed instructions on:\n"
        "1. How to set up the project with necessary dependencies\n"
        "2. How to integrate the code\n"
        "3. How to customize the interactions further"
    )


_SEQUENCE_TEXT = {
    'parallel': 'all objects animate simultaneously',
    'sequential': 'objects animate one after another in sequence',
    'choreographed': 'objects animate in a custom choreographed pattern with varying timings and effects',
}


def create_animation_sequence(a: Arguments) -> str:
    sequence = _choice(a, 'sequenceType', tuple(_SEQUENCE_TEXT), 'sequential')
    objects = _split(a.get('objectNames'))
    if not objects:
        raise ValueError("objectNames must list at least one object")
    objects_list = ''.join(f'- Object {index}: "{name}"\n' for index, name in enumerate(objects, 1))
    return (
        f"Create an animation sequence for Spline scene ID \"{a['sceneId']}\" where {_SEQUENCE_TEXT[sequence]}.\n\n"
        f"Objects to animate:\n{objects_list}\n"
        f"Total animation duration: {a.get('duration') or '2000'}ms\n\n"
        "Please help me create a complex animation sequence using the Spline runtime API. "
        "I want a solution that:\n"
        "1. Uses the official @splinetool/runtime package\n"
        "2. Creates smooth, professional animations\n"
        "3. Includes proper easing functions\n"
        "4. Is reusable and customizable\n\n"
        "Use the generateAnimationCode or generateComprehensiveExample tools to create this animation "
        "sequence, and then explain how it works and how I can modify it."
    )


_FEATURE_TEXT = {
    'responsiveness': 'Fully responsive design that works on all screen sizes',
    'interactivity': 'Rich interactivity with mouse and keyboard controls',
    'loading': 'Optimized loading with proper loading states and fallbacks',
    'controls': 'Custom UI controls for manipulating the 3D scene',
    'api-integration': 'Integration with external APIs for dynamic data',
    'performance': 'Performance optimizations for smooth rendering',
}


def create_react_integration(a: Arguments) -> str:
    framework = _choice(a, 'framework', ('react', 'next', 'remix'), 'react')
    features = _split(a.get('features')) or ['responsiveness', 'interactivity']
    features_text = ''.join(f"- {_FEATURE_TEXT[f]}\n" for f in _FEATURE_TEXT if f in features)
    component = a.get('componentName') or 'SplineScene'
    return (
        f"Create a complete {framework.capitalize()} integration for Spline scene ID \"{a['sceneId']}\" "
        "with these features:\n"
        f"{features_text}\n"
        "I want to go beyond basic embedding and create a truly interactive and professional integration. "
        "Please:\n"
        f"1. Generate the complete component code using generateReactComponent with componentName \"{component}\"\n"
        "2. Show me how to properly structure and optimize the component\n"
        f"3. Explain how to integrate it with {framework} routing and data fetching\n"
        "4. Provide tips for improving performance and user experience"
    )


PROMPTS = [
    PromptSpec('create-cube', 'Create a cube with a name, size, color and position', create_cube, [
        arg('sceneId', 'Scene ID', True),
        arg('name', 'Cube name (default: New Cube)'),
        arg('size', 'Cube size (default: 1)'),
        arg('color', 'Cube color in hex (default: #ffffff)'),
        arg('position', 'Position as JSON {"x":0,"y":0,"z":0}'),
    ]),
    PromptSpec('create-basic-scene', 'Populate a scene with several objects and a light', create_basic_scene, [
        arg('sceneId', 'Scene ID', True),
        arg('objects', 'JSON array of {type, name, position, color}'),
        arg('includeLight', 'Whether to include a directional light (default: true)'),
    ]),
    PromptSpec('create-apply-material', 'Create a material and apply it to an object', create_apply_material, [
        arg('sceneId', 'Scene ID', True),
        arg('objectId', 'Object ID', True),
        arg('materialType', 'standard, physical, basic, lambert or phong (default: physical)'),
        arg('materialName', 'Material name'),
        arg('color', 'Material color in hex'),
        arg('roughness', 'Roughness (0-1)'),
        arg('metalness', 'Metalness (0-1)'),
    ]),
    PromptSpec('create-rotation-animation', 'Rotate an object through a state and an event',
               create_rotation_animation, [
                   arg('sceneId', 'Scene ID', True),
                   arg('objectId', 'Object ID', True),
                   arg('axis', 'Rotation axis x, y or z (default: y)'),
                   arg('duration', 'Animation duration in ms (default: 2000)'),
                   arg('degrees', 'Rotation degrees (default: 360)'),
                   arg('easing', 'linear, easeIn, easeOut or easeInOut'),
                   arg('triggerOn', 'click, hover or sceneStart (default: click)'),
               ]),
    PromptSpec('create-color-change-interaction', 'Hover and click color states for an object',
               create_color_change_interaction, [
                   arg('sceneId', 'Scene ID', True),
                   arg('objectId', 'Object ID', True),
                   arg('defaultColor', 'Default color in hex'),
                   arg('hoverColor', 'Color on hover in hex'),
                   arg('clickColor', 'Color on click in hex'),
                   arg('duration', 'Transition duration in ms (default: 500)'),
               ]),
    PromptSpec('create-api-interaction', 'Drive scene properties from an external API', create_api_interaction, [
        arg('sceneId', 'Scene ID', True),
        arg('apiUrl', 'API endpoint URL', True),
        arg('method', 'GET or POST (default: GET)'),
        arg('triggerObjectId', 'Object that triggers the API call when clicked'),
        arg('responseMapping', 'JSON array of {field, targetObjectId, property}'),
        arg('variableName', 'Variable that receives the response when no mapping is given'),
    ]),
    PromptSpec('create-interactive-scene', 'Generate interactive runtime code for a scene',
               create_interactive_scene, [
                   arg('sceneId', 'Scene ID', True),
                   arg('interactivity', 'basic or advanced (default: basic)'),
                   arg('format', 'vanilla, react or next (default: vanilla)'),
                   arg('responsive', 'Whether to make it responsive (default: true)'),
               ]),
    PromptSpec('create-animation-sequence', 'Animate several objects in sequence', create_animation_sequence, [
        arg('sceneId', 'Scene ID', True),
        arg('objectNames', 'Comma-separated list of object names', True),
        arg('sequenceType', 'parallel, sequential or choreographed (default: sequential)'),
        arg('duration', 'Total animation duration in ms (default: 2000)'),
    ]),
    PromptSpec('create-react-integration', 'Build a React, Next or Remix integration', create_react_integration, [
        arg('sceneId', 'Scene ID', True),
        arg('framework', 'react, next or remix (default: react)'),
        arg('features', 'Comma-separated: ' + ', '.join(_FEATURE_TEXT)),
        arg('componentName', 'Component name (default: SplineScene)'),
    ]),
]

_PROMPT_INDEX = {spec.name: spec for spec in PROMPTS}


def list_prompts() -> list[Prompt]:
    return [spec.to_prompt() for spec in PROMPTS]


def get_prompt(name: str, arguments: dict[str, str] | None = None) -> GetPromptResult:
    """
    Render a prompt.

    Raises:
        ValueError: If the prompt is unknown, a required argument is missing,
            or an argument has an invalid value
    """
    spec = _PROMPT_INDEX.get(name)
    if spec is None:
        raise ValueError(f"Unknown prompt: {name}")
    arguments = dict(arguments or {})
    missing = [a.name for a in spec.arguments if a.required and not arguments.get(a.name)]
    if missing:
        raise ValueError(f"Missing required arguments for {name}: {', '.join(missing)}")
    text = spec.render(arguments)
    return GetPromptResult(
        description=spec.description,
        messages=[PromptMessage(role='user', content=TextContent(type='text', text=text))],
    )
