"""
Read-only MCP resources for Spline scenes.

Each resource renders one upstream GET as Markdown. URIs are matched against
the templates below; failures are rendered into the body instead of raised.
"""

from __future__ import annotations

import json
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from mcp.types import Resource, ResourceTemplate

from .api_client import SplineApiClient

MIME_TYPE = 'text/markdown'
SCENES_URI = 'spline://scenes'

Renderer = Callable[..., Awaitable[str]]


def _value(value: Any) -> Any:
    return 'N/A' if value is None or value == '' else value


def _yes_no(value: Any) -> str:
    return 'Yes' if value else 'No'


def _items(result: Any, key: str) -> list[dict]:
    """Accept either a bare list or an object wrapping the list under ``key``."""
    if isinstance(result, list):
        return result
    if isinstance(result, dict):
        return result.get(key) or []
    return []


def _snake(name: str) -> str:
    return re.sub(r'(?<!^)(?=[A-Z])', '_', name).lower()


def _axis(entity: dict, field: str, axis: str, default: float) -> Any:
    return (entity.get(field) or {}).get(axis, default)


# =============================================================================
# Scenes and objects
# =============================================================================

async def render_scenes(api: SplineApiClient) -> str:
    scenes = _items(await api.get_scenes({'limit': 20, 'offset': 0}), 'scenes')
    text = '# Available Spline Scenes\n\n'
    if not scenes:
        return text + 'No scenes available.'
    for scene in scenes:
        text += (
            f"## {scene.get('name')}\n\n"
            f"- ID: {scene.get('id')}\n"
            f"- Description: {_value(scene.get('description'))}\n"
            f"- Resource URI: spline://scene/{scene.get('id')}\n\n"
        )
    return text


async def render_scene(api: SplineApiClient, scene_id: str) -> str:
    scene = await api.get_scene(scene_id)
    return (
        f"# Spline Scene: {scene.get('name')}\n\n"
        "## Scene Details\n\n"
        f"- ID: {scene.get('id')}\n"
        f"- Name: {scene.get('name')}\n"
        f"- Description: {_value(scene.get('description'))}\n"
        f"- Created: {_value(scene.get('createdAt'))}\n"
        f"- Last Updated: {_value(scene.get('updatedAt'))}\n\n"
        "## Scene Statistics\n\n"
        f"- Objects: {_value(scene.get('objectCount'))}\n"
        f"- Materials: {_value(scene.get('materialCount'))}\n"
        f"- States: {_value(scene.get('stateCount'))}\n"
        f"- Events: {_value(scene.get('eventCount'))}\n\n"
        "## Embed URL\n\n"
        f"{_value(scene.get('embedUrl'))}\n\n"
        "## Public URL\n\n"
        f"{_value(scene.get('publicUrl'))}"
    )


async def render_objects(api: SplineApiClient, scene_id: str) -> str:
    objects = _items(await api.get_objects(scene_id), 'objects')
    text = f"# Objects in Scene (ID: {scene_id})\n\n"
    if not objects:
        return text + 'No objects available in this scene.'
    for obj in objects:
        text += (
            f"## {obj.get('name')}\n\n"
            f"- ID: {obj.get('id')}\n"
            f"- Type: {_value(obj.get('type'))}\n"
            f"- Resource URI: spline://scene/{scene_id}/object/{obj.get('id')}\n\n"
        )
    return text


async def render_object(api: SplineApiClient, scene_id: str, object_id: str) -> str:
    obj = await api.get_object(scene_id, object_id)
    material = obj.get('material')
    if material:
        material_text = f"- Material ID: {material.get('id')}\n- Material Name: {_value(material.get('name'))}"
    else:
        material_text = 'No material assigned'

    transform = ''
    for field, default, unit in (('position', 0, ''), ('rotation', 0, '°'), ('scale', 1, '')):
        transform += f"### {field.capitalize()}\n"
        for axis in ('x', 'y', 'z'):
            transform += f"- {axis.upper()}: {_axis(obj, field, axis, default)}{unit}\n"
        transform += '\n'

    return (
        f"# Spline Object: {obj.get('name')}\n\n"
        "## Object Details\n\n"
        f"- ID: {obj.get('id')}\n"
        f"- Name: {obj.get('name')}\n"
        f"- Type: {_value(obj.get('type'))}\n"
        f"- Visible: {_yes_no(obj.get('visible'))}\n\n"
        "## Transform\n\n"
        f"{transform}"
        "## Material\n\n"
        f"{material_text}"
    )


# =============================================================================
# Materials
# =============================================================================

async def render_materials(api: SplineApiClient, scene_id: str) -> str:
    materials = _items(await api.get_materials(scene_id), 'materials')
    text = f"# Materials in Scene (ID: {scene_id})\n\n"
    if not materials:
        return text + 'No materials available in this scene.'
    for material in materials:
        text += (
            f"## {material.get('name')}\n\n"
            f"- ID: {material.get('id')}\n"
            f"- Type: {_value(material.get('type'))}\n"
            f"- Color: {_value(material.get('color'))}\n"
            f"- Resource URI: spline://scene/{scene_id}/material/{material.get('id')}\n\n"
        )
    return text


async def render_material(api: SplineApiClient, scene_id: str, material_id: str) -> str:
    material = await api.get_material(scene_id, material_id)
    return (
        f"# Spline Material: {material.get('name')}\n\n"
        "## Material Details\n\n"
        f"- ID: {material.get('id')}\n"
        f"- Name: {material.get('name')}\n"
        f"- Type: {_value(material.get('type'))}\n"
        f"- Color: {_value(material.get('color'))}\n\n"
        "## Properties\n\n"
        f"- Roughness: {_value(material.get('roughness'))}\n"
        f"- Metalness: {_value(material.get('metalness'))}\n"
        f"- Opacity: {_value(material.get('opacity'))}\n"
        f"- Transparent: {_yes_no(material.get('transparent'))}\n"
        f"- Wireframe: {_yes_no(material.get('wireframe'))}\n"
        f"- Emissive: {_value(material.get('emissive'))}\n"
        f"- Emissive Intensity: {_value(material.get('emissiveIntensity'))}\n"
        f"- Side: {_value(material.get('side'))}\n"
        f"- Flat Shading: {_yes_no(material.get('flatShading'))}"
    )


# =============================================================================
# States and events
# =============================================================================

async def render_states(api: SplineApiClient, scene_id: str) -> str:
    states = _items(await api.get_states(scene_id), 'states')
    text = f"# States in Scene (ID: {scene_id})\n\n"
    if not states:
        return text + 'No states available in this scene.'
    for state in states:
        text += (
            f"## {state.get('name')}\n\n"
            f"- ID: {state.get('id')}\n"
            f"- Transition Duration: {_value(state.get('transitionDuration'))} ms\n"
            f"- Affected Properties: {len(state.get('properties') or [])}\n"
            f"- Resource URI: spline://scene/{scene_id}/state/{state.get('id')}\n\n"
        )
    return text


async def render_state(api: SplineApiClient, scene_id: str, state_id: str) -> str:
    state = await api.get_state(scene_id, state_id)
    properties = state.get('properties') or []
    if properties:
        properties_text = '## Properties Changed\n\n'
        for index, prop in enumerate(properties, 1):
            properties_text += (
                f"### Property {index}\n"
                f"- Object: {prop.get('objectId')}\n"
                f"- Property: {prop.get('property')}\n"
                f"- Value: {json.dumps(prop.get('value'))}\n\n"
            )
    else:
        properties_text = 'No properties defined for this state.'
    return (
        f"# Spline State: {state.get('name')}\n\n"
        "## State Details\n\n"
        f"- ID: {state.get('id')}\n"
        f"- Name: {state.get('name')}\n"
        f"- Transition Duration: {_value(state.get('transitionDuration'))} ms\n"
        f"- Transition Easing: {_value(state.get('transitionEasing'))}\n\n"
        f"{properties_text}"
    )


async def render_events(api: SplineApiClient, scene_id: str) -> str:
    events = _items(await api.get_events(scene_id), 'events')
    text = f"# Events in Scene (ID: {scene_id})\n\n"
    if not events:
        return text + 'No events available in this scene.'
    for event in events:
        target = f"ID: {event['objectId']}" if event.get('objectId') else 'Scene-level event'
        text += (
            f"## {event.get('name')}\n\n"
            f"- ID: {event.get('id')}\n"
            f"- Type: {_value(event.get('type'))}\n"
            f"- Object: {target}\n"
            f"- Actions: {len(event.get('actions') or [])}\n"
            f"- Resource URI: spline://scene/{scene_id}/event/{event.get('id')}\n\n"
        )
    return text


async def render_event(api: SplineApiClient, scene_id: str, event_id: str) -> str:
    event = await api.get_event(scene_id, event_id)
    actions = event.get('actions') or []
    if actions:
        actions_text = '## Actions\n\n'
        for index, action in enumerate(actions, 1):
            actions_text += (
                f"### Action {index}\n"
                f"- Type: {action.get('type')}\n"
                f"- Target: {_value(action.get('target'))}\n"
                f"- Parameters: {json.dumps(action.get('params') or {}, indent=2)}\n\n"
            )
    else:
        actions_text = 'No actions defined for this event.'
    return (
        f"# Spline Event: {event.get('name')}\n\n"
        "## Event Details\n\n"
        f"- ID: {event.get('id')}\n"
        f"- Name: {event.get('name')}\n"
        f"- Type: {_value(event.get('type'))}\n"
        f"- Object: {_value(event.get('objectId'))}\n\n"
        f"{actions_text}"
    )


# =============================================================================
# URI routing
# =============================================================================

@dataclass(frozen=True)
class ResourceRoute:
    uri_template: str
    name: str
    description: str
    what: str
    render: Renderer

    @property
    def pattern(self) -> re.Pattern[str]:
        """Regex for the template; ``{sceneId}`` becomes the group ``scene_id``."""
        regex = re.sub(
            r'\\\{(\w+)\\\}',
            lambda m: f"(?P<{_snake(m.group(1))}>[^/]+)",
            re.escape(self.uri_template),
        )
        return re.compile(f'^{regex}$')

    def to_template(self) -> ResourceTemplate:
        return ResourceTemplate(
            uriTemplate=self.uri_template,
            name=self.name,
            description=self.description,
            mimeType=MIME_TYPE,
        )


ROUTES = [
    ResourceRoute(SCENES_URI, 'scenes', 'List of available Spline scenes', 'scenes', render_scenes),
    ResourceRoute('spline://scene/{sceneId}', 'scene', 'Details and statistics of one scene',
                  'scene information', render_scene),
    ResourceRoute('spline://scene/{sceneId}/objects', 'scene-objects', 'Objects in a scene',
                  'objects', render_objects),
    ResourceRoute('spline://scene/{sceneId}/object/{objectId}', 'scene-object',
                  'Transform and material of one object', 'object information', render_object),
    ResourceRoute('spline://scene/{sceneId}/materials', 'scene-materials', 'Materials in a scene',
                  'materials', render_materials),
    ResourceRoute('spline://scene/{sceneId}/material/{materialId}', 'scene-material',
                  'Properties of one material', 'material information', render_material),
    ResourceRoute('spline://scene/{sceneId}/states', 'scene-states', 'States in a scene',
                  'states', render_states),
    ResourceRoute('spline://scene/{sceneId}/state/{stateId}', 'scene-state',
                  'Property changes of one state', 'state information', render_state),
    ResourceRoute('spline://scene/{sceneId}/events', 'scene-events', 'Events in a scene',
                  'events', render_events),
    ResourceRoute('spline://scene/{sceneId}/event/{eventId}', 'scene-event',
                  'Actions of one event', 'event information', render_event),
]


def list_resources() -> list[Resource]:
    return [
        Resource(uri=SCENES_URI, name='scenes', description='List of available Spline scenes', mimeType=MIME_TYPE)
    ]


def list_resource_templates() -> list[ResourceTemplate]:
    return [route.to_template() for route in ROUTES if '{' in route.uri_template]


def match(uri: str) -> tuple[ResourceRoute, dict[str, str]] | None:
    for route in ROUTES:
        found = route.pattern.match(uri)
        if found:
            return route, found.groupdict()
    return None


async def read_resource(api: SplineApiClient, uri: str) -> str:
    """Render ``uri`` as Markdown. Never raises; errors become the body."""
    matched = match(uri)
    if matched is None:
        return f"Error retrieving resource: Unknown resource URI: {uri}"
    route, params = matched
    try:
        return await route.render(api, **params)
    except Exception as e:
        return f"Error retrieving {route.what}: {e}"
