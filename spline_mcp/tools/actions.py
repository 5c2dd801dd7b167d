"""Event action tools."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .base import (
    EASING,
    SCENE_ID,
    VARIABLE_TYPES,
    ToolContext,
    ToolSpec,
    array,
    boolean,
    delete_tool,
    endpoint,
    enum,
    fetch_tool,
    ident,
    number,
    obj,
    pick,
    record,
    result_field,
    string,
    tool,
)

ACTION_TYPES = (
    'transition', 'sound', 'video', 'openLink', 'resetScene',
    'switchCamera', 'createObject', 'destroyObject', 'sceneTransition',
    'animation', 'particlesControl', 'variableControl', 'conditional',
    'setVariable', 'clearLocalStorage', 'apiRequest',
)

ACTION_ID = ident('Action ID')


@tool(
    'createAction',
    "Attach a new action to an event.",
    {
        'sceneId': SCENE_ID,
        'eventId': ident('Event ID to attach this action to'),
        'type': enum(ACTION_TYPES, 'Action type'),
        'name': ident('Action name'),
        'target': string('Target ID (object, state, camera, etc.)'),
        'parameters': record('Action parameters'),
    },
    ['sceneId', 'eventId', 'type', 'name'],
    'creating action',
)
async def create_action(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    name = arguments['name']
    data = {
        'type': arguments['type'],
        'name': name,
        **pick(arguments, 'target', 'parameters'),
    }
    result = await ctx.api.request(
        'POST', endpoint("/scenes/{}/events/{}/actions", arguments['sceneId'], arguments['eventId']), data
    )
    return f'Action "{name}" created successfully with ID: {result_field(result, "id")}'


def configure_action(
    name: str,
    description: str,
    action_type: str,
    properties: dict[str, Any],
    required: list[str],
    label: str,
    build: Callable[[dict[str, Any]], dict[str, Any]],
) -> ToolSpec:
    """
    A tool that PUTs ``{type, parameters}`` to an existing action.

    ``build`` maps the tool arguments to the action parameters.
    """

    @tool(
        name,
        description,
        {'sceneId': SCENE_ID, 'actionId': ACTION_ID, **properties},
        ['sceneId', 'actionId', *required],
        f"configuring {label} action",
    )
    async def handler(ctx: ToolContext, arguments: dict[str, Any]) -> str:
        action_id = arguments['actionId']
        await ctx.api.request(
            'PUT',
            endpoint("/scenes/{}/actions/{}", arguments['sceneId'], action_id),
            {'type': action_type, 'parameters': build(arguments)},
        )
        return f"{label[0].upper()}{label[1:]} action {action_id} configured successfully"

    return handler


def _sound_parameters(arguments: dict[str, Any]) -> dict[str, Any]:
    params = {
        'soundUrl': arguments['soundUrl'],
        'volume': arguments.get('volume', 1),
        'loop': arguments.get('loop', False),
        'spatial': arguments.get('spatial', False),
    }
    if params['spatial'] and arguments.get('objectId'):
        params['objectId'] = arguments['objectId']
    return params


def _conditional_parameters(arguments: dict[str, Any]) -> dict[str, Any]:
    params = {
        'variableName': arguments['variableName'],
        'condition': arguments['condition'],
        'value': arguments['value'],
        'trueActions': arguments['trueActionIds'],
    }
    if arguments.get('falseActionIds') is not None:
        params['falseActions'] = arguments['falseActionIds']
    return params


configure_transition_action = configure_action(
    'configureTransitionAction',
    "Configure a transition action to move the scene to a target state.",
    'transition',
    {
        'targetState': ident('Target state ID'),
        'duration': number('Transition duration (ms)', minimum=0),
        'easing': enum(EASING, 'Transition easing'),
        'delay': number('Delay before starting the transition (ms)', minimum=0),
    },
    ['targetState'],
    'transition',
    lambda a: pick(a, 'targetState', 'duration', 'easing', 'delay'),
)

configure_sound_action = configure_action(
    'configureSoundAction',
    "Configure a sound action.",
    'sound',
    {
        'soundUrl': string('URL to sound file', format='uri'),
        'volume': number('Volume (0-1)', minimum=0, maximum=1, default=1),
        'loop': boolean('Whether to loop the sound', default=False),
        'spatial': boolean('Whether the sound is spatial (3D)', default=False),
        'objectId': string('Object ID for the spatial sound source'),
    },
    ['soundUrl'],
    'sound',
    _sound_parameters,
)

configure_animation_action = configure_action(
    'configureAnimationAction',
    "Configure an animation action on an object.",
    'animation',
    {
        'objectId': ident('Object ID to animate'),
        'animationType': enum(('rotate', 'move', 'scale', 'fade'), 'Animation type'),
        'duration': number('Animation duration (ms)', minimum=0),
        'easing': enum(EASING, 'Animation easing'),
        'parameters': record('Animation-specific parameters'),
    },
    ['objectId', 'animationType', 'duration', 'parameters'],
    'animation',
    lambda a: {**pick(a, 'objectId', 'animationType', 'duration', 'easing'), **(a.get('parameters') or {})},
)

configure_variable_action = configure_action(
    'configureVariableAction',
    "Configure a variable control action (set, increment, decrement, multiply, divide, toggle).",
    'variableControl',
    {
        'variableName': ident('Variable name'),
        'operation': enum(('set', 'increment', 'decrement', 'multiply', 'divide', 'toggle'),
                          'Operation to perform'),
        'value': {'description': 'Value to use in the operation'},
    },
    ['variableName', 'operation'],
    'variable control',
    lambda a: {'variableName': a['variableName'], 'operation': a['operation'], 'value': a.get('value')},
)

configure_conditional_action = configure_action(
    'configureConditionalAction',
    "Configure a conditional action that runs other actions depending on a variable.",
    'conditional',
    {
        'variableName': ident('Variable name to check'),
        'condition': enum(('equals', 'notEquals', 'greaterThan', 'lessThan', 'contains'), 'Condition to check'),
        'value': {'description': 'Value to compare against'},
        'trueActionIds': array({'type': 'string'}, 'Actions to trigger if the condition is true'),
        'falseActionIds': array({'type': 'string'}, 'Actions to trigger if the condition is false'),
    },
    ['variableName', 'condition', 'value', 'trueActionIds'],
    'conditional',
    _conditional_parameters,
)

configure_api_request_action = configure_action(
    'configureApiRequestAction',
    "Configure an action that calls a configured API and maps the response to variables.",
    'apiRequest',
    {
        'apiId': ident('API configuration ID'),
        'mappings': array(
            obj(
                {
                    'responseField': string('Field from API response'),
                    'variableName': string('Spline variable name'),
                    'variableType': enum(VARIABLE_TYPES, 'Variable type'),
                },
                ['responseField', 'variableName', 'variableType'],
            ),
            'Response mappings',
        ),
    },
    ['apiId'],
    'API request',
    lambda a: pick(a, 'apiId', 'mappings'),
)

configure_camera_action = configure_action(
    'configureCameraAction',
    "Configure an action that switches to another camera.",
    'switchCamera',
    {
        'cameraId': ident('Camera ID to switch to'),
        'duration': number('Transition duration (ms)', minimum=0),
        'easing': enum(EASING, 'Transition easing'),
    },
    ['cameraId'],
    'camera',
    lambda a: pick(a, 'cameraId', 'duration', 'easing'),
)

list_actions = fetch_tool(
    'listActions',
    "List the actions attached to an event.",
    '/scenes/{sceneId}/events/{eventId}/actions',
    'listing actions',
    {'sceneId': SCENE_ID, 'eventId': ident('Event ID')},
)

delete_action = delete_tool(
    'deleteAction',
    "Remove an action from an event.",
    '/scenes/{sceneId}/events/{eventId}/actions/{actionId}',
    'deleting action',
    {'sceneId': SCENE_ID, 'eventId': ident('Event ID'), 'actionId': ACTION_ID},
    'Action {actionId} deleted successfully',
)


TOOLS = [
    create_action,
    configure_transition_action,
    configure_sound_action,
    configure_animation_action,
    configure_variable_action,
    configure_conditional_action,
    configure_api_request_action,
    configure_camera_action,
    list_actions,
    delete_action,
]
