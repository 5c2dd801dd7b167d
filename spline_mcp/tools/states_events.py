"""State and event tools, including the extended event catalog."""

from __future__ import annotations

from typing import Any

from .. import codegen
from .base import (
    EASING,
    SCENE_ID,
    ToolContext,
    array,
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
    vector,
)

EVENT_TYPES = (
    'mouseDown', 'mouseUp', 'mouseOver', 'mouseOut', 'mouseMove',
    'touchStart', 'touchEnd', 'touchMove',
    'keyDown', 'keyUp',
    'collision', 'sceneStart', 'custom',
)

EVENT_ACTION_TYPES = ('triggerState', 'setProperty', 'playAnimation', 'callFunction', 'triggerEvent', 'setVariable')

COMPREHENSIVE_EVENT_TYPES = (
    'mouseUp', 'mouseDown', 'mousePress', 'mouseHover',
    'keyUp', 'keyDown', 'keyPress',
    'scroll', 'lookAt', 'follow',
    'gameControls',
    'distance', 'collision', 'triggerArea',
    'stateChange', 'variableChange', 'screenResize',
    'apiUpdated', 'webhookCalled',
    'aiAssistantListener', 'aiAssistantTrigger',
    'sceneStart', 'sceneLoad', 'sceneUnload',
)

# eventType -> argument names forwarded by configureEventParameters
EVENT_PARAMETER_FIELDS = {
    'keyUp': ('keyCode',),
    'keyDown': ('keyCode',),
    'keyPress': ('keyCode',),
    'distance': ('distance', 'targetObjectId'),
    'lookAt': ('targetObjectId',),
    'follow': ('targetObjectId',),
    'variableChange': ('variableName',),
    'collision': ('collisionGroup',),
    'triggerArea': ('triggerArea',),
    'aiAssistantListener': ('aiPrompt',),
    'aiAssistantTrigger': ('aiPrompt',),
}


# =============================================================================
# States
# =============================================================================

get_states = fetch_tool(
    'getStates',
    "List all states defined in a scene.",
    '/scenes/{sceneId}/states',
    'retrieving states',
)

get_state_details = fetch_tool(
    'getStateDetails',
    "Get the full definition of one state.",
    '/scenes/{sceneId}/states/{stateId}',
    'retrieving state details',
    {'sceneId': SCENE_ID, 'stateId': ident('State ID')},
)


@tool(
    'createState',
    "Create a state: a named set of object property values the scene can transition to.",
    {
        'sceneId': SCENE_ID,
        'name': ident('State name'),
        'properties': array(
            obj(
                {
                    'objectId': ident('Object ID'),
                    'property': ident('Property to change'),
                    'value': {'description': 'Value to set'},
                },
                ['objectId', 'property', 'value'],
            ),
            'State properties',
            minItems=1,
        ),
        'transitionDuration': number('Transition duration in ms', minimum=0),
        'transitionEasing': enum(EASING, 'Easing function for transitions'),
    },
    ['sceneId', 'name', 'properties'],
    'creating state',
)
async def create_state(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    data = {
        'name': arguments['name'],
        'properties': arguments['properties'],
        **pick(arguments, 'transitionDuration', 'transitionEasing'),
    }
    result = await ctx.api.create_state(arguments['sceneId'], data)
    return f"State created successfully with ID: {result_field(result, 'id')}"


@tool(
    'triggerState',
    "Transition the scene to a state.",
    {'sceneId': SCENE_ID, 'stateId': ident('State ID')},
    ['sceneId', 'stateId'],
    'triggering state',
)
async def trigger_state(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    state_id = arguments['stateId']
    await ctx.api.trigger_state(arguments['sceneId'], state_id)
    return f"State {state_id} triggered successfully"


# =============================================================================
# Events
# =============================================================================

get_events = fetch_tool(
    'getEvents',
    "List all events defined in a scene.",
    '/scenes/{sceneId}/events',
    'retrieving events',
)

get_event_details = fetch_tool(
    'getEventDetails',
    "Get the full definition of one event, including its actions.",
    '/scenes/{sceneId}/events/{eventId}',
    'retrieving event details',
    {'sceneId': SCENE_ID, 'eventId': ident('Event ID')},
)


def _event_actions(type_schema: dict[str, Any]) -> dict[str, Any]:
    return array(
        obj(
            {
                'type': type_schema,
                'target': string('Target ID (object, state, etc.)'),
                'params': record('Action parameters'),
            },
            ['type'],
        ),
        'Actions to perform when the event is triggered',
        minItems=1,
    )


@tool(
    'createEvent',
    "Create an event that runs actions when it fires (clicks, keys, collisions, scene start).",
    {
        'sceneId': SCENE_ID,
        'name': ident('Event name'),
        'type': enum(EVENT_TYPES, 'Event type'),
        'objectId': string('Object ID (if object-specific event)'),
        'actions': _event_actions(enum(EVENT_ACTION_TYPES, 'Action type')),
    },
    ['sceneId', 'name', 'type', 'actions'],
    'creating event',
)
async def create_event(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    data = {
        'name': arguments['name'],
        'type': arguments['type'],
        **pick(arguments, 'objectId'),
        'actions': arguments['actions'],
    }
    result = await ctx.api.create_event(arguments['sceneId'], data)
    return f"Event created successfully with ID: {result_field(result, 'id')}"


@tool(
    'triggerEvent',
    "Fire an event, optionally passing event data.",
    {
        'sceneId': SCENE_ID,
        'eventId': ident('Event ID'),
        'eventData': record('Data to pass with the event'),
    },
    ['sceneId', 'eventId'],
    'triggering event',
)
async def trigger_event(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    event_id = arguments['eventId']
    await ctx.api.trigger_event(arguments['sceneId'], event_id, arguments.get('eventData'))
    return f"Event {event_id} triggered successfully"


@tool(
    'generateEventListenerCode',
    "Generate runtime code that listens for an event and reacts to it.",
    {'sceneId': SCENE_ID, 'eventName': ident('Event name, e.g. mouseDown')},
    ['sceneId', 'eventName'],
    'generating code',
)
async def generate_event_listener_code(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    return codegen.event_listener_code(arguments['sceneId'], arguments['eventName'])


@tool(
    'createComprehensiveEvent',
    "Create an event of any supported type (mouse, keyboard, scroll, proximity, state, "
    "API, AI assistant, scene lifecycle) with event-specific parameters.",
    {
        'sceneId': SCENE_ID,
        'name': ident('Event name'),
        'type': enum(COMPREHENSIVE_EVENT_TYPES, 'Event type'),
        'objectId': string('Object ID (if object-specific event)'),
        'parameters': record('Event specific parameters (e.g. key codes, trigger distances)'),
        'actions': _event_actions(string('Action type')),
    },
    ['sceneId', 'name', 'type', 'actions'],
    'creating event',
)
async def create_comprehensive_event(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    name = arguments['name']
    data = {
        'name': name,
        'type': arguments['type'],
        **pick(arguments, 'objectId', 'parameters'),
        'actions': arguments['actions'],
    }
    result = await ctx.api.create_event(arguments['sceneId'], data)
    return f'Event "{name}" created successfully with ID: {result_field(result, "id")}'


def event_parameters(arguments: dict[str, Any]) -> dict[str, Any]:
    """Select the parameters relevant to ``eventType``; other types use customParameters."""
    fields = EVENT_PARAMETER_FIELDS.get(arguments['eventType'])
    if fields is None:
        return dict(arguments.get('customParameters') or {})
    return {field: arguments.get(field) for field in fields}


@tool(
    'configureEventParameters',
    "Configure the type-specific parameters of an event (key code, distance, target, "
    "variable, collision group, trigger area, AI prompt).",
    {
        'sceneId': SCENE_ID,
        'eventId': ident('Event ID'),
        'eventType': ident('Event type'),
        'keyCode': string('Key code for keyboard events'),
        'distance': number('Distance for spatial events'),
        'targetObjectId': string('Target object for lookAt/follow/distance events'),
        'variableName': string('Variable name for variableChange events'),
        'collisionGroup': string('Collision group for collision events'),
        'triggerArea': obj(
            {'position': vector('Area center'), 'size': vector('Area size')},
            ['position', 'size'],
            'Trigger area dimensions',
        ),
        'aiPrompt': string('Prompt for AI assistant events'),
        'customParameters': record('Parameters for any other event type'),
    },
    ['sceneId', 'eventId', 'eventType'],
    'configuring event parameters',
)
async def configure_event_parameters(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    event_id = arguments['eventId']
    await ctx.api.request(
        'PUT',
        endpoint("/scenes/{}/events/{}/parameters", arguments['sceneId'], event_id),
        event_parameters(arguments),
    )
    return f"Parameters for event {event_id} configured successfully"


TOOLS = [
    get_states,
    get_state_details,
    create_state,
    trigger_state,
    get_events,
    get_event_details,
    create_event,
    trigger_event,
    generate_event_listener_code,
    create_comprehensive_event,
    configure_event_parameters,
]
