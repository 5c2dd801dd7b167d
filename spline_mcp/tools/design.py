"""Parametric shapes, 3D text, rigid-body physics and particle systems."""

from __future__ import annotations

from typing import Any

from .base import (
    SCENE_ID,
    ToolContext,
    array,
    boolean,
    endpoint,
    enum,
    fill_vector,
    ident,
    integer,
    number,
    obj,
    pick,
    record,
    result_field,
    string,
    tool,
    vector,
)

PARAMETRIC_TYPES = ('cube', 'sphere', 'cylinder', 'cone', 'torus', 'plane', 'circle', 'polygon', 'star', 'ring')
BODY_TYPES = ('dynamic', 'static', 'kinematic')
COLLISION_SHAPES = ('auto', 'box', 'sphere', 'capsule', 'cylinder', 'convex', 'mesh')
JOINT_TYPES = ('fixed', 'hinge', 'ball', 'slider', 'distance', 'spring', 'prismatic', 'universal')
EMITTER_TYPES = ('point', 'box', 'sphere', 'circle', 'mesh')
PARTICLE_ACTIONS = ('play', 'pause', 'stop', 'burst')
FORCE_TYPES = ('wind', 'vortex', 'attractor', 'repeller', 'turbulence')

OBJECT_ID = ident('Object ID')
PARTICLE_SYSTEM_ID = ident('Particle system ID')


# =============================================================================
# Shapes and text
# =============================================================================

@tool(
    'createParametricObject',
    "Create a parametric shape (cube, sphere, torus, star, ring, ...) with shape-specific parameters.",
    {
        'sceneId': SCENE_ID,
        'type': enum(PARAMETRIC_TYPES, 'Object type'),
        'name': ident('Object name'),
        'position': vector('Object position', 0, 0, 0),
        'parameters': record('Shape-specific parameters'),
    },
    ['sceneId', 'type', 'name'],
    'creating parametric object',
)
async def create_parametric_object(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    name = arguments['name']
    object_type = arguments['type']
    data = {
        'type': object_type,
        'name': name,
        'position': fill_vector(arguments.get('position')),
        **pick(arguments, 'parameters'),
    }
    await ctx.api.create_object(arguments['sceneId'], data)
    return f'Parametric object "{name}" of type "{object_type}" created successfully'


@tool(
    'create3DText',
    "Create extruded 3D text.",
    {
        'sceneId': SCENE_ID,
        'text': ident('Text content'),
        'name': string('Object name'),
        'position': vector('Object position', 0, 0, 0),
        'font': string('Font family', default='Inter'),
        'size': number('Font size', minimum=0, default=1),
        'extrusion': number('Extrusion depth', minimum=0, default=0.2),
        'color': string('Text color (hex)', default='#ffffff'),
    },
    ['sceneId', 'text'],
    'creating 3D text',
)
async def create_3d_text(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    text = arguments['text']
    data = {
        'type': 'text',
        'name': arguments.get('name') or text,
        'text': text,
        'position': fill_vector(arguments.get('position')),
        'font': arguments.get('font', 'Inter'),
        'size': arguments.get('size', 1),
        'extrusion': arguments.get('extrusion', 0.2),
        'color': arguments.get('color', '#ffffff'),
    }
    await ctx.api.create_object(arguments['sceneId'], data)
    return f'3D text "{text}" created successfully'


# =============================================================================
# Physics
# =============================================================================

def _physics_parameters() -> dict[str, Any]:
    return obj(
        {
            'friction': number('Friction coefficient', minimum=0, maximum=1, default=0.5),
            'restitution': number('Bounciness/restitution', minimum=0, maximum=1, default=0.2),
            'linearDamping': number('Linear damping', minimum=0, maximum=1, default=0.01),
            'angularDamping': number('Angular damping', minimum=0, maximum=1, default=0.01),
            'linearVelocity': vector('Initial linear velocity', 0, 0, 0),
            'angularVelocity': vector('Initial angular velocity', 0, 0, 0),
            'collisionGroup': integer('Collision group (0-31)', minimum=0, maximum=31, default=0),
            'collidesWith': array(
                {'type': 'integer', 'minimum': 0, 'maximum': 31}, 'Collision groups to collide with (0-31)'
            ),
            'isTrigger': boolean('Is this a trigger volume', default=False),
            'fixedRotation': boolean('Lock rotation', default=False),
            'lockAxisX': boolean('Lock movement along X axis', default=False),
            'lockAxisY': boolean('Lock movement along Y axis', default=False),
            'lockAxisZ': boolean('Lock movement along Z axis', default=False),
            'ccdEnabled': boolean('Enable continuous collision detection', default=False),
            'sleepThreshold': number('Sleep velocity threshold', exclusiveMinimum=0, default=0.005),
            'autoSleep': boolean('Enable automatic sleeping', default=True),
        },
        description='Physics body parameters',
    )


@tool(
    'addPhysicsBody',
    "Make an object a rigid body in the physics simulation.",
    {
        'sceneId': SCENE_ID,
        'objectId': OBJECT_ID,
        'bodyType': enum(BODY_TYPES, 'Physics body type'),
        'shape': enum(COLLISION_SHAPES, 'Collision shape type', default='auto'),
        'mass': number('Mass in kg (0 for static bodies)', minimum=0, default=1),
        'parameters': _physics_parameters(),
    },
    ['sceneId', 'objectId', 'bodyType'],
    'adding physics body',
)
async def add_physics_body(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    object_id = arguments['objectId']
    body_type = arguments['bodyType']
    data = {
        'bodyType': body_type,
        'shape': arguments.get('shape', 'auto'),
        'mass': arguments.get('mass', 1),
        **pick(arguments, 'parameters'),
    }
    await ctx.api.request(
        'POST', endpoint("/scenes/{}/objects/{}/physics", arguments['sceneId'], object_id), data
    )
    return f"Added {body_type} physics body to object {object_id}"


@tool(
    'updatePhysicsBody',
    "Change the body type, mass or parameters of an existing physics body.",
    {
        'sceneId': SCENE_ID,
        'objectId': OBJECT_ID,
        'bodyType': enum(BODY_TYPES, 'Physics body type'),
        'mass': number('Mass in kg', minimum=0),
        'parameters': record('Updated physics parameters'),
    },
    ['sceneId', 'objectId'],
    'updating physics body',
)
async def update_physics_body(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    object_id = arguments['objectId']
    physics = pick(arguments, 'bodyType', 'mass', 'parameters')
    await ctx.api.update_object(arguments['sceneId'], object_id, {'physics': physics})
    return f"Updated physics body for object {object_id}"


@tool(
    'applyForce',
    "Apply a force, or an instantaneous impulse, to a physics body.",
    {
        'sceneId': SCENE_ID,
        'objectId': ident('Physics body object ID'),
        'force': vector('Force vector to apply'),
        'position': vector('Position to apply force (if different from center of mass)'),
        'impulse': boolean('Apply as impulse (instantaneous)', default=False),
    },
    ['sceneId', 'objectId', 'force'],
    'applying force',
)
async def apply_force(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    object_id = arguments['objectId']
    impulse = arguments.get('impulse', False)
    data = {'force': arguments['force'], **pick(arguments, 'position'), 'impulse': impulse}
    await ctx.api.request(
        'POST', endpoint("/scenes/{}/objects/{}/physics/force", arguments['sceneId'], object_id), data
    )
    return f"Applied {'impulse' if impulse else 'force'} to object {object_id}"


@tool(
    'applyTorque',
    "Apply a torque, or an instantaneous angular impulse, to a physics body.",
    {
        'sceneId': SCENE_ID,
        'objectId': ident('Physics body object ID'),
        'torque': vector('Torque vector to apply'),
        'impulse': boolean('Apply as impulse (instantaneous)', default=False),
    },
    ['sceneId', 'objectId', 'torque'],
    'applying torque',
)
async def apply_torque(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    object_id = arguments['objectId']
    impulse = arguments.get('impulse', False)
    data = {'torque': arguments['torque'], 'impulse': impulse}
    await ctx.api.request(
        'POST', endpoint("/scenes/{}/objects/{}/physics/torque", arguments['sceneId'], object_id), data
    )
    return f"Applied {'impulse' if impulse else 'torque'} to object {object_id}"


@tool(
    'createJoint',
    "Connect two physics bodies with a joint (hinge, spring, slider, ...).",
    {
        'sceneId': SCENE_ID,
        'jointType': enum(JOINT_TYPES, 'Joint type'),
        'bodyAId': ident('First body object ID'),
        'bodyBId': ident('Second body object ID'),
        'parameters': obj(
            {
                'anchorA': vector('Connection point on first body (local space)'),
                'anchorB': vector('Connection point on second body (local space)'),
                'axis': vector('Joint axis direction'),
                'lowerLimit': number('Lower movement/rotation limit'),
                'upperLimit': number('Upper movement/rotation limit'),
                'stiffness': number('Spring stiffness', exclusiveMinimum=0),
                'damping': number('Spring damping', minimum=0),
                'equilibriumPoint': number('Spring equilibrium point'),
                'axis1': vector('First axis for universal joint'),
                'axis2': vector('Second axis for universal joint'),
                'enableMotor': boolean('Enable motor', default=False),
                'motorSpeed': number('Motor speed'),
                'maxMotorForce': number('Maximum motor force/torque', exclusiveMinimum=0),
                'collideConnected': boolean('Whether the connected bodies can collide', default=False),
            },
            description='Joint-specific parameters',
        ),
    },
    ['sceneId', 'jointType', 'bodyAId', 'bodyBId'],
    'creating joint',
)
async def create_joint(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    joint_type = arguments['jointType']
    body_a = arguments['bodyAId']
    body_b = arguments['bodyBId']
    data = {
        'jointType': joint_type,
        'bodyAId': body_a,
        'bodyBId': body_b,
        'parameters': arguments.get('parameters') or {},
    }
    result = await ctx.api.request('POST', endpoint("/scenes/{}/physics/joints", arguments['sceneId']), data)
    return (
        f"Created {joint_type} joint between objects {body_a} and {body_b} "
        f"(Joint ID: {result_field(result, 'jointId')})"
    )


@tool(
    'updatePhysicsWorld',
    "Set scene-wide physics parameters: gravity, time scale and stepping.",
    {
        'sceneId': SCENE_ID,
        'gravity': vector('Gravity vector', 0, -9.81, 0),
        'timeScale': number('Physics simulation time scale', exclusiveMinimum=0, default=1),
        'fixedTimeStep': number('Fixed time step for simulation', exclusiveMinimum=0, default=1 / 60),
        'maxSubSteps': integer('Maximum physics sub-steps', minimum=1, default=10),
        'enablePhysics': boolean('Enable/disable physics simulation'),
    },
    ['sceneId'],
    'updating physics world',
)
async def update_physics_world(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    scene_id = arguments['sceneId']
    gravity = arguments.get('gravity') or {}
    data = {
        'gravity': {'x': gravity.get('x', 0), 'y': gravity.get('y', -9.81), 'z': gravity.get('z', 0)},
        'timeScale': arguments.get('timeScale', 1),
        'fixedTimeStep': arguments.get('fixedTimeStep', 1 / 60),
        'maxSubSteps': arguments.get('maxSubSteps', 10),
        **pick(arguments, 'enablePhysics'),
    }
    await ctx.api.request('POST', endpoint("/scenes/{}/physics/world", scene_id), data)
    return f"Updated physics world parameters for scene {scene_id}"


# =============================================================================
# Particles
# =============================================================================

def _particle_parameters() -> dict[str, Any]:
    positive = {'type': 'number', 'exclusiveMinimum': 0}
    return obj(
        {
            'rate': number('Particles per second', exclusiveMinimum=0),
            'burstCount': integer('Number of particles to emit in a burst', minimum=0, default=0),
            'burstInterval': number('Interval between bursts (seconds)', exclusiveMinimum=0),
            'duration': number('Duration of emission (seconds, 0 for continuous)', exclusiveMinimum=0),
            'loop': boolean('Whether the emission loops', default=True),
            'size': obj({'x': positive, 'y': positive, 'z': positive}, ['x', 'y', 'z'],
                        'Emitter size for box/sphere emitters'),
            'radius': number('Radius for circle/sphere emitters', exclusiveMinimum=0),
            'sourceMeshId': string('Source mesh ID for mesh emitters'),
            'emitFromVolume': boolean('Emit from volume or surface', default=True),
            'particleShape': enum(('point', 'sphere', 'cube', 'custom'), 'Particle shape', default='sphere'),
            'customMeshId': string('Custom mesh ID for custom particle shape'),
            'particleSize': number('Particle size', exclusiveMinimum=0, default=0.1),
            'sizeVariation': number('Random variation in particle size', minimum=0, maximum=1, default=0),
            'startSize': number('Initial particle size', exclusiveMinimum=0),
            'endSize': number('Final particle size', exclusiveMinimum=0),
            'material': string('Material ID to apply to particles'),
            'color': string('Particle color (hex/rgb)'),
            'startColor': string('Initial particle color (hex/rgb)'),
            'endColor': string('Final particle color (hex/rgb)'),
            'opacity': number('Particle opacity', minimum=0, maximum=1, default=1),
            'startOpacity': number('Initial particle opacity', minimum=0, maximum=1),
            'endOpacity': number('Final particle opacity', minimum=0, maximum=1),
            'lifetime': number('Particle lifetime in seconds', exclusiveMinimum=0, default=1),
            'lifetimeVariation': number('Random variation in particle lifetime', minimum=0, maximum=1, default=0),
            'speed': number('Particle movement speed', default=1),
            'speedVariation': number('Random variation in particle speed', minimum=0, maximum=1, default=0),
            'direction': vector('Base emission direction', 0, 1, 0),
            'directionVariation': number('Random variation in emission direction', minimum=0, maximum=1, default=0),
            'gravity': vector('Gravity force', 0, 0, 0),
            'drag': number('Air drag coefficient', minimum=0, default=0),
            'turbulence': number('Turbulence strength', minimum=0, default=0),
            'turbulenceScale': number('Turbulence scale', exclusiveMinimum=0, default=1),
            'collisionEnabled': boolean('Enable collision detection', default=False),
            'collideWith': array({'type': 'string'}, 'Object IDs to collide with'),
            'bounciness': number('Collision bounciness', minimum=0, maximum=1, default=0.5),
        },
        ['rate'],
        'Particle system parameters',
    )


@tool(
    'createParticleSystem',
    "Create a particle emitter (point, box, sphere, circle or mesh).",
    {
        'sceneId': SCENE_ID,
        'emitterType': enum(EMITTER_TYPES, 'Type of particle emitter'),
        'position': vector('Position in 3D space', 0, 0, 0),
        'rotation': vector('Rotation in degrees', 0, 0, 0),
        'parameters': _particle_parameters(),
    },
    ['sceneId', 'emitterType', 'parameters'],
    'creating particle system',
)
async def create_particle_system(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    emitter_type = arguments['emitterType']
    data = {
        'emitterType': emitter_type,
        **pick(arguments, 'position', 'rotation'),
        'parameters': arguments['parameters'],
    }
    result = await ctx.api.request(
        'POST', endpoint("/scenes/{}/objects/particles", arguments['sceneId']), data
    )
    return f"Created {emitter_type} particle system (ID: {result_field(result, 'objectId')})"


@tool(
    'updateParticleSystem',
    "Change the parameters of an existing particle system.",
    {
        'sceneId': SCENE_ID,
        'particleSystemId': PARTICLE_SYSTEM_ID,
        'parameters': record('Updated particle system parameters'),
    },
    ['sceneId', 'particleSystemId', 'parameters'],
    'updating particle system',
)
async def update_particle_system(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    system_id = arguments['particleSystemId']
    await ctx.api.update_object(arguments['sceneId'], system_id, {'particleSystem': arguments['parameters']})
    return f"Updated particle system {system_id}"


@tool(
    'controlParticleSystem',
    "Play, pause, stop or burst a particle system.",
    {
        'sceneId': SCENE_ID,
        'particleSystemId': PARTICLE_SYSTEM_ID,
        'action': enum(PARTICLE_ACTIONS, 'Control action'),
        'burstCount': integer('Number of particles to emit in burst mode', minimum=1),
    },
    ['sceneId', 'particleSystemId', 'action'],
    'controlling particle system',
)
async def control_particle_system(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    system_id = arguments['particleSystemId']
    action = arguments['action']
    data = {'action': action, **pick(arguments, 'burstCount')}
    await ctx.api.request(
        'POST', endpoint("/scenes/{}/objects/{}/control", arguments['sceneId'], system_id), data
    )
    return f"Particle system {system_id} {action} command sent"


@tool(
    'createParticleForce',
    "Add a force field (wind, vortex, attractor, repeller, turbulence) to a particle system.",
    {
        'sceneId': SCENE_ID,
        'particleSystemId': PARTICLE_SYSTEM_ID,
        'forceType': enum(FORCE_TYPES, 'Type of force field'),
        'position': vector('Position in 3D space', 0, 0, 0),
        'parameters': obj(
            {
                'strength': number('Force strength', default=1),
                'radius': number('Force field radius (0 for infinite)', exclusiveMinimum=0),
                'falloff': enum(('none', 'linear', 'quadratic', 'cubic'), 'Force falloff with distance',
                                default='quadratic'),
                'direction': vector('Wind direction vector'),
                'axis': vector('Vortex rotation axis'),
                'scale': number('Turbulence scale', exclusiveMinimum=0, default=1),
                'speed': number('Turbulence animation speed', default=1),
                'octaves': integer('Turbulence detail octaves', minimum=1, maximum=8, default=3),
            },
            description='Force field parameters',
        ),
    },
    ['sceneId', 'particleSystemId', 'forceType'],
    'creating particle force',
)
async def create_particle_force(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    system_id = arguments['particleSystemId']
    force_type = arguments['forceType']
    data = {
        'forceType': force_type,
        **pick(arguments, 'position'),
        'parameters': arguments.get('parameters') or {},
    }
    result = await ctx.api.request(
        'POST', endpoint("/scenes/{}/objects/{}/forces", arguments['sceneId'], system_id), data
    )
    return (
        f"Added {force_type} force to particle system {system_id} "
        f"(Force ID: {result_field(result, 'forceId')})"
    )


TOOLS = [
    create_parametric_object,
    create_3d_text,
    add_physics_body,
    update_physics_body,
    apply_force,
    apply_torque,
    create_joint,
    update_physics_world,
    create_particle_system,
    update_particle_system,
    control_particle_system,
    create_particle_force,
]
