"""
JavaScript code generation for the @splinetool runtime.

Pure string templating: every function takes structured parameters and
returns source text that a user pastes into their own application. Nothing
here performs I/O or validates the generated code.
"""

from __future__ import annotations

import json
import re
from string import Template
from typing import Any

SCENE_URL = 'https://prod.spline.design/{scene_id}/scene.splinecode'
EMBED_URL = 'https://my.spline.design/{scene_id}/'

RUNTIME_FORMATS = ('vanilla', 'react', 'next')
OBJECT_ACTIONS = ('move', 'rotate', 'scale', 'color', 'visibility', 'emitEvent', 'material', 'animation')
INTERACTION_TYPES = ('explore', 'eventListeners', 'variables', 'camera', 'physics', 'custom')
EASINGS = ('linear', 'easeIn', 'easeOut', 'easeInOut')

_SCENE_URL_RE = re.compile(r'https://prod\.spline\.design/([^/]+)/scene\.splinecode')


def scene_url(scene_id: str) -> str:
    return SCENE_URL.format(scene_id=scene_id)


def parse_scene_url(url: str) -> str:
    """Extract the scene ID from a prod.spline.design scene URL."""
    match = _SCENE_URL_RE.search(url)
    if not match:
        raise ValueError('Invalid Spline scene URL format')
    return match.group(1)


def js_value(value: Any) -> str:
    """Render a Python value as a JavaScript literal."""
    return json.dumps(value)


def _js_bool(value: Any) -> str:
    return 'true' if value else 'false'


def _num(value: Any) -> str:
    if isinstance(value, bool):
        return _js_bool(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# =============================================================================
# Shared snippets
# =============================================================================

_CONNECT = Template("""
import { Application } from '@splinetool/runtime';

// Create a new Application instance
const canvas = document.getElementById('canvas3d');
const spline = new Application(canvas);

// Load the scene
spline.load('$url').then(() => {
  console.log('Scene loaded successfully');
$body
});
""")


def _wrap(scene_id: str, body: str) -> str:
    return _CONNECT.substitute(url=scene_url(scene_id), body=body)


def _indent(code: str, prefix: str = '  ') -> str:
    return '\n'.join(prefix + line if line.strip() else line for line in code.split('\n'))


_EASING_EXPR = {
    'linear': 'progress',
    'easeIn': 'progress * progress',
    'easeOut': '1 - Math.pow(1 - progress, 2)',
    'easeInOut': 'progress < 0.5 ? 2 * progress * progress : 1 - Math.pow(-2 * progress + 2, 2) / 2',
}


# =============================================================================
# Runtime setup / export
# =============================================================================

RUNTIME_SETUP = """
# Installing @splinetool/runtime
npm install @splinetool/runtime

# For React projects, also install
npm install @splinetool/react-spline

# Basic HTML setup:
<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>Spline Scene</title>
  <style>
    html, body { margin: 0; height: 100%; overflow: hidden; }
    #canvas3d { width: 100%; height: 100%; display: block; }
  </style>
</head>
<body>
  <canvas id="canvas3d"></canvas>
  <script type="module">
    import { Application } from '@splinetool/runtime';

    const canvas = document.getElementById('canvas3d');
    const spline = new Application(canvas);

    spline.load('https://prod.spline.design/YOUR_SCENE_ID/scene.splinecode')
      .then(() => {
        console.log('Scene loaded');
        // Interact with scene here
      });
  </script>
</body>
</html>
"""


def runtime_setup() -> str:
    return RUNTIME_SETUP


_VANILLA_BODY = """
// Get an object by name (or by ID with spline.findObjectById('...'))
const myObject = spline.findObjectByName('Cube');

if (myObject) {
  // Modify properties
  myObject.position.y += 1;
  myObject.rotation.y = Math.PI / 4;

  // Listen for events
  spline.addEventListener('mouseDown', (e) => {
    if (e.target === myObject) {
      console.log('Object clicked!');
    }
  });

  // Emit events
  myObject.emitEvent('mouseDown');
}"""

_REACT_COMPONENT = Template("""
import React, { useRef } from 'react';
$import_line

export default function Scene() {
  const objectRef = useRef();

  function onLoad(splineApp) {
    console.log('Scene loaded successfully');

    // Save references to objects
    objectRef.current = splineApp.findObjectByName('Cube');
  }

  function handleClick() {
    if (objectRef.current) {
      objectRef.current.position.y += 1;
    }
  }

  return (
    <div style={{ width: '100%', height: '100%' }}>
      <button onClick={handleClick}>Move Object Up</button>
      <Spline
        scene="$url"
        onLoad={onLoad}
        onMouseDown={(e) => {
          console.log('Mouse down on:', e.target.name);
        }}
      />
    </div>
  );
}
""")

_NEXT_IMPORT = """import dynamic from 'next/dynamic';

// Import Spline component with no SSR
const Spline = dynamic(() => import('@splinetool/react-spline/next'), {
  ssr: false,
  loading: () => <div>Loading 3D scene...</div>
});"""


def runtime_code(scene_id: str, fmt: str = 'vanilla') -> str:
    """Generate the code that loads a scene in a vanilla, React or Next.js app."""
    if fmt == 'vanilla':
        return _wrap(scene_id, _indent(_VANILLA_BODY))
    if fmt == 'react':
        return _REACT_COMPONENT.substitute(
            import_line="import Spline from '@splinetool/react-spline';",
            url=scene_url(scene_id),
        )
    if fmt == 'next':
        return _REACT_COMPONENT.substitute(import_line=_NEXT_IMPORT, url=scene_url(scene_id))
    raise ValueError(f"Unsupported format: {fmt}")


def embed_code(scene_id: str, width: str = '100%', height: str = '100%', frame_border: str = '0') -> str:
    url = EMBED_URL.format(scene_id=scene_id)
    return f"<iframe src='{url}' frameborder='{frame_border}' width='{width}' height='{height}'></iframe>"


# =============================================================================
# Object interaction
# =============================================================================

_TWEEN = Template("""
let startTime = null;
const duration = $duration; // milliseconds
let animationFrame;

function animate(timestamp) {
  if (!startTime) startTime = timestamp;
  const elapsed = timestamp - startTime;
  let progress = Math.min(elapsed / duration, 1);
  progress = $ease;
$step
  if (progress < 1) {
    animationFrame = requestAnimationFrame(animate);
  } else if ($loop) {
    startTime = null;
    animationFrame = requestAnimationFrame(animate);
  }
}

animationFrame = requestAnimationFrame(animate);
// cancelAnimationFrame(animationFrame) stops it early""")

_ANIMATION_STEPS = {
    'rotate': """
  // Full 360 degree turn around Y
  obj.rotation.y = start.rotation.y + Math.PI * 2 * progress;""",
    'move': """
  // Move up by 1 unit
  obj.position.y = start.position.y + progress;""",
    'scale': """
  // Grow by 50%
  const s = 1 + 0.5 * progress;
  obj.scale.x = start.scale.x * s;
  obj.scale.y = start.scale.y * s;
  obj.scale.z = start.scale.z * s;""",
}


def _animation_snippet(object_id: str, params: dict) -> str:
    animation_type = params.get('animationType', 'rotate')
    easing = params.get('easing', 'easeInOut')
    duration = params.get('duration', 1000)
    loop = params.get('loop', False)

    if animation_type == 'color':
        target = params.get('color', '#ff0000')
        step = f"""
  // Blend towards {target}
  if (obj.material) {{
    obj.material.color.copy(start.color).lerp(target, progress);
  }}"""
        prelude = f"const target = new THREE.Color('{target}');\n"
    else:
        step = _ANIMATION_STEPS.get(animation_type)
        if step is None:
            raise ValueError(f"Unsupported animation type: {animation_type}")
        prelude = ''

    return (
        f"// Animate object ({animation_type})\n"
        f"const obj = spline.findObjectById('{object_id}');\n"
        "const start = {\n"
        "  position: { ...obj.position },\n"
        "  rotation: { ...obj.rotation },\n"
        "  scale: { ...obj.scale },\n"
        "  color: obj.material ? obj.material.color.clone() : null,\n"
        "};\n"
        + prelude
        + _TWEEN.substitute(
            duration=_num(duration),
            ease=_EASING_EXPR.get(easing, _EASING_EXPR['easeInOut']),
            step=step,
            loop=_js_bool(loop),
        )
    )


def _move_snippet(object_id: str, params: dict) -> str:
    x, y, z = (_num(params.get(k, 0)) for k in ('x', 'y', 'z'))
    return f"""// Move object
const obj = spline.findObjectById('{object_id}');
obj.position.x = {x};
obj.position.y = {y};
obj.position.z = {z};"""


def _rotate_snippet(object_id: str, params: dict) -> str:
    x, y, z = (_num(params.get(k, 0)) for k in ('rotX', 'rotY', 'rotZ'))
    return f"""// Rotate object (degrees to radians)
const obj = spline.findObjectById('{object_id}');
obj.rotation.x = {x} * Math.PI / 180;
obj.rotation.y = {y} * Math.PI / 180;
obj.rotation.z = {z} * Math.PI / 180;"""


def _scale_snippet(object_id: str, params: dict) -> str:
    x, y, z = (_num(params.get(k, 1)) for k in ('scaleX', 'scaleY', 'scaleZ'))
    return f"""// Scale object
const obj = spline.findObjectById('{object_id}');
obj.scale.x = {x};
obj.scale.y = {y};
obj.scale.z = {z};"""


def _color_snippet(object_id: str, params: dict) -> str:
    color = params.get('color', '#ffffff')
    return f"""// Change object color
const obj = spline.findObjectById('{object_id}');
if (obj.material) {{
  obj.material.color.set('{color}');
}}"""


def _visibility_snippet(object_id: str, params: dict) -> str:
    visible = params.get('visible', True)
    return f"""// Change object visibility
const obj = spline.findObjectById('{object_id}');
obj.visible = {_js_bool(visible)};"""


def _emit_event_snippet(object_id: str, params: dict) -> str:
    event_name = params.get('eventName', 'mouseDown')
    return f"""// Emit event on object
const obj = spline.findObjectById('{object_id}');
obj.emitEvent('{event_name}');

// Listen for the same event on this object
spline.addEventListener('{event_name}', (e) => {{
  if (e.target.id === '{object_id}') {{
    console.log('Event {event_name} triggered on object');
  }}
}});"""


def _material_snippet(object_id: str, params: dict) -> str:
    material_id = params.get('materialId', '')
    material_params = params.get('materialParams') or {}
    return f"""// Change object material
const obj = spline.findObjectById('{object_id}');

// Apply an existing material
const material = spline.findMaterialById('{material_id}');
if (material) {{
  obj.material = material;
}}

// Or build a new one and assign it with obj.material = newMaterial
const newMaterial = new THREE.MeshStandardMaterial({{
  color: '{material_params.get('color', '#ffffff')}',
  roughness: {_num(material_params.get('roughness', 0.5))},
  metalness: {_num(material_params.get('metalness', 0))},
  transparent: {_js_bool(material_params.get('transparent', False))},
  opacity: {_num(material_params.get('opacity', 1))}
}});"""


_OBJECT_SNIPPETS = {
    'move': _move_snippet,
    'rotate': _rotate_snippet,
    'scale': _scale_snippet,
    'color': _color_snippet,
    'visibility': _visibility_snippet,
    'emitEvent': _emit_event_snippet,
    'material': _material_snippet,
    'animation': _animation_snippet,
}


def object_interaction_code(
    scene_id: str,
    object_id: str,
    action: str,
    params: dict | None = None,
) -> str:
    """
    Generate runtime code that performs ``action`` on one object.

    Raises:
        ValueError: If the action is not one of OBJECT_ACTIONS
    """
    snippet = _OBJECT_SNIPPETS.get(action)
    if snippet is None:
        raise ValueError(f"Unsupported action: {action}")
    return _wrap(scene_id, _indent(snippet(object_id, params or {})))


# =============================================================================
# Events / variables
# =============================================================================

def event_listener_code(scene_id: str, event_name: str) -> str:
    body = f"""
// Add event listener
spline.addEventListener('{event_name}', (e) => {{
  console.log('Event triggered:', e);

  const targetObject = e.target;
  console.log('Target object:', targetObject.name, targetObject.id);

  if (targetObject.name === 'Cube') {{
    targetObject.scale.multiplyScalar(1.1); // Grow by 10%
  }} else if (targetObject.name === 'Sphere') {{
    targetObject.material.color.set('#ff0000');
  }}

  // Events can also be emitted on other objects
  const otherObject = spline.findObjectByName('OtherObject');
  if (otherObject) {{
    otherObject.emitEvent('mouseDown');
  }}
}});"""
    return _wrap(scene_id, _indent(body))


def variable_code(scene_id: str, variable_name: str, value: Any) -> str:
    body = f"""
// Set variable value
spline.setVariable('{variable_name}', {js_value(value)});

// Get variable value
const currentValue = spline.getVariable('{variable_name}');
console.log('Current value:', currentValue);

// Listen for variable changes
spline.addEventListener('variableChanged', (e) => {{
  if (e.variableName === '{variable_name}') {{
    console.log('Variable changed:', e.variableName, e.value);
  }}
}});"""
    return _wrap(scene_id, _indent(body))


# =============================================================================
# Scene-level interaction
# =============================================================================

_INTERACTIONS = {
    'explore': """
// Scene exploration
const allObjects = spline.getObjects();
console.log('Total objects:', allObjects.length);

function logObjectHierarchy(objects, indent = '') {
  objects.forEach(obj => {
    console.log(indent + obj.name + ' (' + obj.type + ')');
    if (obj.children && obj.children.length > 0) {
      logObjectHierarchy(obj.children, indent + '  ');
    }
  });
}

logObjectHierarchy(allObjects);

const lights = allObjects.filter(obj => obj.type === 'light');
const cameras = allObjects.filter(obj => obj.type === 'camera');
console.log('Lights:', lights.length);
console.log('Cameras:', cameras.length);""",

    'eventListeners': """
spline.addEventListener('mouseDown', (e) => {
  console.log('Mouse down on:', e.target.name);
  if (e.target.material) {
    e.target.userData.originalColor = e.target.material.color.clone();
    e.target.material.color.set('#ff0000');
  }
});

spline.addEventListener('mouseUp', (e) => {
  if (e.target.material && e.target.userData.originalColor) {
    e.target.material.color.copy(e.target.userData.originalColor);
  }
});

spline.addEventListener('mouseHover', () => {
  document.body.style.cursor = 'pointer';
});

spline.addEventListener('mouseOut', () => {
  document.body.style.cursor = 'default';
});

// Move an object with the arrow keys
document.addEventListener('keydown', (e) => {
  const selectedObject = spline.findObjectByName('$object_name');
  if (!selectedObject) return;
  const step = 0.1;
  switch (e.key) {
    case 'ArrowUp': selectedObject.position.z -= step; break;
    case 'ArrowDown': selectedObject.position.z += step; break;
    case 'ArrowLeft': selectedObject.position.x -= step; break;
    case 'ArrowRight': selectedObject.position.x += step; break;
  }
});""",

    'variables': """
const variables = spline.getVariables();
console.log('Variables:', variables);

spline.setVariable('counter', 0);
spline.setVariable('isActive', true);

spline.addEventListener('variableChanged', (e) => {
  if (e.variableName === 'counter') {
    const cube = spline.findObjectByName('$object_name');
    if (cube) {
      cube.rotation.y = e.value * 0.1;
    }
  }
});

setInterval(() => {
  const currentCount = spline.getVariable('counter') || 0;
  spline.setVariable('counter', currentCount + 1);
}, 1000);""",

    'camera': """
const cameras = spline.getObjects().filter(obj => obj.type === 'camera');
console.log('Available cameras:', cameras.map(c => c.name));

const cameraControls = document.createElement('div');
cameraControls.style.position = 'absolute';
cameraControls.style.top = '20px';
cameraControls.style.right = '20px';
document.body.appendChild(cameraControls);

cameras.forEach(camera => {
  const button = document.createElement('button');
  button.textContent = camera.name;
  button.addEventListener('click', () => spline.setActiveCamera(camera));
  cameraControls.appendChild(button);
});

function animateCameraTo(target, duration = 1000) {
  const camera = spline.getActiveCamera();
  const start = { ...camera.position };
  let startTime = null;

  function animate(timestamp) {
    if (!startTime) startTime = timestamp;
    const progress = Math.min((timestamp - startTime) / duration, 1);
    const ease = progress < 0.5 ? 2 * progress * progress : 1 - Math.pow(-2 * progress + 2, 2) / 2;
    camera.position.x = start.x + (target.x - start.x) * ease;
    camera.position.y = start.y + (target.y - start.y) * ease;
    camera.position.z = start.z + (target.z - start.z) * ease;
    if (progress < 1) requestAnimationFrame(animate);
  }

  requestAnimationFrame(animate);
}""",

    'physics': """
// Requires physics to be enabled in the Spline scene
const physicsObjects = spline.getObjects().filter(obj => obj.physics);
console.log('Physics objects:', physicsObjects.map(obj => obj.name));

spline.addEventListener('mouseDown', (e) => {
  if (e.target.physics) {
    e.target.physics.applyForce({ x: 0, y: 10, z: 0 });
  }
});

const resetButton = document.createElement('button');
resetButton.textContent = 'Reset Physics';
resetButton.style.position = 'absolute';
resetButton.style.bottom = '20px';
resetButton.style.left = '20px';
resetButton.addEventListener('click', () => {
  physicsObjects.forEach(obj => obj.physics.reset());
});
document.body.appendChild(resetButton);""",

    'custom': """
// Custom animation loop
let time = 0;

function animate() {
  time += 0.01;
  spline.getObjects().forEach(obj => {
    if (obj.type === 'mesh') {
      obj.position.y = Math.sin(time + obj.position.x) * 0.2;
    }
  });
  requestAnimationFrame(animate);
}

animate();""",
}


def scene_interaction_code(scene_id: str, interaction_type: str, options: dict | None = None) -> str:
    """Generate scene-wide interaction code; ``options.code`` replaces the custom body."""
    options = options or {}
    if interaction_type == 'custom' and options.get('code'):
        body = options['code']
    else:
        template = _INTERACTIONS.get(interaction_type)
        if template is None:
            raise ValueError(f"Unsupported interaction type: {interaction_type}")
        body = Template(template).safe_substitute(object_name=options.get('objectName', 'Cube'))
    return _wrap(scene_id, _indent(body))


# =============================================================================
# React component
# =============================================================================

_BASIC_HANDLERS = """
  const handleOnLoad = (splineApp$any) => {
    console.log('Spline scene loaded');
    const cube = splineApp.findObjectByName('Cube');
    if (cube) {
      console.log('Found cube:', cube);
    }
  };
"""

_ADVANCED_HANDLERS = """
  const [activeObject, setActiveObject] = useState$state_type(null);
  const splineRef = useRef$state_type(null);

  const handleMouseDown = (e$any) => {
    setActiveObject(e.target);
    e.target.scale.multiplyScalar(1.1);
  };

  const handleMouseUp = (e$any) => {
    if (e.target === activeObject) {
      e.target.scale.divideScalar(1.1);
    }
  };

  const handleOnLoad = (splineApp$any) => {
    console.log('Spline scene loaded');
    splineRef.current = splineApp;
    splineApp.addEventListener('mouseDown', handleMouseDown);
    splineApp.addEventListener('mouseUp', handleMouseUp);
  };

  useEffect(() => {
    const handleKeyDown = (e$key_type) => {
      if (e.key === 'r' && activeObject) {
        activeObject.rotation.y += Math.PI / 2;
      }
    };
    window.addEventListener('keydown', handleKeyDown);
    return () => window.removeEventListener('keydown', handleKeyDown);
  }, [activeObject]);
"""


def react_component(
    scene_id: str,
    component_name: str = 'SplineScene',
    interactivity: str = 'basic',
    responsive: bool = True,
    typescript: bool = False,
) -> str:
    """Generate a React component embedding the scene."""
    any_type = ': any' if typescript else ''
    if interactivity == 'advanced':
        hooks = '{ useState, useEffect, useRef }'
        handlers = Template(_ADVANCED_HANDLERS).substitute(
            any=any_type,
            state_type='<any | null>' if typescript else '',
            key_type=': KeyboardEvent' if typescript else '',
        )
    elif interactivity == 'basic':
        hooks = ''
        handlers = Template(_BASIC_HANDLERS).substitute(any=any_type)
    elif interactivity == 'none':
        hooks = ''
        handlers = ''
    else:
        raise ValueError(f"Unsupported interactivity level: {interactivity}")

    imports = ['React']
    if hooks:
        imports.append(hooks)
    lines = [f"import {', '.join(imports)} from 'react';", "import Spline from '@splinetool/react-spline';", '']

    props = "{ width = '100%', height = '100%', className = '' }"
    if typescript:
        lines += [
            f"interface {component_name}Props {{",
            '  width?: string | number;',
            '  height?: string | number;',
            '  className?: string;',
            '}',
            '',
            f"const {component_name} = ({props}: {component_name}Props) => {{",
        ]
    else:
        lines.append(f"const {component_name} = ({props}) => {{")

    width = 'width' if responsive else "'100%'"
    height = 'height' if responsive else "'100%'"
    on_load = '' if interactivity == 'none' else '\n        onLoad={handleOnLoad}'

    body = f"""{handlers}
  return (
    <div
      style={{{{ width: {width}, height: {height}, position: 'relative' }}}}
      className={{className}}
    >
      <Spline
        scene="{scene_url(scene_id)}"{on_load}
      />
    </div>
  );
}};

export default {component_name};
"""
    return '\n'.join(lines) + body


# =============================================================================
# Comprehensive example
# =============================================================================

_COMPREHENSIVE = Template("""
import { Application } from '@splinetool/runtime';

const canvas = document.getElementById('canvas3d');
const spline = new Application(canvas);

// Track interactive objects
const interactiveObjects = {};

spline.load('$url').then(() => {
  console.log('Scene loaded successfully');

  // 1. Scene exploration
  const allObjects = spline.getObjects();
  console.log('All objects:', allObjects.length);

  // 2. Find specific objects
  const cube = spline.findObjectByName('Cube');
  if (cube) {
    interactiveObjects.cube = cube;
  }

  // 3. Event listeners
  spline.addEventListener('mouseDown', handleMouseDown);
  spline.addEventListener('mouseHover', handleMouseHover);
  spline.addEventListener('mouseOut', handleMouseOut);

  // 4. Variables
  setUpVariables();

  // 5. UI controls
  setUpControls();
});

function handleMouseDown(e) {
  e.target.scale.multiplyScalar(1.1);
}

function handleMouseHover(e) {
  if (e.target.material) {
    e.target.userData.originalColor = e.target.material.color.clone();
    e.target.material.color.set('#ffcc00');
  }
}

function handleMouseOut(e) {
  if (e.target.material && e.target.userData.originalColor) {
    e.target.material.color.copy(e.target.userData.originalColor);
  }
}

function setUpVariables() {
  spline.setVariable('counter', 0);
  setInterval(() => {
    const currentCount = spline.getVariable('counter') || 0;
    spline.setVariable('counter', currentCount + 1);
  }, 1000);

  spline.addEventListener('variableChanged', (e) => {
    if (e.variableName === 'counter' && interactiveObjects.cube) {
      interactiveObjects.cube.rotation.y = e.value * 0.1;
    }
  });
}

function setUpControls() {
  const resetBtn = document.createElement('button');
  resetBtn.textContent = 'Reset Scene';
  resetBtn.style.position = 'absolute';
  resetBtn.style.bottom = '20px';
  resetBtn.style.left = '20px';
  resetBtn.addEventListener('click', () => spline.load('$url'));
  document.body.appendChild(resetBtn);
}
""")


def comprehensive_example(scene_id: str) -> str:
    return _COMPREHENSIVE.substitute(url=scene_url(scene_id))
