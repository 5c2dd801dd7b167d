"""Tests for runtime code generation."""

import pytest

from spline_mcp import codegen


class TestSceneUrls:

    def test_scene_url(self):
        assert codegen.scene_url('abc123') == 'https://prod.spline.design/abc123/scene.splinecode'

    def test_parse_scene_url(self):
        url = 'https://prod.spline.design/abc123/scene.splinecode'
        assert codegen.parse_scene_url(url) == 'abc123'

    def test_parse_scene_url_rejects_other_urls(self):
        with pytest.raises(ValueError, match='Invalid Spline scene URL format'):
            codegen.parse_scene_url('https://example.com/scene')

    def test_embed_code(self):
        html = codegen.embed_code('abc', width='640', height='480')
        assert html == (
            "<iframe src='https://my.spline.design/abc/' frameborder='0' width='640' height='480'></iframe>"
        )


class TestRuntimeCode:
    """Loader code for each export format."""

    def test_vanilla_loads_scene(self):
        code = codegen.runtime_code('abc')
        assert "import { Application } from '@splinetool/runtime';" in code
        assert "spline.load('https://prod.spline.design/abc/scene.splinecode')" in code

    def test_react_uses_react_spline(self):
        code = codegen.runtime_code('abc', 'react')
        assert "import Spline from '@splinetool/react-spline';" in code
        assert 'scene="https://prod.spline.design/abc/scene.splinecode"' in code

    def test_next_disables_ssr(self):
        code = codegen.runtime_code('abc', 'next')
        assert "import('@splinetool/react-spline/next')" in code
        assert 'ssr: false' in code

    def test_unknown_format(self):
        with pytest.raises(ValueError, match='Unsupported format: svelte'):
            codegen.runtime_code('abc', 'svelte')


class TestObjectInteractionCode:
    """Per-object action snippets."""

    def test_move_uses_given_coordinates(self):
        code = codegen.object_interaction_code('abc', 'o1', 'move', {'x': 1.0, 'y': 2.5})
        assert "const obj = spline.findObjectById('o1');" in code
        assert 'obj.position.x = 1;' in code
        assert 'obj.position.y = 2.5;' in code
        assert 'obj.position.z = 0;' in code

    def test_scale_defaults_to_one(self):
        code = codegen.object_interaction_code('abc', 'o1', 'scale')
        assert 'obj.scale.x = 1;' in code

    def test_visibility(self):
        code = codegen.object_interaction_code('abc', 'o1', 'visibility', {'visible': False})
        assert 'obj.visible = false;' in code

    def test_color_animation_blends_to_target(self):
        code = codegen.object_interaction_code('abc', 'o1', 'animation', {
            'animationType': 'color', 'color': '#00ff00', 'duration': 500,
        })
        assert "new THREE.Color('#00ff00')" in code
        assert 'const duration = 500;' in code

    def test_unknown_animation_type(self):
        with pytest.raises(ValueError, match='Unsupported animation type: wobble'):
            codegen.object_interaction_code('abc', 'o1', 'animation', {'animationType': 'wobble'})

    def test_unknown_action(self):
        with pytest.raises(ValueError, match='Unsupported action: explode'):
            codegen.object_interaction_code('abc', 'o1', 'explode')


class TestSceneCode:

    def test_variable_code_renders_json_literal(self):
        code = codegen.variable_code('abc', 'label', 'hi')
        assert "spline.setVariable('label', \"hi\");" in code

    def test_event_listener_code(self):
        code = codegen.event_listener_code('abc', 'mouseUp')
        assert "spline.addEventListener('mouseUp'" in code

    def test_interaction_object_name_option(self):
        code = codegen.scene_interaction_code('abc', 'eventListeners', {'objectName': 'Ball'})
        assert "spline.findObjectByName('Ball')" in code

    def test_custom_interaction_body(self):
        code = codegen.scene_interaction_code('abc', 'custom', {'code': 'console.log(42);'})
        assert '  console.log(42);' in code

    def test_unknown_interaction(self):
        with pytest.raises(ValueError):
            codegen.scene_interaction_code('abc', 'teleport')

    def test_comprehensive_example(self):
        code = codegen.comprehensive_example('abc')
        assert code.count('https://prod.spline.design/abc/scene.splinecode') == 2


class TestReactComponent:

    def test_basic_component(self):
        code = codegen.react_component('abc', component_name='Hero')
        assert code.startswith("import React from 'react';")
        assert 'const Hero = (' in code
        assert 'onLoad={handleOnLoad}' in code
        assert code.rstrip().endswith('export default Hero;')

    def test_typescript_advanced_component(self):
        code = codegen.react_component('abc', interactivity='advanced', typescript=True)
        assert "import React, { useState, useEffect, useRef } from 'react';" in code
        assert 'interface SplineSceneProps {' in code
        assert '(e: KeyboardEvent)' in code

    def test_no_interactivity_has_no_handlers(self):
        code = codegen.react_component('abc', interactivity='none', responsive=False)
        assert 'handleOnLoad' not in code
        assert "width: '100%'" in code

    def test_unknown_interactivity(self):
        with pytest.raises(ValueError):
            codegen.react_component('abc', interactivity='extreme')
