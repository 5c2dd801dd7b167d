"""Tests for the Markdown resources."""

import httpx
import pytest


def _api(routes):
    """SplineApiClient answering GETs from a path -> (status, body) table."""
    from spline_mcp.api_client import SplineApiClient
    from spline_mcp.config import ApiConfig

    def handler(request):
        status, body = routes.get(request.url.path, (404, {'message': 'Not found'}))
        return httpx.Response(status, json=body)

    return SplineApiClient(ApiConfig(base_url='https://spline.test'), transport=httpx.MockTransport(handler))


class TestRouting:

    def test_static_resource_listed(self):
        from spline_mcp.resources import list_resources

        [resource] = list_resources()
        assert str(resource.uri).rstrip('/') == 'spline://scenes'
        assert resource.mimeType == 'text/markdown'

    def test_templates_cover_every_entity(self):
        from spline_mcp.resources import list_resource_templates

        templates = {t.uriTemplate for t in list_resource_templates()}
        assert 'spline://scene/{sceneId}' in templates
        assert 'spline://scene/{sceneId}/object/{objectId}' in templates
        assert 'spline://scene/{sceneId}/event/{eventId}' in templates
        assert len(templates) == 9

    def test_match_extracts_parameters(self):
        from spline_mcp.resources import match

        route, params = match('spline://scene/s1/material/m2')
        assert route.name == 'scene-material'
        assert params == {'scene_id': 's1', 'material_id': 'm2'}

    def test_match_rejects_unknown(self):
        from spline_mcp.resources import match

        assert match('spline://scene/s1/lights') is None
        assert match('spline://scene/s1/object/o1/extra') is None


class TestReadResource:

    @pytest.mark.asyncio
    async def test_scene_list(self):
        from spline_mcp.resources import read_resource

        api = _api({'/scenes': (200, [{'id': 's1', 'name': 'Demo', 'description': ''}])})
        text = await read_resource(api, 'spline://scenes')

        assert text.startswith('# Available Spline Scenes')
        assert '## Demo' in text
        assert '- Description: N/A' in text
        assert '- Resource URI: spline://scene/s1' in text

    @pytest.mark.asyncio
    async def test_scene_details(self):
        from spline_mcp.resources import read_resource

        api = _api({'/scenes/s1': (200, {'id': 's1', 'name': 'Demo', 'objectCount': 3})})
        text = await read_resource(api, 'spline://scene/s1')

        assert text.startswith('# Spline Scene: Demo')
        assert '- Objects: 3' in text
        assert '- Materials: N/A' in text

    @pytest.mark.asyncio
    async def test_objects_wrapped_list(self):
        from spline_mcp.resources import read_resource

        api = _api({'/scenes/s1/objects': (200, {'objects': [{'id': 'o1', 'name': 'Cube', 'type': 'cube'}]})})
        text = await read_resource(api, 'spline://scene/s1/objects')

        assert '# Objects in Scene (ID: s1)' in text
        assert '- Resource URI: spline://scene/s1/object/o1' in text

    @pytest.mark.asyncio
    async def test_empty_list(self):
        from spline_mcp.resources import read_resource

        api = _api({'/scenes/s1/states': (200, [])})
        text = await read_resource(api, 'spline://scene/s1/states')

        assert text.endswith('No states available in this scene.')

    @pytest.mark.asyncio
    async def test_object_transform_defaults(self):
        from spline_mcp.resources import read_resource

        api = _api({'/scenes/s1/objects/o1': (200, {
            'id': 'o1', 'name': 'Cube', 'visible': True, 'position': {'x': 2},
        })})
        text = await read_resource(api, 'spline://scene/s1/object/o1')

        assert '- Visible: Yes' in text
        assert '- X: 2\n' in text
        assert '### Scale\n- X: 1\n' in text
        assert 'No material assigned' in text

    @pytest.mark.asyncio
    async def test_event_actions(self):
        from spline_mcp.resources import read_resource

        api = _api({'/scenes/s1/events/e1': (200, {
            'id': 'e1', 'name': 'Click', 'type': 'mouseDown',
            'actions': [{'type': 'triggerState', 'target': 'st1'}],
        })})
        text = await read_resource(api, 'spline://scene/s1/event/e1')

        assert '### Action 1' in text
        assert '- Target: st1' in text

    @pytest.mark.asyncio
    async def test_upstream_error_is_rendered(self):
        from spline_mcp.resources import read_resource

        text = await read_resource(_api({}), 'spline://scene/missing')
        assert text == 'Error retrieving scene information: Not found (HTTP 404)'

    @pytest.mark.asyncio
    async def test_unknown_uri_is_rendered(self):
        from spline_mcp.resources import read_resource

        text = await read_resource(_api({}), 'spline://nowhere')
        assert text == 'Error retrieving resource: Unknown resource URI: spline://nowhere'
