"""Tests for the Spline REST client."""

import json

import httpx
import pytest


def _client(handler, api_key='key'):
    from spline_mcp.api_client import SplineApiClient
    from spline_mcp.config import ApiConfig

    return SplineApiClient(
        ApiConfig(base_url='https://spline.test/', api_key=api_key, timeout=5),
        transport=httpx.MockTransport(handler),
    )


class TestApiError:
    """Test error construction from upstream responses."""

    def test_message_from_body(self):
        from spline_mcp.api_client import ApiError

        error = ApiError.from_response(httpx.Response(403, json={'message': 'Forbidden scene'}))
        assert error.status_code == 403
        assert str(error) == 'Forbidden scene (HTTP 403)'

    def test_nested_error_object(self):
        from spline_mcp.api_client import ApiError

        error = ApiError.from_response(httpx.Response(422, json={'error': {'message': 'Bad name'}}))
        assert error.message == 'Bad name'

    def test_falls_back_to_text_then_reason(self):
        from spline_mcp.api_client import ApiError

        assert ApiError.from_response(httpx.Response(502, text='upstream down')).message == 'upstream down'
        assert ApiError.from_response(httpx.Response(503)).message == 'Service Unavailable'

    def test_without_status(self):
        from spline_mcp.api_client import ApiError

        assert str(ApiError(None, 'offline')) == 'offline'


class TestSplineApiClient:
    """Test request construction."""

    def test_base_url_trailing_slash_is_dropped(self):
        assert _client(lambda request: httpx.Response(200)).base_url == 'https://spline.test'

    @pytest.mark.asyncio
    async def test_get_sends_query_without_none(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={'scenes': []})

        result = await _client(handler).get_scenes({'limit': 5, 'projectId': None})

        assert result == {'scenes': []}
        assert seen[0].url.path == '/scenes'
        assert dict(seen[0].url.params) == {'limit': '5'}
        assert seen[0].content == b''

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={'id': 'm1'})

        await _client(handler).apply_material('s1', 'o1', 'm1')

        assert seen[0].method == 'POST'
        assert seen[0].url.path == '/scenes/s1/objects/o1/material'
        assert json.loads(seen[0].content) == {"materialId": "m1"}
        assert seen[0].headers['Content-Type'] == 'application/json'

    @pytest.mark.asyncio
    async def test_no_authorization_without_key(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={})

        await _client(handler, api_key=None).get_scene('s1')

        assert 'Authorization' not in seen[0].headers

    @pytest.mark.asyncio
    async def test_empty_body_is_none(self):
        result = await _client(lambda request: httpx.Response(204)).delete_object('s1', 'o1')
        assert result is None

    @pytest.mark.asyncio
    async def test_non_json_body_is_text(self):
        result = await _client(lambda request: httpx.Response(200, text='ok')).trigger_state('s1', 'st1')
        assert result == 'ok'

    @pytest.mark.asyncio
    async def test_http_error_raises(self):
        from spline_mcp.api_client import ApiError

        client = _client(lambda request: httpx.Response(401, json={'message': 'Invalid API key'}))
        with pytest.raises(ApiError) as excinfo:
            await client.get_scene('s1')

        assert excinfo.value.status_code == 401
        assert excinfo.value.message == 'Invalid API key'

    @pytest.mark.asyncio
    async def test_timeout_raises_without_status(self):
        from spline_mcp.api_client import ApiError

        def handler(request):
            raise httpx.ReadTimeout('slow', request=request)

        with pytest.raises(ApiError) as excinfo:
            await _client(handler).get_scene('s1')

        assert excinfo.value.status_code is None
        assert 'timed out' in excinfo.value.message

    @pytest.mark.asyncio
    async def test_trigger_event_defaults_to_empty_body(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={})

        await _client(handler).trigger_event('s1', 'e1')

        assert seen[0].url.path == '/scenes/s1/events/e1/trigger'
        assert seen[0].content == b'{}'

    @pytest.mark.asyncio
    async def test_ids_are_encoded_as_single_segments(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={})

        await _client(handler).get_object('s/1', 'o?x#y')

        assert seen[0].url.raw_path == b'/scenes/s%2F1/objects/o%3Fx%23y'


class TestEndpoint:

    def test_positional_ids(self):
        from spline_mcp.api_client import endpoint

        assert endpoint('/scenes/{}/objects/{}', 'a b', '../c') == '/scenes/a%20b/objects/..%2Fc'

    def test_named_ids(self):
        from spline_mcp.api_client import endpoint

        path = endpoint('/scenes/{sceneId}/apis/{apiId}', sceneId='s1', apiId='x/y', unused='?')
        assert path == '/scenes/s1/apis/x%2Fy'


# Integration tests (require a Spline API key)
@pytest.mark.integration
class TestIntegration:
    """Integration tests against the live Spline API."""

    @pytest.fixture
    def live_client(self):
        import os

        from spline_mcp.api_client import SplineApiClient
        from spline_mcp.config import DEFAULT_API_URL, ApiConfig

        api_key = os.environ.get('SPLINE_API_KEY')
        if not api_key:
            pytest.skip("SPLINE_API_KEY not set")
        return SplineApiClient(ApiConfig(
            base_url=os.environ.get('SPLINE_API_URL', DEFAULT_API_URL), api_key=api_key, timeout=30.0,
        ))

    @pytest.mark.asyncio
    async def test_list_scenes(self, live_client):
        """Listing scenes returns a JSON document."""
        from spline_mcp.api_client import ApiError

        try:
            result = await live_client.get_scenes({'limit': 1})
        except ApiError as e:
            if e.status_code is None:
                pytest.skip(f"Spline API unreachable: {e.message}")
            raise
        assert isinstance(result, (dict, list))
