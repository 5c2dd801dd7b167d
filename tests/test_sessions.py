"""Tests for streamable HTTP session handling."""

import json

import anyio
import httpx
import pytest
from starlette.applications import Starlette
from starlette.routing import Route
from starlette.testclient import TestClient

INITIALIZE = {
    'jsonrpc': '2.0',
    'id': 1,
    'method': 'initialize',
    'params': {
        'protocolVersion': '2025-03-26',
        'capabilities': {},
        'clientInfo': {'name': 'pytest', 'version': '1.0'},
    },
}

HEADERS = {'Accept': 'application/json, text/event-stream', 'Content-Type': 'application/json'}


def _scope(method, headers):
    return {
        'type': 'http',
        'asgi': {'version': '3.0'},
        'http_version': '1.1',
        'method': method,
        'scheme': 'http',
        'path': '/mcp',
        'raw_path': b'/mcp',
        'root_path': '',
        'query_string': b'',
        'server': ('testserver', 80),
        'client': ('testclient', 50000),
        'headers': [(key.lower().encode(), value.encode()) for key, value in headers.items()],
    }


async def _asgi(router, method, headers, body=b'', stop_at_start=False):
    """Send one request straight to the router and return (status, headers).

    With ``stop_at_start`` the request is cancelled once the response has started,
    which is how a long-lived event stream is checked.
    """
    messages = []
    done = anyio.Event()
    body_sent = False

    async def receive():
        nonlocal body_sent
        if not body_sent:
            body_sent = True
            return {'type': 'http.request', 'body': body, 'more_body': False}
        await done.wait()
        return {'type': 'http.disconnect'}

    async def send(message):
        messages.append(message)
        if message['type'] == 'http.response.start' and stop_at_start:
            done.set()
        if message['type'] == 'http.response.body' and not message.get('more_body'):
            done.set()

    with anyio.fail_after(5):
        async with anyio.create_task_group() as tg:
            tg.start_soon(router, _scope(method, headers), receive, send)
            await done.wait()
            if stop_at_start:
                tg.cancel_scope.cancel()

    start = messages[0]
    return start['status'], {key.decode(): value.decode() for key, value in start['headers']}


def _app(make_context, store=None, json_response=True):
    from spline_mcp.server import build_server
    from spline_mcp.sessions import StreamableHTTPRouter

    ctx, _ = make_context(lambda request: httpx.Response(200, json={}))
    router = StreamableHTTPRouter(build_server(ctx), store=store, json_response=json_response)
    app = Starlette(
        routes=[Route('/mcp', endpoint=router, methods=['GET', 'POST', 'DELETE'])],
        lifespan=lambda app: router.run(),
    )
    return app, router


class TestSessionStore:

    @pytest.mark.asyncio
    async def test_create_and_lookup(self):
        from spline_mcp.sessions import SessionStore

        store = SessionStore()
        transports = []

        def factory(session_id):
            transports.append(session_id)
            return object()

        session_id, transport = await store.create(factory)

        assert transports == [session_id]
        assert len(session_id) == 32
        assert session_id in store
        assert store.lookup(session_id) is transport

    @pytest.mark.asyncio
    async def test_ids_are_unique(self):
        from spline_mcp.sessions import SessionStore

        store = SessionStore()
        ids = {(await store.create(lambda sid: object()))[0] for _ in range(20)}

        assert len(ids) == 20
        assert len(store) == 20

    @pytest.mark.asyncio
    async def test_remove(self):
        from spline_mcp.sessions import SessionStore

        store = SessionStore()
        session_id, _ = await store.create(lambda sid: object())

        assert await store.remove(session_id) is True
        assert await store.remove(session_id) is False
        assert store.lookup(session_id) is None

    @pytest.mark.asyncio
    async def test_removed_sessions_leave_nothing_behind(self):
        from spline_mcp.sessions import SessionStore

        store = SessionStore()
        ids = []
        for _ in range(100):
            session_id, _ = await store.create(lambda sid: object())
            ids.append(session_id)
            await store.remove(session_id)

        assert len(store) == 0
        assert not any(session_id in store for session_id in ids)
        assert vars(store).keys() == {'_sessions', '_lock'}

    def test_lookup_without_id(self):
        from spline_mcp.sessions import SessionStore

        store = SessionStore()
        assert store.lookup(None) is None
        assert store.lookup('') is None


class TestRouter:
    """Requests that cannot be routed to a session get a 400."""

    def test_get_without_session(self, make_context):
        app, _ = _app(make_context)
        with TestClient(app) as client:
            response = client.get('/mcp')

        assert response.status_code == 400
        assert response.text == 'Invalid or missing session ID'

    def test_post_with_unknown_session(self, make_context):
        app, _ = _app(make_context)
        with TestClient(app) as client:
            response = client.post('/mcp', json=INITIALIZE, headers={**HEADERS, 'mcp-session-id': 'stale'})

        assert response.status_code == 400

    def test_delete_without_session(self, make_context):
        app, _ = _app(make_context)
        with TestClient(app) as client:
            response = client.delete('/mcp')

        assert response.status_code == 400

    def test_initialize_creates_session(self, make_context):
        from spline_mcp.sessions import SessionStore

        store = SessionStore()
        app, _ = _app(make_context, store=store)
        with TestClient(app) as client:
            response = client.post('/mcp', json=INITIALIZE, headers=HEADERS)

            assert response.status_code == 200
            session_id = response.headers['mcp-session-id']
            assert session_id in store
            assert response.json()['result']['serverInfo']['name'] == 'Spline.design MCP Server'

    @pytest.mark.asyncio
    async def test_requires_running_router(self, make_context):
        _, router = _app(make_context)
        scope = {'type': 'http', 'method': 'GET', 'path': '/mcp', 'headers': []}

        with pytest.raises(RuntimeError):
            await router(scope, None, None)


class TestSessionLifecycle:
    """Sessions exist only between an accepted initialize and termination."""

    def test_non_initialize_post_creates_no_session(self, make_context):
        from spline_mcp.sessions import SessionStore

        store = SessionStore()
        app, _ = _app(make_context, store=store)
        request = {'jsonrpc': '2.0', 'id': 1, 'method': 'tools/list'}
        with TestClient(app) as client:
            responses = [client.post('/mcp', json=request, headers=HEADERS) for _ in range(50)]

            assert {response.status_code for response in responses} == {400}
            assert responses[0].text == 'Invalid or missing session ID'
            assert len(store) == 0

    def test_malformed_body_creates_no_session(self, make_context):
        from spline_mcp.sessions import SessionStore

        store = SessionStore()
        app, _ = _app(make_context, store=store)
        with TestClient(app) as client:
            response = client.post('/mcp', content=b'{not json', headers=HEADERS)

            assert response.status_code == 400
            assert len(store) == 0

    def test_rejected_initialize_is_dropped(self, make_context):
        from spline_mcp.sessions import SessionStore

        store = SessionStore()
        app, _ = _app(make_context, store=store)
        with TestClient(app) as client:
            response = client.post(
                '/mcp', json=INITIALIZE, headers={'Accept': 'text/html', 'Content-Type': 'application/json'}
            )

            assert response.status_code >= 400
            assert len(store) == 0

    def test_get_with_unknown_session(self, make_context):
        app, _ = _app(make_context)
        with TestClient(app) as client:
            response = client.get('/mcp', headers={'Accept': 'text/event-stream', 'mcp-session-id': 'f' * 32})

        assert response.status_code == 400
        assert response.text == 'Invalid or missing session ID'

    def test_delete_closes_session_immediately(self, make_context):
        from spline_mcp.sessions import SessionStore

        store = SessionStore()
        app, _ = _app(make_context, store=store)
        with TestClient(app) as client:
            session_id = client.post('/mcp', json=INITIALIZE, headers=HEADERS).headers['mcp-session-id']

            deleted = client.delete('/mcp', headers={**HEADERS, 'mcp-session-id': session_id})
            assert deleted.status_code == 200
            assert session_id not in store

            again = client.post('/mcp', json=INITIALIZE, headers={**HEADERS, 'mcp-session-id': session_id})
            assert again.status_code == 400
            assert again.text == 'Invalid or missing session ID'

            stream = client.get('/mcp', headers={**HEADERS, 'mcp-session-id': session_id})
            assert stream.status_code == 400

    @pytest.mark.asyncio
    async def test_get_with_session_opens_stream(self, make_context):
        _, router = _app(make_context)

        async with router.run():
            status, headers = await _asgi(router, 'POST', HEADERS, json.dumps(INITIALIZE).encode())
            assert status == 200
            session_id = headers['mcp-session-id']

            status, headers = await _asgi(
                router,
                'GET',
                {'Accept': 'text/event-stream', 'mcp-session-id': session_id},
                stop_at_start=True,
            )

        assert status == 200
        assert headers['content-type'].startswith('text/event-stream')

    @pytest.mark.asyncio
    async def test_start_session_requires_running_router(self, make_context):
        from spline_mcp.sessions import SessionStore

        store = SessionStore()
        _, router = _app(make_context, store=store)

        with pytest.raises(RuntimeError):
            await router._start_session()
        assert len(store) == 0
