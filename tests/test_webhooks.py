"""Tests for the standalone webhook server."""

import json

import httpx
from starlette.testclient import TestClient


def _client(forward_handler=None):
    from spline_webhooks import create_app

    factory = None
    if forward_handler is not None:
        def factory():
            return httpx.AsyncClient(transport=httpx.MockTransport(forward_handler))
    return TestClient(create_app(client_factory=factory))


class TestCreateWebhook:

    def test_create_returns_record(self):
        client = _client()
        response = client.post('/create-webhook', json={
            'name': 'Scores', 'variables': [{'name': 'score', 'type': 'number'}],
        })

        assert response.status_code == 201
        data = response.json()
        assert data['success'] is True
        webhook = data['webhook']
        assert webhook['id'] == '1'
        assert webhook['name'] == 'Scores'
        assert webhook['variables'] == [{'name': 'score', 'type': 'number'}]
        assert webhook['url'] == '/webhook/1'
        assert webhook['splineWebhookUrl'] is None
        assert webhook['createdAt'].endswith('Z')
        assert data['webhookUrl'] == 'http://testserver/webhook/1'

    def test_default_name_and_incrementing_ids(self):
        client = _client()
        client.post('/create-webhook', json={})
        second = client.post('/create-webhook', json={}).json()['webhook']

        assert second['id'] == '2'
        assert second['name'] == 'Webhook 2'

    def test_malformed_json(self):
        client = _client()
        response = client.post(
            '/create-webhook', content=b'{bad', headers={'Content-Type': 'application/json'}
        )

        assert response.status_code == 400
        assert response.json()['success'] is False


class TestListWebhooks:

    def test_full_urls(self):
        client = _client()
        client.post('/create-webhook', json={'name': 'A'})

        data = client.get('/webhooks').json()

        assert data['success'] is True
        assert [w['fullUrl'] for w in data['webhooks']] == ['http://testserver/webhook/1']

    def test_empty(self):
        assert _client().get('/webhooks').json() == {'success': True, 'webhooks': []}

    def test_lists_created_webhook(self):
        client = _client()
        variables = [{'name': 'v', 'type': 'number'}]
        client.post('/create-webhook', json={'name': 'X', 'variables': variables})

        [webhook] = client.get('/webhooks').json()['webhooks']

        assert webhook['name'] == 'X'
        assert webhook['variables'] == variables

    def test_repeated_listing_is_stable(self):
        client = _client()
        client.post('/create-webhook', json={'name': 'A'})
        client.post('/create-webhook', json={'name': 'B', 'variables': [{'name': 't', 'type': 'string'}]})

        first = client.get('/webhooks').json()
        second = client.get('/webhooks').json()

        assert first == second
        assert [w['name'] for w in first['webhooks']] == ['A', 'B']


class TestReceive:

    def test_unknown_webhook(self):
        response = _client().post('/webhook/99', json={'a': 1})

        assert response.status_code == 404
        assert response.json() == {'success': False, 'error': 'Webhook not found'}

    def test_receive_without_forwarding(self):
        client = _client()
        client.post('/create-webhook', json={'name': 'Scores'})

        response = client.post('/webhook/1', json={'score': 7})

        assert response.status_code == 200
        assert response.json() == {
            'success': True,
            'message': 'Data received successfully',
            'webhook': 'Scores',
            'receivedData': {'score': 7},
            'splineResponse': None,
        }

    def test_forwarding_returns_spline_response(self):
        forwarded = []

        def spline(request):
            forwarded.append(request)
            return httpx.Response(200, json={'ok': True})

        client = _client(spline)
        client.post('/create-webhook', json={'name': 'F', 'splineWebhookUrl': 'https://hooks.spline.test/abc'})

        data = client.post('/webhook/1', json={'score': 7}).json()

        assert data['splineResponse'] == {'ok': True}
        assert str(forwarded[0].url) == 'https://hooks.spline.test/abc'
        assert json.loads(forwarded[0].content) == {"score": 7}

    def test_forwarding_failure_is_reported(self):
        def unreachable(request):
            raise httpx.ConnectError('no route to host', request=request)

        client = _client(unreachable)
        client.post('/create-webhook', json={'name': 'F', 'splineWebhookUrl': 'https://hooks.spline.test/abc'})

        response = client.post('/webhook/1', json={'score': 7})

        assert response.status_code == 200
        assert response.json()['success'] is True
        assert response.json()['splineResponse'] == {'error': 'no route to host'}

    def test_malformed_json(self):
        client = _client()
        client.post('/create-webhook', json={'name': 'A'})

        response = client.post('/webhook/1', content=b'not json', headers={'Content-Type': 'application/json'})

        assert response.status_code == 400
        assert response.json()['error'].startswith('Invalid JSON')


class TestInterface:

    def test_index_page(self):
        response = _client().get('/')

        assert response.status_code == 200
        assert response.headers['content-type'].startswith('text/html')
        assert 'Spline Webhook Manager' in response.text

    def test_cors_headers(self):
        response = _client().get('/webhooks', headers={'Origin': 'https://example.com'})

        assert response.headers['access-control-allow-origin'] == '*'

    def test_cors_preflight(self):
        response = _client().options('/create-webhook', headers={
            'Origin': 'https://example.com',
            'Access-Control-Request-Method': 'POST',
            'Access-Control-Request-Headers': 'Content-Type',
        })

        assert response.status_code == 200
        assert 'POST' in response.headers['access-control-allow-methods']
