"""
Spline Webhook Server

A standalone demo server: create webhooks, receive JSON on them and
optionally forward it to a Spline webhook URL. Webhooks are kept in memory.

Usage:
    python -m spline_webhooks.server --port 3000
"""

from __future__ import annotations

import argparse
import itertools
import json
import logging
import os
import sys
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import httpx
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse
from starlette.routing import Route

from .ui import INDEX_HTML

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stderr,
)
logger = logging.getLogger('spline-webhooks')

DEFAULT_PORT = 3000
FORWARD_TIMEOUT = 10.0

ClientFactory = Callable[[], httpx.AsyncClient]


class WebhookStore:
    """In-memory webhook registry with incrementing ids."""

    def __init__(self) -> None:
        self._webhooks: dict[str, dict[str, Any]] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._webhooks)

    def create(
        self,
        name: str | None = None,
        variables: list | None = None,
        spline_webhook_url: str | None = None,
    ) -> dict[str, Any]:
        webhook_id = str(next(self._ids))
        webhook = {
            'id': webhook_id,
            'name': name or f"Webhook {webhook_id}",
            'variables': variables or [],
            'createdAt': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'url': f"/webhook/{webhook_id}",
            'splineWebhookUrl': spline_webhook_url or None,
        }
        self._webhooks[webhook_id] = webhook
        return webhook

    def get(self, webhook_id: str) -> dict[str, Any] | None:
        return self._webhooks.get(webhook_id)

    def all(self) -> list[dict[str, Any]]:
        return list(self._webhooks.values())


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({'success': False, 'error': message}, status_code=status_code)


async def _json_body(request: Request) -> Any:
    """Decode the request body; raise ValueError with a readable message on bad JSON."""
    raw = await request.body()
    try:
        return json.loads(raw or b'null')
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e.msg}") from e


def _server_url(request: Request) -> str:
    return str(request.base_url).rstrip('/')


async def forward(client_factory: ClientFactory, url: str, data: Any) -> Any:
    """POST ``data`` to a Spline webhook; failures are returned as ``{'error': ...}``."""
    try:
        async with client_factory() as client:
            response = await client.post(url, json=data)
    except httpx.HTTPError as e:
        logger.error(f"Error forwarding to Spline: {e}")
        return {'error': str(e) or e.__class__.__name__}

    if response.is_error:
        logger.error(f"Spline webhook answered HTTP {response.status_code}")
        return {'error': f"HTTP {response.status_code}: {response.text}"}
    try:
        return response.json()
    except ValueError:
        return response.text


def create_app(store: WebhookStore | None = None, client_factory: ClientFactory | None = None) -> Starlette:
    """Build the webhook application."""
    store = store if store is not None else WebhookStore()
    client_factory = client_factory or (lambda: httpx.AsyncClient(timeout=FORWARD_TIMEOUT))

    async def index(request: Request) -> HTMLResponse:
        return HTMLResponse(INDEX_HTML)

    async def create_webhook(request: Request) -> JSONResponse:
        try:
            data = await _json_body(request)
        except ValueError as e:
            logger.error(f"Error creating webhook: {e}")
            return _error(str(e), 400)
        if not isinstance(data, dict):
            return _error("Request body must be a JSON object", 400)

        webhook = store.create(data.get('name'), data.get('variables'), data.get('splineWebhookUrl'))
        logger.info(f"Webhook created: {webhook['name']} ({webhook['id']})")
        if webhook['splineWebhookUrl']:
            logger.info(f"Configured to forward to Spline: {webhook['splineWebhookUrl']}")

        return JSONResponse(
            {'success': True, 'webhook': webhook, 'webhookUrl': f"{_server_url(request)}{webhook['url']}"},
            status_code=201,
        )

    async def list_webhooks(request: Request) -> JSONResponse:
        base = _server_url(request)
        return JSONResponse({
            'success': True,
            'webhooks': [{**webhook, 'fullUrl': f"{base}{webhook['url']}"} for webhook in store.all()],
        })

    async def receive(request: Request) -> JSONResponse:
        webhook = store.get(request.path_params['webhook_id'])
        if webhook is None:
            return _error("Webhook not found", 404)

        try:
            data = await _json_body(request)
        except ValueError as e:
            logger.error(f"Error processing webhook data: {e}")
            return _error(str(e), 400)

        logger.info(f"Webhook {webhook['name']} ({webhook['id']}) received data")
        logger.debug(json.dumps(data, indent=2))

        spline_response = None
        if webhook['splineWebhookUrl']:
            logger.info(f"Forwarding data to Spline webhook: {webhook['splineWebhookUrl']}")
            spline_response = await forward(client_factory, webhook['splineWebhookUrl'], data)

        return JSONResponse({
            'success': True,
            'message': 'Data received successfully',
            'webhook': webhook['name'],
            'receivedData': data,
            'splineResponse': spline_response,
        })

    app = Starlette(
        routes=[
            Route('/', index, methods=['GET']),
            Route('/index.html', index, methods=['GET']),
            Route('/create-webhook', create_webhook, methods=['POST']),
            Route('/webhooks', list_webhooks, methods=['GET']),
            Route('/webhook/{webhook_id}', receive, methods=['POST']),
        ],
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=['*'],
                allow_methods=['GET', 'POST', 'OPTIONS'],
                allow_headers=['Content-Type'],
            ),
        ],
    )
    app.state.store = store
    return app


def run(argv: list[str] | None = None) -> None:
    """Entry point for running as module."""
    import uvicorn

    parser = argparse.ArgumentParser(description="Spline Webhook Server")
    parser.add_argument(
        "--host", default=os.environ.get('HOST') or '0.0.0.0',
        help="Server host (default: HOST or 0.0.0.0)",
    )
    parser.add_argument(
        "--port", "-p", type=int, default=None,
        help=f"Server port (default: PORT or {DEFAULT_PORT})",
    )
    args = parser.parse_args(argv)

    port = args.port or int(os.environ.get('PORT') or DEFAULT_PORT)
    logger.info(f"Spline Webhook Server running on http://localhost:{port}")
    logger.info(f"Create a webhook: POST to http://localhost:{port}/create-webhook")
    logger.info(f"List webhooks: GET http://localhost:{port}/webhooks")
    logger.info(f"Send data to a webhook: POST to http://localhost:{port}/webhook/<id>")

    uvicorn.run(create_app(), host=args.host, port=port, log_level="info")


if __name__ == "__main__":
    run()
