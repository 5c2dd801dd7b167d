"""
HTTP client for the Spline.design REST API.

Every call goes through ``SplineApiClient.request``. Failures of any kind
(non-2xx responses, connection errors, timeouts) are raised as ``ApiError``
carrying the upstream status code and a readable message.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from .config import ApiConfig

logger = logging.getLogger('spline-mcp')


class ApiError(Exception):
    """Error returned by (or while talking to) an upstream API."""

    def __init__(self, status_code: int | None, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"

    @classmethod
    def from_response(cls, response: httpx.Response) -> ApiError:
        """Build an error from a non-2xx response, preferring the body's message."""
        message = None
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            detail = body.get('message') or body.get('error')
            if isinstance(detail, dict):
                detail = detail.get('message')
            if detail:
                message = str(detail)

        if not message:
            message = response.text.strip() or response.reason_phrase or 'Request failed'

        return cls(response.status_code, message)


def _clean_params(payload: dict | None) -> dict | None:
    if not payload:
        return None
    return {k: v for k, v in payload.items() if v is not None} or None


def endpoint(template: str, *ids: Any, **named_ids: Any) -> str:
    """Format an API path, percent-encoding every substituted id as a single segment."""
    return template.format(
        *(quote(str(value), safe='') for value in ids),
        **{key: quote(str(value), safe='') for key, value in named_ids.items()},
    )


async def send_json(
    method: str,
    url: str,
    *,
    headers: dict[str, str],
    timeout: float,
    payload: Any = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    """
    Send one JSON request and return the decoded body.

    GET payloads are sent as query parameters, everything else as the JSON body.

    Raises:
        ApiError: On a non-2xx response or a transport failure
    """
    async with httpx.AsyncClient(headers=headers, timeout=timeout, transport=transport) as client:
        try:
            if method == 'GET':
                response = await client.request(method, url, params=_clean_params(payload))
            elif payload is None:
                response = await client.request(method, url)
            else:
                response = await client.request(method, url, json=payload)
        except httpx.TimeoutException:
            raise ApiError(None, f"Request timed out after {timeout}s: {method} {url}")
        except httpx.RequestError as e:
            raise ApiError(None, f"Cannot connect to {url}: {e}")

    if response.is_error:
        raise ApiError.from_response(response)

    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class SplineApiClient:
    """
    Thin wrapper around the Spline REST API.

    The bearer credential is taken from ``config`` at construction time.
    """

    def __init__(self, config: ApiConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self._transport = transport
        self._headers = {'Content-Type': 'application/json'}
        if config.api_key:
            self._headers['Authorization'] = f"Bearer {config.api_key}"

    @property
    def base_url(self) -> str:
        return self.config.base_url.rstrip('/')

    async def request(self, method: str, path: str, payload: Any = None) -> Any:
        """
        Make a request to the Spline API.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: API path, e.g. '/scenes/abc/objects'
            payload: Query parameters for GET, JSON body otherwise

        Returns:
            Decoded JSON response (None for empty bodies)

        Raises:
            ApiError: If the request fails
        """
        method = method.upper()
        logger.debug(f"Spline API {method} {path}")
        return await send_json(
            method,
            f"{self.base_url}{path}",
            headers=self._headers,
            timeout=self.config.timeout,
            payload=payload,
            transport=self._transport,
        )

    # Scenes

    async def get_scene(self, scene_id: str) -> Any:
        return await self.request('GET', endpoint("/scenes/{}", scene_id))

    async def get_scenes(self, params: dict | None = None) -> Any:
        return await self.request('GET', '/scenes', params)

    # Objects

    async def get_objects(self, scene_id: str) -> Any:
        return await self.request('GET', endpoint("/scenes/{}/objects", scene_id))

    async def get_object(self, scene_id: str, object_id: str) -> Any:
        return await self.request('GET', endpoint("/scenes/{}/objects/{}", scene_id, object_id))

    async def create_object(self, scene_id: str, data: dict) -> Any:
        return await self.request('POST', endpoint("/scenes/{}/objects", scene_id), data)

    async def update_object(self, scene_id: str, object_id: str, data: dict) -> Any:
        return await self.request('PUT', endpoint("/scenes/{}/objects/{}", scene_id, object_id), data)

    async def delete_object(self, scene_id: str, object_id: str) -> Any:
        return await self.request('DELETE', endpoint("/scenes/{}/objects/{}", scene_id, object_id))

    # Materials

    async def get_materials(self, scene_id: str) -> Any:
        return await self.request('GET', endpoint("/scenes/{}/materials", scene_id))

    async def get_material(self, scene_id: str, material_id: str) -> Any:
        return await self.request('GET', endpoint("/scenes/{}/materials/{}", scene_id, material_id))

    async def create_material(self, scene_id: str, data: dict) -> Any:
        return await self.request('POST', endpoint("/scenes/{}/materials", scene_id), data)

    async def update_material(self, scene_id: str, material_id: str, data: dict) -> Any:
        return await self.request('PUT', endpoint("/scenes/{}/materials/{}", scene_id, material_id), data)

    async def apply_material(self, scene_id: str, object_id: str, material_id: str) -> Any:
        return await self.request(
            'POST', endpoint("/scenes/{}/objects/{}/material", scene_id, object_id), {'materialId': material_id}
        )

    # States

    async def get_states(self, scene_id: str) -> Any:
        return await self.request('GET', endpoint("/scenes/{}/states", scene_id))

    async def get_state(self, scene_id: str, state_id: str) -> Any:
        return await self.request('GET', endpoint("/scenes/{}/states/{}", scene_id, state_id))

    async def create_state(self, scene_id: str, data: dict) -> Any:
        return await self.request('POST', endpoint("/scenes/{}/states", scene_id), data)

    async def trigger_state(self, scene_id: str, state_id: str) -> Any:
        return await self.request('POST', endpoint("/scenes/{}/states/{}/trigger", scene_id, state_id))

    # Events

    async def get_events(self, scene_id: str) -> Any:
        return await self.request('GET', endpoint("/scenes/{}/events", scene_id))

    async def get_event(self, scene_id: str, event_id: str) -> Any:
        return await self.request('GET', endpoint("/scenes/{}/events/{}", scene_id, event_id))

    async def create_event(self, scene_id: str, data: dict) -> Any:
        return await self.request('POST', endpoint("/scenes/{}/events", scene_id), data)

    async def trigger_event(self, scene_id: str, event_id: str, data: dict | None = None) -> Any:
        return await self.request('POST', endpoint("/scenes/{}/events/{}/trigger", scene_id, event_id), data or {})

    # Variables

    async def get_variables(self, scene_id: str) -> Any:
        return await self.request('GET', endpoint("/scenes/{}/variables", scene_id))

    async def set_variable(self, scene_id: str, name: str, value: Any, variable_type: str) -> Any:
        return await self.request(
            'PUT', endpoint("/scenes/{}/variables/{}", scene_id, name), {'value': value, 'type': variable_type}
        )

    # API connections

    async def configure_api(self, scene_id: str, data: dict) -> Any:
        return await self.request('POST', endpoint("/scenes/{}/apis", scene_id), data)

    async def get_apis(self, scene_id: str) -> Any:
        return await self.request('GET', endpoint("/scenes/{}/apis", scene_id))

    async def delete_api(self, scene_id: str, api_id: str) -> Any:
        return await self.request('DELETE', endpoint("/scenes/{}/apis/{}", scene_id, api_id))

    # Webhooks

    async def create_webhook(self, scene_id: str, data: dict) -> Any:
        return await self.request('POST', endpoint("/scenes/{}/webhooks", scene_id), data)

    async def get_webhooks(self, scene_id: str) -> Any:
        return await self.request('GET', endpoint("/scenes/{}/webhooks", scene_id))

    async def delete_webhook(self, scene_id: str, webhook_id: str) -> Any:
        return await self.request('DELETE', endpoint("/scenes/{}/webhooks/{}", scene_id, webhook_id))

    async def trigger_webhook(self, scene_id: str, webhook_id: str, data: Any) -> Any:
        return await self.request('POST', endpoint("/scenes/{}/webhooks/{}/trigger", scene_id, webhook_id), data)
