"""
Streamable HTTP session handling.

Each client session gets its own ``StreamableHTTPServerTransport`` and its own
``server.run`` task. Sessions are created by an ``initialize`` POST without the
``mcp-session-id`` header and live until their transport is terminated.
"""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

import anyio
from anyio.abc import TaskGroup, TaskStatus
from mcp.server import Server
from mcp.server.streamable_http import MCP_SESSION_ID_HEADER, StreamableHTTPServerTransport
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.types import Message, Receive, Scope, Send

logger = logging.getLogger('spline-mcp.sessions')

INVALID_SESSION = "Invalid or missing session ID"


class SessionStore:
    """Session id -> transport map of the live sessions. Ids are uuid4 hex."""

    def __init__(self) -> None:
        self._sessions: dict[str, StreamableHTTPServerTransport] = {}
        self._lock = anyio.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    async def create(
        self, factory: Callable[[str], StreamableHTTPServerTransport]
    ) -> tuple[str, StreamableHTTPServerTransport]:
        """Mint a session id, build its transport with ``factory`` and store it."""
        async with self._lock:
            session_id = uuid.uuid4().hex
            while session_id in self._sessions:
                session_id = uuid.uuid4().hex
            transport = factory(session_id)
            self._sessions[session_id] = transport
        logger.info(f"Session created: {session_id}")
        return session_id, transport

    def lookup(self, session_id: str | None) -> StreamableHTTPServerTransport | None:
        if not session_id:
            return None
        return self._sessions.get(session_id)

    async def remove(self, session_id: str) -> bool:
        async with self._lock:
            removed = self._sessions.pop(session_id, None) is not None
        if removed:
            logger.info(f"Session removed: {session_id}")
        return removed


def _is_initialize(body: bytes) -> bool:
    """True when the JSON-RPC payload is an ``initialize`` request."""
    try:
        payload = json.loads(body)
    except ValueError:
        return False
    return isinstance(payload, dict) and payload.get('method') == 'initialize'


def _replay(body: bytes, receive: Receive) -> Receive:
    """Receive channel that yields an already-read body once, then defers to ``receive``."""
    replayed = False

    async def replay() -> Message:
        nonlocal replayed
        if not replayed:
            replayed = True
            return {'type': 'http.request', 'body': body, 'more_body': False}
        return await receive()

    return replay


class StreamableHTTPRouter:
    """
    ASGI app routing MCP requests to per-session transports.

    A session is only created for an ``initialize`` POST the transport accepts.
    It is dropped from the store as soon as its transport is terminated, so a
    closed session id gets the same 400 as an id that never existed.
    """

    def __init__(self, server: Server, store: SessionStore | None = None, json_response: bool = False) -> None:
        self.server = server
        self.store = store if store is not None else SessionStore()
        self.json_response = json_response
        self._task_group: TaskGroup | None = None

    @asynccontextmanager
    async def run(self) -> AsyncIterator[None]:
        """Own the task group the session servers run in. Use as the app lifespan."""
        async with anyio.create_task_group() as tg:
            self._task_group = tg
            try:
                yield
            finally:
                tg.cancel_scope.cancel()
                self._task_group = None

    def _require_task_group(self) -> TaskGroup:
        if self._task_group is None:
            raise RuntimeError("StreamableHTTPRouter.run() must be entered before handling requests")
        return self._task_group

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        self._require_task_group()

        request = Request(scope, receive)
        session_id = request.headers.get(MCP_SESSION_ID_HEADER)
        transport = self.store.lookup(session_id)

        if transport is not None and transport.is_terminated:
            await self.store.remove(session_id)
            transport = None

        if transport is not None:
            await transport.handle_request(scope, receive, send)
            if transport.is_terminated:
                await self.store.remove(session_id)
            return

        if request.method == 'POST' and not session_id:
            body = await request.body()
            if _is_initialize(body):
                await self._initialize(scope, _replay(body, receive), send)
                return

        response = PlainTextResponse(INVALID_SESSION, status_code=400)
        await response(scope, receive, send)

    def _transport(self, session_id: str) -> StreamableHTTPServerTransport:
        return StreamableHTTPServerTransport(
            mcp_session_id=session_id,
            is_json_response_enabled=self.json_response,
        )

    async def _initialize(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Start a session for an initialize request and drop it again if the transport rejects it."""
        session_id, transport = await self._start_session()
        status: int | None = None

        async def send_with_status(message: Message) -> None:
            nonlocal status
            if message['type'] == 'http.response.start':
                status = message['status']
            await send(message)

        accepted = False
        try:
            await transport.handle_request(scope, receive, send_with_status)
            accepted = status is not None and status < 400
        finally:
            if not accepted:
                logger.info(f"Session {session_id} not initialized (status {status})")
                with anyio.CancelScope(shield=True):
                    await transport.terminate()
                    await self.store.remove(session_id)

    async def _start_session(self) -> tuple[str, StreamableHTTPServerTransport]:
        task_group = self._require_task_group()
        session_id, transport = await self.store.create(self._transport)

        async def run_server(*, task_status: TaskStatus[None] = anyio.TASK_STATUS_IGNORED) -> None:
            try:
                async with transport.connect() as (read_stream, write_stream):
                    task_status.started()
                    await self.server.run(
                        read_stream,
                        write_stream,
                        self.server.create_initialization_options(),
                    )
            except Exception:
                logger.exception(f"Session {session_id} crashed")
            finally:
                with anyio.CancelScope(shield=True):
                    await self.store.remove(session_id)

        await task_group.start(run_server)
        return session_id, transport
