"""Websocket synchronisation protocol.

This module is framework-agnostic apart from the websocket handle it
writes to: it validates inbound messages, drives the ``SessionStore``
and fans the resulting snapshots out through the ``ConnectionRegistry``.
Each message is processed to completion, broadcast included, before the
next one is read.
"""
from __future__ import annotations

import json
import logging
import uuid
from typing import Any, Awaitable, Callable, Dict, Optional

from pydantic import ValidationError
from starlette.websockets import WebSocket

from .constants import SERVER_MESSAGE_TYPES
from .errors import (
    AlreadyBound,
    InvalidTransition,
    MalformedMessage,
    NotBound,
    ProtocolError,
    SessionNotFound,
    UnknownMessageType,
)
from .registry import ConnectionRegistry
from .schemas import InboundMessage
from .store import SessionStore

log = logging.getLogger(__name__)


class Connection:
    """Per-connection protocol state: ``Unbound`` until a session is bound."""

    def __init__(self, ws: WebSocket, connection_id: Optional[str] = None):
        self.ws = ws
        self.connection_id = connection_id or str(uuid.uuid4())
        self.session_id: Optional[str] = None

    @property
    def is_bound(self) -> bool:
        return self.session_id is not None


def parse_message(raw: Any) -> InboundMessage:
    """Decode a text frame (or already decoded JSON) into an ``InboundMessage``."""
    if isinstance(raw, (bytes, bytearray)):
        raise MalformedMessage("Binary frames are not supported")
    if raw is None:
        raise MalformedMessage("Empty message")
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            raise MalformedMessage("Message is not valid JSON")
    if not isinstance(raw, dict):
        raise MalformedMessage("Message must be a JSON object")
    try:
        return InboundMessage.model_validate(raw)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise MalformedMessage(f"Malformed message: invalid {fields}")


class ProtocolHandler:
    def __init__(self, store: SessionStore, registry: ConnectionRegistry):
        self.store = store
        self.registry = registry
        self._handlers: Dict[str, Callable[[Connection, InboundMessage], Awaitable[None]]] = {
            "create_session": self._create_session,
            "join_session": self._join_session,
            "start_stopwatch": self._start_stopwatch,
            "stop_stopwatch": self._stop_stopwatch,
            "reset_stopwatch": self._reset_stopwatch,
            "lap_stopwatch": self._lap_stopwatch,
            "sync_state": self._sync_state,
        }

    # ---------------------------------------------------------------------
    # Connection lifecycle
    # ---------------------------------------------------------------------

    async def connect(self, ws: WebSocket) -> Connection:
        """Assign a connection id and announce it before any binding happens."""
        conn = Connection(ws)
        await ws.send_json({"type": "connected", "userId": conn.connection_id})
        log.debug("Connection %s opened", conn.connection_id)
        return conn

    async def disconnect(self, conn: Connection) -> None:
        session_id = conn.session_id
        if session_id is None:
            log.debug("Connection %s closed (unbound)", conn.connection_id)
            return
        conn.session_id = None
        self.store.remove_participant(session_id, conn.connection_id)
        self.registry.detach(session_id, conn.ws)
        session = self.store.get_session(session_id)
        if session is None:
            return
        await self.registry.broadcast(session_id, {
            "type": "user_left",
            "userId": conn.connection_id,
            "data": session.snapshot().model_dump(by_alias=True),
        })

    async def handle_message(self, conn: Connection, raw: Any) -> None:
        """Process one inbound frame; errors are reported to *conn* only."""
        try:
            msg = parse_message(raw)
            handler = self._handlers.get(msg.type)
            if handler is None:
                if msg.type in SERVER_MESSAGE_TYPES:
                    raise MalformedMessage(f"Message type {msg.type} cannot be sent by clients")
                raise UnknownMessageType(msg.type)
            await handler(conn, msg)
        except ProtocolError as exc:
            log.debug("Rejected message from %s: %s", conn.connection_id, exc.message)
            await self._send_error(conn, exc.message)
        except Exception:
            log.exception("Unhandled error processing message from %s", conn.connection_id)
            await self._send_error(conn, "Internal server error")

    # ---------------------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------------------

    async def _send_error(self, conn: Connection, message: str) -> None:
        try:
            await conn.ws.send_json({"type": "error", "message": message})
        except Exception as exc:
            log.debug("Could not deliver error to %s: %s", conn.connection_id, exc)

    def _require_session(self, conn: Connection) -> str:
        if conn.session_id is None:
            raise NotBound()
        if self.store.get_session(conn.session_id) is None:
            raise SessionNotFound(conn.session_id)
        return conn.session_id

    def _bind(self, conn: Connection, session_id: str) -> None:
        conn.session_id = session_id
        self.registry.attach(session_id, conn.ws)

    def _snapshot(self, session_id: str) -> Dict[str, Any]:
        session = self.store.get_session(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session.snapshot().model_dump(by_alias=True)

    async def _broadcast_state(self, session_id: str) -> None:
        await self.registry.broadcast(
            session_id, {"type": "sync_state", "data": self._snapshot(session_id)}
        )

    # ---------------------------------------------------------------------
    # Message handlers
    # ---------------------------------------------------------------------

    async def _create_session(self, conn: Connection, msg: InboundMessage) -> None:
        if conn.session_id is not None:
            raise AlreadyBound(conn.session_id)
        session_id = self.store.create_session(conn.connection_id, msg.username)
        self._bind(conn, session_id)
        await conn.ws.send_json({"type": "create_session", "sessionId": session_id, "success": True})
        await conn.ws.send_json({"type": "sync_state", "data": self._snapshot(session_id)})

    async def _join_session(self, conn: Connection, msg: InboundMessage) -> None:
        session_id = (msg.session_id or "").strip().upper()
        if not session_id:
            raise MalformedMessage("sessionId is required")
        if conn.session_id is not None and conn.session_id != session_id:
            raise AlreadyBound(conn.session_id)
        if self.store.get_session(session_id) is None:
            raise SessionNotFound(session_id)
        if not self.store.join_session(session_id, conn.connection_id, msg.username):
            raise SessionNotFound(session_id)
        if conn.session_id is None:
            self._bind(conn, session_id)
        await conn.ws.send_json({"type": "join_session", "sessionId": session_id, "success": True})
        session = self.store.get_session(session_id)
        participant = session.participants[conn.connection_id]
        await self.registry.broadcast(session_id, {
            "type": "user_joined",
            "userId": conn.connection_id,
            "username": participant.name,
            "data": session.snapshot().model_dump(by_alias=True),
        })

    async def _start_stopwatch(self, conn: Connection, msg: InboundMessage) -> None:
        session_id = self._require_session(conn)
        if not self.store.start_stopwatch(session_id):
            raise InvalidTransition("Stopwatch is already running")
        await self._broadcast_state(session_id)

    async def _stop_stopwatch(self, conn: Connection, msg: InboundMessage) -> None:
        session_id = self._require_session(conn)
        if not self.store.stop_stopwatch(session_id):
            raise InvalidTransition("Stopwatch is not running")
        await self._broadcast_state(session_id)

    async def _reset_stopwatch(self, conn: Connection, msg: InboundMessage) -> None:
        session_id = self._require_session(conn)
        if not self.store.reset_stopwatch(session_id):
            raise SessionNotFound(session_id)
        await self._broadcast_state(session_id)

    async def _lap_stopwatch(self, conn: Connection, msg: InboundMessage) -> None:
        session_id = self._require_session(conn)
        if self.store.record_lap(session_id) is None:
            raise InvalidTransition("Cannot record a lap while the stopwatch is stopped")
        await self._broadcast_state(session_id)

    async def _sync_state(self, conn: Connection, msg: InboundMessage) -> None:
        session_id = self._require_session(conn)
        await conn.ws.send_json({"type": "sync_state", "data": self._snapshot(session_id)})


__all__ = ["Connection", "ProtocolHandler", "parse_message"]
