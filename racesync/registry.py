"""Maps each live session to the websocket connections bound to it."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Set

from starlette.websockets import WebSocket, WebSocketState

log = logging.getLogger(__name__)


def is_open(ws: WebSocket) -> bool:
    return (
        ws.client_state == WebSocketState.CONNECTED
        and ws.application_state == WebSocketState.CONNECTED
    )


class ConnectionRegistry:
    """Bookkeeping of ``session_id -> connections``.

    The registry does not own connection lifetime; the websocket endpoint
    does. Entries whose set becomes empty are dropped.
    """

    def __init__(self) -> None:
        self._connections: Dict[str, Set[WebSocket]] = {}

    def attach(self, session_id: str, ws: WebSocket) -> None:
        self._connections.setdefault(session_id, set()).add(ws)

    def detach(self, session_id: str, ws: WebSocket) -> None:
        conns = self._connections.get(session_id)
        if conns is None:
            return
        conns.discard(ws)
        if not conns:
            del self._connections[session_id]

    def connections(self, session_id: str) -> List[WebSocket]:
        """Point-in-time copy of the connections bound to *session_id*."""
        return list(self._connections.get(session_id, ()))

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._connections

    async def broadcast(self, session_id: str, payload: Dict[str, Any]) -> int:
        """Send *payload* to every open connection of the session.

        Iterates over a copy so connections may detach mid-broadcast.
        Closed or failing connections are skipped. Returns the number of
        connections the payload was delivered to.
        """
        delivered = 0
        for ws in self.connections(session_id):
            if not is_open(ws):
                log.debug("Skipping closed connection in session %s", session_id)
                continue
            try:
                await ws.send_json(payload)
            except Exception as exc:
                # Client went away between the state check and the send.
                log.debug("Broadcast to session %s failed: %s", session_id, exc)
                continue
            delivered += 1
        return delivered


__all__ = ["ConnectionRegistry", "is_open"]
