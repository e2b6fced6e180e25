"""Runtime objects shared by the routers of one application instance.

Nothing here is a module-level singleton: ``create_app`` builds a
``Runtime`` and stores it on ``app.state.runtime``, so tests can run
isolated instances side by side.
"""
from __future__ import annotations

from typing import Optional

from starlette.requests import HTTPConnection

from .protocol import ProtocolHandler
from .registry import ConnectionRegistry
from .stopwatch import Clock, wall_clock_ms
from .store import SessionStore


class Runtime:
    def __init__(
        self,
        store: Optional[SessionStore] = None,
        registry: Optional[ConnectionRegistry] = None,
        clock: Clock = wall_clock_ms,
    ):
        self.store = store or SessionStore(clock=clock)
        self.registry = registry or ConnectionRegistry()
        self.handler = ProtocolHandler(self.store, self.registry)


def get_runtime(conn: HTTPConnection) -> Runtime:
    """FastAPI dependency; works for both HTTP requests and websockets."""
    return conn.app.state.runtime


__all__ = ["Runtime", "get_runtime"]
