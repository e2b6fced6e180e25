import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketState

from racesync.app import create_app
from racesync.config import Settings
from racesync.protocol import ProtocolHandler
from racesync.registry import ConnectionRegistry
from racesync.state import Runtime
from racesync.store import SessionStore


class ManualClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: float = 1_700_000_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class FakeWebSocket:
    """Records every JSON payload sent to it."""

    def __init__(self):
        self.sent = []
        self.client_state = WebSocketState.CONNECTED
        self.application_state = WebSocketState.CONNECTED

    async def send_json(self, data):
        if self.client_state != WebSocketState.CONNECTED:
            raise RuntimeError("Cannot send once closed")
        self.sent.append(data)

    def close(self):
        self.client_state = WebSocketState.DISCONNECTED

    def of_type(self, msg_type):
        return [m for m in self.sent if m["type"] == msg_type]

    def clear(self):
        self.sent.clear()


@pytest.fixture()
def clock():
    return ManualClock()


@pytest.fixture()
def store(clock):
    return SessionStore(clock=clock)


@pytest.fixture()
def registry():
    return ConnectionRegistry()


@pytest.fixture()
def handler(store, registry):
    return ProtocolHandler(store, registry)


@pytest.fixture()
def runtime(store, registry):
    return Runtime(store=store, registry=registry)


@pytest.fixture()
def app(runtime):
    settings = Settings(
        database_url="sqlite://:memory:",
        generate_schemas=True,
        cors_origins=["*"],
        log_level="DEBUG",
    )
    return create_app(settings, runtime=runtime)


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client
