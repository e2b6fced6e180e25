
def test_connect_receives_connection_id(client):
    with client.websocket_connect("/ws") as ws:
        data = ws.receive_json()
        assert data["type"] == "connected"
        assert data["userId"]


def test_create_join_command_and_leave(client, clock, store):
    with client.websocket_connect("/ws") as host:
        host_id = host.receive_json()["userId"]
        host.send_json({"type": "create_session", "username": "Ann"})
        created = host.receive_json()
        assert created["type"] == "create_session"
        assert created["success"] is True
        code = created["sessionId"]
        assert len(code) == 6
        sync = host.receive_json()
        assert sync["data"]["participants"] == [{"id": host_id, "name": "Ann", "initial": "A"}]

        with client.websocket_connect("/ws") as guest:
            guest_id = guest.receive_json()["userId"]
            guest.send_json({"type": "join_session", "sessionId": code, "username": "Bob"})
            assert guest.receive_json() == {"type": "join_session", "sessionId": code, "success": True}
            joined = guest.receive_json()
            assert joined["type"] == "user_joined"
            assert host.receive_json() == joined

            guest.send_json({"type": "start_stopwatch"})
            for ws in (host, guest):
                msg = ws.receive_json()
                assert msg["type"] == "sync_state"
                assert msg["data"]["stopwatch"]["isRunning"] is True
                assert msg["data"]["stopwatch"]["startTime"] == clock.now

            clock.advance(100)
            host.send_json({"type": "stop_stopwatch"})
            for ws in (host, guest):
                assert ws.receive_json()["data"]["stopwatch"]["elapsedTime"] == 100

            # Rejected command: only the sender hears about it
            guest.send_json({"type": "lap_stopwatch"})
            assert guest.receive_json()["type"] == "error"

        left = host.receive_json()
        assert left["type"] == "user_left"
        assert left["userId"] == guest_id
        assert len(left["data"]["participants"]) == 1

    assert store.get_session(code) is None


def test_three_connections_get_one_identical_sync_each(client):
    with client.websocket_connect("/ws") as a, client.websocket_connect("/ws") as b, \
            client.websocket_connect("/ws") as c:
        for ws in (a, b, c):
            ws.receive_json()
        a.send_json({"type": "create_session", "username": "Ann"})
        code = a.receive_json()["sessionId"]
        a.receive_json()  # sync_state

        b.send_json({"type": "join_session", "sessionId": code, "username": "Bob"})
        b.receive_json()  # join_session reply
        a.receive_json()
        b.receive_json()  # user_joined

        c.send_json({"type": "join_session", "sessionId": code, "username": "Cy"})
        c.receive_json()  # join_session reply
        for ws in (a, b, c):
            assert ws.receive_json()["type"] == "user_joined"

        b.send_json({"type": "start_stopwatch"})
        received = [ws.receive_json() for ws in (a, b, c)]
        assert all(msg["type"] == "sync_state" for msg in received)
        assert received[0] == received[1] == received[2]


def test_join_unknown_session_is_an_error(client, store):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()
        ws.send_json({"type": "join_session", "sessionId": "QQQQQQ"})
        assert ws.receive_json() == {"type": "error", "message": "Session not found: QQQQQQ"}
        ws.send_json({"type": "start_stopwatch"})
        assert ws.receive_json()["type"] == "error"
    assert len(store) == 0


def test_invalid_json_frame_is_reported(client):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()
        ws.send_text("{not json")
        assert ws.receive_json() == {"type": "error", "message": "Message is not valid JSON"}
        # Connection stays usable
        ws.send_json({"type": "create_session"})
        assert ws.receive_json()["type"] == "create_session"


def test_session_peek_endpoint(client):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()
        ws.send_json({"type": "create_session", "username": "Ann"})
        code = ws.receive_json()["sessionId"]
        res = client.get(f"/sessions/{code.lower()}")
        assert res.status_code == 200
        body = res.json()
        assert body["id"] == code
        assert body["stopwatch"]["isRunning"] is False
    assert client.get(f"/sessions/{code}").status_code == 404


def test_binary_frame_is_rejected_without_dropping_participant(client, store):
    with client.websocket_connect("/ws") as ws:
        user_id = ws.receive_json()["userId"]
        ws.send_json({"type": "create_session", "username": "Ann"})
        code = ws.receive_json()["sessionId"]
        ws.receive_json()  # sync_state

        ws.send_bytes(b'{"type": "start_stopwatch"}')
        assert ws.receive_json() == {"type": "error", "message": "Binary frames are not supported"}
        assert user_id in store.get_session(code).participants
        assert store.get_session(code).stopwatch.is_running is False

        # Connection stays usable
        ws.send_json({"type": "start_stopwatch"})
        msg = ws.receive_json()
        assert msg["type"] == "sync_state"
        assert msg["data"]["stopwatch"]["isRunning"] is True
