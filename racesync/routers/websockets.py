from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..state import get_runtime

log = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["ws"])


@router.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    handler = get_runtime(ws).handler
    await ws.accept()
    conn = await handler.connect(ws)
    try:
        while True:
            message = await ws.receive()
            if message["type"] == "websocket.disconnect":
                break
            data = message.get("text")
            if data is None:
                data = message.get("bytes")
            await handler.handle_message(conn, data)
    except WebSocketDisconnect:
        pass
    except Exception as e:
        log.warning("WebSocket error on %s: %s", conn.connection_id, e)
    finally:
        await handler.disconnect(conn)
