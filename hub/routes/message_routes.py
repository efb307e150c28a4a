"""Chat relay WebSocket route."""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from common.logging_config import get_logger
from hub.service_locator import get_message_relay

logger = get_logger(__name__)

router = APIRouter(tags=["Messages"])


@router.websocket("/")
@router.websocket("/ws")
async def chat_socket(websocket: WebSocket):
    """
    Chat relay socket.

    Sends {"type": "init", "messages": [...]} on connect, then accepts
    "message" and "clear" frames and rebroadcasts them to every client.
    """
    relay = get_message_relay()

    try:
        await relay.connect(websocket)
        while True:
            event = await websocket.receive()
            if event["type"] == "websocket.disconnect":
                break

            raw = event.get("text")
            if raw is None and event.get("bytes") is not None:
                raw = event["bytes"].decode("utf-8", errors="replace")
            if raw is None:
                continue

            await relay.handle_frame(raw)
    except WebSocketDisconnect:
        pass
    finally:
        relay.disconnect(websocket)
