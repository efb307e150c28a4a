"""Chat relay: history replay, broadcast to open sockets, and persistence."""

import json
import logging
from typing import Any, Dict, List, Optional, Set

from fastapi import WebSocket
from pydantic import ValidationError

from common.constants import MESSAGE_HISTORY_LIMIT
from hub.repositories.message_repository import MessageRepository
from hub.schemas.messages import ChatMessage, ClearFrame, InitFrame, MessageFrame
from hub.utils import current_millis, utc_now_iso

logger = logging.getLogger(__name__)


class MessageRelay:
    """
    Broadcast relay for chat messages.

    Holds the history newest-first, capped at history_limit entries, and
    rewrites the whole history through the repository after every change.
    All mutation happens on the event loop, so no locking is done here.
    """

    def __init__(
        self,
        repository: Optional[MessageRepository] = None,
        history_limit: int = MESSAGE_HISTORY_LIMIT
    ):
        self.repository = repository if repository is not None else MessageRepository()
        self.history_limit = history_limit
        self.messages: List[Dict[str, Any]] = self.repository.load()[:history_limit]
        self.connections: Set[WebSocket] = set()

    async def connect(self, websocket: WebSocket) -> None:
        """Accept a socket, register it and replay the history to it."""
        await websocket.accept()
        self.connections.add(websocket)
        logger.info(f"New WebSocket connection ({len(self.connections)} open)")
        init = InitFrame(messages=self.messages)
        try:
            await websocket.send_json(init.model_dump())
        except Exception:
            self.disconnect(websocket)
            raise

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self.connections:
            self.connections.discard(websocket)
            logger.info(f"WebSocket connection closed ({len(self.connections)} open)")

    async def handle_frame(self, raw: str) -> None:
        """
        Apply one inbound text frame.

        Frames that are not JSON objects, have an unknown type, or carry an
        invalid message are dropped.
        """
        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            logger.debug("Dropping frame that is not valid JSON")
            return

        if not isinstance(payload, dict):
            logger.debug("Dropping frame that is not a JSON object")
            return

        frame_type = payload.get("type")
        if frame_type == "message":
            try:
                frame = MessageFrame.model_validate(payload)
            except ValidationError as e:
                logger.debug(f"Dropping invalid message frame: {e.error_count()} error(s)")
                return
            message = self.add_message(frame.message)
            await self.broadcast({"type": "message", "message": message})
        elif frame_type == "clear":
            self.clear()
            await self.broadcast(ClearFrame().model_dump())
        else:
            logger.debug(f"Dropping frame with unknown type {frame_type!r}")

    def add_message(self, message: ChatMessage) -> Dict[str, Any]:
        """
        Stamp, prepend and persist a message.

        Args:
            message: Validated message from a client

        Returns:
            The stored message as sent to clients
        """
        stored = message.model_dump()
        if not stored.get("id"):
            stored["id"] = str(current_millis())
        stored["timestamp"] = utc_now_iso()

        self.messages.insert(0, stored)
        if len(self.messages) > self.history_limit:
            del self.messages[self.history_limit:]

        self.repository.save(self.messages)
        logger.info("Message %s from %s: %s", stored["id"], stored["sender"], stored["text"])
        return stored

    def clear(self) -> None:
        """Empty the history and persist the empty list."""
        self.messages = []
        self.repository.save(self.messages)
        logger.info("Message history cleared")

    async def broadcast(self, payload: Dict[str, Any]) -> None:
        """
        Send a payload to every open socket.

        Sockets that fail to receive it are dropped from the connection set.
        """
        disconnected = []
        for websocket in list(self.connections):
            try:
                await websocket.send_json(payload)
            except Exception as e:
                logger.debug(f"Broadcast failed for a socket: {e}")
                disconnected.append(websocket)

        for websocket in disconnected:
            self.disconnect(websocket)
