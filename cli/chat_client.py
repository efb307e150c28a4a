"""WebSocket client for the hub chat relay."""

import asyncio
import json
import time
from typing import Any, Callable, Dict, List, Optional

import aiohttp

from common.logging_config import get_logger
from cli.config import Config
from cli.constants import CHAT_REPLY_TIMEOUT_SECONDS

logger = get_logger(__name__)

FramePredicate = Callable[[Dict[str, Any]], bool]


class ChatClient:
    """
    Short-lived chat socket sessions: each call connects, waits for the
    history replay, does its work and disconnects.
    """

    def __init__(
        self,
        config: Config,
        session_factory: Callable[[], aiohttp.ClientSession] = aiohttp.ClientSession,
        reply_timeout: float = CHAT_REPLY_TIMEOUT_SECONDS
    ):
        """
        Initialize chat client.

        Args:
            config: Configuration instance
            session_factory: Creates the aiohttp session (replaced in tests)
            reply_timeout: Seconds to wait for each expected frame
        """
        self.config = config
        self.session_factory = session_factory
        self.reply_timeout = reply_timeout

    async def _receive_frame(
        self,
        ws: aiohttp.ClientWebSocketResponse,
        frame_type: str,
        predicate: Optional[FramePredicate] = None
    ) -> Dict[str, Any]:
        """
        Wait for the next frame of the given type, skipping everything else.

        Raises:
            asyncio.TimeoutError: If no matching frame arrives in time
            ConnectionError: If the hub closes the socket
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.reply_timeout

        while True:
            remaining = deadline - loop.time()
            if remaining <= 0:
                raise asyncio.TimeoutError()

            msg = await ws.receive(timeout=remaining)

            if msg.type == aiohttp.WSMsgType.TEXT:
                try:
                    frame = json.loads(msg.data)
                except ValueError:
                    logger.debug("Ignoring non-JSON chat frame")
                    continue
                if not isinstance(frame, dict) or frame.get("type") != frame_type:
                    continue
                if predicate is None or predicate(frame):
                    return frame
            elif msg.type in (
                aiohttp.WSMsgType.CLOSE,
                aiohttp.WSMsgType.CLOSING,
                aiohttp.WSMsgType.CLOSED,
                aiohttp.WSMsgType.ERROR,
            ):
                raise ConnectionError("Chat socket closed by the hub")

    async def send_message_async(self, text: str, sender: str, message_id: str) -> Dict[str, Any]:
        """
        Send one message and wait for the hub to broadcast it back.

        Returns:
            The stored message, as stamped by the hub
        """
        async with self.session_factory() as session:
            async with session.ws_connect(self.config.get_ws_url()) as ws:
                await self._receive_frame(ws, "init")
                await ws.send_json({
                    "type": "message",
                    "message": {"id": message_id, "text": text, "sender": sender},
                })
                echo = await self._receive_frame(
                    ws,
                    "message",
                    lambda frame: frame.get("message", {}).get("id") == message_id
                )
                return echo["message"]

    async def fetch_messages_async(self) -> List[Dict[str, Any]]:
        """
        Connect and return the history replayed in the init frame.

        Returns:
            Messages, newest first
        """
        async with self.session_factory() as session:
            async with session.ws_connect(self.config.get_ws_url()) as ws:
                init = await self._receive_frame(ws, "init")
                return list(init.get("messages", []))

    async def clear_messages_async(self) -> None:
        """Send a clear command and wait for the hub to broadcast it."""
        async with self.session_factory() as session:
            async with session.ws_connect(self.config.get_ws_url()) as ws:
                await self._receive_frame(ws, "init")
                await ws.send_json({"type": "clear"})
                await self._receive_frame(ws, "clear")

    def send_message(self, text: str) -> str:
        """
        Send a chat message.

        Args:
            text: Message text

        Returns:
            Confirmation or error message
        """
        sender = self.config.get_sender()
        message_id = str(int(time.time() * 1000))
        logger.info(f"Sending chat message as {sender} [id={message_id}]")
        return self._run(
            self.send_message_async(text, sender, message_id),
            lambda message: f"Sent at {message.get('timestamp', '?')}: {message.get('text', '')}"
        )

    def fetch_messages(self, count: int) -> str:
        """
        Show the newest chat messages.

        Args:
            count: Maximum number of messages to show

        Returns:
            Formatted messages, newest first
        """
        return self._run(
            self.fetch_messages_async(),
            lambda messages: format_messages(messages[:count], len(messages))
        )

    def clear_messages(self) -> str:
        """
        Clear the chat history for every client.

        Returns:
            Confirmation or error message
        """
        return self._run(self.clear_messages_async(), lambda _: "Chat history cleared.")

    def _run(self, coroutine, on_success: Callable[[Any], str]) -> str:
        try:
            result = asyncio.run(coroutine)
        except aiohttp.ClientError as e:
            logger.error(f"Chat socket error: {e}")
            return "Error: Cannot connect to hub chat socket. Is the hub running?"
        except asyncio.TimeoutError:
            logger.error("Timed out waiting for the hub chat socket")
            return "Error: Timed out waiting for the hub."
        except ConnectionError as e:
            logger.error(f"Chat socket error: {e}")
            return f"Error: {e}"
        return on_success(result)


def format_messages(messages: List[Dict[str, Any]], total: int) -> str:
    """
    Format chat messages for the terminal.

    Args:
        messages: Messages to show, newest first
        total: Number of messages held by the hub

    Returns:
        One line per message, oldest of the shown messages first
    """
    if not messages:
        return "No messages."

    lines = [f"Showing {len(messages)} of {total} message(s):"]
    for message in reversed(messages):
        lines.append(
            f"  [{message.get('timestamp', '?')}] {message.get('sender', 'Anonymous')}: {message.get('text', '')}"
        )
    return '\n'.join(lines)
