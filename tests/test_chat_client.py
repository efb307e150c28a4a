"""Unit tests for ChatClient against an in-memory chat socket."""

import asyncio
import json
from types import SimpleNamespace

import aiohttp
import pytest

from cli.chat_client import ChatClient, format_messages


class FakeHub:
    """Mimics the hub relay: replays history and echoes frames back."""

    def __init__(self, messages=None, echo=True):
        self.messages = list(messages or [])
        self.echo = echo
        self.sent = []
        self.urls = []


class FakeWebSocket:

    def __init__(self, hub):
        self.hub = hub
        self.incoming = [self._text({"type": "init", "messages": hub.messages})]

    @staticmethod
    def _text(payload):
        return SimpleNamespace(type=aiohttp.WSMsgType.TEXT, data=json.dumps(payload))

    async def receive(self, timeout=None):
        if not self.incoming:
            raise asyncio.TimeoutError()
        return self.incoming.pop(0)

    async def send_json(self, payload):
        self.hub.sent.append(payload)
        if not self.hub.echo:
            return
        if payload["type"] == "message":
            stored = dict(payload["message"], timestamp="2024-05-01T12:00:00.000Z")
            # Unrelated traffic from another client arrives first.
            self.incoming.append(self._text({"type": "message", "message": {"id": "other", "text": "x"}}))
            self.incoming.append(self._text({"type": "message", "message": stored}))
        elif payload["type"] == "clear":
            self.incoming.append(self._text({"type": "clear"}))

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:

    def __init__(self, hub):
        self.hub = hub

    def ws_connect(self, url):
        self.hub.urls.append(url)
        return FakeWebSocket(self.hub)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


def make_chat_client(temp_config, hub, reply_timeout=1):
    return ChatClient(temp_config, session_factory=lambda: FakeSession(hub), reply_timeout=reply_timeout)


def test_send_message(temp_config):
    """Sending waits for the matching echo and reports the hub timestamp."""
    temp_config.set_sender('Kitchen')
    hub = FakeHub()

    result = make_chat_client(temp_config, hub).send_message('dinner is ready')

    assert result == "Sent at 2024-05-01T12:00:00.000Z: dinner is ready"
    assert hub.urls == [temp_config.get_ws_url()]
    sent = hub.sent[0]
    assert sent['type'] == 'message'
    assert sent['message']['sender'] == 'Kitchen'
    assert sent['message']['text'] == 'dinner is ready'
    assert sent['message']['id'].isdigit()


def test_send_message_times_out_without_echo(temp_config):
    hub = FakeHub(echo=False)

    result = make_chat_client(temp_config, hub).send_message('hello')

    assert result == "Error: Timed out waiting for the hub."


def test_fetch_messages_newest_shown(temp_config):
    """Only the newest n messages are shown, oldest of them first."""
    history = [
        {'id': '3', 'text': 'third', 'sender': 'A', 'timestamp': 't3'},
        {'id': '2', 'text': 'second', 'sender': 'B', 'timestamp': 't2'},
        {'id': '1', 'text': 'first', 'sender': 'A', 'timestamp': 't1'},
    ]
    hub = FakeHub(messages=history)

    result = make_chat_client(temp_config, hub).fetch_messages(2)

    assert result.splitlines() == [
        "Showing 2 of 3 message(s):",
        "  [t2] B: second",
        "  [t3] A: third",
    ]
    assert hub.sent == []


def test_clear_messages(temp_config):
    hub = FakeHub(messages=[{'id': '1', 'text': 'x'}])

    result = make_chat_client(temp_config, hub).clear_messages()

    assert result == "Chat history cleared."
    assert hub.sent == [{'type': 'clear'}]


def test_closed_socket_reported(temp_config):
    """A socket closed by the hub is reported as an error."""
    hub = FakeHub()

    class ClosingSession(FakeSession):
        def ws_connect(self, url):
            ws = FakeWebSocket(self.hub)
            ws.incoming = [SimpleNamespace(type=aiohttp.WSMsgType.CLOSED, data=None)]
            return ws

    client = ChatClient(temp_config, session_factory=lambda: ClosingSession(hub), reply_timeout=1)

    assert client.fetch_messages(5) == "Error: Chat socket closed by the hub"


def test_connection_refused_reported(temp_config):

    class RefusingSession(FakeSession):
        def ws_connect(self, url):
            raise aiohttp.ClientConnectionError("refused")

    client = ChatClient(temp_config, session_factory=lambda: RefusingSession(FakeHub()))

    assert client.fetch_messages(5) == "Error: Cannot connect to hub chat socket. Is the hub running?"


@pytest.mark.parametrize('messages,expected', [
    ([], "No messages."),
    ([{'text': 'hi'}], "Showing 1 of 1 message(s):\n  [?] Anonymous: hi"),
])
def test_format_messages_defaults(messages, expected):
    assert format_messages(messages, len(messages)) == expected
