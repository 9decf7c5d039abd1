"""
Shared fakes: a replaying WebSocket connection and a mocked conversation endpoint.
"""

import asyncio
import json

import httpx
import pytest

from app.services.copilot_client import CopilotSession


class FakeWebSocket:
    """Async-iterable connection that replays frames, then optionally hangs or raises."""

    def __init__(self, frames: list, close_exc: Exception | None = None, hang: bool = False) -> None:
        self.frames = list(frames)
        self.close_exc = close_exc
        self.hang = hang
        self.sent: list[dict] = []
        self.closed = False

    async def send(self, data: str) -> None:
        self.sent.append(json.loads(data))

    async def close(self) -> None:
        self.closed = True

    async def __aenter__(self) -> "FakeWebSocket":
        return self

    async def __aexit__(self, *exc) -> bool:
        self.closed = True
        return False

    def __aiter__(self):
        return self._frames()

    async def _frames(self):
        for frame in self.frames:
            yield frame if isinstance(frame, str) else json.dumps(frame)
        if self.hang:
            await asyncio.sleep(60)
        if self.close_exc is not None:
            raise self.close_exc


class FakeConnect:
    """Stand-in for websockets.connect; records calls."""

    def __init__(self, ws: FakeWebSocket | None = None, exc: Exception | None = None) -> None:
        self.ws = ws
        self.exc = exc
        self.calls: list[tuple[str, dict]] = []

    def __call__(self, url: str, **kwargs):
        self.calls.append((url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.ws


def conversation_transport(calls: list, status: int = 200, body=None) -> httpx.MockTransport:
    """Mock conversation endpoint. Records requests into ``calls``."""

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        payload = {"id": "conv-123"} if body is None else body
        return httpx.Response(status, json=payload)

    return httpx.MockTransport(handler)


@pytest.fixture
def make_session():
    """
    Factory: make_session(frames, connect_exc=None, status=200, body=None, **ws_kwargs)
    -> (session, connect, http_calls).
    """

    def factory(frames=None, connect_exc=None, status=200, body=None, **ws_kwargs):
        calls: list = []
        connect = FakeConnect(FakeWebSocket(frames or [], **ws_kwargs), exc=connect_exc)
        session = CopilotSession(
            base_url="https://copilot.test",
            ws_url="wss://copilot.test/c/api/chat",
            transport=conversation_transport(calls, status=status, body=body),
            ws_connect=connect,
        )
        return session, connect, calls

    return factory
