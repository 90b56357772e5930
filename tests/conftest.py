#!/usr/bin/env python3
"""Pytest fixtures for clipsync tests.

Provides an in-memory clipboard provider, a fake WebSocket connection,
and a scripted fake session so no real clipboard or network is needed.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

import pytest
from websockets.exceptions import ConnectionClosed

from clipsync.errors import ClipboardAccessError
from clipsync.sync_state import ClipboardState


class FakeClipboard:
    """In-memory ClipboardProvider recording every write."""

    def __init__(self, content: str | None = None) -> None:
        self.content = content
        self.writes: list[str] = []
        self.fail_reads = False
        self.fail_writes = False
        self.read_error: Exception | None = None
        self.write_error: Exception | None = None
        self.on_write = None

    def read(self) -> str | None:
        if self.fail_reads:
            raise ClipboardAccessError("clipboard unavailable")
        if self.read_error is not None:
            raise self.read_error
        return self.content

    def write(self, content: str) -> None:
        if self.fail_writes:
            raise ClipboardAccessError("clipboard unavailable")
        if self.write_error is not None:
            raise self.write_error
        if self.on_write is not None:
            self.on_write(content)
        self.writes.append(content)
        self.content = content


class FakeConnection:
    """Stand-in for a websockets connection.

    Frames fed with feed() are returned by async iteration; finish() or
    close() ends the iteration.
    """

    def __init__(self, frames: Iterable[str | bytes] = ()) -> None:
        self.sent: list[str] = []
        self.closed = False
        self.remote_address = ("10.0.0.2", 50000)
        self._incoming: asyncio.Queue[str | bytes | None] = asyncio.Queue()
        for frame in frames:
            self.feed(frame)

    def feed(self, frame: str | bytes) -> None:
        self._incoming.put_nowait(frame)

    def finish(self) -> None:
        self._incoming.put_nowait(None)

    async def send(self, frame: str) -> None:
        if self.closed:
            raise ConnectionClosed(None, None)
        self.sent.append(frame)

    async def close(self) -> None:
        self.closed = True
        self.finish()

    def __aiter__(self) -> FakeConnection:
        return self

    async def __anext__(self) -> str | bytes:
        frame = await self._incoming.get()
        if frame is None:
            raise StopAsyncIteration
        return frame


class FakeSession:
    """Scripted SyncSession.

    Each connect() consumes one outcome: an exception to raise, or a list
    of events to yield from events().
    """

    def __init__(self, outcomes: Iterable[BaseException | list]) -> None:
        self._outcomes = list(outcomes)
        self._events: list = []
        self.connects = 0
        self.disconnects = 0
        self.sent: list[str] = []
        self.connected = False

    async def connect(self, url: str) -> None:
        self.connects += 1
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        self._events = outcome
        self.connected = True

    async def send(self, content: str) -> None:
        self.sent.append(content)

    async def events(self):
        for event in self._events:
            yield event

    async def disconnect(self) -> None:
        self.disconnects += 1
        self.connected = False


class StatusRecorder:
    """StatusSink collecting every transition."""

    def __init__(self) -> None:
        self.statuses: list = []

    def on_status_change(self, status) -> None:
        self.statuses.append(status)


@pytest.fixture
def clipboard() -> FakeClipboard:
    """Create an empty in-memory clipboard."""
    return FakeClipboard()


@pytest.fixture
def clipboard_state(clipboard: FakeClipboard) -> ClipboardState:
    """Create a ClipboardState around the in-memory clipboard."""
    return ClipboardState(provider=clipboard)


@pytest.fixture
def status_recorder() -> StatusRecorder:
    """Create a recording status sink."""
    return StatusRecorder()
