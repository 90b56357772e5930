#!/usr/bin/env python3
"""Integration tests over real WebSocket connections on localhost.

Two engines with in-memory clipboards sync through a relay hub.
Run with: pytest -m integration
"""
from __future__ import annotations

import asyncio
from collections.abc import Callable

import pytest
from websockets.asyncio.server import serve

from conftest import FakeClipboard
from clipsync.config import SyncConfig
from clipsync.engine import SyncEngine
from clipsync.events import ConnectionStatus
from clipsync.server_handler import ClipboardHub

pytestmark = pytest.mark.integration


async def wait_until(condition: Callable[[], bool], timeout: float = 5.0) -> None:
    """Poll condition until it holds or fail after timeout."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not condition():
        if loop.time() > deadline:
            pytest.fail("condition not reached in time")
        await asyncio.sleep(0.02)


def make_engine(port: int, identity: str, clipboard: FakeClipboard) -> SyncEngine:
    """Create an engine with fast timings against the local hub."""
    config = SyncConfig.from_options(
        "127.0.0.1",
        port,
        identity=identity,
        poll_interval=0.02,
        reconnect_delay=0.05,
    )
    return SyncEngine(config, clipboard)


async def test_round_trip_through_hub() -> None:
    """Test content copied on one endpoint appears on the other, and no
    echo bounces back."""
    hub = ClipboardHub("hub")
    async with serve(hub.handle_peer, "127.0.0.1", 0) as server:
        port = server.sockets[0].getsockname()[1]
        phone_clipboard = FakeClipboard()
        desk_clipboard = FakeClipboard()
        phone = make_engine(port, "phone", phone_clipboard)
        desk = make_engine(port, "desk", desk_clipboard)
        phone.start()
        desk.start()
        try:
            await wait_until(lambda: len(hub.peers) == 2)
            await wait_until(
                lambda: phone.status is desk.status is ConnectionStatus.CONNECTED
            )
            phone_clipboard.content = "from phone"
            await wait_until(lambda: desk_clipboard.content == "from phone")
            await wait_until(lambda: not desk.state.snapshot.originated_remotely)

            desk_clipboard.content = "from desk"
            await wait_until(lambda: phone_clipboard.content == "from desk")
            await asyncio.sleep(0.2)

            assert phone_clipboard.content == "from desk"
            assert desk_clipboard.content == "from desk"
            assert phone_clipboard.writes.count("from desk") == 1
        finally:
            await phone.stop()
            await desk.stop()


async def test_reconnects_after_hub_restart() -> None:
    """Test an endpoint returns to CONNECTED after the hub comes back."""
    hub = ClipboardHub("hub")
    server = await serve(hub.handle_peer, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    engine = make_engine(port, "phone", FakeClipboard("A"))
    engine.start()
    try:
        await wait_until(lambda: engine.status is ConnectionStatus.CONNECTED)
        server.close()
        await server.wait_closed()
        await wait_until(lambda: engine.status is ConnectionStatus.CONNECTING)

        server = await serve(hub.handle_peer, "127.0.0.1", port)
        await wait_until(lambda: engine.status is ConnectionStatus.CONNECTED)
    finally:
        await engine.stop()
        server.close()
        await server.wait_closed()
