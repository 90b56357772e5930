#!/usr/bin/env python3
"""Relay hub server mode for clipsync.

The server listens for WebSocket peers on host:port (default
0.0.0.0:8765) and relays clipboard frames between them. Unless started
with --no-clipboard, it also syncs the local desktop clipboard, which
makes it the natural counterpart of a mobile endpoint.

Usage:
    clipsync --server [--host HOST] [--port PORT] [--no-clipboard]
"""

from __future__ import annotations

import asyncio
import logging
import signal
import socket
import sys
from contextlib import suppress

from websockets.asyncio.server import serve

from clipsync.change_detector import ChangeDetector
from clipsync.clipboard import PyperclipClipboard
from clipsync.constants import POLL_INTERVAL
from clipsync.server_handler import ClipboardHub
from clipsync.sync_state import ClipboardState

logger = logging.getLogger(__name__)


def local_addresses() -> list[str]:
    """Return IPv4 addresses peers can likely reach this machine on."""
    hostname = socket.gethostname()
    try:
        addresses = socket.gethostbyname_ex(hostname)[2]
    except OSError:
        return []
    return sorted({a for a in addresses if not a.startswith("127.")})


def print_startup_message(host: str, port: int) -> None:
    """Print listening address and a connect hint to stderr.

    Args:
        host: Address the server is bound to.
        port: Port the server is bound to.
    """
    print(f"Listening on ws://{host}:{port}", file=sys.stderr)
    for address in local_addresses():
        print(f"Connect peers with: clipsync --connect {address} --port {port}",
            file=sys.stderr)


async def run_server(
    host: str,
    port: int,
    identity: str,
    use_clipboard: bool = True,
    interval: float = POLL_INTERVAL,
) -> None:
    """Run the relay hub until SIGINT or SIGTERM.

    Args:
        host: Address to bind.
        port: Port to bind.
        identity: Source tag for frames originating at the hub.
        use_clipboard: Whether the hub syncs the local clipboard.
        interval: Seconds between local clipboard ticks.

    Raises:
        OSError: If the address cannot be bound.
    """
    state = ClipboardState(provider=PyperclipClipboard()) if use_clipboard else None
    hub = ClipboardHub(identity, state)

    shutdown_requested = asyncio.Event()
    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGINT, shutdown_requested.set)
    loop.add_signal_handler(signal.SIGTERM, shutdown_requested.set)

    async with serve(hub.handle_peer, host, port):
        print_startup_message(host, port)
        detector_task = None
        detector = None
        if state is not None:
            detector = ChangeDetector(state, hub.on_local_change, interval=interval)
            detector_task = asyncio.create_task(detector.run(), name="clipsync-detector")
        try:
            await shutdown_requested.wait()
        finally:
            logger.debug("Shutting down relay hub")
            if detector is not None and detector_task is not None:
                detector.stop()
                detector_task.cancel()
                with suppress(asyncio.CancelledError):
                    await detector_task
