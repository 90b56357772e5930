#!/usr/bin/env python3
"""Client mode implementation for clipsync.

This module provides the entry point for endpoint mode, which connects to
a peer or relay hub and keeps the local desktop clipboard in sync with it
until interrupted.

See engine.py for the component wiring.
"""

from __future__ import annotations

import asyncio
import signal
from typing import TYPE_CHECKING

from clipsync.clipboard import PyperclipClipboard
from clipsync.engine import SyncEngine
from clipsync.status import StatusPrinter

if TYPE_CHECKING:
    from clipsync.config import SyncConfig


async def run_client(config: SyncConfig) -> None:
    """Run an endpoint until SIGINT or SIGTERM.

    Args:
        config: Validated endpoint configuration.
    """
    engine = SyncEngine(config, PyperclipClipboard(), StatusPrinter(config.url))

    # Register signal handlers for clean shutdown
    shutdown_requested = asyncio.Event()
    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGINT, shutdown_requested.set)
    loop.add_signal_handler(signal.SIGTERM, shutdown_requested.set)

    engine.start()
    try:
        await shutdown_requested.wait()
    finally:
        await engine.stop()
