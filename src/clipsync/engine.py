#!/usr/bin/env python3
"""Sync engine: one handle that owns a complete endpoint.

The engine wires a ChangeDetector, SyncSession, ReconnectionController and
SyncCoordinator around one clipboard provider. Its creator owns the
lifecycle through start() and stop(); nothing is shared between engines.

Usage:
    config = SyncConfig.from_options("192.168.1.10", 8765)
    engine = SyncEngine(config, PyperclipClipboard())
    engine.start()
    ...
    await engine.stop()
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import TYPE_CHECKING

from clipsync.change_detector import ChangeDetector
from clipsync.client_retry import ReconnectionController
from clipsync.coordinator import SyncCoordinator
from clipsync.session import SyncSession
from clipsync.sync_state import ClipboardState

if TYPE_CHECKING:
    from clipsync.clipboard import ClipboardProvider
    from clipsync.config import SyncConfig
    from clipsync.events import ConnectionStatus
    from clipsync.status import StatusSink

logger = logging.getLogger(__name__)


class SyncEngine:
    """A clipboard sync endpoint connected to one peer.

    An engine runs once: after stop() it stays DISCONNECTED and cannot be
    started again.
    """

    def __init__(
        self,
        config: SyncConfig,
        provider: ClipboardProvider,
        status_sink: StatusSink | None = None,
    ) -> None:
        """Build the engine components.

        Args:
            config: Validated endpoint configuration.
            provider: Clipboard read/write capability.
            status_sink: Optional receiver of status transitions.
        """
        self.config = config
        self.state = ClipboardState(provider=provider)
        self.session = SyncSession(config.identity, connect_timeout=config.connect_timeout)
        self.coordinator = SyncCoordinator(self.state, self.session, lambda: self.status)
        self.controller = ReconnectionController(
            self.session,
            config.url,
            self.coordinator,
            reconnect_delay=config.reconnect_delay,
            status_sink=status_sink,
        )
        self.detector = ChangeDetector(
            self.state,
            self.coordinator.on_local_change,
            interval=config.poll_interval,
        )
        self._detector_task: asyncio.Task[None] | None = None
        self._started = False

    @property
    def status(self) -> ConnectionStatus:
        """Current connection status."""
        return self.controller.status

    @property
    def running(self) -> bool:
        """True between start() and stop()."""
        return self._detector_task is not None

    def start(self) -> None:
        """Start detection and the connection loop.

        Must be called from a running event loop.

        Raises:
            RuntimeError: If the engine was already started.
        """
        if self._started:
            raise RuntimeError("SyncEngine can only be started once")
        self._started = True
        logger.debug("Starting engine %s -> %s", self.config.identity, self.config.url)
        self.controller.start()
        self._detector_task = asyncio.create_task(self.detector.run(), name="clipsync-detector")

    async def stop(self) -> None:
        """Tear everything down without draining in-flight sends."""
        task, self._detector_task = self._detector_task, None
        if task is None:
            return
        self.detector.stop()
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task
        await self.controller.stop()
        logger.debug("Engine stopped")
