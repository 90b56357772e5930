#!/usr/bin/env python3
"""Sync coordinator: the only component that touches both the clipboard
and the session.

Local changes go out while connected and are dropped otherwise; there is
no queue, since the bootstrap push on the next connect converges the peer
to whatever the clipboard holds by then. Remote changes are applied with
the echo suppression flag set before the clipboard write.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from clipsync.errors import TransportError
from clipsync.events import ConnectionStatus
from clipsync.protocol import preview, validate_content_size
from clipsync.sync_handlers import apply_remote_content, read_local_content

if TYPE_CHECKING:
    from collections.abc import Callable

    from clipsync.events import LocalChange, RemoteChange
    from clipsync.session import SyncSession
    from clipsync.sync_state import ClipboardState

logger = logging.getLogger(__name__)


class SyncCoordinator:
    """Route events between the change detector, session and clipboard."""

    def __init__(
        self,
        state: ClipboardState,
        session: SyncSession,
        status: Callable[[], ConnectionStatus],
    ) -> None:
        """Initialize the coordinator.

        Args:
            state: Shared clipboard state.
            session: Session used for outbound frames.
            status: Returns the current connection status.
        """
        self._state = state
        self._session = session
        self._status = status
        self._send_lock = asyncio.Lock()

    async def on_local_change(self, event: LocalChange) -> None:
        """Send a local change if connected, otherwise drop it."""
        if self._status() is not ConnectionStatus.CONNECTED:
            logger.debug("Not connected, dropping local change: %s", preview(event.content))
            return
        await self._send(event.content)

    async def on_remote_change(self, event: RemoteChange) -> None:
        """Apply content from the peer to the local clipboard."""
        await apply_remote_content(self._state, event.content)

    async def bootstrap(self) -> None:
        """Push the current clipboard once after a successful connect."""
        content = await read_local_content(self._state)
        if not content:
            logger.debug("Clipboard empty, nothing to push on connect")
            return
        logger.debug("Bootstrap push: %s", preview(content))
        await self._send(content)

    async def _send(self, content: str) -> None:
        """Send content; transport failures are left to the reconnect loop."""
        if not validate_content_size(content):
            logger.warning("Clipboard content exceeds 10 MB limit, skipping")
            return
        async with self._send_lock:
            try:
                await self._session.send(content)
            except TransportError as e:
                logger.warning("Send failed, dropping update: %s", e)
