#!/usr/bin/env python3
"""Periodic clipboard change detection.

Clipboard providers do not notify on change, so the detector polls: one
tick per interval compares the clipboard with the last known content and
hands genuine local edits to a callback.
"""

from __future__ import annotations

import asyncio
from contextlib import suppress
from typing import TYPE_CHECKING

from clipsync.constants import POLL_INTERVAL
from clipsync.sync_handlers import detect_local_change

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from clipsync.events import LocalChange
    from clipsync.sync_state import ClipboardState


class ChangeDetector:
    """Poll the clipboard and report local changes.

    Attributes:
        ticks: Number of completed ticks.
    """

    def __init__(
        self,
        state: ClipboardState,
        on_change: Callable[[LocalChange], Awaitable[None]],
        interval: float = POLL_INTERVAL,
    ) -> None:
        self._state = state
        self._on_change = on_change
        self._interval = interval
        self._stop_event = asyncio.Event()
        self.ticks = 0

    async def tick(self) -> LocalChange | None:
        """Run one detection pass and deliver any change.

        Returns:
            The LocalChange delivered, or None.
        """
        change = await detect_local_change(self._state)
        self.ticks += 1
        if change is not None:
            await self._on_change(change)
        return change

    async def run(self) -> None:
        """Tick every interval until stop() is called."""
        self._stop_event.clear()
        while not self._stop_event.is_set():
            await self.tick()
            with suppress(asyncio.TimeoutError):
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)

    def stop(self) -> None:
        """Ask run() to return after the current tick."""
        self._stop_event.set()
