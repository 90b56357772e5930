#!/usr/bin/env python3
"""Clipboard synchronization state.

This module provides the ClipboardSnapshot that implements the echo
suppression window, and the ClipboardState dataclass that groups it with
the clipboard provider and the lock guarding both.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clipsync.clipboard import ClipboardProvider


@dataclass
class ClipboardSnapshot:
    """Last clipboard state this process is aware of.

    Attributes:
        content: Last known clipboard text, or None before the first read.
        originated_remotely: True from a remote apply until the next
            detector tick; that tick never reports a local change.
    """

    content: str | None = None
    originated_remotely: bool = False

    def observe(self, current: str | None) -> bool:
        """Run one detector tick against freshly read clipboard text.

        The suppression flag is consumed by every tick, so it lasts for
        exactly one tick after a remote apply. A genuine local edit made
        inside that window is absorbed as well.

        Args:
            current: Text just read from the clipboard, or None if the
                read failed or the clipboard was empty.

        Returns:
            True if current is a genuine local change that must be sent.
        """
        suppressed = self.originated_remotely
        self.originated_remotely = False
        if current is None or current == self.content:
            return False
        self.content = current
        return not suppressed

    def mark_remote(self, content: str) -> None:
        """Record content about to be written on behalf of a peer.

        Must be called BEFORE the clipboard write so the next tick
        observes the suppression window.

        Args:
            content: Text received from the peer.
        """
        self.content = content
        self.originated_remotely = True


@dataclass
class ClipboardState:
    """State shared by the change detector and the remote apply path.

    Every read or write of the provider and every snapshot mutation
    happens under lock. Network sends never do.

    Attributes:
        provider: The clipboard read/write capability.
        snapshot: Last known clipboard content and suppression flag.
        lock: Mutual exclusion for provider and snapshot access.
    """

    provider: ClipboardProvider
    snapshot: ClipboardSnapshot = field(default_factory=ClipboardSnapshot)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
