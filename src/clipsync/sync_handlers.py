#!/usr/bin/env python3
"""Clipboard synchronization handlers.

This module provides the lock-protected clipboard operations shared by the
change detector, the sync coordinator and the relay hub:
- detect_local_change: one detector tick
- apply_remote_content: write peer content with echo suppression
- read_local_content: read current content for a bootstrap push
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from clipsync.errors import ClipboardAccessError
from clipsync.events import LocalChange
from clipsync.protocol import preview

if TYPE_CHECKING:
    from clipsync.sync_state import ClipboardState

logger = logging.getLogger(__name__)


async def _read_clipboard(state: ClipboardState) -> str | None:
    """Read the provider off the event loop; failures read as None."""
    try:
        return await asyncio.to_thread(state.provider.read)
    except ClipboardAccessError as e:
        logger.warning("Clipboard read failed: %s", e)
        return None
    except Exception as e:
        logger.warning("Clipboard read failed unexpectedly: %r", e)
        return None


async def detect_local_change(state: ClipboardState) -> LocalChange | None:
    """Compare the clipboard against the last known content.

    Args:
        state: The shared clipboard state.

    Returns:
        LocalChange for a genuine local edit, or None when the clipboard is
        unchanged, unreadable, or inside the echo suppression window.
    """
    async with state.lock:
        suppressed = state.snapshot.originated_remotely
        current = await _read_clipboard(state)
        changed = state.snapshot.observe(current)

    if changed:
        logger.debug("Local change detected: %s", preview(current))
        return LocalChange(current)
    if suppressed and current is not None:
        logger.debug("Swallowed read-back of remote content")
    return None


async def apply_remote_content(state: ClipboardState, content: str) -> bool:
    """Write content received from a peer to the local clipboard.

    Marks the snapshot BEFORE writing, under the same lock the detector
    tick takes, so the tick that follows cannot see the write without
    also seeing the suppression flag.

    Args:
        state: The shared clipboard state.
        content: Text received from the peer.

    Returns:
        True if the clipboard was written.
    """
    async with state.lock:
        state.snapshot.mark_remote(content)
        try:
            await asyncio.to_thread(state.provider.write, content)
        except ClipboardAccessError as e:
            logger.error("Failed to apply remote content: %s", e)
            return False
        except Exception as e:
            logger.error("Failed to apply remote content unexpectedly: %r", e)
            return False

    logger.debug("Applied remote content: %s", preview(content))
    return True


async def read_local_content(state: ClipboardState) -> str | None:
    """Read current clipboard text for a bootstrap push.

    The snapshot adopts the text so the next tick does not report the
    same content a second time.

    Args:
        state: The shared clipboard state.

    Returns:
        Current clipboard text, or None if empty or unreadable.
    """
    async with state.lock:
        current = await _read_clipboard(state)
        if current is not None:
            state.snapshot.content = current
    return current
