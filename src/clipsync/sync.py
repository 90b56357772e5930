#!/usr/bin/env python3
"""Bidirectional clipboard synchronization components.

This module re-exports the engine building blocks for convenient imports.
The actual implementations are in:
- sync_state: ClipboardSnapshot, ClipboardState
- sync_handlers: detect_local_change, apply_remote_content, read_local_content
- change_detector, session, client_retry, coordinator, engine
"""

from clipsync.change_detector import ChangeDetector
from clipsync.client_retry import ReconnectionController
from clipsync.coordinator import SyncCoordinator
from clipsync.engine import SyncEngine
from clipsync.session import SyncSession
from clipsync.sync_handlers import apply_remote_content, detect_local_change, read_local_content
from clipsync.sync_state import ClipboardSnapshot, ClipboardState

__all__ = [
    "ChangeDetector",
    "ClipboardSnapshot",
    "ClipboardState",
    "ReconnectionController",
    "SyncCoordinator",
    "SyncEngine",
    "SyncSession",
    "apply_remote_content",
    "detect_local_change",
    "read_local_content",
]
