#!/usr/bin/env python3
"""Events and status values exchanged between engine components.

The session emits RemoteChange for each accepted inbound frame followed by
exactly one Closed when the connection ends. The change detector emits
LocalChange for genuine local clipboard edits.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ConnectionStatus(Enum):
    """Connection state owned by the reconnection controller."""

    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


@dataclass(frozen=True)
class LocalChange:
    """Clipboard content changed locally."""

    content: str


@dataclass(frozen=True)
class RemoteChange:
    """A peer published new clipboard content."""

    content: str


@dataclass(frozen=True)
class Closed:
    """Terminal session event.

    Attributes:
        reason: Human-readable description of why the connection ended.
        by_peer: False when the close was requested locally via disconnect().
    """

    reason: str
    by_peer: bool = True


SessionEvent = Union[RemoteChange, Closed]
