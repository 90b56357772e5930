#!/usr/bin/env python3
"""Error taxonomy for clipsync.

Every error carries an ErrorKind so callers can tell the three recovery
policies apart:
- TRANSPORT: recovered by the reconnection controller
- CLIPBOARD_ACCESS: logged and skipped for the current tick
- CONFIGURATION: surfaced to the caller before any connection attempt
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Category of a clipsync failure."""

    TRANSPORT = "transport"
    CLIPBOARD_ACCESS = "clipboard_access"
    CONFIGURATION = "configuration"


class ClipsyncError(Exception):
    """Base class for all clipsync errors."""

    kind: ErrorKind


class TransportError(ClipsyncError, ConnectionError):
    """Connection refused, lost, or unusable."""

    kind = ErrorKind.TRANSPORT


class NotConnectedError(TransportError):
    """Raised by send() when the session has no live connection."""


class ClipboardAccessError(ClipsyncError):
    """The clipboard provider failed to read or write."""

    kind = ErrorKind.CLIPBOARD_ACCESS


class ConfigurationError(ClipsyncError, ValueError):
    """Invalid server address, port, or timing option."""

    kind = ErrorKind.CONFIGURATION
