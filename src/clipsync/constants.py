#!/usr/bin/env python3
"""Timing and network defaults for clipsync.

These values mirror the reference endpoint: the clipboard is polled twice
per second and a lost connection is retried every five seconds.
"""

# Seconds between change detector ticks.
POLL_INTERVAL: float = 0.5

# Fixed delay in seconds before each reconnection attempt.
RECONNECT_DELAY: float = 5.0

# Seconds allowed for the WebSocket opening handshake.
CONNECT_TIMEOUT: float = 10.0

# Seconds to wait for the closing handshake on teardown.
CLOSE_TIMEOUT: float = 2.0

# Default server port and scheme.
DEFAULT_PORT: int = 8765
DEFAULT_SCHEME: str = "ws"

# Address the relay hub binds to by default.
DEFAULT_LISTEN_HOST: str = "0.0.0.0"

# Characters of clipboard content included in log lines.
PREVIEW_LENGTH: int = 50
