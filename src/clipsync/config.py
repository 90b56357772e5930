#!/usr/bin/env python3
"""Endpoint configuration and server address validation.

Addresses are validated before the engine makes any connection attempt so
that a bad address fails the start request instead of entering the
reconnect loop.
"""

from __future__ import annotations

import platform
import uuid
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from clipsync.constants import (
    CONNECT_TIMEOUT,
    DEFAULT_PORT,
    DEFAULT_SCHEME,
    POLL_INTERVAL,
    RECONNECT_DELAY,
)
from clipsync.errors import ConfigurationError

SUPPORTED_SCHEMES = ("ws", "wss")


def default_identity() -> str:
    """Return an endpoint tag unique to this process."""
    node = platform.node() or "clipsync"
    return f"{node}-{uuid.uuid4().hex[:8]}"


def coerce_port(port: int | str | None) -> int:
    """Convert a port option to an int.

    Non-numeric strings fall back to DEFAULT_PORT, like a settings screen
    left with garbage in the port field.

    Raises:
        ConfigurationError: If the port is outside 1..65535.
    """
    if port is None or port == "":
        return DEFAULT_PORT
    if isinstance(port, str):
        try:
            port = int(port.strip())
        except ValueError:
            return DEFAULT_PORT
    if not 0 < port < 65536:
        raise ConfigurationError(f"Port out of range: {port}")
    return port


def build_server_url(address: str, port: int | str | None = None) -> str:
    """Normalize a server address to a WebSocket URL.

    Accepts a bare host ("192.168.1.10"), host:port, or a full ws:// or
    wss:// URL. An explicit port in the address wins over the port
    argument.

    Args:
        address: Host, host:port, or URL of the peer.
        port: Port used when the address does not carry one.

    Returns:
        URL of the form scheme://host:port.

    Raises:
        ConfigurationError: On an empty address, unsupported scheme,
            missing host, or invalid port.
    """
    address = (address or "").strip()
    if not address:
        raise ConfigurationError("Server address must not be empty")

    if "://" not in address:
        address = f"{DEFAULT_SCHEME}://{address}"
    parts = urlsplit(address)
    if parts.scheme not in SUPPORTED_SCHEMES:
        raise ConfigurationError(f"Unsupported scheme: {parts.scheme!r}")
    if not parts.hostname:
        raise ConfigurationError(f"Missing host in address: {address!r}")
    try:
        explicit_port = parts.port
    except ValueError as e:
        raise ConfigurationError(f"Invalid port in address {address!r}") from e

    resolved = explicit_port if explicit_port is not None else coerce_port(port)
    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    return f"{parts.scheme}://{host}:{resolved}{parts.path}"


@dataclass(frozen=True)
class SyncConfig:
    """Settings for one sync engine.

    Attributes:
        url: Normalized WebSocket URL of the peer.
        identity: Endpoint tag written into every outbound frame.
        poll_interval: Seconds between change detector ticks.
        reconnect_delay: Fixed delay before each reconnection attempt.
        connect_timeout: Seconds allowed for the opening handshake.
    """

    url: str
    identity: str = field(default_factory=default_identity)
    poll_interval: float = POLL_INTERVAL
    reconnect_delay: float = RECONNECT_DELAY
    connect_timeout: float = CONNECT_TIMEOUT

    def __post_init__(self) -> None:
        if not self.identity:
            raise ConfigurationError("Identity tag must not be empty")
        for name in ("poll_interval", "reconnect_delay", "connect_timeout"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive")

    @classmethod
    def from_options(
        cls,
        address: str,
        port: int | str | None = None,
        identity: str | None = None,
        poll_interval: float = POLL_INTERVAL,
        reconnect_delay: float = RECONNECT_DELAY,
    ) -> SyncConfig:
        """Build a validated config from user-facing options.

        Raises:
            ConfigurationError: If any option is invalid.
        """
        return cls(
            url=build_server_url(address, port),
            identity=identity or default_identity(),
            poll_interval=poll_interval,
            reconnect_delay=reconnect_delay,
        )
