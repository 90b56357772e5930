"""Status sinks for user-visible connection state."""

from __future__ import annotations

from typing import Protocol

import click

from clipsync.events import ConnectionStatus

_MESSAGES = {
    ConnectionStatus.CONNECTING: "Connecting to {target}...",
    ConnectionStatus.CONNECTED: "Connected to {target}",
    ConnectionStatus.DISCONNECTED: "Disconnected from {target}",
}


class StatusSink(Protocol):
    """Receiver of connection status transitions.

    Calls are fire-and-forget; exceptions are logged and ignored.
    """

    def on_status_change(self, status: ConnectionStatus) -> None: ...


class StatusPrinter:
    """Echo status transitions to stderr."""

    def __init__(self, target: str) -> None:
        self.target = target

    def on_status_change(self, status: ConnectionStatus) -> None:
        click.echo(_MESSAGES[status].format(target=self.target), err=True)
