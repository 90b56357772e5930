"""CLI handling for clipsync.

This module provides the command-line interface for clipsync, handling
argument parsing via click, logging configuration, and dispatching to
endpoint or relay hub mode.

Usage:
    clipsync --connect ADDRESS [--port PORT] [--identity TAG] [--verbose]
    clipsync --server [--host HOST] [--port PORT] [--no-clipboard] [--verbose]
"""

import sys

import click

from clipsync.constants import DEFAULT_LISTEN_HOST, DEFAULT_PORT, POLL_INTERVAL, RECONNECT_DELAY
from clipsync.main_logging import configure_logging
from clipsync.main_options import MutuallyExclusiveOption


@click.command()
@click.option(
    "--connect",
    "address",
    cls=MutuallyExclusiveOption,
    exclusive_with=["server"],
    envvar="CLIPSYNC_SERVER",
    help="Peer or hub to sync with: host, host:port or ws://host:port",
)
@click.option(
    "--server",
    is_flag=True,
    cls=MutuallyExclusiveOption,
    exclusive_with=["address"],
    help="Run a relay hub that peers connect to",
)
@click.option(
    "--port",
    type=str,
    envvar="CLIPSYNC_PORT",
    help=f"Server port (default {DEFAULT_PORT})",
)
@click.option(
    "--host",
    default=DEFAULT_LISTEN_HOST,
    show_default=True,
    help="Address the relay hub binds to",
)
@click.option(
    "--identity",
    envvar="CLIPSYNC_IDENTITY",
    help="Endpoint tag used to recognise our own frames (default: hostname-random)",
)
@click.option(
    "--interval",
    type=float,
    default=POLL_INTERVAL,
    show_default=True,
    help="Seconds between clipboard checks",
)
@click.option(
    "--reconnect-delay",
    type=float,
    default=RECONNECT_DELAY,
    show_default=True,
    help="Seconds to wait before reconnecting",
)
@click.option(
    "--no-clipboard",
    is_flag=True,
    help="Relay hub only: forward frames without touching the local clipboard",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Enable DEBUG-level logging",
)
def main(
    address: str | None,
    server: bool,
    port: str | None,
    host: str,
    identity: str | None,
    interval: float,
    reconnect_delay: float,
    no_clipboard: bool,
    verbose: bool,
) -> None:
    """Keep the text clipboard in sync with peers over WebSocket."""
    if not server and not address:
        raise click.UsageError("Either --connect or --server must be specified")

    configure_logging(verbose)

    if server:
        _run_server(host, port, identity, not no_clipboard, interval)
    else:
        _run_client(address, port, identity, interval, reconnect_delay)


def _run_client(
    address: str, port: str | None, identity: str | None, interval: float, reconnect_delay: float
) -> None:
    """Validate options and run endpoint mode.

    Configuration errors are reported before any connection attempt.
    """
    import asyncio

    from clipsync.client import run_client
    from clipsync.config import SyncConfig
    from clipsync.errors import ConfigurationError

    try:
        config = SyncConfig.from_options(
            address,
            port,
            identity=identity,
            poll_interval=interval,
            reconnect_delay=reconnect_delay,
        )
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    asyncio.run(run_client(config))


def _run_server(
    host: str, port: str | None, identity: str | None, use_clipboard: bool, interval: float
) -> None:
    """Run relay hub mode.

    Args:
        host: Address to bind.
        port: Port to bind; unset or non-numeric means DEFAULT_PORT.
        identity: Hub source tag, or None for a generated one.
        use_clipboard: Whether the hub syncs the local clipboard.
        interval: Seconds between local clipboard checks.
    """
    import asyncio

    from clipsync.config import coerce_port, default_identity
    from clipsync.errors import ConfigurationError
    from clipsync.server import run_server

    try:
        port = coerce_port(port)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    if interval <= 0:
        click.echo("Error: interval must be positive", err=True)
        sys.exit(1)

    try:
        asyncio.run(run_server(host, port, identity or default_identity(), use_clipboard, interval))
    except OSError as e:
        click.echo(f"Error: Cannot listen on {host}:{port}: {e}", err=True)
        sys.exit(1)
