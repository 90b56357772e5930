#!/usr/bin/env python3
"""Relay hub connection handler.

The hub accepts any number of peers. Every clipboard frame received from
one peer is forwarded unchanged to all others. When the hub has a local
clipboard it also takes part as an endpoint: received content is applied
locally with echo suppression, local edits are broadcast tagged with the
hub's identity, and each new peer gets the current content on connect.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from websockets.asyncio.server import broadcast
from websockets.exceptions import ConnectionClosed

from clipsync.protocol import SyncMessage, encode_message, parse_frame, preview
from clipsync.sync_handlers import apply_remote_content, read_local_content

if TYPE_CHECKING:
    from websockets.asyncio.server import ServerConnection

    from clipsync.events import LocalChange
    from clipsync.sync_state import ClipboardState

logger = logging.getLogger(__name__)


def _describe(ws: ServerConnection) -> str:
    """Return host:port of the remote end for log lines."""
    address = ws.remote_address
    if not address:
        return "unknown peer"
    return f"{address[0]}:{address[1]}"


class ClipboardHub:
    """Fan clipboard frames out between connected peers.

    Attributes:
        identity: Source tag used for frames originating at the hub.
        state: Local clipboard state, or None for a pure relay.
        peers: Currently connected peers.
    """

    def __init__(self, identity: str, state: ClipboardState | None = None) -> None:
        self.identity = identity
        self.state = state
        self.peers: set[ServerConnection] = set()

    async def handle_peer(self, ws: ServerConnection) -> None:
        """Serve one peer until it disconnects.

        Args:
            ws: The accepted WebSocket connection.
        """
        peer = _describe(ws)
        self.peers.add(ws)
        logger.info("Peer connected: %s (%d connected)", peer, len(self.peers))
        try:
            await self._bootstrap(ws)
            async for frame in ws:
                await self._relay(ws, frame)
        except ConnectionClosed as e:
            logger.info("Peer %s connection lost: %s", peer, e)
        finally:
            self.peers.discard(ws)
            logger.info("Peer disconnected: %s (%d connected)", peer, len(self.peers))

    async def on_local_change(self, event: LocalChange) -> None:
        """Broadcast a local clipboard edit to every peer."""
        if not self.peers:
            logger.debug("No peers, dropping local change: %s", preview(event.content))
            return
        frame = encode_message(SyncMessage(content=event.content, source=self.identity))
        broadcast(set(self.peers), frame)

    async def _relay(self, sender: ServerConnection, frame: str | bytes) -> None:
        """Forward a valid clipboard frame and apply it locally."""
        message = parse_frame(frame)
        if message is None:
            return
        if message.source == self.identity:
            logger.debug("Dropping frame tagged with hub identity")
            return

        others = self.peers - {sender}
        if others:
            broadcast(others, encode_message(message))
        logger.debug(
            "Relayed from %s to %d peers: %s",
            message.source,
            len(others),
            preview(message.content),
        )
        if self.state is not None:
            await apply_remote_content(self.state, message.content)

    async def _bootstrap(self, ws: ServerConnection) -> None:
        """Send the hub's current clipboard to a newly connected peer."""
        if self.state is None:
            return
        content = await read_local_content(self.state)
        if not content:
            return
        await ws.send(encode_message(SyncMessage(content=content, source=self.identity)))
