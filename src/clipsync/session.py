#!/usr/bin/env python3
"""Sync session: one WebSocket connection to a peer.

The session owns the wire protocol. It turns clipboard text into tagged
frames on send, and turns inbound frames into a stream of RemoteChange
events terminated by a single Closed event. Malformed frames, frames of
other types, and our own sends bouncing back are dropped here.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

from websockets.asyncio.client import connect
from websockets.exceptions import ConnectionClosed, InvalidURI, WebSocketException

from clipsync.constants import CLOSE_TIMEOUT, CONNECT_TIMEOUT
from clipsync.errors import NotConnectedError, TransportError
from clipsync.events import Closed, RemoteChange
from clipsync.hashing import SentHashState, compute_hash
from clipsync.protocol import SyncMessage, encode_message, parse_frame, preview

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from websockets.asyncio.client import ClientConnection

    from clipsync.events import SessionEvent

logger = logging.getLogger(__name__)


class SyncSession:
    """A single peer connection carrying clipboard frames.

    At most one connection attempt and at most one live connection exist
    per instance. A session may be reconnected after its previous
    connection closed.

    Attributes:
        identity: Endpoint tag written into the source field of every frame.
        hash_state: Hash of the last content sent, for the echo filter.
    """

    def __init__(self, identity: str, connect_timeout: float = CONNECT_TIMEOUT) -> None:
        self.identity = identity
        self.hash_state = SentHashState()
        self._connect_timeout = connect_timeout
        self._ws: ClientConnection | None = None
        self._connecting = False
        self._closing = False

    @property
    def connected(self) -> bool:
        """True while a live connection exists and no close was requested."""
        return self._ws is not None and not self._closing

    async def connect(self, url: str) -> None:
        """Open a connection to the peer at url.

        Clears the echo filter so content sent over a previous connection
        is not held against the new peer.

        Args:
            url: WebSocket URL, e.g. ws://192.168.1.10:8765.

        Raises:
            TransportError: On a malformed address, a refused or timed out
                connection, a failed handshake, or when a connection or
                attempt already exists.
        """
        if self._connecting or self._ws is not None:
            raise TransportError("Session already has a connection or attempt in progress")

        self._connecting = True
        self.hash_state.clear()
        try:
            self._ws = await connect(
                url,
                open_timeout=self._connect_timeout,
                close_timeout=CLOSE_TIMEOUT,
            )
        except InvalidURI as e:
            raise TransportError(f"Malformed address {url}: {e}") from e
        except (OSError, asyncio.TimeoutError, WebSocketException) as e:
            raise TransportError(f"Failed to connect to {url}: {e}") from e
        finally:
            self._connecting = False
        self._closing = False
        logger.debug("Connected to %s", url)

    async def send(self, content: str) -> None:
        """Transmit content as one clipboard frame.

        Args:
            content: Clipboard text.

        Raises:
            NotConnectedError: If there is no live connection; nothing is
                transmitted.
            TransportError: If the connection closed during the send.
        """
        ws = self._ws
        if ws is None or self._closing:
            raise NotConnectedError("Cannot send: not connected")

        frame = encode_message(SyncMessage(content=content, source=self.identity))
        try:
            await ws.send(frame)
        except ConnectionClosed as e:
            raise TransportError(f"Send failed: {e}") from e
        self.hash_state.record_sent(compute_hash(content))
        logger.debug("Sent: %s", preview(content))

    async def events(self) -> AsyncIterator[SessionEvent]:
        """Yield RemoteChange events until the connection ends, then Closed.

        Raises:
            NotConnectedError: If called without a live connection.
        """
        ws = self._ws
        if ws is None:
            raise NotConnectedError("Cannot receive: not connected")

        reason = "closed by peer"
        try:
            async for frame in ws:
                change = self._accept(frame)
                if change is not None:
                    yield change
        except ConnectionClosed as e:
            reason = f"connection lost: {e}"
        finally:
            if self._ws is ws:
                self._ws = None

        by_peer = not self._closing
        if not by_peer:
            reason = "disconnected locally"
        self._closing = False
        logger.debug("Session closed: %s", reason)
        yield Closed(reason=reason, by_peer=by_peer)

    async def disconnect(self) -> None:
        """Close the live connection, if any, without draining sends."""
        ws = self._ws
        if ws is None:
            return
        self._closing = True
        self._ws = None
        with contextlib.suppress(WebSocketException, OSError):
            await ws.close()

    def _accept(self, frame: str | bytes) -> RemoteChange | None:
        """Filter one inbound frame.

        Args:
            frame: Raw frame from the connection.

        Returns:
            RemoteChange for foreign clipboard content, None otherwise.
        """
        message = parse_frame(frame)
        if message is None:
            return None
        if message.source == self.identity:
            logger.debug("Dropping frame tagged with our own identity")
            return None
        if self.hash_state.is_echo(compute_hash(message.content)):
            logger.debug("Dropping echo of content we sent")
            return None
        # Newer foreign content supersedes what we last sent.
        self.hash_state.clear()
        logger.debug("Received from %s: %s", message.source, preview(message.content))
        return RemoteChange(message.content)
