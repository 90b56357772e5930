#!/usr/bin/env python3
"""Reconnection controller for the sync session.

This module supervises the session lifecycle using tenacity: every
connection attempt, and every connection once it ends, is retried after a
fixed delay for as long as the controller runs. Status transitions are
published to an optional status sink.

    CONNECTING --handshake ok--> CONNECTED --any close--> CONNECTING
    CONNECTING --failure, wait--> CONNECTING
    any --stop()--> DISCONNECTED (terminal)
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import TYPE_CHECKING

from tenacity import AsyncRetrying, retry_if_exception_type, stop_never, wait_fixed

from clipsync.constants import RECONNECT_DELAY
from clipsync.errors import TransportError
from clipsync.events import Closed, ConnectionStatus, RemoteChange

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from clipsync.coordinator import SyncCoordinator
    from clipsync.session import SyncSession
    from clipsync.status import StatusSink

logger = logging.getLogger(__name__)


class ReconnectionController:
    """Keep a SyncSession connected until stopped.

    Only one reconnect wait is ever pending: attempts run sequentially in
    a single task, and reconnect_now() ends the pending wait early instead
    of scheduling another.

    Attributes:
        reconnects_scheduled: Number of reconnect waits started so far.
    """

    def __init__(
        self,
        session: SyncSession,
        url: str,
        coordinator: SyncCoordinator,
        reconnect_delay: float = RECONNECT_DELAY,
        status_sink: StatusSink | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            session: The session to supervise.
            url: Peer URL passed to session.connect().
            coordinator: Receives remote changes and performs the bootstrap
                push on every successful connect.
            reconnect_delay: Fixed delay in seconds before each retry.
            status_sink: Optional receiver of status transitions.
            sleep: Replacement for the interruptible reconnect wait.
        """
        self._session = session
        self._url = url
        self._coordinator = coordinator
        self._delay = reconnect_delay
        self._status_sink = status_sink
        self._sleep = sleep or self._interruptible_sleep
        self._status = ConnectionStatus.CONNECTING
        self._wake = asyncio.Event()
        self._task: asyncio.Task[None] | None = None
        self._stopped = False
        self.reconnects_scheduled = 0

    @property
    def status(self) -> ConnectionStatus:
        """Current connection status."""
        return self._status

    def start(self) -> None:
        """Publish the initial status and start the connection task.

        Raises:
            RuntimeError: If already started or stopped.
        """
        if self._task is not None or self._stopped:
            raise RuntimeError("ReconnectionController can only be started once")
        self._notify()
        self._task = asyncio.create_task(self.run(), name="clipsync-reconnect")

    async def stop(self) -> None:
        """Cancel any pending reconnect, close the session, go DISCONNECTED."""
        self._stopped = True
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task
        await self._session.disconnect()
        self._set_status(ConnectionStatus.DISCONNECTED)

    def reconnect_now(self) -> None:
        """End the pending reconnect wait, if any, and retry immediately."""
        self._wake.set()

    async def run(self) -> None:
        """Connect and serve the session forever, retrying on failure."""
        retrying = AsyncRetrying(
            wait=wait_fixed(self._delay),
            retry=retry_if_exception_type(ConnectionError),
            stop=stop_never,
            sleep=self._schedule_reconnect,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                await self._run_connection()

    async def _run_connection(self) -> None:
        """Run one connection from attempt to close.

        Raises:
            TransportError: Always, once the connection fails or ends, so
                that tenacity schedules the next attempt.
        """
        logger.debug("Connecting to %s", self._url)
        try:
            await self._session.connect(self._url)
        except TransportError as e:
            logger.warning("Connection to %s failed: %s, will retry", self._url, e)
            raise

        self._set_status(ConnectionStatus.CONNECTED)
        closed: Closed | None = None
        try:
            await self._coordinator.bootstrap()
            async for event in self._session.events():
                if isinstance(event, RemoteChange):
                    await self._coordinator.on_remote_change(event)
                elif isinstance(event, Closed):
                    closed = event
        finally:
            await self._session.disconnect()
            if not self._stopped:
                self._set_status(ConnectionStatus.CONNECTING)

        reason = closed.reason if closed is not None else "session ended"
        origin = "peer" if closed is None or closed.by_peer else "local side"
        logger.warning(
            "Connection to %s closed by %s: %s, will retry", self._url, origin, reason
        )
        raise TransportError(reason)

    async def _schedule_reconnect(self, delay: float) -> None:
        """Wait before the next attempt; called by tenacity."""
        self.reconnects_scheduled += 1
        logger.info("Reconnecting to %s in %.1fs", self._url, delay)
        await self._sleep(delay)

    async def _interruptible_sleep(self, delay: float) -> None:
        """Sleep for delay seconds or until reconnect_now() is called."""
        self._wake.clear()
        with suppress(asyncio.TimeoutError):
            await asyncio.wait_for(self._wake.wait(), timeout=delay)

    def _set_status(self, status: ConnectionStatus) -> None:
        """Transition to status and notify; DISCONNECTED is terminal."""
        if self._status is ConnectionStatus.DISCONNECTED or status is self._status:
            return
        self._status = status
        logger.info("Status: %s", status.value)
        self._notify()

    def _notify(self) -> None:
        """Deliver the current status to the sink, best effort."""
        if self._status_sink is None:
            return
        try:
            self._status_sink.on_status_change(self._status)
        except Exception as e:
            logger.warning("Status sink failed: %s", e)
