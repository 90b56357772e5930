#!/usr/bin/env python3
"""
Sent-content tracking for the session echo filter.

A session records the hash of every frame it transmits. An inbound frame
whose content hashes to the same value is our own update coming back and
is dropped.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SentHashState:
    """
    Track the hash of the last content this session sent.

    Attributes:
        last_sent_hash: SHA-256 hex digest of last sent content, or None.
    """

    last_sent_hash: str | None = None

    def record_sent(self, hash_value: str) -> None:
        """
        Record hash of successfully sent content.

        Args:
            hash_value: SHA-256 hex digest of sent content.
        """
        self.last_sent_hash = hash_value

    def is_echo(self, hash_value: str) -> bool:
        """
        Check whether inbound content matches what we last sent.

        Args:
            hash_value: SHA-256 hex digest of received content.

        Returns:
            True if the content is our own send bouncing back.
        """
        return self.last_sent_hash is not None and hash_value == self.last_sent_hash

    def clear(self) -> None:
        """
        Reset to the initial state.

        Used on every (re)connect so a new peer is not filtered against
        content sent over a previous connection.
        """
        self.last_sent_hash = None
