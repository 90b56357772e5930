#!/usr/bin/env python3
"""
SHA-256 hashing for transport-layer echo filtering.

The session remembers the hash of the last content it sent. If a peer (or
a relay) bounces the same text back, the session drops it before it ever
reaches the clipboard. This is independent of the clipboard-level
suppression window kept by the change detector.

This module provides:
- compute_hash(): SHA-256 hex digest of clipboard text
- SentHashState: dataclass tracking last_sent_hash
"""
import hashlib

from clipsync.hash_state import SentHashState

__all__ = ["compute_hash", "SentHashState"]


def compute_hash(content: str) -> str:
    """
    Compute SHA-256 hash of clipboard content.

    Args:
        content: Clipboard text to hash; encoded as UTF-8.

    Returns:
        Hexadecimal string representation of the SHA-256 digest.
    """
    return hashlib.sha256(content.encode("utf-8")).hexdigest()
