#!/usr/bin/env python3
"""
Unit tests for content hashing and SentHashState.
"""
import hashlib

from clipsync.hashing import SentHashState, compute_hash


def test_compute_hash_is_sha256_of_utf8() -> None:
    """Test compute_hash returns SHA-256 hex digest of UTF-8 bytes."""
    assert compute_hash("héllo") == hashlib.sha256("héllo".encode("utf-8")).hexdigest()


def test_sent_hash_state_initial() -> None:
    """Test nothing is an echo before anything was sent."""
    state = SentHashState()
    assert state.last_sent_hash is None
    assert state.is_echo(compute_hash("x")) is False


def test_sent_hash_state_detects_echo() -> None:
    """Test content matching the last send is an echo."""
    state = SentHashState()
    state.record_sent(compute_hash("x"))
    assert state.is_echo(compute_hash("x")) is True
    assert state.is_echo(compute_hash("y")) is False


def test_sent_hash_state_clear() -> None:
    """Test clear forgets the last send."""
    state = SentHashState()
    state.record_sent(compute_hash("x"))
    state.clear()
    assert state.last_sent_hash is None
    assert state.is_echo(compute_hash("x")) is False
