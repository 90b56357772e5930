#!/usr/bin/env python3
"""Tests for status output and the sync re-export module."""
import pytest

from clipsync.events import ConnectionStatus
from clipsync.status import StatusPrinter


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (ConnectionStatus.CONNECTING, "Connecting to ws://desk.local:8765..."),
        (ConnectionStatus.CONNECTED, "Connected to ws://desk.local:8765"),
        (ConnectionStatus.DISCONNECTED, "Disconnected from ws://desk.local:8765"),
    ],
)
def test_status_printer_writes_stderr(
    capsys: pytest.CaptureFixture[str], status: ConnectionStatus, expected: str
) -> None:
    """Test each transition is echoed to stderr."""
    StatusPrinter("ws://desk.local:8765").on_status_change(status)
    captured = capsys.readouterr()
    assert captured.err.strip() == expected
    assert captured.out == ""


def test_sync_module_reexports_engine_parts() -> None:
    """Test the convenience module exposes the engine components."""
    from clipsync import sync
    from clipsync.engine import SyncEngine

    assert sync.SyncEngine is SyncEngine
    assert "detect_local_change" in sync.__all__
