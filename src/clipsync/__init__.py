"""Text clipboard synchronization over WebSocket."""

__version__ = "0.1.0"
