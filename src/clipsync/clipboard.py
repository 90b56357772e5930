"""Clipboard provider interface and the pyperclip-backed implementation.

The engine never touches the operating system clipboard directly. It goes
through a ClipboardProvider, which must be synchronous and must make a
write visible to the next read. PyperclipClipboard covers desktop
platforms (pbcopy on macOS, win32 on Windows, xclip/xsel/wl-clipboard on
Linux).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import pyperclip

from clipsync.errors import ClipboardAccessError


@runtime_checkable
class ClipboardProvider(Protocol):
    """Synchronous text clipboard access."""

    def read(self) -> str | None:
        """Return the current clipboard text, or None if there is none.

        Raises:
            ClipboardAccessError: If the clipboard cannot be read.
        """
        ...

    def write(self, content: str) -> None:
        """Replace the clipboard text.

        Raises:
            ClipboardAccessError: If the clipboard cannot be written.
        """
        ...


class PyperclipClipboard:
    """ClipboardProvider backed by pyperclip."""

    def read(self) -> str | None:
        """Read clipboard text.

        Returns:
            Clipboard text, or None if the clipboard is empty or holds
            something other than text.

        Raises:
            ClipboardAccessError: If no clipboard mechanism is available.
        """
        try:
            content = pyperclip.paste()
        except (pyperclip.PyperclipException, OSError) as e:
            raise ClipboardAccessError(f"Failed to read clipboard: {e}") from e
        if not isinstance(content, str) or not content:
            return None
        return content

    def write(self, content: str) -> None:
        """Write clipboard text.

        Args:
            content: Text to place on the clipboard.

        Raises:
            ClipboardAccessError: If no clipboard mechanism is available.
        """
        try:
            pyperclip.copy(content)
        except (pyperclip.PyperclipException, OSError) as e:
            raise ClipboardAccessError(f"Failed to write clipboard: {e}") from e
