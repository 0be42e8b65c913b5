"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle, alternate-screen switching, cursor visibility and
the output encoding, plus the clamped terminal size read once per frame.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import sys
import termios
import tty
from dataclasses import dataclass

MIN_TERMINAL_WIDTH = 80
MIN_TERMINAL_HEIGHT = 24


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions in character cells."""

    width: int
    height: int


def get_terminal_size() -> TerminalSize:
    """Return the current size clamped to at least 80x24.

    ``shutil`` already falls back to the given default when the size cannot be
    queried, so this never raises.
    """
    term = shutil.get_terminal_size((MIN_TERMINAL_WIDTH, MIN_TERMINAL_HEIGHT))
    return TerminalSize(
        width=max(MIN_TERMINAL_WIDTH, term.columns),
        height=max(MIN_TERMINAL_HEIGHT, term.lines),
    )


class TerminalController:
    """Manage terminal mode transitions for the interactive session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._saved_encoding: str | None = None

    def _set_stdout_encoding(self, encoding: str) -> None:
        reconfigure = getattr(sys.stdout, "reconfigure", None)
        if reconfigure is None:
            return
        with contextlib.suppress(ValueError, OSError):
            sys.stdout.flush()
            reconfigure(encoding=encoding)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with a hidden cursor and UTF-8 output."""
        self._saved_encoding = getattr(sys.stdout, "encoding", None)
        if self._saved_encoding and self._saved_encoding.lower() not in {"utf-8", "utf8"}:
            self._set_stdout_encoding("utf-8")
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Show cursor, restore the main screen buffer, tty state and encoding."""
        try:
            os.write(self.stdout_fd, b"\x1b[0m\x1b[?25h\x1b[?1049l")
        finally:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
            saved = self._saved_encoding
            self._saved_encoding = None
            if saved and saved.lower() not in {"utf-8", "utf8"}:
                self._set_stdout_encoding(saved)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
