"""Character-cell drawing primitives.

Wraps cursor movement, screen clearing, styled writes and box drawing into
escape-sequence emitters. A ``frame()`` block collects one full redraw and
flushes it with a single write so partially drawn frames never show.
"""

from __future__ import annotations

import contextlib
import os

from ..ansi import fit_ansi_line


class Style:
    """SGR codes that may be combined freely."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    UNDERLINE = "\033[4m"
    REVERSE = "\033[7m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    GRAY = "\033[90m"


BOX_TOP_LEFT = "┌"
BOX_TOP_RIGHT = "┐"
BOX_BOTTOM_LEFT = "└"
BOX_BOTTOM_RIGHT = "┘"
BOX_HORIZONTAL = "─"
BOX_VERTICAL = "│"


def styled(text: str, *styles: str) -> str:
    """Prefix ``text`` with every non-empty style and close it with a reset."""
    codes = "".join(style for style in styles if style)
    if not codes:
        return text
    return f"{codes}{text}{Style.RESET}"


class TerminalSurface:
    """Idempotent drawing operations over a raw output file descriptor.

    All coordinates are 0-based ``(row, col)`` / ``(x, y)`` cells.
    """

    def __init__(self, stdout_fd: int) -> None:
        self.stdout_fd = stdout_fd
        self._buffer: list[str] | None = None

    def _emit(self, payload: str) -> None:
        if self._buffer is not None:
            self._buffer.append(payload)
            return
        os.write(self.stdout_fd, payload.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def frame(self):
        """Buffer everything drawn inside the block and write it at once."""
        if self._buffer is not None:
            yield self
            return
        self._buffer = []
        try:
            yield self
        finally:
            payload = "".join(self._buffer)
            self._buffer = None
            if payload:
                os.write(self.stdout_fd, payload.encode("utf-8", errors="replace"))

    def move_cursor(self, row: int, col: int) -> None:
        self._emit(f"\033[{max(0, row) + 1};{max(0, col) + 1}H")

    def clear_screen(self) -> None:
        self._emit("\033[0m\033[H\033[2J")

    def write(self, text: str, *styles: str) -> None:
        """Write at the current cursor position; styled text always ends reset."""
        self._emit(styled(text, *styles))

    def write_at(self, row: int, col: int, text: str, *styles: str) -> None:
        self.move_cursor(row, col)
        self.write(text, *styles)

    def write_line(self, row: int, col: int, text: str, width: int, *styles: str) -> None:
        """Write ``text`` clipped and padded to exactly ``width`` columns."""
        if width <= 0:
            return
        self.move_cursor(row, col)
        self.write(fit_ansi_line(text, width), *styles)
        if "\x1b" in text:
            self._emit(Style.RESET)

    def draw_box(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        title: str | None = None,
        *styles: str,
    ) -> None:
        """Draw a bordered rectangle and blank its interior.

        Prior contents inside the rectangle are overwritten, so callers redraw
        pane contents after every box.
        """
        if width < 2 or height < 2:
            return
        inner_w = width - 2
        top = BOX_HORIZONTAL * inner_w
        if title:
            label = f" {title} "
            if len(label) > inner_w:
                label = label[:inner_w]
            left = (inner_w - len(label)) // 2
            top = BOX_HORIZONTAL * left + label + BOX_HORIZONTAL * (inner_w - left - len(label))

        self.move_cursor(y, x)
        self.write(f"{BOX_TOP_LEFT}{top}{BOX_TOP_RIGHT}", *styles)
        for row in range(y + 1, y + height - 1):
            self.move_cursor(row, x)
            self.write(BOX_VERTICAL, *styles)
            self.write(" " * inner_w)
            self.write(BOX_VERTICAL, *styles)
        self.move_cursor(y + height - 1, x)
        self.write(f"{BOX_BOTTOM_LEFT}{BOX_HORIZONTAL * inner_w}{BOX_BOTTOM_RIGHT}", *styles)
