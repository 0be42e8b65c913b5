"""Blocking modal dialogs drawn over the main frame.

Each dialog owns the screen until it returns; the caller marks the frame
dirty afterwards so the panes are redrawn underneath.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from ..ansi import clip_ansi_line, display_width, strip_ansi
from ..terminal import TerminalSize
from ..ui_theme import UITheme
from .surface import TerminalSurface, styled

ReadKey = Callable[[], str]

CANCEL_KEYS = frozenset({"ESC", "CTRL_C", "ALT_Q"})


def modal_geometry(size: TerminalSize, content_width: int, content_height: int) -> tuple[int, int, int, int]:
    """Return a centered ``(x, y, width, height)`` that fits inside ``size``."""
    width = max(24, min(size.width - 4, content_width + 4))
    height = max(5, min(size.height - 2, content_height + 2))
    x = max(0, (size.width - width) // 2)
    y = max(0, (size.height - height) // 2)
    return x, y, width, height


def draw_modal(
    surface: TerminalSurface,
    size: TerminalSize,
    theme: UITheme,
    title: str,
    lines: Sequence[str],
    *,
    min_width: int = 40,
    backdrop: bool = False,
) -> tuple[int, int, int, int]:
    """Draw a rounded, titled frame with ``lines`` inside it.

    Returns the frame geometry so callers can place a cursor.
    """
    content_width = max([min_width, display_width(title) + 4, *(display_width(line) for line in lines)])
    x, y, width, height = modal_geometry(size, content_width, len(lines))
    inner_w = width - 2
    with surface.frame():
        if backdrop:
            for row in range(size.height):
                surface.write_at(row, 0, " " * max(1, size.width - 1), theme.dim)
        surface.write_at(y, x, "╭" + "─" * inner_w + "╮", theme.modal_border)
        for i in range(height - 2):
            surface.write_at(y + 1 + i, x, "│", theme.modal_border)
            surface.write(" " * inner_w)
            surface.write("│", theme.modal_border)
        surface.write_at(y + height - 1, x, "╰" + "─" * inner_w + "╯", theme.modal_border)

        label = clip_ansi_line(f" {title} ", max(1, inner_w - 2))
        title_x = x + 1 + max(1, (inner_w - display_width(label)) // 2)
        surface.write_at(y, title_x, label, theme.modal_title)

        for i, line in enumerate(lines[: height - 2]):
            surface.write_line(y + 1 + i, x + 2, line, max(1, inner_w - 2))
    return x, y, width, height


def prompt_text(
    surface: TerminalSurface,
    read_key_fn: ReadKey,
    size: TerminalSize,
    theme: UITheme,
    label: str,
    initial: str = "",
) -> str | None:
    """Collect one line of text; ``None`` when the user cancels."""
    text = initial
    while True:
        field_width = max(10, min(size.width - 12, 60))
        visible = text[-(field_width - 2):] if len(text) > field_width - 2 else text
        lines = [
            "",
            f"> {visible}" + styled("_", theme.key),
            "",
            styled("Enter", theme.key) + " accept   " + styled("Esc", theme.key) + " cancel   "
            + styled("Ctrl+U", theme.key) + " clear",
        ]
        draw_modal(surface, size, theme, label, lines, min_width=field_width + 2)

        key = read_key_fn()
        if key in CANCEL_KEYS:
            return None
        if key == "ENTER":
            return text
        if key == "BACKSPACE":
            text = text[:-1]
        elif key == "CTRL_U":
            text = ""
        elif len(key) == 1 and key.isprintable():
            text += key


def confirm(
    surface: TerminalSurface,
    read_key_fn: ReadKey,
    size: TerminalSize,
    theme: UITheme,
    command: str,
) -> bool:
    """Ask whether a destructive ``command`` may run; only ``y`` accepts."""
    lines = [
        "",
        styled("This command can discard work:", theme.warning),
        "",
        f"  git {strip_ansi(command)}",
        "",
        styled("y", theme.key) + " run it   " + styled("n", theme.key) + "/" + styled("Esc", theme.key) + " cancel",
    ]
    draw_modal(surface, size, theme, "Confirm", lines)
    while True:
        key = read_key_fn()
        if key in {"y", "Y"}:
            return True
        if key in {"n", "N", "ENTER"} or key in CANCEL_KEYS:
            return False
