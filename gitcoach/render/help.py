"""Key reference shown by the F1 modal and the footer hint line.

Rendering helpers here draw only; waiting for the dismissing key is up to
the caller.
"""

from __future__ import annotations

from ..terminal import TerminalSize
from ..ui_theme import UITheme
from .dialogs import draw_modal
from .surface import TerminalSurface, styled

HELP_TITLE = "gitcoach help"

# (keys, description); a None key starts a section heading.
HELP_ENTRIES: tuple[tuple[str | None, str], ...] = (
    (None, "General"),
    ("Tab", "focus next pane (Status, Command Builder, Help)"),
    ("F1", "show this help"),
    ("T", "show/hide the floating tooltip"),
    ("Alt+T", "run the tutorial"),
    ("Esc / Alt+Q / Ctrl+C", "quit"),
    (None, "Status pane"),
    ("R", "re-read repository status"),
    (None, "Command Builder pane"),
    ("Up/Down", "move the selection"),
    ("Enter", "add the selected option, or Execute / Clear"),
    ("Backspace", "remove the last token"),
    (None, "Safety"),
    ("--dry-run", "commands are shown but never run"),
    ("confirm", "force pushes, hard resets and cleans ask first"),
)

FOOTER_HINTS: tuple[tuple[str, str], ...] = (
    ("Tab", "pane"),
    ("↑↓", "select"),
    ("Enter", "choose"),
    ("Bksp", "back"),
    ("F1", "help"),
    ("T", "tooltips"),
    ("Alt+T", "tutorial"),
    ("R", "refresh"),
    ("Esc", "quit"),
)


def help_lines(theme: UITheme) -> list[str]:
    key_width = max(len(keys) for keys, _ in HELP_ENTRIES if keys is not None)
    lines: list[str] = []
    for keys, text in HELP_ENTRIES:
        if keys is None:
            if lines:
                lines.append("")
            lines.append(styled(text, theme.heading))
            continue
        lines.append("  " + styled(keys.ljust(key_width), theme.key) + "  " + text)
    lines.append("")
    lines.append(styled("Press any key to close", theme.dim))
    return lines


def footer_hint_line(theme: UITheme) -> str:
    return "  ".join(styled(keys, theme.key) + " " + text for keys, text in FOOTER_HINTS)


def render_help_page(surface: TerminalSurface, size: TerminalSize, theme: UITheme) -> None:
    """Draw the modal help page over a dimmed backdrop."""
    draw_modal(surface, size, theme, HELP_TITLE, help_lines(theme), min_width=52, backdrop=True)
