"""Short guided tour shown with Alt+T or ``gitcoach --tutorial``.

Pages are fixed text drawn in a modal box. Any key advances, Esc leaves.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .logging_config import get_logger
from .render.dialogs import CANCEL_KEYS, ReadKey, draw_modal
from .render.surface import TerminalSurface, styled
from .terminal import TerminalSize
from .ui_theme import DEFAULT_THEME, UITheme

logger = get_logger(__name__)


@dataclass(frozen=True)
class TutorialStep:
    title: str
    lines: tuple[str, ...]


TUTORIAL_STEPS: tuple[TutorialStep, ...] = (
    TutorialStep(
        "Welcome",
        (
            "gitcoach builds git commands one word at a time.",
            "You never have to remember the exact syntax.",
        ),
    ),
    TutorialStep(
        "The three panes",
        (
            "Status shows your branch and changed files.",
            "Command Builder lists what can come next.",
            "Help explains the command and shows its output.",
            "Press Tab to move between them.",
        ),
    ),
    TutorialStep(
        "Building a command",
        (
            "In the Command Builder, Up/Down picks an option",
            "and Enter adds it. Backspace takes one back.",
            "Options like <message> ask you to type text.",
        ),
    ),
    TutorialStep(
        "Running it",
        (
            "Choose Execute to run the command, Clear to start over.",
            "Commands that can lose work ask before they run.",
            "Start with --dry-run to only see what would happen.",
        ),
    ),
    TutorialStep(
        "Getting help",
        (
            "F1 lists every key. T hides or shows the tooltip.",
            "R re-reads the status. Esc quits.",
        ),
    ),
)


def run_tutorial(
    surface: TerminalSurface,
    read_key_fn: ReadKey,
    size_fn: Callable[[], TerminalSize],
    theme: UITheme = DEFAULT_THEME,
    steps: tuple[TutorialStep, ...] = TUTORIAL_STEPS,
) -> int:
    """Show ``steps`` in order and return how many were viewed."""
    total = len(steps)
    for index, step in enumerate(steps, start=1):
        footer = styled(f"Step {index}/{total}", theme.dim) + "   any key: next   " + styled("Esc", theme.key) + ": leave"
        draw_modal(surface, size_fn(), theme, step.title, ["", *step.lines, "", footer], backdrop=True)
        if read_key_fn() in CANCEL_KEYS:
            logger.info("tutorial left at step %d/%d", index, total)
            return index
    logger.info("tutorial completed")
    return total
