"""Key dispatch for global shortcuts and pane-scoped actions.

Global bindings are checked first, then the focused pane's table. Errors
from git or status reads stop here and land in the footer error slot.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from ..builder import CLEAR, EXECUTE, CommandBuilder
from ..exceptions import GitCoachError
from ..executor import CommandOutcome, OutcomeKind
from ..layout import Pane
from ..logging_config import get_logger
from ..state import AppState
from .key_registry import KeyComboBinding, KeyComboRegistry

logger = get_logger(__name__)

QUIT_KEYS: tuple[str, ...] = ("ESC", "ALT_Q", "CTRL_C")


class CommandRunner(Protocol):
    def run(self, command: str, *, validate: bool = True) -> CommandOutcome: ...


@dataclass(frozen=True)
class DispatchContext:
    """State and bound operations required for key handling."""

    state: AppState
    builder: CommandBuilder
    executor: CommandRunner
    refresh_status: Callable[[], None]
    show_help_modal: Callable[[], None]
    run_tutorial: Callable[[], None]
    prompt_text: Callable[[str], str | None]


class KeyDispatcher:
    """Route one key token to the matching global or pane action."""

    def __init__(self, context: DispatchContext) -> None:
        self.context = context
        self.state = context.state
        self.builder = context.builder
        self._global = KeyComboRegistry().register_bindings(
            KeyComboBinding(QUIT_KEYS, self._quit),
            KeyComboBinding(("TAB",), self._next_pane),
            KeyComboBinding(("F1",), context.show_help_modal),
            KeyComboBinding(("t", "T"), self._toggle_tooltips),
            KeyComboBinding(("ALT_T",), context.run_tutorial),
        )
        self._panes: dict[Pane, KeyComboRegistry] = {
            Pane.STATUS: KeyComboRegistry().register_bindings(
                KeyComboBinding(("r", "R"), self._refresh_status),
            ),
            Pane.COMMAND_BUILDER: KeyComboRegistry().register_bindings(
                KeyComboBinding(("UP",), lambda: self.builder.move(-1)),
                KeyComboBinding(("DOWN",), lambda: self.builder.move(1)),
                KeyComboBinding(("ENTER",), self._select_option),
                KeyComboBinding(("BACKSPACE",), self._pop_token),
            ),
            # Reserved for scrolling.
            Pane.HELP: KeyComboRegistry(),
        }

    def handle(self, key: str) -> bool:
        """Handle ``key`` and return whether any action was bound to it."""
        registry = self._global if self._global.handles(key) else self._panes[self.state.selected_pane]
        if not registry.handles(key):
            return False
        self.state.clear_error()
        try:
            registry.dispatch(key)
        except GitCoachError as exc:
            logger.warning("action for %s failed: %s", key, exc)
            self.state.set_error(str(exc))
        return True

    def _quit(self) -> None:
        self.state.should_exit = True

    def _next_pane(self) -> None:
        self.state.selected_pane = self.state.selected_pane.next()

    def _toggle_tooltips(self) -> None:
        self.state.tooltips_enabled = not self.state.tooltips_enabled
        self.state.log(f"Tooltips {'on' if self.state.tooltips_enabled else 'off'}")

    def _refresh_status(self) -> None:
        self.context.refresh_status()
        self.state.log("Status refreshed")

    def _pop_token(self) -> None:
        self.builder.pop()

    def _select_option(self) -> None:
        option = self.builder.selected_option()
        if option is None:
            return
        if option == EXECUTE:
            self._execute()
            return
        if option == CLEAR:
            self.builder.clear()
            return
        prompt = self.builder.prompt_for(option)
        if prompt is None:
            self.builder.append(option)
            return
        text = self.context.prompt_text(prompt.label)
        if text is None or not text.strip():
            self.state.log(f"{prompt.label}: input cancelled")
            return
        self.builder.append_text(text.strip())

    def _execute(self) -> None:
        command = self.builder.command_string()
        if not command:
            return
        outcome = self.context.executor.run(command)
        self.state.last_command = outcome.command
        if outcome.kind is OutcomeKind.DRY_RUN:
            self.state.log(outcome.message)
            self.builder.clear()
            return
        if not outcome.ok:
            self.state.set_error(outcome.message)
            # A cancelled command never ran; a failed one may have touched the tree.
            if outcome.kind is OutcomeKind.FAILED:
                self.state.refresh_pending = True
            return
        self.state.refresh_pending = True
        self.state.last_output = list(outcome.lines)
        self.state.log(f"Executed: git {outcome.command}")
        self.builder.clear()
