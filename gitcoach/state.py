from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from .builder.state import CommandBuilderState
from .config import DEFAULT_MESSAGE_LOG_SIZE
from .git_status import RepositoryStatus
from .layout import Pane
from .terminal import MIN_TERMINAL_HEIGHT, MIN_TERMINAL_WIDTH, TerminalSize


def _message_log(maxlen: int = DEFAULT_MESSAGE_LOG_SIZE) -> deque[str]:
    return deque(maxlen=maxlen)


@dataclass
class AppState:
    status: RepositoryStatus
    terminal_size: TerminalSize = field(default_factory=lambda: TerminalSize(MIN_TERMINAL_WIDTH, MIN_TERMINAL_HEIGHT))
    builder: CommandBuilderState = field(default_factory=CommandBuilderState)
    selected_pane: Pane = Pane.STATUS
    tooltips_enabled: bool = True
    messages: deque[str] = field(default_factory=_message_log)
    error_message: str | None = None
    last_command: str | None = None
    last_output: list[str] = field(default_factory=list)
    dry_run: bool = False
    should_exit: bool = False
    refresh_pending: bool = False
    dirty: bool = True
    last_status_refresh: float = 0.0

    def log(self, message: str) -> None:
        self.messages.append(message)

    def set_error(self, message: str) -> None:
        self.error_message = message
        self.log(message)

    def clear_error(self) -> None:
        self.error_message = None
