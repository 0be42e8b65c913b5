"""Command builder state and the operations the dispatcher applies to it."""

from __future__ import annotations

import shlex
from collections.abc import Callable
from dataclasses import dataclass, field

from ..exceptions import CommandError
from ..git_status import CommandRunner, RepositoryStatus
from ..logging_config import get_logger
from .tree import LiveData, TextPrompt, next_options, node_for

logger = get_logger(__name__)


@dataclass
class CommandBuilderState:
    tokens: list[str] = field(default_factory=list)
    options: list[str] = field(default_factory=list)
    selected_index: int = 0


class RepositoryLiveData:
    """Live data backed by git queries and the latest status snapshot.

    Lookup failures degrade to empty lists; the tree substitutes defaults.
    """

    def __init__(self, executor: CommandRunner, status: Callable[[], RepositoryStatus]) -> None:
        self._executor = executor
        self._status = status

    def _lines(self, command: str) -> list[str]:
        try:
            lines = self._executor.execute(command)
        except CommandError as exc:
            logger.debug("live data lookup '%s' failed: %s", command, exc)
            return []
        return [line.strip() for line in lines if line.strip()]

    def branches(self) -> list[str]:
        if not self._status().is_repository:
            return []
        return self._lines("branch --format=%(refname:short)")

    def remotes(self) -> list[str]:
        if not self._status().is_repository:
            return []
        return self._lines("remote")

    def changed_files(self) -> list[str]:
        return list(self._status().changed_paths())

    def staged_files(self) -> list[str]:
        return list(self._status().staged)


class CommandBuilder:
    """Mutations over a :class:`CommandBuilderState`.

    Every change to ``tokens`` recomputes ``options`` and resets the selection.
    """

    def __init__(self, state: CommandBuilderState, live: LiveData) -> None:
        self.state = state
        self.live = live

    def recompute(self) -> None:
        self.state.options = next_options(self.state.tokens, self.live)
        self.state.selected_index = 0

    def sync_options(self) -> bool:
        """Recompute after live data changed; the selection survives an identical list."""
        options = next_options(self.state.tokens, self.live)
        if options == self.state.options:
            return False
        self.state.options = options
        self.state.selected_index = 0
        return True

    def move(self, delta: int) -> None:
        if not self.state.options:
            self.state.selected_index = 0
            return
        last = len(self.state.options) - 1
        self.state.selected_index = max(0, min(last, self.state.selected_index + delta))

    def selected_option(self) -> str | None:
        if not self.state.options:
            return None
        return self.state.options[self.state.selected_index]

    def prompt_for(self, option: str) -> TextPrompt | None:
        """Return the prompt definition when ``option`` is a free-text leaf."""
        return node_for(self.state.tokens).prompt_for(option)

    def append(self, token: str) -> None:
        self.state.tokens.append(token)
        self.recompute()

    def append_text(self, text: str) -> None:
        """Append user-entered text as one shell-safe token."""
        self.append(shlex.quote(text))

    def pop(self) -> bool:
        """Drop the last token; returns ``False`` without touching state when empty."""
        if not self.state.tokens:
            return False
        self.state.tokens.pop()
        self.recompute()
        return True

    def clear(self) -> None:
        self.state.tokens.clear()
        self.recompute()

    def command_string(self) -> str:
        return " ".join(self.state.tokens)
