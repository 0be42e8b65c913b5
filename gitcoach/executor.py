"""Synchronous git invocation with dry-run and destructive-command guards.

``execute`` is the raw contract (lines or ``CommandError``); ``run`` layers the
dry-run switch and the confirmation gate on top and reports an explicit
:class:`CommandOutcome` instead of raising.
"""

from __future__ import annotations

import enum
import os
import shlex
import subprocess
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import CommandError
from .logging_config import get_logger

logger = get_logger(__name__)

DESTRUCTIVE_PREFIXES: tuple[str, ...] = (
    "push --force",
    "push -f",
    "reset --hard",
    "clean -f",
    "clean -df",
    "clean -xf",
    "branch -D",
    "checkout -f",
    "checkout --force",
)

# git must never block on a prompt the TUI cannot show.
_GIT_ENV_OVERRIDES = {
    "GIT_TERMINAL_PROMPT": "0",
    "GIT_EDITOR": ":",
    "GIT_PAGER": "cat",
}


class OutcomeKind(enum.Enum):
    EXECUTED = "executed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    DRY_RUN = "dry_run"


@dataclass(frozen=True)
class CommandOutcome:
    """Result of one ``GitExecutor.run`` call."""

    command: str
    kind: OutcomeKind
    lines: tuple[str, ...] = field(default_factory=tuple)
    exit_code: int = 0
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.kind in {OutcomeKind.EXECUTED, OutcomeKind.DRY_RUN}


def normalize_command(command: str) -> str:
    """Collapse whitespace and drop a leading ``git`` word."""
    words = command.split()
    if words and words[0] == "git":
        words = words[1:]
    return " ".join(words)


def is_destructive(command: str) -> bool:
    """Return whether ``command`` starts with a deny-listed prefix."""
    normalized = normalize_command(command)
    return any(normalized.startswith(prefix) for prefix in DESTRUCTIVE_PREFIXES)


def _split_output(text: str) -> list[str]:
    # Porcelain lines start with significant spaces; only line ends are trimmed.
    return text.splitlines()


class GitExecutor:
    """Run git subcommands inside one repository directory."""

    def __init__(
        self,
        repo_path: Path,
        *,
        dry_run: bool = False,
        confirm: Callable[[str], bool] | None = None,
    ) -> None:
        self.repo_path = repo_path
        self.dry_run = dry_run
        self._confirm = confirm

    def set_confirm(self, confirm: Callable[[str], bool] | None) -> None:
        """Install the interactive confirmation used by ``run``."""
        self._confirm = confirm

    def _argv(self, command: str) -> list[str]:
        try:
            args = shlex.split(command)
        except ValueError as exc:
            raise CommandError(2, f"cannot parse command: {exc}", command) from exc
        if args and args[0] == "git":
            args = args[1:]
        return ["git", "-C", str(self.repo_path), *args]

    def execute(self, command: str) -> list[str]:
        """Run ``git <command>`` and return stdout lines.

        Raises:
            CommandError: git exited non-zero or could not be started.
        """
        argv = self._argv(command)
        logger.debug("exec %s", shlex.join(argv))
        try:
            proc = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                env={**os.environ, **_GIT_ENV_OVERRIDES},
            )
        except OSError as exc:
            raise CommandError(127, str(exc), command) from exc

        if proc.returncode != 0:
            message = (proc.stderr or proc.stdout or "").strip()
            # Multi-line git errors: the first line carries the reason.
            first_line = message.splitlines()[0] if message else ""
            raise CommandError(proc.returncode, first_line, command)
        return _split_output(proc.stdout)

    def run(self, command: str, *, validate: bool = True) -> CommandOutcome:
        """Run a user-built command, honoring dry-run and confirmation."""
        command = command.strip()
        if command.startswith("git "):
            command = command[4:].lstrip()
        if self.dry_run:
            logger.info("Would execute: git %s", command)
            return CommandOutcome(command=command, kind=OutcomeKind.DRY_RUN, message=f"Would execute: git {command}")

        if validate and is_destructive(command):
            confirmed = self._confirm(command) if self._confirm is not None else False
            if not confirmed:
                logger.info("Cancelled destructive command: git %s", command)
                return CommandOutcome(
                    command=command,
                    kind=OutcomeKind.CANCELLED,
                    exit_code=1,
                    message=f"Cancelled: git {command}",
                )

        try:
            lines = self.execute(command)
        except CommandError as exc:
            logger.warning("git %s failed (%s): %s", command, exc.exit_code, exc.message)
            return CommandOutcome(
                command=command,
                kind=OutcomeKind.FAILED,
                exit_code=exc.exit_code,
                message=str(exc),
            )
        logger.info("Executed: git %s (%d lines)", command, len(lines))
        return CommandOutcome(command=command, kind=OutcomeKind.EXECUTED, lines=tuple(lines))
