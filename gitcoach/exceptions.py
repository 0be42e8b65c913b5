"""Error types raised by the git collaborator layer.

Everything here is caught at the key-dispatch boundary and turned into the
single footer error slot; nothing in this hierarchy is fatal to the UI.
"""

from __future__ import annotations


class GitCoachError(Exception):
    """Base exception for all gitcoach errors."""


class CommandError(GitCoachError):
    """Raised when a git invocation exits non-zero or cannot be started."""

    def __init__(self, exit_code: int, message: str, command: str | None = None) -> None:
        self.exit_code = exit_code
        self.message = message
        self.command = command

        error_msg = f"git exited with {exit_code}"
        if command:
            error_msg = f"'git {command}' exited with {exit_code}"
        if message:
            error_msg += f": {message}"
        super().__init__(error_msg)

