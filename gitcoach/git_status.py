"""Porcelain status parsing into an immutable repository snapshot.

Classifies ``XY path`` records into staged/modified/untracked/deleted sets and
reads branch, tracking ref and ahead/behind counts through the executor.
A path can legitimately be both staged and modified; that duality is kept.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Protocol

from .exceptions import CommandError
from .logging_config import get_logger

logger = get_logger(__name__)

NOT_A_REPOSITORY = "Not a Git repository"
DETACHED_HEAD = "HEAD (detached)"


class CommandRunner(Protocol):
    def execute(self, command: str) -> list[str]: ...


@dataclass(frozen=True)
class RepositoryStatus:
    """Snapshot of one status read; replaced wholesale on refresh."""

    is_repository: bool
    current_branch: str
    repo_name: str | None = None
    tracking_ref: str | None = None
    ahead: int = 0
    behind: int = 0
    staged: tuple[str, ...] = field(default_factory=tuple)
    modified: tuple[str, ...] = field(default_factory=tuple)
    untracked: tuple[str, ...] = field(default_factory=tuple)
    deleted: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def not_a_repository(cls) -> RepositoryStatus:
        return cls(is_repository=False, current_branch=NOT_A_REPOSITORY)

    @property
    def is_clean(self) -> bool:
        return not (self.staged or self.modified or self.untracked or self.deleted)

    def changed_paths(self) -> tuple[str, ...]:
        """All paths in any status class, first-seen order, no repeats."""
        seen = dict.fromkeys((*self.staged, *self.modified, *self.deleted, *self.untracked))
        return tuple(seen)


_C_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "t": 0x09,
    "n": 0x0A,
    "v": 0x0B,
    "f": 0x0C,
    "r": 0x0D,
    '"': 0x22,
    "\\": 0x5C,
}


def unquote_path(path_text: str) -> str:
    """Undo git's C-style quoting of a porcelain path.

    Unusual names arrive as ``"dir/\\303\\251t\\303\\251 x.txt"``: octal
    escapes are raw UTF-8 bytes. Unquoted text is returned unchanged.
    """
    if len(path_text) < 2 or not (path_text.startswith('"') and path_text.endswith('"')):
        return path_text
    body = path_text[1:-1]
    raw = bytearray()
    index = 0
    while index < len(body):
        char = body[index]
        if char != "\\" or index + 1 >= len(body):
            raw.extend(char.encode("utf-8"))
            index += 1
            continue
        escaped = body[index + 1]
        octal = body[index + 1 : index + 4]
        if len(octal) == 3 and all(digit in "01234567" for digit in octal):
            raw.append(int(octal, 8) & 0xFF)
            index += 4
        elif escaped in _C_ESCAPES:
            raw.append(_C_ESCAPES[escaped])
            index += 2
        else:
            raw.extend(escaped.encode("utf-8"))
            index += 2
    return raw.decode("utf-8", errors="replace")


def _record_path(path_text: str) -> str:
    # Renames/copies are reported as "old -> new"; keep the destination.
    if " -> " in path_text:
        path_text = path_text.split(" -> ", 1)[1]
    return unquote_path(path_text)


def parse_status_lines(
    lines: Iterable[str],
) -> tuple[tuple[str, ...], tuple[str, ...], tuple[str, ...], tuple[str, ...]]:
    """Split porcelain v1 lines into ``(staged, modified, untracked, deleted)``.

    The four checks are independent: ``MM`` lands in staged and modified,
    ``AD`` in staged and deleted.
    """
    staged: dict[str, None] = {}
    modified: dict[str, None] = {}
    untracked: dict[str, None] = {}
    deleted: dict[str, None] = {}

    for line in lines:
        if len(line) < 4 or line[2] != " ":
            continue
        code = line[:2]
        path = _record_path(line[3:])
        if not path:
            continue
        if code[0] not in {" ", "?"}:
            staged[path] = None
        if code[1] == "M":
            modified[path] = None
        if code == "??":
            untracked[path] = None
        if code[1] == "D":
            deleted[path] = None

    return tuple(staged), tuple(modified), tuple(untracked), tuple(deleted)


def parse_ahead_behind(text: str) -> tuple[int, int]:
    """Parse ``rev-list --left-right --count`` output ``"behind<TAB>ahead"``.

    Returns ``(ahead, behind)``; anything malformed counts as in sync.
    """
    parts = text.split()
    if len(parts) != 2:
        return 0, 0
    try:
        behind, ahead = int(parts[0]), int(parts[1])
    except ValueError:
        return 0, 0
    return max(0, ahead), max(0, behind)


def _first_line(lines: list[str]) -> str:
    return lines[0].strip() if lines else ""


def _inside_work_tree(executor: CommandRunner) -> bool:
    try:
        return _first_line(executor.execute("rev-parse --is-inside-work-tree")) == "true"
    except CommandError as exc:
        logger.debug("not a work tree: %s", exc)
        return False


def _tracking(executor: CommandRunner) -> tuple[str | None, int, int]:
    try:
        tracking_ref = _first_line(executor.execute("rev-parse --abbrev-ref --symbolic-full-name @{u}"))
    except CommandError:
        return None, 0, 0
    if not tracking_ref:
        return None, 0, 0
    try:
        counts = _first_line(executor.execute("rev-list --left-right --count @{u}...HEAD"))
    except CommandError as exc:
        logger.debug("ahead/behind unavailable for %s: %s", tracking_ref, exc)
        return tracking_ref, 0, 0
    ahead, behind = parse_ahead_behind(counts)
    return tracking_ref, ahead, behind


def load_repository_status(executor: CommandRunner) -> RepositoryStatus:
    """Read a fresh :class:`RepositoryStatus` through ``executor``.

    Outside a work tree this returns the not-a-repository sentinel instead of
    raising. Failures after membership is established propagate as
    ``CommandError``.
    """
    if not _inside_work_tree(executor):
        return RepositoryStatus.not_a_repository()

    toplevel = _first_line(executor.execute("rev-parse --show-toplevel"))
    repo_name = PurePath(toplevel).name if toplevel else None
    current_branch = _first_line(executor.execute("branch --show-current")) or DETACHED_HEAD
    tracking_ref, ahead, behind = _tracking(executor)
    staged, modified, untracked, deleted = parse_status_lines(executor.execute("status --porcelain"))

    status = RepositoryStatus(
        is_repository=True,
        current_branch=current_branch,
        repo_name=repo_name,
        tracking_ref=tracking_ref,
        ahead=ahead,
        behind=behind,
        staged=staged,
        modified=modified,
        untracked=untracked,
        deleted=deleted,
    )
    logger.debug(
        "status %s@%s staged=%d modified=%d untracked=%d deleted=%d",
        repo_name,
        current_branch,
        len(staged),
        len(modified),
        len(untracked),
        len(deleted),
    )
    return status
