"""Descriptive help for token sequences and floating tooltip placement.

``resolve`` is a pure lookup keyed by the primary command and, when known,
its first argument. ``place_tooltip`` positions a box next to an anchor cell
and guarantees the box stays fully on screen.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .builder.tree import CLEAR, EXECUTE
from .layout import PaneRect


@dataclass(frozen=True)
class TooltipInfo:
    title: str
    description: str
    examples: tuple[str, ...] = field(default_factory=tuple)
    warning: str | None = None


INTRO_TOOLTIP = TooltipInfo(
    title="Command Builder",
    description=(
        "Pick a git command, then keep choosing options until the command reads "
        "the way you want. Select Execute to run it or Clear to start over."
    ),
    examples=("git status", "git commit -m \"message\""),
)

CONTROL_TOOLTIPS: dict[str, TooltipInfo] = {
    EXECUTE: TooltipInfo(
        title="Execute",
        description="Run the command shown at the top of the builder.",
    ),
    CLEAR: TooltipInfo(
        title="Clear",
        description="Discard every chosen token and start a new command.",
    ),
}

# (command, second token or None) -> info
_TOOLTIPS: dict[tuple[str, str | None], TooltipInfo] = {
    ("status", None): TooltipInfo(
        title="git status",
        description="Show which files are staged, modified, or untracked in the working tree.",
        examples=("git status", "git status -s"),
    ),
    ("status", "-s"): TooltipInfo(
        title="git status -s",
        description="Short format: one line per file with a two-letter status code.",
        examples=("git status -s",),
    ),
    ("status", "-b"): TooltipInfo(
        title="git status -b",
        description="Include the branch and tracking information in the output.",
        examples=("git status -s -b",),
    ),
    ("add", None): TooltipInfo(
        title="git add",
        description="Stage changes so they are included in the next commit.",
        examples=("git add file.txt", "git add ."),
    ),
    ("add", "."): TooltipInfo(
        title="git add .",
        description="Stage every change under the current directory, including new files.",
        examples=("git add .",),
    ),
    ("add", "-A"): TooltipInfo(
        title="git add -A",
        description="Stage all changes in the whole working tree, including deletions.",
        examples=("git add -A",),
    ),
    ("commit", None): TooltipInfo(
        title="git commit",
        description="Record the staged changes as a new commit on the current branch.",
        examples=("git commit -m \"Fix typo\"", "git commit -a -m \"Update docs\""),
    ),
    ("commit", "-m"): TooltipInfo(
        title="git commit -m",
        description="Provide the commit message inline. You will be asked to type it.",
        examples=("git commit -m \"Add login form\"",),
    ),
    ("commit", "-a"): TooltipInfo(
        title="git commit -a",
        description="Automatically stage modified and deleted tracked files before committing.",
        examples=("git commit -a -m \"Quick fix\"",),
    ),
    ("commit", "--amend"): TooltipInfo(
        title="git commit --amend",
        description="Replace the last commit with a new one containing the staged changes.",
        examples=("git commit --amend --no-edit",),
        warning="Rewrites history. Avoid amending commits that were already pushed.",
    ),
    ("push", None): TooltipInfo(
        title="git push",
        description="Upload local commits to a remote repository.",
        examples=("git push origin main", "git push -u origin feature"),
    ),
    ("push", "--force"): TooltipInfo(
        title="git push --force",
        description="Overwrite the remote branch with your local history.",
        examples=("git push --force origin main",),
        warning="Destroys commits on the remote that you do not have locally.",
    ),
    ("push", "-u"): TooltipInfo(
        title="git push -u",
        description="Push and remember the remote branch as the upstream for future pulls.",
        examples=("git push -u origin feature",),
    ),
    ("push", "--tags"): TooltipInfo(
        title="git push --tags",
        description="Push all local tags to the remote.",
        examples=("git push --tags origin",),
    ),
    ("pull", None): TooltipInfo(
        title="git pull",
        description="Fetch from a remote and integrate the changes into the current branch.",
        examples=("git pull", "git pull origin main"),
    ),
    ("pull", "--rebase"): TooltipInfo(
        title="git pull --rebase",
        description="Replay your local commits on top of the fetched branch instead of merging.",
        examples=("git pull --rebase origin main",),
    ),
    ("fetch", None): TooltipInfo(
        title="git fetch",
        description="Download commits and refs from a remote without changing your files.",
        examples=("git fetch origin", "git fetch --all --prune"),
    ),
    ("branch", None): TooltipInfo(
        title="git branch",
        description="List, create, or delete branches.",
        examples=("git branch", "git branch feature/login"),
    ),
    ("branch", "-d"): TooltipInfo(
        title="git branch -d",
        description="Delete a branch that has been fully merged.",
        examples=("git branch -d old-feature",),
    ),
    ("branch", "-D"): TooltipInfo(
        title="git branch -D",
        description="Force-delete a branch even if it has unmerged commits.",
        examples=("git branch -D experiment",),
        warning="Unmerged commits on the branch become unreachable.",
    ),
    ("branch", "-a"): TooltipInfo(
        title="git branch -a",
        description="List local and remote-tracking branches.",
        examples=("git branch -a",),
    ),
    ("checkout", None): TooltipInfo(
        title="git checkout",
        description="Switch branches or restore files in the working tree.",
        examples=("git checkout main", "git checkout -b feature"),
    ),
    ("checkout", "-b"): TooltipInfo(
        title="git checkout -b",
        description="Create a new branch and switch to it.",
        examples=("git checkout -b feature/login",),
    ),
    ("checkout", "--"): TooltipInfo(
        title="git checkout --",
        description="Restore files from the index, discarding unstaged edits.",
        examples=("git checkout -- file.txt",),
        warning="Unstaged changes to the chosen files are lost.",
    ),
    ("checkout", "-f"): TooltipInfo(
        title="git checkout -f",
        description="Switch branches, throwing away local changes that would block the switch.",
        examples=("git checkout -f main",),
        warning="Local modifications are discarded without a backup.",
    ),
    ("merge", None): TooltipInfo(
        title="git merge",
        description="Join another branch's history into the current branch.",
        examples=("git merge feature", "git merge --no-ff feature"),
    ),
    ("merge", "--abort"): TooltipInfo(
        title="git merge --abort",
        description="Stop a conflicted merge and return to the pre-merge state.",
        examples=("git merge --abort",),
    ),
    ("rebase", None): TooltipInfo(
        title="git rebase",
        description="Move your commits so they start from another branch's tip.",
        examples=("git rebase main", "git rebase --continue"),
        warning="Rewrites commit history. Do not rebase commits others already use.",
    ),
    ("log", None): TooltipInfo(
        title="git log",
        description="Show the commit history.",
        examples=("git log --oneline --graph", "git log -5"),
    ),
    ("log", "-p"): TooltipInfo(
        title="git log -p",
        description="Show the patch introduced by each commit.",
        examples=("git log -p -5",),
    ),
    ("diff", None): TooltipInfo(
        title="git diff",
        description="Show unstaged changes between the working tree and the index.",
        examples=("git diff", "git diff --staged"),
    ),
    ("diff", "--staged"): TooltipInfo(
        title="git diff --staged",
        description="Show what is staged for the next commit.",
        examples=("git diff --staged",),
    ),
    ("stash", None): TooltipInfo(
        title="git stash",
        description="Shelve uncommitted changes so you can work on something else.",
        examples=("git stash push -m \"wip\"", "git stash pop"),
    ),
    ("stash", "pop"): TooltipInfo(
        title="git stash pop",
        description="Re-apply the most recent stash and remove it from the stash list.",
        examples=("git stash pop",),
    ),
    ("stash", "drop"): TooltipInfo(
        title="git stash drop",
        description="Delete the most recent stash entry.",
        examples=("git stash drop",),
        warning="The dropped changes are not recoverable from the stash list.",
    ),
    ("reset", None): TooltipInfo(
        title="git reset",
        description="Unstage files or move the current branch to another commit.",
        examples=("git reset file.txt", "git reset --soft HEAD~1"),
    ),
    ("reset", "--soft"): TooltipInfo(
        title="git reset --soft",
        description="Move the branch pointer but keep changes staged.",
        examples=("git reset --soft HEAD~1",),
    ),
    ("reset", "--hard"): TooltipInfo(
        title="git reset --hard",
        description="Move the branch and overwrite the index and working tree to match.",
        examples=("git reset --hard HEAD",),
        warning="All uncommitted changes are permanently discarded.",
    ),
    ("remote", None): TooltipInfo(
        title="git remote",
        description="Manage the set of repositories whose branches you track.",
        examples=("git remote -v", "git remote add origin <url>"),
    ),
    ("remote", "add"): TooltipInfo(
        title="git remote add",
        description="Register a new remote. You will be asked for its name and URL.",
        examples=("git remote add upstream https://example.com/repo.git",),
    ),
    ("tag", None): TooltipInfo(
        title="git tag",
        description="Create, list, or annotate tags that mark specific commits.",
        examples=("git tag v1.0", "git tag -a v1.0 -m \"Release\""),
    ),
    ("clean", None): TooltipInfo(
        title="git clean",
        description="Remove untracked files from the working tree.",
        examples=("git clean -n", "git clean -fd"),
        warning="Deleted untracked files cannot be recovered by git.",
    ),
    ("clean", "-n"): TooltipInfo(
        title="git clean -n",
        description="Dry run: list what would be removed without deleting anything.",
        examples=("git clean -n",),
    ),
    ("clean", "-f"): TooltipInfo(
        title="git clean -f",
        description="Delete untracked files.",
        examples=("git clean -f",),
        warning="Deleted untracked files cannot be recovered by git.",
    ),
    ("init", None): TooltipInfo(
        title="git init",
        description="Create an empty repository in the current directory.",
        examples=("git init",),
    ),
}


def resolve(tokens: Sequence[str]) -> TooltipInfo:
    """Return help for ``tokens``; unknown combinations point to ``git help``."""
    if not tokens:
        return INTRO_TOOLTIP
    command = tokens[0]
    if len(tokens) == 1 and command in CONTROL_TOOLTIPS:
        return CONTROL_TOOLTIPS[command]
    if len(tokens) > 1:
        info = _TOOLTIPS.get((command, tokens[1]))
        if info is not None:
            return info
    info = _TOOLTIPS.get((command, None))
    if info is not None:
        return info
    return TooltipInfo(
        title=f"git {command}",
        description=f"No built-in notes for this command. Run 'git help {command}' for the full manual.",
        examples=(f"git help {command}",),
    )


def resolve_option(tokens: Sequence[str], option: str) -> TooltipInfo:
    """Help for the highlighted builder option as if it were chosen."""
    if option in CONTROL_TOOLTIPS:
        return CONTROL_TOOLTIPS[option]
    return resolve([*tokens, option])


def place_tooltip(
    anchor_x: int,
    anchor_y: int,
    box_width: int,
    box_height: int,
    pane: PaneRect,
    term_width: int,
    term_height: int,
) -> tuple[int, int, int, int]:
    """Return ``(x, y, width, height)`` for a tooltip box next to an anchor.

    The box goes right of the owning pane by default and flips to the left of
    the anchor when it would cross the right edge. Size and both coordinates
    are clamped afterwards so the box lies within ``[0, W) x [0, H)``.
    """
    width = max(1, min(box_width, term_width))
    height = max(1, min(box_height, term_height))

    x = max(anchor_x + 1, pane.right)
    if x + width > term_width:
        x = anchor_x - width
    y = anchor_y - height // 2

    x = max(0, min(x, term_width - width))
    y = max(0, min(y, term_height - height))
    return x, y, width, height
