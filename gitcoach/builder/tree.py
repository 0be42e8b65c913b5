"""Decision tree behind the command builder pane.

Each :class:`CommandNode` turns the tokens chosen so far (plus live repository
data) into the next option list. ``node_id_for`` picks the node from the
primary command and the position/value of later tokens.
"""

from __future__ import annotations

import shlex
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

EXECUTE = "Execute"
CLEAR = "Clear"
CONTROL_OPTIONS: tuple[str, ...] = (EXECUTE, CLEAR)

DEFAULT_BRANCHES: tuple[str, ...] = ("main", "master")
DEFAULT_REMOTES: tuple[str, ...] = ("origin",)

ROOT_COMMANDS: tuple[str, ...] = (
    "status",
    "add",
    "commit",
    "push",
    "pull",
    "fetch",
    "branch",
    "checkout",
    "merge",
    "rebase",
    "log",
    "diff",
    "stash",
    "reset",
    "remote",
    "tag",
    "clean",
    "init",
)

MESSAGE_PLACEHOLDER = "<message>"
NEW_BRANCH_PLACEHOLDER = "<new branch>"
REMOTE_NAME_PLACEHOLDER = "<name>"
REMOTE_URL_PLACEHOLDER = "<url>"
TAG_NAME_PLACEHOLDER = "<tag name>"


class LiveData(Protocol):
    """Repository facts fetched on demand to populate leaves."""

    def branches(self) -> list[str]: ...

    def remotes(self) -> list[str]: ...

    def changed_files(self) -> list[str]: ...

    def staged_files(self) -> list[str]: ...


@dataclass(frozen=True)
class TextPrompt:
    """Free-text leaf: ``placeholder`` is listed, ``label`` titles the prompt."""

    placeholder: str
    label: str


@dataclass(frozen=True)
class CommandNode:
    node_id: str
    produce: Callable[[Sequence[str], LiveData], list[str]]
    prompts: tuple[TextPrompt, ...] = ()

    def prompt_for(self, option: str) -> TextPrompt | None:
        for prompt in self.prompts:
            if prompt.placeholder == option:
                return prompt
        return None


def _remaining(candidates: Sequence[str], tokens: Sequence[str]) -> list[str]:
    used = set(tokens)
    return [candidate for candidate in candidates if candidate not in used]


def _path_options(paths: Sequence[str]) -> list[str]:
    """Quote live paths so each one survives the executor's shell split."""
    return [shlex.quote(path) for path in paths]


def _with_fallback(values: Sequence[str], fallback: Sequence[str]) -> list[str]:
    cleaned = [value for value in values if value]
    return cleaned if cleaned else list(fallback)


def _positional(tokens: Sequence[str]) -> list[str]:
    """Non-flag tokens after the primary command."""
    return [token for token in tokens[1:] if not token.startswith("-")]


# -- node producers -----------------------------------------------------------


def _root(_tokens: Sequence[str], _live: LiveData) -> list[str]:
    return list(ROOT_COMMANDS)


def _done(_tokens: Sequence[str], _live: LiveData) -> list[str]:
    return []


def _status(tokens: Sequence[str], _live: LiveData) -> list[str]:
    return _remaining(("-s", "-b", "-v", "--ignored"), tokens)


def _add(tokens: Sequence[str], live: LiveData) -> list[str]:
    return _remaining((".", "-A", *_path_options(live.changed_files())), tokens)


def _commit(tokens: Sequence[str], _live: LiveData) -> list[str]:
    return _remaining(("-m", "-a", "--amend", "--no-edit"), tokens)


def _message(_tokens: Sequence[str], _live: LiveData) -> list[str]:
    return [MESSAGE_PLACEHOLDER]


def _push(tokens: Sequence[str], live: LiveData) -> list[str]:
    remotes = _with_fallback(live.remotes(), DEFAULT_REMOTES)
    if len(tokens) == 1:
        return [*remotes, "-u", "--tags", "--force"]
    return [*remotes, *_remaining(("-u", "--tags"), tokens)]


def _pull(tokens: Sequence[str], live: LiveData) -> list[str]:
    remotes = _with_fallback(live.remotes(), DEFAULT_REMOTES)
    return [*remotes, *_remaining(("--rebase", "--ff-only"), tokens)]


def _remote_branch(_tokens: Sequence[str], live: LiveData) -> list[str]:
    return _with_fallback(live.branches(), DEFAULT_BRANCHES)


def _fetch(tokens: Sequence[str], live: LiveData) -> list[str]:
    remotes = _with_fallback(live.remotes(), DEFAULT_REMOTES)
    return [*remotes, *_remaining(("--all", "--prune"), tokens)]


def _branch(tokens: Sequence[str], _live: LiveData) -> list[str]:
    if len(tokens) == 1:
        return [NEW_BRANCH_PLACEHOLDER, "-a", "-v", "-d", "-D"]
    return _remaining(("-a", "-v"), tokens)


def _branch_pick(_tokens: Sequence[str], live: LiveData) -> list[str]:
    return _with_fallback(live.branches(), DEFAULT_BRANCHES)


def _new_branch(_tokens: Sequence[str], _live: LiveData) -> list[str]:
    return [NEW_BRANCH_PLACEHOLDER]


def _checkout(tokens: Sequence[str], live: LiveData) -> list[str]:
    branches = _with_fallback(live.branches(), DEFAULT_BRANCHES)
    if len(tokens) == 1:
        return [*branches, "-b", "--", "-f"]
    return branches


def _checkout_paths(tokens: Sequence[str], live: LiveData) -> list[str]:
    return _remaining(_path_options(live.changed_files()), tokens)


def _merge(tokens: Sequence[str], live: LiveData) -> list[str]:
    branches = _with_fallback(live.branches(), DEFAULT_BRANCHES)
    if len(tokens) == 1:
        return [*branches, "--no-ff", "--squash", "--abort"]
    return [*branches, *_remaining(("--no-ff", "--squash"), tokens)]


def _rebase(tokens: Sequence[str], live: LiveData) -> list[str]:
    branches = _with_fallback(live.branches(), DEFAULT_BRANCHES)
    if len(tokens) == 1:
        return [*branches, "-i", "--continue", "--abort"]
    return branches


def _log(tokens: Sequence[str], _live: LiveData) -> list[str]:
    return _remaining(("--oneline", "--graph", "--all", "--stat", "-p", "-5"), tokens)


def _diff(tokens: Sequence[str], live: LiveData) -> list[str]:
    return _remaining(("--staged", "--stat", *_path_options(live.changed_files())), tokens)


def _stash(_tokens: Sequence[str], _live: LiveData) -> list[str]:
    return ["push", "pop", "apply", "list", "show", "drop"]


def _stash_push(tokens: Sequence[str], _live: LiveData) -> list[str]:
    return _remaining(("-m", "-u"), tokens)


def _stash_show(tokens: Sequence[str], _live: LiveData) -> list[str]:
    return _remaining(("-p",), tokens)


def _reset(tokens: Sequence[str], live: LiveData) -> list[str]:
    if len(tokens) == 1:
        return ["--soft", "--mixed", "--hard", "HEAD", *_path_options(live.staged_files())]
    return _remaining(_path_options(live.staged_files()), tokens)


def _reset_target(_tokens: Sequence[str], _live: LiveData) -> list[str]:
    return ["HEAD", "HEAD~1", "HEAD~2"]


def _remote(_tokens: Sequence[str], _live: LiveData) -> list[str]:
    return ["-v", "add", "remove"]


def _remote_name(_tokens: Sequence[str], _live: LiveData) -> list[str]:
    return [REMOTE_NAME_PLACEHOLDER]


def _remote_url(_tokens: Sequence[str], _live: LiveData) -> list[str]:
    return [REMOTE_URL_PLACEHOLDER]


def _remote_pick(_tokens: Sequence[str], live: LiveData) -> list[str]:
    return _with_fallback(live.remotes(), DEFAULT_REMOTES)


def _tag(_tokens: Sequence[str], _live: LiveData) -> list[str]:
    return [TAG_NAME_PLACEHOLDER, "-l", "-a"]


def _tag_name(_tokens: Sequence[str], _live: LiveData) -> list[str]:
    return [TAG_NAME_PLACEHOLDER]


def _tag_annotate(_tokens: Sequence[str], _live: LiveData) -> list[str]:
    return ["-m"]


def _clean(_tokens: Sequence[str], _live: LiveData) -> list[str]:
    return ["-n", "-f", "-fd"]


MESSAGE_PROMPT = TextPrompt(MESSAGE_PLACEHOLDER, "Message")
NEW_BRANCH_PROMPT = TextPrompt(NEW_BRANCH_PLACEHOLDER, "New branch name")

COMMAND_NODES: dict[str, CommandNode] = {
    node.node_id: node
    for node in (
        CommandNode("root", _root),
        CommandNode("done", _done),
        CommandNode("status", _status),
        CommandNode("add", _add),
        CommandNode("commit", _commit),
        CommandNode("commit.message", _message, (TextPrompt(MESSAGE_PLACEHOLDER, "Commit message"),)),
        CommandNode("push", _push),
        CommandNode("push.branch", _remote_branch),
        CommandNode("pull", _pull),
        CommandNode("pull.branch", _remote_branch),
        CommandNode("fetch", _fetch),
        CommandNode("branch", _branch, (NEW_BRANCH_PROMPT,)),
        CommandNode("branch.delete", _branch_pick),
        CommandNode("checkout", _checkout),
        CommandNode("checkout.new", _new_branch, (NEW_BRANCH_PROMPT,)),
        CommandNode("checkout.paths", _checkout_paths),
        CommandNode("merge", _merge),
        CommandNode("rebase", _rebase),
        CommandNode("log", _log),
        CommandNode("diff", _diff),
        CommandNode("stash", _stash),
        CommandNode("stash.push", _stash_push),
        CommandNode("stash.message", _message, (TextPrompt(MESSAGE_PLACEHOLDER, "Stash message"),)),
        CommandNode("stash.show", _stash_show),
        CommandNode("reset", _reset),
        CommandNode("reset.target", _reset_target),
        CommandNode("remote", _remote),
        CommandNode("remote.add.name", _remote_name, (TextPrompt(REMOTE_NAME_PLACEHOLDER, "Remote name"),)),
        CommandNode("remote.add.url", _remote_url, (TextPrompt(REMOTE_URL_PLACEHOLDER, "Remote URL"),)),
        CommandNode("remote.remove", _remote_pick),
        CommandNode("tag", _tag, (TextPrompt(TAG_NAME_PLACEHOLDER, "Tag name"),)),
        CommandNode("tag.name", _tag_name, (TextPrompt(TAG_NAME_PLACEHOLDER, "Tag name"),)),
        CommandNode("tag.annotate", _tag_annotate),
        CommandNode("tag.message", _message, (TextPrompt(MESSAGE_PLACEHOLDER, "Tag message"),)),
        CommandNode("clean", _clean),
    )
}


# -- token sequence -> node id ------------------------------------------------


def _status_id(tokens: Sequence[str]) -> str:
    return "status"


def _add_id(tokens: Sequence[str]) -> str:
    return "done" if {".", "-A"} & set(tokens[1:]) else "add"


def _commit_id(tokens: Sequence[str]) -> str:
    if tokens[-1] == "-m":
        return "commit.message"
    return "commit"


def _remote_then_branch_id(command: str) -> Callable[[Sequence[str]], str]:
    def resolve(tokens: Sequence[str]) -> str:
        positional = _positional(tokens)
        if not positional:
            return command
        if len(positional) == 1:
            return f"{command}.branch"
        return "done"

    return resolve


def _fetch_id(tokens: Sequence[str]) -> str:
    if "--all" in tokens or _positional(tokens):
        return "done"
    return "fetch"


def _branch_id(tokens: Sequence[str]) -> str:
    if len(tokens) == 1:
        return "branch"
    if tokens[1] in {"-d", "-D"}:
        return "branch.delete" if len(tokens) == 2 else "done"
    if tokens[1] in {"-a", "-v"}:
        return "branch"
    return "done"


def _checkout_id(tokens: Sequence[str]) -> str:
    if len(tokens) == 1:
        return "checkout"
    if tokens[1] == "-b":
        return "checkout.new" if len(tokens) == 2 else "done"
    if tokens[1] == "--":
        return "checkout.paths"
    if tokens[1] == "-f":
        return "checkout" if len(tokens) == 2 else "done"
    return "done"


def _merge_id(tokens: Sequence[str]) -> str:
    if "--abort" in tokens or _positional(tokens):
        return "done"
    return "merge"


def _rebase_id(tokens: Sequence[str]) -> str:
    if {"--continue", "--abort"} & set(tokens) or _positional(tokens):
        return "done"
    return "rebase"


def _stash_id(tokens: Sequence[str]) -> str:
    if len(tokens) == 1:
        return "stash"
    sub = tokens[1]
    if sub == "push":
        if tokens[-1] == "-m":
            return "stash.message"
        return "stash.push"
    if sub == "show":
        return "stash.show"
    return "done"


def _reset_id(tokens: Sequence[str]) -> str:
    if len(tokens) == 1:
        return "reset"
    if tokens[1] in {"--soft", "--mixed", "--hard"}:
        return "reset.target" if len(tokens) == 2 else "done"
    if tokens[1] == "HEAD":
        return "done"
    return "reset"


def _remote_id(tokens: Sequence[str]) -> str:
    if len(tokens) == 1:
        return "remote"
    if tokens[1] == "add":
        if len(tokens) == 2:
            return "remote.add.name"
        if len(tokens) == 3:
            return "remote.add.url"
        return "done"
    if tokens[1] == "remove":
        return "remote.remove" if len(tokens) == 2 else "done"
    return "done"


def _tag_id(tokens: Sequence[str]) -> str:
    if len(tokens) == 1:
        return "tag"
    if tokens[1] == "-a":
        if len(tokens) == 2:
            return "tag.name"
        if len(tokens) == 3:
            return "tag.annotate"
        if len(tokens) == 4:
            return "tag.message"
    return "done"


def _clean_id(tokens: Sequence[str]) -> str:
    return "clean" if len(tokens) == 1 else "done"


def _log_id(tokens: Sequence[str]) -> str:
    return "log"


def _diff_id(tokens: Sequence[str]) -> str:
    return "diff"


def _init_id(tokens: Sequence[str]) -> str:
    return "done"


_NODE_RESOLVERS: dict[str, Callable[[Sequence[str]], str]] = {
    "status": _status_id,
    "add": _add_id,
    "commit": _commit_id,
    "push": _remote_then_branch_id("push"),
    "pull": _remote_then_branch_id("pull"),
    "fetch": _fetch_id,
    "branch": _branch_id,
    "checkout": _checkout_id,
    "merge": _merge_id,
    "rebase": _rebase_id,
    "log": _log_id,
    "diff": _diff_id,
    "stash": _stash_id,
    "reset": _reset_id,
    "remote": _remote_id,
    "tag": _tag_id,
    "clean": _clean_id,
    "init": _init_id,
}


def node_id_for(tokens: Sequence[str]) -> str:
    """Return the node id responsible for the options after ``tokens``."""
    if not tokens:
        return "root"
    resolver = _NODE_RESOLVERS.get(tokens[0])
    if resolver is None:
        return "done"
    return resolver(tokens)


def node_for(tokens: Sequence[str]) -> CommandNode:
    return COMMAND_NODES[node_id_for(tokens)]


def next_options(tokens: Sequence[str], live: LiveData) -> list[str]:
    """Return the selectable options after ``tokens``.

    Any non-empty token sequence ends with the ``Execute``/``Clear`` controls,
    so the list is never empty.
    """
    options = node_for(tokens).produce(tokens, live)
    if not tokens:
        return options
    options = [option for option in dict.fromkeys(options) if option not in CONTROL_OPTIONS]
    return [*options, *CONTROL_OPTIONS]
