"""Command builder: option tree plus the state it drives."""

from .state import CommandBuilder, CommandBuilderState, RepositoryLiveData
from .tree import (
    CLEAR,
    CONTROL_OPTIONS,
    DEFAULT_BRANCHES,
    DEFAULT_REMOTES,
    EXECUTE,
    ROOT_COMMANDS,
    CommandNode,
    LiveData,
    TextPrompt,
    next_options,
    node_for,
    node_id_for,
)

__all__ = [
    "CLEAR",
    "CONTROL_OPTIONS",
    "DEFAULT_BRANCHES",
    "DEFAULT_REMOTES",
    "EXECUTE",
    "ROOT_COMMANDS",
    "CommandBuilder",
    "CommandBuilderState",
    "CommandNode",
    "LiveData",
    "TextPrompt",
    "RepositoryLiveData",
    "next_options",
    "node_for",
    "node_id_for",
]
