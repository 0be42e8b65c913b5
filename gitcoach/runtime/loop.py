"""Main interactive event loop for the terminal UI.

Coordinates status refreshes, rendering, and key dispatch in strict
sequence. Feature logic lives in the injected callbacks.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from ..exceptions import GitCoachError
from ..input import read_key
from ..logging_config import get_logger
from ..state import AppState
from ..terminal import TerminalController, TerminalSize, get_terminal_size

logger = get_logger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    poll_timeout_ms: int
    idle_sleep_seconds: float
    status_refresh_seconds: float


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    refresh_status: Callable[[], None]
    render: Callable[[], None]
    handle_key: Callable[[str], bool]
    terminal_size: Callable[[], TerminalSize] = get_terminal_size


def _refresh_due(state: AppState, timing: RuntimeLoopTiming, now: float) -> bool:
    if state.refresh_pending:
        return True
    if timing.status_refresh_seconds <= 0:
        return False
    return now - state.last_status_refresh >= timing.status_refresh_seconds


def run_main_loop(
    state: AppState,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run the interactive loop until ``state.should_exit`` is set.

    Each iteration: resize bookkeeping, pending or periodic status refresh,
    render when dirty, then one bounded key poll and dispatch.
    """
    ops = callbacks
    with terminal.raw_mode():
        while not state.should_exit:
            size = ops.terminal_size()
            if size != state.terminal_size:
                state.terminal_size = size
                state.dirty = True

            now = time.monotonic()
            if _refresh_due(state, timing, now):
                state.refresh_pending = False
                state.last_status_refresh = now
                try:
                    ops.refresh_status()
                except GitCoachError as exc:
                    logger.warning("status refresh failed: %s", exc)
                    state.set_error(str(exc))
                    state.dirty = True

            if state.dirty:
                ops.render()
                state.dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=timing.poll_timeout_ms)
            except KeyboardInterrupt:
                # Raw mode normally delivers Ctrl+C as a key; a stray SIGINT is ignored.
                continue
            if key == "":
                time.sleep(timing.idle_sleep_seconds)
                continue

            ops.handle_key(key)
            state.dirty = True
    logger.info("main loop finished")
