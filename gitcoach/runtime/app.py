"""Application wiring for the interactive session.

Builds the executor, state, builder, dispatcher and renderer, binds the
modal collaborators to the live terminal, and hands control to
``run_main_loop``.
"""

from __future__ import annotations

import sys
import time
from collections import deque
from pathlib import Path

from ..builder import CommandBuilder, RepositoryLiveData
from ..config import AppConfig, load_app_config
from ..exceptions import GitCoachError
from ..executor import GitExecutor
from ..git_status import RepositoryStatus, load_repository_status
from ..input import DispatchContext, KeyDispatcher, read_key
from ..logging_config import get_logger
from ..render import render_frame
from ..render.dialogs import confirm, prompt_text
from ..render.help import render_help_page
from ..render.surface import TerminalSurface
from ..state import AppState
from ..terminal import TerminalController, get_terminal_size
from ..tutorial import run_tutorial
from ..ui_theme import resolve_theme
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop

logger = get_logger(__name__)


def _initial_status(executor: GitExecutor) -> tuple[RepositoryStatus, str | None]:
    try:
        return load_repository_status(executor), None
    except GitCoachError as exc:
        logger.warning("initial status read failed: %s", exc)
        return RepositoryStatus.not_a_repository(), str(exc)


def run_app(
    repo_path: Path,
    *,
    dry_run: bool = False,
    no_color: bool = False,
    theme_name: str | None = None,
    config: AppConfig | None = None,
) -> None:
    """Run the interactive TUI against ``repo_path`` until the user quits."""
    if config is None:
        config = load_app_config()
    theme = resolve_theme(theme_name or config.theme, no_color=no_color)
    output_style = None if no_color else config.output_style

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    surface = TerminalSurface(stdout_fd)

    executor = GitExecutor(repo_path, dry_run=dry_run)
    status, startup_error = _initial_status(executor)
    state = AppState(
        status=status,
        terminal_size=get_terminal_size(),
        tooltips_enabled=config.tooltips_enabled,
        messages=deque(maxlen=config.message_log_size),
        dry_run=dry_run,
        last_status_refresh=time.monotonic(),
    )
    logger.info("session started in %s (dry_run=%s, repository=%s)", repo_path, dry_run, status.is_repository)
    if dry_run:
        state.log("Dry run: commands are shown, never executed")
    if startup_error:
        state.set_error(startup_error)

    builder = CommandBuilder(state.builder, RepositoryLiveData(executor, lambda: state.status))
    builder.recompute()

    def read_blocking() -> str:
        # EOF on stdin reads as a cancel so modal loops cannot spin.
        return read_key(stdin_fd) or "ESC"

    def refresh_status() -> None:
        new_status = load_repository_status(executor)
        if new_status != state.status:
            logger.debug("status changed on %s", new_status.current_branch)
            state.status = new_status
            builder.sync_options()
            state.dirty = True

    def show_help_modal() -> None:
        render_help_page(surface, state.terminal_size, theme)
        read_blocking()

    def start_tutorial() -> None:
        run_tutorial(surface, read_blocking, get_terminal_size, theme)
        state.log("Tutorial closed")

    def ask_text(label: str) -> str | None:
        return prompt_text(surface, read_blocking, state.terminal_size, theme, label)

    def ask_confirm(command: str) -> bool:
        accepted = confirm(surface, read_blocking, state.terminal_size, theme, command)
        # The frame under the dialog is stale either way.
        state.dirty = True
        return accepted

    executor.set_confirm(ask_confirm)
    dispatcher = KeyDispatcher(
        DispatchContext(
            state=state,
            builder=builder,
            executor=executor,
            refresh_status=refresh_status,
            show_help_modal=show_help_modal,
            run_tutorial=start_tutorial,
            prompt_text=ask_text,
        )
    )

    run_main_loop(
        state,
        terminal,
        stdin_fd,
        RuntimeLoopTiming(
            poll_timeout_ms=config.poll_timeout_ms,
            idle_sleep_seconds=config.idle_sleep_seconds,
            status_refresh_seconds=config.status_refresh_seconds,
        ),
        RuntimeLoopCallbacks(
            refresh_status=refresh_status,
            render=lambda: render_frame(surface, state, theme, output_style),
            handle_key=dispatcher.handle,
        ),
    )


def run_tutorial_only(
    *, no_color: bool = False, theme_name: str | None = None, config: AppConfig | None = None
) -> int:
    """Run the tutorial pages in raw mode without starting the main loop."""
    if config is None:
        config = load_app_config()
    theme = resolve_theme(theme_name or config.theme, no_color=no_color)
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    surface = TerminalSurface(stdout_fd)
    with terminal.raw_mode():
        return run_tutorial(surface, lambda: read_key(stdin_fd) or "ESC", get_terminal_size, theme)
