"""Full-frame rendering for the three-pane interface.

Every call redraws header, panes, footer and the floating tooltip from
``AppState``; nothing is diffed against the previous frame. Composition
happens inside one ``TerminalSurface.frame()`` so the screen never shows a
half-drawn state.
"""

from __future__ import annotations

from ..ansi import display_width, wrap_plain_text
from ..git_status import RepositoryStatus
from ..highlight import colorize_output, sanitize_terminal_text
from ..layout import Layout, Pane, PaneRect, compute_layout
from ..state import AppState
from ..tooltips import TooltipInfo, place_tooltip, resolve, resolve_option
from ..ui_theme import UITheme
from .help import footer_hint_line
from .surface import BOX_HORIZONTAL, TerminalSurface, styled

APP_TITLE = "gitcoach"
TOOLTIP_MAX_WIDTH = 44
LOG_TAIL_LINES = 3


def _draw_lines(surface: TerminalSurface, rect: PaneRect, lines: list[str]) -> None:
    for offset, line in enumerate(lines[: rect.height]):
        surface.write_line(rect.y + offset, rect.x, line, rect.width)


def status_lines(status: RepositoryStatus, theme: UITheme) -> list[str]:
    """Branch, tracking and the four path sections of the status pane."""
    if not status.is_repository:
        return [
            styled(status.current_branch, theme.warning),
            "",
            "Choose 'init' in the builder to",
            "create a repository here.",
        ]

    lines = []
    if status.repo_name:
        lines.append("Repo:   " + styled(status.repo_name, theme.title))
    lines.append("Branch: " + styled(status.current_branch, theme.branch))
    if status.tracking_ref:
        lines.append(f"Upstream: {status.tracking_ref}  ↑{status.ahead} ↓{status.behind}")
    else:
        lines.append(styled("No upstream branch", theme.dim))
    lines.append("")

    if status.is_clean:
        lines.append(styled("Working tree clean", theme.dim))
        return lines

    sections = (
        ("Staged", status.staged, theme.staged),
        ("Modified", status.modified, theme.modified),
        ("Untracked", status.untracked, theme.untracked),
        ("Deleted", status.deleted, theme.deleted),
    )
    for title, paths, color in sections:
        if not paths:
            continue
        lines.append(styled(f"{title} ({len(paths)})", theme.heading))
        lines.extend("  " + styled(sanitize_terminal_text(path), color) for path in paths)
    return lines


def option_window(state: AppState, rows: int) -> int:
    """First visible option index so the selection stays inside ``rows``."""
    if rows <= 0:
        return 0
    return max(0, state.builder.selected_index - rows + 1)


def builder_lines(state: AppState, theme: UITheme, width: int, rows: int) -> list[str]:
    """Command preview, separator, then the visible slice of options."""
    builder = state.builder
    command = " ".join(["git", *builder.tokens])
    lines = [styled(command, theme.title), styled(BOX_HORIZONTAL * width, theme.dim)]
    if not builder.options:
        lines.append(styled("(no options)", theme.dim))
        return lines

    option_rows = max(0, rows - len(lines))
    start = option_window(state, option_rows)
    focused = state.selected_pane is Pane.COMMAND_BUILDER
    for index in range(start, min(len(builder.options), start + option_rows)):
        option = builder.options[index]
        if index != builder.selected_index:
            lines.append(f"  {option}")
        elif focused:
            lines.append(styled(f"> {option}".ljust(width), theme.reverse))
        else:
            lines.append(styled(f"> {option}", theme.key))
    return lines


def tooltip_lines(info: TooltipInfo, theme: UITheme, width: int) -> list[str]:
    lines = list(wrap_plain_text(info.description, width))
    if info.examples:
        lines.append("")
        lines.extend(styled(f"$ {example}", theme.key) for example in info.examples)
    if info.warning:
        lines.append("")
        lines.extend(styled(line, theme.warning) for line in wrap_plain_text(f"! {info.warning}", width))
    return lines


def help_pane_lines(state: AppState, theme: UITheme, width: int, rows: int, output_style: str | None) -> list[str]:
    """Tooltip for the current tokens, the last command output, then the log tail."""
    info = resolve(state.builder.tokens)
    lines = [styled(info.title, theme.heading), *tooltip_lines(info, theme, width)]

    log_tail = list(state.messages)[-LOG_TAIL_LINES:]
    log_block = ["", styled("Log", theme.heading), *(styled(message, theme.dim) for message in log_tail)] if log_tail else []

    if state.last_command is not None:
        lines.append("")
        lines.append(styled("Output", theme.heading) + styled(f"  git {state.last_command}", theme.dim))
        if output_style is None:
            output = [sanitize_terminal_text(line) for line in state.last_output]
        else:
            output = colorize_output(state.last_output, state.last_command, output_style)
        room = max(0, rows - len(lines) - len(log_block))
        if not output:
            output = [styled("(no output)", theme.dim)]
        if len(output) > room and room > 0:
            output = output[: room - 1] + [styled(f"... {len(output) - room + 1} more lines", theme.dim)]
        lines.extend(output[:room])

    lines.extend(log_block)
    return lines


def _render_header(surface: TerminalSurface, state: AppState, theme: UITheme, rect: PaneRect) -> None:
    title = styled(APP_TITLE, theme.title) + styled(" interactive git", theme.dim)
    badge = styled(" DRY RUN ", theme.dry_run_badge) if state.dry_run else ""
    gap = max(1, rect.width - display_width(title) - display_width(badge) - 1)
    surface.write_line(rect.y, rect.x, " " + title + " " * gap + badge, rect.width)

    status = state.status
    if status.is_repository:
        summary = f" {status.repo_name or '?'} on " + styled(status.current_branch, theme.branch)
        if status.tracking_ref:
            summary += f"  ({status.tracking_ref} ↑{status.ahead} ↓{status.behind})"
        if status.is_clean:
            summary += styled("  clean", theme.dim)
    else:
        summary = " " + styled(status.current_branch, theme.warning)
    surface.write_line(rect.y + 1, rect.x, summary, rect.width)
    surface.write_line(rect.y + 2, rect.x, BOX_HORIZONTAL * rect.width, rect.width, theme.border)


def _render_footer(surface: TerminalSurface, state: AppState, theme: UITheme, rect: PaneRect) -> None:
    if state.error_message:
        message = styled(sanitize_terminal_text(state.error_message), theme.error)
    elif state.messages:
        message = styled(state.messages[-1], theme.dim)
    else:
        message = ""
    surface.write_line(rect.y, rect.x, " " + message, rect.width)
    surface.write_line(rect.y + 1, rect.x, " " + footer_hint_line(theme), rect.width)


def _render_tooltip(surface: TerminalSurface, state: AppState, theme: UITheme, layout: Layout) -> None:
    pane = layout.pane(Pane.COMMAND_BUILDER)
    inner = pane.inner()
    builder = state.builder
    option = builder.options[builder.selected_index] if builder.options else None
    info = resolve_option(builder.tokens, option) if option is not None else resolve(builder.tokens)

    size = state.terminal_size
    box_width = min(TOOLTIP_MAX_WIDTH, size.width)
    body = tooltip_lines(info, theme, max(1, box_width - 4))
    box_height = len(body) + 2

    option_rows = max(0, inner.height - 2)
    row = builder.selected_index - option_window(state, option_rows)
    anchor_y = inner.y + 2 + row
    anchor_x = inner.x + 2 + display_width(option or "")

    x, y, width, height = place_tooltip(anchor_x, anchor_y, box_width, box_height, pane, size.width, size.height)
    surface.draw_box(x, y, width, height, info.title, theme.tooltip_border)
    _draw_lines(surface, PaneRect(x + 2, y + 1, max(0, width - 4), max(0, height - 2)), body)


def render_frame(
    surface: TerminalSurface,
    state: AppState,
    theme: UITheme,
    output_style: str | None = None,
) -> None:
    """Redraw the whole screen from ``state``.

    ``output_style`` names the Pygments style for command output; ``None``
    leaves output uncolored.
    """
    layout = compute_layout(state.terminal_size)
    with surface.frame():
        surface.clear_screen()
        _render_header(surface, state, theme, layout.header)

        for pane in Pane:
            rect = layout.pane(pane)
            border = theme.border_focused if pane is state.selected_pane else theme.border
            surface.draw_box(rect.x, rect.y, rect.width, rect.height, pane.title, border)
            inner = rect.inner()
            if pane is Pane.STATUS:
                lines = status_lines(state.status, theme)
            elif pane is Pane.COMMAND_BUILDER:
                lines = builder_lines(state, theme, inner.width, inner.height)
            else:
                lines = help_pane_lines(state, theme, inner.width, inner.height, output_style)
            _draw_lines(surface, inner, lines)

        _render_footer(surface, state, theme, layout.footer)

        if state.tooltips_enabled and state.selected_pane is Pane.COMMAND_BUILDER:
            _render_tooltip(surface, state, theme, layout)
