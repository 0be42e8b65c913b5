"""UI theme definitions and selection helpers.

Themes are ANSI palettes for chrome, status sections, and dialogs. Syntax
highlighting of command output is a separate Pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reverse: str
    border: str
    border_focused: str
    title: str
    heading: str
    key: str
    dim: str
    branch: str
    staged: str
    modified: str
    untracked: str
    deleted: str
    warning: str
    error: str
    dry_run_badge: str
    tooltip_border: str
    tooltip_title: str
    modal_border: str
    modal_title: str


DEFAULT_THEME = UITheme(
    name="default",
    reverse="\033[7m",
    border="\033[2;38;5;250m",
    border_focused="\033[1;38;5;81m",
    title="\033[1;38;5;45m",
    heading="\033[1;38;5;81m",
    key="\033[38;5;229m",
    dim="\033[2;38;5;250m",
    branch="\033[1;38;5;141m",
    staged="\033[38;5;42m",
    modified="\033[38;5;214m",
    untracked="\033[38;5;203m",
    deleted="\033[38;5;170m",
    warning="\033[1;38;5;208m",
    error="\033[1;38;5;196m",
    dry_run_badge="\033[1;30;48;5;214m",
    tooltip_border="\033[38;5;229m",
    tooltip_title="\033[1;38;5;229m",
    modal_border="\033[38;5;45m",
    modal_title="\033[1;38;5;45m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reverse="\033[7m",
    border="\033[2;38;5;31m",
    border_focused="\033[1;38;5;45m",
    title="\033[1;38;5;39m",
    heading="\033[1;38;5;45m",
    key="\033[38;5;153m",
    dim="\033[2;38;5;110m",
    branch="\033[1;38;5;117m",
    staged="\033[38;5;84m",
    modified="\033[38;5;215m",
    untracked="\033[38;5;210m",
    deleted="\033[38;5;176m",
    warning="\033[1;38;5;215m",
    error="\033[1;38;5;203m",
    dry_run_badge="\033[1;30;48;5;117m",
    tooltip_border="\033[38;5;153m",
    tooltip_title="\033[1;38;5;153m",
    modal_border="\033[38;5;39m",
    modal_title="\033[1;38;5;39m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reverse="\033[7m",
    border="",
    border_focused="\033[1m",
    title="",
    heading="",
    key="",
    dim="",
    branch="",
    staged="",
    modified="",
    untracked="",
    deleted="",
    warning="",
    error="",
    dry_run_badge="\033[7m",
    tooltip_border="",
    tooltip_title="",
    modal_border="",
    modal_title="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode.

    The plain theme keeps reverse video and bold so selection and focus stay
    visible without color.
    """
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
