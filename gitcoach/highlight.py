"""Sanitization and Pygments highlighting for git command output.

Output is neutralized first so stray control bytes cannot move the cursor,
then patch-producing commands are colorized with the diff lexer.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import DiffLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
DEFAULT_STYLE = "monokai"

_FORMATTERS: dict[str, TerminalFormatter] = {}


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def is_patch_command(command: str) -> bool:
    """Return whether ``command`` prints unified diffs."""
    words = command.split()
    if not words:
        return False
    if words[0] in {"diff", "show"}:
        return "--stat" not in words
    if words[0] == "log":
        return "-p" in words or "--patch" in words
    if words[:2] == ["stash", "show"]:
        return "-p" in words
    return False


def _normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def colorize_output(lines: Sequence[str], command: str, style: str = DEFAULT_STYLE) -> list[str]:
    """Return display lines for ``command`` output, highlighted when it is a patch."""
    cleaned = [sanitize_terminal_text(line) for line in lines]
    if not cleaned or not is_patch_command(command):
        return cleaned

    formatter = _formatter_for_style(_normalize_style(style))
    rendered = highlight("\n".join(cleaned) + "\n", DiffLexer(), formatter)
    out = rendered.splitlines()
    # TerminalFormatter keeps one output line per input line.
    return out if len(out) == len(cleaned) else cleaned
