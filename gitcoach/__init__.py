"""gitcoach: an interactive terminal coach for git.

``main`` is the CLI entry point; the UI, builder and status parser live in
submodules and are imported on first use.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Import and run the CLI entry point."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
