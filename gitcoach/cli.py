"""Command-line front door for gitcoach.

Parses CLI options, resolves the repository directory, configures logging,
then dispatches into the interactive runtime or the standalone tutorial.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .logging_config import get_logger, setup_logging
from .runtime import run_app, run_tutorial_only
from .ui_theme import available_theme_names

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitcoach",
        description="Inspect a git working tree and build git commands interactively.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Repository directory. Defaults to current directory.")
    parser.add_argument("--dry-run", action="store_true", help="Show commands instead of running them.")
    parser.add_argument("--tutorial", action="store_true", help="Run the guided tutorial and exit.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--theme",
        choices=available_theme_names(),
        default=None,
        help="UI color theme. Overrides the config file.",
    )
    parser.add_argument("--debug", action="store_true", help="Write debug records to the log file.")
    return parser


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch gitcoach.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args()

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path).expanduser()
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")

    log_path = setup_logging(debug=args.debug)
    try:
        if args.tutorial:
            run_tutorial_only(no_color=args.no_color, theme_name=args.theme)
        else:
            run_app(path.resolve(), dry_run=args.dry_run, no_color=args.no_color, theme_name=args.theme)
    except Exception:
        logger.exception("gitcoach terminated with an unexpected error")
        hint = f" (details in {log_path})" if log_path is not None else ""
        print(f"gitcoach: unexpected error{hint}", file=sys.stderr)
        raise SystemExit(1) from None


if __name__ == "__main__":
    main()
