"""CLI argument and default-path behavior tests.

Verifies how ``gitcoach.cli.main`` chooses the repository directory and
which runtime entry point it dispatches to.
"""

from __future__ import annotations

import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from gitcoach import cli


class CliTests(unittest.TestCase):
    def _run(self, argv: list[str], default_path: Path | None = None):
        with mock.patch.object(sys, "argv", ["gitcoach", *argv]), mock.patch(
            "gitcoach.cli.run_app"
        ) as run_app, mock.patch("gitcoach.cli.run_tutorial_only") as run_tutorial_only, mock.patch(
            "gitcoach.cli.setup_logging", return_value=None
        ) as setup_logging:
            cli.main(default_path=default_path)
        return run_app, run_tutorial_only, setup_logging

    def test_main_defaults_to_current_working_directory_when_no_path_arg(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            previous_cwd = Path.cwd()
            try:
                os.chdir(root)
                run_app, run_tutorial_only, _setup = self._run([])
            finally:
                os.chdir(previous_cwd)

        run_app.assert_called_once_with(root, dry_run=False, no_color=False, theme_name=None)
        run_tutorial_only.assert_not_called()

    def test_explicit_path_and_flags_are_forwarded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            run_app, _tutorial, setup_logging = self._run([str(root), "--dry-run", "--no-color", "--debug"])

        run_app.assert_called_once_with(root, dry_run=True, no_color=True, theme_name=None)
        setup_logging.assert_called_once_with(debug=True)

    def test_theme_option_is_forwarded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            run_app, _tutorial, _setup = self._run([str(root), "--theme", "ocean"])

        run_app.assert_called_once_with(root, dry_run=False, no_color=False, theme_name="ocean")

    def test_unknown_theme_is_rejected_by_parser(self) -> None:
        with mock.patch("sys.stderr"), self.assertRaises(SystemExit) as ctx:
            cli.build_parser().parse_args(["--theme", "neon"])
        self.assertEqual(ctx.exception.code, 2)

    def test_missing_path_exits(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "nope"
            with self.assertRaises(SystemExit) as ctx:
                self._run([str(missing)])
        self.assertIn("Path not found", str(ctx.exception.code))

    def test_file_path_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "file.txt"
            target.write_text("x\n", encoding="utf-8")
            with self.assertRaises(SystemExit) as ctx:
                self._run([str(target)])
        self.assertIn("Not a directory", str(ctx.exception.code))

    def test_tutorial_flag_bypasses_main_loop(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            run_app, run_tutorial_only, _setup = self._run(["--tutorial"], default_path=Path(tmp))

        run_app.assert_not_called()
        run_tutorial_only.assert_called_once_with(no_color=False, theme_name=None)

    def test_unexpected_error_exits_nonzero_and_is_logged(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, mock.patch.object(
            sys, "argv", ["gitcoach", tmp]
        ), mock.patch("gitcoach.cli.run_app", side_effect=RuntimeError("boom")), mock.patch(
            "gitcoach.cli.setup_logging", return_value=None
        ), mock.patch.object(cli.logger, "exception") as log_exception, mock.patch("sys.stderr"):
            with self.assertRaises(SystemExit) as ctx:
                cli.main()

        self.assertEqual(ctx.exception.code, 1)
        log_exception.assert_called_once()


if __name__ == "__main__":
    unittest.main()
