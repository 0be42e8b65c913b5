"""Key dispatcher tests for global shortcuts and pane-scoped actions."""

from __future__ import annotations

import subprocess
import unittest
from pathlib import Path
from unittest import mock

from gitcoach.builder import CLEAR, EXECUTE, CommandBuilder, CommandBuilderState
from gitcoach.exceptions import CommandError
from gitcoach.executor import CommandOutcome, GitExecutor, OutcomeKind
from gitcoach.git_status import RepositoryStatus
from gitcoach.input import DispatchContext, KeyDispatcher
from gitcoach.layout import Pane
from gitcoach.state import AppState


class _EmptyLiveData:
    def branches(self) -> list[str]:
        return []

    def remotes(self) -> list[str]:
        return []

    def changed_files(self) -> list[str]:
        return []

    def staged_files(self) -> list[str]:
        return []


class _RecordingExecutor:
    def __init__(self, outcome: CommandOutcome | None = None) -> None:
        self.outcome = outcome
        self.commands: list[str] = []

    def run(self, command: str, *, validate: bool = True) -> CommandOutcome:
        self.commands.append(command)
        if self.outcome is not None:
            return self.outcome
        return CommandOutcome(command=command, kind=OutcomeKind.EXECUTED, lines=("ok",))


class _ChangedFilesLiveData(_EmptyLiveData):
    def __init__(self, *paths: str) -> None:
        self._paths = list(paths)

    def changed_files(self) -> list[str]:
        return list(self._paths)


class _Harness:
    def __init__(self, executor=None, prompt_answer: str | None = "hello world", live=None) -> None:
        self.state = AppState(status=RepositoryStatus.not_a_repository())
        self.builder = CommandBuilder(self.state.builder, live if live is not None else _EmptyLiveData())
        self.builder.recompute()
        self.executor = executor if executor is not None else _RecordingExecutor()
        self.refresh_status = mock.Mock()
        self.show_help_modal = mock.Mock()
        self.run_tutorial = mock.Mock()
        self.prompt_text = mock.Mock(return_value=prompt_answer)
        self.dispatcher = KeyDispatcher(
            DispatchContext(
                state=self.state,
                builder=self.builder,
                executor=self.executor,
                refresh_status=self.refresh_status,
                show_help_modal=self.show_help_modal,
                run_tutorial=self.run_tutorial,
                prompt_text=self.prompt_text,
            )
        )

    def press(self, *keys: str) -> None:
        for key in keys:
            self.dispatcher.handle(key)

    def focus_builder(self) -> None:
        self.state.selected_pane = Pane.COMMAND_BUILDER

    def choose(self, option: str) -> None:
        self.state.builder.selected_index = self.state.builder.options.index(option)
        self.press("ENTER")


class GlobalKeyTests(unittest.TestCase):
    def test_quit_keys_set_exit_flag(self) -> None:
        for key in ("ESC", "ALT_Q", "CTRL_C"):
            with self.subTest(key=key):
                harness = _Harness()
                harness.press(key)
                self.assertTrue(harness.state.should_exit)

    def test_tab_cycles_panes(self) -> None:
        harness = _Harness()
        seen = []
        for _ in range(4):
            harness.press("TAB")
            seen.append(harness.state.selected_pane)
        self.assertEqual(seen, [Pane.COMMAND_BUILDER, Pane.HELP, Pane.STATUS, Pane.COMMAND_BUILDER])

    def test_t_toggles_tooltips_in_any_pane(self) -> None:
        harness = _Harness()
        harness.press("t")
        self.assertFalse(harness.state.tooltips_enabled)
        harness.focus_builder()
        harness.press("T")
        self.assertTrue(harness.state.tooltips_enabled)

    def test_f1_and_alt_t_run_modal_collaborators(self) -> None:
        harness = _Harness()
        harness.press("F1", "ALT_T")
        harness.show_help_modal.assert_called_once_with()
        harness.run_tutorial.assert_called_once_with()

    def test_unbound_key_is_reported_unhandled(self) -> None:
        harness = _Harness()
        self.assertFalse(harness.dispatcher.handle("x"))
        self.assertFalse(harness.dispatcher.handle("UP"))


class StatusPaneTests(unittest.TestCase):
    def test_r_refreshes_status(self) -> None:
        harness = _Harness()
        harness.press("r", "R")
        self.assertEqual(harness.refresh_status.call_count, 2)

    def test_refresh_failure_lands_in_error_slot(self) -> None:
        harness = _Harness()
        harness.refresh_status.side_effect = CommandError(128, "index.lock exists", "status --porcelain")
        harness.press("r")
        self.assertIn("index.lock exists", harness.state.error_message or "")
        self.assertFalse(harness.state.should_exit)

    def test_next_handled_action_clears_error(self) -> None:
        harness = _Harness()
        harness.refresh_status.side_effect = CommandError(1, "boom")
        harness.press("r")
        self.assertIsNotNone(harness.state.error_message)
        harness.press("TAB")
        self.assertIsNone(harness.state.error_message)

    def test_builder_keys_do_nothing_outside_builder_pane(self) -> None:
        harness = _Harness()
        harness.press("DOWN", "ENTER")
        self.assertEqual(harness.state.builder.tokens, [])
        self.assertEqual(harness.state.builder.selected_index, 0)


class CommandBuilderPaneTests(unittest.TestCase):
    def test_arrows_move_selection_within_bounds(self) -> None:
        harness = _Harness()
        harness.focus_builder()
        harness.press("UP")
        self.assertEqual(harness.state.builder.selected_index, 0)
        harness.press(*["DOWN"] * 100)
        self.assertEqual(harness.state.builder.selected_index, len(harness.state.builder.options) - 1)

    def test_selection_stays_in_bounds_for_any_key_sequence(self) -> None:
        harness = _Harness()
        harness.focus_builder()
        keys = ["DOWN", "DOWN", "ENTER", "UP", "BACKSPACE", "DOWN", "ENTER", "DOWN", "ENTER", "BACKSPACE", "BACKSPACE"]
        for key in keys * 5:
            harness.press(key)
            builder_state = harness.state.builder
            self.assertTrue(builder_state.options)
            self.assertGreaterEqual(builder_state.selected_index, 0)
            self.assertLess(builder_state.selected_index, len(builder_state.options))

    def test_enter_appends_plain_option(self) -> None:
        harness = _Harness()
        harness.focus_builder()
        harness.choose("push")
        harness.choose("origin")
        self.assertEqual(harness.state.builder.tokens, ["push", "origin"])
        self.assertEqual(harness.state.builder.options, ["main", "master", EXECUTE, CLEAR])

    def test_backspace_on_empty_tokens_is_noop(self) -> None:
        harness = _Harness()
        harness.focus_builder()
        harness.press("BACKSPACE")
        self.assertEqual(harness.state.builder.tokens, [])
        self.assertIsNone(harness.state.error_message)

    def test_clear_resets_tokens(self) -> None:
        harness = _Harness()
        harness.focus_builder()
        harness.choose("log")
        harness.choose(CLEAR)
        self.assertEqual(harness.state.builder.tokens, [])

    def test_prompt_leaf_appends_quoted_text(self) -> None:
        harness = _Harness(prompt_answer="first commit")
        harness.focus_builder()
        harness.choose("commit")
        harness.choose("-m")
        harness.choose("<message>")
        harness.prompt_text.assert_called_once_with("Commit message")
        self.assertEqual(harness.state.builder.tokens, ["commit", "-m", "'first commit'"])

    def test_cancelled_prompt_appends_nothing(self) -> None:
        harness = _Harness(prompt_answer=None)
        harness.focus_builder()
        harness.choose("commit")
        harness.choose("-m")
        harness.choose("<message>")
        self.assertEqual(harness.state.builder.tokens, ["commit", "-m"])

    def test_execute_success_clears_tokens_and_requests_refresh(self) -> None:
        harness = _Harness()
        harness.focus_builder()
        harness.choose("status")
        harness.choose("-s")
        harness.choose(EXECUTE)

        self.assertEqual(harness.executor.commands, ["status -s"])
        self.assertEqual(harness.state.builder.tokens, [])
        self.assertTrue(harness.state.refresh_pending)
        self.assertEqual(harness.state.last_output, ["ok"])
        self.assertIsNone(harness.state.error_message)

    def test_selected_path_with_space_reaches_git_as_one_argument(self) -> None:
        executor = GitExecutor(Path("/tmp/repo"))
        harness = _Harness(executor=executor, live=_ChangedFilesLiveData("my file.txt", "a;b.txt"))
        harness.focus_builder()
        harness.choose("add")
        harness.choose("'my file.txt'")
        harness.choose("'a;b.txt'")

        with mock.patch(
            "gitcoach.executor.subprocess.run",
            return_value=subprocess.CompletedProcess(args=["git"], returncode=0, stdout="", stderr=""),
        ) as run:
            harness.choose(EXECUTE)

        self.assertEqual(run.call_args.args[0], ["git", "-C", "/tmp/repo", "add", "my file.txt", "a;b.txt"])
        self.assertIsNone(harness.state.error_message)
        self.assertEqual(harness.state.builder.tokens, [])

    def test_execute_failure_keeps_tokens_and_sets_error(self) -> None:
        failure = CommandOutcome(
            command="push origin main",
            kind=OutcomeKind.FAILED,
            exit_code=1,
            message="'git push origin main' exited with 1: rejected",
        )
        harness = _Harness(executor=_RecordingExecutor(failure))
        harness.focus_builder()
        harness.choose("push")
        harness.choose("origin")
        harness.choose("main")
        harness.choose(EXECUTE)

        self.assertEqual(harness.state.builder.tokens, ["push", "origin", "main"])
        self.assertIn("rejected", harness.state.error_message or "")

    def test_cancelled_destructive_command_reports_cancellation(self) -> None:
        cancelled = CommandOutcome(
            command="push --force",
            kind=OutcomeKind.CANCELLED,
            exit_code=1,
            message="Cancelled: git push --force",
        )
        harness = _Harness(executor=_RecordingExecutor(cancelled))
        harness.focus_builder()
        harness.choose("push")
        harness.choose("--force")
        harness.choose(EXECUTE)

        self.assertEqual(harness.state.error_message, "Cancelled: git push --force")
        self.assertEqual(harness.state.builder.tokens, ["push", "--force"])
        self.assertFalse(harness.state.refresh_pending)

    def test_dry_run_logs_instead_of_invoking_git(self) -> None:
        executor = GitExecutor(mock.sentinel.repo, dry_run=True)
        harness = _Harness(executor=executor)
        harness.focus_builder()
        harness.choose("status")
        harness.choose("-s")
        with mock.patch("gitcoach.executor.subprocess.run") as run_mock:
            harness.choose(EXECUTE)

        run_mock.assert_not_called()
        self.assertIn("Would execute: git status -s", harness.state.messages)
        self.assertIsNone(harness.state.error_message)


if __name__ == "__main__":
    unittest.main()
