"""Help-modal, dialog and tutorial rendering tests."""

from __future__ import annotations

import unittest
from unittest import mock

from gitcoach.ansi import strip_ansi
from gitcoach.render.dialogs import confirm, modal_geometry, prompt_text
from gitcoach.render.help import footer_hint_line, render_help_page
from gitcoach.render.surface import TerminalSurface
from gitcoach.terminal import TerminalSize
from gitcoach.tutorial import TUTORIAL_STEPS, run_tutorial
from gitcoach.ui_theme import DEFAULT_THEME, PLAIN_THEME

SIZE = TerminalSize(100, 30)


class _Capture:
    def __init__(self) -> None:
        self.writes: list[bytes] = []

    def __call__(self, _fd: int, data: bytes) -> int:
        self.writes.append(data)
        return len(data)

    @property
    def plain(self) -> str:
        return strip_ansi(b"".join(self.writes).decode("utf-8", errors="replace"))


def _keys(*keys: str):
    scripted = iter(keys)
    return lambda: next(scripted)


class HelpPageTests(unittest.TestCase):
    def test_help_modal_lists_every_binding(self) -> None:
        capture = _Capture()
        with mock.patch("gitcoach.render.surface.os.write", side_effect=capture):
            render_help_page(TerminalSurface(1), SIZE, DEFAULT_THEME)

        self.assertEqual(len(capture.writes), 1)
        plain = capture.plain
        for text in ("gitcoach help", "Tab", "F1", "Alt+T", "Esc / Alt+Q / Ctrl+C", "Backspace", "re-read repository status"):
            self.assertIn(text, plain)
        self.assertIn("╭", plain)
        self.assertIn("╯", plain)

    def test_footer_hints_use_key_style(self) -> None:
        line = footer_hint_line(DEFAULT_THEME)
        self.assertIn(f"{DEFAULT_THEME.key}Tab", line)
        self.assertIn("Esc quit", strip_ansi(line))

    def test_modal_geometry_stays_on_screen(self) -> None:
        for content_width, content_height in ((10, 2), (500, 200)):
            x, y, width, height = modal_geometry(SIZE, content_width, content_height)
            self.assertGreaterEqual(x, 0)
            self.assertGreaterEqual(y, 0)
            self.assertLessEqual(x + width, SIZE.width)
            self.assertLessEqual(y + height, SIZE.height)


class DialogTests(unittest.TestCase):
    def _surface(self) -> tuple[TerminalSurface, _Capture]:
        return TerminalSurface(1), _Capture()

    def test_prompt_collects_typed_text(self) -> None:
        surface, capture = self._surface()
        with mock.patch("gitcoach.render.surface.os.write", side_effect=capture):
            text = prompt_text(surface, _keys("h", "i", "x", "BACKSPACE", "!", "ENTER"), SIZE, PLAIN_THEME, "Commit message")
        self.assertEqual(text, "hi!")
        self.assertIn("Commit message", capture.plain)

    def test_prompt_ignores_navigation_tokens_and_clears_with_ctrl_u(self) -> None:
        surface, capture = self._surface()
        with mock.patch("gitcoach.render.surface.os.write", side_effect=capture):
            text = prompt_text(surface, _keys("a", "UP", "CTRL_U", "b", "ENTER"), SIZE, PLAIN_THEME, "Tag name")
        self.assertEqual(text, "b")

    def test_prompt_escape_cancels(self) -> None:
        surface, capture = self._surface()
        with mock.patch("gitcoach.render.surface.os.write", side_effect=capture):
            self.assertIsNone(prompt_text(surface, _keys("a", "ESC"), SIZE, PLAIN_THEME, "Message"))

    def test_confirm_accepts_only_y(self) -> None:
        surface, capture = self._surface()
        with mock.patch("gitcoach.render.surface.os.write", side_effect=capture):
            self.assertTrue(confirm(surface, _keys("x", "y"), SIZE, PLAIN_THEME, "push --force"))
            self.assertFalse(confirm(surface, _keys("n"), SIZE, PLAIN_THEME, "push --force"))
            self.assertFalse(confirm(surface, _keys("ESC"), SIZE, PLAIN_THEME, "reset --hard"))
        self.assertIn("git push --force", capture.plain)


class TutorialTests(unittest.TestCase):
    def test_any_key_walks_all_steps(self) -> None:
        capture = _Capture()
        keys = _keys(*(["ENTER"] * len(TUTORIAL_STEPS)))
        with mock.patch("gitcoach.render.surface.os.write", side_effect=capture):
            viewed = run_tutorial(TerminalSurface(1), keys, lambda: SIZE, PLAIN_THEME)
        self.assertEqual(viewed, len(TUTORIAL_STEPS))
        self.assertIn(TUTORIAL_STEPS[-1].title, capture.plain)

    def test_escape_leaves_early(self) -> None:
        capture = _Capture()
        with mock.patch("gitcoach.render.surface.os.write", side_effect=capture):
            viewed = run_tutorial(TerminalSurface(1), _keys("a", "ESC"), lambda: SIZE, PLAIN_THEME)
        self.assertEqual(viewed, 2)
        self.assertNotIn(TUTORIAL_STEPS[2].title, capture.plain)


if __name__ == "__main__":
    unittest.main()
