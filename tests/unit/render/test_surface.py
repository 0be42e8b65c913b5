"""Drawing primitive tests for ``TerminalSurface``."""

from __future__ import annotations

import unittest
from unittest import mock

from gitcoach.render.surface import Style, TerminalSurface, styled


class _Capture:
    def __init__(self) -> None:
        self.writes: list[bytes] = []

    def __call__(self, _fd: int, data: bytes) -> int:
        self.writes.append(data)
        return len(data)

    @property
    def text(self) -> str:
        return b"".join(self.writes).decode("utf-8")


class StyledTests(unittest.TestCase):
    def test_styles_concatenate_and_always_reset(self) -> None:
        self.assertEqual(styled("x", Style.BOLD, Style.RED), f"{Style.BOLD}{Style.RED}x{Style.RESET}")

    def test_no_styles_leaves_text_untouched(self) -> None:
        self.assertEqual(styled("x"), "x")
        self.assertEqual(styled("x", ""), "x")


class TerminalSurfaceTests(unittest.TestCase):
    def test_move_cursor_converts_to_one_based(self) -> None:
        capture = _Capture()
        with mock.patch("gitcoach.render.surface.os.write", side_effect=capture):
            TerminalSurface(1).move_cursor(0, 0)
            TerminalSurface(1).move_cursor(4, 9)
        self.assertEqual(capture.text, "\033[1;1H\033[5;10H")

    def test_frame_flushes_once(self) -> None:
        capture = _Capture()
        surface = TerminalSurface(1)
        with mock.patch("gitcoach.render.surface.os.write", side_effect=capture):
            with surface.frame():
                surface.clear_screen()
                surface.write_at(2, 3, "hello", Style.BOLD)
                surface.write_line(3, 0, "abc", 6)
                self.assertEqual(capture.writes, [])

        self.assertEqual(len(capture.writes), 1)
        self.assertIn(f"\033[3;4H{Style.BOLD}hello{Style.RESET}", capture.text)
        self.assertIn("\033[4;1Habc   ", capture.text)

    def test_nested_frames_share_one_flush(self) -> None:
        capture = _Capture()
        surface = TerminalSurface(1)
        with mock.patch("gitcoach.render.surface.os.write", side_effect=capture):
            with surface.frame():
                with surface.frame():
                    surface.write("a")
                surface.write("b")
        self.assertEqual(capture.writes, [b"ab"])

    def test_draw_box_borders_title_and_blank_interior(self) -> None:
        capture = _Capture()
        surface = TerminalSurface(1)
        with mock.patch("gitcoach.render.surface.os.write", side_effect=capture):
            with surface.frame():
                surface.draw_box(0, 0, 10, 3, "Hi")

        text = capture.text
        self.assertIn("┌── Hi ──┐", text)
        self.assertIn("│        │", text)
        self.assertIn("└────────┘", text)

    def test_draw_box_ignores_degenerate_sizes(self) -> None:
        capture = _Capture()
        with mock.patch("gitcoach.render.surface.os.write", side_effect=capture):
            TerminalSurface(1).draw_box(0, 0, 1, 5)
        self.assertEqual(capture.writes, [])

    def test_write_line_clips_to_width(self) -> None:
        capture = _Capture()
        with mock.patch("gitcoach.render.surface.os.write", side_effect=capture):
            surface = TerminalSurface(1)
            with surface.frame():
                surface.write_line(0, 0, "abcdefgh", 4)
        self.assertTrue(capture.text.endswith("abcd"))


if __name__ == "__main__":
    unittest.main()
