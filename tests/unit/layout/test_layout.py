"""Screen geometry tests for the three-pane layout."""

from __future__ import annotations

import unittest

from gitcoach.layout import FOOTER_ROWS, HEADER_ROWS, Pane, PaneRect, compute_layout
from gitcoach.terminal import TerminalSize


class ComputeLayoutTests(unittest.TestCase):
    def test_panes_split_width_and_last_pane_takes_remainder(self) -> None:
        layout = compute_layout(TerminalSize(100, 30))
        status = layout.pane(Pane.STATUS)
        builder = layout.pane(Pane.COMMAND_BUILDER)
        help_pane = layout.pane(Pane.HELP)

        self.assertEqual((status.x, status.width), (0, 33))
        self.assertEqual((builder.x, builder.width), (33, 33))
        self.assertEqual((help_pane.x, help_pane.width), (66, 34))
        self.assertEqual(help_pane.right, 100)

    def test_header_and_footer_bands(self) -> None:
        layout = compute_layout(TerminalSize(80, 24))
        self.assertEqual(layout.header, PaneRect(0, 0, 80, HEADER_ROWS))
        self.assertEqual(layout.footer, PaneRect(0, 24 - FOOTER_ROWS, 80, FOOTER_ROWS))
        for pane in Pane:
            rect = layout.pane(pane)
            self.assertEqual(rect.y, HEADER_ROWS)
            self.assertEqual(rect.bottom, 24 - FOOTER_ROWS)

    def test_inner_rect_excludes_border(self) -> None:
        self.assertEqual(PaneRect(10, 3, 20, 8).inner(), PaneRect(11, 4, 18, 6))
        self.assertEqual(PaneRect(0, 0, 1, 1).inner(), PaneRect(1, 1, 0, 0))


class PaneOrderTests(unittest.TestCase):
    def test_next_cycles_through_all_panes(self) -> None:
        self.assertIs(Pane.STATUS.next(), Pane.COMMAND_BUILDER)
        self.assertIs(Pane.COMMAND_BUILDER.next(), Pane.HELP)
        self.assertIs(Pane.HELP.next(), Pane.STATUS)

    def test_titles(self) -> None:
        self.assertEqual([pane.title for pane in Pane], ["Status", "Command Builder", "Help"])


if __name__ == "__main__":
    unittest.main()
