"""Screen geometry for the three-pane layout.

Header and footer bands are fixed height; the rest is split into status,
command builder and help columns of ``width // 3`` each, with the rightmost
column absorbing the remainder.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .terminal import TerminalSize

HEADER_ROWS = 3
FOOTER_ROWS = 2


class Pane(enum.Enum):
    STATUS = "status"
    COMMAND_BUILDER = "command_builder"
    HELP = "help"

    def next(self) -> Pane:
        """Return the next pane in Status -> CommandBuilder -> Help order."""
        order = list(Pane)
        return order[(order.index(self) + 1) % len(order)]

    @property
    def title(self) -> str:
        return _PANE_TITLES[self]


_PANE_TITLES = {
    Pane.STATUS: "Status",
    Pane.COMMAND_BUILDER: "Command Builder",
    Pane.HELP: "Help",
}


@dataclass(frozen=True)
class PaneRect:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        """First column past the rectangle."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """First row past the rectangle."""
        return self.y + self.height

    def inner(self) -> PaneRect:
        """Content area inside a one-cell border."""
        return PaneRect(
            x=self.x + 1,
            y=self.y + 1,
            width=max(0, self.width - 2),
            height=max(0, self.height - 2),
        )


@dataclass(frozen=True)
class Layout:
    header: PaneRect
    panes: dict[Pane, PaneRect]
    footer: PaneRect

    def pane(self, pane: Pane) -> PaneRect:
        return self.panes[pane]


def compute_layout(size: TerminalSize) -> Layout:
    """Return header, pane and footer rectangles for ``size``."""
    body_height = max(0, size.height - HEADER_ROWS - FOOTER_ROWS)
    column_width = size.width // 3
    last_width = size.width - 2 * column_width
    panes = {
        Pane.STATUS: PaneRect(0, HEADER_ROWS, column_width, body_height),
        Pane.COMMAND_BUILDER: PaneRect(column_width, HEADER_ROWS, column_width, body_height),
        Pane.HELP: PaneRect(2 * column_width, HEADER_ROWS, last_width, body_height),
    }
    return Layout(
        header=PaneRect(0, 0, size.width, HEADER_ROWS),
        panes=panes,
        footer=PaneRect(0, size.height - FOOTER_ROWS, size.width, FOOTER_ROWS),
    )
