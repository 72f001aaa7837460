from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from blockpic.pixel import Color
from blockpic.region import Rect

# Upper half block: foreground paints the top pixel, background the bottom one
PIXEL_CHAR = "▀"
BLANK_CHAR = " "

# Indices into the colour axis of CellGrid.colours
BG = 0
FG = 1


class Cell(NamedTuple):
    glyph: str
    fg: Color | None
    bg: Color | None


@dataclass
class CellGrid:
    """A buffer of terminal cells.

    glyphs: (rows, cols) array of single characters.
    colours: (rows, cols, 2, 3) uint8, [..., 0, :] is bg and [..., 1, :] is fg.
    filled: (rows, cols, 2) bool, False where the colour is the terminal reset.
    """

    glyphs: np.ndarray
    colours: np.ndarray
    filled: np.ndarray

    @classmethod
    def blank(cls, width: int, height: int) -> CellGrid:
        return cls(
            glyphs=np.full((height, width), BLANK_CHAR, dtype="<U1"),
            colours=np.zeros((height, width, 2, 3), dtype=np.uint8),
            filled=np.zeros((height, width, 2), dtype=bool),
        )

    @property
    def width(self) -> int:
        return self.glyphs.shape[1]

    @property
    def height(self) -> int:
        return self.glyphs.shape[0]

    @property
    def area(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    @property
    def lines(self) -> list[str]:
        return ["".join(row) for row in self.glyphs]

    def cell(self, x: int, y: int) -> Cell:
        fg = Color(*map(int, self.colours[y, x, FG])) if self.filled[y, x, FG] else None
        bg = Color(*map(int, self.colours[y, x, BG])) if self.filled[y, x, BG] else None
        return Cell(str(self.glyphs[y, x]), fg, bg)
