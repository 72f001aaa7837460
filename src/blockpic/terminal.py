import os
import sys

from blockpic.grid import BG, FG, CellGrid

RESET = "\033[0m"


def get_terminal_size() -> tuple[int, int]:
    """Return (columns, rows) of the terminal, or (80, 24) if not a tty."""
    if not sys.stdout.isatty():
        return (80, 24)
    size = os.get_terminal_size()
    return (size.columns, size.lines)


def _sgr(grid: CellGrid, row: int, col: int, slot: int, base: int) -> str:
    if not grid.filled[row, col, slot]:
        return f"\033[{base + 1}m"
    r, g, b = (int(c) for c in grid.colours[row, col, slot])
    return f"\033[{base};2;{r};{g};{b}m"


def to_ansi(grid: CellGrid) -> str:
    """Wrap each cell in ANSI truecolor escape sequences, one line per row."""
    out = []
    for row in range(grid.height):
        parts = []
        for col in range(grid.width):
            # 38/48 select a colour, 39/49 reset to the terminal default
            parts.append(_sgr(grid, row, col, FG, 38))
            parts.append(_sgr(grid, row, col, BG, 48))
            parts.append(str(grid.glyphs[row, col]))
        parts.append(RESET)
        out.append("".join(parts))
    return "\n".join(out)
