import io

from blockpic.grid import BG, FG, PIXEL_CHAR, CellGrid
from blockpic.terminal import RESET, get_terminal_size, to_ansi


def test_filled_cell_uses_truecolor():
    grid = CellGrid.blank(1, 1)
    grid.glyphs[0, 0] = PIXEL_CHAR
    grid.colours[0, 0, FG] = (1, 2, 3)
    grid.colours[0, 0, BG] = (4, 5, 6)
    grid.filled[0, 0] = True
    assert to_ansi(grid) == f"\033[38;2;1;2;3m\033[48;2;4;5;6m{PIXEL_CHAR}{RESET}"


def test_unfilled_colours_reset():
    grid = CellGrid.blank(2, 1)
    grid.glyphs[0, 1] = PIXEL_CHAR
    grid.colours[0, 1, FG] = (9, 9, 9)
    grid.filled[0, 1, FG] = True
    assert to_ansi(grid) == f"\033[39m\033[49m \033[38;2;9;9;9m\033[49m{PIXEL_CHAR}{RESET}"


def test_one_line_per_row():
    text = to_ansi(CellGrid.blank(3, 4))
    lines = text.split("\n")
    assert len(lines) == 4
    assert all(line.endswith(RESET) for line in lines)


def test_empty_grid():
    assert to_ansi(CellGrid.blank(0, 0)) == ""


def test_terminal_size_defaults_when_not_a_tty(monkeypatch):
    monkeypatch.setattr("sys.stdout", io.StringIO())
    assert get_terminal_size() == (80, 24)
