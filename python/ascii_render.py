"""
ASCII rendering for ductpath grids.

One line per row, rooms separated by spaces:
    S  start        E  end
    #  blocked      .  open
"""

from __future__ import annotations

from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from grid_types import CellState, Grid

__all__ = ["render", "CELL_CHARS"]

CELL_CHARS: dict[CellState, str] = {
    CellState.OPEN: ".",
    CellState.BLOCKED: "#",
    CellState.START: "S",
    CellState.END: "E",
}


def _plain(s: str) -> str:
    return s


def _color_for(state: CellState) -> Callable[[str], str]:
    match state:
        case CellState.START:
            return chalk.green
        case CellState.END:
            return chalk.red
        case CellState.BLOCKED:
            return chalk.blue
        case _:
            return _plain


def render(grid: Grid, color: bool = True) -> str:
    """
    Render a grid to a string.

    Args:
        grid: The grid to render
        color: Wrap characters in ANSI colour codes

    Returns:
        The rendered rows joined by newlines
    """
    lines: list[str] = []
    for row in range(grid.rows):
        chars: list[str] = []
        for col in range(grid.cols):
            state = grid.cell_state(grid.position(row, col))
            char = CELL_CHARS[state]
            chars.append(_color_for(state)(char) if color else char)
        lines.append(" ".join(chars))
    return "\n".join(lines)
