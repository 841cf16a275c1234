"""
Grid parsing utilities for ductpath.

Provides two parsing formats:
1. Standard format: "W H" followed by W*H room codes, whitespace separated
2. Concise format with single-character cells
"""

from __future__ import annotations

import logging

from grid_types import CellState, Grid

logger = logging.getLogger(__name__)

__all__ = ["parse_grid", "parse_grid_concise", "validate_endpoints"]

# Single-character aliases accepted by the concise format
CONCISE_CHARS: dict[str, CellState] = {
    "0": CellState.OPEN,
    ".": CellState.OPEN,
    "1": CellState.BLOCKED,
    "#": CellState.BLOCKED,
    "2": CellState.START,
    "S": CellState.START,
    "3": CellState.END,
    "E": CellState.END,
}


def parse_grid(text: str) -> Grid:
    """
    Parse a grid from the standard datacenter format.

    Format:
    - First two integers: width and height
    - Then width*height integers in row-major order:
      * 0: Room we own
      * 1: Room we do not own
      * 2: Air intake (start), exactly one
      * 3: Air conditioner (end), exactly one
    - Any whitespace (spaces, newlines) separates values

    Example:
        \"\"\"
        4 3
        2 0 0 0
        0 0 0 0
        0 0 3 1
        \"\"\"

    Args:
        text: The input text

    Returns:
        The parsed Grid

    Raises:
        ValueError: If a token is not an integer, the cell count does not match
            the dimensions, a code is unknown, or start/end are not unique
    """
    tokens = text.split()
    if len(tokens) < 2:
        raise ValueError(
            f"Missing grid dimensions\n"
            f"  Expected: 'width height' followed by width*height room codes\n"
            f"  Got: {len(tokens)} value(s)"
        )

    values: list[int] = []
    for idx, token in enumerate(tokens):
        try:
            values.append(int(token))
        except ValueError:
            raise ValueError(
                f"Invalid value: '{token}'\n"
                f"  Position: value {idx + 1} of {len(tokens)}\n"
                f"  All values must be integers"
            ) from None

    width, height = values[0], values[1]
    grid = Grid.from_codes(width, height, values[2:])
    validate_endpoints(grid)
    logger.debug("parse_grid: %dx%d grid, %d open rooms", width, height, grid.total_open)
    return grid


def parse_grid_concise(definition: str) -> Grid:
    """
    Parse a grid from a concise single-character format.

    Format:
    - Rows separated by | or newlines (blank lines ignored)
    - One character per room, surrounding whitespace stripped:
      * '0' or '.': Room we own
      * '1' or '#': Room we do not own
      * '2' or 'S': Start
      * '3' or 'E': End

    Example:
        "S...|....|..E#" is the same grid as the standard-format example

    Args:
        definition: The grid definition

    Returns:
        The parsed Grid

    Raises:
        ValueError: On unknown characters, ragged rows, or start/end not unique
    """
    row_strings = [
        row.strip()
        for line in definition.strip().split("\n")
        for row in line.split("|")
        if row.strip()
    ]
    if not row_strings:
        raise ValueError("Empty grid definition")

    rows: list[list[CellState]] = []
    for row_idx, row_str in enumerate(row_strings):
        cells: list[CellState] = []
        for col_idx, char in enumerate(row_str):
            if char not in CONCISE_CHARS:
                raise ValueError(
                    f"Invalid character '{char}'\n"
                    f"  Row {row_idx}: \"{row_str}\"\n"
                    f"  Position: column {col_idx}\n"
                    f"  Valid characters: 0 . (open), 1 # (blocked), 2 S (start), 3 E (end)"
                )
            cells.append(CONCISE_CHARS[char])
        rows.append(cells)

    # Validate all rows have same length
    width = len(rows[0])
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != width]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths\n"
            f"  Expected: {width} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise ValueError(error_msg)

    grid = Grid(width, len(rows), tuple(cell for row in rows for cell in row))
    validate_endpoints(grid)
    logger.debug("parse_grid_concise: %dx%d grid, %d open rooms", grid.width, grid.height, grid.total_open)
    return grid


def validate_endpoints(grid: Grid) -> None:
    """
    Check the grid has exactly one start and exactly one end.

    Raises:
        ValueError: Listing the offending positions as (row, col)
    """
    for state, name in ((CellState.START, "start"), (CellState.END, "end")):
        positions = [grid.coords(pos) for pos, cell in enumerate(grid.cells) if cell is state]
        if len(positions) != 1:
            raise ValueError(
                f"Grid must have exactly one {name} room (code {state.value})\n"
                f"  Found: {len(positions)}"
                + (f" at {', '.join(f'({r}, {c})' for r, c in positions)}" if positions else "")
            )
