"""
Shared type definitions for the ductpath system.

A datacenter floor is a rectangle of rooms stored flat in row-major order.
Positions are linear indices: row = p // width, col = p % width.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

__all__ = ["CellState", "Direction", "SEARCH_ORDER", "Grid"]


class CellState(Enum):
    """State of a room. Values are the codes used by the input format."""

    OPEN = 0  # Room we own, duct must pass through it
    BLOCKED = 1  # Room we do not own
    START = 2  # Air intake valve
    END = 3  # Air conditioner


class Direction(Enum):
    """Cardinal direction for a duct step."""

    UP = "U"  # Decreasing row
    RIGHT = "R"  # Increasing col
    DOWN = "D"  # Increasing row
    LEFT = "L"  # Decreasing col


# Order in which the search tries to extend a path
SEARCH_ORDER: tuple[Direction, ...] = (
    Direction.UP,
    Direction.RIGHT,
    Direction.DOWN,
    Direction.LEFT,
)


@dataclass(frozen=True)
class Grid:
    """A width x height board of rooms."""

    width: int
    height: int
    cells: tuple[CellState, ...]

    @classmethod
    def from_codes(cls, width: int, height: int, codes: Iterable[int]) -> Grid:
        """
        Build a grid from integer room codes in row-major order.

        Raises:
            ValueError: If the number of codes does not match width*height,
                or a code is not one of 0..3
        """
        codes = list(codes)
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        if len(codes) != width * height:
            raise ValueError(
                f"Cell count does not match dimensions\n"
                f"  Expected: {width * height} cells ({width}x{height})\n"
                f"  Got: {len(codes)} cells"
            )

        cells: list[CellState] = []
        for pos, code in enumerate(codes):
            try:
                cells.append(CellState(code))
            except ValueError:
                raise ValueError(
                    f"Invalid room code: {code!r}\n"
                    f"  Row {pos // width}, column {pos % width}\n"
                    f"  Valid codes: 0 (open), 1 (blocked), 2 (start), 3 (end)"
                ) from None
        return cls(width, height, tuple(cells))

    @property
    def rows(self) -> int:
        return self.height

    @property
    def cols(self) -> int:
        return self.width

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def total_open(self) -> int:
        """Number of rooms the duct must pass through (everything not blocked)."""
        return sum(1 for state in self.cells if state is not CellState.BLOCKED)

    @property
    def start(self) -> int | None:
        return self.find(CellState.START)

    @property
    def end(self) -> int | None:
        return self.find(CellState.END)

    def find(self, state: CellState) -> int | None:
        """Return the first position holding the given state, or None."""
        for pos, cell in enumerate(self.cells):
            if cell is state:
                return pos
        return None

    def count(self, state: CellState) -> int:
        return sum(1 for cell in self.cells if cell is state)

    def cell_state(self, position: int) -> CellState:
        return self.cells[position]

    def position(self, row: int, col: int) -> int:
        return row * self.width + col

    def coords(self, position: int) -> tuple[int, int]:
        """Convert a linear position to (row, col)."""
        return divmod(position, self.width)

    def neighbor(self, position: int, direction: Direction) -> int | None:
        """
        Position one step away in the given direction.

        Returns None if the step leaves the board, or for LEFT/RIGHT if it
        would wrap onto another row.
        """
        match direction:
            case Direction.UP:
                candidate = position - self.width
            case Direction.DOWN:
                candidate = position + self.width
            case Direction.LEFT:
                if position % self.width == 0:
                    return None
                candidate = position - 1
            case Direction.RIGHT:
                if position % self.width == self.width - 1:
                    return None
                candidate = position + 1
            case _:
                raise ValueError(f"Unknown direction: {direction}")

        if 0 <= candidate < self.size:
            return candidate
        return None

    def neighbors(self, position: int) -> tuple[int, ...]:
        """All on-board neighbours of a position, in SEARCH_ORDER."""
        result: list[int] = []
        for direction in SEARCH_ORDER:
            candidate = self.neighbor(position, direction)
            if candidate is not None:
                result.append(candidate)
        return tuple(result)
