"""
Visited-room bookkeeping for a single duct search.
"""

from __future__ import annotations

from grid_types import CellState, Grid

__all__ = ["VisitedSet"]


class VisitedSet:
    """
    Tracks which rooms are on the in-progress duct.

    Blocked rooms are marked permanently so the search never steps onto them.
    Marks and unmarks must pair up in LIFO order with the search stack.
    """

    def __init__(self, grid: Grid) -> None:
        self._blocked = tuple(state is CellState.BLOCKED for state in grid.cells)
        self._visited = list(self._blocked)

    @classmethod
    def for_grid(cls, grid: Grid) -> VisitedSet:
        """Fresh state for a search standing on the grid's start room."""
        visited = cls(grid)
        start = grid.start
        if start is not None:
            visited.mark(start)
        return visited

    def mark(self, position: int) -> None:
        self._visited[position] = True

    def unmark(self, position: int) -> None:
        self._visited[position] = False

    def is_visited(self, position: int) -> bool:
        return self._visited[position]

    def is_free(self, position: int) -> bool:
        """True if the room is ours and not already on the duct."""
        return not self._visited[position] and not self._blocked[position]

    def free_count(self) -> int:
        return sum(1 for pos in range(len(self._visited)) if self.is_free(pos))

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._visited)

    def __len__(self) -> int:
        return len(self._visited)
