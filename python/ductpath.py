"""
Counting cooling ducts: Hamiltonian paths from the air intake (START) to the
air conditioner (END) through every room we own.

Plain DFS with backtracking, plus fail-fast heuristics that abandon a
partial duct as soon as it can be shown never to complete:

1. Degree check: every free room other than END needs two usable
   connections (free rooms or the room the duct is currently in), since it
   must be entered and left again.
2. Reachability check (optional): flood-filling from the downmost free room
   must reach every other free room and the current room.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

from grid_types import CellState, Grid
from visitation import VisitedSet

logger = logging.getLogger(__name__)

__all__ = ["SearchRules", "SearchStats", "DuctSearch", "count_paths"]

# Stack frames needed on top of one per room for the recursive search
_RECURSION_MARGIN = 100


@dataclass(frozen=True)
class SearchRules:
    """Rules governing which pruning heuristics the search applies."""

    prune_degree: bool = True
    prune_reachability: bool = False


@dataclass
class SearchStats:
    """Counters collected over one count."""

    nodes: int = 0  # Search steps entered
    paths: int = 0  # Complete ducts found
    pruned_degree: int = 0  # Branches cut by the degree check
    pruned_reachability: int = 0  # Branches cut by the reachability check


@dataclass
class _Frame:
    """Explicit-stack frame for the iterative search."""

    position: int
    length: int
    next_move: int = 0  # Index into the position's move list


class DuctSearch:
    """
    Backtracking search over one grid.

    Owns its VisitedSet; after every count the set is back to its initial
    state (start and blocked rooms marked). Not safe to share between
    concurrent counts.

    Usage:
        search = DuctSearch(grid)
        total = search.count_paths()
        print(search.stats)
    """

    def __init__(self, grid: Grid, rules: SearchRules | None = None) -> None:
        self.grid = grid
        self.rules = rules if rules is not None else SearchRules()
        self.visited = VisitedSet.for_grid(grid)
        self.stats = SearchStats()

        self._end = grid.end if grid.end is not None else -1
        self._total_open = grid.total_open
        # Neighbours of every room, in SEARCH_ORDER
        self._moves: tuple[tuple[int, ...], ...] = tuple(
            grid.neighbors(pos) for pos in range(grid.size)
        )
        self._candidates: tuple[int, ...] = tuple(
            pos
            for pos, state in enumerate(grid.cells)
            if state is not CellState.BLOCKED and pos != self._end
        )

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def count_paths(self, start: int | None = None) -> int:
        """
        Count ducts from start to END covering every open room.

        Args:
            start: Room to begin from; defaults to the grid's START room

        Returns:
            Number of distinct Hamiltonian paths (0 if none exist)
        """
        start = self._begin(start)
        previous_limit = sys.getrecursionlimit()
        needed = self._total_open + _RECURSION_MARGIN
        if previous_limit < needed:
            sys.setrecursionlimit(needed)

        try:
            total = self._search(start, 1)
        finally:
            sys.setrecursionlimit(previous_limit)
            self._finish(start)
        self._log_summary("count_paths")
        return total

    def count_paths_iterative(self, start: int | None = None) -> int:
        """Same as count_paths, using an explicit stack instead of recursion."""
        start = self._begin(start)
        visited = self.visited

        try:
            stack: list[_Frame] = []
            if self._enter(start, 1):
                stack.append(_Frame(start, 1))

            while stack:
                frame = stack[-1]
                moves = self._moves[frame.position]
                if frame.next_move == len(moves):
                    stack.pop()
                    if stack:
                        visited.unmark(frame.position)
                    continue

                candidate = moves[frame.next_move]
                frame.next_move += 1
                if not visited.is_free(candidate):
                    continue

                visited.mark(candidate)
                if self._enter(candidate, frame.length + 1):
                    stack.append(_Frame(candidate, frame.length + 1))
                else:
                    visited.unmark(candidate)
        finally:
            self._finish(start)

        self._log_summary("count_paths_iterative")
        return self.stats.paths

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def _search(self, current: int, length: int) -> int:
        if not self._enter(current, length):
            return 1 if current == self._end and length == self._total_open else 0

        visited = self.visited
        total = 0
        for candidate in self._moves[current]:
            if visited.is_free(candidate):
                visited.mark(candidate)
                total += self._search(candidate, length + 1)
                visited.unmark(candidate)
        return total

    def _enter(self, current: int, length: int) -> bool:
        """
        Account for a search step at current.

        Returns True if the search should try to extend the duct from here,
        False if the duct is complete or the branch is dead.
        """
        stats = self.stats
        stats.nodes += 1

        if current == self._end and length == self._total_open:
            stats.paths += 1
            return False

        if self.rules.prune_degree and self._has_dead_end(current):
            stats.pruned_degree += 1
            return False

        if self.rules.prune_reachability and self._is_disconnected(current):
            stats.pruned_reachability += 1
            return False

        return True

    def _has_dead_end(self, current: int) -> bool:
        """True if some free room other than END has fewer than two usable connections."""
        is_free = self.visited.is_free
        moves = self._moves
        for pos in self._candidates:
            if not is_free(pos):
                continue
            degree = 0
            for other in moves[pos]:
                if other == current or is_free(other):
                    degree += 1
            if degree < 2:
                return True
        return False

    def _is_disconnected(self, current: int) -> bool:
        """True if the free rooms and current do not form one connected region."""
        is_free = self.visited.is_free
        free = [pos for pos in range(self.grid.size) if is_free(pos)]
        if not free:
            return False

        # Start from the downmost free room
        seed = free[-1]
        seen = {seed}
        stack = [seed]
        while stack:
            pos = stack.pop()
            for other in self._moves[pos]:
                if other not in seen and (other == current or is_free(other)):
                    seen.add(other)
                    stack.append(other)

        return len(seen) < len(free) + 1

    # -------------------------------------------------------------------------
    # Setup / teardown
    # -------------------------------------------------------------------------

    def _begin(self, start: int | None) -> int:
        """Reset stats and stand the visited set on start."""
        home = self.grid.start
        if start is None:
            start = home
        if start is None:
            raise ValueError("Grid has no start room")

        self.stats = SearchStats()
        if start != home:
            if home is not None:
                self.visited.unmark(home)
            self.visited.mark(start)
        return start

    def _finish(self, start: int) -> None:
        """Undo _begin so the visited set is back to its initial state."""
        home = self.grid.start
        if start != home:
            self.visited.unmark(start)
            if home is not None:
                self.visited.mark(home)

    def _log_summary(self, operation: str) -> None:
        stats = self.stats
        logger.info(
            "%s: %dx%d grid, %d open rooms, paths=%d, nodes=%d, pruned degree=%d reachability=%d",
            operation,
            self.grid.width,
            self.grid.height,
            self._total_open,
            stats.paths,
            stats.nodes,
            stats.pruned_degree,
            stats.pruned_reachability,
        )


def count_paths(grid: Grid, rules: SearchRules | None = None, iterative: bool = False) -> int:
    """
    Count Hamiltonian ducts from START to END in grid.

    Args:
        grid: The board to search
        rules: Pruning heuristics to apply (default: degree check only)
        iterative: Use the explicit-stack search instead of recursion
    """
    search = DuctSearch(grid, rules)
    if iterative:
        return search.count_paths_iterative()
    return search.count_paths()
