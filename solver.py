"""Backtracking Sudoku solver."""
from __future__ import annotations

import logging
import time
from typing import Optional, Tuple

from grid import Grid

log = logging.getLogger(__name__)


class InvalidPuzzleError(ValueError):
    """The given clues already repeat a digit in a row, column or region."""


class SudokuSolver:
    """Depth-first solver over a single grid, mutated in place.

    The search always branches on the first empty cell in row-major order and
    tries its legal values in ascending order, so cycle counts are
    reproducible. A solver instance keeps per-solve counters and is not meant
    to be shared between threads.
    """

    def __init__(self, max_cycles: Optional[int] = None) -> None:
        if max_cycles is not None and max_cycles < 1:
            raise ValueError("max_cycles must be a positive integer or None")
        self.max_cycles = max_cycles
        self._cycles = 0
        self._cutoff = False
        self.last_status: str = "idle"
        self.last_cycles = 0
        self.last_elapsed_ms = 0.0

    def _reset_state(self) -> None:
        self._cycles = 0
        self._cutoff = False
        self.last_status = "idle"
        self.last_cycles = 0
        self.last_elapsed_ms = 0.0

    def solve(self, grid: Grid) -> Tuple[Grid, int]:
        """Fill ``grid`` in place and return it with the number of cycles used.

        The returned grid is complete when a solution exists. Otherwise every
        cell the search touched is back to 0 and ``last_status`` tells whether
        the puzzle has no solution or the cycle budget ran out.
        """
        self._reset_state()
        if not grid.is_grid_valid():
            self.last_status = "invalid"
            raise InvalidPuzzleError("Puzzle clues repeat a digit in a row, column or region")

        start = time.perf_counter()
        solved = self._solve(grid)
        self.last_elapsed_ms = (time.perf_counter() - start) * 1000.0
        self.last_cycles = self._cycles

        if solved.is_complete():
            self.last_status = "solved"
        elif self._cutoff:
            self.last_status = "cutoff"
            log.warning("Cycle budget of %d reached, search abandoned", self.max_cycles)
        else:
            self.last_status = "unsolvable"
        log.info(
            "Search finished: %s after %d cycle(s) in %.1f ms",
            self.last_status,
            self.last_cycles,
            self.last_elapsed_ms,
        )
        return solved, self._cycles

    def solve_copy(self, grid: Grid) -> Tuple[Grid, int]:
        """Solve an independent copy, leaving the caller's grid untouched."""
        return self.solve(grid.copy())

    def _solve(self, grid: Grid) -> Grid:
        if self.max_cycles is not None and self._cycles >= self.max_cycles:
            self._cutoff = True
            return grid
        self._cycles += 1

        empty = grid.find_first_empty_cell()
        if empty is None:
            return grid
        column, row = empty
        for value in grid.legal_values(column, row):
            grid.place(column, row, value)
            solved = self._solve(grid)
            if solved.is_complete():
                return solved
            grid.unplace(column, row)
            if self._cutoff:
                break
        return grid
