"""9x9 Sudoku grid state and constraint queries."""
from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

GRID_SIZE = 9
REGION_SIZE = 3
UNSET_VALUE = 0
VALUE_COUNT_ARRAY_SIZE = 10
DIGITS = range(1, GRID_SIZE + 1)

Cell = Tuple[int, int]


class Grid:
    """Mutable 9x9 puzzle state addressed by (column, row).

    Values are stored in a numpy array indexed ``[row, column]``; 0 marks an
    empty cell. Constraint queries recount the relevant unit on every call.
    """

    def __init__(self, cells: Optional[np.ndarray] = None) -> None:
        """Build a grid from a 9x9 array, copying it; empty when omitted."""
        if cells is None:
            cells = np.zeros((GRID_SIZE, GRID_SIZE), dtype=np.int64)
        cells = np.array(cells, dtype=np.int64)
        if cells.shape != (GRID_SIZE, GRID_SIZE):
            raise ValueError(f"Grid must be {GRID_SIZE}x{GRID_SIZE}, got {cells.shape}")
        if cells.min() < UNSET_VALUE or cells.max() > GRID_SIZE:
            raise ValueError(f"Cell values must be between {UNSET_VALUE} and {GRID_SIZE}")
        self._cells = cells.astype(np.int8)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        return cls(np.array(rows, dtype=np.int64))

    def to_rows(self) -> List[List[int]]:
        return [[int(value) for value in row] for row in self._cells]

    def copy(self) -> "Grid":
        return Grid(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return bool(np.array_equal(self._cells, other._cells))

    def __iter__(self) -> Iterator[List[int]]:
        return iter(self.to_rows())

    def __repr__(self) -> str:
        return f"Grid({self.to_rows()!r})"

    @staticmethod
    def _check_cell(column: int, row: int) -> None:
        if not (0 <= column < GRID_SIZE and 0 <= row < GRID_SIZE):
            raise IndexError(f"Cell ({column}, {row}) is outside the grid")

    @staticmethod
    def _check_digit(digit: int) -> None:
        if not UNSET_VALUE <= digit <= GRID_SIZE:
            raise ValueError(f"Digit {digit} is not between {UNSET_VALUE} and {GRID_SIZE}")

    def get(self, column: int, row: int) -> int:
        self._check_cell(column, row)
        return int(self._cells[row, column])

    def set(self, column: int, row: int, digit: int) -> None:
        """Overwrite a cell; 0 clears it. No constraint checking happens here."""
        self._check_cell(column, row)
        self._check_digit(digit)
        self._cells[row, column] = digit

    def place(self, column: int, row: int, digit: int) -> None:
        """Fill an empty cell with a digit. Must be paired with ``unplace``."""
        if self.get(column, row) != UNSET_VALUE:
            raise ValueError(f"Cell ({column}, {row}) is already filled")
        if digit == UNSET_VALUE:
            raise ValueError("Cannot place an empty value, use unplace")
        self.set(column, row, digit)

    def unplace(self, column: int, row: int) -> None:
        self.set(column, row, UNSET_VALUE)

    def find_first_empty_cell(self) -> Optional[Cell]:
        """Scan rows top to bottom, columns left to right, for the first 0."""
        rows, columns = np.nonzero(self._cells == UNSET_VALUE)
        if len(rows) == 0:
            return None
        # np.nonzero yields indices in row-major order
        return int(columns[0]), int(rows[0])

    def empty_cell_count(self) -> int:
        return int(np.count_nonzero(self._cells == UNSET_VALUE))

    def is_complete(self) -> bool:
        return self.find_first_empty_cell() is None

    @staticmethod
    def region_origin(column: int, row: int) -> Cell:
        """Top-left (column, row) of the 3x3 region containing the cell."""
        Grid._check_cell(column, row)
        return column - column % REGION_SIZE, row - row % REGION_SIZE

    @staticmethod
    def _value_counts(values: np.ndarray) -> np.ndarray:
        counts = np.bincount(values.ravel().astype(np.int64), minlength=VALUE_COUNT_ARRAY_SIZE)
        counts[UNSET_VALUE] = 0
        return counts

    def row_value_counts(self, row: int) -> np.ndarray:
        self._check_cell(0, row)
        return self._value_counts(self._cells[row, :])

    def column_value_counts(self, column: int) -> np.ndarray:
        self._check_cell(column, 0)
        return self._value_counts(self._cells[:, column])

    def region_value_counts(self, column: int, row: int) -> np.ndarray:
        start_column, start_row = self.region_origin(column, row)
        region = self._cells[start_row : start_row + REGION_SIZE, start_column : start_column + REGION_SIZE]
        return self._value_counts(region)

    @staticmethod
    def is_unit_valid(counts: Sequence[int]) -> bool:
        return all(count <= 1 for count in counts)

    def is_row_valid(self, row: int) -> bool:
        return self.is_unit_valid(self.row_value_counts(row))

    def is_column_valid(self, column: int) -> bool:
        return self.is_unit_valid(self.column_value_counts(column))

    def is_region_valid(self, column: int, row: int) -> bool:
        return self.is_unit_valid(self.region_value_counts(column, row))

    def is_grid_valid(self) -> bool:
        """True when no row, column or region repeats a digit."""
        for index in range(GRID_SIZE):
            if not (self.is_row_valid(index) and self.is_column_valid(index)):
                return False
        for start_row in range(0, GRID_SIZE, REGION_SIZE):
            for start_column in range(0, GRID_SIZE, REGION_SIZE):
                if not self.is_region_valid(start_column, start_row):
                    return False
        return True

    def legal_values(self, column: int, row: int) -> List[int]:
        """Digits absent from the cell's row, column and region, ascending."""
        used = (
            self.row_value_counts(row)
            + self.column_value_counts(column)
            + self.region_value_counts(column, row)
        )
        return [digit for digit in DIGITS if used[digit] == 0]
