"""Utility helpers for puzzle decoding, pretty printing, and puzzle libraries."""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

import yaml

from grid import GRID_SIZE, UNSET_VALUE, Grid

EXPECTED_NUMBER_OF_SQUARES = GRID_SIZE * GRID_SIZE
UNSET_VALUE_STRING = "."
BOX_HORIZONTAL_DIVIDER = "------+-------+-------"
_DIVIDER_INDICES = (2, 5)
_COLUMN_DIVIDER = "| "
_LAYOUT_CHARACTERS = frozenset(BOX_HORIZONTAL_DIVIDER + _COLUMN_DIVIDER)
_NON_DIGIT = re.compile(r"[^0-9]")


class PuzzleFormatError(ValueError):
    """Puzzle text or a puzzle library could not be decoded."""


@dataclass
class SolveReport:
    title: str
    status: str
    cycles: int = 0
    elapsed_ms: float = 0.0
    puzzle: Optional[Grid] = None
    solution: Optional[Grid] = None

    @property
    def solved(self) -> bool:
        return self.status == "solved"


def check_placeholder(placeholder: str) -> None:
    """Reject placeholders that collide with digits or the grid layout.

    ``0`` is allowed since it already means an empty cell.
    """
    if len(placeholder) != 1:
        raise ValueError(f"Placeholder must be a single character, got {placeholder!r}")
    if placeholder.isspace() or placeholder in _LAYOUT_CHARACTERS:
        raise ValueError(f"Placeholder {placeholder!r} is used for grid layout")
    if placeholder.isdigit() and placeholder != str(UNSET_VALUE):
        raise ValueError(f"Placeholder {placeholder!r} is a cell digit")


def decode_puzzle(text: str, placeholder: str = UNSET_VALUE_STRING) -> Grid:
    """Turn puzzle text into a grid, ignoring layout characters.

    The placeholder (and a literal ``0``) marks an empty cell. Anything that
    is not a digit is dropped before counting, so grid lines and whitespace
    are allowed anywhere.
    """
    check_placeholder(placeholder)
    values = _NON_DIGIT.sub("", text.replace(placeholder, str(UNSET_VALUE)))
    if len(values) != EXPECTED_NUMBER_OF_SQUARES:
        raise PuzzleFormatError(
            f"Puzzle should contain exactly {EXPECTED_NUMBER_OF_SQUARES} values, found {len(values)}"
        )
    rows = [
        [int(value) for value in values[start : start + GRID_SIZE]]
        for start in range(0, EXPECTED_NUMBER_OF_SQUARES, GRID_SIZE)
    ]
    return Grid.from_rows(rows)


def puzzle_to_pretty_string(grid: Grid, placeholder: str = UNSET_VALUE_STRING) -> str:
    """Render the grid as nine lines with box dividers."""
    check_placeholder(placeholder)
    lines = []
    for y, row in enumerate(grid):
        line = ""
        for x, value in enumerate(row):
            line += (placeholder if value == UNSET_VALUE else str(value)) + " "
            if x in _DIVIDER_INDICES:
                line += _COLUMN_DIVIDER
        lines.append(line + "\n")
        if y in _DIVIDER_INDICES:
            lines.append(BOX_HORIZONTAL_DIVIDER + "\n")
    return "".join(lines)


def format_count(value: Union[int, float]) -> str:
    """Group thousands, e.g. 12345 -> '12,345'."""
    return f"{round(value):,}"


def load_puzzles(path: Union[str, Path]) -> Dict[str, str]:
    """Read a YAML mapping of puzzle titles to puzzle text."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise PuzzleFormatError(f"Unable to parse puzzle library {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise PuzzleFormatError(f"Puzzle library {path} must be a mapping of title to puzzle")
    puzzles: Dict[str, str] = {}
    for title, text in data.items():
        if not isinstance(text, str):
            raise PuzzleFormatError(f"Puzzle {title!r} in {path} is not a string")
        puzzles[str(title)] = text
    return puzzles
