import pytest

from grid import Grid
from sample_puzzles import INVALID_BOX_TEXT, SOLVED_ROWS, SOLVED_TEXT


@pytest.fixture
def solved_grid():
    return Grid.from_rows(SOLVED_ROWS)


@pytest.fixture
def one_empty_grid():
    grid = Grid.from_rows(SOLVED_ROWS)
    grid.set(0, 0, 0)
    return grid


@pytest.fixture
def puzzle_file(tmp_path):
    path = tmp_path / "puzzles.yaml"
    path.write_text(
        "Already solved: |\n"
        + "".join(f"  {line}\n" for line in SOLVED_TEXT.strip().splitlines())
        + "Invalid box: |\n"
        + "".join(f"  {line}\n" for line in INVALID_BOX_TEXT.strip().splitlines()),
        encoding="utf-8",
    )
    return path
