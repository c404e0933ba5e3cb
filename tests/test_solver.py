import logging

import pytest

from grid import Grid
from sample_puzzles import (
    CLASSIC_TEXT,
    DEAD_END_TEXT,
    HARDEST_TEXT,
    INVALID_BOX_TEXT,
    NO_SOLUTION_TEXT,
    SOLVED_ROWS,
)
from solver import InvalidPuzzleError, SudokuSolver
from utils import decode_puzzle


def assert_solution_of(solution, puzzle):
    assert solution.is_complete()
    assert solution.is_grid_valid()
    for row in range(9):
        for column in range(9):
            clue = puzzle.get(column, row)
            if clue:
                assert solution.get(column, row) == clue


def test_already_solved_grid_is_returned_unchanged(solved_grid):
    solver = SudokuSolver()
    solution, cycles = solver.solve(solved_grid)
    assert cycles == 1
    assert solution == Grid.from_rows(SOLVED_ROWS)
    assert solver.last_status == "solved"
    assert solver.last_cycles == 1


def test_single_blank_cell_needs_one_extra_cycle(one_empty_grid):
    solver = SudokuSolver()
    solution, cycles = solver.solve(one_empty_grid)
    assert cycles == 2
    assert solution.get(0, 0) == 4
    assert solution == Grid.from_rows(SOLVED_ROWS)


def test_solve_mutates_grid_in_place(one_empty_grid):
    solution, _ = SudokuSolver().solve(one_empty_grid)
    assert solution is one_empty_grid
    assert one_empty_grid.is_complete()


def test_duplicate_in_box_is_rejected_before_search():
    puzzle = decode_puzzle(INVALID_BOX_TEXT)
    before = puzzle.copy()
    solver = SudokuSolver()
    assert not puzzle.is_grid_valid()
    with pytest.raises(InvalidPuzzleError):
        solver.solve(puzzle)
    assert solver.last_status == "invalid"
    assert solver.last_cycles == 0
    assert puzzle == before


def test_invalid_puzzle_is_reported_only_by_the_exception(caplog):
    caplog.set_level(logging.DEBUG, logger="solver")
    with pytest.raises(InvalidPuzzleError, match="repeat a digit"):
        SudokuSolver().solve(decode_puzzle(INVALID_BOX_TEXT))
    assert caplog.records == []


def test_invalid_puzzle_error_is_a_value_error():
    assert issubclass(InvalidPuzzleError, ValueError)


def test_dead_end_grid_is_reported_unsolvable():
    puzzle = decode_puzzle(DEAD_END_TEXT)
    assert puzzle.is_grid_valid()
    solver = SudokuSolver()
    solution, cycles = solver.solve(puzzle.copy())
    assert not solution.is_complete()
    assert solution == puzzle
    assert cycles == 1
    assert solver.last_status == "unsolvable"


def test_exhausted_search_puts_every_tentative_cell_back():
    puzzle = decode_puzzle(NO_SOLUTION_TEXT)
    assert puzzle.is_grid_valid()
    solver = SudokuSolver()
    solution, cycles = solver.solve(puzzle.copy())
    assert not solution.is_complete()
    assert solution == puzzle
    assert solution.empty_cell_count() == puzzle.empty_cell_count()
    assert cycles > 1
    assert solver.last_status == "unsolvable"


def test_unsolvable_result_is_repeatable():
    puzzle = decode_puzzle(DEAD_END_TEXT)
    solver = SudokuSolver()
    first, first_cycles = solver.solve_copy(puzzle)
    second, second_cycles = solver.solve_copy(first)
    assert first == second == puzzle
    assert first_cycles == second_cycles


def test_backtracking_restores_cells_on_failed_branches():
    # (0,0) accepts 1 or 2; trying 1 first leaves (1,0) with no legal value.
    rows = [
        [0, 0, 3, 4, 5, 6, 7, 8, 9],
        [4, 5, 0, 7, 8, 9, 2, 1, 3],
        [7, 8, 9, 2, 1, 3, 4, 5, 6],
        [0, 2, 4, 3, 6, 5, 8, 9, 7],
        [3, 6, 5, 8, 9, 7, 1, 2, 4],
        [8, 9, 7, 1, 2, 4, 3, 6, 5],
        [5, 3, 2, 6, 4, 1, 9, 7, 8],
        [6, 4, 1, 9, 7, 8, 5, 3, 2],
        [9, 7, 8, 5, 3, 2, 6, 4, 1],
    ]
    puzzle = Grid.from_rows(rows)
    assert puzzle.is_grid_valid()
    assert puzzle.legal_values(0, 0) == [1, 2]
    solution, cycles = SudokuSolver().solve(puzzle.copy())
    assert_solution_of(solution, puzzle)
    assert solution.get(0, 0) == 2
    assert solution.get(1, 0) == 1
    assert solution.get(2, 1) == 6
    assert solution.get(0, 3) == 1
    assert cycles == 6


def test_classic_puzzle_is_solved():
    puzzle = decode_puzzle(CLASSIC_TEXT)
    solution, cycles = SudokuSolver().solve_copy(puzzle)
    assert_solution_of(solution, puzzle)
    assert cycles > puzzle.empty_cell_count()


def test_solve_copy_leaves_input_untouched():
    puzzle = decode_puzzle(CLASSIC_TEXT)
    before = puzzle.copy()
    solution, _ = SudokuSolver().solve_copy(puzzle)
    assert puzzle == before
    assert solution is not puzzle


def test_sparse_hard_puzzle_terminates_with_valid_solution():
    puzzle = decode_puzzle(HARDEST_TEXT)
    solver = SudokuSolver()
    solution, cycles = solver.solve_copy(puzzle)
    assert_solution_of(solution, puzzle)
    assert cycles > 1000
    assert solver.last_status == "solved"
    assert solver.last_elapsed_ms > 0


def test_cycle_budget_stops_search_and_restores_grid():
    puzzle = decode_puzzle(HARDEST_TEXT)
    solver = SudokuSolver(max_cycles=50)
    solution, cycles = solver.solve_copy(puzzle)
    assert cycles == 50
    assert solver.last_status == "cutoff"
    assert not solution.is_complete()
    assert solution == puzzle


def test_budget_large_enough_does_not_interfere(one_empty_grid):
    solver = SudokuSolver(max_cycles=2)
    solution, cycles = solver.solve(one_empty_grid)
    assert solution.is_complete()
    assert cycles == 2
    assert solver.last_status == "solved"


@pytest.mark.parametrize("budget", [0, -5])
def test_budget_must_be_positive(budget):
    with pytest.raises(ValueError):
        SudokuSolver(max_cycles=budget)


def test_status_resets_between_solves(solved_grid):
    solver = SudokuSolver()
    with pytest.raises(InvalidPuzzleError):
        solver.solve(decode_puzzle(INVALID_BOX_TEXT))
    solver.solve(solved_grid)
    assert solver.last_status == "solved"
