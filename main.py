"""Command line Sudoku solver that reports cycles and timing per puzzle."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from solver import SudokuSolver
from utils import (
    UNSET_VALUE_STRING,
    PuzzleFormatError,
    SolveReport,
    check_placeholder,
    decode_puzzle,
    format_count,
    load_puzzles,
    puzzle_to_pretty_string,
)

log = logging.getLogger(__name__)

DEFAULT_PUZZLES = Path(__file__).with_name("puzzles.yaml")
DEFAULT_TITLE = "Command line puzzle"


def solve_and_report(
    title: str,
    puzzle_text: str,
    solver: SudokuSolver,
    placeholder: str = UNSET_VALUE_STRING,
) -> SolveReport:
    try:
        puzzle = decode_puzzle(puzzle_text, placeholder)
    except PuzzleFormatError as exc:
        print(f'Could not decode "{title}": {exc}')
        return SolveReport(title=title, status="malformed")

    print(f'Solving puzzle ("{title}"):')
    print(puzzle_to_pretty_string(puzzle, placeholder))

    if not puzzle.is_grid_valid():
        print(f'Input puzzle "{title}" is not valid.')
        return SolveReport(title=title, status="invalid", puzzle=puzzle)

    solution, cycles = solver.solve_copy(puzzle)
    report = SolveReport(
        title=title,
        status=solver.last_status,
        cycles=cycles,
        elapsed_ms=solver.last_elapsed_ms,
        puzzle=puzzle,
        solution=solution,
    )
    counts = f"{format_count(report.cycles)} cycle(s) in {format_count(report.elapsed_ms)} ms"
    if report.solved:
        print(f'Solved "{title}" using {counts}:')
        print(puzzle_to_pretty_string(solution, placeholder))
    elif report.status == "cutoff":
        print(f'Gave up on "{title}" after {counts}.')
    else:
        print(f'Determined that "{title}" has no solution using {counts}:')
    return report


def run(
    puzzles: Dict[str, str],
    max_cycles: Optional[int] = None,
    placeholder: str = UNSET_VALUE_STRING,
) -> List[SolveReport]:
    solver = SudokuSolver(max_cycles=max_cycles)
    reports = []
    for title, puzzle_text in puzzles.items():
        log.debug("Processing puzzle %r", title)
        reports.append(solve_and_report(title, puzzle_text, solver, placeholder))
    return reports


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Backtracking Sudoku solver")
    parser.add_argument(
        "--puzzles",
        type=str,
        default=str(DEFAULT_PUZZLES),
        help="YAML file mapping titles to puzzles (default: bundled examples)",
    )
    parser.add_argument("--puzzle", type=str, default=None, help="Solve a single puzzle given as text")
    parser.add_argument("--title", type=str, default=DEFAULT_TITLE, help="Title used with --puzzle")
    parser.add_argument(
        "--max-cycles",
        type=int,
        default=None,
        help="Give up after this many search cycles (default: unbounded)",
    )
    parser.add_argument(
        "--placeholder",
        type=str,
        default=UNSET_VALUE_STRING,
        help="Character marking an empty cell (default: '.')",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    if args.max_cycles is not None and args.max_cycles < 1:
        parser.error("--max-cycles must be a positive integer")
    try:
        check_placeholder(args.placeholder)
    except ValueError as exc:
        parser.error(f"--placeholder: {exc}")
    return args


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.puzzle is not None:
        puzzles = {args.title: args.puzzle}
    else:
        try:
            puzzles = load_puzzles(args.puzzles)
        except (OSError, PuzzleFormatError) as exc:
            print(f"Unable to load puzzles: {exc}", file=sys.stderr)
            return 2

    reports = run(puzzles, max_cycles=args.max_cycles, placeholder=args.placeholder)
    if any(report.status in ("malformed", "invalid") for report in reports):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
