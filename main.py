"""CLI entrypoint for the generalized Sudoku board generator."""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional

from sudokugen.core.constants import (
    DEFAULT_BOX_SIZE,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_SIZE,
    DEFAULT_TIME_BUDGET_MS,
)
from sudokugen.core.exceptions import SudokuError
from sudokugen.data.board_cache import DEFAULT_CACHE_DIR, BoardCache
from sudokugen.engine.board_store import DEFAULT_DB_PATH, BoardStore
from sudokugen.engine.generator import BoardGenerator, GeneratorConfig
from sudokugen.engine.solver import count_boards
from sudokugen.engine.validator import BoardValidator
from sudokugen.io.persistence import BoardPersister
from sudokugen.utils.logger import configure_logging, get_logger, parse_level
from sudokugen.utils.pretty import format_ms, print_board, progress_line

LOGGER = get_logger("sudokugen.cli")

InputFn = Callable[[str], str]


def confirm(question: str, default: bool = True, input_fn: InputFn = input) -> bool:
    """Ask a yes/no question; an empty answer picks ``default``."""
    suffix = " [Y/n] " if default else " [y/N] "
    answer = input_fn(question + suffix).strip().lower()
    if not answer:
        return default
    return answer in {"y", "yes"}


def _add_geometry_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-s", "--size", type=int, default=DEFAULT_SIZE, help="Grid size n")
    parser.add_argument("-b", "--box-size", type=int, default=DEFAULT_BOX_SIZE, help="Box size b")
    parser.add_argument(
        "-m",
        "--max-value",
        type=int,
        default=None,
        help="Largest cell value m (defaults to the grid size; must be >= b*b)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Enumerate complete Sudoku-style boards of any size",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    database = commands.add_parser("database", help="Generate every board and save it to the board table")
    _add_geometry_arguments(database)
    database.add_argument("-o", "--no-output", action="store_true", help="Hide progress lines")
    database.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help="Boards per table insert",
    )
    database.add_argument("--cache-dir", type=Path, default=DEFAULT_CACHE_DIR, help="Staging cache directory")
    database.add_argument("--db", type=Path, default=DEFAULT_DB_PATH, help="SQLite file for the board table")
    database.add_argument("--verify", action="store_true", help="Read the saved boards back and validate them")

    session = commands.add_parser("session", help="Hand out boards one at a time in ascending order")
    _add_geometry_arguments(session)
    session.add_argument("-y", "--yes", action="store_true", help="Do not ask before each board")
    session.add_argument("-o", "--no-output", action="store_true", help="Do not print the boards")
    session.add_argument(
        "--time-budget-ms",
        type=float,
        default=DEFAULT_TIME_BUDGET_MS,
        help="Wall-clock budget per search step in milliseconds",
    )
    session.add_argument("--verify", action="store_true", help="Validate every board before showing it")
    session.add_argument("--limit", type=int, default=None, help="Stop after this many boards")

    count = commands.add_parser("count", help="Count boards with the CP-SAT solver")
    _add_geometry_arguments(count)
    count.add_argument("--limit", type=int, default=None, help="Stop counting after this many boards")
    count.add_argument("--timeout", type=float, default=30.0, help="Solver time limit in seconds")
    return parser


def _report_errors(errors: List[str]) -> int:
    for message in errors:
        print(message, file=sys.stderr)
    return 2


def run_database(args: argparse.Namespace) -> int:
    config = GeneratorConfig(
        size=args.size,
        box_size=args.box_size,
        max_value=args.max_value,
        time_budget_ms=None,
    )
    errors = config.errors()
    if errors:
        return _report_errors(errors)
    if args.chunk_size <= 0:
        return _report_errors(["Chunk size should be a positive integer."])

    generator = BoardGenerator(config)
    cache = BoardCache(args.cache_dir)
    store = BoardStore(args.db)
    persister = BoardPersister(
        cache,
        store,
        max_value=config.resolved_max_value,
        chunk_size=args.chunk_size,
    )
    prefix = config.cache_prefix()
    cache.clear(prefix)
    n = config.size

    def show(label: str) -> Optional[Callable[[int], None]]:
        if args.no_output:
            return None
        return lambda count: progress_line(f"Total {n} * {n} Boards {label}: {count}")

    print("Caching the Boards...")
    start = time.perf_counter()
    total = persister.stage(generator.boards(), prefix, show("Cached"))
    staging_ms = (time.perf_counter() - start) * 1000.0
    if not args.no_output:
        print()
    print("." * 20 + format_ms(staging_ms))
    print(f"Time per board: {format_ms(staging_ms / max(total, 1))}")

    print("Saving them to Database...")
    start = time.perf_counter()
    store.delete_run(prefix)
    saved = persister.flush(prefix, total, show("Saved"))
    saving_ms = (time.perf_counter() - start) * 1000.0
    if not args.no_output:
        print()
    print("." * 20 + format_ms(saving_ms))
    print(f"Total boards saved: {saved}")

    if args.verify:
        validator = BoardValidator(config.size, config.box_size, config.resolved_max_value)
        stored = store.load_boards(prefix, config.size, config.resolved_max_value)
        for board in stored:
            validator.ensure_valid(board)
        print(f"Verified {len(stored)} boards from the table.")
    return 0


def run_session(args: argparse.Namespace, input_fn: InputFn = input) -> int:
    config = GeneratorConfig(
        size=args.size,
        box_size=args.box_size,
        max_value=args.max_value,
        time_budget_ms=args.time_budget_ms,
    )
    errors = config.errors()
    if errors:
        return _report_errors(errors)

    generator = BoardGenerator(config)
    backtracker = generator.session()
    validator = (
        BoardValidator(config.size, config.box_size, config.resolved_max_value)
        if args.verify
        else None
    )

    print("Sudoku session started.")
    total = 0
    session_start = time.perf_counter()
    while args.limit is None or total < args.limit:
        if not args.yes and not confirm("Print one?", True, input_fn):
            break

        step_start = time.perf_counter()
        outcome = backtracker.advance()
        while outcome.is_timed_out:
            LOGGER.warning(
                "No board within %s; the search position is kept",
                format_ms(config.time_budget_ms or 0.0),
            )
            if not args.yes and not confirm("Keep searching?", True, input_fn):
                break
            outcome = backtracker.advance()

        if outcome.is_timed_out:
            break
        if outcome.is_exhausted:
            print("No more boards exist.")
            break

        board = outcome.board
        if board is None:
            break
        if validator is not None:
            validator.ensure_valid(board)
        total += 1
        if not args.no_output:
            print_board(board, config.box_size, config.resolved_max_value)
            print(f"Generated in {format_ms((time.perf_counter() - step_start) * 1000.0)}")

    elapsed_ms = (time.perf_counter() - session_start) * 1000.0
    print("Sudoku session ended.")
    print(f"Total combinations: {total}")
    print(f"Total time: {format_ms(elapsed_ms)}")
    print(f"Average time: {format_ms(elapsed_ms / max(total, 1))}")
    return 0


def run_count(args: argparse.Namespace) -> int:
    config = GeneratorConfig(
        size=args.size,
        box_size=args.box_size,
        max_value=args.max_value,
        time_budget_ms=None,
    )
    errors = config.errors()
    if errors:
        return _report_errors(errors)

    generator = BoardGenerator(config)
    result = count_boards(
        generator.geometry,
        config.resolved_max_value,
        limit=args.limit,
        timeout=args.timeout,
    )
    qualifier = "" if result.complete else "at least "
    print(f"Boards: {qualifier}{result.count}")
    return 0


COMMANDS = {
    "database": run_database,
    "session": run_session,
    "count": run_count,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(parse_level(args.log_level))

    try:
        return COMMANDS[args.command](args)
    except SudokuError as exc:
        LOGGER.error("%s", exc)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
