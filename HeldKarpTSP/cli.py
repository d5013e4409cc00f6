#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from typing import Callable, Iterable, List, TextIO

from HeldKarpTSP.batch import BatchItem, solve_file, solve_files
from HeldKarpTSP.config import TSPConfig
from HeldKarpTSP.errors import NoMatrixError, TSPError
from HeldKarpTSP.matrix import MAX_CITIES, format_matrix, validate_matrix
from HeldKarpTSP.persistence import load_matrix, numbered_files
from HeldKarpTSP.session import Session
from HeldKarpTSP.solvers import SOLVER_REGISTRY, AlgorithmResult

MENU = """
=== Traveling Salesman Problem (TSP) ===
1. Generate random distance matrix
2. Load distance matrix from file
3. Display distance matrix
4. Solve TSP
5. Solve TSP (Multiple files, only generated one)
6. Exit"""


def _common_options() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--directory",
        type=pathlib.Path,
        help="Directory holding numbered matrix files (default: current directory).",
    )
    parent.add_argument(
        "--pattern",
        dest="file_pattern",
        help="File name pattern for numbered matrices (default: matrix_{index}.txt).",
    )
    parent.add_argument(
        "--max-cities",
        type=int,
        help=f"Largest accepted city count (default: {MAX_CITIES}).",
    )
    parent.add_argument(
        "--solver",
        choices=sorted(SOLVER_REGISTRY.keys()),
        help="Exact solver to run (default: held_karp).",
    )
    parent.add_argument(
        "--time-limit",
        type=float,
        help="Per-solve wall clock budget in seconds (default: unlimited).",
    )
    parent.add_argument(
        "--no-path",
        dest="reconstruct_path",
        action="store_false",
        default=None,
        help="Report only the tour cost, not the tour itself.",
    )
    parent.add_argument("--seed", type=int, help="Random seed for matrix generation.")
    parent.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parent


def parse_args(raw_args: Iterable[str] | None = None) -> argparse.Namespace:
    common = _common_options()
    parser = argparse.ArgumentParser(description="Exact TSP solving with Held-Karp dynamic programming.")
    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser("generate", parents=[common], help="Generate random distance matrices.")
    generate.add_argument("--cities", type=int, required=True, help="Number of cities per matrix.")
    generate.add_argument("--count", type=int, default=1, help="How many matrices to generate.")
    generate.add_argument("--low", dest="weight_low", type=int, help="Smallest edge weight (default: 1).")
    generate.add_argument("--high", dest="weight_high", type=int, help="Largest edge weight (default: 100).")

    show = subparsers.add_parser("show", parents=[common], help="Display a matrix file.")
    show.add_argument("file", type=pathlib.Path)

    solve = subparsers.add_parser("solve", parents=[common], help="Solve the matrix stored in a file.")
    solve.add_argument("file", type=pathlib.Path)

    batch = subparsers.add_parser("batch", parents=[common], help="Solve numbered matrix files.")
    batch.add_argument("--count", type=int, required=True, help="Number of files to process.")
    batch.add_argument("--workers", type=int, help="Worker processes for the batch (default: 1).")

    subparsers.add_parser("menu", parents=[common], help="Interactive menu (default).")
    return parser.parse_args(raw_args)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def format_result(result: AlgorithmResult) -> List[str]:
    if result.status != "complete":
        return [f"Solver stopped ({result.status}) after {result.elapsed_ns} ns"]
    lines = [f"Shortest path cost: {result.cost}"]
    if result.path is not None:
        lines.append("Tour: " + " -> ".join(str(city) for city in result.path))
    lines.append(f"Execution time: {result.elapsed_ns} ns")
    return lines


def format_batch_item(item: BatchItem) -> str:
    if not item.ok:
        return f"Skipping file: {item.path} due to errors. ({item.error})"
    result = item.result
    if result.status != "complete":
        return f"File: {item.path}, solver stopped ({result.status}) after {result.elapsed_ns} ns"
    return f"File: {item.path}, Shortest path cost: {result.cost}, Execution time: {result.elapsed_ns} ns"


def report_batch(items: List[BatchItem], out: TextIO, err: TextIO) -> int:
    failures = 0
    for item in items:
        if item.ok:
            print(format_batch_item(item), file=out)
        else:
            failures += 1
            print(format_batch_item(item), file=err)
    return failures


def cmd_generate(args: argparse.Namespace, config: TSPConfig, out: TextIO, err: TextIO) -> int:
    session = Session(config=config)
    paths = session.generate(args.cities, args.count)
    for path in paths:
        print(f"Matrix saved to file: {path}", file=out)
    print(f"{len(paths)} matrices generated and saved to files.", file=out)
    return 0


def cmd_show(args: argparse.Namespace, config: TSPConfig, out: TextIO, err: TextIO) -> int:
    matrix = validate_matrix(load_matrix(args.file, config.max_cities), config.max_cities)
    print(format_matrix(matrix), file=out)
    return 0


def cmd_solve(args: argparse.Namespace, config: TSPConfig, out: TextIO, err: TextIO) -> int:
    item = solve_file(
        args.file,
        solver_name=config.solver,
        max_cities=config.max_cities,
        time_limit=config.time_limit,
        reconstruct_path=config.reconstruct_path,
    )
    if not item.ok:
        print(f"Error: {item.error}", file=err)
        return 1
    for line in format_result(item.result):
        print(line, file=out)
    return 0 if item.result.status == "complete" else 1


def cmd_batch(args: argparse.Namespace, config: TSPConfig, out: TextIO, err: TextIO) -> int:
    paths = numbered_files(args.count, config.directory, config.file_pattern)
    items = solve_files(
        paths,
        solver_name=config.solver,
        workers=config.workers,
        max_cities=config.max_cities,
        time_limit=config.time_limit,
        reconstruct_path=config.reconstruct_path,
    )
    report_batch(items, out, err)
    return 0


def _ask_int(prompt: str, input_fn: Callable[[str], str], err: TextIO) -> int | None:
    raw = input_fn(prompt).strip()
    try:
        return int(raw)
    except ValueError:
        print(f"Invalid number: {raw!r}", file=err)
        return None


def run_menu(
    session: Session,
    input_fn: Callable[[str], str] = input,
    out: TextIO = sys.stdout,
    err: TextIO = sys.stderr,
) -> int:
    """Interactive loop over the session; returns when the user picks Exit or input ends."""
    max_cities = session.config.max_cities
    while True:
        print(MENU, file=out)
        try:
            choice = input_fn("Select an option: ").strip()
            if choice == "1":
                num_cities = _ask_int(f"Enter the number of cities (max {max_cities}): ", input_fn, err)
                if num_cities is None:
                    continue
                count = _ask_int("Enter the number of matrices to generate: ", input_fn, err)
                if count is None:
                    continue
                try:
                    paths = session.generate(num_cities, count)
                except OSError as exc:
                    print(f"Error: Could not write matrix files: {exc}", file=err)
                    continue
                except TSPError as exc:
                    print(str(exc), file=err)
                    continue
                for path in paths:
                    print(f"Matrix saved to file: {path}", file=out)
                print(f"{count} matrices generated and saved to files.", file=out)
            elif choice == "2":
                filename = input_fn("Enter filename: ").strip()
                try:
                    session.load(filename)
                except OSError as exc:
                    print(f"Error: Could not open file {filename}: {exc.strerror or exc}", file=err)
                    continue
                except TSPError as exc:
                    print(f"Error: {exc}", file=err)
                    continue
                print("Distance matrix loaded successfully.", file=out)
            elif choice == "3":
                try:
                    text = session.display()
                except NoMatrixError as exc:
                    print(str(exc), file=out)
                    continue
                print("\nCurrent distance matrix:", file=out)
                print(text, file=out)
            elif choice == "4":
                try:
                    result = session.solve()
                except NoMatrixError as exc:
                    print(str(exc), file=out)
                    continue
                except TSPError as exc:
                    print(f"Error: {exc}", file=err)
                    continue
                print("", file=out)
                for line in format_result(result):
                    print(line, file=out)
            elif choice == "5":
                count = _ask_int("Enter the number of files to process: ", input_fn, err)
                if count is None:
                    continue
                report_batch(session.solve_many(count), out, err)
            elif choice == "6":
                print("Exiting program. Goodbye!", file=out)
                return 0
            else:
                print("Invalid option. Please try again.", file=out)
        except EOFError:
            return 0


def cmd_menu(args: argparse.Namespace, config: TSPConfig, out: TextIO, err: TextIO) -> int:
    return run_menu(Session(config=config), out=out, err=err)


COMMANDS = {
    "generate": cmd_generate,
    "show": cmd_show,
    "solve": cmd_solve,
    "batch": cmd_batch,
    "menu": cmd_menu,
}


def main(
    raw_args: Iterable[str] | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    args = parse_args(raw_args)
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    configure_logging(getattr(args, "verbose", False))
    config = TSPConfig.from_args(args)
    command = COMMANDS[args.command or "menu"]
    try:
        return command(args, config, out, err)
    except OSError as exc:
        print(f"Error: {exc}", file=err)
        return 1
    except TSPError as exc:
        print(f"Error: {exc}", file=err)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
