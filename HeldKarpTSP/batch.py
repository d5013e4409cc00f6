from __future__ import annotations

import logging
import multiprocessing as mp
import pathlib
from dataclasses import dataclass
from functools import partial
from typing import Iterable, List

from HeldKarpTSP.errors import TSPError
from HeldKarpTSP.matrix import MAX_CITIES, validate_matrix
from HeldKarpTSP.persistence import load_matrix
from HeldKarpTSP.solvers import AlgorithmResult, get_solver

logger = logging.getLogger(__name__)


@dataclass
class BatchItem:
    """Outcome for one file of a batch: either a result or an error message."""

    path: pathlib.Path
    result: AlgorithmResult | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def solve_file(
    path: str | pathlib.Path,
    solver_name: str = "held_karp",
    max_cities: int = MAX_CITIES,
    time_limit: float | None = None,
    reconstruct_path: bool = True,
) -> BatchItem:
    """Load, validate and solve one matrix file without letting errors escape."""
    path = pathlib.Path(path)
    try:
        matrix = validate_matrix(load_matrix(path, max_cities=max_cities), max_cities=max_cities)
        solver = get_solver(solver_name, reconstruct_path=reconstruct_path)
        result = solver.solve(matrix, time_limit=time_limit)
    except OSError as exc:
        logger.warning("Skipping file: %s due to errors.", path)
        return BatchItem(path=path, error=f"Could not open file {path}: {exc.strerror or exc}")
    except TSPError as exc:
        logger.warning("Skipping file: %s due to errors.", path)
        return BatchItem(path=path, error=str(exc))
    return BatchItem(path=path, result=result)


def solve_files(
    paths: Iterable[str | pathlib.Path],
    solver_name: str = "held_karp",
    workers: int = 1,
    max_cities: int = MAX_CITIES,
    time_limit: float | None = None,
    reconstruct_path: bool = True,
) -> List[BatchItem]:
    """Solve every file independently; failures are reported per item.

    With ``workers > 1`` the files are spread over a process pool. Each solve
    owns its memo table, so nothing is shared between items. Results keep the
    order of ``paths``.
    """
    paths = [pathlib.Path(p) for p in paths]
    worker = partial(
        solve_file,
        solver_name=solver_name,
        max_cities=max_cities,
        time_limit=time_limit,
        reconstruct_path=reconstruct_path,
    )
    if workers <= 1 or len(paths) <= 1:
        return [worker(path) for path in paths]

    logger.debug("Solving %d files with %d worker processes", len(paths), workers)
    with mp.Pool(processes=min(workers, len(paths))) as pool:
        return pool.map(worker, paths)


__all__ = ["BatchItem", "solve_file", "solve_files"]
