from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass, field
from typing import List

import numpy as np

from HeldKarpTSP.batch import BatchItem, solve_files
from HeldKarpTSP.config import TSPConfig
from HeldKarpTSP.errors import NoMatrixError
from HeldKarpTSP.matrix import check_city_count, format_matrix, generate_matrix, validate_matrix
from HeldKarpTSP.persistence import load_matrix, numbered_files, save_matrix
from HeldKarpTSP.solvers import AlgorithmResult, get_solver

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Current matrix plus settings for one interactive or scripted run.

    ``generate`` and ``load`` replace the current matrix; ``display`` and
    ``solve`` only read it.
    """

    config: TSPConfig = field(default_factory=TSPConfig)
    matrix: np.ndarray | None = None
    rng: np.random.Generator | None = None

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = np.random.default_rng(self.config.seed)

    def generate(self, num_cities: int, count: int = 1) -> List[pathlib.Path]:
        """Generate ``count`` random matrices and write them to numbered files."""
        check_city_count(num_cities, self.config.max_cities)
        paths = numbered_files(count, self.config.directory, self.config.file_pattern)
        for path in paths:
            matrix = generate_matrix(
                num_cities,
                rng=self.rng,
                low=self.config.weight_low,
                high=self.config.weight_high,
            )
            save_matrix(matrix, path)
            self.matrix = matrix
        logger.info("%d matrices generated and saved to files", count)
        return paths

    def load(self, path: str | pathlib.Path) -> np.ndarray:
        matrix = validate_matrix(load_matrix(path, self.config.max_cities), self.config.max_cities)
        self.matrix = matrix
        return matrix

    def require_matrix(self) -> np.ndarray:
        if self.matrix is None:
            raise NoMatrixError("No distance matrix available. Please generate or load one first.")
        return self.matrix

    def display(self) -> str:
        return format_matrix(self.require_matrix())

    def solve(self) -> AlgorithmResult:
        matrix = validate_matrix(self.require_matrix(), self.config.max_cities)
        solver = get_solver(self.config.solver, reconstruct_path=self.config.reconstruct_path)
        return solver.solve(matrix, time_limit=self.config.time_limit)

    def solve_many(self, count: int) -> List[BatchItem]:
        paths = numbered_files(count, self.config.directory, self.config.file_pattern)
        return solve_files(
            paths,
            solver_name=self.config.solver,
            workers=self.config.workers,
            max_cities=self.config.max_cities,
            time_limit=self.config.time_limit,
            reconstruct_path=self.config.reconstruct_path,
        )


__all__ = ["Session"]
