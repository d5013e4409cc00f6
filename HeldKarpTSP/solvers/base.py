from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Type

import numpy as np


@dataclass
class AlgorithmResult:
    """Container capturing the outcome of running a TSP solver."""

    name: str
    path: List[int] | None
    cost: int | None
    elapsed: float
    status: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def elapsed_ns(self) -> int:
        return int(round(self.elapsed * 1e9))


class TimeLimitExpired(Exception):
    """Raised when an algorithm exceeds the allotted wall clock budget."""


def current_time() -> float:
    return time.perf_counter()


def remaining_budget(start_time: float, time_limit: float) -> float:
    return time_limit - (current_time() - start_time)


def enforce_time_budget(start_time: float, time_limit: float | None) -> None:
    if time_limit is None:
        return
    if remaining_budget(start_time, time_limit) <= 0:
        raise TimeLimitExpired("Time budget exhausted")


def compute_cycle_cost(dist_matrix: np.ndarray, cycle: Sequence[int]) -> int:
    """Compute tour cost of a closed cycle (first city repeated at the end)."""
    if len(cycle) < 2:
        raise ValueError("A cycle needs at least two entries")
    cost = 0
    for a, b in zip(cycle, cycle[1:]):
        cost += int(dist_matrix[a, b])
    return cost


def best_cycle(points: Sequence[int]) -> List[int]:
    cycle = list(points)
    if cycle and cycle[0] != cycle[-1]:
        cycle.append(cycle[0])
    return cycle


@dataclass(frozen=True)
class SolverSpec:
    """Metadata describing a solver implementation."""

    name: str
    cls: Type["BaseSolver"]
    max_cities: int


class BaseSolver:
    """Common interface for exact TSP solvers."""

    name: str
    max_cities: int

    def __init__(self, reconstruct_path: bool = True):
        self.reconstruct_path = reconstruct_path

    def solve(
        self,
        graph: np.ndarray,
        start_city: int = 0,
        time_limit: float | None = None,
    ) -> AlgorithmResult:  # noqa: D401
        """Solve a TSP instance represented as a distance matrix."""
        raise NotImplementedError

    def __call__(
        self,
        graph: np.ndarray,
        start_city: int = 0,
        time_limit: float | None = None,
    ) -> AlgorithmResult:
        return self.solve(graph, start_city=start_city, time_limit=time_limit)


__all__ = [
    "AlgorithmResult",
    "BaseSolver",
    "SolverSpec",
    "TimeLimitExpired",
    "best_cycle",
    "compute_cycle_cost",
    "current_time",
    "enforce_time_budget",
    "remaining_budget",
]
