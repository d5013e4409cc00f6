from __future__ import annotations

import itertools

import numpy as np

from HeldKarpTSP.solvers.base import (
    AlgorithmResult,
    BaseSolver,
    TimeLimitExpired,
    best_cycle,
    compute_cycle_cost,
    current_time,
    enforce_time_budget,
)
from HeldKarpTSP.matrix import as_square_matrix


class BruteForceSolver(BaseSolver):
    """Enumerates every ordering of the non-start cities; only for tiny instances."""

    name = "brute_force"
    max_cities = 10

    def solve(
        self,
        graph: np.ndarray,
        start_city: int = 0,
        time_limit: float | None = None,
    ) -> AlgorithmResult:
        dist_matrix = as_square_matrix(graph, self.max_cities).astype(np.int64)
        start_time = current_time()
        n = dist_matrix.shape[0]
        others = [city for city in range(n) if city != start_city]
        best_cost: int | None = None
        best_path: list[int] | None = None
        tours = 0

        try:
            for perm in itertools.permutations(others):
                enforce_time_budget(start_time, time_limit)
                tours += 1
                cycle = best_cycle([start_city, *perm])
                cost = compute_cycle_cost(dist_matrix, cycle)
                if best_cost is None or cost < best_cost:
                    best_cost = cost
                    best_path = cycle
        except TimeLimitExpired:
            return AlgorithmResult(
                name=self.name,
                path=None,
                cost=None,
                elapsed=current_time() - start_time,
                status="timeout",
                metadata={"num_cities": n, "start_city": start_city, "tours": tours},
            )

        return AlgorithmResult(
            name=self.name,
            path=best_path if self.reconstruct_path else None,
            cost=best_cost,
            elapsed=current_time() - start_time,
            status="complete",
            metadata={"num_cities": n, "start_city": start_city, "tours": tours},
        )


__all__ = ["BruteForceSolver"]
