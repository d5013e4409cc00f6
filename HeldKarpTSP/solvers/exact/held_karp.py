from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

import numpy as np

from HeldKarpTSP.errors import InvalidInputError, UnsolvableError
from HeldKarpTSP.matrix import MAX_CITIES, as_square_matrix
from HeldKarpTSP.solvers.base import (
    AlgorithmResult,
    BaseSolver,
    TimeLimitExpired,
    best_cycle,
    current_time,
    enforce_time_budget,
)

logger = logging.getLogger(__name__)

UNKNOWN = -1
NO_CHOICE = -1
INFINITY = int(np.iinfo(np.int64).max)


def saturating_add(a: int, b: int) -> int:
    """Add two costs, pinning the result to ``INFINITY`` instead of overflowing."""
    if a >= INFINITY or b >= INFINITY:
        return INFINITY
    total = a + b
    return total if total < INFINITY else INFINITY


class MemoTable:
    """Best completion cost for every ``(visited mask, current city)`` state.

    Costs live in a single flat ``int64`` buffer addressed as
    ``slot(mask) * num_cities + city``. Every reachable mask contains the start
    city, so its bit is squeezed out of the slot and the buffer holds
    ``2 ** (num_cities - 1) * num_cities`` entries. A parallel ``int8`` buffer
    stores the next city that achieved each minimum.
    """

    def __init__(self, num_cities: int, start_city: int = 0):
        if not 0 <= start_city < num_cities:
            raise InvalidInputError(f"Start city {start_city} outside [0, {num_cities})")
        self.num_cities = num_cities
        self.start_city = start_city
        self.full_mask = (1 << num_cities) - 1
        self._low_bits = (1 << start_city) - 1
        size = (1 << (num_cities - 1)) * num_cities
        self.costs = np.full(size, UNKNOWN, dtype=np.int64)
        self.choices = np.full(size, NO_CHOICE, dtype=np.int8)
        logger.debug("Allocated memo table with %d entries (%d bytes)", size, self.costs.nbytes + self.choices.nbytes)

    def __len__(self) -> int:
        return int(self.costs.size)

    def offset(self, mask: int, city: int) -> int:
        if not (mask >> self.start_city) & 1 or not (mask >> city) & 1:
            raise IndexError(f"State (mask={mask:#x}, city={city}) is not reachable from city {self.start_city}")
        if mask > self.full_mask or not 0 <= city < self.num_cities:
            raise IndexError(f"State (mask={mask:#x}, city={city}) is out of range")
        slot = ((mask >> (self.start_city + 1)) << self.start_city) | (mask & self._low_bits)
        return slot * self.num_cities + city

    def get(self, mask: int, city: int) -> int | None:
        value = int(self.costs[self.offset(mask, city)])
        return None if value == UNKNOWN else value

    def store(self, mask: int, city: int, cost: int, choice: int) -> None:
        index = self.offset(mask, city)
        self.costs[index] = cost
        self.choices[index] = choice

    def choice(self, mask: int, city: int) -> int:
        return int(self.choices[self.offset(mask, city)])

    def clear(self, states: Iterable[Tuple[int, int]] | None = None) -> None:
        """Forget every entry, or only the given ``(mask, city)`` states."""
        if states is None:
            self.costs.fill(UNKNOWN)
            self.choices.fill(NO_CHOICE)
            return
        for mask, city in states:
            index = self.offset(mask, city)
            self.costs[index] = UNKNOWN
            self.choices[index] = NO_CHOICE

    def known_states(self) -> int:
        return int(np.count_nonzero(self.costs != UNKNOWN))


def run_held_karp(
    dist: List[List[int]],
    table: MemoTable,
    start_time: float | None = None,
    time_limit: float | None = None,
) -> int:
    """Evaluate the tour cost from the start state, filling ``table`` on the way.

    Entries already present in ``table`` are reused as they are. The returned
    value is ``INFINITY`` when no finite completion exists.
    """
    n = table.num_cities
    start = table.start_city
    full_mask = table.full_mask
    if start_time is None:
        start_time = current_time()

    def evaluate(mask: int, pos: int) -> int:
        if mask == full_mask:
            return dist[pos][start]

        cached = table.get(mask, pos)
        if cached is not None:
            return cached

        enforce_time_budget(start_time, time_limit)
        best = INFINITY
        best_city = NO_CHOICE
        candidates = 0
        row = dist[pos]
        for city in range(n):
            if mask & (1 << city):
                continue
            candidates += 1
            cost = saturating_add(row[city], evaluate(mask | (1 << city), city))
            if cost < best:
                best = cost
                best_city = city

        if candidates == 0:
            raise UnsolvableError(f"No unvisited city from state (mask={mask:#x}, city={pos})")
        table.store(mask, pos, best, best_city)
        return best

    return evaluate(1 << start, start)


def reconstruct_path(table: MemoTable) -> List[int]:
    """Follow recorded choices from the start state; returns a closed cycle."""
    start = table.start_city
    mask = 1 << start
    pos = start
    path = [start]
    while mask != table.full_mask:
        nxt = table.choice(mask, pos)
        if nxt == NO_CHOICE:
            raise UnsolvableError(f"No recorded choice for state (mask={mask:#x}, city={pos})")
        path.append(nxt)
        mask |= 1 << nxt
        pos = nxt
    return best_cycle(path)


def held_karp_cost(matrix: np.ndarray, start_city: int = 0, max_cities: int = MAX_CITIES) -> int:
    """Optimal tour cost of ``matrix`` starting and ending at ``start_city``.

    Only shape and size are checked here; ``matrix`` must already pass
    :func:`HeldKarpTSP.matrix.validate_matrix`, otherwise non-integer weights
    are truncated.
    """
    result = HeldKarpSolver(reconstruct_path=False, max_cities=max_cities).solve(matrix, start_city=start_city)
    return int(result.cost)


class HeldKarpSolver(BaseSolver):
    name = "held_karp"
    max_cities = MAX_CITIES

    def __init__(self, reconstruct_path: bool = True, max_cities: int = MAX_CITIES):
        if not 2 <= max_cities <= MAX_CITIES:
            raise ValueError(f"max_cities must be within [2, {MAX_CITIES}], got {max_cities}")
        super().__init__(reconstruct_path=reconstruct_path)
        self.max_cities = max_cities

    def solve(
        self,
        graph: np.ndarray,
        start_city: int = 0,
        time_limit: float | None = None,
    ) -> AlgorithmResult:
        dist_matrix = as_square_matrix(graph, self.max_cities).astype(np.int64)
        n = dist_matrix.shape[0]
        table = MemoTable(n, start_city)
        dist = dist_matrix.tolist()

        start_time = current_time()
        try:
            best_cost = run_held_karp(dist, table, start_time=start_time, time_limit=time_limit)
        except TimeLimitExpired:
            return AlgorithmResult(
                name=self.name,
                path=None,
                cost=None,
                elapsed=current_time() - start_time,
                status="timeout",
                metadata={"num_cities": n, "start_city": start_city, "states": table.known_states()},
            )

        if best_cost >= INFINITY:
            raise UnsolvableError("No finite Hamiltonian cycle exists for this matrix")

        path = reconstruct_path(table) if self.reconstruct_path else None
        elapsed = current_time() - start_time
        states = table.known_states()
        logger.debug("Held-Karp solved n=%d: cost=%d, states=%d, elapsed=%.6fs", n, best_cost, states, elapsed)
        return AlgorithmResult(
            name=self.name,
            path=path,
            cost=best_cost,
            elapsed=elapsed,
            status="complete",
            metadata={"num_cities": n, "start_city": start_city, "states": states},
        )


__all__ = [
    "HeldKarpSolver",
    "INFINITY",
    "MemoTable",
    "held_karp_cost",
    "reconstruct_path",
    "run_held_karp",
    "saturating_add",
]
