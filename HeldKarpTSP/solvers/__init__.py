from __future__ import annotations

from HeldKarpTSP.solvers.base import AlgorithmResult, BaseSolver, SolverSpec
from HeldKarpTSP.solvers.exact import BruteForceSolver, HeldKarpSolver, MemoTable, held_karp_cost

SOLVER_SPECS: dict[str, SolverSpec] = {
    HeldKarpSolver.name: SolverSpec(
        name=HeldKarpSolver.name,
        cls=HeldKarpSolver,
        max_cities=HeldKarpSolver.max_cities,
    ),
    BruteForceSolver.name: SolverSpec(
        name=BruteForceSolver.name,
        cls=BruteForceSolver,
        max_cities=BruteForceSolver.max_cities,
    ),
}

SOLVER_REGISTRY: dict[str, type[BaseSolver]] = {name: spec.cls for name, spec in SOLVER_SPECS.items()}


def get_solver(name: str, **options) -> BaseSolver:
    solver_cls = SOLVER_REGISTRY.get(name)
    if solver_cls is None:
        raise KeyError(f"Unknown solver: {name}")
    return solver_cls(**options)


__all__ = [
    "AlgorithmResult",
    "BaseSolver",
    "BruteForceSolver",
    "HeldKarpSolver",
    "MemoTable",
    "SOLVER_REGISTRY",
    "SOLVER_SPECS",
    "get_solver",
    "held_karp_cost",
]
