from HeldKarpTSP.solvers.exact.brute_force import BruteForceSolver
from HeldKarpTSP.solvers.exact.held_karp import HeldKarpSolver, MemoTable, held_karp_cost

__all__ = [
    "BruteForceSolver",
    "HeldKarpSolver",
    "MemoTable",
    "held_karp_cost",
]
