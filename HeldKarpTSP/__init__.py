from HeldKarpTSP.batch import BatchItem, solve_file, solve_files
from HeldKarpTSP.config import TSPConfig
from HeldKarpTSP.errors import InvalidInputError, MatrixParseError, NoMatrixError, TSPError, UnsolvableError
from HeldKarpTSP.matrix import MAX_CITIES, MIN_CITIES, format_matrix, generate_matrix, validate_matrix
from HeldKarpTSP.persistence import dumps_matrix, load_matrix, loads_matrix, matrix_filename, numbered_files, save_matrix
from HeldKarpTSP.session import Session
from HeldKarpTSP.solvers import (
    AlgorithmResult,
    BaseSolver,
    BruteForceSolver,
    HeldKarpSolver,
    MemoTable,
    SOLVER_REGISTRY,
    SOLVER_SPECS,
    get_solver,
    held_karp_cost,
)

__all__ = [
    "AlgorithmResult",
    "BaseSolver",
    "BatchItem",
    "BruteForceSolver",
    "HeldKarpSolver",
    "InvalidInputError",
    "MAX_CITIES",
    "MIN_CITIES",
    "MatrixParseError",
    "MemoTable",
    "NoMatrixError",
    "SOLVER_REGISTRY",
    "SOLVER_SPECS",
    "Session",
    "TSPConfig",
    "TSPError",
    "UnsolvableError",
    "dumps_matrix",
    "format_matrix",
    "generate_matrix",
    "get_solver",
    "held_karp_cost",
    "load_matrix",
    "loads_matrix",
    "matrix_filename",
    "numbered_files",
    "save_matrix",
    "solve_file",
    "solve_files",
    "validate_matrix",
]
