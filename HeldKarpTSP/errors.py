from __future__ import annotations


class TSPError(Exception):
    """Base class for all HeldKarpTSP errors."""


class InvalidInputError(TSPError, ValueError):
    """Matrix shape, size, weights or diagonal are not acceptable."""


class MatrixParseError(TSPError, ValueError):
    """Persisted matrix text is malformed."""


class UnsolvableError(TSPError, RuntimeError):
    """No finite Hamiltonian cycle exists for the given matrix."""


class NoMatrixError(TSPError):
    """An operation needs a current matrix but none was generated or loaded."""


__all__ = [
    "InvalidInputError",
    "MatrixParseError",
    "NoMatrixError",
    "TSPError",
    "UnsolvableError",
]
