from __future__ import annotations

import logging
from typing import Any

import numpy as np

from HeldKarpTSP.errors import InvalidInputError

logger = logging.getLogger(__name__)

MIN_CITIES = 2
MAX_CITIES = 25
# Any tour sums at most MAX_CITIES edges, so the total stays below int64 max.
MAX_WEIGHT = int(np.iinfo(np.int64).max) // (MAX_CITIES + 1)


def check_city_count(num_cities: int, max_cities: int = MAX_CITIES) -> None:
    if not MIN_CITIES <= num_cities <= max_cities:
        raise InvalidInputError(
            f"Invalid number of cities: {num_cities} (must be between {MIN_CITIES} and {max_cities})"
        )


def as_square_matrix(matrix: Any, max_cities: int = MAX_CITIES) -> np.ndarray:
    """Coerce ``matrix`` to a 2-D square array and check its size bound.

    Only the shape is inspected here; weights are checked by :func:`validate_matrix`.
    """
    try:
        arr = np.asarray(matrix)
    except ValueError as exc:
        raise InvalidInputError(f"Distance matrix is ragged: {exc}") from exc
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise InvalidInputError(f"Distance matrix must be square, got shape {arr.shape}")
    check_city_count(arr.shape[0], max_cities)
    return arr


def validate_matrix(matrix: Any, max_cities: int = MAX_CITIES) -> np.ndarray:
    """Return ``matrix`` as an ``int64`` array or raise :class:`InvalidInputError`.

    A valid matrix is square with ``MIN_CITIES <= N <= max_cities``, holds
    non-negative integer weights no larger than ``MAX_WEIGHT`` and has a zero
    diagonal. Symmetry is not required.
    """
    arr = as_square_matrix(matrix, max_cities)

    if arr.dtype.kind == "f":
        if not np.all(np.isfinite(arr)) or not np.all(np.mod(arr, 1) == 0):
            raise InvalidInputError("Distance matrix entries must be integers")
    elif arr.dtype.kind not in "iu":
        raise InvalidInputError(f"Distance matrix entries must be integers, got dtype {arr.dtype}")

    if np.any(arr < 0):
        raise InvalidInputError("Distance matrix entries must be non-negative")
    if np.any(arr > MAX_WEIGHT):
        raise InvalidInputError(f"Distance matrix entries must not exceed {MAX_WEIGHT}")
    if np.any(np.diagonal(arr) != 0):
        raise InvalidInputError("Distance matrix diagonal must be zero")

    return arr.astype(np.int64)


def generate_matrix(
    num_cities: int,
    rng: np.random.Generator | None = None,
    low: int = 1,
    high: int = 100,
) -> np.ndarray:
    """Random matrix with off-diagonal weights uniform on ``[low, high]``."""
    check_city_count(num_cities)
    if low < 0 or high < low:
        raise InvalidInputError(f"Invalid weight range [{low}, {high}]")
    rng = rng if rng is not None else np.random.default_rng()
    matrix = rng.integers(low, high, size=(num_cities, num_cities), endpoint=True, dtype=np.int64)
    np.fill_diagonal(matrix, 0)
    logger.debug("Generated %dx%d matrix with weights in [%d, %d]", num_cities, num_cities, low, high)
    return matrix


def format_matrix(matrix: Any, width: int = 4) -> str:
    arr = np.asarray(matrix)
    lines = ["".join(f"{int(val):>{width}} " for val in row) for row in arr]
    return "\n".join(lines)


__all__ = [
    "MAX_CITIES",
    "MAX_WEIGHT",
    "MIN_CITIES",
    "as_square_matrix",
    "check_city_count",
    "format_matrix",
    "generate_matrix",
    "validate_matrix",
]
