from __future__ import annotations

import numpy as np
import pytest

from HeldKarpTSP.errors import InvalidInputError
from HeldKarpTSP.matrix import MAX_WEIGHT, format_matrix, generate_matrix, validate_matrix


def test_validate_returns_int64():
    arr = validate_matrix([[0, 3], [4, 0]])
    assert arr.dtype == np.int64
    assert arr.tolist() == [[0, 3], [4, 0]]


def test_validate_accepts_whole_floats():
    assert validate_matrix(np.array([[0.0, 2.0], [3.0, 0.0]])).tolist() == [[0, 2], [3, 0]]


@pytest.mark.parametrize(
    "matrix",
    [
        [[0, -1], [1, 0]],
        [[1, 2], [2, 0]],
        [[0, 1.5], [2, 0]],
        [[0, float("nan")], [2, 0]],
        [[True, False], [False, True]],
        [["0", "1"], ["1", "0"]],
        [[0, MAX_WEIGHT + 1], [1, 0]],
        [[0, 1], [1, 0], [1, 1]],
        [[0, 1], [1]],
        [[0]],
    ],
)
def test_validate_rejects(matrix):
    with pytest.raises(InvalidInputError):
        validate_matrix(matrix)


def test_validate_respects_max_cities():
    with pytest.raises(InvalidInputError):
        validate_matrix(np.zeros((6, 6), dtype=int), max_cities=5)


def test_generate_matrix_shape_and_range(rng):
    matrix = generate_matrix(12, rng=rng)
    assert matrix.shape == (12, 12)
    assert np.all(np.diagonal(matrix) == 0)
    off_diagonal = matrix[~np.eye(12, dtype=bool)]
    assert off_diagonal.min() >= 1
    assert off_diagonal.max() <= 100
    validate_matrix(matrix)


def test_generate_matrix_is_reproducible_with_seed():
    first = generate_matrix(6, rng=np.random.default_rng(7))
    second = generate_matrix(6, rng=np.random.default_rng(7))
    assert np.array_equal(first, second)


def test_generate_matrix_custom_range(rng):
    matrix = generate_matrix(5, rng=rng, low=10, high=10)
    assert np.all(matrix[~np.eye(5, dtype=bool)] == 10)


@pytest.mark.parametrize("n", [1, 26])
def test_generate_matrix_rejects_city_count(n):
    with pytest.raises(InvalidInputError):
        generate_matrix(n)


def test_format_matrix():
    assert format_matrix([[0, 5], [17, 0]]) == "   0    5 \n  17    0 "
