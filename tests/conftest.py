from __future__ import annotations

import itertools

import numpy as np
import pytest

from HeldKarpTSP.persistence import save_matrix


def enumerate_tour_costs(matrix, start_city: int = 0):
    """Cost of every Hamiltonian cycle through ``start_city``, by explicit enumeration."""
    matrix = np.asarray(matrix)
    n = matrix.shape[0]
    others = [city for city in range(n) if city != start_city]
    for perm in itertools.permutations(others):
        tour = [start_city, *perm, start_city]
        yield sum(int(matrix[a, b]) for a, b in zip(tour, tour[1:]))


@pytest.fixture
def two_city_matrix() -> np.ndarray:
    return np.array([[0, 5], [7, 0]], dtype=np.int64)


@pytest.fixture
def designed_four_city_matrix() -> np.ndarray:
    """0 -> 1 -> 2 -> 3 -> 0 costs 20 per leg; every other edge costs 100."""
    matrix = np.full((4, 4), 100, dtype=np.int64)
    np.fill_diagonal(matrix, 0)
    for a, b in [(0, 1), (1, 2), (2, 3), (3, 0)]:
        matrix[a, b] = 20
    return matrix


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def matrix_dir(tmp_path, two_city_matrix, designed_four_city_matrix):
    """matrix_1.txt and matrix_3.txt exist; matrix_2.txt is missing."""
    save_matrix(two_city_matrix, tmp_path / "matrix_1.txt")
    save_matrix(designed_four_city_matrix, tmp_path / "matrix_3.txt")
    return tmp_path
