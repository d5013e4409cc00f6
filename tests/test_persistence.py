from __future__ import annotations

import numpy as np
import pytest

from HeldKarpTSP.errors import MatrixParseError
from HeldKarpTSP.matrix import generate_matrix
from HeldKarpTSP.persistence import (
    dumps_matrix,
    load_matrix,
    loads_matrix,
    matrix_filename,
    numbered_files,
    save_matrix,
)


def test_dumps_layout(two_city_matrix):
    assert dumps_matrix(two_city_matrix) == "2\n0 5 \n7 0 \n"


@pytest.mark.parametrize("n", [2, 5, 25])
def test_round_trip(n, rng):
    matrix = generate_matrix(n, rng=rng)
    assert np.array_equal(loads_matrix(dumps_matrix(matrix)), matrix)


def test_loads_ignores_layout_and_trailing_tokens():
    matrix = loads_matrix("3 0 1 2\n3 0 4   5\t6 0\n\n99 100")
    assert matrix.tolist() == [[0, 1, 2], [3, 0, 4], [5, 6, 0]]


@pytest.mark.parametrize(
    "text, message",
    [
        ("", "missing"),
        ("abc\n0 1\n1 0\n", "not an integer"),
        ("30\n", "Invalid number of cities"),
        ("1\n0\n", "Invalid number of cities"),
        ("3\n0 1 2\n3 0\n", "expected 9 values"),
        ("2\n0 x\n1 0\n", "not an integer"),
        ("2\n0 1.5\n1 0\n", "not an integer"),
    ],
)
def test_loads_rejects(text, message):
    with pytest.raises(MatrixParseError, match=message):
        loads_matrix(text)


def test_loads_respects_max_cities():
    with pytest.raises(MatrixParseError):
        loads_matrix("3\n0 1 1\n1 0 1\n1 1 0\n", max_cities=2)


def test_save_and_load(tmp_path, designed_four_city_matrix):
    path = save_matrix(designed_four_city_matrix, tmp_path / "nested" / "m.txt")
    assert path.exists()
    assert np.array_equal(load_matrix(path), designed_four_city_matrix)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_matrix(tmp_path / "absent.txt")


def test_load_error_names_file(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("30\n", encoding="utf-8")
    with pytest.raises(MatrixParseError, match="bad.txt"):
        load_matrix(path)


def test_numbered_files(tmp_path):
    assert matrix_filename(4, tmp_path) == tmp_path / "matrix_4.txt"
    assert [p.name for p in numbered_files(3, tmp_path)] == ["matrix_1.txt", "matrix_2.txt", "matrix_3.txt"]
    assert numbered_files(2, tmp_path, "case-{index}.dat")[1] == tmp_path / "case-2.dat"


@pytest.mark.parametrize("token", ["99999999999999999999", "-9223372036854775809"])
def test_loads_rejects_values_outside_int64(token):
    with pytest.raises(MatrixParseError, match="out of range"):
        loads_matrix(f"2\n0 {token}\n1 0\n")


def test_loads_accepts_int64_limits():
    matrix = loads_matrix("2\n0 9223372036854775807\n-9223372036854775808 0\n")
    assert matrix[0, 1] == np.iinfo(np.int64).max
    assert matrix[1, 0] == np.iinfo(np.int64).min


def test_load_rejects_invalid_utf8(tmp_path):
    path = tmp_path / "binary.txt"
    path.write_bytes(b"2\n0 \xff\xfe\n1 0\n")
    with pytest.raises(MatrixParseError, match="not valid UTF-8"):
        load_matrix(path)
