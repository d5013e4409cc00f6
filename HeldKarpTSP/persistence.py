from __future__ import annotations

import logging
import pathlib
import re
from typing import Any, List

import numpy as np

from HeldKarpTSP.errors import MatrixParseError
from HeldKarpTSP.matrix import MAX_CITIES, MIN_CITIES

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "matrix_{index}.txt"
_INTEGER = re.compile(r"[+-]?\d+")
_INT64 = np.iinfo(np.int64)


def _parse_int(token: str, what: str) -> int:
    if not _INTEGER.fullmatch(token):
        raise MatrixParseError(f"Invalid data format: {what} {token!r} is not an integer")
    value = int(token)
    if not _INT64.min <= value <= _INT64.max:
        raise MatrixParseError(f"Invalid data format: {what} {token!r} is out of range")
    return value


def dumps_matrix(matrix: Any) -> str:
    """Serialize as ``N`` on the first line followed by ``N`` rows of ``N`` integers."""
    arr = np.asarray(matrix)
    lines = [str(arr.shape[0])]
    for row in arr:
        lines.append("".join(f"{int(val)} " for val in row))
    return "\n".join(lines) + "\n"


def loads_matrix(text: str, max_cities: int = MAX_CITIES) -> np.ndarray:
    """Parse the text produced by :func:`dumps_matrix`.

    Values may be separated by any whitespace; tokens after the first
    ``N * N`` values are ignored.
    """
    tokens = text.split()
    if not tokens:
        raise MatrixParseError("Invalid data format: missing number of cities")
    num_cities = _parse_int(tokens[0], "number of cities")
    if not MIN_CITIES <= num_cities <= max_cities:
        raise MatrixParseError(
            f"Invalid number of cities: {num_cities} (must be between {MIN_CITIES} and {max_cities})"
        )

    expected = num_cities * num_cities
    values = tokens[1 : 1 + expected]
    if len(values) < expected:
        raise MatrixParseError(f"Invalid data format: expected {expected} values, found {len(values)}")

    parsed: List[int] = [_parse_int(token, "value") for token in values]
    return np.asarray(parsed, dtype=np.int64).reshape(num_cities, num_cities)


def save_matrix(matrix: Any, path: str | pathlib.Path) -> pathlib.Path:
    path = pathlib.Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_matrix(matrix), encoding="utf-8")
    logger.info("Matrix saved to file: %s", path)
    return path


def load_matrix(path: str | pathlib.Path, max_cities: int = MAX_CITIES) -> np.ndarray:
    """Read a matrix file; ``OSError`` propagates, malformed text raises :class:`MatrixParseError`."""
    path = pathlib.Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MatrixParseError(f"{path}: not valid UTF-8 text") from exc
    try:
        return loads_matrix(text, max_cities=max_cities)
    except MatrixParseError as exc:
        raise MatrixParseError(f"{path}: {exc}") from exc


def matrix_filename(
    index: int,
    directory: str | pathlib.Path = ".",
    pattern: str = DEFAULT_PATTERN,
) -> pathlib.Path:
    return pathlib.Path(directory) / pattern.format(index=index)


def numbered_files(
    count: int,
    directory: str | pathlib.Path = ".",
    pattern: str = DEFAULT_PATTERN,
) -> List[pathlib.Path]:
    """``matrix_1.txt`` up to ``matrix_<count>.txt`` under ``directory``."""
    return [matrix_filename(i, directory, pattern) for i in range(1, count + 1)]


__all__ = [
    "DEFAULT_PATTERN",
    "dumps_matrix",
    "load_matrix",
    "loads_matrix",
    "matrix_filename",
    "numbered_files",
    "save_matrix",
]
