from __future__ import annotations

import argparse
import pathlib
from dataclasses import dataclass, fields

from HeldKarpTSP.matrix import MAX_CITIES
from HeldKarpTSP.persistence import DEFAULT_PATTERN


@dataclass(frozen=True)
class TSPConfig:
    """Settings shared by the session, the batch runner and the command line."""

    max_cities: int = MAX_CITIES
    weight_low: int = 1
    weight_high: int = 100
    directory: pathlib.Path = pathlib.Path(".")
    file_pattern: str = DEFAULT_PATTERN
    seed: int | None = None
    solver: str = "held_karp"
    reconstruct_path: bool = True
    time_limit: float | None = None
    workers: int = 1

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "TSPConfig":
        """Build a config from parsed arguments; attributes the parser lacks keep their defaults."""
        values = {}
        for f in fields(cls):
            value = getattr(args, f.name, None)
            if value is not None:
                values[f.name] = value
        return cls(**values)


__all__ = ["TSPConfig"]
