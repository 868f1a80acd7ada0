"""Synthetic record generators."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from groupby_bench.grouping.group_by import Record

YEAR_RANGE = (1970, 2025)


@dataclass(frozen=True)
class SyntheticSpec:
    n_records: int
    n_keys: int
    missing_rate: float = 0.0
    seed: int = 0
    group_key: str = "make"


def _validate(spec: SyntheticSpec) -> None:
    if spec.n_records < 0:
        raise ValueError(f"n_records must be non-negative, got {spec.n_records}")
    if spec.n_records > 0 and spec.n_keys < 1:
        raise ValueError(f"n_keys must be at least 1, got {spec.n_keys}")
    if not 0.0 <= spec.missing_rate <= 1.0:
        raise ValueError(f"missing_rate must lie in [0, 1], got {spec.missing_rate}")


def generate_synthetic_records(spec: SyntheticSpec) -> list[Record]:
    _validate(spec)
    rng = np.random.default_rng(spec.seed)
    n = spec.n_records
    if n == 0:
        return []
    keys = rng.integers(0, spec.n_keys, size=n)
    years = rng.integers(YEAR_RANGE[0], YEAR_RANGE[1], size=n)
    dropped = rng.random(size=n) < spec.missing_rate

    records: list[Record] = []
    for idx in range(n):
        record: Record = {}
        if not dropped[idx]:
            record[spec.group_key] = f"make_{int(keys[idx])}"
        record["model"] = f"model_{idx}"
        record["year"] = int(years[idx])
        records.append(record)
    return records
