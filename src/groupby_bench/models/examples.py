"""Fixed example datasets."""

from __future__ import annotations

from groupby_bench.grouping.group_by import Record

_CARS: tuple[tuple[str, str, int], ...] = (
    ("ford", "fusion", 2012),
    ("ford", "escort", 1999),
    ("hyundai", "sonata", 2003),
)


def build_cars_records() -> list[Record]:
    return [{"make": make, "model": model, "year": year} for make, model, year in _CARS]
