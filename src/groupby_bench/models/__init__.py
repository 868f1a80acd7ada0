"""Models subpackage."""

from groupby_bench.models.examples import build_cars_records
from groupby_bench.models.synthetic import SyntheticSpec, generate_synthetic_records

__all__ = [
    "SyntheticSpec",
    "build_cars_records",
    "generate_synthetic_records",
]
