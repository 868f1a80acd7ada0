"""Plot aggregated throughput curves."""
from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from groupby_bench.io.plots import plot_throughput


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plot summary CSV outputs.")
    parser.add_argument("--input", type=Path, required=True, help="by_method.csv from aggregate_results.py")
    parser.add_argument("--out", type=Path, required=True)
    return parser.parse_args()


def _load_rows(path: Path) -> list[dict[str, str]]:
    with path.open("r", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        return list(reader)


def main() -> None:
    args = _parse_args()
    plot_throughput(_load_rows(args.input), args.out)


if __name__ == "__main__":
    main()
