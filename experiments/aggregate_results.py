"""Aggregate JSONL results into summary tables."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from groupby_bench.metrics.aggregate import SUMMARY_FIELDS, aggregate, load_jsonl, write_csv


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Aggregate result files.")
    parser.add_argument("--in", dest="inputs", nargs="+", required=True)
    parser.add_argument("--out", dest="out_dir", type=Path, required=True)
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    records = load_jsonl(args.inputs)
    by_method = aggregate(records, ("method", "dataset", "n_records"))
    by_size = aggregate(records, ("n_records", "n_keys", "missing_rate", "method"))

    write_csv(
        args.out_dir / "by_method.csv",
        by_method,
        ["method", "dataset", "n_records", *SUMMARY_FIELDS],
    )
    write_csv(
        args.out_dir / "by_size.csv",
        by_size,
        ["n_records", "n_keys", "missing_rate", "method", *SUMMARY_FIELDS],
    )


if __name__ == "__main__":
    main()
