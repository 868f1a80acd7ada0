"""Output helpers for benchmark results."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Iterable, Sequence

from groupby_bench.benchmarks.schema import BenchmarkRecord


def write_jsonl(records: Iterable[BenchmarkRecord], path: str | Path) -> None:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as handle:
        for record in records:
            handle.write(json.dumps(asdict(record)) + "\n")


def format_cycle(record: BenchmarkRecord) -> str:
    """One summary line per method, in the style of benchmark.js."""
    result = record.result
    if not result.ok:
        return f"{result.method}: {result.error}"
    stats = result.stats
    return (
        f"{result.method} x {stats.hz:,.0f} ops/sec "
        f"±{stats.rme_pct:.2f}% ({stats.samples} runs sampled)"
    )


def format_fastest(names: Sequence[str]) -> str:
    return "Fastest is " + ",".join(names)
