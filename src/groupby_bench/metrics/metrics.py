"""Benchmark metric calculations."""

from __future__ import annotations

from typing import Any, Dict, Hashable, List, Mapping, Sequence

from groupby_bench.benchmarks.schema import BenchmarkRecord
from groupby_bench.grouping.group_by import MISSING


def compute_group_sizes(grouped: Mapping[Hashable, Sequence[Mapping[str, Any]]]) -> Dict[Hashable, int]:
    return {value: len(residuals) for value, residuals in grouped.items()}


def compute_completeness(
    items: Sequence[Mapping[str, Any]],
    grouped: Mapping[Hashable, Sequence[Mapping[str, Any]]],
) -> int:
    return sum(len(residuals) for residuals in grouped.values()) - len(items)


def compute_key_exclusion(grouped: Mapping[Hashable, Sequence[Mapping[str, Any]]], group_key: str) -> bool:
    return all(group_key not in residual for residuals in grouped.values() for residual in residuals)


def compute_order_preserved(
    items: Sequence[Mapping[str, Any]],
    grouped: Mapping[Hashable, Sequence[Mapping[str, Any]]],
    group_key: str,
) -> bool:
    """Check each group against the matching inputs, residualized, in input order."""
    expected: Dict[Hashable, List[Dict[str, Any]]] = {}
    for item in items:
        value = item[group_key] if group_key in item else MISSING
        residual = {k: v for k, v in item.items() if k != group_key}
        expected.setdefault(value, []).append(residual)
    if list(expected) != list(grouped):
        return False
    return all(list(grouped[value]) == residuals for value, residuals in expected.items())


def build_grouping_metrics(
    items: Sequence[Mapping[str, Any]],
    grouped: Mapping[Hashable, Sequence[Mapping[str, Any]]],
    group_key: str,
) -> Dict[str, Any]:
    sizes = compute_group_sizes(grouped)
    return {
        "group_count": len(sizes),
        "residual_count": sum(sizes.values()),
        "input_count": len(items),
        "complete": compute_completeness(items, grouped) == 0,
        "key_excluded": compute_key_exclusion(grouped, group_key),
        "order_preserved": compute_order_preserved(items, grouped, group_key),
        "missing_count": sizes.get(MISSING, 0),
        "largest_group": max(sizes.values()) if sizes else 0,
    }


def fastest(records: Sequence[BenchmarkRecord]) -> list[str]:
    """Names of the methods tied with the best throughput.

    A method ties when its hz plus its own margin of error reaches the best
    method's hz minus the best method's margin.
    """
    ok = [record for record in records if record.result.ok]
    if not ok:
        return []
    best = max(ok, key=lambda record: record.result.stats.hz)
    best_stats = best.result.stats
    floor = best_stats.hz * (1 - best_stats.rme_pct / 100)
    names: list[str] = []
    for record in ok:
        stats = record.result.stats
        if stats.hz * (1 + stats.rme_pct / 100) >= floor:
            names.append(record.result.method)
    return names
