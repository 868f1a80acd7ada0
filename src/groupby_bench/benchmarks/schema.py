"""Schema definitions for benchmark inputs and outputs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence


@dataclass(frozen=True)
class InstanceSpec:
    """Metadata for a benchmark instance."""

    dataset: str
    n_records: int
    n_keys: int = 0
    missing_rate: float = 0.0
    seed: int = 0
    repeat: int = 0
    meta: Dict[str, Any] = field(default_factory=dict)


@dataclass
class MethodStats:
    """Timing and memory stats for a method execution."""

    hz: float
    mean_s: float
    stdev_s: float
    rme_pct: float
    samples: int
    calls: int
    peak_mem_mb: float | None = None


@dataclass
class MethodResult:
    """Outcome of benchmarking one method; ``stats`` is None when it failed."""

    method: str
    stats: MethodStats | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.stats is not None


@dataclass
class BenchmarkRecord:
    """Full benchmark record for a single method execution."""

    instance: InstanceSpec
    group_key: str
    result: MethodResult
    metrics: Dict[str, Any]
    config_hash: str = ""
    env: Dict[str, Any] = field(default_factory=dict)


@dataclass
class BenchmarkBundle:
    """Collection of records for a benchmark sweep."""

    records: List[BenchmarkRecord] = field(default_factory=list)

    def extend(self, items: Sequence[BenchmarkRecord]) -> None:
        self.records.extend(items)

    def by_instance(self) -> List[List[BenchmarkRecord]]:
        # meta is a dict, so instances are not hashable; key on the scalar fields.
        grouped: Dict[tuple, List[BenchmarkRecord]] = {}
        for record in self.records:
            inst = record.instance
            key = (inst.dataset, inst.n_records, inst.n_keys, inst.missing_rate, inst.seed, inst.repeat)
            grouped.setdefault(key, []).append(record)
        return list(grouped.values())
