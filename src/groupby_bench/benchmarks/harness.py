"""Benchmark harness orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Sequence

import time
import tracemalloc

import numpy as np

from groupby_bench.benchmarks.schema import (
    BenchmarkRecord,
    InstanceSpec,
    MethodResult,
    MethodStats,
)
from groupby_bench.grouping.group_by import InvalidRecordError, group_by_key
from groupby_bench.metrics.metrics import build_grouping_metrics
from groupby_bench.utils.reproducibility import config_hash

# Two-sided 95% critical value of the normal distribution.
Z_95 = 1.96

MethodFactory = Callable[[str], Callable[[Sequence[Dict[str, Any]]], Any]]

METHODS: Dict[str, MethodFactory] = {
    "group_by": lambda key: group_by_key(key),
    "group_by_strict": lambda key: group_by_key(key, strict=True),
}


@dataclass(frozen=True)
class BenchmarkMethodConfig:
    name: str
    enabled: bool = True


@dataclass(frozen=True)
class BenchmarkConfig:
    group_key: str = "make"
    delay: float = 0.005
    min_time: float = 0.05
    max_time: float = 1.0
    min_samples: int = 5
    warmup: bool = True
    track_memory: bool = True
    methods: tuple[BenchmarkMethodConfig, ...] = (
        BenchmarkMethodConfig("group_by"),
        BenchmarkMethodConfig("group_by_strict"),
    )

    def __post_init__(self) -> None:
        if self.min_samples < 1:
            raise ValueError(f"min_samples must be at least 1, got {self.min_samples}")
        for name in ("min_time", "max_time", "delay"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")


def _time_calls(fn: Callable[[], Any], count: int) -> float:
    start = time.perf_counter()
    for _ in range(count):
        fn()
    return time.perf_counter() - start


def _calibrate(fn: Callable[[], Any], min_time: float) -> int:
    count = 1
    while _time_calls(fn, count) < min_time:
        count *= 2
    return count


def _track_memory(fn: Callable[[], Any]) -> float:
    tracemalloc.start()
    try:
        fn()
        _, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()
    return peak / (1024 * 1024)


def _summarize(per_call: list[float], calls: int) -> MethodStats:
    samples = np.asarray(per_call, dtype=float)
    mean = float(np.mean(samples))
    stdev = float(np.std(samples, ddof=1)) if samples.size > 1 else 0.0
    sem = stdev / np.sqrt(samples.size)
    rme = float(Z_95 * sem / mean * 100) if mean > 0 else 0.0
    return MethodStats(
        hz=1.0 / mean if mean > 0 else float("inf"),
        mean_s=mean,
        stdev_s=stdev,
        rme_pct=rme,
        samples=int(samples.size),
        calls=calls,
    )


def measure(fn: Callable[[], Any], config: BenchmarkConfig) -> MethodStats:
    """Sample ``fn`` until ``max_time`` has passed and ``min_samples`` exist.

    Each sample runs ``fn`` enough times to take at least ``min_time``
    seconds and is stored as seconds per call.
    """
    count = _calibrate(fn, config.min_time)
    per_call: list[float] = []
    calls = 0
    start = time.perf_counter()
    while len(per_call) < config.min_samples or time.perf_counter() - start < config.max_time:
        elapsed = _time_calls(fn, count)
        per_call.append(elapsed / count)
        calls += count
        if config.delay > 0:
            time.sleep(config.delay)
    return _summarize(per_call, calls)


def resolve_method(name: str, group_key: str) -> Callable[[Sequence[Dict[str, Any]]], Any]:
    factory = METHODS.get(name)
    if factory is None:
        raise ValueError(f"Unknown method: {name}")
    return factory(group_key)


def run_instance(
    records: Sequence[Dict[str, Any]],
    instance: InstanceSpec,
    config: BenchmarkConfig,
    env: Dict[str, Any] | None = None,
    on_cycle: Callable[[BenchmarkRecord], None] | None = None,
) -> list[BenchmarkRecord]:
    digest = config_hash(config)
    results: list[BenchmarkRecord] = []

    for method in config.methods:
        if not method.enabled:
            continue
        fn = resolve_method(method.name, config.group_key)

        def _call() -> Any:
            return fn(records)

        try:
            if config.warmup:
                _call()
            grouped = _call()
        except InvalidRecordError as exc:
            result = MethodResult(method=method.name, error=str(exc))
            metrics: Dict[str, Any] = {}
        else:
            metrics = build_grouping_metrics(records, grouped, config.group_key)
            stats = measure(_call, config)
            if config.track_memory:
                stats.peak_mem_mb = _track_memory(_call)
            result = MethodResult(method=method.name, stats=stats)

        record = BenchmarkRecord(
            instance=instance,
            group_key=config.group_key,
            result=result,
            metrics=metrics,
            config_hash=digest,
            env=dict(env or {}),
        )
        if on_cycle is not None:
            on_cycle(record)
        results.append(record)

    return results


def run_sweep(
    generators: Iterable[tuple[InstanceSpec, Sequence[Dict[str, Any]]]],
    config: BenchmarkConfig,
    env: Dict[str, Any] | None = None,
    on_cycle: Callable[[BenchmarkRecord], None] | None = None,
) -> list[BenchmarkRecord]:
    records: list[BenchmarkRecord] = []
    generator_list = list(generators)
    total = len(generator_list)
    for idx, (instance, data) in enumerate(generator_list, start=1):
        print(f"Running instance {idx}/{total} ({instance.dataset}, n={instance.n_records})...", end="\r")
        records.extend(run_instance(data, instance, config, env=env, on_cycle=on_cycle))
    if total:
        print(" " * 60, end="\r")
    return records
