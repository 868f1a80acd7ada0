"""Entry point for running grouping benchmarks."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Sequence

from groupby_bench.benchmarks.harness import BenchmarkConfig, BenchmarkMethodConfig, METHODS, run_sweep
from groupby_bench.benchmarks.schema import BenchmarkBundle, BenchmarkRecord, InstanceSpec
from groupby_bench.grouping.group_by import MISSING
from groupby_bench.io.output import format_cycle, format_fastest, write_jsonl
from groupby_bench.io.records import load_records
from groupby_bench.metrics.metrics import fastest
from groupby_bench.models.examples import build_cars_records
from groupby_bench.models.synthetic import SyntheticSpec, generate_synthetic_records
from groupby_bench.utils.reproducibility import env_info, records_digest


def _parse_int_list(value: str) -> list[int]:
    return [int(item.strip()) for item in value.split(",") if item.strip()]


def _parse_float_list(value: str) -> list[float]:
    return [float(item.strip()) for item in value.split(",") if item.strip()]


def _parse_methods(value: str | None) -> tuple[BenchmarkMethodConfig, ...]:
    if not value:
        return BenchmarkConfig().methods
    methods = [item.strip() for item in value.split(",") if item.strip()]
    unknown = [method for method in methods if method not in METHODS]
    if unknown:
        raise SystemExit(f"Unknown methods: {', '.join(unknown)}. Options: {', '.join(sorted(METHODS))}")
    return tuple(BenchmarkMethodConfig(name=method) for method in methods)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Benchmark grouping records by a key.")
    parser.add_argument("--dataset", choices=["cars", "synthetic", "file"], default="cars")
    parser.add_argument("--records-path", type=str, help="JSON or JSONL file of records (--dataset file).")
    parser.add_argument(
        "--sizes",
        type=str,
        default="100,1000,10000",
        help="Comma-separated record counts for synthetic datasets.",
    )
    parser.add_argument(
        "--key-counts",
        type=str,
        default="10",
        help="Comma-separated numbers of distinct key values.",
    )
    parser.add_argument(
        "--missing-rates",
        type=str,
        default="0.0",
        help="Comma-separated fractions of records without the group key.",
    )
    parser.add_argument("--seeds", type=str, default="0", help="Comma-separated seeds.")
    parser.add_argument("--repeats", type=str, default="0", help="Comma-separated repeats.")
    parser.add_argument("--group-key", type=str, default="make")
    parser.add_argument(
        "--methods",
        type=str,
        help=f"Comma-separated list of methods to run ({', '.join(METHODS)}).",
    )
    parser.add_argument("--min-time", type=float, default=BenchmarkConfig.min_time)
    parser.add_argument("--max-time", type=float, default=BenchmarkConfig.max_time)
    parser.add_argument("--min-samples", type=int, default=BenchmarkConfig.min_samples)
    parser.add_argument("--delay", type=float, default=BenchmarkConfig.delay, help="Seconds between samples.")
    parser.add_argument("--no-warmup", action="store_true")
    parser.add_argument("--no-memory", action="store_true", help="Skip the tracemalloc peak measurement.")
    parser.add_argument("--output", type=str, default="results/benchmark.jsonl")
    parser.add_argument("--dry-run", action="store_true", help="List instances without running them.")
    return parser


def _count_keys(records: list[dict[str, Any]], group_key: str) -> int:
    return len({record.get(group_key, MISSING) for record in records})


def build_config(args: argparse.Namespace) -> BenchmarkConfig:
    """Build the harness config from parsed flags; raises ValueError on bad values."""
    return BenchmarkConfig(
        group_key=args.group_key,
        delay=args.delay,
        min_time=args.min_time,
        max_time=args.max_time,
        min_samples=args.min_samples,
        warmup=not args.no_warmup,
        track_memory=not args.no_memory,
        methods=_parse_methods(args.methods),
    )


def build_instances(args: argparse.Namespace) -> list[tuple[InstanceSpec, list[dict[str, Any]]]]:
    repeats = _parse_int_list(args.repeats)
    generators: list[tuple[InstanceSpec, list[dict[str, Any]]]] = []

    if args.dataset == "cars":
        for repeat in repeats:
            records = build_cars_records()
            instance = InstanceSpec(
                dataset="cars",
                n_records=len(records),
                n_keys=_count_keys(records, args.group_key),
                repeat=repeat,
            )
            generators.append((instance, records))
    elif args.dataset == "file":
        if not args.records_path:
            raise SystemExit("--dataset file requires --records-path.")
        try:
            records = load_records(args.records_path)
        except (OSError, ValueError) as exc:
            raise SystemExit(f"Cannot load records: {exc}") from exc
        for repeat in repeats:
            instance = InstanceSpec(
                dataset="file",
                n_records=len(records),
                n_keys=_count_keys(records, args.group_key),
                repeat=repeat,
                meta={"path": args.records_path, "sha256": records_digest(records)},
            )
            generators.append((instance, records))
    else:
        sizes = _parse_int_list(args.sizes)
        key_counts = _parse_int_list(args.key_counts)
        missing_rates = _parse_float_list(args.missing_rates)
        seeds = _parse_int_list(args.seeds)
        for n_records in sizes:
            for n_keys in key_counts:
                for missing_rate in missing_rates:
                    for seed in seeds:
                        spec = SyntheticSpec(
                            n_records=n_records,
                            n_keys=n_keys,
                            missing_rate=missing_rate,
                            seed=seed,
                            group_key=args.group_key,
                        )
                        try:
                            records = generate_synthetic_records(spec)
                        except ValueError as exc:
                            raise SystemExit(str(exc)) from exc
                        for repeat in repeats:
                            instance = InstanceSpec(
                                dataset="synthetic",
                                n_records=n_records,
                                n_keys=n_keys,
                                missing_rate=missing_rate,
                                seed=seed,
                                repeat=repeat,
                            )
                            generators.append((instance, records))
    return generators


def _print_cycle(record: BenchmarkRecord) -> None:
    print(format_cycle(record))


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
        generators = build_instances(args)
    except ValueError as exc:
        raise SystemExit(f"Invalid argument: {exc}") from exc

    if args.dry_run:
        for instance, records in generators:
            print(f"{instance.dataset} n={len(records)} keys={instance.n_keys} "
                  f"missing={instance.missing_rate} seed={instance.seed} repeat={instance.repeat}")
        return

    bundle = BenchmarkBundle()
    bundle.extend(run_sweep(generators, config, env=env_info(), on_cycle=_print_cycle))
    for group in bundle.by_instance():
        instance = group[0].instance
        print(f"[{instance.dataset} n={instance.n_records} repeat={instance.repeat}] {format_fastest(fastest(group))}")

    output_path = Path(args.output)
    write_jsonl(bundle.records, output_path)
    print(f"Wrote {len(bundle.records)} records to {output_path}")


if __name__ == "__main__":
    main()
