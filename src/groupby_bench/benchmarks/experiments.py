"""Run a batch of grouping benchmarks described in a YAML file.

Each entry under ``runs:`` names a benchmark and maps CLI flags (underscores
allowed) to values::

    runs:
      - name: synthetic_sizes
        args:
          dataset: synthetic
          sizes: [1000, 10000]
          no_memory: true

Every run is parsed and checked against the benchmark CLI before the first
one starts, so a typo in the last run does not surface after the others
have finished.
"""

from __future__ import annotations

import argparse
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

import yaml

from groupby_bench.benchmarks import cli


@dataclass(frozen=True)
class ExperimentRun:
    name: str
    cli_args: tuple[str, ...]
    output: str


def build_args(args: dict[str, Any]) -> list[str]:
    cli_args: list[str] = []
    for key, value in args.items():
        flag = "--" + str(key).replace("_", "-")
        if value is None or value is False:
            continue
        if value is True:
            cli_args.append(flag)
        elif isinstance(value, (list, tuple)):
            cli_args.extend([flag, ",".join(str(item) for item in value)])
        elif isinstance(value, dict):
            raise ValueError(f"Flag {flag} cannot take a mapping")
        else:
            cli_args.extend([flag, str(value)])
    return cli_args


def _check_run(name: str, cli_args: list[str]) -> str:
    parser = cli.build_parser()
    try:
        parsed = parser.parse_args(cli_args)
    except SystemExit as exc:
        raise SystemExit(f"Run '{name}' has invalid flags: {' '.join(cli_args)}") from exc
    if parsed.dataset == "file" and not parsed.records_path:
        raise SystemExit(f"Run '{name}': --dataset file requires --records-path.")
    try:
        cli.build_config(parsed)
    except (ValueError, SystemExit) as exc:
        raise SystemExit(f"Run '{name}': {exc}") from exc
    return parsed.output


def load_runs(config_path: Path) -> list[ExperimentRun]:
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")

    config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    runs = config.get("runs", []) if isinstance(config, dict) else []
    if not isinstance(runs, list) or not runs:
        raise SystemExit("Config must contain a non-empty 'runs' list.")

    resolved: list[ExperimentRun] = []
    outputs: dict[str, str] = {}
    for idx, run in enumerate(runs, start=1):
        name = run.get("name", f"run_{idx}")
        args_dict = run.get("args", {})
        if not isinstance(args_dict, dict):
            raise SystemExit(f"Run '{name}' must define an 'args' mapping.")
        try:
            cli_args = build_args(args_dict)
        except ValueError as exc:
            raise SystemExit(f"Run '{name}': {exc}") from exc
        output = _check_run(name, cli_args)
        if output in outputs:
            raise SystemExit(f"Runs '{outputs[output]}' and '{name}' both write {output}")
        outputs[output] = name
        resolved.append(ExperimentRun(name=name, cli_args=tuple(cli_args), output=output))
    return resolved


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run grouping benchmark experiments from YAML.")
    parser.add_argument("config", type=str, help="Path to YAML config.")
    parser.add_argument("--dry-run", action="store_true", help="Check runs and print commands only.")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    runs = load_runs(Path(args.config))
    for idx, run in enumerate(runs, start=1):
        cmd = [sys.executable, "-m", "groupby_bench.benchmarks.cli", *run.cli_args]
        print(f"Running {idx}/{len(runs)}: {run.name} -> {run.output}")
        print("Command:", " ".join(cmd))
        if args.dry_run:
            continue
        start = time.perf_counter()
        subprocess.run(cmd, check=True)
        print(f"Finished {run.name} in {time.perf_counter() - start:.2f}s")
