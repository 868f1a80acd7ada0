"""Run benchmark experiments from a YAML config."""

from __future__ import annotations

from groupby_bench.benchmarks.experiments import main


if __name__ == "__main__":
    main()
