"""Entry point for running grouping benchmarks."""

from __future__ import annotations

from groupby_bench.benchmarks.cli import main


if __name__ == "__main__":
    main()
