"""Micro-benchmark for grouping records by a key."""

from groupby_bench.grouping import MISSING, InvalidRecordError, flatten_groups, group_by, group_by_key

__version__ = "0.1.0"

__all__ = ["InvalidRecordError", "MISSING", "flatten_groups", "group_by", "group_by_key"]
