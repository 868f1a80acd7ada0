"""Grouping subpackage."""

from groupby_bench.grouping.group_by import (
    MISSING,
    GroupedResult,
    InvalidRecordError,
    Missing,
    Record,
    flatten_groups,
    group_by,
    group_by_key,
)

__all__ = [
    "GroupedResult",
    "InvalidRecordError",
    "MISSING",
    "Missing",
    "Record",
    "flatten_groups",
    "group_by",
    "group_by_key",
]
