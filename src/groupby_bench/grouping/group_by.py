"""Group records by the value of one field."""

from __future__ import annotations

from enum import Enum
from functools import partial
from typing import Any, Callable, Dict, Hashable, Iterable, List, Mapping

Record = Dict[str, Any]
GroupedResult = Dict[Hashable, List[Record]]


class Missing(Enum):
    """Sentinel for records that do not carry the grouping field."""

    MISSING = "missing"

    def __repr__(self) -> str:
        return "MISSING"


MISSING = Missing.MISSING


class InvalidRecordError(ValueError):
    """Raised in strict mode when a record lacks the grouping field."""

    def __init__(self, index: int, group_key: str) -> None:
        super().__init__(f"Record {index} has no field '{group_key}'")
        self.index = index
        self.group_key = group_key


def group_by(group_key: str, items: Iterable[Mapping[str, Any]], *, strict: bool = False) -> GroupedResult:
    """Partition ``items`` by their value under ``group_key``.

    Each record is copied without ``group_key`` and appended to the list for
    its value. Groups appear in first-seen order and each list keeps input
    order. Records without the field go under ``MISSING``, or raise
    ``InvalidRecordError`` when ``strict`` is set.
    """
    grouped: GroupedResult = {}
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise TypeError(f"Record {index} is not a mapping: {type(item).__name__}")
        if group_key in item:
            value = item[group_key]
        elif strict:
            raise InvalidRecordError(index, group_key)
        else:
            value = MISSING
        residual = {field: field_value for field, field_value in item.items() if field != group_key}
        bucket = grouped.get(value)
        if bucket is None:
            grouped[value] = [residual]
        else:
            bucket.append(residual)
    return grouped


def group_by_key(group_key: str, *, strict: bool = False) -> Callable[[Iterable[Mapping[str, Any]]], GroupedResult]:
    return partial(group_by, group_key, strict=strict)


def flatten_groups(grouped: Mapping[Hashable, Iterable[Mapping[str, Any]]], group_key: str) -> List[Record]:
    """Concatenate groups back into records, restoring ``group_key``.

    Records from the ``MISSING`` group come back without the field, so
    grouping the output again by ``group_key`` reproduces ``grouped``.
    """
    records: List[Record] = []
    for value, residuals in grouped.items():
        for residual in residuals:
            record = dict(residual)
            if value is not MISSING:
                record[group_key] = value
            records.append(record)
    return records
