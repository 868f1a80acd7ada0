"""Load record datasets from disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def _check_records(payload: Any, path: Path) -> list[dict[str, Any]]:
    if not isinstance(payload, list):
        raise ValueError(f"{path}: expected a list of records, got {type(payload).__name__}")
    for idx, item in enumerate(payload):
        if not isinstance(item, dict):
            raise ValueError(f"{path}: record {idx} is not an object")
        for key, value in item.items():
            if isinstance(value, (list, dict)):
                raise ValueError(f"{path}: record {idx} field {key!r} is not a scalar")
    return payload


def load_records(path: str | Path) -> list[dict[str, Any]]:
    """Read a JSON array, or JSONL with one object per line."""
    source = Path(path)
    text = source.read_text(encoding="utf-8")
    if source.suffix == ".jsonl":
        payload = [json.loads(line) for line in text.splitlines() if line.strip()]
    else:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{source}: invalid JSON ({exc})") from exc
    return _check_records(payload, source)
