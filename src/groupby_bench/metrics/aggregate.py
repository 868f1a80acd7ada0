"""Aggregate JSONL benchmark records into summary tables."""
from __future__ import annotations

import csv
import json
from pathlib import Path
from statistics import mean, pstdev
from typing import Any

SUMMARY_FIELDS = ["count", "failed", "hz_mean", "hz_std", "rme_mean"]


def load_jsonl(paths: list[str | Path]) -> list[dict]:
    records: list[dict] = []
    for path in paths:
        for line in Path(path).read_text(encoding="utf-8").splitlines():
            if not line.strip():
                continue
            records.append(json.loads(line))
    return records


def flatten_record(record: dict) -> dict[str, Any]:
    instance = record.get("instance", {})
    result = record.get("result", {})
    stats = result.get("stats") or {}
    return {
        "dataset": instance.get("dataset"),
        "n_records": instance.get("n_records"),
        "n_keys": instance.get("n_keys"),
        "missing_rate": instance.get("missing_rate"),
        "seed": instance.get("seed"),
        "repeat": instance.get("repeat"),
        "group_key": record.get("group_key"),
        "method": result.get("method"),
        "hz": stats.get("hz"),
        "rme_pct": stats.get("rme_pct"),
        "error": result.get("error"),
    }


def aggregate(records: list[dict], keys: tuple[str, ...]) -> list[dict]:
    grouped: dict[tuple, list[dict]] = {}
    for record in records:
        flat = flatten_record(record)
        group_key = tuple(flat.get(k) for k in keys)
        grouped.setdefault(group_key, []).append(flat)

    output: list[dict] = []
    for group_key, group_records in grouped.items():
        succeeded = [rec for rec in group_records if rec["error"] is None and rec["hz"] is not None]
        hz_vals = [float(rec["hz"]) for rec in succeeded]
        rme_vals = [float(rec["rme_pct"]) for rec in succeeded]
        row = {key: value for key, value in zip(keys, group_key)}
        row.update(
            {
                "count": len(group_records),
                "failed": len(group_records) - len(succeeded),
                "hz_mean": mean(hz_vals) if hz_vals else 0.0,
                "hz_std": pstdev(hz_vals) if len(hz_vals) > 1 else 0.0,
                "rme_mean": mean(rme_vals) if rme_vals else 0.0,
            }
        )
        output.append(row)
    return output


def write_csv(path: Path, rows: list[dict], fieldnames: list[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)
