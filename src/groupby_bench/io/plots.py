"""Throughput charts from aggregated rows."""
from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


def plot_throughput(rows: list[dict], out: Path) -> Path:
    """Plot mean ops/sec against dataset size, one line per method."""
    groups: dict[str, list[tuple[int, float]]] = {}
    for row in rows:
        method = str(row.get("method", "unknown"))
        n_records = int(row.get("n_records", 0))
        hz = float(row.get("hz_mean", 0.0))
        if hz <= 0:
            continue
        groups.setdefault(method, []).append((n_records, hz))

    fig, ax = plt.subplots(figsize=(6, 4))
    for method, points in groups.items():
        points_sorted = sorted(points, key=lambda x: x[0])
        ax.plot([p[0] for p in points_sorted], [p[1] for p in points_sorted], marker="o", label=method)

    ax.set_xlabel("Records")
    ax.set_ylabel("Throughput (ops/sec)")
    if groups:
        ax.set_yscale("log")
        ax.legend(loc="best", fontsize=8)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()

    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out)
    plt.close(fig)
    return out
