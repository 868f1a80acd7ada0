"""Provenance stamped onto benchmark records."""
from __future__ import annotations

import hashlib
import json
import platform
import subprocess
from dataclasses import asdict
from typing import Any, Iterable, Mapping

import numpy as np

import groupby_bench


def _digest(payload: Any) -> str:
    encoded = json.dumps(payload, sort_keys=True).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


def config_hash(config: Any) -> str:
    return _digest(asdict(config) if hasattr(config, "__dataclass_fields__") else config)


def records_digest(records: Iterable[Mapping[str, Any]]) -> str:
    """Hash a dataset so runs over an edited file are told apart.

    Field order inside a record is ignored; record order is not, since it
    decides group order.
    """
    return _digest([dict(record) for record in records])


def git_commit_hash() -> str | None:
    try:
        return subprocess.check_output(
            ["git", "rev-parse", "HEAD"], text=True, stderr=subprocess.DEVNULL
        ).strip()
    except (subprocess.CalledProcessError, OSError):
        return None


def env_info() -> dict[str, str | None]:
    return {
        "groupby_bench": groupby_bench.__version__,
        "python": platform.python_version(),
        "implementation": platform.python_implementation(),
        "numpy": np.__version__,
        "platform": platform.platform(),
        "git_commit": git_commit_hash(),
    }
