from __future__ import annotations

import os
import sys
from pathlib import Path


def _is_frozen() -> bool:
    return getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS")


def _app_dir_writable_base() -> Path:
    """Writable base for runtime files (work/logs/out).

    - Frozen: alongside the executable
    - Source: repository root, or SHEETSTAMP_ROOT when set
    """
    env = os.getenv("SHEETSTAMP_ROOT")
    if env:
        return Path(env)
    if _is_frozen():
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[2]


def _work_dir() -> Path:
    # Always use a writable location outside of bundled resources
    return _app_dir_writable_base() / "sheetstamp" / "work"


def ensure_work_dirs() -> dict[str, Path]:
    base = _work_dir()
    out = base / "out"
    tmp = base / "tmp"
    logs = base / "logs"
    for p in (out, tmp, logs):
        p.mkdir(parents=True, exist_ok=True)
    return {"out": out, "tmp": tmp, "logs": logs}

