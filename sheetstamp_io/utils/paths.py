"""Filesystem helpers for generated output files."""

# Module responsibilities:
# - Turn composed document names into safe paths inside an output directory.
# - Create the output directory on demand.

from __future__ import annotations

import re
from pathlib import Path

_SEPARATORS = re.compile(r"[\\/]+")


def safe_filename(filename: str) -> str:
    """Replace path separators so a composed name cannot leave its directory."""

    cleaned = _SEPARATORS.sub("_", filename).strip()
    if cleaned in {"", ".", ".."}:
        raise ValueError(f"Unusable output file name: {filename!r}")
    return cleaned


def prepare_output_path(filename: str, out_dir: Path) -> Path:
    """Prepare an output path directly under ``out_dir``.

    Args:
        filename: Desired file name, possibly containing separators.
        out_dir: Output directory, created when missing.

    Returns:
        Final path for the file.
    """

    out_dir.mkdir(parents=True, exist_ok=True)
    return out_dir / safe_filename(filename)
