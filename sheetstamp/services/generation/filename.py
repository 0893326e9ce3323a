"""Deterministic output file names."""

from __future__ import annotations

from pathlib import PurePath
from typing import List, Sequence

from sheetstamp_io.schema import DataRow, FilenameSpec, render_value
from sheetstamp_io.utils.paths import safe_filename

PDF_SUFFIX = ".pdf"


def compose_filename(base: str, values: Sequence[str]) -> str:
    """``base-v1-v2.pdf``; empty values are skipped, no values gives ``base.pdf``.

    Path separators inside values are replaced with ``_``. Identical inputs
    always give the same name. Rows sharing values collide; deduplication is
    up to the caller.
    """

    parts = [value for value in values if value]
    if parts:
        return safe_filename(f"{base}-{'-'.join(parts)}{PDF_SUFFIX}")
    return safe_filename(f"{base}{PDF_SUFFIX}")


def default_base(source_name: str) -> str:
    """Spreadsheet file name without its extension."""

    return PurePath(source_name).stem


def filename_values(spec: FilenameSpec, row: DataRow) -> List[str]:
    return [render_value(row.get(field)) for field in spec.fields]


def filename_for_row(spec: FilenameSpec, row: DataRow) -> str:
    return compose_filename(spec.base, filename_values(spec, row))
