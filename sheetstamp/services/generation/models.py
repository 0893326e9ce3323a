"""Data models used by the generation service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from sheetstamp_io.schema import FieldMapping


@dataclass(frozen=True, slots=True)
class GeneratedDocument:
    """One stamped document, held only until the sink has emitted it."""

    content: bytes
    filename: str
    row_index: int

    def __repr__(self) -> str:
        return f"GeneratedDocument(filename={self.filename!r}, row_index={self.row_index}, size={len(self.content)})"


@dataclass(frozen=True, slots=True)
class StampPlacement:
    """A resolved draw instruction in PDF space (bottom-left origin)."""

    page: int
    x: float
    y: float
    text: str
    mapping: FieldMapping


@dataclass(frozen=True, slots=True)
class FieldFailure:
    """A placement skipped for one row; the row itself still completes."""

    row_index: int
    mapping: FieldMapping
    reason: str


@dataclass(frozen=True, slots=True)
class RowFailure:
    """A row that produced no document."""

    row_index: int
    reason: str


@dataclass(slots=True)
class GenerationResult:
    """Aggregated outcome returned to callers."""

    documents: List[GeneratedDocument] = field(default_factory=list)
    field_failures: List[FieldFailure] = field(default_factory=list)
    row_failures: List[RowFailure] = field(default_factory=list)
    stale_fields: Tuple[str, ...] = ()
    cancelled: bool = False
    total_rows: int = 0

    @property
    def warning_count(self) -> int:
        return len(self.field_failures) + len(self.row_failures) + len(self.stale_fields)

    def skipped_fields(self) -> dict[str, int]:
        """Count of skipped stamps per field name."""

        counts: dict[str, int] = {}
        for failure in self.field_failures:
            counts[failure.mapping.field] = counts.get(failure.mapping.field, 0) + 1
        return counts

    def summary(self) -> str:
        lines = [f"Generated {len(self.documents)}/{self.total_rows} documents"]
        if self.cancelled:
            lines.append("Run cancelled before all rows were processed")
        if self.stale_fields:
            lines.append(f"Fields missing from spreadsheet: {', '.join(self.stale_fields)}")
        for name, count in self.skipped_fields().items():
            lines.append(f"Skipped {count} stamp(s) for field {name!r}")
        for failure in self.row_failures:
            lines.append(f"Row {failure.row_index + 1} failed: {failure.reason}")
        return "\n".join(lines)


__all__ = [
    "FieldFailure",
    "GeneratedDocument",
    "GenerationResult",
    "RowFailure",
    "StampPlacement",
]
