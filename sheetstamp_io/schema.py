"""Shared schemas for spreadsheet rows, template pages and field placements."""

# Module responsibilities:
# - Provide strongly typed containers for the placement schema and job files.
# - Define the row capability used by stamping and filename composition.

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, NotRequired, Optional, Protocol, Tuple, TypedDict, Union

Scalar = Union[str, int, float]


class FieldMappingConfig(TypedDict):
    """Schema for a single placement entry in a job YAML payload."""

    page: int
    x: float
    y: float
    field: str


class FilenameConfig(TypedDict):
    """Schema for the ``filename`` block of a job YAML payload."""

    fields: List[str]
    base: NotRequired[str]


@dataclass(frozen=True)
class FieldMapping:
    """A spreadsheet column pinned to a position on a template page.

    ``x``/``y`` are document points measured from the page's top-left corner,
    i.e. the pointer position already divided by the display scale.
    """

    page: int
    x: float
    y: float
    field: str


@dataclass(frozen=True)
class PageSize:
    """Page geometry in PDF points."""

    width: float
    height: float


@dataclass(frozen=True)
class TemplateInfo:
    """Page count and per-page geometry of a decoded template."""

    pages: Tuple[PageSize, ...]

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def page_size(self, page: int) -> Optional[PageSize]:
        """Return the size of 1-based ``page`` or ``None`` when out of range."""

        if 1 <= page <= len(self.pages):
            return self.pages[page - 1]
        return None


@dataclass(frozen=True)
class FilenameSpec:
    """Base name plus ordered row fields used to name generated documents."""

    base: str
    fields: Tuple[str, ...] = ()


class DataRow(Protocol):
    """Row capability: columns are only known at runtime."""

    def get(self, field: str) -> Optional[Scalar]:  # pragma: no cover - interface definition
        ...


def _to_scalar(value: Any) -> Optional[Scalar]:
    if value is None:
        return None
    # numpy / pandas scalars expose .item()
    item = getattr(value, "item", None)
    if callable(item) and not isinstance(value, (str, bytes)):
        try:
            value = item()
        except (TypeError, ValueError):
            pass
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return value
    text = str(value)
    if text in {"NaT", "nan", "<NA>"}:
        return None
    return text


@dataclass(frozen=True)
class SheetRow:
    """Concrete row backed by a plain ``{column: scalar}`` dict."""

    values: Dict[str, Scalar] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "SheetRow":
        cleaned: Dict[str, Scalar] = {}
        for key, raw in record.items():
            scalar = _to_scalar(raw)
            if scalar is not None:
                cleaned[str(key)] = scalar
        return cls(values=cleaned)

    def get(self, field: str) -> Optional[Scalar]:
        return self.values.get(field)

    def __getitem__(self, field: str) -> Scalar:
        return self.values[field]


def render_value(value: Optional[Scalar]) -> str:
    """Text drawn for a row value: absent is empty, integral floats drop ``.0``."""

    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)
