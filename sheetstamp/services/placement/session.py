"""Placement state owned by a front end: template, rows, current page, placements."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from sheetstamp.core.errors import (
    EmptySpreadsheetError,
    PlacementError,
    TemplateError,
)
from sheetstamp_io.pdf_io import PdfProcessingError, read_template_info
from sheetstamp_io.schema import DataRow, FieldMapping, FilenameSpec, TemplateInfo

from ..generation.filename import default_base
from .coordinates import DEFAULT_DISPLAY_SCALE, Point, to_document, to_raster
from .registry import MappingRegistry

LOGGER = logging.getLogger(__name__)


@dataclass
class PlacementSession:
    """Explicit replacement for module-wide UI state.

    The session enforces the creation-time invariants of a placement (known
    field, page within the template) before anything reaches the registry.
    """

    template: Optional[bytes] = None
    template_info: Optional[TemplateInfo] = None
    rows: List[DataRow] = field(default_factory=list)
    columns: Tuple[str, ...] = ()
    source_name: Optional[str] = None
    current_page: int = 1
    registry: MappingRegistry = field(default_factory=MappingRegistry)

    @property
    def can_place(self) -> bool:
        return self.template_info is not None and bool(self.columns)

    @property
    def page_count(self) -> int:
        return self.template_info.page_count if self.template_info else 0

    def load_template(self, data: bytes) -> TemplateInfo:
        """Decode a new template; existing placements are cleared."""

        try:
            info = read_template_info(data)
        except PdfProcessingError as exc:
            raise TemplateError(str(exc)) from exc
        dropped = len(self.registry)
        self.template = data
        self.template_info = info
        self.current_page = 1
        self.registry.clear()
        if dropped:
            LOGGER.info("New template loaded; cleared %d placements", dropped)
        return info

    def load_rows(
        self,
        rows: Sequence[DataRow],
        columns: Sequence[str],
        source_name: Optional[str] = None,
    ) -> List[FieldMapping]:
        """Replace rows and columns; return placements whose field disappeared."""

        self.rows = list(rows)
        self.columns = tuple(columns) if self.rows else ()
        if source_name is not None:
            self.source_name = source_name
        if not self.rows:
            LOGGER.warning("Spreadsheet has no data rows; placement is disabled")
        stale = self.registry.stale(self.columns)
        for mapping in stale:
            LOGGER.warning(
                "Placement references missing column %r (page %d at %.1f, %.1f)",
                mapping.field,
                mapping.page,
                mapping.x,
                mapping.y,
            )
        return stale

    def go_to_page(self, page: int) -> int:
        if not 1 <= page <= self.page_count:
            raise PlacementError(f"Page {page} out of range (template has {self.page_count} pages)")
        self.current_page = page
        return page

    def place(
        self,
        px: float,
        py: float,
        field_name: str,
        scale: float = DEFAULT_DISPLAY_SCALE,
        page: Optional[int] = None,
        round_to: Optional[int] = 0,
    ) -> FieldMapping:
        """Record a click at raster offset ``(px, py)`` on ``page`` (default: current)."""

        if self.template_info is None:
            raise PlacementError("Load a template before placing fields")
        if not self.columns:
            raise EmptySpreadsheetError("Spreadsheet has no rows; nothing to place")
        if not field_name:
            raise PlacementError("Select a field first")
        if field_name not in self.columns:
            raise PlacementError(f"Unknown field {field_name!r}")
        target = self.current_page if page is None else page
        if not 1 <= target <= self.page_count:
            raise PlacementError(f"Page {target} out of range (template has {self.page_count} pages)")

        x, y = to_document(px, py, scale, round_to=round_to)
        mapping = FieldMapping(page=target, x=x, y=y, field=field_name)
        self.registry.add(mapping)
        LOGGER.debug("Placed %s", mapping)
        return mapping

    def undo(self) -> Optional[FieldMapping]:
        return self.registry.remove_last()

    def overlay_points(self, page: Optional[int] = None, scale: float = DEFAULT_DISPLAY_SCALE) -> List[Tuple[Point, str]]:
        """Raster positions and labels of the placements on ``page``."""

        target = self.current_page if page is None else page
        return [(to_raster(m.x, m.y, scale), m.field) for m in self.registry.list_for_page(target)]

    def filename_spec(self, fields: Sequence[str], base: Optional[str] = None) -> FilenameSpec:
        """Filename spec defaulting the base to the spreadsheet's file stem."""

        if base:
            resolved = base
        elif self.source_name:
            resolved = default_base(self.source_name)
        else:
            resolved = "document"
        return FilenameSpec(base=resolved, fields=tuple(fields))
