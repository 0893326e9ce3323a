"""`sheetstamp_io` top-level package exports the IO helpers for spreadsheet and PDF flows."""

# Module responsibilities:
# - Re-export high-level interfaces for spreadsheet/PDF I/O and job files so consumers have a stable API surface.
# - Provide package version for packaging.

from __future__ import annotations

from .excel_reader import SpreadsheetReadError, load_rows, read_table, to_rows
from .mapping import JobFile, MappingError
from .pdf_io import (
    PdfProcessingError,
    clone_template,
    draw_markers,
    extract_text,
    overlay_pages,
    read_template_info,
    render_page,
    write_bytes,
)
from .schema import (
    DataRow,
    FieldMapping,
    FilenameSpec,
    PageSize,
    SheetRow,
    TemplateInfo,
    render_value,
)

__all__ = [
    "read_table",
    "to_rows",
    "load_rows",
    "SpreadsheetReadError",
    "JobFile",
    "MappingError",
    "PdfProcessingError",
    "read_template_info",
    "clone_template",
    "overlay_pages",
    "write_bytes",
    "extract_text",
    "render_page",
    "draw_markers",
    "DataRow",
    "FieldMapping",
    "FilenameSpec",
    "PageSize",
    "SheetRow",
    "TemplateInfo",
    "render_value",
]

__version__ = "0.1.0"
