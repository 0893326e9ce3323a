"""Batch generation service package."""

from .api import find_stale_fields, generate_documents, validate_filename_spec
from .filename import compose_filename, default_base, filename_for_row
from .fonts import FileFontSource, FontSource, StaticFontSource, UrlFontSource, load_font
from .models import (
    FieldFailure,
    GeneratedDocument,
    GenerationResult,
    RowFailure,
    StampPlacement,
)
from .sink import DirectorySink, MemorySink, OutputSink, emit_all

__all__ = [
    "DirectorySink",
    "FieldFailure",
    "FileFontSource",
    "FontSource",
    "GeneratedDocument",
    "GenerationResult",
    "MemorySink",
    "OutputSink",
    "RowFailure",
    "StampPlacement",
    "StaticFontSource",
    "UrlFontSource",
    "compose_filename",
    "default_base",
    "emit_all",
    "filename_for_row",
    "find_stale_fields",
    "generate_documents",
    "load_font",
    "validate_filename_spec",
]
