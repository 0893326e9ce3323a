"""Placement services: pointer/document conversion and the placement registry."""

from .coordinates import (
    DEFAULT_DISPLAY_SCALE,
    DEFAULT_VERTICAL_OFFSET,
    CoordinateMapper,
    to_document,
    to_pdf_y,
    to_raster,
)
from .registry import MappingRegistry
from .session import PlacementSession

__all__ = [
    "DEFAULT_DISPLAY_SCALE",
    "DEFAULT_VERTICAL_OFFSET",
    "CoordinateMapper",
    "MappingRegistry",
    "PlacementSession",
    "to_document",
    "to_pdf_y",
    "to_raster",
]
