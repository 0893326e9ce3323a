"""Conversions between raster pointer positions and document points."""

from __future__ import annotations

from typing import Optional, Tuple

DEFAULT_DISPLAY_SCALE = 1.5
DEFAULT_VERTICAL_OFFSET = 5.0

Point = Tuple[float, float]


def _check_scale(scale: float) -> None:
    if not scale > 0:
        raise ValueError(f"scale must be positive, got {scale!r}")


def to_document(px: float, py: float, scale: float, round_to: Optional[int] = None) -> Point:
    """Convert a pointer offset on a page rendered at ``scale`` into document points.

    The result keeps the raster convention (origin at the top-left, y grows
    downward); only the stamping step flips it into PDF space. Pass
    ``round_to=0`` to snap to whole points like an on-screen readout.
    """

    _check_scale(scale)
    x, y = px / scale, py / scale
    if round_to is not None:
        x, y = round(x, round_to), round(y, round_to)
    return x, y


def to_raster(x: float, y: float, scale: float) -> Point:
    """Inverse of :func:`to_document`, used to place overlay markers."""

    _check_scale(scale)
    return x * scale, y * scale


def to_pdf_y(y: float, page_height: float, vertical_offset: float = DEFAULT_VERTICAL_OFFSET) -> float:
    """Flip a top-left-origin ``y`` into PDF bottom-left space for drawing text."""

    return page_height - y - vertical_offset


class CoordinateMapper:
    """Binds a display scale so callers can pass pointer positions directly."""

    def __init__(self, scale: float = DEFAULT_DISPLAY_SCALE, round_to: Optional[int] = None) -> None:
        _check_scale(scale)
        self.scale = scale
        self.round_to = round_to

    def to_document(self, px: float, py: float) -> Point:
        return to_document(px, py, self.scale, self.round_to)

    def to_raster(self, x: float, y: float) -> Point:
        return to_raster(x, y, self.scale)

    def __repr__(self) -> str:
        return f"CoordinateMapper(scale={self.scale!r}, round_to={self.round_to!r})"
