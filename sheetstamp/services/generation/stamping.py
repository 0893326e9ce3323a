"""Per-row stamp planning and document assembly."""

from __future__ import annotations

import io
import logging
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from reportlab.pdfgen import canvas

from sheetstamp.config import Align, StampSettings
from sheetstamp_io.pdf_io import clone_template, overlay_pages, write_bytes
from sheetstamp_io.schema import DataRow, FieldMapping, TemplateInfo, render_value

from ..placement.coordinates import to_pdf_y
from .models import FieldFailure, StampPlacement

LOGGER = logging.getLogger(__name__)

Measure = Callable[[str], float]


def _log_skip(row_index: int, mapping: FieldMapping, reason: str) -> None:
    LOGGER.warning(
        "Row %d: skipping %r, %s",
        row_index + 1,
        mapping.field,
        reason,
        extra={"row": row_index + 1, "field": mapping.field, "page": mapping.page},
    )


def resolve_x(x: float, text: str, align: Align, measure: Measure) -> float:
    """Left-aligned stamps start at ``x``; centered ones straddle it."""

    if align is Align.CENTER and text:
        return x - measure(text) / 2
    return x


def plan_stamps(
    mappings: Iterable[FieldMapping],
    row: DataRow,
    row_index: int,
    template: TemplateInfo,
    measure: Measure,
    settings: StampSettings,
) -> Tuple[List[StampPlacement], List[FieldFailure]]:
    """Resolve every mapping for one row into a PDF-space draw instruction.

    Each mapping is visited exactly once. A mapping pointing past the last
    page, or whose text cannot be measured, becomes a ``FieldFailure``.
    """

    placements: List[StampPlacement] = []
    failures: List[FieldFailure] = []
    for mapping in mappings:
        size = template.page_size(mapping.page)
        if size is None:
            reason = f"page {mapping.page} not found (template has {template.page_count} pages)"
            _log_skip(row_index, mapping, reason)
            failures.append(FieldFailure(row_index=row_index, mapping=mapping, reason=reason))
            continue

        text = render_value(row.get(mapping.field))
        try:
            x = resolve_x(mapping.x, text, settings.align, measure)
        except (KeyError, ValueError, TypeError, UnicodeError) as exc:
            reason = f"cannot measure {text!r}: {exc}"
            _log_skip(row_index, mapping, reason)
            failures.append(FieldFailure(row_index=row_index, mapping=mapping, reason=reason))
            continue

        y = to_pdf_y(mapping.y, size.height, settings.vertical_offset)
        placements.append(StampPlacement(page=mapping.page, x=x, y=y, text=text, mapping=mapping))
    return placements, failures


def _group_by_page(placements: Sequence[StampPlacement]) -> Dict[int, List[StampPlacement]]:
    grouped: Dict[int, List[StampPlacement]] = {}
    for placement in placements:
        grouped.setdefault(placement.page, []).append(placement)
    return grouped


def render_overlay(
    placements: Sequence[StampPlacement],
    template: TemplateInfo,
    font_name: str,
    font_size: float,
) -> bytes:
    """Draw the placements onto a transparent page-for-page overlay.

    The overlay has one page per template page so page numbers line up; the
    font subset is embedded into this overlay and travels with the merge.
    """

    grouped = _group_by_page(placements)
    buffer = io.BytesIO()
    overlay = canvas.Canvas(buffer, pagesize=(template.pages[0].width, template.pages[0].height))
    for number, size in enumerate(template.pages, start=1):
        overlay.setPageSize((size.width, size.height))
        page_stamps = grouped.get(number, [])
        if page_stamps:
            overlay.setFont(font_name, font_size)
            for stamp in page_stamps:
                if stamp.text:
                    overlay.drawString(stamp.x, stamp.y, stamp.text)
        overlay.showPage()
    overlay.save()
    return buffer.getvalue()


def build_document(
    template_bytes: bytes,
    template: TemplateInfo,
    placements: Sequence[StampPlacement],
    font_name: str,
    font_size: float,
) -> bytes:
    """Copy every template page into a new document, stamp it and serialize it."""

    pages = sorted({p.page for p in placements if p.text})
    overlays = None
    if pages:
        overlay = render_overlay(placements, template, font_name, font_size)
        overlays = overlay_pages(overlay, pages)
    return write_bytes(clone_template(template_bytes, overlays))


__all__ = [
    "Measure",
    "build_document",
    "plan_stamps",
    "render_overlay",
    "resolve_x",
]
