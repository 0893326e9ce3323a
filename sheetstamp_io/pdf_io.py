"""PDF template read/write utilities."""

# Module responsibilities:
# - Decode template bytes with PyPDF2 and surface page count plus per-page geometry.
# - Seed fresh writers with copies of every template page, overlays merged in before each page is added.
# - Rasterize single pages with pdfplumber and draw placement markers with Pillow.
# - Guard against encrypted or malformed PDFs with explicit failures.

from __future__ import annotations

import io
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pdfplumber
from PIL import Image, ImageDraw
from PyPDF2 import PageObject, PdfReader, PdfWriter
from PyPDF2.errors import PdfReadError

from .schema import PageSize, TemplateInfo
from .utils.log import get_logger

logger = get_logger("pdf_io")

MARKER_COLOR = (255, 0, 255)
MARKER_ARM = 6


class PdfProcessingError(RuntimeError):
    """Raised when PDF operations fail."""


def _open_reader(data: bytes) -> PdfReader:
    if not data:
        raise PdfProcessingError("Template PDF is empty")
    try:
        reader = PdfReader(io.BytesIO(data))
        if reader.is_encrypted:
            raise PdfProcessingError("Encrypted PDFs are not supported")
        # Force the page tree to load so malformed files fail here.
        len(reader.pages)
    except PdfReadError as exc:
        raise PdfProcessingError(f"Failed to open PDF: {exc}") from exc
    except (ValueError, KeyError, TypeError) as exc:
        raise PdfProcessingError(f"Malformed PDF: {exc}") from exc
    return reader


def read_template_info(data: bytes) -> TemplateInfo:
    """Decode template bytes and return page count and page sizes."""

    reader = _open_reader(data)
    sizes: List[PageSize] = []
    for page in reader.pages:
        box = page.mediabox
        sizes.append(PageSize(width=float(box.width), height=float(box.height)))
    if not sizes:
        raise PdfProcessingError("Template PDF has no pages")

    logger.info("Template decoded", extra={"page_count": len(sizes)})
    return TemplateInfo(pages=tuple(sizes))


def clone_template(data: bytes, overlays: Optional[Mapping[int, PageObject]] = None) -> PdfWriter:
    """Return a new writer holding a copy of every template page, in order.

    The template is decoded again from ``data`` so that mutating the returned
    writer never touches another document built from the same bytes.
    ``overlays`` maps 1-based page numbers to pages merged on top of the
    template page before it is added to the writer.
    """

    reader = _open_reader(data)
    writer = PdfWriter()
    for number, page in enumerate(reader.pages, start=1):
        overlay = overlays.get(number) if overlays else None
        if overlay is not None:
            page.merge_page(overlay)
        writer.add_page(page)
    return writer


def overlay_pages(overlay: bytes, pages: Iterable[int]) -> Dict[int, PageObject]:
    """Pick the given 1-based pages out of a rendered overlay document."""

    overlay_reader = PdfReader(io.BytesIO(overlay))
    return {page: overlay_reader.pages[page - 1] for page in pages}


def write_bytes(writer: PdfWriter) -> bytes:
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def extract_text(data: bytes) -> List[str]:
    """Extract the text of each page; used for verification and diagnostics."""

    snippets: List[str] = []
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        for page in pdf.pages:
            snippets.append(page.extract_text() or "")
    return snippets


def render_page(data: bytes, page: int, scale: float) -> Image.Image:
    """Rasterize 1-based ``page`` at ``scale`` (1.0 == 72 DPI)."""

    if scale <= 0:
        raise ValueError("scale must be positive")
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        if page < 1 or page > len(pdf.pages):
            raise PdfProcessingError(
                f"Page {page} out of range (document has {len(pdf.pages)} pages)"
            )
        image = pdf.pages[page - 1].to_image(resolution=72 * scale).original.copy()

    logger.info(
        "Rendered template page",
        extra={"page": page, "scale": scale, "size": list(image.size)},
    )
    return image.convert("RGB")


def draw_markers(
    image: Image.Image,
    points: Sequence[Tuple[float, float]],
    labels: Optional[Sequence[str]] = None,
) -> Image.Image:
    """Draw a crosshair plus optional label at each raster point."""

    canvas = image.copy()
    draw = ImageDraw.Draw(canvas)
    for idx, (px, py) in enumerate(points):
        draw.line([(px - MARKER_ARM, py), (px + MARKER_ARM, py)], fill=MARKER_COLOR, width=2)
        draw.line([(px, py - MARKER_ARM), (px, py + MARKER_ARM)], fill=MARKER_COLOR, width=2)
        if labels is not None and idx < len(labels):
            draw.text((px + MARKER_ARM + 2, py - MARKER_ARM - 10), labels[idx], fill=MARKER_COLOR)
    return canvas
