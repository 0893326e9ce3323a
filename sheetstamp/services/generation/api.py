"""Public API for the batch generation service."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Sequence

from sheetstamp.config import StampSettings
from sheetstamp.core.errors import FilenameSpecError, TemplateError
from sheetstamp_io.pdf_io import PdfProcessingError, read_template_info
from sheetstamp_io.schema import DataRow, FieldMapping, FilenameSpec

from .filename import filename_for_row
from .fonts import load_font
from .models import GeneratedDocument, GenerationResult, RowFailure
from .stamping import build_document, plan_stamps

LOGGER = logging.getLogger(__name__)

RowProgress = Callable[[int, int], None]


def validate_filename_spec(spec: FilenameSpec, columns: Optional[Sequence[str]]) -> None:
    """Every filename field must name a known column; blanks block generation."""

    if not spec.base:
        raise FilenameSpecError("Filename base must not be empty")
    for idx, name in enumerate(spec.fields):
        if not name or not name.strip():
            raise FilenameSpecError(f"Filename field #{idx + 1} is not set")
        if columns is not None and name not in columns:
            raise FilenameSpecError(f"Filename field {name!r} is not a spreadsheet column")


def find_stale_fields(mappings: Sequence[FieldMapping], columns: Sequence[str]) -> tuple[str, ...]:
    known = set(columns)
    return tuple(dict.fromkeys(m.field for m in mappings if m.field not in known))


async def generate_documents(
    template_bytes: bytes,
    rows: Sequence[DataRow],
    mappings: Sequence[FieldMapping],
    font_bytes: bytes,
    filename_spec: FilenameSpec,
    settings: Optional[StampSettings] = None,
    *,
    font_name: str = "NotoSansThai",
    columns: Optional[Sequence[str]] = None,
    cancel_event: Optional[asyncio.Event] = None,
    progress_cb: Optional[RowProgress] = None,
) -> GenerationResult:
    """Stamp ``mappings`` onto a fresh copy of the template for every row.

    Rows are processed strictly in order and documents come back in that
    order. Template, font and filename-spec problems raise before any row is
    processed; problems with a single placement or row are recorded on the
    result and the run continues.
    """

    settings = settings or StampSettings()
    mappings = tuple(mappings)

    try:
        template = await asyncio.to_thread(read_template_info, template_bytes)
    except PdfProcessingError as exc:
        raise TemplateError(f"Template cannot be decoded: {exc}") from exc
    font = await asyncio.to_thread(load_font, font_bytes, font_name)
    validate_filename_spec(filename_spec, columns)

    result = GenerationResult(total_rows=len(rows))
    if columns is not None:
        result.stale_fields = find_stale_fields(mappings, columns)
        for name in result.stale_fields:
            LOGGER.warning("Mapped field %r is not a spreadsheet column; it will stamp empty text", name)

    def measure(text: str) -> float:
        return font.stringWidth(text, settings.font_size)

    LOGGER.info(
        "Generating %d documents from %d pages with %d placements",
        len(rows),
        template.page_count,
        len(mappings),
    )

    for index, row in enumerate(rows):
        if cancel_event is not None and cancel_event.is_set():
            LOGGER.warning("Generation cancelled after %d of %d rows", index, len(rows))
            result.cancelled = True
            break

        placements, failures = plan_stamps(mappings, row, index, template, measure, settings)
        result.field_failures.extend(failures)
        try:
            content = await asyncio.to_thread(
                build_document,
                template_bytes,
                template,
                placements,
                font_name,
                settings.font_size,
            )
        except Exception as exc:  # noqa: BLE001
            LOGGER.error(
                "Row %d: document generation failed: %s",
                index + 1,
                exc,
                extra={"row": index + 1, "error": str(exc)},
            )
            result.row_failures.append(RowFailure(row_index=index, reason=str(exc)))
            continue

        filename = filename_for_row(filename_spec, row)
        result.documents.append(GeneratedDocument(content=content, filename=filename, row_index=index))
        if progress_cb:
            progress_cb(index + 1, len(rows))

    LOGGER.info(
        "Generation finished: %d documents, %d warnings",
        len(result.documents),
        result.warning_count,
    )
    return result
