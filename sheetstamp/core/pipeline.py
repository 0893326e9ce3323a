from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence

from .errors import SpreadsheetError, TemplateError
from .logger import get_logger
from .profiles import ensure_work_dirs
from sheetstamp.config import GenerationSettings, load_settings
from sheetstamp.services.generation import (
    DirectorySink,
    FontSource,
    GenerationResult,
    OutputSink,
    UrlFontSource,
    emit_all,
    generate_documents,
)
from sheetstamp.services.generation.filename import default_base
from sheetstamp_io.excel_reader import SpreadsheetReadError, load_rows
from sheetstamp_io.schema import FieldMapping, FilenameSpec


ProgressCB = Callable[[str, str], None]


@dataclass
class StampJob:
    """Inputs of one batch run."""

    template_path: Path
    spreadsheet_path: Path
    mappings: Sequence[FieldMapping]
    name_fields: Sequence[str] = ()
    base: Optional[str] = None


@dataclass
class PipelineResult:
    generation: GenerationResult
    emitted: int
    outputs: list[str] = field(default_factory=list)


async def _read_bytes(path: Path) -> bytes:
    return await asyncio.to_thread(path.read_bytes)


class Pipeline:
    """Coordinates Read -> Fetch font -> Generate -> Emit steps."""

    def __init__(
        self,
        logger=None,
        settings: GenerationSettings | None = None,
        font_source: FontSource | None = None,
        sink: OutputSink | None = None,
    ) -> None:
        self.logger = logger or get_logger()
        self.settings = settings or load_settings()
        self.font_source = font_source or UrlFontSource(
            self.settings.font.url, timeout=self.settings.font.fetch_timeout
        )
        self.sink = sink

    async def run(
        self,
        job: StampJob,
        out_dir: Path | None = None,
        progress_cb: ProgressCB | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> PipelineResult:
        def progress(stage: str, detail: str = ""):
            if progress_cb:
                progress_cb(stage, detail)
            self.logger.info("%s - %s", stage, detail)

        # 1. Read inputs
        progress("1/4 read", f"{job.template_path.name}, {job.spreadsheet_path.name}")
        try:
            template_bytes = await _read_bytes(job.template_path)
        except OSError as e:
            raise TemplateError(f"Cannot read template {job.template_path}: {e}") from e
        try:
            sheet_bytes = await _read_bytes(job.spreadsheet_path)
            rows, columns = await asyncio.to_thread(
                load_rows, sheet_bytes, job.spreadsheet_path.suffix
            )
        except (OSError, SpreadsheetReadError) as e:
            raise SpreadsheetError(str(e)) from e
        if not rows:
            self.logger.warning("Spreadsheet %s has no data rows", job.spreadsheet_path.name)
        progress("1/4 read", f"{len(rows)} rows, columns: {', '.join(columns)}")

        # 2. Font, once per run
        progress("2/4 font", "loading font program")
        font_bytes = await self.font_source.fetch_font_bytes()

        # 3. Generate
        spec = FilenameSpec(
            base=job.base or default_base(job.spreadsheet_path.name),
            fields=tuple(job.name_fields),
        )
        progress("3/4 generate", f"{len(rows)} documents")
        generation = await generate_documents(
            template_bytes,
            rows,
            job.mappings,
            font_bytes,
            spec,
            self.settings.stamp,
            font_name=self.settings.font.name,
            columns=columns,
            cancel_event=cancel_event,
            progress_cb=lambda done, total: progress("3/4 generate", f"{done}/{total}"),
        )

        # 4. Emit
        sink = self.sink or DirectorySink(
            out_dir or ensure_work_dirs()["out"], overwrite=self.settings.output.overwrite
        )
        progress("4/4 emit", f"{len(generation.documents)} documents")
        if isinstance(sink, DirectorySink):
            await asyncio.to_thread(sink.check_conflicts, generation.documents)
        emitted = await emit_all(generation.documents, sink, self.settings.output.pacing_seconds)
        outputs = [str(p) for p in getattr(sink, "written", [])]
        progress("4/4 emit", f"done: {emitted}")
        if generation.warning_count:
            self.logger.warning("Completed with warnings:\n%s", generation.summary())

        return PipelineResult(generation=generation, emitted=emitted, outputs=outputs)

    def run_sync(self, job: StampJob, out_dir: Path | None = None, progress_cb: ProgressCB | None = None) -> PipelineResult:
        return asyncio.run(self.run(job, out_dir=out_dir, progress_cb=progress_cb))
