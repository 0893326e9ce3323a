"""Output sinks and paced emission of generated documents."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Iterable, List, Protocol, Sequence, Set

from sheetstamp.core.errors import GenerationError
from sheetstamp_io.utils.paths import prepare_output_path

from .models import GeneratedDocument

LOGGER = logging.getLogger(__name__)

DEFAULT_PACING_SECONDS = 0.5


class OutputSink(Protocol):
    """Receives generated documents one at a time, in order."""

    async def emit(self, document: GeneratedDocument) -> None:  # pragma: no cover - interface definition
        ...


class MemorySink:
    """Collects documents in memory."""

    def __init__(self) -> None:
        self.documents: List[GeneratedDocument] = []

    async def emit(self, document: GeneratedDocument) -> None:
        self.documents.append(document)


class DirectorySink:
    """Writes each document under ``out_dir`` using its composed name."""

    def __init__(self, out_dir: Path, overwrite: bool = True) -> None:
        self.out_dir = Path(out_dir)
        self.overwrite = overwrite
        self.written: List[Path] = []
        self._seen: Set[Path] = set()

    def check_conflicts(self, documents: Sequence[GeneratedDocument]) -> None:
        """Fail before writing anything when files would be overwritten against policy."""

        if self.overwrite:
            return
        names = {document.filename for document in documents}
        existing = sorted(name for name in names if prepare_output_path(name, self.out_dir).exists())
        if existing:
            raise GenerationError(
                f"Refusing to overwrite {len(existing)} existing file(s) in {self.out_dir}: {', '.join(existing)}"
            )

    def _write(self, document: GeneratedDocument) -> Path:
        path = prepare_output_path(document.filename, self.out_dir)
        if path in self._seen:
            LOGGER.warning(
                "Row %d reuses file name %s; the earlier document is overwritten",
                document.row_index + 1,
                path.name,
            )
        elif path.exists() and not self.overwrite:
            raise GenerationError(f"Refusing to overwrite existing file: {path}")
        path.write_bytes(document.content)
        self._seen.add(path)
        return path

    async def emit(self, document: GeneratedDocument) -> None:
        path = await asyncio.to_thread(self._write, document)
        self.written.append(path)
        LOGGER.info("Saved %s", path)


async def emit_all(
    documents: Iterable[GeneratedDocument],
    sink: OutputSink,
    pacing_seconds: float = DEFAULT_PACING_SECONDS,
) -> int:
    """Emit documents in order, pausing ``pacing_seconds`` between emissions.

    Returns the number of documents emitted.
    """

    if pacing_seconds < 0:
        raise ValueError("pacing_seconds must not be negative")
    count = 0
    for document in documents:
        if count and pacing_seconds:
            await asyncio.sleep(pacing_seconds)
        await sink.emit(document)
        count += 1
    return count


__all__ = [
    "DEFAULT_PACING_SECONDS",
    "DirectorySink",
    "MemorySink",
    "OutputSink",
    "emit_all",
]
