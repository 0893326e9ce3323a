"""Typer based command line entry points for SheetStamp."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, NoReturn, Optional

import typer

from sheetstamp.config import Align, load_settings
from sheetstamp.core.errors import SheetStampError
from sheetstamp.core.logger import get_logger
from sheetstamp.core.pipeline import Pipeline, StampJob
from sheetstamp.services.generation import FileFontSource, UrlFontSource
from sheetstamp.services.placement import MappingRegistry, to_document, to_raster
from sheetstamp_io.excel_reader import SpreadsheetReadError, load_rows
from sheetstamp_io.mapping import JobFile, MappingError
from sheetstamp_io.pdf_io import PdfProcessingError, draw_markers, read_template_info, render_page

app = typer.Typer(help="Stamp spreadsheet rows onto a PDF template.")


def _fail(message: str) -> NoReturn:
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _load_job(path: Path) -> JobFile:
    try:
        return JobFile.from_yaml(path)
    except MappingError as exc:
        _fail(str(exc))


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    logger = get_logger()
    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")
    logger.setLevel(level_value)


@app.command()
def info(template: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    """Print page count and page sizes of a template PDF."""

    try:
        details = read_template_info(template.read_bytes())
    except PdfProcessingError as exc:
        _fail(str(exc))
    typer.echo(f"{template.name}: {details.page_count} page(s)")
    for number, size in enumerate(details.pages, start=1):
        typer.echo(f"  page {number}: {size.width:.1f} x {size.height:.1f} pt")


@app.command()
def columns(spreadsheet: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    """List the columns and row count of the spreadsheet's first sheet."""

    try:
        rows, names = load_rows(spreadsheet)
    except SpreadsheetReadError as exc:
        _fail(str(exc))
    if not rows:
        typer.secho("No data rows; nothing can be mapped.", fg=typer.colors.YELLOW)
        return
    typer.echo(f"{len(rows)} row(s)")
    for name in names:
        typer.echo(f"  {name}")


@app.command()
def locate(
    px: float = typer.Argument(..., help="Pointer x offset on the rendered page, in pixels."),
    py: float = typer.Argument(..., help="Pointer y offset on the rendered page, in pixels."),
    scale: Optional[float] = typer.Option(None, "--scale", help="Display scale of the rendered page."),
    exact: bool = typer.Option(False, "--exact", help="Do not round to whole points."),
) -> None:
    """Convert a pointer position on a rendered page into mapping coordinates."""

    if scale is None:
        scale = load_settings().viewer.display_scale
    try:
        x, y = to_document(px, py, scale, round_to=None if exact else 0)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(f"x: {x:g}, y: {y:g}")


@app.command()
def preview(
    template: Path = typer.Argument(..., exists=True, dir_okay=False),
    out: Path = typer.Option(..., "--out", "-o", help="PNG file to write."),
    page: int = typer.Option(1, "--page", min=1),
    scale: Optional[float] = typer.Option(None, "--scale"),
    job: Optional[Path] = typer.Option(None, "--job", exists=True, dir_okay=False),
) -> None:
    """Render a template page, marking the job's placements on it."""

    if scale is None:
        scale = load_settings().viewer.display_scale
    elif scale <= 0:
        raise typer.BadParameter("scale must be positive", param_hint="--scale")
    registry = MappingRegistry(_load_job(job).mappings if job else ())
    try:
        image = render_page(template.read_bytes(), page, scale)
    except PdfProcessingError as exc:
        _fail(str(exc))
    on_page = list(registry.list_for_page(page))
    if on_page:
        image = draw_markers(
            image,
            [to_raster(m.x, m.y, scale) for m in on_page],
            [m.field for m in on_page],
        )
    out.parent.mkdir(parents=True, exist_ok=True)
    image.save(out, format="PNG")
    typer.echo(f"Wrote {out} ({len(on_page)} placement(s) on page {page})")


@app.command()
def generate(
    template: Path = typer.Argument(..., exists=True, dir_okay=False),
    spreadsheet: Path = typer.Argument(..., exists=True, dir_okay=False),
    job: Path = typer.Option(..., "--job", "-j", exists=True, dir_okay=False, help="Job YAML with placements."),
    out_dir: Optional[Path] = typer.Option(None, "--out", "-o", help="Output directory."),
    base: Optional[str] = typer.Option(None, "--base", help="File name base (default: spreadsheet name)."),
    name_field: Optional[List[str]] = typer.Option(None, "--name-field", "-n", help="Column appended to file names; repeatable."),
    center: Optional[bool] = typer.Option(None, "--center/--left", help="Center stamps on their x position."),
    font_file: Optional[Path] = typer.Option(None, "--font-file", exists=True, dir_okay=False),
    font_url: Optional[str] = typer.Option(None, "--font-url"),
    font_size: Optional[float] = typer.Option(None, "--font-size"),
    pacing_ms: Optional[int] = typer.Option(None, "--pacing-ms", min=0),
    settings_path: Optional[Path] = typer.Option(None, "--settings", exists=True, dir_okay=False),
) -> None:
    """Generate one stamped PDF per spreadsheet row."""

    job_file = _load_job(job)
    try:
        settings = load_settings(settings_path).with_overrides(
            {
                "font": {"url": font_url},
                "stamp": {
                    "font_size": font_size,
                    "align": None if center is None else (Align.CENTER if center else Align.LEFT),
                },
                "output": {"pacing_ms": pacing_ms},
            }
        )
    except SheetStampError as exc:
        _fail(str(exc))

    font_source = (
        FileFontSource(font_file)
        if font_file
        else UrlFontSource(settings.font.url, timeout=settings.font.fetch_timeout)
    )
    stamp_job = StampJob(
        template_path=template,
        spreadsheet_path=spreadsheet,
        mappings=job_file.mappings,
        name_fields=tuple(name_field) if name_field else job_file.name_fields,
        base=base or job_file.base,
    )

    pipeline = Pipeline(settings=settings, font_source=font_source)
    try:
        result = pipeline.run_sync(stamp_job, out_dir=out_dir)
    except SheetStampError as exc:
        _fail(str(exc))

    generation = result.generation
    typer.echo(generation.summary())
    for path in result.outputs:
        typer.echo(f"  {path}")
    if generation.warning_count:
        typer.secho(f"{generation.warning_count} warning(s)", fg=typer.colors.YELLOW)


if __name__ == "__main__":
    app()
