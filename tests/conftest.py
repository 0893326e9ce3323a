from __future__ import annotations

import io
import os
import sys
import tempfile
from pathlib import Path
from typing import Callable, Sequence, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep log files and default output folders out of the working tree.
os.environ.setdefault("SHEETSTAMP_ROOT", tempfile.mkdtemp(prefix="sheetstamp-tests-"))

import reportlab
from reportlab.pdfgen import canvas

FONT_PATH = Path(reportlab.__file__).resolve().parent / "fonts" / "Vera.ttf"

PageSizes = Sequence[Tuple[float, float]]


def build_template(sizes: PageSizes = ((612, 792), (612, 792))) -> bytes:
    """Small multi-page PDF with a "Page N" caption on every page."""

    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=sizes[0])
    for number, size in enumerate(sizes, start=1):
        pdf.setPageSize(size)
        pdf.setFont("Helvetica", 12)
        pdf.drawString(72, size[1] - 72, f"Page {number}")
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


@pytest.fixture()
def template_bytes() -> bytes:
    return build_template()


@pytest.fixture()
def template_factory() -> Callable[..., bytes]:
    return build_template


@pytest.fixture(scope="session")
def font_bytes() -> bytes:
    return FONT_PATH.read_bytes()


@pytest.fixture(scope="session")
def font_path() -> Path:
    return FONT_PATH


@pytest.fixture()
def invoice_rows_path(tmp_path: Path) -> Path:
    import pandas as pd

    path = tmp_path / "invoice.xlsx"
    pd.DataFrame(
        [
            {"Name": "Somchai", "Amount": 500, "City": "Bangkok"},
            {"Name": "Malee", "Amount": 1250, "City": None},
            {"Name": "Anan", "Amount": 75, "City": "Chiang Mai"},
        ]
    ).to_excel(path, index=False)
    return path


@pytest.fixture(autouse=True, scope="session")
def _app_logger() -> None:
    """Bind the application's console handler to the session-wide stream once."""

    from sheetstamp.core.logger import get_logger

    get_logger()
