"""Spreadsheet input helpers."""

# Module responsibilities:
# - Provide a thin wrapper around pandas.read_excel / read_csv with strong validation.
# - Turn the first sheet into ordered row records plus the header-derived column set.
# - Emit structured logs for traceability and future auditing.

from __future__ import annotations

import io
from pathlib import Path
from typing import List, Optional, Tuple, Union

import pandas as pd

from .schema import SheetRow
from .utils.log import get_logger

logger = get_logger("excel_reader")

SheetType = Union[str, int]

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}
CSV_SUFFIXES = {".csv"}


class SpreadsheetReadError(ValueError):
    """Raised when a spreadsheet cannot be parsed into rows."""


def read_table(
    source: Union[Path, bytes],
    suffix: Optional[str] = None,
    sheet: SheetType = 0,
) -> pd.DataFrame:
    """Load a DataFrame from a workbook or CSV file.

    Args:
        source: Path to the file, or its raw bytes.
        suffix: File suffix used to pick the parser when ``source`` is bytes.
        sheet: Sheet name or index; defaults to the first sheet.

    Returns:
        DataFrame whose header is the first row of the sheet.

    Raises:
        FileNotFoundError: When the file does not exist.
        SpreadsheetReadError: When pandas fails to parse the sheet.
    """

    if isinstance(source, Path):
        if not source.exists():
            raise FileNotFoundError(f"Source spreadsheet not found: {source}")
        suffix = suffix or source.suffix
        handle: Union[Path, io.BytesIO] = source
    else:
        handle = io.BytesIO(source)

    kind = (suffix or ".xlsx").lower()
    logger.info("Reading spreadsheet", extra={"suffix": kind, "sheet": sheet})

    try:
        if kind in CSV_SUFFIXES:
            df = pd.read_csv(handle)
        elif kind in EXCEL_SUFFIXES:
            df = pd.read_excel(handle, sheet_name=sheet)
        else:
            raise SpreadsheetReadError(f"Unsupported spreadsheet type: {kind}")
    except pd.errors.EmptyDataError:
        df = pd.DataFrame()
    except (ValueError, OSError) as exc:
        logger.error("Failed to read spreadsheet", extra={"error": str(exc)})
        raise SpreadsheetReadError(f"Failed to read spreadsheet: {exc}") from exc

    if isinstance(df, dict):
        # pandas returns a dict when sheet_name is a list; this API expects a single sheet.
        raise SpreadsheetReadError("read_table expects a single sheet; received multiple sheets")

    logger.info(
        "Spreadsheet loaded",
        extra={"rows": len(df.index), "columns": [str(c) for c in df.columns]},
    )
    return df


def to_rows(df: pd.DataFrame) -> Tuple[List[SheetRow], Tuple[str, ...]]:
    """Convert a DataFrame into ordered rows and its column set.

    Fully blank rows are dropped. When no data rows remain the column set is
    empty, which callers treat as "nothing to map".
    """

    frame = df.dropna(how="all")
    if frame.empty:
        return [], ()
    columns = tuple(str(col) for col in frame.columns)
    frame = frame.copy()
    frame.columns = list(columns)
    rows = [SheetRow.from_record(record) for record in frame.to_dict(orient="records")]
    return rows, columns


def load_rows(
    source: Union[Path, bytes],
    suffix: Optional[str] = None,
) -> Tuple[List[SheetRow], Tuple[str, ...]]:
    """Read the first sheet of ``source`` and return ``(rows, columns)``."""

    return to_rows(read_table(source, suffix=suffix))
