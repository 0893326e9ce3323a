from __future__ import annotations

import pytest

from sheetstamp.services.generation.filename import (
    compose_filename,
    default_base,
    filename_for_row,
)
from sheetstamp_io.schema import FilenameSpec, SheetRow


def test_compose_with_values() -> None:
    assert compose_filename("invoice", ["Somchai"]) == "invoice-Somchai.pdf"
    assert compose_filename("invoice", ["Somchai", "500"]) == "invoice-Somchai-500.pdf"


def test_compose_without_values_is_exact() -> None:
    assert compose_filename("invoice", []) == "invoice.pdf"


def test_empty_values_are_dropped() -> None:
    assert compose_filename("invoice", ["", ""]) == "invoice.pdf"
    assert compose_filename("invoice", ["", "A", ""]) == "invoice-A.pdf"


@pytest.mark.parametrize("values", [["x"], ["a", "b", "c"], ["ไทย"]])
def test_compose_prefix_suffix_and_determinism(values) -> None:
    name = compose_filename("report", values)

    assert name.startswith("report")
    assert name.endswith(".pdf")
    assert compose_filename("report", list(values)) == name


def test_default_base_strips_extension() -> None:
    assert default_base("invoice.xlsx") == "invoice"
    assert default_base("monthly.report.csv") == "monthly.report"


def test_filename_for_row_renders_values() -> None:
    spec = FilenameSpec(base="invoice", fields=("Name", "Amount", "Missing"))
    row = SheetRow.from_record({"Name": "Somchai", "Amount": 500.0})

    assert filename_for_row(spec, row) == "invoice-Somchai-500.pdf"


def test_rows_with_same_values_collide() -> None:
    spec = FilenameSpec(base="invoice", fields=("City",))
    rows = [SheetRow.from_record({"City": "Bangkok"}), SheetRow.from_record({"City": "Bangkok"})]

    assert filename_for_row(spec, rows[0]) == filename_for_row(spec, rows[1])


def test_separators_in_values_stay_inside_output_dir() -> None:
    assert compose_filename("invoice", ["A/B", "C\\D"]) == "invoice-A_B-C_D.pdf"
