from __future__ import annotations

import pytest

from sheetstamp.core.errors import EmptySpreadsheetError, PlacementError, TemplateError
from sheetstamp.services.placement.session import PlacementSession
from sheetstamp_io.schema import FieldMapping, SheetRow


def _rows():
    return [SheetRow.from_record({"Name": "Somchai", "Amount": 500})]


def _ready(template_bytes: bytes) -> PlacementSession:
    session = PlacementSession()
    session.load_template(template_bytes)
    session.load_rows(_rows(), ("Name", "Amount"), source_name="invoice.xlsx")
    return session


def test_place_converts_pointer_and_records(template_bytes: bytes) -> None:
    session = _ready(template_bytes)

    mapping = session.place(150, 75, "Name", scale=1.5)

    assert mapping == FieldMapping(page=1, x=100, y=50, field="Name")
    assert list(session.registry) == [mapping]
    assert session.overlay_points(scale=1.5) == [((150, 75), "Name")]


def test_place_on_other_page_and_undo(template_bytes: bytes) -> None:
    session = _ready(template_bytes)
    session.go_to_page(2)
    first = session.place(30, 30, "Amount", scale=1.0)
    session.place(60, 60, "Name", scale=1.0)

    session.undo()

    assert list(session.registry) == [first]
    assert first.page == 2
    assert session.overlay_points(page=1) == []


def test_place_rejects_unknown_field_and_bad_page(template_bytes: bytes) -> None:
    session = _ready(template_bytes)

    with pytest.raises(PlacementError):
        session.place(10, 10, "Missing")
    with pytest.raises(PlacementError):
        session.place(10, 10, "")
    with pytest.raises(PlacementError):
        session.place(10, 10, "Name", page=3)
    with pytest.raises(PlacementError):
        session.go_to_page(0)
    assert len(session.registry) == 0


def test_empty_spreadsheet_blocks_placement(template_bytes: bytes) -> None:
    session = PlacementSession()
    session.load_template(template_bytes)
    session.load_rows([], ())

    assert not session.can_place
    with pytest.raises(EmptySpreadsheetError):
        session.place(10, 10, "Name")


def test_header_without_rows_clears_columns(template_bytes: bytes) -> None:
    session = PlacementSession()
    session.load_template(template_bytes)
    session.load_rows([], ("Name", "Amount"))

    assert session.columns == ()
    assert not session.can_place
    with pytest.raises(EmptySpreadsheetError):
        session.place(10, 10, "Name")


def test_place_requires_template() -> None:
    session = PlacementSession()
    session.load_rows(_rows(), ("Name", "Amount"))

    assert not session.can_place
    with pytest.raises(PlacementError):
        session.place(10, 10, "Name")


def test_new_template_clears_mappings(template_bytes: bytes, template_factory) -> None:
    session = _ready(template_bytes)
    session.go_to_page(2)
    session.place(10, 10, "Name")

    info = session.load_template(template_factory(((300, 300),)))

    assert info.page_count == 1
    assert len(session.registry) == 0
    assert session.current_page == 1


def test_bad_template_raises_template_error() -> None:
    with pytest.raises(TemplateError):
        PlacementSession().load_template(b"garbage")


def test_new_spreadsheet_reports_stale_mappings(template_bytes: bytes) -> None:
    session = _ready(template_bytes)
    kept = session.place(10, 10, "Name")
    dropped_column = session.place(20, 20, "Amount")

    stale = session.load_rows(
        [SheetRow.from_record({"Name": "Malee", "Total": 1})], ("Name", "Total")
    )

    assert stale == [dropped_column]
    # Stale mappings are reported, not silently removed.
    assert list(session.registry) == [kept, dropped_column]


def test_filename_spec_defaults_to_spreadsheet_stem(template_bytes: bytes) -> None:
    session = _ready(template_bytes)

    assert session.filename_spec(["Name"]).base == "invoice"
    assert session.filename_spec(["Name"], base="custom").base == "custom"
