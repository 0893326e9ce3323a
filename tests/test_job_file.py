"""Unit tests for job file loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from sheetstamp_io.mapping import JobFile, MappingError
from sheetstamp_io.schema import FieldMapping


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_job_file_reads_mappings_and_filename(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "job.yaml",
        "mappings:\n"
        "  - {page: 1, x: 100, y: 50, field: Name}\n"
        "  - {page: 2, x: 10.5, y: 20, field: Amount}\n"
        "  - {page: 1, x: 100, y: 50, field: Name}\n"
        "filename:\n"
        "  base: invoice\n"
        "  fields: [Name]\n",
    )

    job = JobFile.from_yaml(path)

    assert job.mappings[0] == FieldMapping(page=1, x=100.0, y=50.0, field="Name")
    assert job.mappings[1].x == pytest.approx(10.5)
    # Duplicates are kept.
    assert len(job.mappings) == 3
    assert job.name_fields == ("Name",)
    assert job.base == "invoice"
    assert job.fields() == ["Name", "Amount"]


def test_filename_block_is_optional(tmp_path: Path) -> None:
    path = _write(tmp_path / "job.yaml", "mappings:\n  - {page: 1, x: 1, y: 2, field: Code}\n")

    job = JobFile.from_yaml(path)

    assert job.base is None
    assert job.name_fields == ()


def test_single_filename_field_may_be_a_string() -> None:
    job = JobFile.from_dict({"mappings": [], "filename": {"fields": "Name"}})

    assert job.name_fields == ("Name",)


@pytest.mark.parametrize(
    "payload",
    [
        ["not", "a", "mapping"],
        {"mappings": {"page": 1}},
        {"mappings": [{"page": 1, "x": 1, "y": 1}]},
        {"mappings": [{"page": 0, "x": 1, "y": 1, "field": "Name"}]},
        {"mappings": [{"page": 1, "x": "left", "y": 1, "field": "Name"}]},
        {"mappings": [{"page": 1, "x": 1, "y": 1, "field": "  "}]},
        {"mappings": [], "filename": ["Name"]},
    ],
)
def test_invalid_job_payloads_raise(payload) -> None:
    with pytest.raises(MappingError):
        JobFile.from_dict(payload)


def test_missing_job_file_raises(tmp_path: Path) -> None:
    with pytest.raises(MappingError):
        JobFile.from_yaml(tmp_path / "missing.yaml")
