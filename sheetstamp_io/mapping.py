"""Job file loading for batch stamping runs."""

# Module responsibilities:
# - Load the placement list and filename block of a job YAML file.
# - Validate structure eagerly so a bad job never reaches the generator.

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Tuple

import yaml

from .schema import FieldMapping, FieldMappingConfig, FilenameConfig


class MappingError(RuntimeError):
    """Raised when a job file is invalid or cannot be applied."""


def _parse_mapping(index: int, entry: Any) -> FieldMapping:
    if not isinstance(entry, dict):
        raise MappingError(f"mappings[{index}] must be a mapping")
    required = {"page", "x", "y", "field"}
    if missing := required - entry.keys():
        raise MappingError(
            f"mappings[{index}] missing required keys: {', '.join(sorted(missing))}"
        )
    try:
        config: FieldMappingConfig = {
            "page": int(entry["page"]),
            "x": float(entry["x"]),
            "y": float(entry["y"]),
            "field": str(entry["field"]),
        }
    except (TypeError, ValueError) as exc:
        raise MappingError(f"mappings[{index}] has an invalid value: {exc}") from exc
    if config["page"] < 1:
        raise MappingError(f"mappings[{index}].page must be >= 1")
    if not config["field"].strip():
        raise MappingError(f"mappings[{index}].field must not be empty")
    return FieldMapping(**config)


@dataclass(frozen=True)
class JobFile:
    """Placements and filename settings read from a job YAML file."""

    mappings: Tuple[FieldMapping, ...]
    name_fields: Tuple[str, ...] = ()
    base: Optional[str] = None

    @classmethod
    def from_yaml(cls, path: Path) -> "JobFile":
        """Load a job file from YAML."""

        if not path.exists():
            raise MappingError(f"Job file not found: {path}")
        with path.open("r", encoding="utf-8") as fh:
            payload = yaml.safe_load(fh)
        return cls.from_dict(payload)

    @classmethod
    def from_dict(cls, payload: Any) -> "JobFile":
        if not isinstance(payload, dict):
            raise MappingError("Invalid job YAML structure (expected mapping)")
        raw_mappings = payload.get("mappings") or []
        if not isinstance(raw_mappings, list):
            raise MappingError("'mappings' must be a list")
        mappings = tuple(_parse_mapping(idx, entry) for idx, entry in enumerate(raw_mappings))

        filename: FilenameConfig = {"fields": []}
        raw_filename = payload.get("filename") or {}
        if not isinstance(raw_filename, dict):
            raise MappingError("'filename' must be a mapping")
        fields = raw_filename.get("fields") or []
        if isinstance(fields, str):
            fields = [fields]
        filename["fields"] = [str(f) for f in fields]
        if raw_filename.get("base"):
            filename["base"] = str(raw_filename["base"])

        return cls(
            mappings=mappings,
            name_fields=tuple(filename["fields"]),
            base=filename.get("base"),
        )

    def fields(self) -> List[str]:
        """Distinct mapped field names in first-use order."""

        return list(dict.fromkeys(m.field for m in self.mappings))
