"""Configuration helpers for SheetStamp runtime files.

Loads ``defaults.yaml`` (or an explicit settings file) into validated
pydantic models and applies command line overrides on top.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sheetstamp.core.errors import ConfigError


CONFIG_DIR = Path(__file__).resolve().parent
DEFAULT_SETTINGS_PATH = CONFIG_DIR / "defaults.yaml"

NOTO_SANS_THAI_URL = (
    "https://fonts.gstatic.com/s/notosansthai/v20/"
    "iJWnBXeUZi_OHPqn4wq6hQ2_hbJ1xyN9wd43SofNWcd1MKVQt_So_9CdU5RtpzF-QRvzzXg.ttf"
)


class Align(str, Enum):
    """Horizontal anchoring applied to every stamp in a run."""

    LEFT = "left"
    CENTER = "center"


class FontSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str = NOTO_SANS_THAI_URL
    name: str = "NotoSansThai"
    fetch_timeout: float = Field(default=30.0, gt=0)


class StampSettings(BaseModel):
    """Pipeline-wide text formatting policy."""

    model_config = ConfigDict(extra="forbid")

    font_size: float = Field(default=10.0, gt=0)
    vertical_offset: float = 5.0
    align: Align = Align.LEFT


class OutputSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    pacing_ms: int = Field(default=500, ge=0)
    overwrite: bool = True

    @property
    def pacing_seconds(self) -> float:
        return self.pacing_ms / 1000.0


class ViewerSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    display_scale: float = Field(default=1.5, gt=0)


class GenerationSettings(BaseModel):
    """Complete settings file model."""

    model_config = ConfigDict(extra="forbid")

    font: FontSettings = Field(default_factory=FontSettings)
    stamp: StampSettings = Field(default_factory=StampSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    viewer: ViewerSettings = Field(default_factory=ViewerSettings)

    def with_overrides(self, overrides: Mapping[str, Mapping[str, Any]]) -> "GenerationSettings":
        """Return a copy with non-``None`` section values replaced."""

        data = self.model_dump()
        for section, values in overrides.items():
            if section not in data:
                raise ConfigError(f"Unknown settings section: {section}")
            for key, value in values.items():
                if value is not None:
                    data[section][key] = value
        return _validate(data)


def _validate(data: Dict[str, Any]) -> GenerationSettings:
    try:
        return GenerationSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings: {exc}") from exc


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Settings file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigError("Settings file must contain a mapping")
    return data


def load_settings(path: str | Path | None = None) -> GenerationSettings:
    """Load generation settings from YAML; defaults.yaml when ``path`` is omitted."""

    settings_path = Path(path) if path else DEFAULT_SETTINGS_PATH
    return _validate(_load_yaml(settings_path))


__all__ = [
    "Align",
    "FontSettings",
    "GenerationSettings",
    "OutputSettings",
    "StampSettings",
    "ViewerSettings",
    "load_settings",
]
