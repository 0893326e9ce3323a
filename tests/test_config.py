from __future__ import annotations

from pathlib import Path

import pytest

from sheetstamp.config import Align, load_settings
from sheetstamp.core.errors import ConfigError


def test_default_settings_match_viewer_and_stamp_defaults() -> None:
    settings = load_settings()

    assert settings.stamp.font_size == 10
    assert settings.stamp.vertical_offset == 5
    assert settings.stamp.align is Align.LEFT
    assert settings.output.pacing_seconds == pytest.approx(0.5)
    assert settings.viewer.display_scale == pytest.approx(1.5)
    assert settings.font.url.endswith(".ttf")


def test_overrides_skip_none_values() -> None:
    settings = load_settings().with_overrides(
        {"stamp": {"align": "center", "font_size": None}, "output": {"pacing_ms": 0}}
    )

    assert settings.stamp.align is Align.CENTER
    assert settings.stamp.font_size == 10
    assert settings.output.pacing_seconds == 0


def test_invalid_settings_raise_config_error(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("stamp:\n  font_size: -1\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_settings(path)


def test_unknown_keys_are_rejected(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("stamp:\n  colour: red\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_settings(path)


def test_unknown_override_section_raises() -> None:
    with pytest.raises(ConfigError):
        load_settings().with_overrides({"render": {"dpi": 300}})


def test_missing_settings_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "nope.yaml")
