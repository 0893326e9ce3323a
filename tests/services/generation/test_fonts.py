from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
import requests

from sheetstamp.core.errors import FontError
from sheetstamp.services.generation.fonts import (
    FileFontSource,
    StaticFontSource,
    UrlFontSource,
    load_font,
)


class _FakeResponse:
    def __init__(self, content: bytes, status: int = 200) -> None:
        self.content = content
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class _FakeSession:
    def __init__(self, response=None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[tuple[str, float]] = []

    def get(self, url: str, timeout: float):
        self.calls.append((url, timeout))
        if self.error:
            raise self.error
        return self.response


def test_url_source_fetches_once(font_bytes: bytes) -> None:
    session = _FakeSession(_FakeResponse(font_bytes))
    source = UrlFontSource("https://fonts.example/font.ttf", timeout=5, session=session)

    data = asyncio.run(source.fetch_font_bytes())

    assert data == font_bytes
    assert session.calls == [("https://fonts.example/font.ttf", 5)]


@pytest.mark.parametrize(
    "session",
    [
        _FakeSession(error=requests.ConnectionError("dns failure")),
        _FakeSession(_FakeResponse(b"", status=404)),
        _FakeSession(_FakeResponse(b"")),
    ],
)
def test_url_source_failures_are_fatal(session) -> None:
    source = UrlFontSource("https://fonts.example/font.ttf", session=session)

    with pytest.raises(FontError):
        asyncio.run(source.fetch_font_bytes())


def test_file_and_static_sources(font_path: Path, tmp_path: Path) -> None:
    assert asyncio.run(FileFontSource(font_path).fetch_font_bytes()) == font_path.read_bytes()
    assert asyncio.run(StaticFontSource(b"abc").fetch_font_bytes()) == b"abc"
    with pytest.raises(FontError):
        asyncio.run(FileFontSource(tmp_path / "missing.ttf").fetch_font_bytes())


@pytest.mark.parametrize("payload", [b"", b"definitely not a font program"])
def test_load_font_rejects_garbage(payload: bytes) -> None:
    with pytest.raises(FontError):
        load_font(payload, "BrokenFont")


def test_load_font_measures_text(font_bytes: bytes) -> None:
    font = load_font(font_bytes, "SheetStampTestVera")

    assert font.stringWidth("500", 10) > 0
    assert font.stringWidth("5000", 10) > font.stringWidth("500", 10)
