"""Font program sources and loading."""

from __future__ import annotations

import asyncio
import io
import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import requests
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont

from sheetstamp.config import NOTO_SANS_THAI_URL
from sheetstamp.core.errors import FontError

LOGGER = logging.getLogger(__name__)


class FontSource(Protocol):
    """Anything able to hand over the bytes of a TrueType font program."""

    async def fetch_font_bytes(self) -> bytes:  # pragma: no cover - interface definition
        ...


@dataclass(frozen=True)
class StaticFontSource:
    data: bytes

    async def fetch_font_bytes(self) -> bytes:
        return self.data


@dataclass(frozen=True)
class FileFontSource:
    path: Path

    async def fetch_font_bytes(self) -> bytes:
        try:
            return await asyncio.to_thread(self.path.read_bytes)
        except OSError as exc:
            raise FontError(f"Cannot read font file {self.path}: {exc}") from exc


class UrlFontSource:
    """Downloads the font once per run; network failures abort the run."""

    def __init__(
        self,
        url: str = NOTO_SANS_THAI_URL,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self) -> bytes:
        response = self.session.get(self.url, timeout=self.timeout)
        response.raise_for_status()
        return response.content

    async def fetch_font_bytes(self) -> bytes:
        LOGGER.info("Fetching font from %s", self.url)
        try:
            data = await asyncio.to_thread(self._get)
        except requests.RequestException as exc:
            raise FontError(f"Font download failed: {exc}") from exc
        if not data:
            raise FontError(f"Font download returned no data: {self.url}")
        LOGGER.info("Fetched font (%d bytes)", len(data))
        return data


def load_font(data: bytes, name: str) -> TTFont:
    """Parse a TrueType program and register it under ``name``.

    reportlab embeds registered TrueType fonts as a subset of the glyphs
    actually drawn in each document.
    """

    if not data:
        raise FontError("Font program is empty")
    try:
        font = TTFont(name, io.BytesIO(data))
    except (TTFError, struct.error, ValueError, KeyError, IndexError) as exc:
        raise FontError(f"Unusable font program: {exc}") from exc
    pdfmetrics.registerFont(font)
    return font


__all__ = [
    "FileFontSource",
    "FontSource",
    "StaticFontSource",
    "UrlFontSource",
    "load_font",
]
