"""Shared fixtures for the rasterkit test suite."""

from __future__ import annotations

import struct

import pytest

from rasterkit import Color, ColorMode, GlyphFont, GraphicsEngine, PixelBuffer


@pytest.fixture
def mono() -> PixelBuffer:
    """16x16 buffer packed 8 columns per byte, all black."""
    return PixelBuffer(16, 16, ColorMode.ONE_BPP_V)


@pytest.fixture
def engine(mono: PixelBuffer) -> GraphicsEngine:
    return GraphicsEngine(mono)


@pytest.fixture
def lit():
    """Return the set of (x, y) whose pixel equals `color` (white by default)."""

    def _lit(buf: PixelBuffer, color: Color = Color.WHITE) -> set[tuple[int, int]]:
        return {
            (x, y)
            for y in range(buf.height)
            for x in range(buf.width)
            if buf.get_pixel(x, y) == color
        }

    return _lit


@pytest.fixture
def font8() -> GlyphFont:
    """8x8 font: 'A' has only its top-left pixel set, 'B' is solid."""
    return GlyphFont(8, 8, {
        " ": bytes(8),
        "A": bytes([0x01, 0, 0, 0, 0, 0, 0, 0]),
        "B": bytes([0xFF] * 8),
    })


@pytest.fixture
def bf2_file(tmp_path):
    """Write a two-glyph 8x2 BF2 font and return its path."""

    def _write(max_w: int = 8, height: int = 2, bpr: int = 1, glyphs=None):
        glyphs = glyphs or {" ": bytes(height * bpr), "A": bytes([0x80, 0x01])}
        header = b"B2" + struct.pack("<BBBBHBBH", 2, 0, max_w, height, len(glyphs), bpr, max_w, 0)
        index = b""
        data = b""
        for ch, rows in glyphs.items():
            off = len(data)
            index += struct.pack("<HBBBB", ord(ch), max_w, off & 0xFF, (off >> 8) & 0xFF, off >> 16)
            data += rows
        path = tmp_path / "test.bf2"
        path.write_bytes(header + index + data)
        return path

    return _write
