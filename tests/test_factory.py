from __future__ import annotations

import logging

import pytest

from rasterkit import (
    Color,
    ColorMode,
    ConstructionError,
    IndexedPalette,
    PixelBuffer,
    UnsupportedOperationError,
    create,
    create_like,
)


@pytest.mark.parametrize("mode", ColorMode.all())
def test_create_dispatches_every_mode(mode):
    buf = create(mode, 6, 5)
    assert isinstance(buf, PixelBuffer)
    assert buf.color_mode == mode
    assert (buf.width, buf.height) == (6, 5)
    assert buf.buffer == bytearray(buf.byte_count)


def test_create_with_data():
    buf = create(ColorMode.RGB888, 1, 1, b"\x01\x02\x03")
    assert buf.get_pixel(0, 0) == Color(1, 2, 3)
    with pytest.raises(ConstructionError):
        create(ColorMode.RGB888, 1, 1, b"\x01")


def test_create_logs_dispatch(caplog):
    caplog.set_level(logging.DEBUG, logger="rasterkit.buffer.factory")
    create(ColorMode.RGB444, 2, 2)
    assert "RGB444" in caplog.text


def test_unknown_tag_fails():
    with pytest.raises(UnsupportedOperationError):
        create(0, 2, 2)
    with pytest.raises(UnsupportedOperationError):
        create_like(object(), 2, 2)


def test_create_like_matches_template():
    template = create(ColorMode.GRAY_2BPP, 3, 3)
    template.fill(Color.WHITE)
    out = create_like(template, 8, 2)
    assert out.color_mode == ColorMode.GRAY_2BPP
    assert (out.width, out.height) == (8, 2)
    assert out.buffer == bytearray(out.byte_count)


def test_create_like_copies_palette():
    palette = IndexedPalette(16, [Color.BLACK, Color.RED])
    template = create(ColorMode.INDEXED_4BPP, 2, 2, palette=palette)
    out = create_like(template, 4, 4)
    assert out.palette == palette and out.palette is not palette
    out.set_pixel(3, 3, Color.RED)
    assert out.get_pixel(3, 3) == Color.RED
