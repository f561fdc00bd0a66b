from __future__ import annotations

import pytest

from rasterkit import Color


def test_channels_clamp_and_default_alpha():
    c = Color(300, -5, 128)
    assert (c.r, c.g, c.b, c.a) == (255, 0, 128, 255)


def test_per_format_views():
    assert Color.RED.color_16bpp_rgb565 == 0xF800
    assert Color.WHITE.color_8bpp_rgb332 == 0xFF
    assert Color(0xA0, 0xB0, 0xC0).color_12bpp_rgb444 == 0xABC
    assert Color(200, 100, 50).color_18bpp_rgb666 == (200, 100, 48)
    assert Color(200, 100, 50).color_8bpp_gray == 124
    assert Color(200, 100, 50).color_4bpp_gray == 7
    assert Color(200, 100, 50).color_2bpp_gray == 1
    assert Color(1, 0, 0).color_1bpp is True
    assert Color.BLACK.color_1bpp is False


def test_from_hex_forms():
    assert Color.from_hex("#FF0000") == Color.RED
    assert Color.from_hex("f00") == Color.RED
    assert Color.from_hex("#80FF0000") == Color(255, 0, 0, 0x80)
    assert Color.from_hex("#8F00") == Color(255, 0, 0, 0x88)
    assert Color.from_hex("#12345") == Color.default()


def test_from_uint_and_hsb():
    assert Color.from_uint(0xFF00FF00) == Color.LIME
    assert Color.from_uint(0x00000000) == Color.TRANSPARENT
    assert Color.from_hsb(0.0, 1.0, 1.0) == Color.RED
    assert Color.BLUE.hue == pytest.approx(2 / 3)
    assert Color.WHITE.saturation == 0.0
    assert Color.GRAY.brightness == pytest.approx(128 / 255)


def test_blend_and_derivation():
    assert Color.BLACK.blend(Color.WHITE, 0.0) == Color.BLACK
    assert Color.BLACK.blend(Color.WHITE, 1.0) == Color.WHITE
    assert Color.BLACK.blend(Color.WHITE, 0.5) == Color(127, 127, 127)
    assert Color.RED.with_alpha(10).a == 10


def test_value_semantics():
    assert Color(1, 2, 3) == Color(1, 2, 3)
    assert Color(1, 2, 3) != Color(1, 2, 3, 0)
    assert len({Color(1, 2, 3), Color(1, 2, 3)}) == 1
    assert tuple(Color(1, 2, 3, 4)) == (1, 2, 3, 4)
