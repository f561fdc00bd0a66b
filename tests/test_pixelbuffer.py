from __future__ import annotations

import logging

import pytest

from rasterkit import (
    Color,
    ColorMode,
    ConstructionError,
    IndexedPalette,
    PixelBuffer,
    RangeError,
    UnsupportedOperationError,
)

DIRECT_MODES = [
    ColorMode.ONE_BPP,
    ColorMode.ONE_BPP_V,
    ColorMode.GRAY_2BPP,
    ColorMode.GRAY_4BPP,
    ColorMode.GRAY_8BPP,
    ColorMode.RGB332,
    ColorMode.RGB444,
    ColorMode.RGB565,
    ColorMode.RGB666,
    ColorMode.RGB888,
    ColorMode.RGBA8888,
]

SAMPLE = Color(200, 100, 50)

QUANTIZED = {
    ColorMode.ONE_BPP: Color.WHITE,
    ColorMode.ONE_BPP_V: Color.WHITE,
    ColorMode.GRAY_2BPP: Color(85, 85, 85),
    ColorMode.GRAY_4BPP: Color(119, 119, 119),
    ColorMode.GRAY_8BPP: Color(124, 124, 124),
    ColorMode.RGB332: Color(218, 109, 0),
    ColorMode.RGB444: Color(204, 102, 51),
    ColorMode.RGB565: Color(205, 101, 49),
    ColorMode.RGB666: Color(200, 100, 48),
    ColorMode.RGB888: Color(200, 100, 50),
    ColorMode.RGBA8888: Color(200, 100, 50),
}


# =============================================================================
# Construction
# =============================================================================

def test_zeroed_storage_matches_byte_count():
    buf = PixelBuffer(5, 3, ColorMode.RGB444)
    assert buf.byte_count == 23
    assert buf.buffer == bytearray(23)
    assert buf.bit_depth == 12


def test_bad_dimensions():
    with pytest.raises(ConstructionError):
        PixelBuffer(0, 4, ColorMode.RGB565)
    with pytest.raises(ValueError):
        PixelBuffer(4, -1, ColorMode.RGB565)


def test_wrapped_bytes_length_checked():
    with pytest.raises(ConstructionError):
        PixelBuffer(4, 4, ColorMode.RGB565, bytes(31))


def test_wrapped_bytearray_is_adopted_and_bytes_copied():
    data = bytearray(32)
    assert PixelBuffer(4, 4, ColorMode.RGB565, data).buffer is data

    raw = bytes([0xF8, 0x00]) * 16
    buf = PixelBuffer(4, 4, ColorMode.RGB565, raw)
    assert isinstance(buf.buffer, bytearray)
    assert buf.get_pixel(3, 3) == Color.RED


def test_palette_only_for_indexed():
    with pytest.raises(ConstructionError):
        PixelBuffer(2, 2, ColorMode.RGB888, palette=IndexedPalette(4))
    with pytest.raises(ConstructionError):
        PixelBuffer(2, 2, ColorMode.INDEXED_2BPP, palette=IndexedPalette(16))
    assert len(PixelBuffer(2, 2, ColorMode.INDEXED_4BPP).palette) == 16


# =============================================================================
# Pixel round trip and fill
# =============================================================================

@pytest.mark.parametrize("mode", DIRECT_MODES)
def test_set_then_get_returns_quantized_color(mode):
    blank = PixelBuffer(5, 3, mode).get_pixel(0, 0)
    for x, y in [(0, 0), (1, 0), (4, 2), (3, 1)]:
        buf = PixelBuffer(5, 3, mode)
        buf.set_pixel(x, y, SAMPLE)
        assert buf.get_pixel(x, y) == QUANTIZED[mode]
        for nx, ny in [(x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)]:
            if 0 <= nx < 5 and 0 <= ny < 3:
                assert buf.get_pixel(nx, ny) == blank


@pytest.mark.parametrize("mode", DIRECT_MODES)
def test_fill_sets_every_pixel(mode):
    buf = PixelBuffer(5, 3, mode)
    buf.fill(SAMPLE)
    for y in range(3):
        for x in range(5):
            assert buf.get_pixel(x, y) == QUANTIZED[mode]


@pytest.mark.parametrize("mode", [ColorMode.ONE_BPP, ColorMode.GRAY_4BPP, ColorMode.RGB444, ColorMode.RGBA8888])
def test_white_survives_round_trip(mode):
    buf = PixelBuffer(3, 3, mode)
    buf.set_pixel(1, 1, Color.WHITE)
    assert buf.get_pixel(1, 1) == Color.WHITE


def test_gray8_white_is_luma_truncated():
    buf = PixelBuffer(1, 1, ColorMode.GRAY_8BPP)
    buf.set_pixel(0, 0, Color.WHITE)
    assert buf.get_pixel(0, 0) == Color(254, 254, 254)


def test_rgba_keeps_alpha():
    buf = PixelBuffer(2, 1, ColorMode.RGBA8888)
    buf.set_pixel(1, 0, Color(1, 2, 3, 4))
    assert buf.buffer[4:8] == bytes([1, 2, 3, 4])
    assert buf.get_pixel(1, 0) == Color(1, 2, 3, 4)


def test_fill_large_buffer_uses_doubling_copy():
    buf = PixelBuffer(37, 29, ColorMode.RGB888)
    buf.fill(Color(1, 2, 3))
    assert buf.buffer == bytearray([1, 2, 3]) * (37 * 29)


def test_out_of_range_pixels():
    buf = PixelBuffer(4, 4, ColorMode.RGB565)
    for x, y in [(-1, 0), (4, 0), (0, 4), (0, -1)]:
        with pytest.raises(RangeError):
            buf.get_pixel(x, y)
        with pytest.raises(IndexError):
            buf.set_pixel(x, y, Color.RED)


# =============================================================================
# Addressing
# =============================================================================

def test_vertical_mono_scenario():
    buf = PixelBuffer(16, 16, ColorMode.ONE_BPP_V)
    buf.fill(Color.BLACK)
    buf.set_pixel(3, 0, Color.WHITE)
    assert buf.get_pixel(3, 0) == Color.WHITE
    assert buf.get_pixel(4, 0) == Color.BLACK
    assert buf.buffer[0] == 0b00010000


def test_page_packed_mono_addressing():
    buf = PixelBuffer(4, 16, ColorMode.ONE_BPP)
    buf.set_pixel(2, 9, Color.WHITE)
    assert buf.buffer[6] == 0b00000010
    assert buf.get_pixel(2, 9) == Color.WHITE
    assert buf.get_pixel(2, 8) == Color.BLACK


def test_gray4_nibbles_follow_linear_index():
    buf = PixelBuffer(3, 2, ColorMode.GRAY_4BPP)
    buf.set_pixel(0, 0, Color.WHITE)
    assert buf.buffer[0] == 0xF0
    buf.set_pixel(1, 0, Color.WHITE)
    assert buf.buffer[0] == 0xFF
    buf.set_pixel(0, 1, Color.WHITE)  # p = 3, low nibble of byte 1
    assert buf.buffer[1] == 0x0F
    assert buf.get_pixel(2, 0) == Color.BLACK


def test_gray2_shift():
    buf = PixelBuffer(4, 1, ColorMode.GRAY_2BPP)
    buf.set_pixel(1, 0, Color.WHITE)
    assert buf.buffer[0] == 0b00110000


def test_rgb444_pair_layout():
    buf = PixelBuffer(2, 1, ColorMode.RGB444)
    buf.set_pixel(0, 0, Color(0xA0, 0xB0, 0xC0))
    buf.set_pixel(1, 0, Color(0x10, 0x20, 0x30))
    assert buf.buffer == bytearray([0xAB, 0xC1, 0x23])


def test_rgb565_big_endian():
    buf = PixelBuffer(1, 1, ColorMode.RGB565)
    buf.set_pixel(0, 0, Color.RED)
    assert buf.buffer == bytearray([0xF8, 0x00])


# =============================================================================
# Invert
# =============================================================================

def test_invert_pixel_per_format():
    mono = PixelBuffer(8, 1, ColorMode.ONE_BPP_V)
    mono.invert_pixel(2, 0)
    assert mono.get_pixel(2, 0) == Color.WHITE
    mono.invert_pixel(2, 0)
    assert mono.get_pixel(2, 0) == Color.BLACK

    rgba = PixelBuffer(1, 1, ColorMode.RGBA8888)
    rgba.set_pixel(0, 0, Color(10, 20, 30, 40))
    rgba.invert_pixel(0, 0)
    assert rgba.get_pixel(0, 0) == Color(245, 235, 225, 40)

    rgb666 = PixelBuffer(1, 1, ColorMode.RGB666)
    rgb666.set_pixel(0, 0, SAMPLE)
    rgb666.invert_pixel(0, 0)
    assert rgb666.get_pixel(0, 0) == Color(52, 152, 204)

    rgb565 = PixelBuffer(1, 1, ColorMode.RGB565)
    rgb565.invert_pixel(0, 0)
    assert rgb565.get_pixel(0, 0) == Color.WHITE


def test_invert_indexed_unsupported():
    buf = PixelBuffer(2, 2, ColorMode.INDEXED_2BPP, palette=IndexedPalette(4, [Color.BLACK]))
    with pytest.raises(UnsupportedOperationError):
        buf.invert_pixel(0, 0)
    with pytest.raises(UnsupportedOperationError):
        buf.invert()


def test_invert_whole_buffer():
    buf = PixelBuffer(3, 1, ColorMode.RGBA8888)
    buf.fill(Color(0, 0, 0, 7))
    buf.invert()
    for x in range(3):
        assert buf.get_pixel(x, 0) == Color(255, 255, 255, 7)


# =============================================================================
# fill_rect
# =============================================================================

RECTS = [(0, 0, 13, 11), (3, 2, 5, 7), (1, 9, 12, 2), (0, 4, 13, 3), (5, 5, 1, 1), (7, 0, 6, 11), (2, 3, 9, 1)]


@pytest.mark.parametrize("mode", DIRECT_MODES)
@pytest.mark.parametrize("rect", RECTS)
def test_fill_rect_matches_per_pixel_writes(mode, rect):
    x, y, w, h = rect
    fast = PixelBuffer(13, 11, mode)
    slow = PixelBuffer(13, 11, mode)
    fast.fill_rect(x, y, w, h, SAMPLE)
    for row in range(y, y + h):
        for col in range(x, x + w):
            slow.set_pixel(col, row, SAMPLE)
    assert fast.buffer == slow.buffer


def test_fill_rect_black_clears_inside_only():
    buf = PixelBuffer(16, 16, ColorMode.ONE_BPP)
    buf.fill(Color.WHITE)
    buf.fill_rect(2, 3, 4, 10, Color.BLACK)
    assert buf.get_pixel(2, 3) == Color.BLACK
    assert buf.get_pixel(5, 12) == Color.BLACK
    assert buf.get_pixel(2, 2) == Color.WHITE
    assert buf.get_pixel(6, 3) == Color.WHITE
    assert buf.get_pixel(2, 13) == Color.WHITE


@pytest.mark.parametrize("rect", [(-1, 0, 2, 2), (0, -1, 2, 2), (3, 0, 2, 2), (0, 3, 2, 2), (0, 0, -1, 2)])
def test_fill_rect_out_of_range_leaves_buffer_untouched(rect):
    buf = PixelBuffer(4, 4, ColorMode.GRAY_4BPP)
    buf.fill(Color.GRAY)
    before = bytes(buf.buffer)
    with pytest.raises(RangeError):
        buf.fill_rect(*rect, Color.WHITE)
    assert bytes(buf.buffer) == before


def test_fill_rect_empty_is_noop():
    buf = PixelBuffer(4, 4, ColorMode.RGB888)
    buf.fill_rect(1, 1, 0, 3, Color.RED)
    assert buf.buffer == bytearray(48)


# =============================================================================
# Indexed
# =============================================================================

def test_indexed_write_needs_palette_entries():
    buf = PixelBuffer(2, 2, ColorMode.INDEXED_4BPP)
    with pytest.raises(UnsupportedOperationError):
        buf.set_pixel(0, 0, Color.RED)


def test_indexed_resolves_nearest_color():
    palette = IndexedPalette(4, [Color.BLACK, Color.WHITE, Color.RED, Color.BLUE])
    buf = PixelBuffer(3, 1, ColorMode.INDEXED_2BPP, palette=palette)
    buf.set_pixel(1, 0, Color(250, 10, 10))
    assert buf.get_raw(1, 0) == 2
    assert buf.get_pixel(1, 0) == Color.RED


def test_indexed_unset_entry_reads_default():
    buf = PixelBuffer(2, 1, ColorMode.INDEXED_2BPP, palette=IndexedPalette(4, [Color.RED]))
    buf.set_raw(0, 0, 3)
    assert buf.get_pixel(0, 0) == Color.default()


# =============================================================================
# Blit
# =============================================================================

@pytest.fixture
def debug_log(caplog):
    caplog.set_level(logging.DEBUG, logger="rasterkit.buffer.pixelbuffer")
    return caplog


def _pattern(buf: PixelBuffer) -> None:
    for y in range(buf.height):
        for x in range(buf.width):
            buf.set_pixel(x, y, Color((x * 40) % 256, (y * 60) % 256, 128))


def test_blit_fast_path_copies_rows(debug_log):
    src = PixelBuffer(4, 3, ColorMode.GRAY_4BPP)
    _pattern(src)
    dst = PixelBuffer(10, 5, ColorMode.GRAY_4BPP)
    dst.blit(2, 1, src)
    assert "Slow blit" not in debug_log.text
    for y in range(3):
        for x in range(4):
            assert dst.get_pixel(2 + x, 1 + y) == src.get_pixel(x, y)
    assert dst.get_pixel(1, 1) == Color.BLACK
    assert dst.get_pixel(6, 1) == Color.BLACK


def test_blit_misaligned_falls_back(debug_log):
    src = PixelBuffer(4, 3, ColorMode.GRAY_4BPP)
    _pattern(src)
    dst = PixelBuffer(10, 5, ColorMode.GRAY_4BPP)
    dst.blit(3, 1, src)
    assert "Slow blit" in debug_log.text
    for y in range(3):
        for x in range(4):
            assert dst.get_pixel(3 + x, 1 + y) == src.get_pixel(x, y)


def test_blit_page_packed_fast_path(debug_log):
    src = PixelBuffer(3, 8, ColorMode.ONE_BPP)
    src.set_pixel(1, 5, Color.WHITE)
    dst = PixelBuffer(8, 16, ColorMode.ONE_BPP)
    dst.blit(2, 8, src)
    assert "Slow blit" not in debug_log.text
    assert dst.get_pixel(3, 13) == Color.WHITE
    assert len([b for b in dst.buffer if b]) == 1


def test_blit_between_formats_quantizes():
    src = PixelBuffer(2, 2, ColorMode.RGB888)
    src.fill(SAMPLE)
    dst = PixelBuffer(4, 4, ColorMode.RGB565)
    dst.blit(1, 1, src)
    assert dst.get_pixel(2, 2) == QUANTIZED[ColorMode.RGB565]
    assert dst.get_pixel(0, 0) == Color.BLACK


def test_blit_self_is_noop():
    buf = PixelBuffer(5, 5, ColorMode.RGB444)
    _pattern(buf)
    before = bytes(buf.buffer)
    buf.blit(0, 0, buf)
    assert bytes(buf.buffer) == before


def test_blit_must_fit():
    dst = PixelBuffer(4, 4, ColorMode.RGB888)
    with pytest.raises(RangeError):
        dst.blit(3, 0, PixelBuffer(2, 2, ColorMode.RGB888))
    with pytest.raises(RangeError):
        dst.blit(-1, 0, PixelBuffer(2, 2, ColorMode.RGB888))


# =============================================================================
# Copies
# =============================================================================

def test_clear_and_clone():
    buf = PixelBuffer(3, 3, ColorMode.INDEXED_4BPP, palette=IndexedPalette(16, [Color.BLACK, Color.RED]))
    buf.set_pixel(1, 1, Color.RED)
    copy = buf.clone()
    assert copy.buffer == buf.buffer and copy.buffer is not buf.buffer
    assert copy.palette == buf.palette and copy.palette is not buf.palette

    buf.clear()
    assert buf.buffer == bytearray(buf.byte_count)
    assert copy.get_pixel(1, 1) == Color.RED


def test_fill_rect_raw_writes_stored_value():
    buf = PixelBuffer(6, 2, ColorMode.INDEXED_4BPP)
    buf.fill_rect_raw(1, 0, 3, 2, 9)
    assert buf.get_raw(1, 1) == 9 and buf.get_raw(3, 0) == 9
    assert buf.get_raw(0, 0) == 0 and buf.get_raw(4, 1) == 0
    with pytest.raises(RangeError):
        buf.fill_rect_raw(4, 0, 3, 1, 9)
