"""
Pixel Formats - Color Mode Tags and Format Descriptors
======================================================
Every pixel encoding is described by one PixelFormat: a layout (where the
bits of pixel (x, y) live in the byte array) plus a codec (how a Color
becomes a raw integer and back).

Layouts:
    _PageLayout     1bpp, 8 rows of one column per byte (SSD1306 style)
    _LinearLayout   1/2/4/8 bpp, row-major, MSB-first within each byte
    _Rgb444Layout   12bpp, two pixels share three bytes
    _WordLayout     2/3/4 bytes per pixel, big-endian

The PixelBuffer never branches on a format name; it only asks the
descriptor. Adding an encoding means adding a descriptor here.
"""

from math import gcd

from ..color import Color
from ..errors import UnsupportedOperationError

# =============================================================================
# Bit Manipulation Constants
# =============================================================================

_BITS_PER_BYTE = 8
_BYTE_MASK = 0xFF

_RGB666_MASK = 0xFCFCFC
_RGBA_COLOR_MASK = 0xFFFFFF00  # Invert RGB, keep alpha


class ColorMode:
    """
    Pixel encoding tag.

    The tag is immutable per buffer and selects the addressing formula
    used by every pixel operation.
    """
    ONE_BPP = 1          # 1bpp, page packed (8 rows per byte, column order)
    ONE_BPP_V = 2        # 1bpp, 8 columns per byte, MSB first
    GRAY_2BPP = 3
    GRAY_4BPP = 4
    GRAY_8BPP = 5
    INDEXED_2BPP = 6
    INDEXED_4BPP = 7
    RGB332 = 8
    RGB444 = 9
    RGB565 = 10
    RGB666 = 11
    RGB888 = 12
    RGBA8888 = 13

    _names = {
        1: "ONE_BPP",
        2: "ONE_BPP_V",
        3: "GRAY_2BPP",
        4: "GRAY_4BPP",
        5: "GRAY_8BPP",
        6: "INDEXED_2BPP",
        7: "INDEXED_4BPP",
        8: "RGB332",
        9: "RGB444",
        10: "RGB565",
        11: "RGB666",
        12: "RGB888",
        13: "RGBA8888",
    }

    @classmethod
    def name(cls, mode: int) -> str:
        """Get human-readable mode name."""
        return cls._names.get(mode, f"UNKNOWN({mode})")

    @classmethod
    def all(cls) -> tuple:
        return tuple(cls._names)


# =============================================================================
# Layouts
# =============================================================================

class _PageLayout:
    """1 bit per pixel, byte = 8 vertically stacked pixels of one column."""

    bpp = 1

    def byte_count(self, width: int, height: int) -> int:
        return width * ((height + 7) >> 3)

    def read(self, buf, width: int, x: int, y: int) -> int:
        return (buf[(y >> 3) * width + x] >> (y & 7)) & 1

    def write(self, buf, width: int, x: int, y: int, raw: int) -> None:
        idx = (y >> 3) * width + x
        if raw: buf[idx] |= 1 << (y & 7)
        else: buf[idx] &= ~(1 << (y & 7)) & _BYTE_MASK


class _LinearLayout:
    """Sub-byte or single-byte pixels, row-major, first pixel in the high bits."""

    def __init__(self, bpp: int):
        self.bpp = bpp
        self.mask = (1 << bpp) - 1

    def byte_count(self, width: int, height: int) -> int:
        return (width * height * self.bpp + 7) >> 3

    def read(self, buf, width: int, x: int, y: int) -> int:
        off = (y * width + x) * self.bpp
        shift = _BITS_PER_BYTE - self.bpp - (off & 7)
        return (buf[off >> 3] >> shift) & self.mask

    def write(self, buf, width: int, x: int, y: int, raw: int) -> None:
        off = (y * width + x) * self.bpp
        idx = off >> 3
        shift = _BITS_PER_BYTE - self.bpp - (off & 7)
        buf[idx] = (buf[idx] & ~(self.mask << shift) & _BYTE_MASK) | ((raw & self.mask) << shift)


class _Rgb444Layout:
    """
    12 bits per pixel. Pixel pairs share three bytes:

        even pixel: RRRRGGGG BBBB....
        odd pixel:  ....RRRR GGGGBBBB
    """

    bpp = 12

    def byte_count(self, width: int, height: int) -> int:
        return (width * height * 3 + 1) >> 1

    def read(self, buf, width: int, x: int, y: int) -> int:
        p = y * width + x
        if p & 1 == 0:
            idx = p * 3 >> 1
            return (buf[idx] << 4) | (buf[idx + 1] >> 4)
        idx = ((p - 1) * 3 >> 1) + 1
        return ((buf[idx] & 0x0F) << 8) | buf[idx + 1]

    def write(self, buf, width: int, x: int, y: int, raw: int) -> None:
        p = y * width + x
        if p & 1 == 0:
            idx = p * 3 >> 1
            buf[idx] = (raw >> 4) & _BYTE_MASK
            buf[idx + 1] = (buf[idx + 1] & 0x0F) | ((raw & 0x0F) << 4)
        else:
            idx = ((p - 1) * 3 >> 1) + 1
            buf[idx] = (buf[idx] & 0xF0) | ((raw >> 8) & 0x0F)
            buf[idx + 1] = raw & _BYTE_MASK


class _WordLayout:
    """Whole bytes per pixel, channels stored big-endian."""

    def __init__(self, nbytes: int):
        self.nbytes = nbytes
        self.bpp = nbytes * _BITS_PER_BYTE

    def byte_count(self, width: int, height: int) -> int:
        return width * height * self.nbytes

    def read(self, buf, width: int, x: int, y: int) -> int:
        idx = (y * width + x) * self.nbytes
        return int.from_bytes(buf[idx:idx + self.nbytes], "big")

    def write(self, buf, width: int, x: int, y: int, raw: int) -> None:
        idx = (y * width + x) * self.nbytes
        buf[idx:idx + self.nbytes] = raw.to_bytes(self.nbytes, "big")


# =============================================================================
# Codecs (Color <-> raw value)
# =============================================================================

def _expand(value: int, bits: int) -> int:
    """Scale an n-bit channel to 0-255 so full-scale survives a round trip."""
    return value * _BYTE_MASK // ((1 << bits) - 1)


def _rgb_codec(wr: int, wg: int, wb: int):
    """Truncating codec for packed RGB with the given channel widths."""
    sr, sg, sb = 8 - wr, 8 - wg, 8 - wb
    mr, mg, mb = (1 << wr) - 1, (1 << wg) - 1, (1 << wb) - 1

    def encode(color: Color, palette=None) -> int:
        return ((color.r >> sr) << (wg + wb)) | ((color.g >> sg) << wb) | (color.b >> sb)

    def decode(raw: int, palette=None) -> Color:
        return Color(_expand((raw >> (wg + wb)) & mr, wr),
                     _expand((raw >> wb) & mg, wg),
                     _expand(raw & mb, wb))

    return encode, decode


def _gray_codec(bits: int):
    shift = 8 - bits

    def encode(color: Color, palette=None) -> int:
        return color.color_8bpp_gray >> shift

    def decode(raw: int, palette=None) -> Color:
        v = _expand(raw, bits)
        return Color(v, v, v)

    return encode, decode


def _mono_encode(color: Color, palette=None) -> int:
    return 1 if color.color_1bpp else 0


def _mono_decode(raw: int, palette=None) -> Color:
    return Color.WHITE if raw else Color.BLACK


def _indexed_encode(color: Color, palette=None) -> int:
    if palette is None:
        raise UnsupportedOperationError("Indexed format requires a palette")
    return palette.nearest_index(color)


def _indexed_decode(raw: int, palette=None) -> Color:
    if palette is None:
        raise UnsupportedOperationError("Indexed format requires a palette")
    entry = palette[raw]
    return entry if entry is not None else Color.default()


def _rgb666_encode(color: Color, palette=None) -> int:
    r, g, b = color.color_18bpp_rgb666
    return (r << 16) | (g << 8) | b


def _rgb888_encode(color: Color, palette=None) -> int:
    return (color.r << 16) | (color.g << 8) | color.b


def _rgb888_decode(raw: int, palette=None) -> Color:
    return Color((raw >> 16) & _BYTE_MASK, (raw >> 8) & _BYTE_MASK, raw & _BYTE_MASK)


def _rgba8888_encode(color: Color, palette=None) -> int:
    return (color.r << 24) | (color.g << 16) | (color.b << 8) | color.a


def _rgba8888_decode(raw: int, palette=None) -> Color:
    return Color((raw >> 24) & _BYTE_MASK, (raw >> 16) & _BYTE_MASK,
                 (raw >> 8) & _BYTE_MASK, raw & _BYTE_MASK)


# =============================================================================
# Descriptor
# =============================================================================

class PixelFormat:
    """
    Format descriptor driving all PixelBuffer bit arithmetic.

    Attributes:
        mode: ColorMode tag
        bpp: Bits per pixel as stored
        align: Pixel count whose bits end on a byte boundary
        unit_pixels: Pixels in one repeating fill unit
        palette_size: Palette entries (0 for direct color)
        invert_mask: XOR mask used by invert_pixel (None = unsupported)
        page_packed: True for the column-page 1bpp layout
    """

    def __init__(self, mode: int, layout, encode, decode,
                 invert_mask: int | None, palette_size: int = 0):
        self.mode = mode
        self.name = ColorMode.name(mode)
        self.layout = layout
        self.bpp = layout.bpp
        self.encode = encode
        self.decode = decode
        self.invert_mask = invert_mask
        self.palette_size = palette_size
        self.page_packed = isinstance(layout, _PageLayout)
        self.align = _BITS_PER_BYTE // gcd(self.bpp, _BITS_PER_BYTE)
        self.unit_pixels = self.align
        self.unit_bytes = self.align * self.bpp // _BITS_PER_BYTE

    @property
    def is_indexed(self) -> bool:
        return self.palette_size > 0

    def byte_count(self, width: int, height: int) -> int:
        return self.layout.byte_count(width, height)

    def fill_unit(self, raw: int) -> bytes:
        """Smallest byte pattern that repeats `raw` across a whole buffer."""
        if self.page_packed:
            return bytes((_BYTE_MASK if raw else 0,))
        word = 0
        for _ in range(self.unit_pixels):
            word = (word << self.bpp) | raw
        return word.to_bytes(self.unit_bytes, "big")

    def __repr__(self):
        return f"PixelFormat({self.name}, bpp={self.bpp})"


FORMATS = {
    ColorMode.ONE_BPP: PixelFormat(
        ColorMode.ONE_BPP, _PageLayout(), _mono_encode, _mono_decode, 0x1),
    ColorMode.ONE_BPP_V: PixelFormat(
        ColorMode.ONE_BPP_V, _LinearLayout(1), _mono_encode, _mono_decode, 0x1),
    ColorMode.GRAY_2BPP: PixelFormat(
        ColorMode.GRAY_2BPP, _LinearLayout(2), *_gray_codec(2), 0x3),
    ColorMode.GRAY_4BPP: PixelFormat(
        ColorMode.GRAY_4BPP, _LinearLayout(4), *_gray_codec(4), 0xF),
    ColorMode.GRAY_8BPP: PixelFormat(
        ColorMode.GRAY_8BPP, _LinearLayout(8), *_gray_codec(8), 0xFF),
    ColorMode.INDEXED_2BPP: PixelFormat(
        ColorMode.INDEXED_2BPP, _LinearLayout(2), _indexed_encode, _indexed_decode,
        None, palette_size=4),
    ColorMode.INDEXED_4BPP: PixelFormat(
        ColorMode.INDEXED_4BPP, _LinearLayout(4), _indexed_encode, _indexed_decode,
        None, palette_size=16),
    ColorMode.RGB332: PixelFormat(
        ColorMode.RGB332, _LinearLayout(8), *_rgb_codec(3, 3, 2), 0xFF),
    ColorMode.RGB444: PixelFormat(
        ColorMode.RGB444, _Rgb444Layout(), *_rgb_codec(4, 4, 4), 0xFFF),
    ColorMode.RGB565: PixelFormat(
        ColorMode.RGB565, _WordLayout(2), *_rgb_codec(5, 6, 5), 0xFFFF),
    ColorMode.RGB666: PixelFormat(
        ColorMode.RGB666, _WordLayout(3), _rgb666_encode, _rgb888_decode, _RGB666_MASK),
    ColorMode.RGB888: PixelFormat(
        ColorMode.RGB888, _WordLayout(3), _rgb888_encode, _rgb888_decode, 0xFFFFFF),
    ColorMode.RGBA8888: PixelFormat(
        ColorMode.RGBA8888, _WordLayout(4), _rgba8888_encode, _rgba8888_decode,
        _RGBA_COLOR_MASK),
}


def get_format(mode: int) -> PixelFormat:
    """Look up the descriptor for a tag."""
    try:
        return FORMATS[mode]
    except KeyError:
        raise UnsupportedOperationError(f"Unknown color mode: {mode!r}") from None
