"""
PixelBuffer - Packed Pixel Storage for Every Color Mode
=======================================================
One class covers all encodings. The ColorMode tag picks a PixelFormat
descriptor, and the descriptor supplies byte counts, bit positions and
the Color <-> raw codec.

Supports:
- Per-pixel get/set/invert with bounds checking
- fill via doubling slice copies
- fill_rect with whole-byte fast paths
- blit with a raw row-copy fast path and a per-pixel fallback
"""

import logging

from ..color import Color
from ..errors import ConstructionError, RangeError, UnsupportedOperationError
from .formats import get_format
from .palette import IndexedPalette

logger = logging.getLogger(__name__)

# =============================================================================
# Bit Manipulation Constants
# =============================================================================

_BITS_PER_BYTE = 8
_BYTE_MASK = 0xFF


class PixelBuffer:
    """
    Fixed-size pixel buffer with an immutable color mode.

    Args:
        width: Width in pixels (>= 1)
        height: Height in pixels (>= 1)
        color_mode: ColorMode tag
        data: Optional existing bytes; a bytearray is adopted, anything
            else is copied. Length must equal the mode's byte count.
        palette: Palette for indexed modes (a fresh, empty one if omitted)
    """

    def __init__(self, width: int, height: int, color_mode: int,
                 data=None, palette: IndexedPalette | None = None):
        if width < 1 or height < 1:
            raise ConstructionError(f"Invalid dimensions {width}x{height}")

        self._fmt = get_format(color_mode)
        self._width = width
        self._height = height
        self._byte_count = self._fmt.byte_count(width, height)

        if data is None:
            self._buffer = bytearray(self._byte_count)
        else:
            if not isinstance(data, bytearray): data = bytearray(data)
            if len(data) != self._byte_count:
                raise ConstructionError(
                    f"{self._fmt.name} {width}x{height} needs {self._byte_count} bytes, got {len(data)}")
            self._buffer = data

        if self._fmt.is_indexed:
            if palette is None:
                palette = IndexedPalette(self._fmt.palette_size)
            elif len(palette) != self._fmt.palette_size:
                raise ConstructionError(
                    f"{self._fmt.name} needs a {self._fmt.palette_size}-entry palette, got {len(palette)}")
        elif palette is not None:
            raise ConstructionError(f"{self._fmt.name} does not use a palette")
        self._palette = palette

        # Bound once; every pixel op goes through these
        self._read = self._fmt.layout.read
        self._write = self._fmt.layout.write

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def width(self) -> int: return self._width

    @property
    def height(self) -> int: return self._height

    @property
    def color_mode(self) -> int: return self._fmt.mode

    @property
    def pixel_format(self): return self._fmt

    @property
    def buffer(self) -> bytearray: return self._buffer

    @property
    def byte_count(self) -> int: return self._byte_count

    @property
    def bit_depth(self) -> int: return self._fmt.bpp

    @property
    def palette(self) -> IndexedPalette | None: return self._palette

    def __repr__(self):
        return f"PixelBuffer({self._width}x{self._height}, {self._fmt.name})"

    # =========================================================================
    # Pixel Ops
    # =========================================================================

    def _check_point(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise RangeError(f"Pixel ({x}, {y}) outside {self._width}x{self._height}")

    def encode(self, color: Color) -> int:
        """Raw stored value for `color` in this buffer's encoding."""
        return self._fmt.encode(color, self._palette)

    def get_pixel(self, x: int, y: int) -> Color:
        self._check_point(x, y)
        return self._fmt.decode(self._read(self._buffer, self._width, x, y), self._palette)

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        self._check_point(x, y)
        self._write(self._buffer, self._width, x, y, self._fmt.encode(color, self._palette))

    def get_raw(self, x: int, y: int) -> int:
        self._check_point(x, y)
        return self._read(self._buffer, self._width, x, y)

    def set_raw(self, x: int, y: int, raw: int) -> None:
        self._check_point(x, y)
        self._write(self._buffer, self._width, x, y, raw)

    def invert_pixel(self, x: int, y: int) -> None:
        """Complement the stored value. Not defined for indexed modes."""
        mask = self._fmt.invert_mask
        if mask is None:
            raise UnsupportedOperationError(f"Cannot invert {self._fmt.name} pixels")
        self._check_point(x, y)
        buf, w = self._buffer, self._width
        self._write(buf, w, x, y, self._read(buf, w, x, y) ^ mask)

    # =========================================================================
    # Buffer Ops
    # =========================================================================

    def clear(self) -> None:
        """Zero every byte."""
        self._buffer[:] = bytes(self._byte_count)

    def fill(self, color: Color) -> None:
        """Set every pixel: write one repeating unit, then double it out."""
        unit = self._fmt.fill_unit(self.encode(color))
        buf = self._buffer
        total = self._byte_count

        filled = min(len(unit), total)
        buf[0:filled] = unit[:filled]
        while filled * 2 <= total:
            buf[filled:filled * 2] = buf[0:filled]
            filled *= 2
        if filled < total:
            buf[filled:total] = buf[0:total - filled]

    def invert(self) -> None:
        """Complement every pixel in place."""
        mask = self._fmt.invert_mask
        if mask is None:
            raise UnsupportedOperationError(f"Cannot invert {self._fmt.name} pixels")
        pattern = self._fmt.fill_unit(mask)
        n = len(pattern)
        buf = self._buffer
        for i in range(self._byte_count): buf[i] ^= pattern[i % n]

    def fill_rect(self, x: int, y: int, w: int, h: int, color: Color) -> None:
        """
        Fill a rectangle that must lie fully inside the buffer.

        Raises:
            RangeError: Any part of the rectangle is out of bounds. Nothing
                is written in that case.
        """
        self._check_rect(x, y, w, h)
        if w == 0 or h == 0: return
        self._fill_rect(x, y, w, h, self.encode(color))

    def fill_rect_raw(self, x: int, y: int, w: int, h: int, raw: int) -> None:
        """fill_rect with an already-encoded value (no palette lookup)."""
        self._check_rect(x, y, w, h)
        if w == 0 or h == 0: return
        self._fill_rect(x, y, w, h, raw)

    def _check_rect(self, x: int, y: int, w: int, h: int) -> None:
        if x < 0 or y < 0 or w < 0 or h < 0 or x + w > self._width or y + h > self._height:
            raise RangeError(f"Rect ({x}, {y}, {w}, {h}) outside {self._width}x{self._height}")

    def _fill_rect(self, x: int, y: int, w: int, h: int, raw: int) -> None:
        if self._fmt.page_packed:
            self._fill_rect_pages(x, y, w, h, raw)
            return

        bpp = self._fmt.bpp
        unit = self._fmt.fill_unit(raw)
        width = self._width

        # Full-width rows are one contiguous run of bits
        if w == width:
            self._fill_span(y * width * bpp, (y + h) * width * bpp, unit)
            return

        start = (y * width + x) * bpp
        self._fill_span(start, start + w * bpp, unit)

        if bpp % _BITS_PER_BYTE == 0:
            # Whole-byte pixels: replicate the first row
            buf = self._buffer
            src = start >> 3
            row_len = (w * bpp) >> 3
            for row in range(1, h):
                dst = ((y + row) * width + x) * bpp >> 3
                buf[dst:dst + row_len] = buf[src:src + row_len]
        else:
            for row in range(1, h):
                s = ((y + row) * width + x) * bpp
                self._fill_span(s, s + w * bpp, unit)

    def _fill_span(self, start_bit: int, end_bit: int, unit: bytes) -> None:
        """Fill bits [start_bit, end_bit) with the repeating byte pattern `unit`."""
        buf = self._buffer
        n = len(unit)
        b0, bit0 = start_bit >> 3, start_bit & 7
        b1, bit1 = (end_bit - 1) >> 3, (end_bit - 1) & 7

        if b0 == b1:
            mask = (_BYTE_MASK >> bit0) & (_BYTE_MASK << (7 - bit1)) & _BYTE_MASK
            buf[b0] = (buf[b0] & ~mask & _BYTE_MASK) | (unit[b0 % n] & mask)
            return

        start_mask = _BYTE_MASK >> bit0
        buf[b0] = (buf[b0] & ~start_mask & _BYTE_MASK) | (unit[b0 % n] & start_mask)

        count = b1 - b0 - 1
        if count > 0:
            off = (b0 + 1) % n
            run = unit * ((count + off) // n + 1)
            buf[b0 + 1:b1] = run[off:off + count]

        end_mask = (_BYTE_MASK << (7 - bit1)) & _BYTE_MASK
        buf[b1] = (buf[b1] & ~end_mask & _BYTE_MASK) | (unit[b1 % n] & end_mask)

    def _fill_rect_pages(self, x: int, y: int, w: int, h: int, raw: int) -> None:
        buf = self._buffer
        width = self._width
        fill = b'\xff' if raw else b'\x00'
        end = y + h

        for page in range(y >> 3, ((end - 1) >> 3) + 1):
            lo = max(y, page << 3) - (page << 3)
            hi = min(end, (page + 1) << 3) - (page << 3)
            mask = ((1 << (hi - lo)) - 1) << lo
            base = page * width + x
            if mask == _BYTE_MASK:
                buf[base:base + w] = fill * w
            elif raw:
                for i in range(base, base + w): buf[i] |= mask
            else:
                inv = ~mask & _BYTE_MASK
                for i in range(base, base + w): buf[i] &= inv

    # =========================================================================
    # Blit
    # =========================================================================

    def blit(self, x: int, y: int, source: "PixelBuffer") -> None:
        """
        Copy `source` into this buffer with its top-left at (x, y).

        Same-mode, aligned copies move raw bytes row by row; anything else
        goes pixel by pixel through Color.

        Raises:
            RangeError: Source does not fit at (x, y)
        """
        sw, sh = source.width, source.height
        if x < 0 or y < 0 or x + sw > self._width or y + sh > self._height:
            raise RangeError(
                f"{sw}x{sh} source at ({x}, {y}) does not fit {self._width}x{self._height}")

        if self._can_fast_blit(x, y, source):
            self._blit_bytes(x, y, source)
            return

        logger.debug("Slow blit %s -> %s at (%d, %d)", source, self, x, y)
        for row in range(sh):
            for col in range(sw):
                self.set_pixel(x + col, y + row, source.get_pixel(col, row))

    def _can_fast_blit(self, x: int, y: int, source: "PixelBuffer") -> bool:
        fmt = self._fmt
        if source.color_mode != fmt.mode: return False
        if fmt.is_indexed and source.palette != self._palette: return False
        if fmt.page_packed:
            return y % _BITS_PER_BYTE == 0 and source.height % _BITS_PER_BYTE == 0
        align = fmt.align
        return x % align == 0 and source.width % align == 0 and self._width % align == 0

    def _blit_bytes(self, x: int, y: int, source: "PixelBuffer") -> None:
        dst_buf = self._buffer
        src_buf = source.buffer
        sw, sh = source.width, source.height

        if self._fmt.page_packed:
            page0 = y >> 3
            for page in range(sh >> 3):
                src = page * sw
                dst = (page0 + page) * self._width + x
                dst_buf[dst:dst + sw] = src_buf[src:src + sw]
            return

        bpp = self._fmt.bpp
        row_len = (sw * bpp) >> 3
        for row in range(sh):
            src = (row * sw * bpp) >> 3
            dst = (((y + row) * self._width + x) * bpp) >> 3
            dst_buf[dst:dst + row_len] = src_buf[src:src + row_len]

    # =========================================================================
    # Copies
    # =========================================================================

    def clone(self) -> "PixelBuffer":
        """Exact byte copy, with a copy of the palette for indexed modes."""
        palette = self._palette.copy() if self._palette is not None else None
        return PixelBuffer(self._width, self._height, self._fmt.mode,
                           bytearray(self._buffer), palette)
