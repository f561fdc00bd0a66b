"""
Buffer Transforms - Rotate, Scale, Convert, Resize
==================================================
Format-agnostic operations that return a new PixelBuffer. rotate, scale_up
and resize keep the encoding and move raw stored values; convert goes pixel
by pixel with Color as the intermediate.
"""

import logging

from .factory import create, create_like
from .palette import IndexedPalette
from .pixelbuffer import PixelBuffer

logger = logging.getLogger(__name__)

_ANGLES = (0, 90, 180, 270)


def _lookup_tables(angle: int, w: int, h: int) -> tuple[list, list]:
    """
    Source-to-destination column and row tables for one angle.

    For 90/270 the column table yields the destination row and the row
    table the destination column (axes swap).
    """
    if angle == 90:
        return list(range(w)), [h - 1 - y for y in range(h)]
    if angle == 180:
        return [w - 1 - x for x in range(w)], [h - 1 - y for y in range(h)]
    return [w - 1 - x for x in range(w)], list(range(h))


def rotate(buffer: PixelBuffer, angle: int) -> PixelBuffer:
    """
    Rotate clockwise by 0, 90, 180 or 270 degrees.

    Raises:
        ValueError: Any other angle
    """
    if angle not in _ANGLES:
        raise ValueError(f"rotation must be one of {_ANGLES}, got {angle}")
    if angle == 0:
        return buffer.clone()

    w, h = buffer.width, buffer.height
    cols, rows = _lookup_tables(angle, w, h)
    get, swap = buffer.get_raw, angle != 180

    if swap:
        out = create_like(buffer, h, w)
        put = out.set_raw
        for y in range(h):
            ny = rows[y]
            for x in range(w):
                # 90: (H-1-y, x)   270: (y, W-1-x)
                put(ny, cols[x], get(x, y))
    else:
        out = create_like(buffer, w, h)
        put = out.set_raw
        for y in range(h):
            ny = rows[y]
            for x in range(w):
                put(cols[x], ny, get(x, y))
    return out


def scale_up(buffer: PixelBuffer, factor: int) -> PixelBuffer:
    """
    Nearest-neighbor enlargement by an integer factor.

    Raises:
        ValueError: factor < 1
    """
    if factor < 1:
        raise ValueError(f"scale factor must be >= 1, got {factor}")
    if factor == 1:
        return buffer.clone()

    out = create_like(buffer, buffer.width * factor, buffer.height * factor)
    for y in range(buffer.height):
        for x in range(buffer.width):
            out.fill_rect_raw(x * factor, y * factor, factor, factor, buffer.get_raw(x, y))
    return out


def convert(buffer: PixelBuffer, color_mode: int,
            palette: IndexedPalette | None = None) -> PixelBuffer:
    """
    Re-encode into another color mode.

    Args:
        buffer: Source buffer
        color_mode: Target ColorMode
        palette: Palette for an indexed target

    Raises:
        UnsupportedOperationError: Indexed target without a usable palette
    """
    if color_mode == buffer.color_mode and palette is None:
        return buffer.clone()

    out = create(color_mode, buffer.width, buffer.height, palette=palette)
    logger.debug("Converting %s -> %s", buffer, out)
    for y in range(buffer.height):
        for x in range(buffer.width):
            out.set_pixel(x, y, buffer.get_pixel(x, y))
    return out


def resize(buffer: PixelBuffer, width: int, height: int) -> PixelBuffer:
    """Nearest-neighbor resample to an arbitrary size."""
    out = create_like(buffer, width, height)
    src_w, src_h = buffer.width, buffer.height
    xs = [int(i * src_w / width) for i in range(width)]
    for j in range(height):
        sy = int(j * src_h / height)
        for i in range(width):
            out.set_raw(i, j, buffer.get_raw(xs[i], sy))
    return out
