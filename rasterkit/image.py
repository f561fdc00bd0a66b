"""
Image Bridge - Pillow Images to PixelBuffers and Back
=====================================================
Picks the buffer encoding from the image's bit depth:

    "1"              -> ONE_BPP
    "P" (<=16 colors) -> INDEXED_4BPP, palette copied from the image
    "L", larger "P"  -> RGB332
    "RGB"            -> RGB888
    "RGBA"           -> RGBA8888

Any other mode is converted to RGB first. File decoding is Pillow's job.
"""

import logging

from PIL import Image

from .buffer.factory import create
from .buffer.formats import ColorMode
from .buffer.palette import IndexedPalette
from .buffer.pixelbuffer import PixelBuffer
from .color import Color

logger = logging.getLogger(__name__)

_INDEXED_MAX_COLORS = 16


def from_image(image: Image.Image) -> PixelBuffer:
    """Build a PixelBuffer from a Pillow image."""
    w, h = image.size
    mode = image.mode

    if mode == "RGB":
        return create(ColorMode.RGB888, w, h, bytearray(image.tobytes()))
    if mode == "RGBA":
        return create(ColorMode.RGBA8888, w, h, bytearray(image.tobytes()))

    if mode == "1":
        buf = create(ColorMode.ONE_BPP, w, h)
        for i, v in enumerate(image.convert("L").tobytes()):
            if v: buf.set_pixel(i % w, i // w, Color.WHITE)
        return buf

    if mode == "P":
        indices = image.tobytes()
        used = max(indices) + 1 if indices else 0
        if used <= _INDEXED_MAX_COLORS:
            flat = image.getpalette() or []
            colors = [Color(*flat[i * 3:i * 3 + 3]) for i in range(min(used, len(flat) // 3))]
            palette = IndexedPalette(_INDEXED_MAX_COLORS, colors)
            buf = create(ColorMode.INDEXED_4BPP, w, h, palette=palette)
            for i, idx in enumerate(indices): buf.set_raw(i % w, i // w, idx)
            return buf
        return _to_rgb332(image.convert("RGB"))

    if mode == "L":
        return _to_rgb332(image)

    logger.debug("Converting %s image to RGB", mode)
    return from_image(image.convert("RGB"))


def _to_rgb332(image: Image.Image) -> PixelBuffer:
    """8-bit target for gray and many-color palette images."""
    w, h = image.size
    buf = create(ColorMode.RGB332, w, h)
    data = image.tobytes()
    if image.mode == "L":
        colors = (Color(v, v, v) for v in data)
    else:
        colors = (Color(data[i], data[i + 1], data[i + 2]) for i in range(0, len(data), 3))
    for i, c in enumerate(colors): buf.set_pixel(i % w, i // w, c)
    return buf


def load_image(path) -> PixelBuffer:
    """Open an image file with Pillow and convert it."""
    with Image.open(path) as img:
        img.load()
        logger.debug("Loaded %s (%s %dx%d)", path, img.mode, *img.size)
        return from_image(img)


def to_image(buffer: PixelBuffer) -> Image.Image:
    """RGBA preview of any buffer."""
    size = (buffer.width, buffer.height)
    if buffer.color_mode == ColorMode.RGBA8888:
        return Image.frombytes("RGBA", size, bytes(buffer.buffer))

    img = Image.new("RGBA", size)
    img.putdata([tuple(buffer.get_pixel(x, y))
                 for y in range(buffer.height) for x in range(buffer.width)])
    return img
