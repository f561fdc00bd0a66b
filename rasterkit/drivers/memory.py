"""
MemoryDisplay - In-memory Display
=================================
A DisplayDriver with no hardware behind it. Owns a PixelBuffer and keeps
an immutable Frame for every show() call, for previews and tests.
"""

import logging

from ..buffer.factory import create
from ..buffer.palette import IndexedPalette
from ..buffer.pixelbuffer import PixelBuffer
from ..color import Color
from .base import DisplayDriver

logger = logging.getLogger(__name__)

DEFAULT_MAX_FRAMES = 32


class Frame:
    """Bytes pushed by one show() call, plus the region if one was given."""

    __slots__ = ("data", "width", "height", "color_mode", "region")

    def __init__(self, data: bytes, width: int, height: int, color_mode: int,
                 region: tuple[int, int, int, int] | None = None):
        self.data = data
        self.width = width
        self.height = height
        self.color_mode = color_mode
        self.region = region

    @property
    def is_partial(self) -> bool:
        return self.region is not None

    def to_buffer(self, palette: IndexedPalette | None = None) -> PixelBuffer:
        """Decode the frame back into a fresh PixelBuffer."""
        return create(self.color_mode, self.width, self.height,
                      bytearray(self.data), palette=palette)

    def __repr__(self):
        return f"Frame({self.width}x{self.height}, region={self.region})"


class MemoryDisplay(DisplayDriver):
    """
    Display backed only by memory.

    Args:
        width: Width in pixels
        height: Height in pixels
        color_mode: ColorMode for the owned buffer
        palette: Palette for indexed modes
        max_frames: Oldest frames are dropped past this count; 0 keeps
            every frame, which grows without bound on a long-running display
    """

    def __init__(self, width: int, height: int, color_mode: int,
                 palette: IndexedPalette | None = None, max_frames: int = DEFAULT_MAX_FRAMES):
        self._buffer = create(color_mode, width, height, palette=palette)
        self.width = width
        self.height = height
        self.color_mode = color_mode
        self._pen = Color.WHITE
        self._max_frames = max_frames
        self.frames: list[Frame] = []

    @property
    def pixel_buffer(self) -> PixelBuffer:
        return self._buffer

    @property
    def pen_color(self) -> Color:
        return self._pen

    @property
    def last_frame(self) -> Frame | None:
        return self.frames[-1] if self.frames else None

    def show(self, left: int | None = None, top: int | None = None,
             right: int | None = None, bottom: int | None = None) -> None:
        bounds = (left, top, right, bottom)
        if all(v is None for v in bounds):
            region = None
        elif any(v is None for v in bounds):
            raise ValueError("Region show needs left, top, right and bottom")
        else:
            region = bounds

        frame = Frame(bytes(self._buffer.buffer), self.width, self.height,
                      self.color_mode, region)
        self.frames.append(frame)
        if self._max_frames and len(self.frames) > self._max_frames:
            del self.frames[0]
        logger.debug("show %r (%d frames)", frame, len(self.frames))

    def set_pen_color(self, color: Color) -> None:
        self._pen = color

    def draw_pixel(self, x: int, y: int, color: Color | None = None) -> None:
        self._buffer.set_pixel(x, y, self._pen if color is None else color)

    def invert_pixel(self, x: int, y: int) -> None:
        self._buffer.invert_pixel(x, y)

    def clear(self) -> None:
        self._buffer.clear()
