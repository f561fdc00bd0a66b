"""
GraphicsEngine - Stateful Drawing Interface
===========================================
Rasterizer plus drawing state, text, bitmaps and buffer composition.

This is the primary entry point. It provides:
- All drawing primitives (shapes, lines, gradients)
- Font selection and text with alignment and scaling
- 1-bit bitmap drawing in OR/AND/XOR/COPY modes
- Drawing one PixelBuffer into another through the rotation
- A single saved snapshot of font, stroke, rotation and pen color

Usage:
    from rasterkit import GraphicsEngine, MemoryDisplay, ColorMode

    display = MemoryDisplay(128, 64, ColorMode.ONE_BPP)
    gfx = GraphicsEngine(display)
    gfx.font = my_font
    gfx.draw_text(0, 0, "Hello!")
    gfx.show()
"""

import logging

from .buffer.pixelbuffer import PixelBuffer
from .color import Color
from .draw import Rasterizer
from .errors import ConstructionError, UnsupportedOperationError
from .text.packing import pack_text

logger = logging.getLogger(__name__)

__all__ = ["GraphicsEngine", "GraphicsState", "BitmapMode", "Alignment"]


class BitmapMode:
    """How set and clear bitmap bits combine with existing pixels."""
    AND = 0   # Clear bits paint the background, set bits keep the pixel
    OR = 1    # Set bits paint the color, clear bits keep the pixel
    XOR = 2   # Set bits invert the pixel
    COPY = 3  # Set bits paint the color, clear bits the background

    _names = {0: "AND", 1: "OR", 2: "XOR", 3: "COPY"}

    @classmethod
    def name(cls, mode: int) -> str:
        return cls._names.get(mode, f"UNKNOWN({mode})")


class Alignment:
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class GraphicsState:
    """Snapshot of the engine's drawing state."""

    __slots__ = ("font", "stroke", "rotation", "pen_color")

    def __init__(self, font, stroke: int, rotation: int, pen_color: Color):
        self.font = font
        self.stroke = stroke
        self.rotation = rotation
        self.pen_color = pen_color

    def __eq__(self, other):
        if not isinstance(other, GraphicsState):
            return NotImplemented
        return (self.font is other.font and self.stroke == other.stroke
                and self.rotation == other.rotation and self.pen_color == other.pen_color)

    def __repr__(self):
        return (f"GraphicsState(font={self.font!r}, stroke={self.stroke}, "
                f"rotation={self.rotation}, pen_color={self.pen_color!r})")


class GraphicsEngine(Rasterizer):
    """
    Stateful 2-D drawing engine.

    Args:
        target: PixelBuffer or display driver
        clip: Skip and clamp drawing outside the logical area instead of
            letting the buffer raise RangeError
        font: Initial font (None until assigned)
        rotation: 0, 90, 180 or 270
        stroke: Line width (>= 1)
        pen_color: Default drawing color
    """

    def __init__(self, target, clip: bool = False, font=None, rotation: int = 0,
                 stroke: int = 1, pen_color: Color = Color.WHITE):
        super().__init__(target, clip=clip, rotation=rotation,
                         stroke=stroke, pen_color=pen_color)
        self.font = font
        self._saved: GraphicsState | None = None

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> GraphicsState:
        return GraphicsState(self.font, self._stroke, self._rotation, self._pen_color)

    @property
    def has_saved_state(self) -> bool:
        return self._saved is not None

    def save_state(self) -> None:
        """Store the current state, replacing any earlier snapshot."""
        self._saved = self.state
        logger.debug("Saved %r", self._saved)

    def restore_state(self) -> None:
        """
        Re-apply the saved snapshot. The snapshot is kept.

        Raises:
            UnsupportedOperationError: Nothing was saved
        """
        if self._saved is None:
            raise UnsupportedOperationError("No saved graphics state to restore")
        s = self._saved
        self.font = s.font
        self.stroke = s.stroke
        self.rotation = s.rotation
        self.pen_color = s.pen_color
        logger.debug("Restored %r", s)

    def _require_font(self):
        if self.font is None:
            raise UnsupportedOperationError("No font set")
        return self.font

    # =========================================================================
    # Bitmaps
    # =========================================================================

    def draw_bitmap(self, x: int, y: int, width: int, height: int, bitmap,
                    mode: int = BitmapMode.OR, color: Color | None = None,
                    background: Color = Color.BLACK, scale: int = 1,
                    draw_width: int | None = None) -> None:
        """
        Draw a 1-bit bitmap, LSB first within each byte.

        Args:
            x, y: Top-left in logical coordinates
            width: Width in pixels, a multiple of 8
            height: Height in pixels
            bitmap: width // 8 * height bytes
            mode: BitmapMode
            color: Color for set bits (pen color if None)
            background: Color for clear bits in AND/COPY modes
            scale: Each bit becomes a scale x scale block
            draw_width: Only the first draw_width columns are drawn
                (all of them if None)

        Raises:
            ValueError: width not a multiple of 8, scale < 1, unknown mode
            ConstructionError: bitmap length does not match
        """
        if width % 8:
            raise ValueError(f"bitmap width must be a multiple of 8, got {width}")
        if scale < 1:
            raise ValueError(f"scale must be >= 1, got {scale}")
        if mode not in BitmapMode._names:
            raise ValueError(f"Unknown bitmap mode {mode!r}")
        row_bytes = width // 8
        if len(bitmap) != row_bytes * height:
            raise ConstructionError(
                f"{width}x{height} bitmap needs {row_bytes * height} bytes, got {len(bitmap)}")
        color = self._color(color)
        cols = width if draw_width is None else max(0, min(draw_width, width))

        for row in range(height):
            off = row * row_bytes
            by = y + row * scale
            for col in range(cols):
                bit = bitmap[off + (col >> 3)] & (1 << (col & 7))
                bx = x + col * scale

                if mode == BitmapMode.OR:
                    if bit: self._block(bx, by, scale, color)
                elif mode == BitmapMode.AND:
                    if not bit: self._block(bx, by, scale, background)
                elif mode == BitmapMode.XOR:
                    if bit: self._invert_block(bx, by, scale)
                else:
                    self._block(bx, by, scale, color if bit else background)

    def _block(self, x: int, y: int, scale: int, color: Color) -> None:
        if scale == 1: self._plot(x, y, color)
        else: self._fill(x, y, scale, scale, color)

    def _invert_block(self, x: int, y: int, scale: int) -> None:
        for row in range(y, y + scale):
            for col in range(x, x + scale): self._invert(col, row)

    # =========================================================================
    # Text
    # =========================================================================

    def measure_text(self, text: str, scale: int = 1) -> tuple[int, int]:
        """(width, height) in pixels for `text` in the current font."""
        font = self._require_font()
        return len(text) * font.width * scale, font.height * scale

    def draw_text(self, x: int, y: int, text: str, color: Color | None = None,
                  scale: int = 1, alignment: str = Alignment.LEFT,
                  mode: int = BitmapMode.OR) -> None:
        """
        Draw a string in the current font.

        Raises:
            UnsupportedOperationError: No font set
        """
        font = self._require_font()
        if not text: return

        text_w, _ = self.measure_text(text, scale)
        if alignment == Alignment.CENTER: x -= text_w // 2
        elif alignment == Alignment.RIGHT: x -= text_w

        # Packing pads to a whole byte group; the padding is never drawn
        bitmap, width_px, height = pack_text(text, font)
        self.draw_bitmap(x, y, width_px, height, bitmap, mode, color, scale=scale,
                         draw_width=len(text) * font.width)

    # =========================================================================
    # Buffers
    # =========================================================================

    def draw_buffer(self, x: int, y: int, buffer: PixelBuffer,
                    alignment: str = Alignment.LEFT) -> None:
        """Draw another buffer with its top-left (or aligned edge) at (x, y)."""
        if alignment == Alignment.CENTER: x -= buffer.width // 2
        elif alignment == Alignment.RIGHT: x -= buffer.width

        target = self._buffer
        if (target is not None and self._rotation == 0
                and x >= 0 and y >= 0
                and x + buffer.width <= target.width and y + buffer.height <= target.height):
            target.blit(x, y, buffer)
            return

        for row in range(buffer.height):
            for col in range(buffer.width):
                self._plot(x + col, y + row, buffer.get_pixel(col, row))

    def draw_buffer_with_transparency(self, x: int, y: int, buffer: PixelBuffer,
                                      transparent: Color) -> None:
        """Like draw_buffer, skipping pixels equal to `transparent`."""
        for row in range(buffer.height):
            for col in range(buffer.width):
                c = buffer.get_pixel(col, row)
                if c != transparent: self._plot(x + col, y + row, c)

    # =========================================================================
    # Display
    # =========================================================================

    def clear(self, color: Color | None = None) -> None:
        """Zero the target, or fill it with `color`."""
        if self._buffer is not None:
            if color is None: self._buffer.clear()
            else: self._buffer.fill(color)
        elif color is None:
            self._display.clear()
        else:
            draw = self._display.draw_pixel
            for py in range(self._phys_h):
                for px in range(self._phys_w): draw(px, py, color)

    def show(self, left: int | None = None, top: int | None = None,
             right: int | None = None, bottom: int | None = None) -> None:
        """Push to the display; a no-op when drawing into a bare buffer."""
        if self._display is None: return
        self._display.show(left, top, right, bottom)
