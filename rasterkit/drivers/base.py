"""
DisplayDriver - Base for Display Drivers
========================================
Defines the interface the GraphicsEngine expects from a display.

A driver either exposes a `pixel_buffer` the engine draws into, or
leaves it None and accepts per-pixel `draw_pixel`/`invert_pixel` calls.

Note: Using duck typing instead of ABC; any object with these members works.
"""

from ..color import Color


class DisplayDriver:
    """
    Base class for display drivers.

    Subclasses must implement all methods that raise NotImplementedError.

    Properties:
        width: Physical display width in pixels
        height: Physical display height in pixels
        color_mode: ColorMode of the display's native buffer
        pixel_buffer: PixelBuffer drawn into, or None for passthrough
    """

    # Subclasses must define these
    width: int = 0
    height: int = 0
    color_mode: int = 0

    @property
    def pixel_buffer(self):
        return None

    def show(self, left: int | None = None, top: int | None = None,
             right: int | None = None, bottom: int | None = None) -> None:
        """
        Push the buffer to the panel.

        With no arguments the whole buffer is sent; otherwise only the
        region bounded by left/top/right/bottom.
        """
        raise NotImplementedError

    def set_pen_color(self, color: Color) -> None:
        """Color used by draw_pixel when none is passed."""
        raise NotImplementedError

    def draw_pixel(self, x: int, y: int, color: Color | None = None) -> None:
        raise NotImplementedError

    def invert_pixel(self, x: int, y: int) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        """Clear the display buffer to zero."""
        raise NotImplementedError
