"""
Rasterizer - Shape Drawing Primitives
=====================================
Draws lines, rectangles, circles, triangles and gradients in logical
(rotated) coordinates onto a PixelBuffer or a display.

Every write goes through the rotation mapping, then either the target
buffer's set_pixel/fill_rect or the display's draw_pixel passthrough.
Bounds are left to the buffer unless clipping is enabled.
"""

import math

from .buffer.pixelbuffer import PixelBuffer
from .color import Color

_TAU = 2 * math.pi

# =============================================================================
# Rotation Table (swap axes, mirror x, mirror y)
# =============================================================================

_ROTATION = {
    0: (False, False, False),
    90: (True, True, False),
    180: (False, True, True),
    270: (True, False, True),
}


def _tdiv(a: int, b: int) -> int:
    """Integer division truncated toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


class Rasterizer:
    """
    Shape drawing in logical coordinates.

    Args:
        target: PixelBuffer, or a display driver (drawn through its
            pixel_buffer when it has one, else via draw_pixel)
        clip: Skip pixels and clamp rectangles outside the logical area
        rotation: 0, 90, 180 or 270
        stroke: Line width in pixels (>= 1)
        pen_color: Color used when a draw call passes no color
    """

    def __init__(self, target, clip: bool = False, rotation: int = 0,
                 stroke: int = 1, pen_color: Color = Color.WHITE):
        if isinstance(target, PixelBuffer):
            self._display = None
            self._buffer = target
        else:
            self._display = target
            self._buffer = getattr(target, "pixel_buffer", None)

        src = self._buffer if self._buffer is not None else target
        self._phys_w = src.width
        self._phys_h = src.height

        self.clip = clip
        self._rot_props = _ROTATION[0]
        self._rotation = 0
        self.rotation = rotation
        self._stroke = 1
        self.stroke = stroke
        self.pen_color = pen_color

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def target_buffer(self) -> PixelBuffer | None: return self._buffer

    @property
    def display(self): return self._display

    @property
    def rotation(self) -> int: return self._rotation

    @rotation.setter
    def rotation(self, value: int):
        if value not in _ROTATION:
            raise ValueError(f"rotation must be 0, 90, 180 or 270, got {value}")
        self._rotation = value
        self._rot_props = _ROTATION[value]

    @property
    def stroke(self) -> int: return self._stroke

    @stroke.setter
    def stroke(self, value: int):
        if value < 1:
            raise ValueError(f"stroke must be >= 1, got {value}")
        self._stroke = value

    @property
    def pen_color(self) -> Color: return self._pen_color

    @pen_color.setter
    def pen_color(self, color: Color):
        self._pen_color = color
        if self._display is not None: self._display.set_pen_color(color)

    @property
    def width(self) -> int:
        """Logical width (physical height when rotated 90/270)."""
        return self._phys_h if self._rot_props[0] else self._phys_w

    @property
    def height(self) -> int:
        return self._phys_w if self._rot_props[0] else self._phys_h

    # =========================================================================
    # Coordinate Transformation & Pixel Ops
    # =========================================================================

    def _transform(self, x: int, y: int) -> tuple[int, int]:
        is_swapped, x_flip, y_flip = self._rot_props
        if is_swapped: x, y = y, x
        if x_flip: x = self._phys_w - 1 - x
        if y_flip: y = self._phys_h - 1 - y
        return x, y

    def transform_region(self, x: int, y: int, w: int, h: int) -> tuple[int, int, int, int]:
        is_swapped, x_flip, y_flip = self._rot_props
        if is_swapped: x, y, w, h = y, x, h, w
        if x_flip: x = self._phys_w - x - w
        if y_flip: y = self._phys_h - y - h
        return x, y, w, h

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _color(self, color: Color | None) -> Color:
        return self._pen_color if color is None else color

    def _plot(self, x: int, y: int, color: Color) -> None:
        if self.clip and not self._in_bounds(x, y): return
        px, py = self._transform(x, y)
        if self._buffer is not None: self._buffer.set_pixel(px, py, color)
        else: self._display.draw_pixel(px, py, color)

    def _invert(self, x: int, y: int) -> None:
        if self.clip and not self._in_bounds(x, y): return
        px, py = self._transform(x, y)
        if self._buffer is not None: self._buffer.invert_pixel(px, py)
        else: self._display.invert_pixel(px, py)

    def _fill(self, x: int, y: int, w: int, h: int, color: Color) -> None:
        """Logical rectangle fill; mapped to one physical fill_rect."""
        if w <= 0 or h <= 0: return
        if self.clip:
            if x < 0: w += x; x = 0
            if y < 0: h += y; y = 0
            if x + w > self.width: w = self.width - x
            if y + h > self.height: h = self.height - y
            if w <= 0 or h <= 0: return

        px, py, pw, ph = self.transform_region(x, y, w, h)
        if self._buffer is not None:
            self._buffer.fill_rect(px, py, pw, ph, color)
            return
        draw = self._display.draw_pixel
        for row in range(py, py + ph):
            for col in range(px, px + pw): draw(col, row, color)

    def _hspan(self, x0: int, x1: int, y: int, color: Color) -> None:
        if x0 > x1: x0, x1 = x1, x0
        self._fill(x0, y, x1 - x0 + 1, 1, color)

    # =========================================================================
    # Pixel
    # =========================================================================

    def draw_pixel(self, x: int, y: int, color: Color | None = None) -> None:
        self._plot(x, y, self._color(color))

    def invert_pixel(self, x: int, y: int) -> None:
        self._invert(x, y)

    def invert_rect(self, x: int, y: int, w: int, h: int) -> None:
        for row in range(y, y + h):
            for col in range(x, x + w): self._invert(col, row)

    # =========================================================================
    # Line
    # =========================================================================

    def draw_line(self, x0: int, y0: int, x1: int, y1: int,
                  color: Color | None = None) -> None:
        """
        Draw a line including both endpoints.

        Horizontal and vertical lines become a stroke-thick rectangle
        fill. Other lines are drawn with Bresenham, `stroke` times,
        offset across the major axis.
        """
        color = self._color(color)
        stroke = self._stroke

        if y0 == y1:
            self._fill(min(x0, x1), y0 - stroke // 2, abs(x1 - x0) + 1, stroke, color)
            return
        if x0 == x1:
            self._fill(x0 - stroke // 2, min(y0, y1), stroke, abs(y1 - y0) + 1, color)
            return

        if stroke == 1:
            self._bresenham(x0, y0, x1, y1, color)
            return

        steep = abs(y1 - y0) > abs(x1 - x0)
        for i in range(stroke):
            off = i - stroke // 2
            if steep: self._bresenham(x0 + off, y0, x1 + off, y1, color)
            else: self._bresenham(x0, y0 + off, x1, y1 + off, color)

    def _bresenham(self, x0: int, y0: int, x1: int, y1: int, color: Color) -> None:
        steep = abs(y1 - y0) > abs(x1 - x0)
        if steep:
            x0, y0 = y0, x0
            x1, y1 = y1, x1
        if x0 > x1:
            x0, x1 = x1, x0
            y0, y1 = y1, y0

        dx = x1 - x0
        dy = abs(y1 - y0)
        err = dx // 2
        ystep = 1 if y0 < y1 else -1

        plot = self._plot
        y = y0
        for x in range(x0, x1 + 1):
            if steep: plot(y, x, color)
            else: plot(x, y, color)
            err -= dy
            if err < 0:
                y += ystep
                err += dx

    def draw_line_polar(self, x: int, y: int, length: int, angle: float,
                        color: Color | None = None) -> None:
        """Line from (x, y); angle in radians, counter-clockwise from +x."""
        x1 = x + round(length * math.cos(angle))
        y1 = y - round(length * math.sin(angle))
        self.draw_line(x, y, x1, y1, color)

    def draw_horizontal_line(self, x: int, y: int, length: int,
                             color: Color | None = None) -> None:
        """`length` pixels starting at x; negative extends left."""
        if length == 0: return
        end = x + length - 1 if length > 0 else x + length + 1
        self.draw_line(x, y, end, y, color)

    def draw_vertical_line(self, x: int, y: int, length: int,
                           color: Color | None = None) -> None:
        if length == 0: return
        end = y + length - 1 if length > 0 else y + length + 1
        self.draw_line(x, y, x, end, color)

    # =========================================================================
    # Rectangle
    # =========================================================================

    def draw_rectangle(self, x: int, y: int, w: int, h: int,
                       color: Color | None = None, filled: bool = False) -> None:
        if w < 0: x += w; w = -w
        if h < 0: y += h; h = -h
        if w == 0 or h == 0: return
        color = self._color(color)

        if filled:
            self._fill(x, y, w, h, color)
            return

        right, bottom = x + w - 1, y + h - 1
        self.draw_line(x, y, right, y, color)
        self.draw_line(x, bottom, right, bottom, color)
        self.draw_line(x, y, x, bottom, color)
        self.draw_line(right, y, right, bottom, color)

    # =========================================================================
    # Circle (Midpoint)
    # =========================================================================

    def draw_circle(self, cx: int, cy: int, r: int, color: Color | None = None,
                    filled: bool = False, center_between_pixels: bool = False) -> None:
        """
        Midpoint circle. With center_between_pixels the circle is centred
        on the corner shared by (cx-1, cy-1) and (cx, cy).
        """
        if r < 0:
            raise ValueError(f"radius must be >= 0, got {r}")
        color = self._color(color)
        off = 1 if center_between_pixels else 0
        stroke = self._stroke

        if filled:
            # A thick pen widens the disc by half the stroke
            if stroke > 1: r += stroke >> 1
            self._disc(cx, cy, r, off, color)
            return

        for i in range(stroke):
            radius = r - (stroke - 1) // 2 + i
            if radius < 0: continue
            for x, y in self._midpoint(radius):
                self._plot(cx + x - off, cy + y - off, color)
                self._plot(cx + x - off, cy - y, color)
                self._plot(cx - x, cy + y - off, color)
                self._plot(cx - x, cy - y, color)
                self._plot(cx + y - off, cy + x - off, color)
                self._plot(cx + y - off, cy - x, color)
                self._plot(cx - y, cy + x - off, color)
                self._plot(cx - y, cy - x, color)

    def _disc(self, cx: int, cy: int, r: int, off: int, color: Color) -> None:
        for x, y in self._midpoint(r):
            self._hspan(cx - x, cx + x - off, cy + y - off, color)
            self._hspan(cx - x, cx + x - off, cy - y, color)
            self._hspan(cx - y, cx + y - off, cy + x - off, color)
            self._hspan(cx - y, cx + y - off, cy - x, color)

    def draw_arc(self, cx: int, cy: int, r: int, start_angle: float, end_angle: float,
                 color: Color | None = None, center_between_pixels: bool = True) -> None:
        """
        Part of a circle outline between two angles.

        Angles are radians, counter-clockwise from +x with y pointing up,
        as in draw_line_polar. The endpoints may be given in either order
        and may be negative; [0, 2*pi] draws the whole circle. With a
        stroke above 1 each arc point becomes a disc of radius stroke // 2.
        """
        if r < 0:
            raise ValueError(f"radius must be >= 0, got {r}")
        color = self._color(color)
        off = 1 if center_between_pixels else 0
        if start_angle > end_angle: start_angle, end_angle = end_angle, start_angle
        dot = self._stroke // 2

        def in_arc(angle):
            return any(start_angle <= a <= end_angle
                       for a in (angle, angle - _TAU, angle + _TAU))

        for x, y in self._midpoint(r):
            for a, b in ((x, y), (y, x)):
                for sx in (1, -1):
                    for sy in (1, -1):
                        if not in_arc(math.atan2(-sy * b, sx * a) % _TAU): continue
                        px = cx + a - off if sx > 0 else cx - a
                        py = cy + b - off if sy > 0 else cy - b
                        if dot: self._disc(px, py, dot, off, color)
                        else: self._plot(px, py, color)

    def draw_circle_quadrant(self, cx: int, cy: int, r: int, quadrant: int,
                             color: Color | None = None, filled: bool = False,
                             center_between_pixels: bool = False) -> None:
        """
        One quarter of a circle.

        Quadrants: 0 top-right, 1 top-left, 2 bottom-left, 3 bottom-right.
        """
        if quadrant not in (0, 1, 2, 3):
            raise ValueError(f"quadrant must be 0-3, got {quadrant}")
        if r < 0:
            raise ValueError(f"radius must be >= 0, got {r}")
        color = self._color(color)
        off = 1 if center_between_pixels else 0
        right = quadrant in (0, 3)
        lower = quadrant in (2, 3)

        def point(dx, dy):
            px = cx + dx - off if right else cx - dx
            py = cy + dy - off if lower else cy - dy
            return px, py

        if filled:
            for x, y in self._midpoint(r):
                for dx, dy in ((x, y), (y, x)):
                    px, py = point(dx, dy)
                    self._hspan(point(0, 0)[0], px, py, color)
            return

        stroke = self._stroke
        for i in range(stroke):
            radius = r - (stroke >> 1) + i
            if radius < 0: continue
            for x, y in self._midpoint(radius):
                self._plot(*point(x, y), color)
                self._plot(*point(y, x), color)

    @staticmethod
    def _midpoint(r: int):
        """Yield (x, y) octant offsets; d = 3 - 2r."""
        x, y = 0, r
        d = 3 - 2 * r
        while x <= y:
            yield x, y
            if d < 0:
                d += 2 * x + 1
            else:
                d += 2 * (x - y) + 1
                y -= 1
            x += 1

    # =========================================================================
    # Rounded Rectangle
    # =========================================================================

    def draw_rounded_rectangle(self, x: int, y: int, w: int, h: int, radius: int,
                               color: Color | None = None, filled: bool = False) -> None:
        if radius < 0:
            raise ValueError(f"corner radius must be >= 0, got {radius}")
        if w < 0: x += w; w = -w
        if h < 0: y += h; h = -h
        r = min(radius, w // 2, h // 2)
        if r == 0:
            self.draw_rectangle(x, y, w, h, color, filled)
            return
        color = self._color(color)

        left, top = x + r, y + r
        right, bottom = x + w - 1 - r, y + h - 1 - r

        if filled:
            self._fill(left, y, w - 2 * r, h, color)
            self._fill(x, top, r, h - 2 * r, color)
            self._fill(right + 1, top, r, h - 2 * r, color)
        else:
            self.draw_line(left, y, right, y, color)
            self.draw_line(left, y + h - 1, right, y + h - 1, color)
            self.draw_line(x, top, x, bottom, color)
            self.draw_line(x + w - 1, top, x + w - 1, bottom, color)

        self.draw_circle_quadrant(right, top, r, 0, color, filled)
        self.draw_circle_quadrant(left, top, r, 1, color, filled)
        self.draw_circle_quadrant(left, bottom, r, 2, color, filled)
        self.draw_circle_quadrant(right, bottom, r, 3, color, filled)

    # =========================================================================
    # Triangle
    # =========================================================================

    def draw_triangle(self, x0: int, y0: int, x1: int, y1: int, x2: int, y2: int,
                      color: Color | None = None, filled: bool = False) -> None:
        color = self._color(color)
        if not filled:
            self.draw_line(x0, y0, x1, y1, color)
            self.draw_line(x1, y1, x2, y2, color)
            self.draw_line(x2, y2, x0, y0, color)
            return

        # Sort vertices by y
        if y0 > y1: x0, y0, x1, y1 = x1, y1, x0, y0
        if y1 > y2: x1, y1, x2, y2 = x2, y2, x1, y1
        if y0 > y1: x0, y0, x1, y1 = x1, y1, x0, y0

        if y0 == y2:  # Flat
            self._hspan(min(x0, x1, x2), max(x0, x1, x2), y0, color)
            return

        dx01, dy01 = x1 - x0, y1 - y0
        dx02, dy02 = x2 - x0, y2 - y0
        dx12, dy12 = x2 - x1, y2 - y1

        # Upper part: edges 0-1 and 0-2; includes y1 only for a flat bottom
        last = y1 if y1 == y2 else y1 - 1
        sa = sb = 0
        for y in range(y0, last + 1):
            a = x0 + _tdiv(sa, dy01)
            b = x0 + _tdiv(sb, dy02)
            sa += dx01
            sb += dx02
            self._hspan(a, b, y, color)

        # Lower part: edges 1-2 and 0-2
        y = last + 1
        sa = dx12 * (y - y1)
        sb = dx02 * (y - y0)
        for y in range(y, y2 + 1):
            a = x1 + _tdiv(sa, dy12)
            b = x0 + _tdiv(sb, dy02)
            sa += dx12
            sb += dx02
            self._hspan(a, b, y, color)

    # =========================================================================
    # Gradients
    # =========================================================================

    def draw_horizontal_gradient(self, x: int, y: int, w: int, h: int,
                                 start: Color, end: Color) -> None:
        """Left-to-right blend, one column at a time."""
        for i in range(w):
            ratio = i / (w - 1) if w > 1 else 0.0
            self._fill(x + i, y, 1, h, start.blend(end, ratio))

    def draw_vertical_gradient(self, x: int, y: int, w: int, h: int,
                               start: Color, end: Color) -> None:
        """Top-to-bottom blend, one row at a time."""
        for j in range(h):
            ratio = j / (h - 1) if h > 1 else 0.0
            self._fill(x, y + j, w, 1, start.blend(end, ratio))
