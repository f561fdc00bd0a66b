"""
Color - 8-bit RGBA Value Type
=============================
Immutable color holding full 8-bit R/G/B/A channels.

Every pixel format reads a color through one of the quantizing views
below. The views are pure functions of the channels; nothing is cached.

    Color.RED.color_16bpp_rgb565   -> 0xF800
    Color.GRAY.color_4bpp_gray     -> 8
"""

import colorsys

# =============================================================================
# Luma Weights (ITU-R BT.601)
# =============================================================================

_LUMA_R = 0.2989
_LUMA_G = 0.5870
_LUMA_B = 0.114

_BYTE_MASK = 0xFF


def _clamp(value) -> int:
    value = int(value)
    if value < 0: return 0
    if value > _BYTE_MASK: return _BYTE_MASK
    return value


def _hex_digit(ch: str) -> int:
    try:
        return int(ch, 16)
    except ValueError:
        return 0


class Color:
    """
    RGBA color with per-format quantizing accessors.

    Args:
        r, g, b: Channel values 0-255
        a: Alpha 0-255 (default opaque)
    """

    __slots__ = ("_r", "_g", "_b", "_a")

    def __init__(self, r: int, g: int, b: int, a: int = 255):
        self._r = _clamp(r)
        self._g = _clamp(g)
        self._b = _clamp(b)
        self._a = _clamp(a)

    # =========================================================================
    # Channels
    # =========================================================================

    @property
    def r(self) -> int: return self._r

    @property
    def g(self) -> int: return self._g

    @property
    def b(self) -> int: return self._b

    @property
    def a(self) -> int: return self._a

    # =========================================================================
    # Per-format Views
    # =========================================================================

    @property
    def color_1bpp(self) -> bool:
        """Any lit channel is 'on'."""
        return self._r > 0 or self._g > 0 or self._b > 0

    @property
    def color_8bpp_gray(self) -> int:
        return int(_LUMA_R * self._r + _LUMA_G * self._g + _LUMA_B * self._b)

    @property
    def color_2bpp_gray(self) -> int:
        return self.color_8bpp_gray >> 6

    @property
    def color_4bpp_gray(self) -> int:
        return self.color_8bpp_gray >> 4

    @property
    def color_8bpp_rgb332(self) -> int:
        return ((self._r >> 5) << 5) | ((self._g >> 5) << 2) | (self._b >> 6)

    @property
    def color_12bpp_rgb444(self) -> int:
        return ((self._r >> 4) << 8) | ((self._g >> 4) << 4) | (self._b >> 4)

    @property
    def color_16bpp_rgb565(self) -> int:
        return ((self._r >> 3) << 11) | ((self._g >> 2) << 5) | (self._b >> 3)

    @property
    def color_18bpp_rgb666(self) -> tuple[int, int, int]:
        return self._r & 0xFC, self._g & 0xFC, self._b & 0xFC

    @property
    def color_24bpp_rgb888(self) -> tuple[int, int, int]:
        return self._r, self._g, self._b

    @property
    def color_32bpp_rgba8888(self) -> tuple[int, int, int, int]:
        return self._r, self._g, self._b, self._a

    # =========================================================================
    # HSB
    # =========================================================================

    @property
    def hue(self) -> float:
        return colorsys.rgb_to_hsv(self._r / 255, self._g / 255, self._b / 255)[0]

    @property
    def saturation(self) -> float:
        return colorsys.rgb_to_hsv(self._r / 255, self._g / 255, self._b / 255)[1]

    @property
    def brightness(self) -> float:
        return colorsys.rgb_to_hsv(self._r / 255, self._g / 255, self._b / 255)[2]

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def from_hsb(cls, hue: float, saturation: float, brightness: float, a: int = 255) -> "Color":
        """Build from hue/saturation/brightness, each in 0.0-1.0."""
        r, g, b = colorsys.hsv_to_rgb(hue % 1.0, saturation, brightness)
        return cls(round(r * 255), round(g * 255), round(b * 255), a)

    @classmethod
    def from_uint(cls, argb: int) -> "Color":
        """Build from a packed 0xAARRGGBB value."""
        return cls((argb >> 16) & _BYTE_MASK, (argb >> 8) & _BYTE_MASK,
                   argb & _BYTE_MASK, (argb >> 24) & _BYTE_MASK)

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        """
        Parse #rgb, #argb, #rrggbb or #aarrggbb (leading '#' optional).

        Any other length yields the all-zero default color.
        """
        digits = text[1:] if text.startswith("#") else text
        n = len(digits)

        if n in (3, 4):
            vals = [_hex_digit(c) * 0x11 for c in digits]
            if n == 3:
                return cls(vals[0], vals[1], vals[2])
            return cls(vals[1], vals[2], vals[3], vals[0])

        if n in (6, 8):
            vals = [_hex_digit(digits[i]) << 4 | _hex_digit(digits[i + 1])
                    for i in range(0, n, 2)]
            if n == 6:
                return cls(vals[0], vals[1], vals[2])
            return cls(vals[1], vals[2], vals[3], vals[0])

        return cls.default()

    @classmethod
    def default(cls) -> "Color":
        return cls(0, 0, 0, 0)

    # =========================================================================
    # Derivation
    # =========================================================================

    def blend(self, other: "Color", ratio: float) -> "Color":
        """Linear mix towards `other`; ratio 0.0 is self, 1.0 is other."""
        ratio = min(max(ratio, 0.0), 1.0)
        inv = 1.0 - ratio
        return Color(
            self._r * inv + other._r * ratio,
            self._g * inv + other._g * ratio,
            self._b * inv + other._b * ratio,
            self._a * inv + other._a * ratio,
        )

    def with_alpha(self, a: int) -> "Color":
        return Color(self._r, self._g, self._b, a)

    def with_brightness(self, brightness: float) -> "Color":
        return Color.from_hsb(self.hue, self.saturation, brightness, self._a)

    # =========================================================================
    # Value Semantics
    # =========================================================================

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return (self._r == other._r and self._g == other._g
                and self._b == other._b and self._a == other._a)

    def __hash__(self):
        return hash((self._r, self._g, self._b, self._a))

    def __iter__(self):
        return iter((self._r, self._g, self._b, self._a))

    def __repr__(self):
        return f"Color(r={self._r}, g={self._g}, b={self._b}, a={self._a})"


# =============================================================================
# Named Colors
# =============================================================================

Color.BLACK = Color(0, 0, 0)
Color.WHITE = Color(255, 255, 255)
Color.RED = Color(255, 0, 0)
Color.LIME = Color(0, 255, 0)
Color.GREEN = Color(0, 128, 0)
Color.BLUE = Color(0, 0, 255)
Color.YELLOW = Color(255, 255, 0)
Color.CYAN = Color(0, 255, 255)
Color.MAGENTA = Color(255, 0, 255)
Color.ORANGE = Color(255, 165, 0)
Color.PURPLE = Color(128, 0, 128)
Color.MAROON = Color(128, 0, 0)
Color.NAVY = Color(0, 0, 128)
Color.OLIVE = Color(128, 128, 0)
Color.TEAL = Color(0, 128, 128)
Color.GRAY = Color(128, 128, 128)
Color.SILVER = Color(192, 192, 192)
Color.DARK_GRAY = Color(169, 169, 169)
Color.LIGHT_GRAY = Color(211, 211, 211)
Color.DIM_GRAY = Color(105, 105, 105)
Color.BROWN = Color(165, 42, 42)
Color.PINK = Color(255, 192, 203)
Color.GOLD = Color(255, 215, 0)
Color.CORNFLOWER_BLUE = Color(100, 149, 237)
Color.TRANSPARENT = Color(0, 0, 0, 0)
