"""
Font Table - Fixed-cell Glyph Lookup
====================================
A font is anything with `width`, `height` and `glyph(ch) -> bytes`.

Glyph bytes are a bit stream of `width` bits per row, rows top to bottom,
least significant bit first within each byte. The stream is padded to a
whole number of bytes:

    8-wide:  one byte per row
    4-wide:  low nibble = even row, high nibble = odd row
    12-wide: three bytes hold two rows

Characters missing from a font render as the space glyph.
"""


def glyph_size(width: int, height: int) -> int:
    """Bytes in one glyph of the given cell size."""
    return (width * height + 7) // 8


class Font:
    """
    Base font contract.

    Attributes:
        width: Cell width in pixels
        height: Cell height in pixels
    """

    width = 0
    height = 0

    def glyph(self, ch: str) -> bytes:
        raise NotImplementedError

    @property
    def glyph_bytes(self) -> int:
        return glyph_size(self.width, self.height)

    def glyph_pixel(self, ch: str, col: int, row: int) -> bool:
        """True if the glyph pixel at (col, row) is set."""
        bit = row * self.width + col
        return bool(self.glyph(ch)[bit >> 3] & (1 << (bit & 7)))


class GlyphFont(Font):
    """
    In-memory glyph table.

    Args:
        width: Cell width in pixels
        height: Cell height in pixels
        glyphs: Mapping of character to glyph bytes
        name: Optional display name
    """

    def __init__(self, width: int, height: int, glyphs: dict, name: str = ""):
        if width < 1 or height < 1:
            raise ValueError(f"Invalid glyph cell {width}x{height}")
        self.width = width
        self.height = height
        self.name = name

        size = glyph_size(width, height)
        self._blank = bytes(size)
        self._glyphs = {}
        for ch, data in glyphs.items():
            if len(data) != size:
                raise ValueError(f"Glyph {ch!r} has {len(data)} bytes, expected {size}")
            self._glyphs[ch] = bytes(data)

    def __contains__(self, ch: str) -> bool:
        return ch in self._glyphs

    def __len__(self) -> int:
        return len(self._glyphs)

    def glyph(self, ch: str) -> bytes:
        data = self._glyphs.get(ch)
        if data is None: data = self._glyphs.get(" ", self._blank)
        return data

    def __repr__(self):
        return f"GlyphFont({self.name or '?'} {self.width}x{self.height}, {len(self._glyphs)} glyphs)"
