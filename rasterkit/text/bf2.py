"""
BF2 Font Reader
===============
Loads BF2 (Binary Font v2) files as fixed-cell fonts.

Format Layout:
    [Header: 12 bytes]
    [Index: count x entry_size bytes]
    [Bitmap data: variable]

Header Structure (12 bytes):
    - Magic: "B2" (2 bytes)
    - Version: 1 byte
    - Flags: 1 byte (bit 0=proportional, bit 1=32-bit codepoints)
    - Max width: 1 byte
    - Height: 1 byte
    - Glyph count: 2 bytes (little-endian)
    - Bytes per row: 1 byte
    - Default width: 1 byte
    - Reserved: 2 bytes

Index entries are (codepoint, width, 24-bit data offset). Bitmap rows are
`bytes_per_row` wide and MSB first. Every glyph is placed in a cell of
max width, so proportional files render monospaced.
"""

import logging
import struct
from collections import OrderedDict

from .font import Font, glyph_size

logger = logging.getLogger(__name__)

_BF2_MAGIC = b"B2"
_BF2_HEADER_SIZE = 12
_DEFAULT_CACHE = 128  # glyphs


class BF2Font(Font):
    """
    BF2 font file reader.

    Keeps the font file open for on-demand glyph reads. Use close() or
    the context manager to release the file handle.

    Args:
        path: File system path to the .bf2 font file
        cache_glyphs: Converted glyphs kept in the LRU cache

    Raises:
        ValueError: The file is not a valid BF2 font
        OSError: The file cannot be opened
    """

    def __init__(self, path: str, cache_glyphs: int = _DEFAULT_CACHE):
        self.path = path
        self.file = open(path, "rb")

        # Validate magic
        if self.file.read(2) != _BF2_MAGIC:
            self.file.close()
            raise ValueError(f"Invalid BF2 font file: {path}")

        hdr = self.file.read(_BF2_HEADER_SIZE - 2)
        if len(hdr) != _BF2_HEADER_SIZE - 2:
            self.file.close()
            raise ValueError(f"Truncated BF2 header: {path}")
        (self.version, flags, self.max_w, self.height, self.count,
         self.bpr, self.def_w, _) = struct.unpack("<BBBBHBBH", hdr)

        self.width = self.max_w
        self.prop = bool(flags & 1)
        self.entry_size = 8 if (flags & 2) else 6
        self._data_start = _BF2_HEADER_SIZE + self.count * self.entry_size

        # Glyph index stays in memory for O(1) lookup
        self.index = {}
        idx_data = self.file.read(self.count * self.entry_size)
        if len(idx_data) != self.count * self.entry_size:
            self.file.close()
            raise ValueError(f"Truncated BF2 index: {path}")

        for i in range(self.count):
            off = i * self.entry_size
            if self.entry_size == 8:
                cp, w, o0, o1, o2 = struct.unpack("<IBBBB", idx_data[off:off + 8])
            else:
                cp, w, o0, o1, o2 = struct.unpack("<HBBBB", idx_data[off:off + 6])
            self.index[cp] = (w, o0 | (o1 << 8) | (o2 << 16))

        self._cache = OrderedDict()
        self._cache_max = cache_glyphs
        self._blank = bytes(glyph_size(self.width, self.height))

        logger.debug("Loaded BF2 font %s: %dx%d, %d glyphs",
                     path, self.width, self.height, self.count)

    # =========================================================================
    # Raw Access
    # =========================================================================

    def get(self, cp: int):
        """(width, data_offset) for a codepoint, or None."""
        return self.index.get(cp)

    def read(self, offset: int) -> bytes:
        """Raw glyph rows (height x bytes_per_row) at a data offset."""
        self.file.seek(self._data_start + offset)
        return self.file.read(self.height * self.bpr)

    # =========================================================================
    # Font Contract
    # =========================================================================

    def glyph(self, ch: str) -> bytes:
        """LSB-first glyph stream; missing characters fall back to space."""
        cp = ord(ch)
        if cp in self._cache:
            self._cache.move_to_end(cp)
            return self._cache[cp]

        info = self.index.get(cp) or self.index.get(0x20)
        data = self._convert(self.read(info[1])) if info else self._blank

        self._cache[cp] = data
        while len(self._cache) > self._cache_max:
            self._cache.popitem(last=False)
        return data

    def _convert(self, rows: bytes) -> bytes:
        """Re-pack MSB-first rows into the row-concatenated LSB-first stream."""
        w, bpr = self.width, self.bpr
        out = bytearray(len(self._blank))
        for row in range(self.height):
            row_off = row * bpr
            base = row * w
            for col in range(w):
                if row_off + (col >> 3) >= len(rows): break
                if rows[row_off + (col >> 3)] & (0x80 >> (col & 7)):
                    bit = base + col
                    out[bit >> 3] |= 1 << (bit & 7)
        return bytes(out)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self):
        """Close the font file handle."""
        self.file.close()
        self._cache.clear()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
        return False

    def __repr__(self):
        return f"BF2Font({self.path!r} {self.width}x{self.height})"
