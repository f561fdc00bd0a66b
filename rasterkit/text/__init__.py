"""
Text subsystem.

Modules:
    font: Font contract and in-memory glyph table
    bf2: BF2 font file reader
    packing: Packs strings into 1-bit bitmaps for drawing
"""
from .font import Font, GlyphFont, glyph_size
from .bf2 import BF2Font
from .packing import pack_text, pad_text, chars_per_group

__all__ = [
    "Font",
    "GlyphFont",
    "glyph_size",
    "BF2Font",
    "pack_text",
    "pad_text",
    "chars_per_group",
]
