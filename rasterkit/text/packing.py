"""
Text Packing - Strings to 1-bit Scratch Bitmaps
===============================================
Concatenates each glyph row across the string into one LSB-first bitmap
row. The string is padded with spaces so every row ends on a byte.

For an 8-wide font character i, row r lands at byte `i + r * len`.
For a 4-wide font characters pair up per byte:

    bitmap[i + 2j*len]     = (c1[j] & 0x0F) | (c2[j] << 4)
    bitmap[i + (2j+1)*len] = (c1[j] >> 4) | (c2[j] & 0xF0)
"""

from math import gcd

_BITS_PER_BYTE = 8


def chars_per_group(width: int) -> int:
    """Characters whose combined row width is a whole number of bytes."""
    return _BITS_PER_BYTE // gcd(width, _BITS_PER_BYTE)


def pad_text(text: str, width: int) -> str:
    group = chars_per_group(width)
    short = -len(text) % group
    return text + " " * short if short else text


def pack_text(text: str, font) -> tuple[bytearray, int, int]:
    """
    Pack a string into a 1-bit bitmap.

    Args:
        text: Text to pack
        font: Object with width, height and glyph(ch)

    Returns:
        (bitmap, width_px, height). width_px is a multiple of 8 and
        bitmap holds height rows of width_px // 8 bytes.
    """
    fw, fh = font.width, font.height
    text = pad_text(text, fw)
    width_px = len(text) * fw
    row_bytes = width_px // _BITS_PER_BYTE
    bitmap = bytearray(row_bytes * fh)
    if not text:
        return bitmap, 0, fh

    if fw == _BITS_PER_BYTE:
        for i, ch in enumerate(text):
            glyph = font.glyph(ch)
            for row in range(fh): bitmap[i + row * row_bytes] = glyph[row]
        return bitmap, width_px, fh

    for i, ch in enumerate(text):
        glyph = font.glyph(ch)
        dst_base = i * fw
        for row in range(fh):
            src = row * fw
            out = row * row_bytes
            for col in range(fw):
                bit = src + col
                if glyph[bit >> 3] & (1 << (bit & 7)):
                    dst = dst_base + col
                    bitmap[out + (dst >> 3)] |= 1 << (dst & 7)
    return bitmap, width_px, fh
