"""
rasterkit
=========
2-D graphics into packed pixel buffers, 1 to 32 bits per pixel.

Architecture
------------
The library is organized into layers:

    GraphicsEngine      Drawing state, text, bitmaps, buffer composition
       │
       ├── Rasterizer       Lines, circles, triangles, rotation mapping
       │
       ├── PixelBuffer      Packed storage for one ColorMode
       │      │
       │      ├── PixelFormat     Per-encoding bit arithmetic
       │      └── IndexedPalette  Color table for indexed modes
       │
       ├── Font / BF2Font   Glyph tables and the BF2 file reader
       │
       └── DisplayDriver    Receives the finished buffer via show()

Quick Start
-----------
    from rasterkit import GraphicsEngine, MemoryDisplay, ColorMode, Color

    display = MemoryDisplay(128, 64, ColorMode.ONE_BPP)
    gfx = GraphicsEngine(display)
    gfx.draw_circle(64, 32, 20, filled=True)
    gfx.draw_line(0, 0, 127, 63, Color.BLACK)
    gfx.show()

Module Structure
----------------
    rasterkit/
    ├── color.py             Color value type
    ├── errors.py            Exception hierarchy
    ├── draw.py              Rasterizer (shapes)
    ├── canvas.py            GraphicsEngine
    ├── image.py             Pillow bridge
    ├── buffer/
    │   ├── formats.py       ColorMode and PixelFormat descriptors
    │   ├── palette.py       IndexedPalette
    │   ├── pixelbuffer.py   PixelBuffer
    │   ├── factory.py       create / create_like
    │   └── transform.py     rotate, scale_up, convert, resize
    ├── text/
    │   ├── font.py          Font contract, GlyphFont
    │   ├── bf2.py           BF2 font reader
    │   └── packing.py       String to 1-bit bitmap packing
    └── drivers/
        ├── base.py          DisplayDriver interface
        └── memory.py        MemoryDisplay
"""

# Core value types
from .color import Color
from .errors import GraphicsError, ConstructionError, RangeError, UnsupportedOperationError

# Buffer layer
from .buffer import (
    ColorMode, PixelFormat, IndexedPalette, PixelBuffer,
    create, create_like, rotate, scale_up, convert, resize,
)

# Text
from .text import Font, GlyphFont, BF2Font, pack_text

# Drawing
from .draw import Rasterizer
from .canvas import GraphicsEngine, GraphicsState, BitmapMode, Alignment

# Displays
from .drivers import DisplayDriver, MemoryDisplay, Frame

__all__ = [
    # Values
    "Color",
    # Errors
    "GraphicsError",
    "ConstructionError",
    "RangeError",
    "UnsupportedOperationError",
    # Buffers
    "ColorMode",
    "PixelFormat",
    "IndexedPalette",
    "PixelBuffer",
    "create",
    "create_like",
    "rotate",
    "scale_up",
    "convert",
    "resize",
    # Text
    "Font",
    "GlyphFont",
    "BF2Font",
    "pack_text",
    # Drawing
    "Rasterizer",
    "GraphicsEngine",
    "GraphicsState",
    "BitmapMode",
    "Alignment",
    # Displays
    "DisplayDriver",
    "MemoryDisplay",
    "Frame",
]

__version__ = "1.0.0"
