"""
Buffer subsystem - packed pixel buffers and format-agnostic transforms.

Modules:
    formats: ColorMode tags and per-encoding descriptors
    palette: Fixed-size color table for indexed modes
    pixelbuffer: The PixelBuffer class
    factory: Construction by tag or from a template
    transform: rotate, scale_up, convert, resize
"""
from .formats import ColorMode, PixelFormat, get_format
from .palette import IndexedPalette
from .pixelbuffer import PixelBuffer
from .factory import create, create_like
from .transform import rotate, scale_up, convert, resize

__all__ = [
    "ColorMode",
    "PixelFormat",
    "get_format",
    "IndexedPalette",
    "PixelBuffer",
    "create",
    "create_like",
    "rotate",
    "scale_up",
    "convert",
    "resize",
]
