"""
BufferFactory - Construct Buffers by Color Mode
===============================================
Explicit dispatch on the ColorMode tag. Unknown tags fail loudly; there
is no fallback encoding.
"""

import logging

from ..errors import UnsupportedOperationError
from .formats import ColorMode, FORMATS
from .palette import IndexedPalette
from .pixelbuffer import PixelBuffer

logger = logging.getLogger(__name__)


def create(color_mode: int, width: int, height: int, data=None,
           palette: IndexedPalette | None = None) -> PixelBuffer:
    """
    Build a buffer for a ColorMode tag.

    Raises:
        UnsupportedOperationError: Tag is not a known ColorMode
        ConstructionError: Bad dimensions or data length
    """
    if color_mode not in FORMATS:
        raise UnsupportedOperationError(f"No buffer type for color mode {color_mode!r}")
    logger.debug("Creating %s buffer %dx%d", ColorMode.name(color_mode), width, height)
    return PixelBuffer(width, height, color_mode, data, palette)


def create_like(template: PixelBuffer, width: int, height: int) -> PixelBuffer:
    """
    Empty buffer in the template's encoding.

    Indexed templates hand a copy of their palette to the new buffer.
    """
    if not isinstance(template, PixelBuffer):
        raise UnsupportedOperationError(f"Unsupported buffer type {type(template).__name__}")
    palette = template.palette.copy() if template.palette is not None else None
    return create(template.color_mode, width, height, palette=palette)
