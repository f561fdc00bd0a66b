"""
Graphics Errors
===============
Exception taxonomy shared by buffers, transforms and the rasterizer.

All errors are raised synchronously to the immediate caller. Each class
also derives from the closest builtin so callers can catch either.
"""


class GraphicsError(Exception):
    """Base graphics error."""
    pass


class ConstructionError(GraphicsError, ValueError):
    """Supplied bytes or dimensions do not match the buffer layout."""
    pass


class RangeError(GraphicsError, IndexError):
    """Pixel or rectangle coordinates outside buffer bounds."""
    pass


class UnsupportedOperationError(GraphicsError, RuntimeError):
    """Operation not defined for the current format or state."""
    pass
