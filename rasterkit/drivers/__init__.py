"""
Display drivers.

Modules:
    base: DisplayDriver interface
    memory: In-memory display that records shown frames
"""
from .base import DisplayDriver
from .memory import Frame, MemoryDisplay

__all__ = ["DisplayDriver", "Frame", "MemoryDisplay"]
