"""
IndexedPalette - Fixed-size Color Table
=======================================
Owned by an indexed buffer (4 entries for 2bpp, 16 for 4bpp).

Entries start unset. Writing a pixel resolves the requested color to the
nearest set entry by squared RGB distance; alpha is ignored.
"""

from ..color import Color
from ..errors import UnsupportedOperationError


class IndexedPalette:
    """
    Fixed-size list of optional colors.

    Args:
        size: Number of entries (4 or 16)
        colors: Optional initial entries, assigned from index 0
    """

    def __init__(self, size: int, colors=None):
        if size < 1:
            raise ValueError("palette size must be positive")
        self._entries: list[Color | None] = [None] * size
        if colors is not None:
            colors = list(colors)
            if len(colors) > size:
                raise ValueError(f"palette holds {size} entries, got {len(colors)}")
            for i, color in enumerate(colors):
                self._entries[i] = color

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> Color | None:
        return self._entries[index]

    def __setitem__(self, index: int, color: Color | None) -> None:
        self._entries[index] = color

    def __iter__(self):
        return iter(self._entries)

    def __eq__(self, other):
        if not isinstance(other, IndexedPalette):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self):
        return f"IndexedPalette({self._entries!r})"

    @property
    def is_empty(self) -> bool:
        return all(entry is None for entry in self._entries)

    def nearest_index(self, color: Color) -> int:
        """
        Index of the set entry closest to `color`.

        Ties resolve to the lowest index; an exact match returns at once.

        Raises:
            UnsupportedOperationError: No entry is set
        """
        best = -1
        best_dist = 0
        for i, entry in enumerate(self._entries):
            if entry is None: continue
            dr = entry.r - color.r
            dg = entry.g - color.g
            db = entry.b - color.b
            dist = dr * dr + dg * dg + db * db
            if dist == 0: return i
            if best < 0 or dist < best_dist:
                best, best_dist = i, dist

        if best < 0:
            raise UnsupportedOperationError("Palette has no entries set")
        return best

    def copy(self) -> "IndexedPalette":
        return IndexedPalette(len(self._entries), self._entries)
