from __future__ import annotations
from typing import Iterable, Sequence, Tuple
import numpy as np

from ..errors import GridBoundsError
from .color import Color

CHANNELS = 3


class PixelGrid:
    """
    Fixed-size width x height grid of RGB cells, addressed as (x, y) where
    x is the column and y the row.

    Cells live in a single numpy array of shape (height, width, 3) so the
    filters can take a whole-grid snapshot and write a whole-grid result.
    Single-cell access goes through get/set, which bounds-check instead of
    letting numpy wrap negative indices.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self._pixels = np.zeros((height, width, CHANNELS), dtype=np.int64)

    @classmethod
    def create(cls, width: int, height: int) -> "PixelGrid":
        return cls(width, height)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Tuple[int, int, int]]]) -> "PixelGrid":
        """
        Build a grid from row-major nested triples: rows[y][x] == (r, g, b).
        """
        height = len(rows)
        width = len(rows[0]) if height else 0
        grid = cls(width, height)
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} cells, expected {width}")
            for x, (red, green, blue) in enumerate(row):
                grid.set(x, y, Color(red, green, blue))
        return grid

    # ── accessors ───────────────────────────────────────────────────
    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise GridBoundsError(
                f"({x}, {y}) is outside a {self.width}x{self.height} grid"
            )

    def get(self, x: int, y: int) -> Color:
        self._check(x, y)
        red, green, blue = (int(v) for v in self._pixels[y, x])
        return Color(red, green, blue)

    def set(self, x: int, y: int, color: Color) -> None:
        self._check(x, y)
        self._pixels[y, x] = color.as_tuple()

    # ── whole-grid access for filters ───────────────────────────────
    def snapshot(self) -> np.ndarray:
        """Read-only copy of the current channels, shape (H, W, 3)."""
        copy = self._pixels.copy()
        copy.setflags(write=False)
        return copy

    def replace_pixels(self, new_pixels: np.ndarray) -> None:
        if new_pixels.shape != self._pixels.shape:
            raise ValueError(
                f"Expected pixels of shape {self._pixels.shape}, got {new_pixels.shape}"
            )
        self._pixels[...] = new_pixels

    def rows(self) -> Iterable[list[Color]]:
        """Yield each row, top to bottom, as a list of Colors."""
        for y in range(self.height):
            yield [Color(*(int(v) for v in cell)) for cell in self._pixels[y]]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return np.array_equal(self._pixels, other._pixels)

    def __repr__(self) -> str:
        return f"PixelGrid(width={self.width}, height={self.height})"
