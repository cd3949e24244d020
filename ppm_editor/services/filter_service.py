import logging
import numpy as np

from ..models.image_filter import FilterKind, ImageFilter
from ..models.pixel_grid import PixelGrid

logger = logging.getLogger(__name__)

CHANNEL_MIN = 0
CHANNEL_MAX = 255
EMBOSS_MIDPOINT = 128


def _gray_to_rgb(gray: np.ndarray) -> np.ndarray:
    """(H, W) → (H, W, 3) with the same value in every channel."""
    return np.repeat(gray[..., None], 3, axis=2)


class FilterService:
    """
    The four pixel transforms. Each one mutates the grid in place and
    returns None.

    Every filter reads from `grid.snapshot()` and writes one whole result
    back, so no cell is ever computed from a value the filter already
    overwrote.
    """

    def __init__(self):
        self._dispatch = {
            FilterKind.GRAYSCALE: lambda grid, f: self.grayscale(grid),
            FilterKind.INVERT: lambda grid, f: self.invert(grid),
            FilterKind.EMBOSS: lambda grid, f: self.emboss(grid),
            FilterKind.MOTION_BLUR: lambda grid, f: self.motion_blur(grid, f.length),
        }
        missing = set(FilterKind) - set(self._dispatch)
        if missing:
            raise NotImplementedError(f"No handler for {missing}")

    def apply(self, grid: PixelGrid, image_filter: ImageFilter) -> None:
        logger.info(f"Applying {image_filter.kind.value} to {grid.width}x{grid.height} grid")
        self._dispatch[image_filter.kind](grid, image_filter)

    @staticmethod
    def grayscale(grid: PixelGrid) -> None:
        """Every channel ← floor((r + g + b) / 3), clamped to [0, 255]."""
        pixels = grid.snapshot()
        gray = np.clip(pixels.sum(axis=2) // 3, CHANNEL_MIN, CHANNEL_MAX)
        grid.replace_pixels(_gray_to_rgb(gray))

    @staticmethod
    def invert(grid: PixelGrid) -> None:
        grid.replace_pixels(CHANNEL_MAX - grid.snapshot())

    @staticmethod
    def emboss(grid: PixelGrid) -> None:
        """
        Compare every cell with its up-left neighbour (x-1, y-1) in the
        original image. The channel difference with the largest magnitude
        wins (ties go to red, then green, then blue) and the cell becomes
        gray at clamp(128 + diff). Cells in row 0 or column 0 get diff = 0.
        """
        pixels = grid.snapshot()
        diff = np.zeros(pixels.shape[:2], dtype=pixels.dtype)

        if grid.width > 1 and grid.height > 1:
            deltas = pixels[1:, 1:, :] - pixels[:-1, :-1, :]
            # argmax returns the first maximum, which gives the red > green > blue tie order
            strongest = np.argmax(np.abs(deltas), axis=2)
            diff[1:, 1:] = np.take_along_axis(deltas, strongest[..., None], axis=2)[..., 0]

        gray = np.clip(EMBOSS_MIDPOINT + diff, CHANNEL_MIN, CHANNEL_MAX)
        grid.replace_pixels(_gray_to_rgb(gray))

    @staticmethod
    def motion_blur(grid: PixelGrid, length: int) -> None:
        """
        Average each cell with the cells to its right: the run covers
        columns x .. min(width - 1, x + length - 1), both ends included,
        and is floor-divided by the number of cells actually in it.
        length 0 and 1 leave the grid untouched.
        """
        if length < 0:
            raise ValueError(f"Motion blur length must be non-negative, got {length}")
        if length <= 1:
            return

        pixels = grid.snapshot()
        width = grid.width

        # prefix[:, i] holds the sum of columns 0 .. i-1
        prefix = np.zeros((grid.height, width + 1, 3), dtype=pixels.dtype)
        prefix[:, 1:, :] = np.cumsum(pixels, axis=1)

        starts = np.arange(width)
        ends = np.minimum(width - 1, starts + length - 1)
        counts = ends - starts + 1

        sums = prefix[:, ends + 1, :] - prefix[:, starts, :]
        grid.replace_pixels(sums // counts[None, :, None])
