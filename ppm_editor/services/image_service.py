from pathlib import Path
from typing import Union

from ..models.pixel_grid import PixelGrid
from ..repositories.ppm_repository import PpmRepository


class ImageService:
    """I/O helpers.  No filter logic."""
    def __init__(self, repository: Union[PpmRepository, None] = None):
        self.ppm_repository = repository or PpmRepository()

    def load(self, path: Union[str, Path]) -> PixelGrid:
        """Load a single P3 image from disk into a PixelGrid."""
        return self.ppm_repository.load(path)

    def save(self, grid: PixelGrid, path: Union[str, Path]) -> None:
        """
        Business-level method to save the grid to a specific path.
        The target only ever holds a complete file.
        """
        self.ppm_repository.save(grid, path)

    def get_image_dimensions(self, grid: PixelGrid):
        return grid.width, grid.height

