# pipeline/image_editor.py
import logging
from pathlib import Path
from typing import Union

from ..models.image_filter import ImageFilter
from ..models.pixel_grid import PixelGrid
from ..services.filter_service import FilterService
from ..services.image_service import ImageService

logger = logging.getLogger(__name__)


def edit_image(
    in_path: Union[str, Path],
    out_path: Union[str, Path],
    image_filter: ImageFilter,
    *,
    image_service: Union[ImageService, None] = None,
    filter_service: Union[FilterService, None] = None,
) -> PixelGrid:
    """
    Read *in_path*, apply *image_filter* in place, write *out_path*.

    Nothing is written if reading, parsing or filtering fails, and a failed
    write leaves no partial file behind.

    Returns:
        PixelGrid: the edited grid, as written.
    """
    image_service = image_service or ImageService()
    filter_service = filter_service or FilterService()

    grid = image_service.load(in_path)
    width, height = image_service.get_image_dimensions(grid)
    logger.debug(f"Read {width}x{height} pixels from {in_path}")

    filter_service.apply(grid, image_filter)

    image_service.save(grid, out_path)
    return grid
