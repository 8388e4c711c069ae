"""Blob rejection rules and mapping of surviving blobs to natural pixels."""

import logging
from typing import List, Optional

from .blob_labeling import Blob
from .density_grid import DensityGrid
from ..geometry import NaturalRect

logger = logging.getLogger(__name__)


def rejection_reason(
    blob: Blob,
    grid_width: int,
    grid_height: int,
    min_width_fraction: float = 0.05,
    min_height_fraction: float = 0.02,
    max_width_fraction: float = 0.90,
    page_height_fraction: float = 0.9,
    max_aspect: float = 4.0,
) -> Optional[str]:
    """Why ``blob`` is not a signature candidate, or None if it is."""
    width, height = blob.width, blob.height

    if width < min_width_fraction * grid_width or height < min_height_fraction * grid_height:
        return "noise"
    if width > max_width_fraction * grid_width and height > page_height_fraction * grid_height:
        return "page border"
    if height > max_aspect * width:
        return "vertical line"
    return None


def blob_to_rect(blob: Blob, grid: DensityGrid, padding: int = 1) -> NaturalRect:
    """Pad a blob by ``padding`` cells and map it to natural pixel space.

    The result never extends past the natural image bounds.
    """
    unit = grid.cell_size * grid.scale
    x = max(0.0, (blob.min_x - padding) * unit)
    y = max(0.0, (blob.min_y - padding) * unit)
    width = min(grid.natural_width, (blob.width + padding * 2) * unit)
    height = min(grid.natural_height, (blob.height + padding * 2) * unit)

    if x + width > grid.natural_width:
        width = grid.natural_width - x
    if y + height > grid.natural_height:
        height = grid.natural_height - y

    return NaturalRect(x, y, width, height)


def filter_blobs(grid: DensityGrid, blobs: List[Blob], config=None) -> List[NaturalRect]:
    """Drop noise, page-border and divider blobs; map the rest to rectangles.

    Args:
        grid: The density grid the blobs were labeled on
        blobs: Blobs in label order
        config: Optional DetectionConfig; defaults apply when None

    Returns:
        Natural-space rectangles in blob order (possibly empty)
    """
    params = {}
    padding = 1
    if config is not None:
        params = dict(
            min_width_fraction=config.min_width_fraction,
            min_height_fraction=config.min_height_fraction,
            max_width_fraction=config.max_width_fraction,
            page_height_fraction=config.page_height_fraction,
            max_aspect=config.max_aspect,
        )
        padding = config.padding_cells

    rects = []
    for blob in blobs:
        reason = rejection_reason(blob, grid.grid_width, grid.grid_height, **params)
        if reason:
            logger.debug("Rejected blob %d (%dx%d cells): %s",
                         blob.label, blob.width, blob.height, reason)
            continue
        rects.append(blob_to_rect(blob, grid, padding))
    return rects
