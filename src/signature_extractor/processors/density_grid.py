"""Coarse ink-activity grid of a page, used to locate signature candidates."""

import logging
import math
from dataclasses import dataclass

import cv2
import numpy as np

from .base import BaseProcessor
from .luminance import REC601_WEIGHTS, luminance

logger = logging.getLogger(__name__)


@dataclass
class DensityGrid:
    """Binary activity grid plus the geometry needed to map it back.

    ``scale`` is natural pixels per analysis pixel.
    """

    cells: np.ndarray
    cell_size: int
    scale: float
    natural_width: int
    natural_height: int

    @property
    def grid_width(self) -> int:
        return self.cells.shape[1]

    @property
    def grid_height(self) -> int:
        return self.cells.shape[0]


class DensityGridProcessor(BaseProcessor):
    """Processor building a :class:`DensityGrid` from a page raster."""

    def process(self, image: np.ndarray, **kwargs) -> DensityGrid:
        self.validate_image(image)
        return build_density_grid(
            image,
            analysis_width=self.get_config_value("analysis_width", 800),
            cell_size=self.get_config_value("cell_size", 10),
            luminance_threshold=self.get_config_value("luminance_threshold", 180),
        )


def build_density_grid(
    image: np.ndarray,
    analysis_width: int = 800,
    cell_size: int = 10,
    luminance_threshold: int = 180,
) -> DensityGrid:
    """Downsample a page to ``analysis_width`` and mark cells containing ink.

    Args:
        image: RGBA page raster in natural resolution
        analysis_width: Width of the resampled analysis raster
        cell_size: Cell edge length in analysis pixels
        luminance_threshold: Analysis pixels with luminance below this are ink

    Returns:
        DensityGrid of shape ceil(h / cell_size) x ceil(w / cell_size)
    """
    natural_height, natural_width = image.shape[:2]
    scale = natural_width / analysis_width
    analysis_height = max(1, int(round(natural_height / scale)))

    analysis = cv2.resize(
        image, (analysis_width, analysis_height), interpolation=cv2.INTER_LINEAR
    )
    ink = luminance(analysis, REC601_WEIGHTS) < luminance_threshold

    grid_w = math.ceil(analysis_width / cell_size)
    grid_h = math.ceil(analysis_height / cell_size)

    # Pad to whole cells so every pixel falls in exactly one cell
    padded = np.zeros((grid_h * cell_size, grid_w * cell_size), dtype=bool)
    padded[:analysis_height, :analysis_width] = ink
    cells = padded.reshape(grid_h, cell_size, grid_w, cell_size).any(axis=(1, 3))

    logger.debug(
        "Density grid %dx%d (scale %.3f): %d active cells",
        grid_w, grid_h, scale, int(cells.sum()),
    )
    return DensityGrid(cells, cell_size, scale, natural_width, natural_height)
