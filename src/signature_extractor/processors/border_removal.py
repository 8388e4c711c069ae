"""Ruled-line and box-border suppression for cropped signature regions."""

import logging

import numpy as np

from .base import BaseProcessor
from .luminance import ink_mask

logger = logging.getLogger(__name__)

TRANSPARENT = np.array([255, 255, 255, 0], dtype=np.uint8)


class BorderRemovalProcessor(BaseProcessor):
    """Processor for erasing straight ruled lines from a crop."""

    def process(
        self,
        image: np.ndarray,
        threshold: int = 160,
        invert: bool = False,
        density_threshold: float = 0.65,
        **kwargs
    ) -> np.ndarray:
        """Erase dense rows and columns from a copy of ``image``.

        Args:
            image: RGBA raster
            threshold: Ink luminance threshold (0-255)
            invert: Classify on inverted luminance
            density_threshold: Ink fraction a row/column must exceed

        Returns:
            np.ndarray: New raster with detected lines made transparent
        """
        self.validate_rgba(image)

        result = image.copy()
        remove_borders(result, threshold, invert, density_threshold)
        return result


def find_border_lines(
    ink: np.ndarray, density_threshold: float = 0.65
) -> np.ndarray:
    """Mark every pixel of rows/columns whose ink fraction exceeds the threshold.

    The whole raster is scanned, so divider lines inside a crop are caught
    too. Handwriting never covers that much of a full row or column.
    """
    height, width = ink.shape
    rows = ink.sum(axis=1) / width > density_threshold
    cols = ink.sum(axis=0) / height > density_threshold

    marks = np.zeros_like(ink, dtype=bool)
    marks[rows, :] = True
    marks[:, cols] = True
    return marks


def remove_borders(
    image: np.ndarray,
    threshold: int,
    invert: bool = False,
    density_threshold: float = 0.65,
) -> np.ndarray:
    """Erase ruled lines in place; returns the boolean map of erased pixels.

    Rows and columns are classified from the same ink map before any pixel
    is touched, so erasing a row never changes a column's density.
    """
    marks = find_border_lines(ink_mask(image, threshold, invert), density_threshold)
    image[marks] = TRANSPARENT

    logger.debug("Border removal: %d of %d pixels erased", int(marks.sum()), marks.size)
    return marks
