"""Binarization of cropped regions to opaque black ink on transparency."""

import numpy as np

from .base import BaseProcessor
from .luminance import ink_mask

INK = np.array([0, 0, 0, 255], dtype=np.uint8)
BACKGROUND = np.array([255, 255, 255, 0], dtype=np.uint8)


class BinarizeProcessor(BaseProcessor):
    """Processor for binarizing RGBA crops."""

    def process(
        self,
        image: np.ndarray,
        threshold: int = 160,
        invert: bool = False,
        **kwargs
    ) -> np.ndarray:
        """Binarize a copy of an RGBA crop.

        Args:
            image: RGBA raster
            threshold: Luminance threshold (0-255); pixels at or below are ink
            invert: If True, classify on 255 - luminance

        Returns:
            np.ndarray: Raster containing only opaque black and transparent pixels
        """
        self.validate_rgba(image)

        result = image.copy()
        binarize_image(result, threshold, invert)
        return result


def binarize_image(image: np.ndarray, threshold: int, invert: bool = False) -> np.ndarray:
    """Binarize an RGBA raster in place and return it.

    Pixels that are already fully transparent are left alone, so anything
    erased by an earlier stage stays erased. Every other pixel becomes
    solid black ink or fully transparent background.

    A second pass with the same settings is a no-op when ``invert`` is
    False. With ``invert`` the black output reads as background, so
    repeated inverted passes are not idempotent.
    """
    visible = image[:, :, 3] != 0
    ink = ink_mask(image, threshold, invert)

    image[visible & ink] = INK
    image[visible & ~ink] = BACKGROUND
    return image
