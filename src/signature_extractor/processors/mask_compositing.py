"""Subtract a user edit mask (eraser strokes) from a processed crop."""

import logging
from typing import Optional, Union

import cv2
import numpy as np

from .base import BaseProcessor
from .image_io import decode_mask
from ..exceptions import MaskLoadError

logger = logging.getLogger(__name__)

TRANSPARENT = np.array([255, 255, 255, 0], dtype=np.uint8)

MaskLike = Union[bytes, np.ndarray]


class MaskCompositingProcessor(BaseProcessor):
    """Processor applying an edit mask to a copy of a crop."""

    def process(self, image: np.ndarray, mask: Optional[MaskLike] = None, **kwargs) -> np.ndarray:
        """Return a copy of ``image`` with masked pixels made transparent."""
        self.validate_rgba(image)
        result = image.copy()
        apply_edit_mask(result, mask)
        return result


def erased_region(mask: MaskLike, width: int, height: int) -> np.ndarray:
    """Boolean map of erased pixels, stretched to ``width`` x ``height``.

    Raises:
        MaskLoadError: If the mask cannot be decoded
    """
    erased = decode_mask(mask)
    if erased.shape != (height, width):
        logger.debug("Resizing mask from %s to %dx%d", erased.shape, width, height)
        erased = cv2.resize(
            erased.astype(np.uint8), (width, height), interpolation=cv2.INTER_NEAREST
        ) > 0
    return erased


def apply_edit_mask(image: np.ndarray, mask: Optional[MaskLike]) -> bool:
    """Make every masked pixel of ``image`` fully transparent, in place.

    A missing or undecodable mask is skipped with a warning and the image
    is left as it was.

    Returns:
        bool: True if the mask was applied
    """
    if mask is None:
        return False

    height, width = image.shape[:2]
    try:
        erased = erased_region(mask, width, height)
    except MaskLoadError as e:
        logger.warning("Skipping edit mask: %s", e)
        return False

    image[erased] = TRANSPARENT
    return True
