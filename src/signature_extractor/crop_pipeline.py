"""Crop pipeline: cut a rectangle out of a page and clean it up.

Stages run in a fixed order on one buffer owned by the pipeline:
border removal, binarization, then the edit mask. The source raster is
only ever read.
"""

import logging
from typing import Optional

import numpy as np

from .config import ProcessingSettings
from .geometry import NaturalRect
from .processors import (
    apply_edit_mask,
    binarize_image,
    encode_png,
    remove_borders,
)
from .processors.mask_compositing import MaskLike

logger = logging.getLogger(__name__)

DEFAULT_BORDER_DENSITY = 0.65


def crop_raster(
    source: np.ndarray,
    rect: NaturalRect,
    settings: Optional[ProcessingSettings] = None,
    mask: Optional[MaskLike] = None,
    border_density: float = DEFAULT_BORDER_DENSITY,
) -> Optional[np.ndarray]:
    """Run the crop pipeline and return the processed RGBA raster.

    Args:
        source: RGBA page raster (not modified)
        rect: Region in natural pixel space
        settings: Processing settings; defaults when None
        mask: Optional edit mask (PNG bytes or array) aligned with the crop
        border_density: Ink fraction above which a row/column is a ruled line

    Returns:
        The processed crop, or None when the clamped region is empty
    """
    if settings is None:
        settings = ProcessingSettings()

    height, width = source.shape[:2]
    box = rect.clamp_to(width, height)
    if box is None:
        logger.debug("Nothing to crop: %s outside %dx%d image", rect, width, height)
        return None

    rows, cols = box.slices()
    output = source[rows, cols].copy()

    if settings.remove_borders:
        remove_borders(output, settings.threshold, settings.invert, border_density)
    if settings.enhance:
        binarize_image(output, settings.threshold, settings.invert)
    if mask is not None:
        apply_edit_mask(output, mask)

    return output


def crop(
    source: np.ndarray,
    rect: NaturalRect,
    settings: Optional[ProcessingSettings] = None,
    mask: Optional[MaskLike] = None,
    border_density: float = DEFAULT_BORDER_DENSITY,
) -> bytes:
    """Crop, clean and PNG-encode a region of ``source``.

    Returns empty bytes when the clamped rectangle has no area; callers
    check for emptiness before using the result. Identical arguments give
    byte-identical output.
    """
    output = crop_raster(source, rect, settings, mask, border_density)
    if output is None:
        return b""
    return encode_png(output)
