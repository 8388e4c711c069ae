"""Ink/background classification shared by border removal and binarization."""

import numpy as np

from ..exceptions import ValidationError

# Rec.709 weights used by the crop pipeline
REC709_WEIGHTS = (0.2126, 0.7152, 0.0722)
# Rec.601 weights used by the region detector
REC601_WEIGHTS = (0.299, 0.587, 0.114)


def validate_threshold(threshold: float) -> None:
    """Reject thresholds outside the 8-bit luminance range."""
    if not 0 <= threshold <= 255:
        raise ValidationError("Threshold must be within [0, 255]", {"threshold": threshold})


def luminance(image: np.ndarray, weights=REC709_WEIGHTS) -> np.ndarray:
    """Per-pixel luminance of the RGB channels as float64. Alpha is ignored."""
    rgb = image[:, :, :3].astype(np.float64)
    return rgb[:, :, 0] * weights[0] + rgb[:, :, 1] * weights[1] + rgb[:, :, 2] * weights[2]


def is_ink(r: int, g: int, b: int, threshold: float, invert: bool = False) -> bool:
    """Classify a single pixel. Same rule as :func:`ink_mask`."""
    value = REC709_WEIGHTS[0] * r + REC709_WEIGHTS[1] * g + REC709_WEIGHTS[2] * b
    if invert:
        value = 255 - value
    return value <= threshold


def ink_mask(image: np.ndarray, threshold: float, invert: bool = False) -> np.ndarray:
    """Boolean H x W array, True where the pixel is ink.

    Ink means luminance (or 255 - luminance when ``invert``) at or below
    ``threshold``.
    """
    validate_threshold(threshold)
    value = luminance(image)
    if invert:
        value = 255 - value
    return value <= threshold
