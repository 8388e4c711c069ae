"""Anisotropic dilation of the activity grid."""

import cv2
import numpy as np


def dilate_grid(cells: np.ndarray, dilate_x: int = 2, dilate_y: int = 1) -> np.ndarray:
    """Return a new grid where every active cell also activates its neighbourhood.

    The neighbourhood reaches ``dilate_x`` cells left/right and ``dilate_y``
    cells up/down, so words on one line join while separate lines do not.
    Every cell is read from the undilated input; the input is not modified.
    """
    kernel = np.ones((2 * dilate_y + 1, 2 * dilate_x + 1), dtype=np.uint8)
    # Out-of-grid cells never contribute
    dilated = cv2.dilate(
        cells.astype(np.uint8), kernel,
        borderType=cv2.BORDER_CONSTANT, borderValue=0,
    )
    return dilated.astype(bool)
