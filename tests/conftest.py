"""
Pytest configuration and shared fixtures for signature extractor tests.

Provides synthetic page rasters and helpers used across test modules.
"""

import sys
from pathlib import Path

import cv2
import numpy as np
import pytest

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def blank_raster(height: int, width: int) -> np.ndarray:
    """Opaque white RGBA raster."""
    return np.full((height, width, 4), 255, dtype=np.uint8)


# Word-like ink blocks, natural pixels on a 1600x1200 page (x0, x1, y0, y1)
SIGNATURE_WORDS = [(400, 520, 600, 660), (560, 680, 600, 660), (720, 840, 600, 660)]


@pytest.fixture
def white_page() -> np.ndarray:
    """Blank 1600x1200 page."""
    return blank_raster(1200, 1600)


@pytest.fixture
def signature_page() -> np.ndarray:
    """1600x1200 page with a three-word signature, a page frame and a divider."""
    page = blank_raster(1200, 1600)
    for x0, x1, y0, y1 in SIGNATURE_WORDS:
        page[y0:y1, x0:x1, :3] = 0
    # Page frame
    cv2.rectangle(page, (20, 20), (1579, 1179), (0, 0, 0, 255), 4)
    # Vertical divider
    page[200:1000, 1398:1402, :3] = 0
    return page


@pytest.fixture
def ruled_crop() -> np.ndarray:
    """20x40 crop: black top row, half-inked row 5, one grey ink stroke."""
    crop = blank_raster(20, 40)
    crop[0, :, :3] = 0
    crop[5, :20, :3] = 0
    crop[10:12, 8:14, :3] = 90
    return crop


@pytest.fixture
def gradient_raster() -> np.ndarray:
    """40x50 raster with a horizontal grey ramp and a few coloured pixels."""
    ramp = np.linspace(0, 255, 50).astype(np.uint8)
    raster = blank_raster(40, 50)
    raster[:, :, 0] = ramp
    raster[:, :, 1] = ramp
    raster[:, :, 2] = ramp
    raster[7, 7] = (200, 30, 30, 255)
    raster[8, 8] = (30, 30, 200, 255)
    return raster
