"""Local signature region detection.

Density grid, anisotropic dilation, 4-connected labeling and blob
filtering, in that order. Pure and synchronous; returns natural-space
rectangles ready for :func:`signature_extractor.crop_pipeline.crop`.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import numpy as np

from .config import DetectionConfig
from .exceptions import ImageLoadError
from .geometry import NaturalRect
from .processors import (
    build_density_grid,
    decode_image,
    dilate_grid,
    filter_blobs,
    label_blobs,
    load_image,
)

logger = logging.getLogger(__name__)


def detect(source: Optional[np.ndarray], config: Optional[DetectionConfig] = None) -> List[NaturalRect]:
    """Find signature candidate regions on a page raster.

    Args:
        source: RGBA page raster; None or an empty array yields no regions
        config: Detection parameters; defaults when None

    Returns:
        Rectangles in natural pixel space, possibly empty
    """
    if source is None or source.size == 0:
        return []
    if config is None:
        config = DetectionConfig()

    grid = build_density_grid(
        source,
        analysis_width=config.analysis_width,
        cell_size=config.cell_size,
        luminance_threshold=config.luminance_threshold,
    )
    dilated = dilate_grid(grid.cells, config.dilate_x, config.dilate_y)
    _, blobs = label_blobs(dilated)
    rects = filter_blobs(grid, blobs, config)

    logger.info("Detected %d candidate region(s) from %d blob(s)", len(rects), len(blobs))
    return rects


def detect_file(
    image: Union[str, Path, bytes], config: Optional[DetectionConfig] = None
) -> List[NaturalRect]:
    """Detect regions in an image file or encoded image bytes.

    An unreadable or undecodable image yields an empty list.
    """
    try:
        if isinstance(image, (bytes, bytearray)):
            source = decode_image(image)
        else:
            source = load_image(Path(image))
    except ImageLoadError as e:
        logger.warning("Cannot rasterize page, no regions detected: %s", e)
        return []
    return detect(source, config)
