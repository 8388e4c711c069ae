"""Parallel cropping of many regions from one page."""

import logging
from functools import partial
from multiprocessing import Pool, cpu_count
from typing import List, Optional

import numpy as np
from tqdm import tqdm

from .config import ProcessingSettings
from .crop_pipeline import DEFAULT_BORDER_DENSITY, crop
from .geometry import NaturalRect
from .processors.mask_compositing import MaskLike

logger = logging.getLogger(__name__)


def _crop_worker(
    rect: NaturalRect,
    source: np.ndarray,
    settings: ProcessingSettings,
    mask: Optional[MaskLike],
    border_density: float,
) -> bytes:
    """Worker function: every task gets its own copy of the source."""
    return crop(source, rect, settings, mask, border_density)


def extract_regions(
    source: np.ndarray,
    rects: List[NaturalRect],
    settings: Optional[ProcessingSettings] = None,
    mask: Optional[MaskLike] = None,
    max_workers: Optional[int] = None,
    border_density: float = DEFAULT_BORDER_DENSITY,
    show_progress: bool = False,
) -> List[bytes]:
    """Crop every rectangle of ``rects`` from ``source``.

    Args:
        source: RGBA page raster (read-only)
        rects: Regions in natural pixel space
        settings: Processing settings shared by all regions
        mask: Optional edit mask applied to every region
        max_workers: Worker processes (default: CPU count - 1); 1 runs in-process
        border_density: Ink fraction above which a row/column is a ruled line
        show_progress: Whether to show a progress bar

    Returns:
        PNG bytes per rectangle, in input order (empty bytes for empty crops)
    """
    if settings is None:
        settings = ProcessingSettings()
    if not rects:
        return []

    worker = partial(
        _crop_worker,
        source=source,
        settings=settings,
        mask=mask,
        border_density=border_density,
    )

    max_workers = max_workers or max(1, cpu_count() - 1)
    max_workers = min(max_workers, len(rects))

    if max_workers == 1:
        iterator = tqdm(rects, desc="Cropping regions", unit="region", disable=not show_progress)
        return [worker(rect) for rect in iterator]

    logger.debug("Cropping %d regions with %d workers", len(rects), max_workers)
    with Pool(processes=max_workers) as pool:
        results = pool.imap(worker, rects)
        return list(tqdm(results, total=len(rects), desc="Cropping regions",
                         unit="region", disable=not show_progress))
