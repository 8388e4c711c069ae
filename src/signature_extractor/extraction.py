"""Extraction records: a processed crop plus everything needed to redo it.

Records are immutable. Changing settings or the edit mask re-runs the
crop pipeline against the source page and yields a new record; the edit
mask travels with the record so manual erasing survives re-thresholding.
"""

import logging
import time
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Union

import numpy as np

from .config import DetectionConfig, ProcessingSettings
from .crop_pipeline import DEFAULT_BORDER_DENSITY, crop
from .detection import detect
from .geometry import NaturalRect, NormalizedRect
from .processors import encode_mask
from .vision import to_natural_rects

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex[:8]


@dataclass(frozen=True)
class Extraction:
    """One extracted region of one source page."""

    natural_crop: NaturalRect
    image: bytes
    settings: ProcessingSettings
    name: str
    source_index: int = 0
    mask: Optional[bytes] = None
    id: str = field(default_factory=_new_id)
    timestamp: float = field(default_factory=time.time)

    @property
    def is_empty(self) -> bool:
        """True when the crop had no area and produced no image."""
        return not self.image

    def with_settings(
        self,
        source: np.ndarray,
        border_density: float = DEFAULT_BORDER_DENSITY,
        **updates: Any,
    ) -> "Extraction":
        """Re-process with updated settings, keeping the edit mask."""
        settings = ProcessingSettings(**{**self.settings.model_dump(), **updates})
        image = crop(source, self.natural_crop, settings, self.mask, border_density)
        return replace(self, settings=settings, image=image)

    def with_mask(
        self,
        source: np.ndarray,
        mask: Optional[Union[bytes, np.ndarray]],
        border_density: float = DEFAULT_BORDER_DENSITY,
    ) -> "Extraction":
        """Re-process with a new edit mask (None clears it).

        Array masks (2-D, RGB or RGBA) are stored as single-channel PNG bytes.
        """
        if isinstance(mask, np.ndarray):
            mask = encode_mask(mask)
        image = crop(source, self.natural_crop, self.settings, mask, border_density)
        return replace(self, mask=mask, image=image)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly summary (image bytes omitted)."""
        return {
            "id": self.id,
            "name": self.name,
            "source_index": self.source_index,
            "natural_crop": self.natural_crop.to_dict(),
            "settings": self.settings.model_dump(),
            "has_mask": self.mask is not None,
            "timestamp": self.timestamp,
        }


def create_extraction(
    source: np.ndarray,
    rect: NaturalRect,
    settings: Optional[ProcessingSettings] = None,
    mask: Optional[bytes] = None,
    name: Optional[str] = None,
    source_index: int = 0,
    border_density: float = DEFAULT_BORDER_DENSITY,
    number: int = 1,
) -> Extraction:
    """Run the crop pipeline once and wrap the result in a record.

    Unnamed records are called ``Signature_<number>``.
    """
    if settings is None:
        settings = ProcessingSettings()
    image = crop(source, rect, settings, mask, border_density)
    return Extraction(
        natural_crop=rect,
        image=image,
        settings=settings,
        name=name or f"Signature_{number}",
        source_index=source_index,
        mask=mask,
    )


def extract_detected(
    source: np.ndarray,
    settings: Optional[ProcessingSettings] = None,
    config: Optional[DetectionConfig] = None,
    source_index: int = 0,
    start_number: int = 1,
) -> List[Extraction]:
    """Detect candidate regions locally and extract each one."""
    rects = detect(source, config)
    return [
        create_extraction(source, rect, settings,
                          name=f"Auto_Sig_{start_number + i}", source_index=source_index)
        for i, rect in enumerate(rects)
    ]


def extract_normalized(
    source: np.ndarray,
    rects: List[NormalizedRect],
    settings: Optional[ProcessingSettings] = None,
    source_index: int = 0,
    start_number: int = 1,
    min_size: float = 5,
) -> List[Extraction]:
    """Extract regions reported in normalized space (e.g. by a vision model).

    Regions of ``min_size`` natural pixels or less in either dimension are
    dropped.
    """
    height, width = source.shape[:2]
    return [
        create_extraction(source, rect, settings,
                          name=f"Vision_Sig_{start_number + i}", source_index=source_index)
        for i, rect in enumerate(to_natural_rects(rects, width, height, min_size))
    ]
