"""Rectangles tagged with the coordinate space they live in.

Natural rectangles are absolute pixels of the full-resolution source image;
normalized rectangles are fractions (0.0-1.0) of a displayed image extent.
The two are separate types so they cannot be passed for one another.
"""

import math
from dataclasses import dataclass, asdict
from typing import Dict, Optional


@dataclass(frozen=True)
class PixelBox:
    """Integer crop window, already clamped to a raster."""

    x: int
    y: int
    width: int
    height: int

    def slices(self):
        """Row and column slices selecting this box from an H x W array."""
        return slice(self.y, self.y + self.height), slice(self.x, self.x + self.width)


@dataclass(frozen=True)
class NaturalRect:
    """Rectangle in natural (source pixel) space."""

    x: float
    y: float
    width: float
    height: float

    def clamp_to(self, image_width: int, image_height: int) -> Optional[PixelBox]:
        """Clamp to the image bounds.

        Negative origins are truncated to 0 and extents are cut so that
        origin + extent never exceeds the image. Returns None when the
        remaining area is not positive.
        """
        x0 = max(0, math.floor(self.x))
        y0 = max(0, math.floor(self.y))
        width = min(image_width - x0, int(round(self.width)))
        height = min(image_height - y0, int(round(self.height)))
        if width <= 0 or height <= 0:
            return None
        return PixelBox(x0, y0, width, height)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class NormalizedRect:
    """Rectangle in normalized (0.0-1.0) space."""

    x: float
    y: float
    width: float
    height: float

    def to_natural(self, natural_width: int, natural_height: int) -> NaturalRect:
        """Scale into natural pixel space of an image of the given size."""
        return NaturalRect(
            x=self.x * natural_width,
            y=self.y * natural_height,
            width=self.width * natural_width,
            height=self.height * natural_height,
        )
