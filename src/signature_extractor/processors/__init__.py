"""Signature Extractor Processors Module.

This module provides the raster and grid processing stages used by the
crop pipeline and the region detector. Each processor handles one step.
"""

# Base processor
from .base import BaseProcessor

# Image I/O
from .image_io import (
    load_image,
    decode_image,
    decode_mask,
    encode_png,
    encode_mask,
    save_image,
    get_image_files,
    to_rgba,
)

# Ink classification
from .luminance import (
    is_ink,
    ink_mask,
    luminance,
)

# Border removal
from .border_removal import (
    BorderRemovalProcessor,
    find_border_lines,
    remove_borders,
)

# Binarization
from .binarize import (
    BinarizeProcessor,
    binarize_image,
)

# Edit mask
from .mask_compositing import (
    MaskCompositingProcessor,
    apply_edit_mask,
)

# Region detection stages
from .density_grid import (
    DensityGrid,
    DensityGridProcessor,
    build_density_grid,
)
from .dilation import (
    dilate_grid,
)
from .blob_labeling import (
    Blob,
    label_blobs,
)
from .blob_filter import (
    rejection_reason,
    blob_to_rect,
    filter_blobs,
)

__all__ = [
    # Base
    "BaseProcessor",

    # Image I/O
    "load_image",
    "decode_image",
    "decode_mask",
    "encode_png",
    "encode_mask",
    "save_image",
    "get_image_files",
    "to_rgba",

    # Ink classification
    "is_ink",
    "ink_mask",
    "luminance",

    # Border removal
    "BorderRemovalProcessor",
    "find_border_lines",
    "remove_borders",

    # Binarization
    "BinarizeProcessor",
    "binarize_image",

    # Edit mask
    "MaskCompositingProcessor",
    "apply_edit_mask",

    # Region detection
    "DensityGrid",
    "DensityGridProcessor",
    "build_density_grid",
    "dilate_grid",
    "Blob",
    "label_blobs",
    "rejection_reason",
    "blob_to_rect",
    "filter_blobs",
]
