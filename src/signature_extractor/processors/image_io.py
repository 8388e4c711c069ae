"""Image I/O utilities for loading, decoding and encoding rasters.

Every raster handed to the pipeline is an H x W x 4 ``uint8`` array in
RGBA channel order. OpenCV works in BGR(A), so conversion happens here
and nowhere else.
"""

from pathlib import Path
from typing import List, Union

import cv2
import numpy as np

from ..exceptions import ImageLoadError, ImageSaveError, MaskLoadError

IMAGE_EXTENSIONS = [".jpg", ".jpeg", ".png", ".tiff", ".tif", ".bmp"]


def to_rgba(image: np.ndarray) -> np.ndarray:
    """Convert an OpenCV-decoded array (gray, BGR or BGRA) to RGBA uint8."""
    if image.dtype == np.uint16:
        image = (image >> 8).astype(np.uint8)
    elif image.dtype != np.uint8:
        raise ValueError(f"Unsupported image dtype: {image.dtype}")

    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    if image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    raise ValueError(f"Unsupported channel count: {image.shape[2]}")


def load_image(image_path: Path) -> np.ndarray:
    """Load image from file as an RGBA raster.

    Raises:
        ImageLoadError: If the image cannot be read or decoded
    """
    image = cv2.imread(str(image_path), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise ImageLoadError("Could not load image", image_path=str(image_path))
    try:
        return to_rgba(image)
    except ValueError as e:
        raise ImageLoadError(str(e), image_path=str(image_path)) from e


def decode_image(data: bytes) -> np.ndarray:
    """Decode encoded image bytes (PNG, JPEG, ...) into an RGBA raster.

    Raises:
        ImageLoadError: If the bytes are empty or not a decodable image
    """
    if not data:
        raise ImageLoadError("Cannot decode empty image data")
    buffer = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_UNCHANGED)
    if image is None:
        raise ImageLoadError("Could not decode image data", size=len(data))
    try:
        return to_rgba(image)
    except ValueError as e:
        raise ImageLoadError(str(e)) from e


def decode_mask(mask: Union[bytes, np.ndarray]) -> np.ndarray:
    """Return the boolean "erased" plane of an edit mask.

    RGBA masks mark erased pixels through a non-zero alpha; masks without
    an alpha channel are opaque, so any non-zero channel value marks ink.

    Raises:
        MaskLoadError: If the mask is malformed or cannot be decoded
    """
    if isinstance(mask, (bytes, bytearray)):
        if not mask:
            raise MaskLoadError("Empty mask data", processor="mask")
        image = cv2.imdecode(np.frombuffer(mask, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
        if image is None:
            raise MaskLoadError("Could not decode mask data", processor="mask")
        if image.ndim == 3 and image.shape[2] == 4:
            return image[:, :, 3] > 0
        if image.ndim == 3:
            return np.any(image > 0, axis=2)
        return image > 0

    if not isinstance(mask, np.ndarray) or mask.size == 0:
        raise MaskLoadError("Mask must be encoded bytes or a non-empty array", processor="mask")
    # In-memory masks follow the raster convention (RGBA)
    if mask.ndim == 3 and mask.shape[2] == 4:
        return mask[:, :, 3] > 0
    if mask.ndim == 3:
        return np.any(mask > 0, axis=2)
    if mask.ndim == 2:
        return mask > 0
    raise MaskLoadError(f"Unsupported mask shape {mask.shape}", processor="mask")


def encode_png(image: np.ndarray) -> bytes:
    """Encode an RGBA raster as PNG bytes (lossless, alpha preserved).

    Raises:
        ImageSaveError: If encoding fails
    """
    if image is None or image.size == 0:
        raise ImageSaveError("Cannot encode an empty raster")
    ok, buffer = cv2.imencode(".png", cv2.cvtColor(image, cv2.COLOR_RGBA2BGRA))
    if not ok:
        raise ImageSaveError("PNG encoding failed", shape=image.shape)
    return buffer.tobytes()


def encode_mask(mask: Union[bytes, np.ndarray]) -> bytes:
    """Encode any accepted edit mask as a single-channel PNG (255 = erased).

    Raises:
        MaskLoadError: If the mask is malformed
        ImageSaveError: If encoding fails
    """
    erased = decode_mask(mask)
    ok, buffer = cv2.imencode(".png", erased.astype(np.uint8) * 255)
    if not ok:
        raise ImageSaveError("Mask PNG encoding failed", shape=erased.shape)
    return buffer.tobytes()


def save_image(data: Union[bytes, np.ndarray], output_path: Path) -> None:
    """Save PNG bytes or an RGBA raster to file.

    Raises:
        ImageSaveError: If there is nothing to save or writing fails
    """
    if isinstance(data, np.ndarray):
        data = encode_png(data)
    if not data:
        raise ImageSaveError("Cannot save empty image", image_path=str(output_path))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        output_path.write_bytes(data)
    except OSError as e:
        raise ImageSaveError(f"Could not write image: {e}", image_path=str(output_path)) from e


def get_image_files(directory: Path) -> List[Path]:
    """Get all image files from directory, sorted."""
    image_files = set()  # Use set to avoid duplicates on case-insensitive filesystems

    for ext in IMAGE_EXTENSIONS:
        image_files.update(directory.glob(f"*{ext}"))
        image_files.update(directory.glob(f"*{ext.upper()}"))

    return sorted(image_files)
