"""
Custom exceptions for the signature extractor.

Provides a hierarchy of exceptions for the errors that can occur while
loading rasters, cropping regions and talking to external detectors.
Degenerate geometry and "nothing found" are never errors; they are
reported through empty results instead.
"""

from typing import Optional, Any


class SignatureExtractorError(Exception):
    """Base exception for all signature extractor errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} (Details: {details_str})"
        return self.message


class ConfigurationError(SignatureExtractorError):
    """Raised when there are configuration-related errors."""
    pass


class ValidationError(SignatureExtractorError):
    """Raised when caller input violates a contract (e.g. threshold out of range)."""
    pass


class ProcessingError(SignatureExtractorError):
    """Raised when image processing operations fail."""

    def __init__(self, message: str, processor: Optional[str] = None,
                 image_path: Optional[str] = None, **kwargs: Any) -> None:
        details = kwargs
        if processor:
            details["processor"] = processor
        if image_path:
            details["image_path"] = image_path
        super().__init__(message, details)


class ImageLoadError(ProcessingError):
    """Raised when an image cannot be loaded or decoded."""
    pass


class ImageSaveError(ProcessingError):
    """Raised when an image cannot be encoded or saved."""
    pass


class MaskLoadError(ProcessingError):
    """Raised when edit mask data is malformed or unavailable."""
    pass


class VisionResponseError(SignatureExtractorError):
    """Raised when a vision model response cannot be parsed."""
    pass
