"""Signature region detection and extraction from scanned documents."""

__version__ = "1.0.0"
__author__ = "Signature Extractor Team"

from .config import Config, DetectionConfig, ProcessingSettings
from .crop_pipeline import crop, crop_raster
from .detection import detect, detect_file
from .extraction import Extraction, create_extraction, extract_detected, extract_normalized
from .geometry import NaturalRect, NormalizedRect, PixelBox
from .pipeline import SignatureExtractionPipeline

__all__ = [
    "Config",
    "DetectionConfig",
    "ProcessingSettings",
    "crop",
    "crop_raster",
    "detect",
    "detect_file",
    "Extraction",
    "create_extraction",
    "extract_detected",
    "extract_normalized",
    "NaturalRect",
    "NormalizedRect",
    "PixelBox",
    "SignatureExtractionPipeline",
]
