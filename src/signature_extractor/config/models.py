"""
Pydantic models for signature extractor configuration.

Defines configuration schemas with validation, defaults and documentation
for the crop pipeline, the region detector and the batch runner. The
defaults reproduce the empirically tuned constants of the extractor.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class LogLevel(str, Enum):
    """Supported logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ProcessingSettings(BaseModel):
    """Per-invocation settings for the crop pipeline.

    Immutable: re-processing with other settings validates a new value.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    enhance: bool = Field(
        default=True,
        description="Binarize the crop to opaque black ink on transparency"
    )
    threshold: int = Field(
        default=160,
        ge=0,
        le=255,
        description="Luminance at or below which a pixel counts as ink"
    )
    invert: bool = Field(
        default=False,
        description="Classify on 255 - luminance (light ink on dark paper)"
    )
    remove_borders: bool = Field(
        default=False,
        description="Erase ruled lines and box borders before binarization"
    )


class BorderRemovalConfig(BaseModel):
    """Configuration for ruled-line suppression."""

    density_threshold: float = Field(
        default=0.65,
        gt=0.0,
        le=1.0,
        description="Ink fraction a row/column must exceed to be erased"
    )


class DetectionConfig(BaseModel):
    """Configuration for density-grid signature region detection."""

    analysis_width: int = Field(
        default=800,
        gt=0,
        description="Width the page is resampled to before analysis"
    )
    cell_size: int = Field(
        default=10,
        gt=0,
        description="Grid cell size in analysis pixels"
    )
    luminance_threshold: int = Field(
        default=180,
        ge=0,
        le=255,
        description="Analysis pixels darker than this are ink"
    )
    dilate_x: int = Field(default=2, ge=0, description="Horizontal dilation radius in cells")
    dilate_y: int = Field(default=1, ge=0, description="Vertical dilation radius in cells")
    min_width_fraction: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Blobs narrower than this fraction of the grid are noise"
    )
    min_height_fraction: float = Field(
        default=0.02,
        ge=0.0,
        le=1.0,
        description="Blobs shorter than this fraction of the grid are noise"
    )
    max_width_fraction: float = Field(
        default=0.90,
        ge=0.0,
        le=1.0,
        description="Width fraction above which a tall blob is the page border"
    )
    page_height_fraction: float = Field(
        default=0.9,
        ge=0.0,
        le=1.0,
        description="Height fraction above which a wide blob is the page border"
    )
    max_aspect: float = Field(
        default=4.0,
        gt=0.0,
        description="Blobs taller than max_aspect * width are vertical dividers"
    )
    padding_cells: int = Field(
        default=1,
        ge=0,
        description="Cells added on every side of a surviving blob"
    )

    @model_validator(mode="after")
    def validate_size_fractions(self) -> "DetectionConfig":
        """Validate that the noise floor sits below the page-border ceiling."""
        if self.min_width_fraction > self.max_width_fraction:
            raise ValueError("min_width_fraction must not exceed max_width_fraction")
        return self


class OutputConfig(BaseModel):
    """Output configuration for batch extraction."""

    output_dir: str = Field(
        default="output/signatures",
        description="Directory receiving extracted PNG files"
    )
    name_prefix: str = Field(
        default="sig",
        description="Infix used in extracted file names (<stem>_<prefix>_<n>.png)"
    )
    write_summary: bool = Field(
        default=True,
        description="Write extraction_summary.json next to the PNG files"
    )

    @field_validator("output_dir")
    @classmethod
    def validate_directory_path(cls, v: str) -> str:
        """Validate directory path format."""
        if not v:
            raise ValueError("Directory path must be a non-empty string")
        return v.replace('\\', '/')


class LoggingConfig(BaseModel):
    """Configuration for logging setup."""

    level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Base logging level"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional log file path"
    )
    use_rich: bool = Field(
        default=True,
        description="Whether to use rich console output"
    )
    format_style: str = Field(
        default="detailed",
        pattern="^(simple|detailed|minimal)$",
        description="Logging format style"
    )


class Config(BaseModel):
    """Main configuration model for the signature extractor."""

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        use_enum_values=True,
    )

    processing: ProcessingSettings = Field(
        default_factory=ProcessingSettings,
        description="Default crop pipeline settings"
    )
    border_removal: BorderRemovalConfig = Field(
        default_factory=BorderRemovalConfig,
        description="Ruled-line suppression configuration"
    )
    detection: DetectionConfig = Field(
        default_factory=DetectionConfig,
        description="Region detection configuration"
    )
    output: OutputConfig = Field(
        default_factory=OutputConfig,
        description="Output configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration"
    )
    max_workers: int = Field(
        default=1,
        ge=1,
        description="Worker processes used to crop detected regions"
    )

    version: str = Field(
        default="1.0.0",
        description="Configuration version"
    )
    description: Optional[str] = Field(
        default=None,
        description="Configuration description"
    )
