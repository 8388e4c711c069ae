"""
Configuration system with Pydantic models and validation.

Provides configuration management with type safety, validation, and
support for JSON, YAML and TOML files.
"""

from .models import (
    Config,
    ProcessingSettings,
    BorderRemovalConfig,
    DetectionConfig,
    OutputConfig,
    LoggingConfig,
    LogLevel,
)
from .loader import (
    load_config,
    load_config_from_dict,
    save_config,
    get_default_config,
)

__all__ = [
    # Configuration models
    "Config",
    "ProcessingSettings",
    "BorderRemovalConfig",
    "DetectionConfig",
    "OutputConfig",
    "LoggingConfig",
    "LogLevel",
    # Configuration loading
    "load_config",
    "load_config_from_dict",
    "save_config",
    "get_default_config",
]
