"""
Configuration loader with support for multiple formats and validation.

Loads JSON, YAML and TOML configuration files, substitutes environment
variables and validates the result against the pydantic models.
"""

import json
import os
import re
import tomllib
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError

from .models import Config
from ..exceptions import ConfigurationError

PathLike = Union[str, Path]

ENV_PREFIX = "SIG_"


def load_config(config_path: PathLike) -> Config:
    """
    Load configuration from file with automatic format detection.

    Args:
        config_path: Path to configuration file

    Returns:
        Validated configuration object

    Raises:
        ConfigurationError: If configuration cannot be loaded or is invalid
    """
    path = Path(config_path)

    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == '.json':
        config_data = _load_json(path)
    elif suffix in ['.yaml', '.yml']:
        config_data = _load_yaml(path)
    elif suffix == '.toml':
        config_data = _load_toml(path)
    else:
        raise ConfigurationError(f"Unsupported configuration format: {path.suffix}")

    config_data = _substitute_env_vars(config_data)
    return load_config_from_dict(config_data)


def load_config_from_dict(config_data: Dict[str, Any]) -> Config:
    """
    Load configuration from dictionary.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    try:
        return Config(**config_data)
    except ValidationError as e:
        error_details = []
        for error in e.errors():
            location = " -> ".join(str(x) for x in error['loc'])
            error_details.append(f"{location}: {error['msg']}")

        raise ConfigurationError(
            "Configuration validation failed:\n" + "\n".join(error_details)
        ) from e


def save_config(config: Config, output_path: PathLike) -> None:
    """
    Save configuration to a JSON or YAML file chosen by suffix.

    Raises:
        ConfigurationError: If configuration cannot be saved
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    format_type = path.suffix.lower().lstrip('.')
    config_dict = config.model_dump(mode="json")

    try:
        if format_type == 'json':
            with path.open('w', encoding='utf-8') as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        elif format_type in ['yaml', 'yml']:
            with path.open('w', encoding='utf-8') as f:
                yaml.safe_dump(config_dict, f, default_flow_style=False,
                               allow_unicode=True, indent=2, sort_keys=False)
        else:
            raise ConfigurationError(f"Unsupported format: {format_type}")
    except OSError as e:
        raise ConfigurationError(f"Error saving configuration to {path}: {e}") from e


def get_default_config() -> Config:
    """Get default configuration object."""
    return Config()


def _load_json(path: Path) -> Dict[str, Any]:
    """Load JSON configuration file."""
    try:
        with path.open('r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load YAML configuration file."""
    try:
        with path.open('r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e


def _load_toml(path: Path) -> Dict[str, Any]:
    """Load TOML configuration file."""
    try:
        with path.open('rb') as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e


def _substitute_env_vars(data: Any, prefix: str = ENV_PREFIX) -> Any:
    """
    Recursively substitute environment variables in configuration data.

    Strings of the form ${VAR} or ${VAR:default} are replaced; the prefixed
    name (SIG_VAR) is tried before the bare one.
    """
    if isinstance(data, dict):
        return {key: _substitute_env_vars(value, prefix) for key, value in data.items()}
    elif isinstance(data, list):
        return [_substitute_env_vars(item, prefix) for item in data]
    elif isinstance(data, str):
        return _substitute_env_var_string(data, prefix)
    else:
        return data


def _substitute_env_var_string(text: str, prefix: str) -> str:
    def replace_env_var(match):
        var_expr = match.group(1)

        if ':' in var_expr:
            var_name, default_value = var_expr.split(':', 1)
        else:
            var_name, default_value = var_expr, None

        for name in [f"{prefix}{var_name}", var_name]:
            if name in os.environ:
                return os.environ[name]

        if default_value is not None:
            return default_value
        return match.group(0)

    return re.sub(r'\$\{([^}]+)\}', replace_env_var, text)
