"""
Unified configuration loading interface for the h3togeoboundary filter.

This module merges configuration from multiple sources into a single
RunConfig, highest precedence first:
- Command-line arguments
- YAML profile passed with --config
- H3BOUNDARY_* environment variables (and .env)
- Built-in defaults
"""

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from .config.settings import ConfigurationError, Settings
from .domain.enums import ErrorPolicy, OutputMode
from .domain.models import RunConfig

logger = logging.getLogger(__name__)

PROFILE_KEYS = (
    "output_mode",
    "kml_name",
    "kml_description",
    "on_error",
    "close_on_error",
    "max_record_length",
)


def load_profile(config_path: str | Path) -> dict[str, Any]:
    """
    Load a YAML run profile.

    Args:
        config_path: Path to YAML profile file

    Returns:
        Mapping of profile keys to values (empty for an empty file)

    Raises:
        ConfigurationError: If the file is missing, unparsable or has unknown keys
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding='utf-8') as f:
            profile = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if profile is None:
        return {}
    if not isinstance(profile, dict):
        raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")

    unknown = sorted(set(profile) - set(PROFILE_KEYS))
    if unknown:
        raise ConfigurationError(
            f"Unknown keys in {config_path}: {', '.join(unknown)}. "
            f"Allowed: {', '.join(PROFILE_KEYS)}"
        )

    logger.debug(f"Loaded profile {config_path}: {profile}")
    return profile


def build_run_config(
    output_mode: Optional[str] = None,
    kml_name: Optional[str] = None,
    kml_description: Optional[str] = None,
    on_error: Optional[ErrorPolicy] = None,
    close_on_error: Optional[bool] = None,
    max_record_length: Optional[int] = None,
    config_path: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> RunConfig:
    """
    Merge CLI arguments, profile and environment defaults into a RunConfig.

    Arguments left as None fall through to the next source.

    Raises:
        ConfigurationError: If any source holds an invalid value
    """
    settings = settings or Settings()
    merged: dict[str, Any] = settings.defaults.as_dict()
    merged["output_mode"] = OutputMode.PLAIN_TEXT

    if config_path:
        merged.update(load_profile(config_path))

    cli_values = {
        "output_mode": output_mode,
        "kml_name": kml_name,
        "kml_description": kml_description,
        "on_error": on_error,
        "close_on_error": close_on_error,
        "max_record_length": max_record_length,
    }
    merged.update({key: value for key, value in cli_values.items() if value is not None})

    merged["output_mode"] = OutputMode.parse(merged["output_mode"])

    try:
        return RunConfig(**merged)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"Invalid run configuration: {details}") from e
