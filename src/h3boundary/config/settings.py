"""
Environment configuration for the h3togeoboundary filter.

Usage:
    from h3boundary.config.settings import Settings
    settings = Settings()
    settings.defaults.kml_name

Environment Variables:
    H3BOUNDARY_KML_NAME: Default <name> for KML output
    H3BOUNDARY_KML_DESCRIPTION: Default <description> for KML output
    H3BOUNDARY_ON_ERROR: Per-record error policy (fail|skip)
    H3BOUNDARY_CLOSE_ON_ERROR: Write the KML footer on failed runs (true|false)
    H3BOUNDARY_MAX_RECORD_LENGTH: Maximum characters per input line (0 = unbounded)
    H3BOUNDARY_LOG_LEVEL: Log level when --verbose is not given
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from ..domain.enums import ErrorPolicy
from ..domain.models import DEFAULT_KML_DESCRIPTION, DEFAULT_KML_NAME, DEFAULT_MAX_RECORD_LENGTH

logger = logging.getLogger(__name__)

ENV_PREFIX = "H3BOUNDARY_"
_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(Exception):
    """Raised when configuration is invalid or incomplete."""
    pass


@dataclass
class FilterDefaults:
    """Defaults applied when neither the CLI nor a profile sets a value."""
    kml_name: str = DEFAULT_KML_NAME
    kml_description: str = DEFAULT_KML_DESCRIPTION
    on_error: ErrorPolicy = ErrorPolicy.FAIL
    close_on_error: bool = False
    max_record_length: int = DEFAULT_MAX_RECORD_LENGTH

    def __post_init__(self):
        """Validate filter defaults."""
        if self.max_record_length < 0:
            raise ValueError("Maximum record length must be non-negative")

    def as_dict(self) -> dict[str, Any]:
        return {
            "kml_name": self.kml_name,
            "kml_description": self.kml_description,
            "on_error": self.on_error,
            "close_on_error": self.close_on_error,
            "max_record_length": self.max_record_length,
        }


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "WARNING"

    def __post_init__(self):
        """Validate log level."""
        self.level = self.level.upper()
        if self.level not in _LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {', '.join(_LOG_LEVELS)}")


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean (true/false), got '{raw}'")


class Settings:
    """
    Environment-backed settings for the filter.

    Environment variables loaded (in order of preference):
    1. Explicit environment file passed to constructor
    2. .env file in the current working directory
    3. System environment variables

    Variables already present in the process environment win over .env
    files (python-dotenv does not override by default).
    """

    def __init__(self, env_file: Optional[Path] = None, environ: Optional[dict[str, str]] = None):
        """
        Initialize settings.

        Args:
            env_file: Explicit path to environment file
            environ: Mapping to read instead of os.environ (no .env loading)
        """
        if environ is None:
            self._load_environment_variables(env_file)
            environ = dict(os.environ)
        self._environ = environ

        self._load_defaults()
        self._load_logging_config()

    def _load_environment_variables(self, env_file: Optional[Path]) -> None:
        """Load environment variables from appropriate source."""
        if env_file:
            if not env_file.exists():
                raise ConfigurationError(f"Specified env file not found: {env_file}")
            load_dotenv(env_file)
            logger.debug(f"Loaded configuration from {env_file}")
            return

        generic_env_file = Path.cwd() / ".env"
        if generic_env_file.exists():
            load_dotenv(generic_env_file)
            logger.debug(f"Loaded generic config: {generic_env_file}")

    def _get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._environ.get(f"{ENV_PREFIX}{key}", default)

    def _load_defaults(self) -> None:
        """Load filter defaults with built-in fallbacks."""
        kml_name = self._get("KML_NAME", DEFAULT_KML_NAME)
        kml_description = self._get("KML_DESCRIPTION", DEFAULT_KML_DESCRIPTION)
        on_error_raw = self._get("ON_ERROR", ErrorPolicy.FAIL.value)
        close_on_error_raw = self._get("CLOSE_ON_ERROR", "false")
        max_length_raw = self._get("MAX_RECORD_LENGTH", str(DEFAULT_MAX_RECORD_LENGTH))

        try:
            on_error = ErrorPolicy(on_error_raw.strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"{ENV_PREFIX}ON_ERROR must be one of: "
                f"{', '.join(p.value for p in ErrorPolicy)} (got '{on_error_raw}')"
            ) from None

        try:
            max_record_length = int(max_length_raw)
        except ValueError:
            raise ConfigurationError(
                f"{ENV_PREFIX}MAX_RECORD_LENGTH must be an integer (got '{max_length_raw}')"
            ) from None

        try:
            self.defaults = FilterDefaults(
                kml_name=kml_name,
                kml_description=kml_description,
                on_error=on_error,
                close_on_error=_parse_bool(f"{ENV_PREFIX}CLOSE_ON_ERROR", close_on_error_raw),
                max_record_length=max_record_length,
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid filter configuration: {e}")

    def _load_logging_config(self) -> None:
        """Load logging configuration."""
        try:
            self.logging = LoggingConfig(level=self._get("LOG_LEVEL", "WARNING"))
        except ValueError as e:
            raise ConfigurationError(f"Invalid logging configuration: {e}")
