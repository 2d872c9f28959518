"""
Configuration module for the h3togeoboundary filter.
Environment defaults loaded through python-dotenv.
"""

from .settings import (
    ConfigurationError,
    FilterDefaults,
    LoggingConfig,
    Settings,
)

__all__ = [
    'Settings',
    'ConfigurationError',
    'FilterDefaults',
    'LoggingConfig'
]
