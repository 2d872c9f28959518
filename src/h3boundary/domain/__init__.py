"""
Domain Models and Types

This module contains the run configuration model and the enumerations used
throughout the filter.

Models:
- RunConfig: Output mode, KML naming and error-handling options

Enums:
- OutputMode: Output protocols (plain text, KML)
- ErrorPolicy: Per-record error handling (fail, skip)
"""

from .enums import ErrorPolicy, OutputMode
from .models import DEFAULT_KML_DESCRIPTION, DEFAULT_KML_NAME, DEFAULT_MAX_RECORD_LENGTH, RunConfig

__all__ = [
    "RunConfig", "OutputMode", "ErrorPolicy",
    "DEFAULT_KML_NAME", "DEFAULT_KML_DESCRIPTION", "DEFAULT_MAX_RECORD_LENGTH"
]
