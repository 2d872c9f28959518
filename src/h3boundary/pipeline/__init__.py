"""
h3togeoboundary Pipeline Components

This module provides the filter architecture following the Source → Transform → Export pattern.

Components:
- source: read_records for line-oriented input
- transform: RecordProcessor for identifier decoding and boundary lookup
- export: PlainTextEncoder and KmlEncoder output strategies
- runner: BoundaryFilter driving one pass over the input
"""

from .export import KmlEncoder, OutputEncoder, PlainTextEncoder, make_encoder
from .runner import BoundaryFilter
from .source import read_records
from .transform import RecordProcessor

__all__ = [
    "read_records", "RecordProcessor", "OutputEncoder", "PlainTextEncoder",
    "KmlEncoder", "make_encoder", "BoundaryFilter"
]
