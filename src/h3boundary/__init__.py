"""Streaming filter converting H3 cell identifiers to boundary polygons."""

__version__ = "0.1.0"
