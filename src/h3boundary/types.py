"""
Type definitions for the h3togeoboundary filter.

This module provides the per-record value objects that flow through the
Source -> Transform -> Export pipeline and the filter's exception hierarchy.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


LatLng = tuple[float, float]


@dataclass(frozen=True)
class RawRecord:
    """One line read from the input stream, newline stripped."""
    text: str
    line_number: int


@dataclass(frozen=True)
class CellBoundary:
    """Boundary polygon of a single cell.

    Vertices are (latitude, longitude) pairs in degrees, in the order the
    geometry library returns them. The ring is not required to be closed.
    """
    label: str
    vertices: tuple[LatLng, ...]

    @property
    def is_closed(self) -> bool:
        return len(self.vertices) > 1 and self.vertices[0] == self.vertices[-1]

    def closed_ring(self) -> tuple[LatLng, ...]:
        """Return the vertices with the first vertex repeated at the end if needed."""
        if not self.vertices or self.is_closed:
            return self.vertices
        return self.vertices + (self.vertices[0],)


@dataclass(frozen=True)
class RunSummary:
    """Result metadata from one filter run.

    Provides record counts for logging and for the caller's exit handling.
    """
    records_read: int = 0
    records_written: int = 0
    records_skipped: int = 0


# Filter exception hierarchy
class FilterError(Exception):
    """Base exception for filter operations."""
    pass


class InputReadError(FilterError):
    """Non end-of-stream failure while reading input."""
    def __init__(self, line_number: Optional[int], message: str):
        self.line_number = line_number
        where = f"line {line_number}" if line_number else "input"
        super().__init__(f"Failed reading {where}: {message}")


class RecordTooLongError(InputReadError):
    """Input record exceeds the configured maximum record length."""
    def __init__(self, line_number: int, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(line_number, f"record too long ({length} > {limit} characters)")


class CellDecodeError(FilterError):
    """Record could not be decoded or its boundary could not be computed."""
    def __init__(self, text: str, reason: str, line_number: Optional[int] = None):
        self.text = text
        self.reason = reason
        self.line_number = line_number
        prefix = f"line {line_number}: " if line_number else ""
        super().__init__(f"{prefix}invalid cell '{text}': {reason}")

    def at_line(self, line_number: int) -> CellDecodeError:
        """Return a copy of this error annotated with the input line number."""
        return CellDecodeError(self.text, self.reason, line_number)


class EncoderStateError(FilterError):
    """Encoder operations called out of header -> records -> footer order."""
    pass
