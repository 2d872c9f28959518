"""
H3 cell helpers.

Adapter over the h3 library (v4 API, integer flavour) exposing the three
operations the filter needs: decode a textual identifier, render its
canonical label and compute its boundary polygon.
"""

from __future__ import annotations

import h3
from h3.api import basic_int as h3int

from .types import CellBoundary, CellDecodeError, LatLng

_H3_ERRORS = (ValueError, TypeError, OverflowError, h3.H3BaseException)
_MAX_INDEX = 2**64


def decode(text: str) -> int:
    """
    Decode a hexadecimal cell identifier into its 64-bit integer form.

    Only the hexadecimal syntax is checked here; whether the value names a
    valid cell is left to boundary_of().

    Raises:
        CellDecodeError: If the text is not a 64-bit hexadecimal number
    """
    token = text.strip()
    try:
        cell = h3int.str_to_int(token)
    except _H3_ERRORS as e:
        raise CellDecodeError(token, f"not a hexadecimal H3 index ({e})") from e
    if not 0 <= cell < _MAX_INDEX:
        raise CellDecodeError(token, "value does not fit in 64 bits")
    return cell


def canonical_label(cell: int) -> str:
    """Return the canonical lowercase hexadecimal form of a cell identifier."""
    return h3int.int_to_str(cell)


def boundary_of(cell: int) -> tuple[LatLng, ...]:
    """
    Return the boundary vertices of a cell as (lat, lng) pairs in degrees.

    Raises:
        CellDecodeError: If h3 rejects the identifier
    """
    try:
        vertices = h3int.cell_to_boundary(cell)
    except _H3_ERRORS as e:
        raise CellDecodeError(canonical_label(cell), f"no boundary available ({e})") from e
    return tuple((float(lat), float(lng)) for lat, lng in vertices)


def cell_boundary(text: str) -> CellBoundary:
    """Decode text and return its labelled boundary in one call."""
    cell = decode(text)
    return CellBoundary(label=canonical_label(cell), vertices=boundary_of(cell))
