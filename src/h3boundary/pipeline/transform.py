"""
Record Processor - Identifier to boundary transformation

Turns each raw input record into a labelled CellBoundary using a cell
collaborator (the h3 adapter in h3boundary.cells by default).
"""

import logging
from collections.abc import Callable
from typing import Optional

from .. import cells
from ..types import CellBoundary, CellDecodeError, LatLng, RawRecord

logger = logging.getLogger(__name__)


class RecordProcessor:
    """
    Decode records and look up their boundaries.

    The three collaborator callables default to the h3 adapter and can be
    replaced, e.g. with fakes in tests.
    """

    def __init__(
        self,
        decode: Optional[Callable[[str], int]] = None,
        canonical_label: Optional[Callable[[int], str]] = None,
        boundary_of: Optional[Callable[[int], tuple[LatLng, ...]]] = None,
    ):
        self.decode = decode or cells.decode
        self.canonical_label = canonical_label or cells.canonical_label
        self.boundary_of = boundary_of or cells.boundary_of

    def process(self, record: RawRecord) -> CellBoundary:
        """
        Transform one record into its labelled boundary.

        Args:
            record: Raw input record

        Returns:
            CellBoundary with the canonical label and (lat, lng) vertices

        Raises:
            CellDecodeError: If the collaborator rejects the record, annotated
                with the record's line number
        """
        try:
            cell = self.decode(record.text)
            label = self.canonical_label(cell)
            vertices = tuple(self.boundary_of(cell))
        except CellDecodeError as e:
            raise e.at_line(record.line_number) from e

        logger.debug(f"Line {record.line_number}: {label} ({len(vertices)} vertices)")
        return CellBoundary(label=label, vertices=vertices)
