"""
Filter runner - Source -> Transform -> Export loop

Drives one pass over the input stream: header, one record at a time, then
the footer on clean end-of-stream.
"""

import logging
from typing import Optional, TextIO

from ..domain.enums import ErrorPolicy
from ..domain.models import RunConfig
from ..types import CellDecodeError, RunSummary
from .export import OutputEncoder, make_encoder
from .source import read_records
from .transform import RecordProcessor

logger = logging.getLogger(__name__)


class BoundaryFilter:
    """
    Streaming cell-to-boundary filter.

    Output is flushed after every record so it interleaves with input
    consumption. Fatal errors propagate to the caller; the footer is only
    written on them when close_on_error is set.
    """

    def __init__(self, config: RunConfig, processor: Optional[RecordProcessor] = None):
        self.config = config
        self.processor = processor or RecordProcessor()

    def run(self, input_stream: TextIO, output_stream: TextIO) -> RunSummary:
        """
        Run the filter until end-of-stream.

        Args:
            input_stream: Text stream of identifiers, one per line
            output_stream: Text stream receiving the encoded boundaries

        Returns:
            RunSummary with record counts

        Raises:
            InputReadError: On a read failure or an over-long record
            CellDecodeError: On a bad record when the policy is ErrorPolicy.FAIL
        """
        encoder = make_encoder(self.config, output_stream)
        read = written = skipped = 0

        try:
            encoder.write_header()
            output_stream.flush()

            for record in read_records(input_stream, self.config.max_record_length):
                read += 1
                try:
                    boundary = self.processor.process(record)
                except CellDecodeError as e:
                    if self.config.on_error != ErrorPolicy.SKIP:
                        raise
                    logger.warning(f"Skipping record: {e}")
                    skipped += 1
                    continue

                encoder.write_record(boundary)
                output_stream.flush()
                written += 1

            encoder.write_footer()
        except Exception:
            self._close_after_error(encoder)
            raise
        finally:
            output_stream.flush()

        summary = RunSummary(records_read=read, records_written=written, records_skipped=skipped)
        logger.info(
            f"Processed {summary.records_read:,} records: {summary.records_written:,} written, "
            f"{summary.records_skipped:,} skipped"
        )
        return summary

    def _close_after_error(self, encoder: OutputEncoder) -> None:
        if not self.config.close_on_error:
            return
        if not encoder.header_written or encoder.footer_written:
            return
        logger.warning("Run failed; closing output document")
        encoder.write_footer()
