"""
Input Reader - Line-oriented record source

Reads newline-delimited cell identifiers from a text stream (normally
stdin), one record per next() call, without buffering the whole stream.
"""

import logging
from collections.abc import Iterator
from typing import Optional, TextIO

from ..types import InputReadError, RawRecord, RecordTooLongError

logger = logging.getLogger(__name__)


def read_records(stream: TextIO, max_record_length: Optional[int] = None) -> Iterator[RawRecord]:
    """
    Yield records from a text stream until end-of-stream.

    Args:
        stream: Text stream to read from
        max_record_length: Maximum characters per record, excluding the line
            terminator. None or 0 disables the limit.

    Yields:
        RawRecord for every non-blank line, trailing newline stripped

    Raises:
        InputReadError: On a read failure that is not end-of-stream
        RecordTooLongError: If a record exceeds max_record_length
    """
    line_number = 0
    while True:
        try:
            line = stream.readline()
        except (OSError, UnicodeDecodeError) as e:
            raise InputReadError(line_number + 1, str(e)) from e

        if not line:
            logger.debug(f"End of input after {line_number} lines")
            return

        line_number += 1
        text = line.rstrip("\r\n")

        if max_record_length and len(text) > max_record_length:
            raise RecordTooLongError(line_number, len(text), max_record_length)

        if not text.strip():
            logger.debug(f"Skipping blank line {line_number}")
            continue

        yield RawRecord(text=text, line_number=line_number)
