"""
Logging utilities shared by the CLI entry points.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logging(
    verbose: bool,
    level: str = "WARNING",
    log_file: Optional[Path] = None
) -> None:
    """
    Configure logging on stderr with optional file output.

    Standard output carries the filter's data, so log records never go there.

    Args:
        verbose: Enable debug-level logging if True (overrides level)
        level: Log level name used when verbose is False
        log_file: Also append log records to this file when given
    """
    log_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True
    )
