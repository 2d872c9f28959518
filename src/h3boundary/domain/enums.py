"""
Filter Enumerations

Core enums for the output protocol and per-record error policy.
"""

from enum import Enum, IntEnum


class OutputMode(IntEnum):
    """Output protocols selectable by the positional outputMode argument."""
    PLAIN_TEXT = 0  # Label line followed by "lat lng" vertex lines
    KML = 1         # Complete KML document, one Placemark per cell

    @classmethod
    def parse(cls, value: "str | int") -> "OutputMode":
        """Parse an outputMode argument, accepting exactly 0 or 1."""
        from ..config.settings import ConfigurationError

        if isinstance(value, bool):
            raise ConfigurationError("outputMode must be an integer")
        if isinstance(value, str):
            try:
                value = int(value.strip())
            except ValueError:
                raise ConfigurationError("outputMode must be an integer") from None
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError("outputMode must be 0 or 1") from None


class ErrorPolicy(str, Enum):
    """What to do when a single record cannot be decoded."""
    FAIL = "fail"  # Halt the run on the first bad record
    SKIP = "skip"  # Log a warning and continue with the next record
