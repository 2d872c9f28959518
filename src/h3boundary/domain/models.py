"""
Filter Domain Models

Pydantic models for the run configuration shared by the CLI, the runner
and the output encoders.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .enums import ErrorPolicy, OutputMode

DEFAULT_KML_NAME = "geo from H3"
# Runtime fallback of the C h3ToGeoBoundary filter; its usage text claimed
# "generated by h3ToGeoBoundary".
DEFAULT_KML_DESCRIPTION = "from h3ToGeo"
DEFAULT_MAX_RECORD_LENGTH = 256


class RunConfig(BaseModel):
    """Run configuration, fixed before the first record is read."""
    output_mode: OutputMode = Field(default=OutputMode.PLAIN_TEXT, description="Output protocol (0 plain text, 1 KML)")
    kml_name: str = Field(default=DEFAULT_KML_NAME, description="Document <name> in KML output")
    kml_description: str = Field(default=DEFAULT_KML_DESCRIPTION, description="Document <description> in KML output")
    on_error: ErrorPolicy = Field(default=ErrorPolicy.FAIL, description="Policy for records that cannot be decoded")
    close_on_error: bool = Field(default=False, description="Write the KML footer even when the run fails")
    max_record_length: Optional[int] = Field(
        default=DEFAULT_MAX_RECORD_LENGTH, ge=0, description="Maximum characters per input line (0 or None: unbounded)"
    )

    @property
    def is_kml(self) -> bool:
        return self.output_mode == OutputMode.KML

    class Config:
        """Pydantic configuration."""
        frozen = True  # Immutable for the process lifetime
        extra = "forbid"
