"""
Output Encoders - Plain text and KML boundary output

Both encoders share the header -> records -> footer protocol so the runner
never branches on the output mode. The encoder is chosen once per run by
make_encoder().
"""

import logging
from abc import ABC, abstractmethod
from typing import TextIO
from xml.sax.saxutils import escape

from ..domain.enums import OutputMode
from ..domain.models import RunConfig
from ..types import CellBoundary, EncoderStateError

logger = logging.getLogger(__name__)

KML_NAMESPACE = "http://earth.google.com/kml/2.1"
KML_ALTITUDE = 5.0

# (style id, aabbggrr colour)
KML_LINE_STYLES = (
    ("lineStyle1", "ff0000ff"),
    ("lineStyle2", "ff00ff00"),
    ("lineStyle3", "ffff0000"),
)


class OutputEncoder(ABC):
    """
    Base class for boundary encoders.

    Tracks the header -> records -> footer phase order and raises
    EncoderStateError when it is violated. Subclasses implement the
    _emit_* hooks.
    """

    def __init__(self, stream: TextIO):
        self.stream = stream
        self.header_written = False
        self.footer_written = False
        self.records_written = 0

    def write_header(self) -> None:
        if self.header_written:
            raise EncoderStateError("Header already written")
        self._emit_header()
        self.header_written = True

    def write_record(self, boundary: CellBoundary) -> None:
        if not self.header_written:
            raise EncoderStateError("Record written before header")
        if self.footer_written:
            raise EncoderStateError("Record written after footer")
        self._emit_record(boundary)
        self.records_written += 1

    def write_footer(self) -> None:
        if not self.header_written:
            raise EncoderStateError("Footer written before header")
        if self.footer_written:
            raise EncoderStateError("Footer already written")
        self._emit_footer()
        self.footer_written = True

    def _emit_header(self) -> None:
        pass

    @abstractmethod
    def _emit_record(self, boundary: CellBoundary) -> None:
        ...

    def _emit_footer(self) -> None:
        pass


class PlainTextEncoder(OutputEncoder):
    """
    Human-readable output: the label on its own line, then one
    "latitude longitude" line per vertex.

    Records are not delimited beyond their label line, so this format is
    meant for inspection; use KML for machine parsing.
    """

    def __init__(self, stream: TextIO, precision: int = 9):
        super().__init__(stream)
        self.precision = precision

    def _emit_record(self, boundary: CellBoundary) -> None:
        lines = [boundary.label]
        lines.extend(
            f"{lat:.{self.precision}f} {lng:.{self.precision}f}" for lat, lng in boundary.vertices
        )
        self.stream.write("\n".join(lines) + "\n")


class KmlEncoder(OutputEncoder):
    """
    KML document output.

    The header opens <kml> and a <Folder> carrying the document name and
    description; each record becomes a Placemark with a closed Polygon
    ring; the footer closes the Folder and the document. Coordinates are
    written longitude first, as KML requires.
    """

    def __init__(self, stream: TextIO, name: str, description: str):
        super().__init__(stream)
        self.name = name
        self.description = description

    def _emit_header(self) -> None:
        parts = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<kml xmlns="{KML_NAMESPACE}">',
            "<Folder>",
        ]
        for style_id, color in KML_LINE_STYLES:
            parts.append(
                f'<Style id="{style_id}"><LineStyle><color>{color}</color><width>2</width></LineStyle>'
                f"<PolyStyle><fill>0</fill></PolyStyle></Style>"
            )
        parts.append(f"<name>{escape(self.name)}</name>")
        parts.append(f"<description>{escape(self.description)}</description>")
        self.stream.write("\n".join(parts) + "\n")

    def _emit_record(self, boundary: CellBoundary) -> None:
        label = escape(boundary.label)
        parts = [
            "<Placemark>",
            f"<name>{label}</name>",
            f"<description>{label}</description>",
            "      <styleUrl>#lineStyle1</styleUrl>",
            "      <Polygon>",
            "      <tessellate>1</tessellate>",
            "      <outerBoundaryIs>",
            "      <LinearRing>",
            "      <coordinates>",
        ]
        parts.extend(
            f"            {lng:8f},{lat:8f},{KML_ALTITUDE:.1f}" for lat, lng in boundary.closed_ring()
        )
        parts.extend([
            "      </coordinates>",
            "      </LinearRing>",
            "      </outerBoundaryIs>",
            "      </Polygon>",
            "</Placemark>",
        ])
        self.stream.write("\n".join(parts) + "\n")

    def _emit_footer(self) -> None:
        self.stream.write("</Folder>\n</kml>\n")


def make_encoder(config: RunConfig, stream: TextIO) -> OutputEncoder:
    """Select the encoder for the configured output mode."""
    if config.output_mode == OutputMode.KML:
        logger.debug(f"KML output: name='{config.kml_name}', description='{config.kml_description}'")
        return KmlEncoder(stream, name=config.kml_name, description=config.kml_description)
    if config.output_mode == OutputMode.PLAIN_TEXT:
        return PlainTextEncoder(stream)
    raise ValueError(f"Unsupported output mode: {config.output_mode}")
