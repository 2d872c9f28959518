import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

from .config.settings import ConfigurationError, Settings
from .config_loader import build_run_config
from .domain.enums import ErrorPolicy
from .pipeline.runner import BoundaryFilter
from .types import FilterError
from .utils import setup_logging

app = typer.Typer(
    help="stdin/stdout filter converting H3 indexes to lat/lon cell boundaries",
    add_completion=False,
)


def version_callback(value: bool):
    if value:
        from . import __version__
        typer.echo(f"h3togeoboundary version: {__version__}")
        raise typer.Exit()


@app.command()
def h3_to_geo_boundary(
    output_mode: Annotated[Optional[str], typer.Argument(help="0 for plain text output (default), 1 for KML output", show_default=False)] = None,
    kml_name: Annotated[Optional[str], typer.Argument(help="Text of the KML <name> tag (default: 'geo from H3')", show_default=False)] = None,
    kml_desc: Annotated[Optional[str], typer.Argument(help="Text of the KML <description> tag (default: 'from h3ToGeo')", show_default=False)] = None,
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Path to YAML run profile")] = None,
    on_error: Annotated[Optional[ErrorPolicy], typer.Option("--on-error", help="Bad record policy: fail (halt the run) | skip (warn and continue)", show_default=False)] = None,
    close_on_error: Annotated[bool, typer.Option("--close-on-error", help="Write the KML footer even if the run fails")] = False,
    max_record_length: Annotated[Optional[int], typer.Option("--max-record-length", help="Maximum characters per input line, 0 for unbounded (default: 256)", show_default=False)] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable detailed logging output on stderr")] = False,
    log_file: Annotated[Optional[Path], typer.Option("--log-file", help="Also write log records to this file")] = None,
    version: Annotated[Optional[bool], typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit")] = None,
):
    """
    Read H3 indexes from stdin, one per line, and write the corresponding
    cell boundaries to stdout until EOF.

    Examples:

        h3togeoboundary < indexes.txt

        h3togeoboundary 1 "kml file" "h3 cells" < indexes.txt > cells.kml
    """
    try:
        settings = Settings()
    except ConfigurationError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    setup_logging(verbose, settings.logging.level, log_file)

    try:
        run_config = build_run_config(
            output_mode=output_mode,
            kml_name=kml_name,
            kml_description=kml_desc,
            on_error=on_error,
            close_on_error=True if close_on_error else None,
            max_record_length=max_record_length,
            config_path=config,
            settings=settings,
        )
    except ConfigurationError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    logging.debug(f"Run configuration: {run_config}")

    try:
        BoundaryFilter(run_config).run(sys.stdin, sys.stdout)
    except FilterError as e:
        logging.debug("Filter run failed", exc_info=True)
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
