"""
CLI tests for h3togeoboundary.

Argument and configuration errors are checked in-process with Typer's
CliRunner; data output is checked end-to-end by running
`python -m h3boundary` as a subprocess so stdout and stderr stay separate.
"""

import logging
import os
import subprocess
import sys
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest
from typer.testing import CliRunner

from h3boundary.cli import app

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
SF_CELL = "8928308280fffff"
KML_NS = {"kml": "http://earth.google.com/kml/2.1"}

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _run_cli(*args, stdin="", expect_fail=False):
    """Run the filter as a subprocess and return (returncode, stdout, stderr)."""
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))
    result = subprocess.run(
        [sys.executable, "-m", "h3boundary", *args],
        input=stdin, capture_output=True, text=True, encoding="utf-8", env=env, timeout=120
    )
    if not expect_fail and result.returncode != 0:
        raise AssertionError(
            f"CLI exited with code {result.returncode}\n"
            f"STDERR: {result.stderr}\nSTDOUT: {result.stdout}"
        )
    return result.returncode, result.stdout, result.stderr


class TestArgumentErrors:

    @pytest.mark.parametrize("mode, message", [
        ("2", "outputMode must be 0 or 1"),
        ("x", "outputMode must be an integer"),
    ])
    def test_invalid_output_mode_exits_non_zero(self, mode, message):
        result = runner.invoke(app, [mode], input=f"{SF_CELL}\n")

        assert result.exit_code == 1
        assert message in result.output
        assert SF_CELL not in result.output

    def test_too_many_arguments_is_usage_error(self):
        result = runner.invoke(app, ["1", "name", "desc", "extra"], input="")

        assert result.exit_code == 2

    def test_missing_profile_exits_non_zero(self, tmp_path):
        result = runner.invoke(app, ["--config", str(tmp_path / "none.yml")], input="")

        assert result.exit_code == 1
        assert "Configuration file not found" in result.output

    def test_invalid_environment_exits_non_zero(self, monkeypatch):
        monkeypatch.setenv("H3BOUNDARY_ON_ERROR", "explode")

        result = runner.invoke(app, [], input="")

        assert result.exit_code == 1
        assert "H3BOUNDARY_ON_ERROR" in result.output

    def test_version(self):
        from h3boundary import __version__

        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestEndToEnd:

    def test_plain_text_output(self):
        _, stdout, _ = _run_cli(stdin=f"{SF_CELL}\n")
        lines = stdout.splitlines()

        assert lines[0] == SF_CELL
        assert len(lines) == 7
        lat, lng = (float(v) for v in lines[1].split())
        assert 37.7 < lat < 37.8
        assert -122.5 < lng < -122.4

    def test_uppercase_input_gets_canonical_label(self):
        _, stdout, _ = _run_cli(stdin="8928308280FFFFF\n")

        assert stdout.splitlines()[0] == SF_CELL

    def test_empty_input(self):
        _, plain, _ = _run_cli(stdin="")
        _, kml, _ = _run_cli("1", stdin="")

        assert plain == ""
        root = ET.fromstring(kml.encode("utf-8"))
        assert root.findall(".//kml:Placemark", KML_NS) == []

    def test_kml_output(self):
        _, stdout, _ = _run_cli("1", "kml file", "h3 cells", stdin=f"{SF_CELL}\n{SF_CELL}\n")
        root = ET.fromstring(stdout.encode("utf-8"))
        folder = root.find("kml:Folder", KML_NS)

        assert folder.find("kml:name", KML_NS).text == "kml file"
        assert folder.find("kml:description", KML_NS).text == "h3 cells"
        placemarks = folder.findall("kml:Placemark", KML_NS)
        assert len(placemarks) == 2
        assert placemarks[0].find("kml:name", KML_NS).text == SF_CELL
        coords = placemarks[0].find(".//kml:coordinates", KML_NS).text.split()
        assert len(coords) == 7
        assert coords[0] == coords[-1]

    def test_kml_default_name_and_description(self):
        _, stdout, _ = _run_cli("1", stdin="")
        folder = ET.fromstring(stdout.encode("utf-8")).find("kml:Folder", KML_NS)

        assert folder.find("kml:name", KML_NS).text == "geo from H3"
        assert folder.find("kml:description", KML_NS).text == "from h3ToGeo"

    def test_axis_order_differs_between_formats(self):
        _, plain, _ = _run_cli(stdin=f"{SF_CELL}\n")
        _, kml, _ = _run_cli("1", stdin=f"{SF_CELL}\n")

        lat, lng = (float(v) for v in plain.splitlines()[1].split())
        first = ET.fromstring(kml.encode("utf-8")).find(".//kml:coordinates", KML_NS).text.split()[0]
        kml_lng, kml_lat, _ = (float(v) for v in first.split(","))
        assert kml_lng == pytest.approx(lng, abs=1e-6)
        assert kml_lat == pytest.approx(lat, abs=1e-6)

    def test_output_mode_zero_writes_no_kml_header(self):
        _, stdout, _ = _run_cli("0", "name", "desc", stdin=f"{SF_CELL}\n")

        assert "<kml" not in stdout
        assert stdout.splitlines()[0] == SF_CELL

    def test_invalid_cell_fails_without_footer(self):
        code, stdout, stderr = _run_cli("1", stdin=f"{SF_CELL}\nnot-a-cell\n{SF_CELL}\n", expect_fail=True)

        assert code == 1
        assert "line 2" in stderr
        assert stdout.count("<Placemark>") == 1
        assert "</kml>" not in stdout

    def test_skip_policy(self):
        code, stdout, stderr = _run_cli("--on-error", "skip", stdin=f"zzz\n{SF_CELL}\n")

        assert code == 0
        assert stdout.splitlines()[0] == SF_CELL
        assert "Skipping record" in stderr

    def test_close_on_error(self):
        code, stdout, _ = _run_cli("1", "--close-on-error", stdin=f"{SF_CELL}\nzzz\n", expect_fail=True)

        assert code == 1
        root = ET.fromstring(stdout.encode("utf-8"))
        assert len(root.findall(".//kml:Placemark", KML_NS)) == 1

    def test_record_too_long(self):
        code, _, stderr = _run_cli("--max-record-length", "8", stdin=f"{SF_CELL}\n", expect_fail=True)

        assert code == 1
        assert "record too long" in stderr

    def test_repeatable_output(self):
        stdin = f"{SF_CELL}\n8928308280bffff\n"

        assert _run_cli("1", stdin=stdin)[1] == _run_cli("1", stdin=stdin)[1]
