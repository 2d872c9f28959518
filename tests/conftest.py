"""Shared fixtures: a fake cell collaborator and environment isolation."""

import io
import os

import pytest

from h3boundary.pipeline.transform import RecordProcessor
from h3boundary.types import CellDecodeError

SQUARE = ((10.0, 20.0), (10.0, 21.0), (11.0, 21.0), (11.0, 20.0))
TRIANGLE = ((-1.5, 179.5), (-1.0, -179.5), (-0.5, 179.5))

FAKE_CELLS = {
    0xAAA: SQUARE,
    0xBBB: TRIANGLE,
}


def fake_decode(text):
    try:
        return int(text.strip(), 16)
    except ValueError:
        raise CellDecodeError(text.strip(), "not hexadecimal") from None


def fake_label(cell):
    return format(cell, "x")


def fake_boundary(cell):
    if cell not in FAKE_CELLS:
        raise CellDecodeError(fake_label(cell), "unknown cell")
    return FAKE_CELLS[cell]


@pytest.fixture
def fake_processor():
    return RecordProcessor(decode=fake_decode, canonical_label=fake_label, boundary_of=fake_boundary)


@pytest.fixture
def text_in():
    def _make(*lines):
        return io.StringIO("".join(f"{line}\n" for line in lines))
    return _make


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Run each test without H3BOUNDARY_* variables and outside any .env."""
    for key in list(os.environ):
        if key.startswith("H3BOUNDARY_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
