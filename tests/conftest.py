# tests/conftest.py
import logging
import sys
import textwrap
from pathlib import Path

import pytest

from heatsim_core import ControlScriptParser, VoxelGrid
from heatsim_core.log_config import set_quiet, setup_logging


@pytest.fixture
def parser():
    return ControlScriptParser()


@pytest.fixture(autouse=True)
def restore_log_level():
    """The CLI changes the root log level; put it back after every test."""
    yield
    set_quiet(False)


# Helper to build a grid whose field shape equals `dims` (pitch 1 unless given)
def make_grid(
    dims=(2, 2, 2),
    initial_temperature: float = 20.0,
    conductivity: float = 1.0,
    pitch: int = 1,
    origin=(0.0, 0.0, 0.0),
) -> VoxelGrid:
    extent = tuple(n * pitch for n in dims)
    return VoxelGrid(
        origin=origin,
        extent=extent,
        pitch=pitch,
        initial_temperature=initial_temperature,
        conductivity=conductivity,
    )


@pytest.fixture
def write_script(tmp_path):
    """Returns a helper writing dedented YAML into tmp_path and returning its path."""
    def _write(content: str, name: str = "script.yaml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content))
        return path
    return _write


class _CurrentStdout:
    """Resolves `sys.stdout` at write time; capsys swaps its stream between setup and call."""

    def write(self, text):
        return sys.stdout.write(text)

    def flush(self):
        sys.stdout.flush()


@pytest.fixture
def console_log(capsys):
    """
    Points the root handler at the captured stdout so progress output is visible
    to `capsys`. The handler installed at import time writes to the stream that
    was current back then.
    """
    root_logger = logging.getLogger()
    previous = root_logger.handlers[:]
    setup_logging(stream=_CurrentStdout())
    yield capsys
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in previous:
        root_logger.addHandler(handler)
