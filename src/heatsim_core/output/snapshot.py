# src/heatsim_core/output/snapshot.py
"""
Plain-text temperature snapshots.

A snapshot holds one block per index of field axis 0, blocks separated by a
blank line. Each block has one line per index of axis 1, and each line lists
the axis-2 temperatures separated by single spaces. Values use Python's default
float rendering. There is no header.
"""
import logging
from pathlib import Path
from typing import List, Union

import numpy as np

from ..constants import SNAPSHOT_EXTENSION
from ..grid import VoxelGrid
from .exceptions import SnapshotWriteError

logger = logging.getLogger(__name__)


def format_snapshot(field: np.ndarray) -> str:
    """Renders a 3-D field in the snapshot text format."""
    if field.ndim != 3:
        raise ValueError(f"Snapshots are written for 3-D fields only, got ndim={field.ndim}.")
    blocks: List[str] = []
    for layer in field:
        lines = [" ".join(str(float(value)) for value in row) + "\n" for row in layer]
        blocks.append("".join(lines))
    return "\n".join(blocks)


def parse_snapshot(text: str) -> np.ndarray:
    """
    Reads the snapshot text format back into a 3-D array.

    Raises:
        ValueError: If the blocks or lines are ragged.
    """
    layers = []
    for block in text.strip("\n").split("\n\n"):
        rows = [[float(token) for token in line.split(" ")] for line in block.split("\n") if line]
        layers.append(rows)
    try:
        return np.array(layers, dtype=np.float64)
    except ValueError as e:
        raise ValueError(f"Snapshot text is not a regular 3-D block structure: {e}") from e


class SnapshotWriter:
    """Writes grid snapshots as `<output_dir>/<base_name>.txt`."""

    def __init__(self, output_dir: Union[str, Path] = "."):
        self.output_dir = Path(output_dir)

    def path_for(self, base_name: str) -> Path:
        return self.output_dir / f"{base_name}{SNAPSHOT_EXTENSION}"

    def write(self, grid: VoxelGrid, base_name: str) -> Path:
        """
        Serializes `grid` to the snapshot file for `base_name`.

        Returns:
            The path of the written file.

        Raises:
            SnapshotWriteError: If the file or its parent directory cannot be written.
        """
        path = self.path_for(base_name)
        content = format_snapshot(grid.field)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise SnapshotWriteError(path=path, details=str(e)) from e
        logger.info(f"Snapshot written: {path}")
        return path
