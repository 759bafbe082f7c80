# src/heatsim_core/grid/voxel_grid.py
"""
Defines `VoxelGrid`, the dense 3-D temperature field of a rectangular solid.

The grid owns the field and its immutable geometric and material parameters.
After construction the only way to change the field is `swap_field`, which is
reserved for the stencil updater: it installs a completely computed buffer in
one step, so no reader ever observes a half-updated field.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from ..constants import (
    DEFAULT_CONDUCTIVITY,
    DEFAULT_EXTENT_UM,
    DEFAULT_INITIAL_TEMPERATURE,
    DEFAULT_ORIGIN,
    DEFAULT_PITCH_UM,
)
from .exceptions import DegenerateGeometry, InvalidDiscretization

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridSpec:
    """
    The construction parameters of a `VoxelGrid`, as read from a control script.
    Lengths are integer micrometers.
    """
    origin: Tuple[float, float, float] = DEFAULT_ORIGIN
    extent: Tuple[int, int, int] = DEFAULT_EXTENT_UM
    pitch: int = DEFAULT_PITCH_UM
    initial_temperature: float = DEFAULT_INITIAL_TEMPERATURE
    conductivity: float = DEFAULT_CONDUCTIVITY


class VoxelGrid:
    """
    A voxelized rectangular solid holding one temperature per voxel.

    The field is indexed (z, y, x): axis 0 is the slowest-varying "layer" axis of
    the text snapshot format. `extent[a]` and `dims[a]` describe field axis `a`.
    """

    def __init__(
        self,
        origin: Sequence[float],
        extent: Sequence[int],
        pitch: int,
        initial_temperature: float,
        conductivity: float,
    ):
        # Pitch is a whole number of micrometers; 1.5 is rejected rather than truncated.
        if not float(pitch).is_integer() or pitch < 1:
            raise InvalidDiscretization(pitch=pitch)

        extent_t = tuple(int(e) for e in extent)
        if len(extent_t) != 3 or len(origin) != 3:
            raise ValueError("VoxelGrid requires exactly three origin coordinates and three extents.")

        dims = tuple(e // int(pitch) for e in extent_t)
        if any(n < 1 for n in dims):
            raise DegenerateGeometry(extent=extent_t, pitch=int(pitch), dims=dims)

        self._origin: Tuple[float, float, float] = tuple(float(o) for o in origin)
        self._extent: Tuple[int, int, int] = extent_t
        self._pitch: int = int(pitch)
        self._dims: Tuple[int, int, int] = dims
        self._conductivity: float = conductivity
        self._field: np.ndarray = np.full(dims, initial_temperature, dtype=np.float64)
        logger.debug(
            f"VoxelGrid created: dims={list(dims)}, pitch={self._pitch} um, "
            f"T0={initial_temperature}, k={conductivity}"
        )

    @classmethod
    def from_spec(cls, spec: GridSpec) -> "VoxelGrid":
        return cls(
            origin=spec.origin,
            extent=spec.extent,
            pitch=spec.pitch,
            initial_temperature=spec.initial_temperature,
            conductivity=spec.conductivity,
        )

    # --- Immutable parameters ---

    @property
    def origin(self) -> Tuple[float, float, float]:
        return self._origin

    @property
    def extent(self) -> Tuple[int, int, int]:
        return self._extent

    @property
    def pitch(self) -> int:
        return self._pitch

    @property
    def dims(self) -> Tuple[int, int, int]:
        return self._dims

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self._dims

    @property
    def conductivity(self) -> float:
        return self._conductivity

    @property
    def voxel_count(self) -> int:
        return int(np.prod(self._dims))

    @property
    def physical_size(self) -> Tuple[int, int, int]:
        """The size actually covered by voxels; smaller than `extent` when the pitch does not divide it."""
        return tuple(n * self._pitch for n in self._dims)

    def voxel_center(self, index: Sequence[int]) -> Tuple[float, float, float]:
        """Position of the center of voxel `index`, per field axis."""
        if len(index) != 3:
            raise ValueError("A voxel index has exactly three components.")
        for axis, (i, n) in enumerate(zip(index, self._dims)):
            if not 0 <= i < n:
                raise IndexError(f"Index {i} out of range for axis {axis} of length {n}.")
        return tuple(o + (i + 0.5) * self._pitch for o, i in zip(self._origin, index))

    # --- Field access ---

    @property
    def field(self) -> np.ndarray:
        """The current temperature field. Treat as read-only; mutation goes through `swap_field`."""
        return self._field

    def swap_field(self, buffer: np.ndarray) -> np.ndarray:
        """
        Installs `buffer` as the new field and returns the previous one.

        The returned array is handed back to the caller to be reused as its
        next output buffer.

        Raises:
            ValueError: If `buffer` does not match the grid's shape.
        """
        if buffer.shape != self._field.shape:
            raise ValueError(f"Buffer shape {buffer.shape} does not match grid shape {self._field.shape}.")
        previous, self._field = self._field, buffer
        return previous

    def __repr__(self):
        return (f"VoxelGrid(dims={list(self._dims)}, pitch={self._pitch}, "
                f"origin={list(self._origin)}, conductivity={self._conductivity})")
