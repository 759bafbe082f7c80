# src/heatsim_core/simulation/stencil.py
"""
Explicit finite-difference update of a `VoxelGrid`.

Each axis contributes a second difference (v[i+1] - 2 v[i] + v[i-1]) / h^2. Beyond
the first and last voxel of an axis the missing neighbor is the ambient
temperature (a fixed ghost value), so an axis of length one sees the ambient
temperature on both sides. The update is

    new = old + k^2 * dt * (vx + vy + vz)

and is synchronous: every voxel is computed from the previous field only. The
result is written to a back buffer which is then swapped into the grid.
"""
import logging
from typing import Optional

import numpy as np
from scipy import ndimage

from ..grid import VoxelGrid

logger = logging.getLogger(__name__)

SECOND_DIFFERENCE_WEIGHTS = np.array([1.0, -2.0, 1.0])


class StencilUpdater:
    """
    Applies one explicit step to a grid. Holds the back buffer and a scratch
    array between calls so repeated steps do not reallocate.
    """

    def __init__(self):
        self._back: Optional[np.ndarray] = None
        self._scratch: Optional[np.ndarray] = None

    def _ensure_buffers(self, shape):
        if self._back is None or self._back.shape != shape:
            logger.debug(f"Allocating stencil buffers for shape {shape}.")
            self._back = np.empty(shape, dtype=np.float64)
            self._scratch = np.empty(shape, dtype=np.float64)

    def apply(self, grid: VoxelGrid, timestep: float, ambient_temperature: float) -> float:
        """
        Advances `grid` by `timestep` and returns the largest absolute change of
        any single voxel.
        """
        old = grid.field
        self._ensure_buffers(old.shape)
        laplacian, scratch = self._back, self._scratch
        h_squared = float(grid.pitch) ** 2

        laplacian.fill(0.0)
        for axis in range(old.ndim):
            ndimage.correlate1d(
                old, SECOND_DIFFERENCE_WEIGHTS, axis=axis, output=scratch,
                mode='constant', cval=ambient_temperature,
            )
            scratch /= h_squared
            laplacian += scratch

        # The back buffer now turns from the laplacian into the new field.
        laplacian *= grid.conductivity ** 2 * timestep
        laplacian += old
        new = laplacian

        np.subtract(new, old, out=scratch)
        np.abs(scratch, out=scratch)
        max_abs_change = float(scratch.max())

        self._back = grid.swap_field(new)
        return max_abs_change
