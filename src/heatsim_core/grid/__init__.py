# src/heatsim_core/grid/__init__.py
from .voxel_grid import GridSpec, VoxelGrid
from .exceptions import GridError, InvalidDiscretization, DegenerateGeometry

__all__ = [
    "GridSpec",
    "VoxelGrid",
    # Exceptions
    "GridError",
    "InvalidDiscretization",
    "DegenerateGeometry",
]
