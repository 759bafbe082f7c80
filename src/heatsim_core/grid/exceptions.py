# src/heatsim_core/grid/exceptions.py
"""
Defines the diagnosable exceptions raised while constructing a `VoxelGrid`.

Both errors are fatal: a grid that cannot be discretized, or that would have
an empty axis, cannot be integrated.
"""
from dataclasses import dataclass
from typing import Tuple

from ..errors import DiagnosableError, format_diagnostic_report


class GridError(DiagnosableError):
    """A concrete base class for all grid construction errors."""
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Grid Error",
            details=str(self),
            suggestion="Review the 'geometry' section of the control script.",
            context={}
        )


@dataclass(frozen=True)
class InvalidDiscretization(GridError):
    """Raised when the voxel pitch is not a whole number of micrometers of at least one."""
    pitch: int

    def __str__(self):
        return f"Discretization must be a whole number of micrometers, at least 1 um (pitch={self.pitch})."

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Discretization",
            details=f"The voxel pitch must be a positive integer number of micrometers, got {self.pitch}.",
            suggestion="Set 'geometry.pitch' to at least 1 um.",
            context={'user_input': str(self.pitch)}
        )


@dataclass(frozen=True)
class DegenerateGeometry(GridError):
    """Raised when an extent is smaller than the pitch, leaving an axis with zero voxels."""
    extent: Tuple[int, int, int]
    pitch: int
    dims: Tuple[int, int, int]

    def __str__(self):
        return (f"Extent {list(self.extent)} with pitch {self.pitch} yields "
                f"voxel dimensions {list(self.dims)}; every axis needs at least one voxel.")

    def get_diagnostic_report(self) -> str:
        empty_axes = [axis for axis, n in enumerate(self.dims) if n == 0]
        details = (
            f"Extent {list(self.extent)} um divided by pitch {self.pitch} um gives voxel "
            f"dimensions {list(self.dims)}.\n"
            f"Axis/axes {empty_axes} would contain no voxels."
        )
        return format_diagnostic_report(
            error_type="Degenerate Geometry",
            details=details,
            suggestion="Make every extent at least as large as the pitch, or reduce the pitch.",
            context={}
        )
