# tests/test_grid.py
import numpy as np
import pytest

from heatsim_core import VoxelGrid, GridSpec, InvalidDiscretization, DegenerateGeometry
from tests.conftest import make_grid


class TestVoxelGridConstruction:

    def test_reference_cube_dimensions(self):
        # 10 cm cube in micrometers, 1 cm voxels.
        grid = VoxelGrid.from_spec(GridSpec())
        assert grid.dims == (10, 10, 10)
        assert grid.field.shape == (10, 10, 10)
        assert grid.voxel_count == 1000
        assert grid.pitch == 10_000

    def test_dimensions_use_floor_division(self):
        grid = VoxelGrid((0, 0, 0), (25, 10, 7), 3, 0.0, 1.0)
        assert grid.dims == (8, 3, 2)
        assert grid.physical_size == (24, 9, 6)
        assert grid.extent == (25, 10, 7)

    def test_uniform_initial_temperature_and_conductivity(self):
        grid = make_grid(dims=(3, 4, 5), initial_temperature=21.5, conductivity=0.25)
        assert grid.field.dtype == np.float64
        assert np.all(grid.field == 21.5)
        assert grid.conductivity == 0.25

    @pytest.mark.parametrize("pitch", [0, -1, -10_000, 0.5, 1.5, 2.25])
    def test_pitch_below_one_is_rejected(self, pitch):
        with pytest.raises(InvalidDiscretization) as exc_info:
            VoxelGrid((0, 0, 0), (10, 10, 10), pitch, 0.0, 1.0)
        assert exc_info.value.pitch == pitch
        assert "Invalid Discretization" in exc_info.value.get_diagnostic_report()

    def test_integral_float_pitch_is_accepted(self):
        grid = VoxelGrid((0, 0, 0), (10, 10, 10), 2.0, 0.0, 1.0)
        assert grid.pitch == 2
        assert grid.dims == (5, 5, 5)

    def test_extent_smaller_than_pitch_is_rejected(self):
        with pytest.raises(DegenerateGeometry) as exc_info:
            VoxelGrid((0, 0, 0), (100, 5, 100), 10, 0.0, 1.0)
        err = exc_info.value
        assert err.dims == (10, 0, 10)
        report = err.get_diagnostic_report()
        assert "Degenerate Geometry" in report
        assert "[1]" in report

    def test_single_voxel_grid(self):
        grid = make_grid(dims=(1, 1, 1), initial_temperature=5.0)
        assert grid.dims == (1, 1, 1)
        assert grid.field[0, 0, 0] == 5.0


class TestVoxelGridAccess:

    def test_voxel_center(self):
        grid = make_grid(dims=(2, 3, 4), pitch=10, origin=(1.0, 2.0, 3.0))
        assert grid.voxel_center((0, 0, 0)) == (6.0, 7.0, 8.0)
        assert grid.voxel_center((1, 2, 3)) == (16.0, 27.0, 38.0)
        with pytest.raises(IndexError):
            grid.voxel_center((2, 0, 0))

    def test_swap_field_returns_previous_buffer(self):
        grid = make_grid(dims=(2, 2, 2), initial_temperature=1.0)
        original = grid.field
        replacement = np.full((2, 2, 2), 3.0)
        previous = grid.swap_field(replacement)
        assert previous is original
        assert grid.field is replacement

    def test_swap_field_rejects_wrong_shape(self):
        grid = make_grid(dims=(2, 2, 2))
        with pytest.raises(ValueError, match="does not match grid shape"):
            grid.swap_field(np.zeros((2, 2, 3)))
