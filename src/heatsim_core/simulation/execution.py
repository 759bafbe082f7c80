# src/heatsim_core/simulation/execution.py
"""
Provides the public API function for integrating an already constructed grid.

`run_simulation` is a thin facade over `AdaptiveStepController`: it wires up the
snapshot writer, runs the controller and turns any diagnosable failure into a
single user-facing `SimulationRunError` carrying the diagnostic report.
"""
import logging
from pathlib import Path
from typing import Union

from ..constants import DEFAULT_OUTPUT_PREFIX
from ..errors import DiagnosableError, SimulationRunError, format_diagnostic_report
from ..grid import VoxelGrid
from ..output import SnapshotWriter
from .config import SimulationConfig
from .controller import AdaptiveStepController
from .results import SimulationResult

logger = logging.getLogger(__name__)


def run_simulation(
    grid: VoxelGrid,
    config: SimulationConfig,
    output_dir: Union[str, Path] = ".",
    output_prefix: str = DEFAULT_OUTPUT_PREFIX,
) -> SimulationResult:
    """
    Integrates `grid` according to `config`, writing snapshots into `output_dir`.

    Args:
        grid: The grid to integrate; mutated in place.
        config: The immutable run settings.
        output_dir: Directory receiving the snapshot files.
        output_prefix: Prefix of snapshot file names.

    Returns:
        A `SimulationResult` summarizing the run.

    Raises:
        SimulationRunError: A user-friendly, diagnosable error if the run aborts.
                            The original exception is chained for debugging.
    """
    try:
        controller = AdaptiveStepController(
            grid,
            config,
            snapshot_writer=SnapshotWriter(output_dir),
            output_prefix=output_prefix,
        )
        return controller.run()

    except DiagnosableError as e:
        logger.error(f"A diagnosable error occurred during simulation: {e}")
        raise SimulationRunError(e.get_diagnostic_report()) from e

    except Exception as e:
        logger.critical(f"An unexpected internal error occurred during simulation: {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Simulation Error Occurred ({type(e).__name__})",
            details=f"The simulator encountered an unexpected internal error: {e}",
            suggestion="This may be a bug. Review the traceback and consider filing a bug report.",
            context={}
        )
        raise SimulationRunError(report) from e
