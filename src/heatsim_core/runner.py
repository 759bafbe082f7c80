# src/heatsim_core/runner.py
"""
Runs a simulation end to end from a control script.

The run has three stages, each with its own top-level error contract:

1. **Load:** the `ControlScriptParser` turns the YAML file into a
   `ParsedControlScript`. Any loading failure is re-raised as a single
   `ConfigurationError` carrying the diagnostic report.
2. **Build:** the `VoxelGrid` is constructed once from the parsed geometry.
3. **Integrate:** `run_simulation` drives the adaptive controller. Grid
   construction and integration failures surface as `SimulationRunError`.
"""
import logging
from pathlib import Path
from typing import Optional, Union

from .errors import ConfigurationError, SimulationRunError
from .grid import GridError, VoxelGrid
from .parser import BaseConfigError, ControlScriptParser, ParsedControlScript
from .simulation import SimulationResult, run_simulation

logger = logging.getLogger(__name__)


def load_control_script(script_path: Union[str, Path]) -> ParsedControlScript:
    """
    Parses a control script.

    Raises:
        ConfigurationError: If the file cannot be read, parsed or validated.
    """
    try:
        return ControlScriptParser().parse(script_path)
    except BaseConfigError as e:
        logger.error(f"Failed to load control script: {e}")
        raise ConfigurationError(e.get_diagnostic_report()) from e


def build_grid(script: ParsedControlScript) -> VoxelGrid:
    """
    Constructs the grid described by a parsed control script.

    Raises:
        SimulationRunError: If the geometry cannot be discretized.
    """
    try:
        grid = VoxelGrid.from_spec(script.grid_spec)
    except GridError as e:
        logger.error(f"Failed to construct the voxel grid: {e}")
        raise SimulationRunError(e.get_diagnostic_report()) from e
    logger.info(f"Voxel grid constructed: {grid!r}")
    return grid


def run_from_file(
    script_path: Union[str, Path],
    output_dir: Optional[Union[str, Path]] = None,
) -> SimulationResult:
    """
    Loads a control script, builds its grid and integrates it.

    Args:
        script_path: Path to the YAML control script.
        output_dir: Directory for snapshot files. Defaults to the directory
                    containing the control script.

    Returns:
        The `SimulationResult` of the run.

    Raises:
        ConfigurationError: If the control script is invalid.
        SimulationRunError: If grid construction or integration fails.
    """
    script = load_control_script(script_path)
    grid = build_grid(script)
    effective_output_dir = Path(output_dir) if output_dir is not None else Path(script_path).resolve().parent
    return run_simulation(
        grid,
        script.config,
        output_dir=effective_output_dir,
        output_prefix=script.output_prefix,
    )
