# src/heatsim_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.debug("HeatSim Core package initialized.")

from .units import ureg, pint, Quantity, to_micrometers, to_seconds
from .grid import GridSpec, VoxelGrid, InvalidDiscretization, DegenerateGeometry
from .simulation import (
    SimulationConfig,
    SimulationResult,
    StencilUpdater,
    AdaptiveStepController,
    StepUnderflow,
    run_simulation,
)
from .output import SnapshotWriter, SnapshotWriteError, format_snapshot, parse_snapshot
from .parser import (
    ControlScriptParser,
    ParsedControlScript,
    ConfigReadError,
    ConfigParseError,
    ConfigFieldError,
    ControlScriptError,
)
from .runner import load_control_script, build_grid, run_from_file
from .errors import HeatSimError, ConfigurationError, SimulationRunError

__all__ = [
    # Units
    "ureg", "pint", "Quantity", "to_micrometers", "to_seconds",
    # Grid
    "GridSpec", "VoxelGrid", "InvalidDiscretization", "DegenerateGeometry",
    # Simulation
    "SimulationConfig", "SimulationResult", "StencilUpdater", "AdaptiveStepController",
    "StepUnderflow", "run_simulation",
    # Output
    "SnapshotWriter", "SnapshotWriteError", "format_snapshot", "parse_snapshot",
    # Parser
    "ControlScriptParser", "ParsedControlScript",
    "ConfigReadError", "ConfigParseError", "ConfigFieldError", "ControlScriptError",
    # Runner
    "load_control_script", "build_grid", "run_from_file",
    # Errors raised by the entry points
    "HeatSimError", "ConfigurationError", "SimulationRunError",
]
