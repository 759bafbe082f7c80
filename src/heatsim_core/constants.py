# src/heatsim_core/constants.py
import logging

logger = logging.getLogger(__name__)

# --- Adaptive Step Controller ---

#: Fraction of the current step by which `dt` is shrunk after a rejected attempt
#: and grown after an accepted one.
STEP_ADJUST_FRACTION: float = 0.1

#: Decimal places of the simulation time embedded in snapshot file names.
SNAPSHOT_TIME_DECIMALS: int = 9

# --- Snapshot Output ---

SNAPSHOT_EXTENSION: str = ".txt"
DEFAULT_OUTPUT_PREFIX: str = "block"

# --- Default Geometry ---
# A 10 cm cube discretized into 1 cm voxels. Lengths are in micrometers.

DEFAULT_ORIGIN = (0.0, 0.0, 0.0)
DEFAULT_EXTENT_UM = (100_000, 100_000, 100_000)
DEFAULT_PITCH_UM: int = 10_000
DEFAULT_INITIAL_TEMPERATURE: float = 0.0
DEFAULT_CONDUCTIVITY: float = 1.0

logger.debug("Defined core constants: STEP_ADJUST_FRACTION, SNAPSHOT_TIME_DECIMALS, default geometry")
