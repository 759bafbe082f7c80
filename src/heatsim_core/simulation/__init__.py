# src/heatsim_core/simulation/__init__.py
from .config import SimulationConfig
from .exceptions import StepUnderflow
from .results import SimulationResult
from .stencil import StencilUpdater
from .controller import AdaptiveStepController
from .execution import run_simulation

__all__ = [
    "SimulationConfig",
    "SimulationResult",
    # Exceptions
    "StepUnderflow",
    # Core Classes
    "StencilUpdater",
    "AdaptiveStepController",
    "run_simulation",
]
