# src/heatsim_core/simulation/config.py
import logging
from dataclasses import dataclass, field
from typing import Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationConfig:
    """
    The immutable run settings consumed by the `AdaptiveStepController`.

    Attributes:
        ambient_temperature: Temperature of the surroundings, used as the ghost
                             value beyond every face of the grid.
        min_dt: Smallest step the controller may attempt.
        max_dt: Largest step the controller may attempt.
        max_delta_T: Per-voxel temperature change per step that marks a step as
                     too aggressive.
        sim_time: Total simulated duration.
        plot_times: Simulation times at which a snapshot is written, in authored
                    order. Duplicates are allowed.

    Raises:
        ValueError: If the step bounds or durations are inconsistent.
    """
    ambient_temperature: float
    min_dt: float
    max_dt: float
    max_delta_T: float
    sim_time: float = 0.0
    plot_times: Tuple[float, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not 0 < self.min_dt <= self.max_dt:
            raise ValueError(
                f"Step bounds must satisfy 0 < min_dt <= max_dt (got min_dt={self.min_dt}, max_dt={self.max_dt})."
            )
        if self.sim_time < 0:
            raise ValueError(f"Total simulation time must be non-negative (got {self.sim_time}).")
        if any(t < 0 for t in self.plot_times):
            raise ValueError(f"Plot times must be non-negative (got {list(self.plot_times)}).")
        # Normalize to a tuple so callers may pass any sequence.
        object.__setattr__(self, 'plot_times', tuple(float(t) for t in self.plot_times))

    @property
    def initial_dt(self) -> float:
        """The controller starts halfway between the step bounds."""
        return (self.min_dt + self.max_dt) / 2
