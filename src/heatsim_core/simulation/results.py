# src/heatsim_core/simulation/results.py
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


@dataclass(frozen=True)
class SimulationResult:
    """
    The outcome of a completed controller run.

    Attributes:
        final_time: Simulation time reached when the loop exited.
        final_dt: Step size the controller would have attempted next.
        accepted_steps: Number of attempts that advanced the simulation time.
        rejected_steps: Number of attempts that shrank the step instead.
        snapshot_paths: Files written, in the order they were written.
        unmatched_plot_times: Plot times never hit exactly by the time stepping.
    """
    final_time: float
    final_dt: float
    accepted_steps: int
    rejected_steps: int
    snapshot_paths: Tuple[Path, ...]
    unmatched_plot_times: Tuple[float, ...]
