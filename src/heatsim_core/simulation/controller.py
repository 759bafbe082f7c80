# src/heatsim_core/simulation/controller.py
"""
Defines the `AdaptiveStepController`, which drives the stencil through time.

Every iteration is an attempt. If the largest voxel change equals the
tolerance the attempt is rejected: `dt` shrinks by 10% and the simulation
time stays where it is. Otherwise `dt` grows by 10% (clamped to `max_dt`) and
the simulation time advances by the grown step. A rejected attempt is not
rolled back; the next attempt overwrites every voxel. `StepUnderflow` is
raised as soon as the shrunk step would fall below `min_dt`, so no attempt is
ever made with a step smaller than `min_dt`.

Snapshot and rejection comparisons use exact float equality, so plot times are
only hit when the step arithmetic lands on them exactly.
"""
import logging
from pathlib import Path
from typing import List, Optional

from ..constants import DEFAULT_OUTPUT_PREFIX, SNAPSHOT_TIME_DECIMALS, STEP_ADJUST_FRACTION
from ..grid import VoxelGrid
from ..output import SnapshotWriter
from .config import SimulationConfig
from .exceptions import StepUnderflow
from .results import SimulationResult
from .stencil import StencilUpdater

logger = logging.getLogger(__name__)


class AdaptiveStepController:
    """
    Integrates a grid up to `config.sim_time`, writing snapshots at the configured
    plot times.

    Args:
        grid: The grid to integrate. It is mutated in place.
        config: The immutable run settings.
        snapshot_writer: Destination for snapshots. Defaults to the current directory.
        updater: The stencil implementation to use. Defaults to `StencilUpdater()`.
        output_prefix: Prefix of snapshot base names; the time is appended.
    """

    def __init__(
        self,
        grid: VoxelGrid,
        config: SimulationConfig,
        snapshot_writer: Optional[SnapshotWriter] = None,
        updater: Optional[StencilUpdater] = None,
        output_prefix: str = DEFAULT_OUTPUT_PREFIX,
    ):
        self.grid = grid
        self.config = config
        self.snapshot_writer = snapshot_writer if snapshot_writer is not None else SnapshotWriter()
        self.updater = updater if updater is not None else StencilUpdater()
        self.output_prefix = output_prefix

        self.current_time: float = 0.0
        self.dt: float = config.initial_dt
        self.pending_plot_times: List[float] = list(config.plot_times)
        self.accepted_steps: int = 0
        self.rejected_steps: int = 0
        self.snapshot_paths: List[Path] = []

    @property
    def finished(self) -> bool:
        return self.current_time >= self.config.sim_time

    def snapshot_name(self, time: float) -> str:
        return f"{self.output_prefix}_{time:.{SNAPSHOT_TIME_DECIMALS}f}"

    def step(self) -> bool:
        """
        Performs one attempt at the current `dt`.

        Returns:
            True if the attempt was accepted and the simulation time advanced.

        Raises:
            StepUnderflow: If the attempt was rejected and `dt` cannot shrink
                           without going below `min_dt`.
        """
        cfg = self.config
        max_abs_change = self.updater.apply(self.grid, self.dt, cfg.ambient_temperature)

        if max_abs_change == cfg.max_delta_T:
            shrunk = self.dt - self.dt * STEP_ADJUST_FRACTION
            if self.dt < cfg.min_dt or shrunk < cfg.min_dt:
                raise StepUnderflow(
                    dt=self.dt, min_dt=cfg.min_dt,
                    max_delta_T=cfg.max_delta_T, current_time=self.current_time,
                )
            logger.debug(f"t={self.current_time}: step {self.dt} rejected (|dT|={max_abs_change}), retrying with {shrunk}.")
            self.dt = shrunk
            self.rejected_steps += 1
            return False

        self.dt = min(self.dt + self.dt * STEP_ADJUST_FRACTION, cfg.max_dt)
        # Advances by the grown step, i.e. the one the next attempt will use.
        self.current_time += self.dt
        self.accepted_steps += 1
        logger.debug(f"Step accepted (|dT|={max_abs_change}); t={self.current_time}, next dt={self.dt}.")

        if self.current_time in self.pending_plot_times:
            path = self.snapshot_writer.write(self.grid, self.snapshot_name(self.current_time))
            self.snapshot_paths.append(path)
            self.pending_plot_times = [t for t in self.pending_plot_times if t != self.current_time]
        return True

    def run(self) -> SimulationResult:
        """Steps until the simulation time reaches `sim_time`."""
        logger.info(
            f"--- Starting integration of {list(self.grid.dims)} voxels to t={self.config.sim_time} "
            f"(dt in [{self.config.min_dt}, {self.config.max_dt}]) ---"
        )
        while not self.finished:
            self.step()

        if self.pending_plot_times:
            logger.warning(
                f"{len(self.pending_plot_times)} plot time(s) were never reached exactly and produced no snapshot: "
                f"{self.pending_plot_times}"
            )
        logger.info(
            f"Integration finished at t={self.current_time} after {self.accepted_steps} accepted and "
            f"{self.rejected_steps} rejected step(s); {len(self.snapshot_paths)} snapshot(s) written."
        )
        return SimulationResult(
            final_time=self.current_time,
            final_dt=self.dt,
            accepted_steps=self.accepted_steps,
            rejected_steps=self.rejected_steps,
            snapshot_paths=tuple(self.snapshot_paths),
            unmatched_plot_times=tuple(self.pending_plot_times),
        )
