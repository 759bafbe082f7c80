# src/heatsim_core/simulation/exceptions.py
"""
Defines the diagnosable exceptions of the time-integration phase.

The only failure the integrator itself can produce is a step-size underflow: the
temperature-change tolerance cannot be honored even at the smallest permitted
step. It aborts the run and is never retried.
"""
from dataclasses import dataclass

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class StepUnderflow(DiagnosableError):
    """Raised when a rejected step would have to shrink below `min_dt`."""
    dt: float
    min_dt: float
    max_delta_T: float
    current_time: float

    def __str__(self):
        return (f"Step size underflow at t={self.current_time}: step {self.dt} was rejected "
                f"and cannot shrink further without going below min_dt={self.min_dt}.")

    def get_diagnostic_report(self) -> str:
        details = (
            f"The largest per-voxel temperature change equalled the tolerance ({self.max_delta_T}) "
            f"at step size {self.dt}.\n"
            f"Shrinking the step again would take it below the minimum allowed step ({self.min_dt})."
        )
        return format_diagnostic_report(
            error_type="Step Size Underflow",
            details=details,
            suggestion="Lower 'min_timestep' or change 'max_step_tempchange' in the control script.",
            context={'sim_time': f"{self.current_time}"}
        )
