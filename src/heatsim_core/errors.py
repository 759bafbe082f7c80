# src/heatsim_core/errors.py
import logging
from abc import abstractmethod
from typing import Any, Dict, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# --- Errors Seen by Callers ---

class HeatSimError(Exception):
    """Base of the two errors that leave the package's entry points."""
    pass

class ConfigurationError(HeatSimError):
    """
    The control script could not be read, parsed or validated. `str()` is the
    formatted report of the underlying parser error.
    """
    pass

class SimulationRunError(HeatSimError):
    """
    The script loaded but the run failed: a bad pitch, a degenerate block, a step
    underflow or a snapshot that could not be written. `str()` is the formatted
    report.
    """
    pass


# --- Stage Errors ---

@runtime_checkable
class Diagnosable(Protocol):
    """Anything that can describe a failed load or run as a report for the user."""
    def get_diagnostic_report(self) -> str:
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    Base of the errors raised inside the parser, grid, simulation and output
    packages. The runner and `run_simulation` catch this type and re-raise the
    report as a `ConfigurationError` or `SimulationRunError`.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        raise NotImplementedError


# --- Report Formatting ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    Builds the report the CLI prints to stderr when a run fails.

    Args:
        error_type: Heading such as "Step Size Underflow" or "Degenerate Geometry".
        details: What went wrong; may span several lines.
        suggestion: What to change in the control script or environment.
        context: Optional keys `source_file` (control script), `user_input`
                 (offending value), `sim_time` (time of failure) and
                 `output_path` (snapshot file). Empty values are omitted.
    """
    lines = [
        "\n",
        "========================= heatsim: run aborted =========================",
        f"Error Type:     {error_type}",
    ]
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")
    if sim_time := context.get('sim_time'):
        lines.append(f"Sim Time:       {sim_time}")
    if output_path := context.get('output_path'):
        lines.append(f"Output Path:    {output_path}")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("========================================================================")
    return "\n".join(lines)
