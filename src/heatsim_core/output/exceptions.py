# src/heatsim_core/output/exceptions.py
from dataclasses import dataclass
from pathlib import Path

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(frozen=True)
class SnapshotWriteError(DiagnosableError):
    """Raised when a snapshot file or its parent directory cannot be created or written."""
    path: Path
    details: str

    def __str__(self):
        return f"Could not write snapshot '{self.path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Snapshot Write Error",
            details=self.details,
            suggestion="Check that the output directory exists or can be created, and that it is writable.",
            context={'output_path': self.path}
        )
